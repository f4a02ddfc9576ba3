"""
gridexport/cli/ui/progress.py - Progress tracking for sheet exports

Components:
- ExportTracker: M/N progress when the expected item count is known,
  spinner with a running count otherwise

Context managers:
- export_progress: wraps one export run

Example:
    from gridexport.cli.ui.progress import export_progress

    with export_progress("Datasets", total=stream.estimated_size) as tracker:
        writer.export(tracker.track(stream), estimated_size=stream.estimated_size)

    console.print(f"{tracker.completed} rows")
"""

from __future__ import annotations

from collections.abc import Generator, Iterable, Iterator
from contextlib import contextmanager
from typing import TYPE_CHECKING, TypeVar

from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    SpinnerColumn,
    TaskID,
    TextColumn,
    TimeElapsedColumn,
)

if TYPE_CHECKING:
    from rich.console import Console

from .console import console as default_console

T = TypeVar("T")


class ExportTracker:
    """Export progress tracker.

    Display format:
        [spinner] Datasets 15/100 [progress bar] 00:15   (total known)
        [spinner] Datasets 15 00:15                      (total unknown)
    """

    def __init__(self, progress: Progress, task_id: TaskID, description: str, total: int | None) -> None:
        self._progress = progress
        self._task_id = task_id
        self._description = description
        self._total = total
        self._completed = 0

    def advance(self, count: int = 1) -> None:
        """Advance progress by count."""
        self._completed += count
        self._progress.advance(self._task_id, count)

    def track(self, records: Iterable[T]) -> Iterator[T]:
        """Yield records, advancing once per record pulled.

        The record is counted when the next one is requested, i.e. after the
        writer has finished its row.
        """
        for record in records:
            yield record
            self.advance()

    @property
    def completed(self) -> int:
        """Get current completed count."""
        return self._completed

    @property
    def total(self) -> int | None:
        """Get total count (None when unknown)."""
        return self._total


@contextmanager
def export_progress(
    description: str,
    total: int | None = None,
    console: Console | None = None,
    disable: bool = False,
) -> Generator[ExportTracker, None, None]:
    """Context manager for export progress.

    Args:
        description: Description for the progress bar
        total: Expected item count, or None for a spinner with a running count
        console: Rich Console to use (default: cli.ui.console)
        disable: Hide the progress display (quiet mode)

    Yields:
        ExportTracker for tracking progress
    """
    cons = console or default_console

    if total is None:
        columns = (
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            TextColumn("{task.completed}"),
            TimeElapsedColumn(),
        )
    else:
        columns = (
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            BarColumn(bar_width=40),
            MofNCompleteColumn(),
            TimeElapsedColumn(),
        )

    progress = Progress(*columns, console=cons, expand=False, disable=disable)

    with progress:
        task_id = progress.add_task(f"[cyan]{description}", total=total)
        tracker = ExportTracker(progress, task_id, description, total)

        try:
            yield tracker
        finally:
            progress.update(task_id, description=f"[green]{description} 완료")
