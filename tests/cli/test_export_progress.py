# tests/cli/test_export_progress.py
"""
cli/ui/progress.py 테스트 - ExportTracker, export_progress
"""

import io

from rich.console import Console

from gridexport.cli.ui.progress import ExportTracker, export_progress
from gridexport.export.memory import MemoryGridSink
from gridexport.export.sheet import SheetWriter


def _console() -> Console:
    return Console(file=io.StringIO(), force_terminal=False, width=120)


class TestExportProgress:
    def test_known_total(self):
        with export_progress("Stats", total=3, console=_console()) as tracker:
            assert isinstance(tracker, ExportTracker)
            assert list(tracker.track(["a", "b", "c"])) == ["a", "b", "c"]

        assert tracker.completed == 3
        assert tracker.total == 3

    def test_unknown_total(self):
        with export_progress("Stats", console=_console()) as tracker:
            for _ in tracker.track(iter(range(5))):
                pass

        assert tracker.completed == 5
        assert tracker.total is None

    def test_disabled(self):
        console = _console()
        with export_progress("Stats", total=1, console=console, disable=True) as tracker:
            tracker.advance()

        assert tracker.completed == 1
        assert console.file.getvalue() == ""

    def test_completion_label(self):
        console = _console()
        with export_progress("Datasets", total=1, console=console) as tracker:
            tracker.advance()

        assert "Datasets 완료" in console.file.getvalue()

    def test_counts_after_row_is_written(self, styles, stats_layout, stat_records):
        """레코드는 행이 기록된 다음에 카운트"""
        sink = MemoryGridSink()
        writer = SheetWriter(sink, "Stats", styles, stats_layout)
        seen = []

        with export_progress("Stats", total=2, console=_console()) as tracker:

            def records():
                for record in tracker.track(stat_records):
                    seen.append(tracker.completed)
                    yield record

            writer.export(records())

        assert seen == [0, 1]
        assert tracker.completed == 2
        assert writer.written_item_count == 2
