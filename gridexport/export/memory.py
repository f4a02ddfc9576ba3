"""
gridexport/export/memory.py - 메모리 GridSink

테스트와 미리보기용 백엔드. 기록된 셀/스타일/병합/테두리를 그대로 보관합니다.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from .sink import CellRegion, GridSink
from .styles import BorderSpec, CellStyle
from .values import CellValue


@dataclass
class MemoryCell:
    value: CellValue
    style: CellStyle | None = None
    hyperlink: str | None = None


@dataclass
class MemoryGridSink:
    """셀을 (row, column) 딕셔너리에 저장하는 sink"""

    name: str = "Sheet"
    rows: list[int] = field(default_factory=list)
    cells: dict[tuple[int, int], MemoryCell] = field(default_factory=dict)
    column_widths: dict[int, int] = field(default_factory=dict)
    merged_regions: list[CellRegion] = field(default_factory=list)
    region_borders: list[tuple[CellRegion, BorderSpec]] = field(default_factory=list)

    def create_row(self, row: int) -> None:
        self.rows.append(row)

    def create_cell(self, row: int, column: int, value: CellValue) -> None:
        self.cells[(row, column)] = MemoryCell(value)

    def _cell(self, row: int, column: int) -> MemoryCell:
        try:
            return self.cells[(row, column)]
        except KeyError:
            raise KeyError(f"셀이 생성되지 않았습니다: ({row}, {column})") from None

    def set_style(self, row: int, column: int, style: CellStyle) -> None:
        self._cell(row, column).style = style

    def set_hyperlink(self, row: int, column: int, target: str) -> None:
        self._cell(row, column).hyperlink = target

    def set_column_width(self, column: int, width: int) -> None:
        self.column_widths[column] = width

    def merge_region(self, region: CellRegion) -> None:
        self.merged_regions.append(region)

    def paint_region_border(self, region: CellRegion, border: BorderSpec) -> None:
        self.region_borders.append((region, border))

    # -------------------------------------------------------------------------
    # 조회 헬퍼
    # -------------------------------------------------------------------------

    def value(self, row: int, column: int) -> CellValue | None:
        cell = self.cells.get((row, column))
        return cell.value if cell else None

    def style(self, row: int, column: int) -> CellStyle | None:
        cell = self.cells.get((row, column))
        return cell.style if cell else None

    def row_values(self, row: int, width: int) -> list[CellValue | None]:
        """row 의 0..width-1 컬럼 값 (빈 셀은 None)"""
        return [self.value(row, col) for col in range(width)]

    @property
    def row_count(self) -> int:
        return len(self.rows)


class MemoryDocument:
    """MemoryGridSink 를 시트로 갖는 문서"""

    def __init__(self) -> None:
        self.sheets: dict[str, MemoryGridSink] = {}

    def create_sheet(self, name: str) -> GridSink:
        if name in self.sheets:
            raise ValueError(f"이미 존재하는 시트: {name}")
        sink = MemoryGridSink(name=name)
        self.sheets[name] = sink
        return sink
