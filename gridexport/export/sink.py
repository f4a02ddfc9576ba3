"""
gridexport/export/sink.py - 출력 백엔드 인터페이스

SheetWriter 는 특정 파일 포맷 라이브러리에 의존하지 않고
아래 GridSink 만 호출합니다. 읽기 연산은 없습니다 (쓰기 전용 sink).

구현체:
    - gridexport.export.memory.MemoryGridSink: 메모리 (테스트/미리보기)
    - gridexport.io.excel.workbook.ExcelGridSink: openpyxl xlsx

모든 인덱스는 0부터 시작합니다.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from .styles import BorderSpec, CellStyle
from .values import CellValue


@dataclass(frozen=True)
class CellRegion:
    """사각형 셀 범위 (양 끝 포함)"""

    first_row: int
    last_row: int
    first_column: int
    last_column: int

    def __post_init__(self) -> None:
        if self.first_row > self.last_row or self.first_column > self.last_column:
            raise ValueError(f"잘못된 셀 범위: {self}")

    @property
    def width(self) -> int:
        return self.last_column - self.first_column + 1

    @property
    def height(self) -> int:
        return self.last_row - self.first_row + 1


@runtime_checkable
class GridSink(Protocol):
    """시트 1개에 대한 쓰기 인터페이스"""

    def create_row(self, row: int) -> None: ...

    def create_cell(self, row: int, column: int, value: CellValue) -> None: ...

    def set_style(self, row: int, column: int, style: CellStyle) -> None: ...

    def set_hyperlink(self, row: int, column: int, target: str) -> None: ...

    def set_column_width(self, column: int, width: int) -> None: ...

    def merge_region(self, region: CellRegion) -> None: ...

    def paint_region_border(self, region: CellRegion, border: BorderSpec) -> None: ...


@runtime_checkable
class GridDocument(Protocol):
    """시트를 만들어 주는 문서"""

    def create_sheet(self, name: str) -> GridSink: ...
