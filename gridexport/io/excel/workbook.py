"""
gridexport/io/excel/workbook.py - openpyxl 기반 xlsx 문서

ExcelDocument 는 쓰기 전용(write_only) openpyxl Workbook 1개와
StyleRegistry 1개를 소유합니다. create_sheet() 가 돌려주는 ExcelGridSink 는
SheetWriter 의 0-based 인덱스를 openpyxl 의 1-based 행/열로 바꿔 씁니다.

행은 1개만 메모리에 두고, 다음 create_row() 때 시트 스트림으로
내보냅니다. 따라서:
    - 컬럼 너비는 첫 행을 내보내기 전에만 지정할 수 있음
    - 이미 내보낸 행에는 다시 쓸 수 없음 (ValueError)
    - 문서는 한 번만 저장할 수 있음

사용 예시:
    doc = ExcelDocument()
    writer = create_writer(doc, "Datasets", doc.styles, layout)
    writer.export(records)
    doc.save("datasets.xlsx", overwrite=True)
"""

import logging
import threading
from pathlib import Path
from typing import BinaryIO, Dict, List, Optional, Union

from openpyxl import Workbook
from openpyxl.cell import WriteOnlyCell
from openpyxl.cell.cell import Cell
from openpyxl.styles import NamedStyle
from openpyxl.utils import get_column_letter
from openpyxl.worksheet._write_only import WriteOnlyWorksheet
from openpyxl.worksheet.cell_range import CellRange

from gridexport.exceptions import OutputExistsError
from gridexport.export.sink import CellRegion
from gridexport.export.styles import BorderSpec, CellStyle, StyleRegistry
from gridexport.export.values import CellValue

from .styles import merge_border, named_style_name, to_named_style

logger = logging.getLogger(__name__)


class ExcelGridSink:
    """openpyxl 쓰기 전용 Worksheet 에 쓰는 GridSink (현재 행 1개만 버퍼링)"""

    def __init__(self, document: "ExcelDocument", worksheet: WriteOnlyWorksheet):
        self._document = document
        self._ws = worksheet
        self._row: Optional[int] = None
        self._cells: Dict[int, Cell] = {}
        self._flushed_rows = 0

    @property
    def worksheet(self) -> WriteOnlyWorksheet:
        return self._ws

    @property
    def flushed_row_count(self) -> int:
        """시트 스트림으로 내보낸 행 수"""
        return self._flushed_rows

    def create_row(self, row: int) -> None:
        if row < self._flushed_rows or (self._row is not None and row <= self._row):
            raise ValueError(f"{self._ws.title}: {row}행은 이미 만들어진 행입니다")
        self.flush()
        # 건너뛴 행은 빈 행으로 채움
        while self._flushed_rows < row:
            self._ws.append([])
            self._flushed_rows += 1
        self._row = row

    def flush(self) -> None:
        """버퍼 중인 행을 시트에 기록"""
        if self._row is None:
            return
        width = max(self._cells) + 1 if self._cells else 0
        self._ws.append([self._cells.get(column) for column in range(width)])
        self._flushed_rows += 1
        self._row = None
        self._cells = {}

    def _cell(self, row: int, column: int) -> Cell:
        if row != self._row:
            raise ValueError(f"{self._ws.title}: 현재 행({self._row})이 아닌 {row}행에는 쓸 수 없습니다")
        cell = self._cells.get(column)
        if cell is None:
            cell = WriteOnlyCell(self._ws)
            self._cells[column] = cell
        return cell

    def create_cell(self, row: int, column: int, value: CellValue) -> None:
        cell = self._cell(row, column)
        cell.value = value
        if isinstance(value, str):
            # "=" 로 시작해도 수식이 아닌 문자열로 저장
            cell.data_type = "s"

    def set_style(self, row: int, column: int, style: CellStyle) -> None:
        self._cell(row, column).style = self._document.named_style(style).name

    def set_hyperlink(self, row: int, column: int, target: str) -> None:
        self._cell(row, column).hyperlink = target

    def set_column_width(self, column: int, width: int) -> None:
        if self._flushed_rows:
            raise ValueError(f"{self._ws.title}: 컬럼 너비는 첫 행을 기록하기 전에만 지정할 수 있습니다")
        self._ws.column_dimensions[get_column_letter(column + 1)].width = float(width)

    def merge_region(self, region: CellRegion) -> None:
        self._ws.merged_cells.add(
            CellRange(
                min_col=region.first_column + 1,
                min_row=region.first_row + 1,
                max_col=region.last_column + 1,
                max_row=region.last_row + 1,
            )
        )

    def paint_region_border(self, region: CellRegion, border: BorderSpec) -> None:
        """영역 가장자리 셀마다 해당 변의 테두리를 칠함 (영역은 현재 행 안에 있어야 함)"""
        for row in range(region.first_row, region.last_row + 1):
            for column in range(region.first_column, region.last_column + 1):
                top = row == region.first_row
                bottom = row == region.last_row
                left = column == region.first_column
                right = column == region.last_column
                if not (top or bottom or left or right):
                    continue
                cell = self._cell(row, column)
                cell.border = merge_border(cell.border, border, top=top, left=left, right=right, bottom=bottom)


class ExcelDocument:
    """xlsx 문서 (쓰기 전용 Workbook + StyleRegistry)

    스타일 핸들은 워크북에 NamedStyle 로 한 번만 등록하고 재사용합니다.
    정의가 다른 핸들이 같은 이름을 쓰면 접미사를 붙여 따로 등록합니다.
    """

    def __init__(self, styles: Optional[StyleRegistry] = None):
        self._wb = Workbook(write_only=True)
        self.styles = styles or StyleRegistry()
        self._sinks: List[ExcelGridSink] = []
        self._named_styles: Dict[CellStyle, NamedStyle] = {}
        self._lock = threading.Lock()

    @property
    def workbook(self) -> Workbook:
        return self._wb

    @property
    def sheet_names(self) -> list:
        return list(self._wb.sheetnames)

    def create_sheet(self, name: str) -> ExcelGridSink:
        if name in self._wb.sheetnames:
            raise ValueError(f"이미 존재하는 시트: {name}")
        sink = ExcelGridSink(self, self._wb.create_sheet(title=name))
        self._sinks.append(sink)
        logger.debug("시트 생성: %s", name)
        return sink

    def named_style(self, style: CellStyle) -> NamedStyle:
        """CellStyle 에 대응하는 NamedStyle (최초 1회 등록)"""
        named = self._named_styles.get(style)
        if named is not None:
            return named
        with self._lock:
            named = self._named_styles.get(style)
            if named is None:
                named = to_named_style(style, self._unique_style_name(style))
                self._wb.add_named_style(named)
                self._named_styles[style] = named
            return named

    def _unique_style_name(self, style: CellStyle) -> str:
        base = named_style_name(style)
        taken = set(self._wb.named_styles)
        name = base
        suffix = 2
        while name in taken:
            name = f"{base}_{suffix}"
            suffix += 1
        if name != base:
            logger.debug("스타일 이름 충돌: %s -> %s", base, name)
        return name

    def _flush(self) -> None:
        for sink in self._sinks:
            sink.flush()

    def save(self, path: Union[str, Path], overwrite: bool = False) -> Path:
        """파일로 저장

        Args:
            path: 출력 경로 (상위 디렉토리가 없으면 생성)
            overwrite: False 이고 파일이 이미 있으면 OutputExistsError

        Returns:
            저장된 파일 경로
        """
        filepath = Path(path)
        if filepath.exists() and not overwrite:
            raise OutputExistsError(filepath)
        filepath.parent.mkdir(parents=True, exist_ok=True)
        self._flush()
        self._wb.save(filepath)
        logger.info("Excel 저장: %s", filepath)
        return filepath

    def write_to(self, stream: BinaryIO) -> None:
        """바이너리 스트림에 저장 (스트림은 닫지 않음)"""
        self._flush()
        self._wb.save(stream)
