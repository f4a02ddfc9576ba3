"""
gridexport/export/sheet.py - 시트 내보내기 (스트리밍)

SheetWriter 는 생성 시 2줄짜리 헤더를 그리고, export() 로 받은
레코드를 1건당 1행으로 바로 sink 에 씁니다. 레코드 전체를 메모리에
모으지 않습니다.

    행 0: 그룹 라벨 (2컬럼 이상이면 병합 + 팔레트 색 테두리)
    행 1: 컬럼 라벨 (메인 섹션 = 메인 헤더 스타일, 그룹 = 그룹별 스타일)
    행 2~: 데이터

사용 예시:
    styles = StyleRegistry()
    writer = create_writer(document, "Datasets", styles, layout)
    writer.export(RecordStream(page1, estimated_size=120))
    writer.export(page2)
    print(writer.written_item_count, writer.written_row_count)
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Any, Generic, TypeVar

from gridexport.exceptions import LayoutError

from . import values
from .columns import ColumnSpec, Layout
from .sink import CellRegion, GridDocument, GridSink
from .styles import BorderSpec, StyleRegistry

logger = logging.getLogger(__name__)

T = TypeVar("T")

GROUP_HEADER_ROW = 0
COLUMN_HEADER_ROW = 1
HEADER_ROW_COUNT = 2


def nullable_sum(a: int | None, b: int | None) -> int | None:
    """None 을 무시하는 덧셈. 둘 다 None 이면 None"""
    if b is None:
        return a
    if a is None:
        return b
    return a + b


@dataclass(frozen=True)
class RecordStream(Generic[T]):
    """레코드 시퀀스 + 예상 건수 (모르면 None)

    records 는 한 번만 순회됩니다.
    """

    records: Iterable[T]
    estimated_size: int | None = None

    def __iter__(self) -> Iterator[T]:
        return iter(self.records)


class RecordCellWriter:
    """레코드 1건(행 1개)에 대한 셀 커서

    렌더 함수는 자신의 컬럼 인덱스를 모른 채 write_* 로 "현재 셀"에 씁니다.
    커서 이동은 SheetWriter 만 합니다. None 값은 아무것도 쓰지 않습니다.
    """

    def __init__(self, sink: GridSink, styles: StyleRegistry, row: int) -> None:
        self._sink = sink
        self._styles = styles
        self._row = row
        self._column = 0

    @property
    def row(self) -> int:
        return self._row

    @property
    def column(self) -> int:
        return self._column

    def _forward(self) -> None:
        self._column += 1

    def write(self, value: values.TypedValue | None) -> None:
        """타입 값 1개를 현재 셀에 기록"""
        if value is None:
            return
        cell_value = values.cell_value_of(value)
        kind = values.style_kind_of(value)

        self._sink.create_cell(self._row, self._column, cell_value)
        if isinstance(value, values.Hyperlink) and value.target is not None:
            self._sink.set_hyperlink(self._row, self._column, value.target)
        if kind is not None:
            self._sink.set_style(self._row, self._column, self._styles.get_style(kind))

    def write_text(self, value: str | None) -> None:
        if value is not None:
            self.write(values.Text(value))

    def write_enum(self, value: Enum | None) -> None:
        if value is not None:
            self.write(values.Text(values.enum_label(value)))

    def write_hyperlink(self, label: str | None, target: str | None) -> None:
        """label 을 셀 텍스트로, target 을 링크로 기록 (label 이 None 이면 무시)"""
        if label is not None:
            self.write(values.Hyperlink(label, target))

    def write_identifier(self, value: Any) -> None:
        if value is not None:
            self.write(values.Identifier(value))

    def write_description(self, value: str | None) -> None:
        if value is not None:
            self.write(values.Description(value))

    def write_timestamp(self, value: datetime | date | None) -> None:
        if value is not None:
            self.write(values.Timestamp(value))

    def write_integer(self, value: int | None) -> None:
        if value is not None:
            self.write(values.Integer(value))

    def write_float(self, value: float | None) -> None:
        if value is not None:
            self.write(values.Float(value))

    def write_decimal(self, value: Any) -> None:
        """decimal.Decimal 기록. scale 0 이하는 정수 서식, 그 외 소수 서식"""
        if value is not None:
            self.write(values.Decimal(value))

    def write_boolean(self, value: bool | None) -> None:
        if value is not None:
            self.write(values.Boolean(value))


def write_value(cursor: RecordCellWriter, value: values.TypedValue | None) -> None:
    """렌더 함수에서 쓰는 단일 진입점"""
    cursor.write(value)


class SheetWriter(Generic[T]):
    """레이아웃에 따라 레코드를 시트에 쓰는 객체

    생성자에서 헤더를 그리고, 이후 export() 를 여러 번 호출할 수 있습니다
    (페이지 단위 결과 등). 행과 카운터는 계속 누적됩니다.
    동시에 같은 시트로 export() 하는 것은 지원하지 않습니다.
    """

    def __init__(
        self,
        sink: GridSink,
        name: str,
        styles: StyleRegistry,
        layout: Layout[T],
    ) -> None:
        if not name:
            raise LayoutError("sheet", "시트 이름이 없습니다")
        self._sink = sink
        self._name = name
        self._styles = styles
        self._layout = layout

        self._expected_item_count: int | None = None
        self._written_item_count = 0
        self._written_row_count = 0

        self._create_headers()

    # -------------------------------------------------------------------------
    # 조회용 속성
    # -------------------------------------------------------------------------

    @property
    def name(self) -> str:
        return self._name

    @property
    def layout(self) -> Layout[T]:
        return self._layout

    @property
    def expected_item_count(self) -> int | None:
        """export() 로 전달된 예상 건수 누적값 (진행률 표시용, 검증에 쓰지 않음)"""
        return self._expected_item_count

    @property
    def written_item_count(self) -> int:
        return self._written_item_count

    @property
    def written_row_count(self) -> int:
        """헤더 2행 포함 시트 행 수"""
        return self._written_row_count

    # -------------------------------------------------------------------------
    # 헤더
    # -------------------------------------------------------------------------

    def _next_row(self) -> int:
        row = self._written_row_count
        self._sink.create_row(row)
        self._written_row_count += 1
        return row

    def _create_headers(self) -> None:
        # sink 는 행 단위 스트리밍일 수 있음: 너비 → 행 0 → 행 1 순서로,
        # 다음 행을 만든 뒤에는 이전 행에 쓰지 않음
        for col_idx, column in enumerate(self._layout.iter_columns()):
            self._sink.set_column_width(col_idx, column.effective_width)

        main_count = len(self._layout.main_section)

        # 행 0: 그룹 라벨
        # 그룹 인덱스는 실제로 그려진 그룹에만 부여 (빈 그룹은 팔레트를 소비하지 않음)
        group_row = self._next_row()
        col_idx = main_count
        for group_idx, group in enumerate(self._layout.rendered_groups):
            self._sink.create_cell(group_row, col_idx, group.label)
            self._sink.set_style(group_row, col_idx, self._styles.get_group_header_style(group_idx))

            if len(group) >= 2:
                region = CellRegion(group_row, group_row, col_idx, col_idx + len(group) - 1)
                self._sink.merge_region(region)
                self._sink.paint_region_border(region, BorderSpec.group_frame(self._styles.get_group_color(group_idx)))

            col_idx += len(group)

        # 행 1: 컬럼 라벨
        header_row = self._next_row()
        col_idx = 0
        for column in self._layout.main_section:
            self._write_column_header(header_row, col_idx, column, self._styles.main_header_style)
            col_idx += 1

        for group_idx, group in enumerate(self._layout.rendered_groups):
            column_style = self._styles.get_group_column_header_style(group_idx)
            for column in group.columns:
                self._write_column_header(header_row, col_idx, column, column_style)
                col_idx += 1

        logger.debug(
            "시트 헤더 생성: %s (컬럼 %d개, 그룹 %d개)",
            self._name,
            col_idx,
            len(self._layout.rendered_groups),
        )

    def _write_column_header(self, row: int, col_idx: int, column: ColumnSpec[T], style) -> None:
        self._sink.create_cell(row, col_idx, column.label)
        self._sink.set_style(row, col_idx, style)

    # -------------------------------------------------------------------------
    # 데이터
    # -------------------------------------------------------------------------

    def export(self, records: Iterable[T], estimated_size: int | None = None) -> None:
        """레코드를 순서대로 1건당 1행씩 기록

        Args:
            records: 레코드 iterable 또는 RecordStream (한 번만 순회)
            estimated_size: 예상 건수. None 이고 records 가 RecordStream 이면
                            그 estimated_size 사용

        렌더 함수나 records 에서 발생한 예외는 그대로 전파되며,
        그 이전에 기록된 행은 남습니다.
        """
        if estimated_size is None and isinstance(records, RecordStream):
            estimated_size = records.estimated_size
        self._expected_item_count = nullable_sum(self._expected_item_count, estimated_size)

        written = 0
        for item in records:
            self._written_item_count += 1
            cursor = RecordCellWriter(self._sink, self._styles, self._next_row())

            for column in self._layout.main_section:
                column.render(cursor, item)
                cursor._forward()

            for group in self._layout.rendered_groups:
                for column in group.columns:
                    column.render(cursor, item)
                    cursor._forward()

            written += 1

        logger.info(
            "%s: %d건 기록 (누적 %d건, 예상 %s건)",
            self._name,
            written,
            self._written_item_count,
            self._expected_item_count,
        )


def create_writer(
    document: GridDocument,
    sheet_name: str,
    styles: StyleRegistry,
    layout: Layout[T],
) -> SheetWriter[T]:
    """문서에 새 시트를 만들고 헤더까지 그린 SheetWriter 반환"""
    if not sheet_name:
        raise LayoutError("sheet", "시트 이름이 없습니다")
    sink = document.create_sheet(sheet_name)
    return SheetWriter(sink, sheet_name, styles, layout)
