"""
tests/io/test_excel_workbook.py - openpyxl 백엔드 테스트

저장한 xlsx 를 다시 열어 값, 스타일, 병합, 테두리를 확인합니다.
"""

import io
from datetime import datetime

import pytest
from openpyxl import load_workbook

from gridexport.exceptions import OutputExistsError
from gridexport.export.columns import LayoutBuilder
from gridexport.export.sheet import create_writer
from gridexport.export.sink import GridDocument, GridSink
from gridexport.export.styles import GROUP_PALETTE, StyleRegistry
from gridexport.io.excel import ExcelDocument, ExcelGridSink


@pytest.fixture
def document():
    return ExcelDocument()


@pytest.fixture
def saved_stats(tmp_path, document, stats_layout, stat_records):
    """ID + Stats(Count, Ratio) 2건을 저장한 뒤 다시 연 워크시트"""
    writer = create_writer(document, "Stats", document.styles, stats_layout)
    writer.export(stat_records)
    path = document.save(tmp_path / "stats.xlsx")
    return load_workbook(path)["Stats"]


class TestExcelDocument:
    def test_protocols(self, document):
        assert isinstance(document, GridDocument)
        assert isinstance(document.create_sheet("A"), GridSink)

    def test_no_default_sheet(self, document):
        assert document.sheet_names == []

    def test_create_sheet(self, document):
        sink = document.create_sheet("Datasets")
        assert isinstance(sink, ExcelGridSink)
        assert sink.worksheet.title == "Datasets"
        assert document.sheet_names == ["Datasets"]

    def test_duplicate_sheet_rejected(self, document):
        document.create_sheet("A")
        with pytest.raises(ValueError):
            document.create_sheet("A")

    def test_named_style_registered_once(self, document):
        style = document.styles.main_header_style
        first = document.named_style(style)
        assert document.named_style(style) is first
        assert list(document.workbook.named_styles).count("gx_main_header") == 1

    def test_save_refuses_overwrite(self, tmp_path, document):
        document.create_sheet("A")
        path = tmp_path / "out.xlsx"
        path.write_bytes(b"existing")

        with pytest.raises(OutputExistsError) as exc_info:
            document.save(path)
        assert exc_info.value.path == path
        assert path.read_bytes() == b"existing"

    def test_save_overwrite(self, tmp_path, document):
        document.create_sheet("A")
        path = tmp_path / "out.xlsx"
        path.write_bytes(b"existing")

        assert document.save(path, overwrite=True) == path
        assert load_workbook(path).sheetnames == ["A"]

    def test_save_creates_parent_dirs(self, tmp_path, document):
        document.create_sheet("A")
        path = document.save(tmp_path / "nested" / "dir" / "out.xlsx")
        assert path.exists()

    def test_write_to_stream(self, document):
        document.create_sheet("A")
        buffer = io.BytesIO()
        document.write_to(buffer)

        assert not buffer.closed
        assert buffer.getvalue()[:2] == b"PK"
        buffer.seek(0)
        assert load_workbook(buffer).sheetnames == ["A"]


class TestExcelOutput:
    """SheetWriter + ExcelGridSink 결과"""

    def test_values(self, saved_stats):
        rows = [[cell.value for cell in row] for row in saved_stats.iter_rows(min_row=2, max_row=4, max_col=3)]
        assert rows == [["ID", "Count", "Ratio"], ["A1", 10, 1.5], ["A2", 20, 2]]
        assert saved_stats.max_row == 4

    def test_group_label_merged(self, saved_stats):
        assert saved_stats["B1"].value == "Stats"
        assert [str(r) for r in saved_stats.merged_cells.ranges] == ["B1:C1"]

    def test_styles(self, saved_stats):
        assert saved_stats["A2"].style == "gx_main_header"
        assert saved_stats["B2"].style == "gx_group_column_header_0"
        assert saved_stats["A3"].style == "gx_identifier"
        assert saved_stats["B3"].style == "gx_integer"
        assert saved_stats["C3"].style == "gx_decimal"

    def test_number_formats(self, saved_stats):
        assert saved_stats["B3"].number_format == "#,##0"
        assert saved_stats["C3"].number_format == "#,##0.00"

    def test_header_fill(self, saved_stats):
        assert saved_stats["A2"].fill.fill_type == "solid"
        assert saved_stats["A2"].font.bold is True

    def test_group_border(self, saved_stats):
        """병합 영역 테두리: 위/좌/우 medium, 아래 thin"""
        left, right = saved_stats["B1"].border, saved_stats["C1"].border
        assert left.top.style == "medium"
        assert left.left.style == "medium"
        assert left.bottom.style == "thin"
        assert right.top.style == "medium"
        assert right.right.style == "medium"
        assert right.bottom.style == "thin"
        assert left.top.color.rgb.endswith(GROUP_PALETTE[0])

    def test_column_widths(self, saved_stats):
        assert saved_stats.column_dimensions["A"].width == len("ID") + 2
        assert saved_stats.column_dimensions["C"].width == len("Ratio") + 2

    def test_hyperlink_and_timestamp(self, tmp_path, document, layout_file):
        from gridexport.export.layout_file import load_layout

        sheet, layout = load_layout(layout_file)
        writer = create_writer(document, sheet, document.styles, layout)
        writer.export(
            [
                {
                    "id": "d-1",
                    "name": "orders",
                    "url": "https://example.com/d-1",
                    "stats": {"count": 10, "ratio": 1.5},
                    "updated_at": "2024-03-01T10:00:00Z",
                }
            ]
        )
        ws = load_workbook(document.save(tmp_path / "datasets.xlsx"))["Datasets"]

        assert ws["B3"].value == "orders"
        assert ws["B3"].hyperlink.target == "https://example.com/d-1"
        assert ws["B3"].style == "gx_hyperlink"
        assert ws["E3"].value == datetime(2024, 3, 1, 10, 0)
        assert ws["E3"].number_format == "yyyy-mm-dd hh:mm:ss"
        # 컬럼 1개짜리 Info 그룹은 병합하지 않음
        assert ws["E1"].value == "Info"
        assert [str(r) for r in ws.merged_cells.ranges] == ["C1:D1"]

    def test_sheets_share_named_styles(self, tmp_path, document, stats_layout, stat_records):
        for name in ("One", "Two"):
            create_writer(document, name, document.styles, stats_layout).export(stat_records)
        wb = load_workbook(document.save(tmp_path / "two.xlsx"))

        assert wb.sheetnames == ["One", "Two"]
        assert wb["Two"]["A3"].style == "gx_identifier"
        assert list(wb.named_styles).count("gx_identifier") == 1

    def test_formula_like_text_stays_text(self, tmp_path, document):
        layout = LayoutBuilder().add_column(lambda c: c.label("Name").render(lambda w, r: w.write_text(r))).build()
        create_writer(document, "S", document.styles, layout).export(["=1+2", '=HYPERLINK("http://example.com","x")'])
        ws = load_workbook(document.save(tmp_path / "text.xlsx"))["S"]

        assert ws["A3"].data_type == "s"
        assert ws["A3"].value == "=1+2"
        assert ws["A4"].data_type == "s"
        assert ws["A4"].value == '=HYPERLINK("http://example.com","x")'

    def test_registries_with_different_palettes(self, tmp_path, document, stats_layout, stat_records):
        other = StyleRegistry(palette=("111111", "222222", "333333"))
        create_writer(document, "Default", document.styles, stats_layout).export(stat_records)
        create_writer(document, "Custom", other, stats_layout).export(stat_records)
        wb = load_workbook(document.save(tmp_path / "palettes.xlsx"))

        default_style = wb["Default"]["B1"].style
        custom_style = wb["Custom"]["B1"].style
        assert default_style == "gx_group_header_0"
        assert custom_style != default_style
        assert custom_style.startswith("gx_group_header_0")
        assert wb["Default"]["B1"].font.color.rgb.endswith(GROUP_PALETTE[0])
        assert wb["Custom"]["B1"].font.color.rgb.endswith("111111")
        assert wb["Custom"]["B2"].fill.start_color.rgb.endswith("111111")


# =============================================================================
# 행 단위 스트리밍
# =============================================================================


class TestExcelGridSinkStreaming:
    def test_row_flushed_on_next_row(self, document):
        sink = document.create_sheet("S")
        sink.create_row(0)
        sink.create_cell(0, 0, "a")
        assert sink.flushed_row_count == 0

        sink.create_row(1)
        assert sink.flushed_row_count == 1

    def test_write_to_flushed_row_rejected(self, document):
        sink = document.create_sheet("S")
        sink.create_row(0)
        sink.create_cell(0, 0, "a")
        sink.create_row(1)

        with pytest.raises(ValueError):
            sink.create_cell(0, 1, "late")
        with pytest.raises(ValueError):
            sink.create_row(0)

    def test_write_to_future_row_rejected(self, document):
        sink = document.create_sheet("S")
        sink.create_row(0)
        with pytest.raises(ValueError):
            sink.create_cell(1, 0, "early")

    def test_column_width_after_first_row_rejected(self, document):
        sink = document.create_sheet("S")
        sink.set_column_width(0, 10)
        sink.create_row(0)
        sink.create_row(1)
        with pytest.raises(ValueError):
            sink.set_column_width(0, 20)

    def test_skipped_rows_and_pending_row_saved(self, tmp_path, document):
        sink = document.create_sheet("S")
        sink.create_row(0)
        sink.create_cell(0, 0, "first")
        sink.create_row(3)
        sink.create_cell(3, 2, "last")
        ws = load_workbook(document.save(tmp_path / "gap.xlsx"))["S"]

        assert ws["A1"].value == "first"
        assert ws["A2"].value is None
        assert ws["C4"].value == "last"
        assert ws.max_row == 4
