# gridexport/export - 표 형식 내보내기 엔진
"""
레코드 스트림을 헤더/그룹 헤더/타입별 서식을 갖춘 시트로 내보내는 엔진.

사용 예시:
    from gridexport.export import LayoutBuilder, StyleRegistry, create_writer
    from gridexport.io.excel import ExcelDocument

    layout = (
        LayoutBuilder()
        .add_column(lambda c: c.label("ID").render(lambda w, r: w.write_identifier(r["id"])))
        .add_group(
            lambda g: g.label("Stats")
            .add_column(lambda c: c.label("Count").render(lambda w, r: w.write_integer(r["count"])))
        )
        .build()
    )

    doc = ExcelDocument()
    writer = create_writer(doc, "결과", doc.styles, layout)
    writer.export(records, estimated_size=len(records))
    doc.save("result.xlsx")

Note:
    yaml 등 선택 의존성은 실제 사용 시점에만 로드합니다 (Lazy Import).
"""

__all__ = [
    # 스타일
    "StyleKind",
    "StyleRegistry",
    "CellStyle",
    "FontSpec",
    "BorderSpec",
    "GROUP_PALETTE",
    # 레이아웃 선언
    "ColumnSpec",
    "ColumnGroupSpec",
    "Layout",
    "ColumnBuilder",
    "ColumnGroupBuilder",
    "LayoutBuilder",
    "build_layout",
    # 값 타입
    "Text",
    "Hyperlink",
    "Identifier",
    "Description",
    "Timestamp",
    "Integer",
    "Float",
    "Decimal",
    "Boolean",
    # 시트
    "SheetWriter",
    "RecordCellWriter",
    "RecordStream",
    "create_writer",
    "write_value",
    "nullable_sum",
    # 백엔드
    "GridSink",
    "GridDocument",
    "CellRegion",
    "MemoryGridSink",
    "MemoryDocument",
    # 레이아웃 파일
    "load_layout",
    "parse_layout",
]

_MODULE_ATTRS = {
    "styles": {"StyleKind", "StyleRegistry", "CellStyle", "FontSpec", "BorderSpec", "GROUP_PALETTE"},
    "columns": {
        "ColumnSpec",
        "ColumnGroupSpec",
        "Layout",
        "ColumnBuilder",
        "ColumnGroupBuilder",
        "LayoutBuilder",
        "build_layout",
    },
    "values": {
        "Text",
        "Hyperlink",
        "Identifier",
        "Description",
        "Timestamp",
        "Integer",
        "Float",
        "Decimal",
        "Boolean",
    },
    "sheet": {"SheetWriter", "RecordCellWriter", "RecordStream", "create_writer", "write_value", "nullable_sum"},
    "sink": {"GridSink", "GridDocument", "CellRegion"},
    "memory": {"MemoryGridSink", "MemoryDocument"},
    "layout_file": {"load_layout", "parse_layout"},
}


def __getattr__(name: str):
    """Lazy import - 실제 사용 시점에만 모듈 로드"""
    import importlib

    for module_name, attrs in _MODULE_ATTRS.items():
        if name in attrs:
            module = importlib.import_module(f"{__name__}.{module_name}")
            return getattr(module, name)

    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
