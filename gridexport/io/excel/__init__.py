# gridexport/io/excel - openpyxl 백엔드
"""
openpyxl 기반 xlsx 백엔드.

사용 예시:
    from gridexport.io.excel import ExcelDocument

    doc = ExcelDocument()
    sink = doc.create_sheet("결과")
"""

from .workbook import ExcelDocument, ExcelGridSink

__all__ = ["ExcelDocument", "ExcelGridSink"]
