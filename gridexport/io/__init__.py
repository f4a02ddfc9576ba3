"""입출력.

하위 모듈:
- excel: openpyxl 기반 xlsx 문서 (ExcelDocument, ExcelGridSink)
- records: JSON / JSON Lines 레코드 입력
"""
