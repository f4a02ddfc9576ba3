"""
gridexport - 레코드 스트림을 서식 있는 스프레드시트로 내보내는 도구

아키텍처:
    gridexport/
    ├── export/         # 내보내기 엔진 (레이아웃 선언, 스타일 캐시, 시트 writer)
    ├── io/             # 백엔드 (openpyxl xlsx) 와 레코드 입력 (JSON/JSONL)
    ├── cli/            # Click CLI, Rich 진행률 표시
    ├── config.py       # 중앙 설정 관리
    └── exceptions.py   # 통합 예외 계층

Usage:
    from gridexport.export import LayoutBuilder, create_writer
    from gridexport.io.excel import ExcelDocument
"""

from .config import __version__

__all__ = ["__version__"]
