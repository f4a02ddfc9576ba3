"""
gridexport/exceptions.py - 통합 예외 계층 구조

내보내기 엔진 전체에서 사용되는 예외 클래스들을 정의합니다.

예외 계층 구조:
    GridExportError (베이스)
    ├── LayoutError (레이아웃 선언/설정 오류, 헤더 렌더링 전에 발생)
    ├── RecordSourceError (레코드 입력 파싱 오류)
    └── OutputExistsError (출력 파일 덮어쓰기 거부)

렌더 함수, 레코드 스트림, 백엔드(openpyxl)에서 발생한 예외는
래핑하지 않고 그대로 전파됩니다. 이미 기록된 행은 유지됩니다.

Usage:
    from gridexport.exceptions import LayoutError

    try:
        layout = builder.build()
    except LayoutError as e:
        print(e.to_dict())
"""

from pathlib import Path
from typing import Any, Dict, Optional

# =============================================================================
# 베이스 예외
# =============================================================================


class GridExportError(Exception):
    """gridexport 기본 예외 클래스

    Attributes:
        message: 에러 메시지
        cause: 원인 예외 (체이닝용)
        details: 추가 상세 정보
    """

    def __init__(
        self,
        message: str,
        cause: Optional[Exception] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.cause = cause
        self.details = details or {}

    def __str__(self) -> str:
        if self.cause:
            return f"{self.message}: {self.cause}"
        return self.message

    def to_dict(self) -> Dict[str, Any]:
        """예외 정보를 딕셔너리로 반환"""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "cause": str(self.cause) if self.cause else None,
            "details": self.details,
        }


# =============================================================================
# 레이아웃 관련 예외
# =============================================================================


class LayoutError(GridExportError):
    """레이아웃 선언 오류

    렌더 함수가 없는 컬럼, 라벨이 없는 그룹, 이름 없는 시트 등.
    항상 빌드 시점(헤더 렌더링 이전)에 발생합니다.
    """

    def __init__(
        self,
        target: str,
        message: str,
        cause: Optional[Exception] = None,
    ):
        full_message = f"레이아웃 오류 [{target}]: {message}"
        super().__init__(full_message, cause)
        self.target = target
        self.details["target"] = target


# =============================================================================
# 입출력 관련 예외
# =============================================================================


class RecordSourceError(GridExportError):
    """레코드 입력을 읽을 수 없는 경우"""

    def __init__(
        self,
        source: str,
        message: str,
        line: Optional[int] = None,
        cause: Optional[Exception] = None,
    ):
        location = f"{source}:{line}" if line is not None else source
        super().__init__(f"레코드 입력 오류 [{location}]: {message}", cause)
        self.source = source
        self.line = line
        self.details.update({"source": source, "line": line})


class OutputExistsError(GridExportError):
    """출력 파일이 이미 존재하고 덮어쓰기가 허용되지 않은 경우"""

    def __init__(self, path: Path):
        super().__init__(f"출력 파일이 이미 존재합니다: {path}")
        self.path = path
        self.details["path"] = str(path)
