"""
gridexport/config.py - 중앙 설정 관리

기본값은 불변 Settings 데이터클래스에 모으고,
GRIDEXPORT_* 환경 변수로 덮어쓸 수 있습니다.

Usage:
    from gridexport.config import settings, get_version

    output = settings.DEFAULT_OUTPUT_FILE   # "export.xlsx"
    level = settings.LOG.level              # "WARNING"
"""

import logging
import os
from dataclasses import dataclass, field
from typing import Optional

__version__ = "0.3.0"

ENV_PREFIX = "GRIDEXPORT_"


# =============================================================================
# 환경 변수 헬퍼
# =============================================================================


def get_env_str(name: str, default: str) -> str:
    """환경 변수 문자열 조회 (GRIDEXPORT_ 접두사 자동 부착)"""
    value = os.environ.get(ENV_PREFIX + name)
    if value is None or value.strip() == "":
        return default
    return value.strip()


def get_env_bool(name: str, default: bool = False) -> bool:
    """환경 변수 bool 조회

    "1", "true", "yes", "on" (대소문자 무시)을 True로 해석합니다.
    """
    value = os.environ.get(ENV_PREFIX + name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


# =============================================================================
# 설정
# =============================================================================


@dataclass(frozen=True)
class LogConfig:
    """로깅 설정"""

    level: str = "WARNING"
    format: str = "%(asctime)s - %(levelname)s - %(message)s"
    datefmt: str = "%Y-%m-%d %H:%M:%S"

    @property
    def level_no(self) -> int:
        """logging 모듈 레벨 번호 (알 수 없는 이름이면 WARNING)"""
        level = logging.getLevelName(self.level.upper())
        return level if isinstance(level, int) else logging.WARNING


@dataclass(frozen=True)
class Settings:
    """애플리케이션 기본 설정 (불변)"""

    DEFAULT_OUTPUT_FILE: str = field(default_factory=lambda: get_env_str("OUTPUT", "export.xlsx"))
    DEFAULT_SHEET_NAME: str = field(default_factory=lambda: get_env_str("SHEET", "Export"))
    OVERWRITE_OUTPUT: bool = field(default_factory=lambda: get_env_bool("FORCE", False))
    LOG: LogConfig = field(default_factory=lambda: LogConfig(level=get_env_str("LOG_LEVEL", "WARNING")))


settings = Settings()


def get_version() -> str:
    """패키지 버전 문자열 반환"""
    return __version__


def configure_logging(log_config: Optional[LogConfig] = None) -> None:
    """루트 로거 설정 (CLI 진입 시 1회)"""
    cfg = log_config or settings.LOG
    logging.basicConfig(level=cfg.level_no, format=cfg.format, datefmt=cfg.datefmt)
