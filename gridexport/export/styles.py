"""
gridexport/export/styles.py - 셀 스타일 정의 및 캐시

문서 1개당 StyleRegistry 1개를 만들어 공유합니다.
스타일 객체는 출력 파일 크기와 메모리를 위해 셀마다 새로 만들지 않고
항상 같은 핸들을 재사용합니다.

구성:
    - StyleKind: 데이터 종류별 고정 스타일 (생성 시 모두 만들어 둠)
    - main_header_style: 메인 섹션 컬럼 헤더
    - 그룹 헤더 / 그룹 컬럼 헤더: 팔레트 잔여값(group_index % 3)별로
      처음 요청될 때 생성, 이후 같은 객체 반환 (append-only, eviction 없음)
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from enum import Enum

logger = logging.getLogger(__name__)

# =============================================================================
# 색상 상수 (RGB Hex)
# =============================================================================

COLOR_MAIN_HEADER_BG = "99CC00"  # 메인 헤더 배경 (연두)
COLOR_IDENTIFIER_FG = "808080"  # 식별자 글자 (회색)
COLOR_HYPERLINK_FG = "0000FF"  # 하이퍼링크 글자 (파랑)

# 그룹 팔레트 (그룹 인덱스 % 길이 로 순환)
GROUP_PALETTE: tuple[str, ...] = ("FFCC00", "FF9900", "FF6600")

# =============================================================================
# 숫자 포맷 상수
# =============================================================================

NUMBER_FORMAT_INTEGER = "#,##0"
NUMBER_FORMAT_DECIMAL = "#,##0.00"
NUMBER_FORMAT_DATETIME = "yyyy-mm-dd hh:mm:ss"

FONT_MONOSPACE = "Consolas"

# 테두리 선 종류 (openpyxl Side.style 값과 동일)
BORDER_THIN = "thin"
BORDER_MEDIUM = "medium"


class StyleKind(Enum):
    """데이터 셀 스타일 종류"""

    IDENTIFIER = "identifier"
    HYPERLINK = "hyperlink"
    DATE = "date"
    INTEGER = "integer"
    DECIMAL = "decimal"
    BOOLEAN = "boolean"
    DESCRIPTION = "description"


# =============================================================================
# 스타일 핸들 (백엔드 독립)
# =============================================================================


@dataclass(frozen=True)
class FontSpec:
    """폰트 정의"""

    name: str | None = None
    bold: bool = False
    color: str | None = None
    underline: bool = False


@dataclass(frozen=True)
class BorderSpec:
    """사각형 테두리 정의 (선 종류 + 색상)"""

    top: str | None = None
    left: str | None = None
    right: str | None = None
    bottom: str | None = None
    color: str | None = None

    @classmethod
    def group_frame(cls, color: str) -> BorderSpec:
        """그룹 헤더용 테두리: 위/좌/우 medium, 아래 thin"""
        return cls(top=BORDER_MEDIUM, left=BORDER_MEDIUM, right=BORDER_MEDIUM, bottom=BORDER_THIN, color=color)


@dataclass(frozen=True)
class CellStyle:
    """셀 스타일 핸들

    백엔드는 핸들(정의 전체)을 키로 실제 스타일 객체를 한 번만 만들어
    재사용합니다. 정의가 다른 핸들이 같은 이름을 쓰면 백엔드가 이름을 구분합니다.
    """

    name: str
    font: FontSpec | None = None
    fill_color: str | None = None
    number_format: str | None = None
    horizontal: str | None = None
    wrap_text: bool = False
    border: BorderSpec | None = None


def _build_data_styles() -> dict[StyleKind, CellStyle]:
    return {
        StyleKind.IDENTIFIER: CellStyle(
            name="identifier",
            font=FontSpec(name=FONT_MONOSPACE, color=COLOR_IDENTIFIER_FG),
        ),
        StyleKind.HYPERLINK: CellStyle(
            name="hyperlink",
            font=FontSpec(color=COLOR_HYPERLINK_FG, underline=True),
        ),
        StyleKind.DATE: CellStyle(name="date", number_format=NUMBER_FORMAT_DATETIME),
        StyleKind.INTEGER: CellStyle(name="integer", number_format=NUMBER_FORMAT_INTEGER),
        StyleKind.DECIMAL: CellStyle(name="decimal", number_format=NUMBER_FORMAT_DECIMAL),
        # 불리언 전용 서식은 정해지지 않음: 기본 모양 그대로
        StyleKind.BOOLEAN: CellStyle(name="boolean"),
        StyleKind.DESCRIPTION: CellStyle(name="description", wrap_text=True),
    }


def _header_style(name: str, color: str) -> CellStyle:
    return CellStyle(
        name=name,
        font=FontSpec(bold=True),
        fill_color=color,
        horizontal="center",
    )


class StyleRegistry:
    """문서 단위 스타일 캐시

    고정 스타일은 생성자에서 모두 만들고, 그룹 스타일은 팔레트
    잔여값별로 지연 생성합니다. 여러 시트가 하나의 레지스트리를
    동시에 사용해도 되도록 지연 생성은 Lock 으로 직렬화합니다.

    Example:
        styles = StyleRegistry()
        styles.get_style(StyleKind.DATE) is styles.get_style(StyleKind.DATE)  # True
        styles.get_group_header_style(0) is styles.get_group_header_style(3)  # True
    """

    def __init__(self, palette: tuple[str, ...] = GROUP_PALETTE) -> None:
        if not palette:
            raise ValueError("palette must not be empty")
        self._palette = tuple(palette)
        self._data_styles = _build_data_styles()
        self._main_header_style = _header_style("main_header", COLOR_MAIN_HEADER_BG)
        self._group_header_styles: list[CellStyle] = []
        self._group_column_header_styles: list[CellStyle] = []
        self._lock = threading.Lock()

    @property
    def palette_size(self) -> int:
        return len(self._palette)

    @property
    def main_header_style(self) -> CellStyle:
        """메인 섹션 컬럼 헤더 스타일"""
        return self._main_header_style

    def get_style(self, kind: StyleKind) -> CellStyle:
        """데이터 종류별 고정 스타일"""
        return self._data_styles[kind]

    def _residue(self, group_index: int) -> int:
        if group_index < 0:
            raise ValueError(f"group_index must be non-negative: {group_index}")
        return group_index % len(self._palette)

    def get_group_color(self, group_index: int) -> str:
        """그룹 팔레트 색상 (RGB Hex)"""
        return self._palette[self._residue(group_index)]

    def get_group_header_style(self, group_index: int) -> CellStyle:
        """그룹 라벨 셀 스타일 (병합 영역 테두리와 같은 색)"""
        residue = self._residue(group_index)
        return self._get_or_create(self._group_header_styles, residue, self._create_group_header_style)

    def get_group_column_header_style(self, group_index: int) -> CellStyle:
        """그룹에 속한 컬럼 헤더 스타일"""
        residue = self._residue(group_index)
        return self._get_or_create(self._group_column_header_styles, residue, self._create_group_column_header_style)

    def _get_or_create(self, store: list[CellStyle], residue: int, factory) -> CellStyle:
        # 이미 만들어진 잔여값은 Lock 없이 읽음 (list 는 append-only)
        if residue < len(store):
            return store[residue]
        with self._lock:
            for idx in range(len(store), residue + 1):
                store.append(factory(idx))
                logger.debug("그룹 스타일 생성: %s", store[idx].name)
            return store[residue]

    def _create_group_header_style(self, residue: int) -> CellStyle:
        color = self._palette[residue]
        return CellStyle(
            name=f"group_header_{residue}",
            font=FontSpec(name=FONT_MONOSPACE, bold=True, color=color),
            horizontal="center",
            border=BorderSpec.group_frame(color),
        )

    def _create_group_column_header_style(self, residue: int) -> CellStyle:
        return _header_style(f"group_column_header_{residue}", self._palette[residue])
