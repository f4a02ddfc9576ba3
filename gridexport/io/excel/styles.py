"""
gridexport/io/excel/styles.py - openpyxl 스타일 변환

백엔드 독립 스타일 핸들(CellStyle, BorderSpec)을 openpyxl
Font / PatternFill / Alignment / Border / NamedStyle 로 변환합니다.
"""

import logging
from typing import Optional

from openpyxl.styles import Alignment, Border, Font, NamedStyle, PatternFill, Side

from gridexport.export.styles import BorderSpec, CellStyle, FontSpec

logger = logging.getLogger(__name__)

# 워크북 내장 스타일("Normal", "Hyperlink" 등)과 이름이 겹치지 않도록 붙이는 접두사
NAMED_STYLE_PREFIX = "gx_"


# =============================================================================
# 개별 스타일 객체
# =============================================================================


def get_font(spec: FontSpec) -> Font:
    """FontSpec -> Font"""
    return Font(
        name=spec.name,
        bold=spec.bold,
        color=spec.color,
        underline="single" if spec.underline else None,
    )


def get_fill(color: str) -> PatternFill:
    """단색 채우기"""
    return PatternFill(
        start_color=color,
        end_color=color,
        fill_type="solid",
    )


def get_alignment(style: CellStyle) -> Alignment:
    """가로 정렬 + 줄바꿈"""
    return Alignment(horizontal=style.horizontal, wrap_text=style.wrap_text or None)


def get_side(line: Optional[str], color: Optional[str]) -> Side:
    """테두리 한 변 (line 이 None 이면 빈 변)"""
    if line is None:
        return Side()
    return Side(style=line, color=color)


def get_border(spec: BorderSpec) -> Border:
    """BorderSpec -> Border (4변 모두)"""
    return Border(
        left=get_side(spec.left, spec.color),
        right=get_side(spec.right, spec.color),
        top=get_side(spec.top, spec.color),
        bottom=get_side(spec.bottom, spec.color),
    )


def merge_border(current: Border, spec: BorderSpec, *, top: bool, left: bool, right: bool, bottom: bool) -> Border:
    """기존 테두리에 지정한 변만 덮어쓴 새 Border 반환"""
    return Border(
        left=get_side(spec.left, spec.color) if left else current.left,
        right=get_side(spec.right, spec.color) if right else current.right,
        top=get_side(spec.top, spec.color) if top else current.top,
        bottom=get_side(spec.bottom, spec.color) if bottom else current.bottom,
    )


# =============================================================================
# NamedStyle
# =============================================================================


def named_style_name(style: CellStyle) -> str:
    """워크북에 등록할 스타일 이름"""
    return f"{NAMED_STYLE_PREFIX}{style.name}"


def to_named_style(style: CellStyle, name: Optional[str] = None) -> NamedStyle:
    """CellStyle -> NamedStyle

    지정되지 않은 속성은 openpyxl 기본값을 그대로 둡니다.
    name 이 없으면 named_style_name(style) 을 씁니다.
    """
    named = NamedStyle(name=name or named_style_name(style))
    if style.font is not None:
        named.font = get_font(style.font)
    if style.fill_color is not None:
        named.fill = get_fill(style.fill_color)
    if style.number_format is not None:
        named.number_format = style.number_format
    if style.horizontal is not None or style.wrap_text:
        named.alignment = get_alignment(style)
    if style.border is not None:
        named.border = get_border(style.border)
    return named
