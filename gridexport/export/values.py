"""
gridexport/export/values.py - 셀 값 타입

컬럼 렌더 함수가 쓸 수 있는 값의 종류를 닫힌 집합으로 정의합니다.
값 종류마다 적용할 스타일과 실제 셀 값이 정해져 있고,
RecordCellWriter.write() 하나로 모두 처리합니다.

    Text | Hyperlink | Identifier | Description | Timestamp
    | Integer | Float | Decimal | Boolean
"""

from __future__ import annotations

import decimal
from dataclasses import dataclass
from datetime import date, datetime, timezone
from enum import Enum
from typing import Any, Union

from .styles import StyleKind

CellValue = Union[str, int, float, bool, datetime, date]


@dataclass(frozen=True)
class Text:
    """일반 문자열 (스타일 없음)"""

    value: str


@dataclass(frozen=True)
class Hyperlink:
    """표시 라벨 + 이동 대상 (URL)"""

    label: str
    target: str | None = None


@dataclass(frozen=True)
class Identifier:
    """식별자 (UUID 등). str() 결과를 그대로 씀"""

    value: Any


@dataclass(frozen=True)
class Description:
    """긴 텍스트 (줄바꿈 표시)"""

    value: str


@dataclass(frozen=True)
class Timestamp:
    value: datetime | date


@dataclass(frozen=True)
class Integer:
    value: int


@dataclass(frozen=True)
class Float:
    value: float


@dataclass(frozen=True)
class Decimal:
    """임의 정밀도 십진수. 소수 자릿수(scale)에 따라 정수/소수 서식이 갈림"""

    value: decimal.Decimal

    @property
    def scale(self) -> int:
        exponent = self.value.as_tuple().exponent
        # NaN / Infinity 는 지수가 문자열
        if not isinstance(exponent, int):
            return 1
        return -exponent


@dataclass(frozen=True)
class Boolean:
    value: bool


TypedValue = Union[Text, Hyperlink, Identifier, Description, Timestamp, Integer, Float, Decimal, Boolean]


def style_kind_of(value: TypedValue) -> StyleKind | None:
    """값에 적용할 스타일 종류 (None 이면 기본 스타일)"""
    if isinstance(value, Hyperlink):
        return StyleKind.HYPERLINK if value.target is not None else None
    if isinstance(value, Identifier):
        return StyleKind.IDENTIFIER
    if isinstance(value, Description):
        return StyleKind.DESCRIPTION
    if isinstance(value, Timestamp):
        return StyleKind.DATE
    if isinstance(value, Integer):
        return StyleKind.INTEGER
    if isinstance(value, Float):
        return StyleKind.DECIMAL
    if isinstance(value, Decimal):
        return StyleKind.DECIMAL if value.scale > 0 else StyleKind.INTEGER
    if isinstance(value, (Text, Boolean)):
        return None
    raise TypeError(f"지원하지 않는 값 타입: {type(value).__name__}")


def cell_value_of(value: TypedValue) -> CellValue:
    """셀에 기록할 원시 값"""
    if isinstance(value, Hyperlink):
        return value.label
    if isinstance(value, Identifier):
        return str(value.value)
    if isinstance(value, (Text, Description)):
        return value.value
    if isinstance(value, Timestamp):
        return to_naive_utc(value.value)
    if isinstance(value, Integer):
        return int(value.value)
    if isinstance(value, Float):
        return float(value.value)
    if isinstance(value, Decimal):
        return float(value.value)
    if isinstance(value, Boolean):
        return bool(value.value)
    raise TypeError(f"지원하지 않는 값 타입: {type(value).__name__}")


def to_naive_utc(value: datetime | date) -> datetime | date:
    """시간대가 있는 datetime 을 UTC 기준 naive datetime 으로 변환

    스프레드시트 셀은 시간대를 저장하지 못합니다.
    """
    if isinstance(value, datetime) and value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def enum_label(value: Enum) -> str:
    """열거형 값의 표시 문자열 (멤버 이름)"""
    return value.name
