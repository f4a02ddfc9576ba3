"""
gridexport/export/layout_file.py - YAML 레이아웃 파일

dict 레코드용 Layout 을 YAML 로 선언합니다.

    sheet: Datasets
    columns:
      - {label: ID, field: id, kind: identifier, width: 36}
      - {label: Name, field: name, kind: hyperlink, target: url}
    groups:
      - label: Stats
        columns:
          - {label: Count, field: stats.count, kind: integer}
          - {label: Ratio, field: stats.ratio, kind: decimal}

field / target 은 점(.)으로 중첩 dict 를 따라갑니다. 값이 없으면 빈 셀.
"""

from __future__ import annotations

import decimal
import logging
from collections.abc import Callable, Mapping
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Any

import yaml  # type: ignore[import-untyped]

from gridexport.exceptions import LayoutError

from .columns import ColumnGroupSpec, ColumnSpec, Layout
from .sheet import RecordCellWriter

logger = logging.getLogger(__name__)

Record = Mapping[str, Any]


def get_field(record: Record, path: str) -> Any:
    """점 경로로 중첩 dict 값 조회 (중간에 없으면 None)"""
    value: Any = record
    for key in path.split("."):
        if not isinstance(value, Mapping):
            return None
        value = value.get(key)
        if value is None:
            return None
    return value


# =============================================================================
# 값 변환
# =============================================================================


def _to_timestamp(value: Any) -> datetime | date:
    if isinstance(value, (datetime, date)):
        return value
    if isinstance(value, (int, float)):
        # epoch 초는 로컬 시간대가 아닌 UTC 기준
        return datetime.fromtimestamp(value, tz=timezone.utc)
    text = str(value)
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    return datetime.fromisoformat(text)


def _to_int(value: Any) -> int:
    if isinstance(value, float) and not value.is_integer():
        raise ValueError(f"정수가 아닌 값: {value!r}")
    if isinstance(value, decimal.Decimal) and value != value.to_integral_value():
        raise ValueError(f"정수가 아닌 값: {value!r}")
    return int(value)


def _to_decimal(value: Any) -> decimal.Decimal:
    if isinstance(value, decimal.Decimal):
        return value
    # float 는 repr 을 거쳐야 1.5 -> Decimal("1.5")
    return decimal.Decimal(str(value))


def _to_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "yes", "y", "on")
    return bool(value)


def _field_writer(kind: str, field_path: str, target: str | None) -> Callable[[RecordCellWriter, Record], None]:
    def text(w: RecordCellWriter, r: Record) -> None:
        value = get_field(r, field_path)
        w.write_text(None if value is None else str(value))

    def identifier(w: RecordCellWriter, r: Record) -> None:
        w.write_identifier(get_field(r, field_path))

    def description(w: RecordCellWriter, r: Record) -> None:
        value = get_field(r, field_path)
        w.write_description(None if value is None else str(value))

    def hyperlink(w: RecordCellWriter, r: Record) -> None:
        label = get_field(r, field_path)
        link = get_field(r, target) if target else None
        w.write_hyperlink(None if label is None else str(label), None if link is None else str(link))

    def timestamp(w: RecordCellWriter, r: Record) -> None:
        value = get_field(r, field_path)
        w.write_timestamp(None if value is None else _to_timestamp(value))

    def integer(w: RecordCellWriter, r: Record) -> None:
        value = get_field(r, field_path)
        w.write_integer(None if value is None else _to_int(value))

    def floating(w: RecordCellWriter, r: Record) -> None:
        value = get_field(r, field_path)
        w.write_float(None if value is None else float(value))

    def decimal_(w: RecordCellWriter, r: Record) -> None:
        value = get_field(r, field_path)
        w.write_decimal(None if value is None else _to_decimal(value))

    def boolean(w: RecordCellWriter, r: Record) -> None:
        value = get_field(r, field_path)
        w.write_boolean(None if value is None else _to_bool(value))

    writers = {
        "text": text,
        "identifier": identifier,
        "description": description,
        "hyperlink": hyperlink,
        "timestamp": timestamp,
        "integer": integer,
        "float": floating,
        "decimal": decimal_,
        "boolean": boolean,
    }
    return writers[kind]


FIELD_KINDS = (
    "text",
    "identifier",
    "description",
    "hyperlink",
    "timestamp",
    "integer",
    "float",
    "decimal",
    "boolean",
)


# =============================================================================
# 파싱
# =============================================================================


def _parse_column(entry: Any, where: str) -> ColumnSpec[Record]:
    if not isinstance(entry, Mapping):
        raise LayoutError(where, "컬럼 정의는 매핑이어야 합니다")

    label = entry.get("label")
    field_path = entry.get("field")
    kind = entry.get("kind", "text")
    width = entry.get("width", 0)
    target = entry.get("target")

    if not label or not isinstance(label, str):
        raise LayoutError(where, "label 이 없습니다")
    if not field_path or not isinstance(field_path, str):
        raise LayoutError(f"{where} ({label})", "field 가 없습니다")
    if kind not in FIELD_KINDS:
        raise LayoutError(f"{where} ({label})", f"알 수 없는 kind '{kind}' (가능: {', '.join(FIELD_KINDS)})")
    if not isinstance(width, int) or isinstance(width, bool):
        raise LayoutError(f"{where} ({label})", f"width 는 정수여야 합니다: {width!r}")
    if target is not None and kind != "hyperlink":
        raise LayoutError(f"{where} ({label})", "target 은 hyperlink 컬럼에만 쓸 수 있습니다")

    return ColumnSpec(label=label, render=_field_writer(kind, field_path, target), min_width=width)


def _parse_columns(entries: Any, where: str) -> list[ColumnSpec[Record]]:
    if entries is None:
        return []
    if not isinstance(entries, list):
        raise LayoutError(where, "컬럼 목록은 리스트여야 합니다")
    return [_parse_column(entry, f"{where}[{idx}]") for idx, entry in enumerate(entries)]


def parse_layout(data: Any, default_sheet: str | None = None) -> tuple[str, Layout[Record]]:
    """YAML 에서 읽은 객체 -> (시트 이름, Layout)"""
    if not isinstance(data, Mapping):
        raise LayoutError("layout", "최상위는 매핑이어야 합니다")

    sheet = data.get("sheet") or default_sheet
    if not sheet or not isinstance(sheet, str):
        raise LayoutError("layout", "sheet 이름이 없습니다")

    main_section = _parse_columns(data.get("columns"), "columns")

    groups: list[ColumnGroupSpec[Record]] = []
    raw_groups = data.get("groups") or []
    if not isinstance(raw_groups, list):
        raise LayoutError("groups", "그룹 목록은 리스트여야 합니다")
    for idx, entry in enumerate(raw_groups):
        where = f"groups[{idx}]"
        if not isinstance(entry, Mapping) or not entry.get("label"):
            raise LayoutError(where, "그룹 label 이 없습니다")
        columns = _parse_columns(entry.get("columns"), f"{where}.columns")
        groups.append(ColumnGroupSpec(label=str(entry["label"]), columns=tuple(columns)))

    layout: Layout[Record] = Layout(main_section=tuple(main_section), groups=tuple(groups))
    if layout.column_count == 0:
        raise LayoutError("layout", "컬럼이 하나도 없습니다")
    return sheet, layout


def load_layout(path: str | Path, default_sheet: str | None = None) -> tuple[str, Layout[Record]]:
    """YAML 레이아웃 파일 로드"""
    filepath = Path(path)
    try:
        with open(filepath, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise LayoutError(str(filepath), "파일을 읽을 수 없습니다", cause=e) from e
    except yaml.YAMLError as e:
        raise LayoutError(str(filepath), "YAML 파싱 실패", cause=e) from e

    sheet, layout = parse_layout(data, default_sheet)
    logger.debug("레이아웃 로드: %s (시트 %s, 컬럼 %d개)", filepath, sheet, layout.column_count)
    return sheet, layout
