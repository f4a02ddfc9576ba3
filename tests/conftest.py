"""
tests/conftest.py - pytest 공통 픽스처

Usage:
    def test_something(styles, memory_sink, stats_layout):
        writer = SheetWriter(memory_sink, "Stats", styles, stats_layout)
"""

import os
import sys
from dataclasses import dataclass
from decimal import Decimal
from pathlib import Path

import pytest

# 프로젝트 루트를 sys.path에 추가
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from gridexport.export.columns import Layout, LayoutBuilder  # noqa: E402
from gridexport.export.memory import MemoryDocument, MemoryGridSink  # noqa: E402
from gridexport.export.styles import StyleRegistry  # noqa: E402

# =============================================================================
# 환경 설정
# =============================================================================


@pytest.fixture(autouse=True)
def setup_test_environment(monkeypatch):
    """GRIDEXPORT_* 환경 변수가 테스트에 섞이지 않도록 제거"""
    for key in list(os.environ):
        if key.startswith("GRIDEXPORT_"):
            monkeypatch.delenv(key, raising=False)
    yield


# =============================================================================
# 도메인 픽스처
# =============================================================================


@dataclass
class StatRecord:
    """테스트용 레코드"""

    id: str
    count: int
    ratio: Decimal


@pytest.fixture
def styles() -> StyleRegistry:
    return StyleRegistry()


@pytest.fixture
def memory_sink() -> MemoryGridSink:
    return MemoryGridSink(name="Test")


@pytest.fixture
def memory_document() -> MemoryDocument:
    return MemoryDocument()


@pytest.fixture
def stats_layout() -> Layout:
    """ID + Stats(Count, Ratio) 레이아웃"""
    return (
        LayoutBuilder()
        .add_column(lambda c: c.label("ID").render(lambda w, r: w.write_identifier(r.id)))
        .add_group(
            lambda g: g.label("Stats")
            .add_column(lambda c: c.label("Count").render(lambda w, r: w.write_integer(r.count)))
            .add_column(lambda c: c.label("Ratio").render(lambda w, r: w.write_decimal(r.ratio)))
        )
        .build()
    )


@pytest.fixture
def stat_records() -> list:
    return [
        StatRecord(id="A1", count=10, ratio=Decimal("1.5")),
        StatRecord(id="A2", count=20, ratio=Decimal("2.0")),
    ]


LAYOUT_YAML = """\
sheet: Datasets
columns:
  - {label: ID, field: id, kind: identifier, width: 36}
  - {label: Name, field: name, kind: hyperlink, target: url}
groups:
  - label: Stats
    columns:
      - {label: Count, field: stats.count, kind: integer}
      - {label: Ratio, field: stats.ratio, kind: decimal}
  - label: Empty
    columns: []
  - label: Info
    columns:
      - {label: Updated, field: updated_at, kind: timestamp}
"""


@pytest.fixture
def layout_file(tmp_path) -> Path:
    """YAML 레이아웃 파일"""
    path = tmp_path / "layout.yaml"
    path.write_text(LAYOUT_YAML, encoding="utf-8")
    return path


@pytest.fixture
def records_jsonl(tmp_path) -> Path:
    """JSON Lines 레코드 파일 (2건)"""
    path = tmp_path / "records.jsonl"
    path.write_text(
        '{"id": "d-1", "name": "orders", "url": "https://example.com/d-1", '
        '"stats": {"count": 10, "ratio": 1.5}, "updated_at": "2024-03-01T10:00:00Z"}\n'
        "\n"
        '{"id": "d-2", "name": "customers", "stats": {"count": 20}}\n',
        encoding="utf-8",
    )
    return path
