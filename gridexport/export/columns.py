"""
gridexport/export/columns.py - 컬럼 / 컬럼 그룹 선언

레코드 타입 T 의 한 행을 어떤 컬럼으로 펼칠지 선언합니다.
컬럼 순서가 곧 물리 컬럼 인덱스 순서입니다:
메인 섹션 컬럼 전체 → 비어 있지 않은 그룹의 컬럼 (그룹 선언 순서).

사용 예시:
    layout = (
        LayoutBuilder[Dataset]()
        .add_column(lambda c: c.label("ID").width(36).render(lambda w, d: w.write_identifier(d.id)))
        .add_group(
            lambda g: g.label("Stats")
            .add_column(lambda c: c.label("Count").render(lambda w, d: w.write_integer(d.count)))
            .add_column(lambda c: c.label("Ratio").render(lambda w, d: w.write_float(d.ratio)))
        )
        .build()
    )
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Generic, TypeVar, Union

from gridexport.exceptions import LayoutError

T = TypeVar("T")

# Excel 컬럼 너비 상한 (문자 수) 과 여백
MAX_COLUMN_WIDTH = 255
COLUMN_PADDING = 2

# (cursor: RecordCellWriter, record: T) -> None
Renderer = Callable[..., Any]


@dataclass(frozen=True)
class ColumnSpec(Generic[T]):
    """출력 컬럼 1개

    Attributes:
        label: 헤더 라벨
        render: (cursor, record) -> None. cursor 의 write_* 로 현재 셀에 값을 씀
        min_width: 최소 너비 (문자 수)
    """

    label: str
    render: Renderer
    min_width: int = 0

    def __post_init__(self) -> None:
        if not isinstance(self.label, str) or not self.label:
            raise LayoutError("column", "라벨이 없습니다")
        if not callable(self.render):
            raise LayoutError(self.label, "렌더 함수가 없습니다")
        if self.min_width < 0:
            raise LayoutError(self.label, f"너비는 음수일 수 없습니다: {self.min_width}")

    @property
    def effective_width(self) -> int:
        """실제 컬럼 너비: max(min_width, 라벨 길이) + 여백, 상한 255"""
        return min(max(self.min_width, len(self.label)) + COLUMN_PADDING, MAX_COLUMN_WIDTH)


@dataclass(frozen=True)
class ColumnGroupSpec(Generic[T]):
    """하나의 병합 헤더 아래 함께 렌더링되는 컬럼 묶음

    컬럼이 없는 그룹도 유효하지만, 헤더/데이터/병합 영역 어디에도
    나타나지 않습니다.
    """

    label: str
    columns: tuple[ColumnSpec[T], ...] = ()

    def __post_init__(self) -> None:
        if not isinstance(self.label, str) or not self.label:
            raise LayoutError("group", "그룹 라벨이 없습니다")
        object.__setattr__(self, "columns", tuple(self.columns))

    def __len__(self) -> int:
        return len(self.columns)

    @property
    def is_empty(self) -> bool:
        return not self.columns


@dataclass(frozen=True)
class Layout(Generic[T]):
    """메인 섹션 + 그룹 목록 (빌드 후 불변)"""

    main_section: tuple[ColumnSpec[T], ...] = ()
    groups: tuple[ColumnGroupSpec[T], ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "main_section", tuple(self.main_section))
        object.__setattr__(self, "groups", tuple(self.groups))

    @property
    def rendered_groups(self) -> tuple[ColumnGroupSpec[T], ...]:
        """실제로 렌더링되는 (비어 있지 않은) 그룹"""
        return tuple(g for g in self.groups if not g.is_empty)

    @property
    def column_count(self) -> int:
        """데이터 행 1개가 차지하는 물리 컬럼 수"""
        return len(self.main_section) + sum(len(g) for g in self.rendered_groups)

    def iter_columns(self):
        """물리 컬럼 순서대로 ColumnSpec 순회"""
        yield from self.main_section
        for group in self.rendered_groups:
            yield from group.columns


# =============================================================================
# 빌더 (fluent DSL)
# =============================================================================


class ColumnBuilder(Generic[T]):
    """ColumnSpec 빌더"""

    def __init__(self) -> None:
        self._label: str | None = None
        self._width = 0
        self._render: Renderer | None = None

    def label(self, label: str) -> ColumnBuilder[T]:
        self._label = label
        return self

    def width(self, width: int) -> ColumnBuilder[T]:
        self._width = width
        return self

    def render(self, render: Renderer) -> ColumnBuilder[T]:
        self._render = render
        return self

    def build(self) -> ColumnSpec[T]:
        if self._render is None:
            raise LayoutError(self._label or "column", "렌더 함수가 없습니다")
        return ColumnSpec(label=self._label or "", render=self._render, min_width=self._width)


ColumnFactory = Union[ColumnSpec[T], Callable[[ColumnBuilder[T]], Any]]


def _resolve_column(column: ColumnFactory) -> ColumnSpec:
    if isinstance(column, ColumnSpec):
        return column
    builder: ColumnBuilder = ColumnBuilder()
    column(builder)
    return builder.build()


class ColumnGroupBuilder(Generic[T]):
    """ColumnGroupSpec 빌더"""

    def __init__(self) -> None:
        self._label: str | None = None
        self._columns: list[ColumnSpec[T]] = []

    def label(self, label: str) -> ColumnGroupBuilder[T]:
        self._label = label
        return self

    def add_column(self, column: ColumnFactory) -> ColumnGroupBuilder[T]:
        """컬럼 추가 (ColumnSpec 또는 ColumnBuilder 를 받는 콜백)"""
        self._columns.append(_resolve_column(column))
        return self

    def build(self) -> ColumnGroupSpec[T]:
        if not self._label:
            raise LayoutError("group", "그룹 라벨이 없습니다")
        return ColumnGroupSpec(label=self._label, columns=tuple(self._columns))


GroupFactory = Union[ColumnGroupSpec[T], Callable[[ColumnGroupBuilder[T]], Any]]


class LayoutBuilder(Generic[T]):
    """Layout 빌더

    add_column() 은 메인 섹션에, add_group() 은 그룹 목록에 순서대로 추가합니다.
    """

    def __init__(self) -> None:
        self._main_section: list[ColumnSpec[T]] = []
        self._groups: list[ColumnGroupSpec[T]] = []

    def add_column(self, column: ColumnFactory) -> LayoutBuilder[T]:
        self._main_section.append(_resolve_column(column))
        return self

    def add_group(self, group: GroupFactory) -> LayoutBuilder[T]:
        if isinstance(group, ColumnGroupSpec):
            self._groups.append(group)
            return self
        builder: ColumnGroupBuilder[T] = ColumnGroupBuilder()
        group(builder)
        self._groups.append(builder.build())
        return self

    def build(self) -> Layout[T]:
        return Layout(main_section=tuple(self._main_section), groups=tuple(self._groups))


def build_layout(
    columns: list[ColumnFactory] | tuple[ColumnFactory, ...] = (),
    groups: list[GroupFactory] | tuple[GroupFactory, ...] = (),
) -> Layout:
    """빌더 없이 한 번에 Layout 생성"""
    builder: LayoutBuilder = LayoutBuilder()
    for column in columns:
        builder.add_column(column)
    for group in groups:
        builder.add_group(group)
    return builder.build()
