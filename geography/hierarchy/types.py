"""
Geography — Hierarchy Types

Value objects shared by the index builder, level computer, path
reconstructor and selection controller. Everything here is immutable:
indices may be shared between requests and threads.

@file geography/hierarchy/types.py
"""

import enum
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping


@dataclass(frozen=True)
class LevelTypeStub:
    """Denormalised type object embedded in each area by some sources."""

    id: int | str
    code: str = ''
    name: str = ''
    rank: int | None = None


@dataclass(frozen=True)
class LevelType:
    """
    One level definition of a tenant hierarchy (Pays, Région, Agence…).

    ``rank`` is a display and tie-break hint only. The depth of a level
    is always derived from parent links.
    """

    id: int | str
    code: str
    name: str
    rank: int = 0
    name_ar: str = ''


@dataclass(frozen=True)
class AreaNode:
    """One node of the flat, parent-pointer hierarchy."""

    code: str
    name: str
    type_id: int | str
    parent_code: str | None = None
    sort_order: int = 0
    name_ar: str = ''
    type_stub: LevelTypeStub | None = None

    @property
    def is_root(self) -> bool:
        return self.parent_code is None


@dataclass(frozen=True)
class TypeIssue:
    """A detected inconsistency between areas and the type catalog."""

    class Kind(str, enum.Enum):
        MIXED_SIBLINGS = 'MIXED_SIBLINGS'
        STUB_MISMATCH = 'STUB_MISMATCH'
        UNKNOWN_TYPE = 'UNKNOWN_TYPE'

    kind: Kind
    parent_code: str | None
    codes: tuple[str, ...]
    message: str


@dataclass(frozen=True)
class Indices:
    """
    Read-only lookup tables for one hierarchy snapshot.

    ``children`` maps a parent code (``None`` for roots) to its sorted
    children; orphans are absent from it. ``by_code`` covers every node,
    orphans included.
    """

    children: Mapping[str | None, tuple[AreaNode, ...]] = field(
        default_factory=lambda: MappingProxyType({}),
    )
    by_code: Mapping[str, AreaNode] = field(
        default_factory=lambda: MappingProxyType({}),
    )
    orphans: tuple[AreaNode, ...] = ()
    type_issues: tuple[TypeIssue, ...] = ()
    version: str = ''

    @property
    def node_count(self) -> int:
        return len(self.by_code)

    def children_of(self, parent_code: str | None) -> tuple[AreaNode, ...]:
        return self.children.get(parent_code, ())

    def get(self, code: str) -> AreaNode | None:
        return self.by_code.get(code)

    @property
    def roots(self) -> tuple[AreaNode, ...]:
        return self.children_of(None)

    @property
    def is_empty(self) -> bool:
        return not self.by_code


@dataclass(frozen=True)
class DropdownLevel:
    """Everything needed to render one cascading picker."""

    type_id: int | str
    type_code: str
    type_name: str
    options: tuple[AreaNode, ...]
    selected_code: str = ''

    @property
    def selected(self) -> AreaNode | None:
        if not self.selected_code:
            return None
        for option in self.options:
            if option.code == self.selected_code:
                return option
        return None


@dataclass(frozen=True)
class SelectionStep:
    """One breadcrumb step, root to leaf."""

    type_id: int | str
    type_code: str
    type_name: str
    area_code: str
    area_name: str


class SelectionPhase(str, enum.Enum):
    EMPTY = 'EMPTY'
    PARTIAL = 'PARTIAL'
    COMPLETE = 'COMPLETE'


class _NotFound:
    """Sentinel for a leaf code absent from the index."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self):
        return False

    def __repr__(self):
        return 'NOT_FOUND'

    def __reduce__(self):
        return (_NotFound, ())


NOT_FOUND = _NotFound()
