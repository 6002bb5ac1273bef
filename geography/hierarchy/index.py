"""
Geography — Tree Index Builder

Turns a flat list of AreaNode (parent pointers only) into the lookup
tables every other resolver component works from:

  children   parent_code (None for roots) → children sorted by (sort_order, code)
  by_code    code → node

The build is pure. A new Indices value is produced for every snapshot;
existing values are never touched.

@file geography/hierarchy/index.py
"""

import logging
import uuid
import warnings
from collections import Counter, defaultdict
from types import MappingProxyType
from typing import Iterable, Mapping

from core.constants import LOGGER_NAME
from core.exceptions import DataIntegrityError

from .diagnostics import OrphanNodeWarning, TypeConsistencyWarning
from .types import AreaNode, Indices, LevelType, TypeIssue

logger = logging.getLogger(LOGGER_NAME)


def _sort_key(node: AreaNode):
    return (node.sort_order, node.code)


def find_duplicate_codes(nodes: Iterable[AreaNode]) -> list[str]:
    counts = Counter(node.code for node in nodes)
    return sorted(code for code, count in counts.items() if count > 1)


def build_code_index(nodes: Iterable[AreaNode]) -> Mapping[str, AreaNode]:
    """
    Direct code → node lookup. Raises DataIntegrityError on duplicate
    codes instead of letting the last one silently win.
    """
    nodes = list(nodes)
    duplicates = find_duplicate_codes(nodes)
    if duplicates:
        raise DataIntegrityError(codes=duplicates)
    return MappingProxyType({node.code: node for node in nodes})


def build_children_index(
    nodes: Iterable[AreaNode],
    code_index: Mapping[str, AreaNode] | None = None,
) -> Mapping[str | None, tuple[AreaNode, ...]]:
    """
    Group nodes by parent_code, each bucket sorted by (sort_order, code).
    Nodes whose parent_code does not resolve are left out.
    """
    nodes = list(nodes)
    if code_index is None:
        code_index = build_code_index(nodes)

    buckets: dict[str | None, list[AreaNode]] = defaultdict(list)
    for node in nodes:
        if not node.is_root and node.parent_code not in code_index:
            continue
        buckets[node.parent_code].append(node)

    return MappingProxyType({
        parent: tuple(sorted(bucket, key=_sort_key))
        for parent, bucket in buckets.items()
    })


def find_orphans(nodes: Iterable[AreaNode], code_index: Mapping[str, AreaNode]) -> tuple[AreaNode, ...]:
    return tuple(
        node for node in nodes
        if not node.is_root and node.parent_code not in code_index
    )


def check_type_consistency(
    children: Mapping[str | None, tuple[AreaNode, ...]],
    types: Iterable[LevelType],
) -> tuple[TypeIssue, ...]:
    """
    Reconcile areas against the type catalog.

    Reports sibling sets that mix type ids, areas referencing a type id
    absent from the catalog, and embedded type stubs whose code or name
    disagree with the catalog entry.
    """
    type_by_id = {level_type.id: level_type for level_type in types}
    issues: list[TypeIssue] = []

    for parent_code, siblings in children.items():
        type_ids = {node.type_id for node in siblings}
        if len(type_ids) > 1:
            issues.append(TypeIssue(
                kind=TypeIssue.Kind.MIXED_SIBLINGS,
                parent_code=parent_code,
                codes=tuple(node.code for node in siblings),
                message=(
                    f'children of {parent_code or "<root>"} mix type ids '
                    f'{sorted(map(str, type_ids))}; first child type is used'
                ),
            ))

        for node in siblings:
            catalog = type_by_id.get(node.type_id)
            if catalog is None:
                issues.append(TypeIssue(
                    kind=TypeIssue.Kind.UNKNOWN_TYPE,
                    parent_code=parent_code,
                    codes=(node.code,),
                    message=f'area {node.code} references unknown type id {node.type_id}',
                ))
                continue
            stub = node.type_stub
            if stub is None:
                continue
            if stub.id != catalog.id or (stub.code and stub.code != catalog.code) or (
                stub.name and stub.name != catalog.name
            ):
                issues.append(TypeIssue(
                    kind=TypeIssue.Kind.STUB_MISMATCH,
                    parent_code=parent_code,
                    codes=(node.code,),
                    message=(
                        f'area {node.code} embeds type {stub.code or stub.id}/{stub.name!r} '
                        f'but catalog has {catalog.code}/{catalog.name!r}'
                    ),
                ))

    return tuple(issues)


def build_indices(
    nodes: Iterable[AreaNode],
    types: Iterable[LevelType] | None = None,
    *,
    strict: bool = False,
) -> Indices:
    """
    Build an immutable Indices snapshot from a flat node list.

    Duplicate codes raise DataIntegrityError. Orphans are excluded from
    the children index and reported with OrphanNodeWarning. When a type
    catalog is given, type inconsistencies are reported with
    TypeConsistencyWarning, or raised as DataIntegrityError if strict.
    """
    nodes = list(nodes)
    code_index = build_code_index(nodes)
    children = build_children_index(nodes, code_index)
    orphans = find_orphans(nodes, code_index)

    if orphans:
        orphan_codes = [node.code for node in orphans]
        logger.warning('Excluding %d orphan area(s): %s', len(orphans), ', '.join(orphan_codes))
        warnings.warn(OrphanNodeWarning(orphan_codes), stacklevel=2)

    type_issues: tuple[TypeIssue, ...] = ()
    if types is not None:
        type_issues = check_type_consistency(children, types)
        if type_issues:
            if strict:
                offending = sorted({code for issue in type_issues for code in issue.codes})
                raise DataIntegrityError(
                    detail='; '.join(issue.message for issue in type_issues),
                    codes=offending,
                )
            for issue in type_issues:
                logger.warning('Type consistency: %s', issue.message)
            warnings.warn(TypeConsistencyWarning(type_issues), stacklevel=2)

    return Indices(
        children=children,
        by_code=code_index,
        orphans=orphans,
        type_issues=type_issues,
        version=uuid.uuid4().hex,
    )
