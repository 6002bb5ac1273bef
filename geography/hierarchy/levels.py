"""
Geography — Level Computation

Derives the cascading dropdown levels for a selection sequence by
following parent links one depth at a time, starting from the roots.

Nothing about the hierarchy is hard-coded: the number of levels and
their labels come from the data of each tenant.

@file geography/hierarchy/levels.py
"""

import logging
from typing import Iterable, Sequence

from core.constants import LOGGER_NAME

from .types import AreaNode, DropdownLevel, Indices, LevelType, SelectionStep

logger = logging.getLogger(LOGGER_NAME)


def _type_lookup(types: Iterable[LevelType] | None) -> dict:
    if types is None:
        return {}
    if isinstance(types, dict):
        return types
    return {level_type.id: level_type for level_type in types}


def resolve_level_type(node: AreaNode, type_by_id: dict) -> tuple:
    """
    Return (id, code, name) for the level a node belongs to.

    The catalog wins; the node's embedded stub is the fallback, then a
    placeholder named after the type id.
    """
    catalog = type_by_id.get(node.type_id)
    if catalog is not None:
        return catalog.id, catalog.code, catalog.name
    stub = node.type_stub
    if stub is not None:
        return node.type_id, stub.code, stub.name or str(node.type_id)
    return node.type_id, '', str(node.type_id)


def compute_levels(
    indices: Indices | None,
    selections: Sequence[str],
    types: Iterable[LevelType] | None = None,
) -> list[DropdownLevel]:
    """
    Compute the ordered list of levels to render.

    Walk (iterative, bounded by the node count):
      1. start at parent_code=None
      2. children of parent_code; none → stop
      3. level type comes from the first child
      4. a valid selection at this depth → emit, descend, continue
      5. no selection, or one that is not among the children → emit
         unselected and stop

    A stale selection prunes every deeper one. This never raises.
    """
    if indices is None:
        return []

    type_by_id = _type_lookup(types)
    levels: list[DropdownLevel] = []
    parent_code = None
    depth = 0

    while depth <= indices.node_count:
        children = indices.children_of(parent_code)
        if not children:
            break

        type_id, type_code, type_name = resolve_level_type(children[0], type_by_id)
        selected_code = selections[depth] if depth < len(selections) else ''

        if selected_code and not any(child.code == selected_code for child in children):
            logger.debug(
                'Pruning stale selection %r at depth %d (parent %r)',
                selected_code, depth, parent_code,
            )
            selected_code = ''

        levels.append(DropdownLevel(
            type_id=type_id,
            type_code=type_code,
            type_name=type_name,
            options=children,
            selected_code=selected_code,
        ))

        if not selected_code:
            break

        parent_code = selected_code
        depth += 1

    return levels


def build_selection_path(levels: Iterable[DropdownLevel]) -> list[SelectionStep]:
    """Breadcrumbs for every level that carries a valid selection."""
    path = []
    for level in levels:
        area = level.selected
        if area is None:
            continue
        path.append(SelectionStep(
            type_id=level.type_id,
            type_code=level.type_code,
            type_name=level.type_name,
            area_code=area.code,
            area_name=area.name,
        ))
    return path


def leaf_code(path: Sequence[SelectionStep]) -> str:
    """Code of the deepest selected area, or '' when nothing is selected."""
    if not path:
        return ''
    return path[-1].area_code


def effective_selections(levels: Iterable[DropdownLevel]) -> list[str]:
    """The selection sequence after stale entries have been pruned."""
    return [step.area_code for step in build_selection_path(levels)]
