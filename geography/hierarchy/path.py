"""
Geography — Path Reconstruction

Rebuilds the root-to-leaf selection sequence from a single stored leaf
code, the inverse of level computation.

@file geography/hierarchy/path.py
"""

from typing import Mapping

from core.exceptions import CycleDetected

from .types import NOT_FOUND, AreaNode, Indices


def from_leaf(leaf_code: str, indices: Indices | Mapping[str, AreaNode]):
    """
    Return the list of codes from root to ``leaf_code``.

    ``''`` gives ``[]`` (nothing selected). An unknown code, or one whose
    ancestor chain breaks on a dangling parent_code, gives NOT_FOUND so
    callers can tell "never selected" from "stale". The walk is bounded
    by the node count and raises CycleDetected when exceeded.
    """
    if not leaf_code:
        return []

    code_index = indices.by_code if isinstance(indices, Indices) else indices
    current = code_index.get(leaf_code)
    if current is None:
        return NOT_FOUND

    limit = len(code_index)
    chain = [current.code]
    while current.parent_code is not None:
        if len(chain) > limit:
            raise CycleDetected(start_code=leaf_code)
        current = code_index.get(current.parent_code)
        if current is None:
            return NOT_FOUND
        chain.append(current.code)

    chain.reverse()
    return chain
