"""
Geography — Dynamic Hierarchy Resolver

Pure-Python resolver for tenant-specific geographic hierarchies whose
depth and level names are only known at runtime.

@file geography/hierarchy/__init__.py
"""

from .adapters import nodes_from_payload, types_from_payload
from .controller import SelectionController
from .diagnostics import HierarchyWarning, OrphanNodeWarning, TypeConsistencyWarning
from .index import build_children_index, build_code_index, build_indices
from .levels import build_selection_path, compute_levels, effective_selections, leaf_code
from .path import from_leaf
from .registry import IndexRegistry, Snapshot
from .types import (
    NOT_FOUND,
    AreaNode,
    DropdownLevel,
    Indices,
    LevelType,
    LevelTypeStub,
    SelectionPhase,
    SelectionStep,
    TypeIssue,
)

__all__ = [
    'NOT_FOUND',
    'AreaNode',
    'DropdownLevel',
    'HierarchyWarning',
    'IndexRegistry',
    'Indices',
    'LevelType',
    'LevelTypeStub',
    'OrphanNodeWarning',
    'SelectionController',
    'SelectionPhase',
    'SelectionStep',
    'Snapshot',
    'TypeConsistencyWarning',
    'TypeIssue',
    'build_children_index',
    'build_code_index',
    'build_indices',
    'build_selection_path',
    'compute_levels',
    'effective_selections',
    'from_leaf',
    'leaf_code',
    'nodes_from_payload',
    'types_from_payload',
]
