"""
Geography — Hierarchy Diagnostics

Recoverable data problems reported while indexing a snapshot. Fatal
problems (duplicate codes, cycles) are exceptions in core.exceptions.

@file geography/hierarchy/diagnostics.py
"""


class HierarchyWarning(UserWarning):
    """Base class for recoverable hierarchy data problems."""


class OrphanNodeWarning(HierarchyWarning):
    """An area whose parent_code does not resolve; it is excluded from the tree."""

    def __init__(self, codes):
        self.codes = tuple(codes)
        super().__init__(
            f'{len(self.codes)} orphan area(s) excluded from the hierarchy: '
            f'{", ".join(self.codes)}'
        )


class TypeConsistencyWarning(HierarchyWarning):
    """Mixed sibling types, or an embedded type stub disagreeing with the catalog."""

    def __init__(self, issues):
        self.issues = tuple(issues)
        super().__init__('; '.join(issue.message for issue in self.issues))
