"""
Geography — Selection Controller

Owns the cascading selection state of one session: selections[depth]
is the area code chosen at that depth.

  select(depth, code)   keep everything above depth, append code
  reset()               clear everything
  set_from_leaf(code)   rebuild the sequence from a stored leaf

Levels, breadcrumbs and the leaf code are derived on every access from
the current Indices; stale entries are pruned by the computation, not
by the controller.

@file geography/hierarchy/controller.py
"""

import logging
from typing import Iterable, Sequence

from core.constants import LOGGER_NAME

from .levels import build_selection_path, compute_levels, leaf_code
from .path import from_leaf
from .types import NOT_FOUND, DropdownLevel, Indices, LevelType, SelectionPhase, SelectionStep

logger = logging.getLogger(LOGGER_NAME)


class SelectionController:
    """Cascading selection state machine: EMPTY → PARTIAL → COMPLETE and back."""

    def __init__(
        self,
        indices: Indices | None,
        types: Iterable[LevelType] | None = None,
        *,
        auto_advance: bool = False,
        selections: Sequence[str] = (),
    ):
        self._indices = indices
        self._types = {level_type.id: level_type for level_type in (types or ())}
        self.auto_advance = auto_advance
        self._selections: list[str] = [code for code in selections if code]

    # ── State ────────────────────────────────────────────────────────────────

    @property
    def indices(self) -> Indices | None:
        return self._indices

    @property
    def selections(self) -> tuple[str, ...]:
        return tuple(self._selections)

    @property
    def levels(self) -> list[DropdownLevel]:
        return compute_levels(self._indices, self._selections, self._types)

    @property
    def selection_path(self) -> list[SelectionStep]:
        return build_selection_path(self.levels)

    @property
    def leaf_code(self) -> str:
        return leaf_code(self.selection_path)

    @property
    def phase(self) -> SelectionPhase:
        path = self.selection_path
        if not path:
            return SelectionPhase.EMPTY
        if self._indices.children_of(path[-1].area_code):
            return SelectionPhase.PARTIAL
        return SelectionPhase.COMPLETE

    # ── Transitions ──────────────────────────────────────────────────────────

    def select(self, depth: int, code: str) -> None:
        """
        Select ``code`` at ``depth``. Every selection deeper than ``depth``
        is discarded, even when ``code`` equals the previous value.
        Pass code='' to clear from this depth downward.
        """
        if depth < 0:
            raise ValueError(f'depth must be >= 0, got {depth}')
        next_selections = self._selections[:depth]
        if code:
            next_selections.append(code)
        self._selections = next_selections

    def reset(self) -> None:
        self._selections = []

    def set_from_leaf(self, code: str):
        """
        Replace the state with the path to ``code``.

        Returns the new selections, or NOT_FOUND (state cleared) when the
        code is unknown to the current indices.
        """
        if self._indices is None:
            self._selections = []
            return NOT_FOUND if code else []
        chain = from_leaf(code, self._indices)
        if chain is NOT_FOUND:
            logger.info('Leaf %r not found in hierarchy; selection cleared', code)
            self._selections = []
            return NOT_FOUND
        self._selections = list(chain)
        return list(chain)

    def replace_indices(self, indices: Indices | None) -> None:
        """Swap in a refreshed snapshot; stale selections prune on next read."""
        self._indices = indices

    # ── Auto-advance ─────────────────────────────────────────────────────────

    def advance_single_option(self) -> int | None:
        """
        Auto-select the first level that has exactly one option and no
        valid selection. At most one level per call; returns its depth,
        or None when nothing was advanced.
        """
        for depth, level in enumerate(self.levels):
            if not level.selected_code and len(level.options) == 1:
                self.select(depth, level.options[0].code)
                return depth
        return None

    def tick(self) -> int | None:
        """One external trigger (a render, a request)."""
        if not self.auto_advance:
            return None
        return self.advance_single_option()

    def converge(self, max_iterations: int | None = None) -> int:
        """
        Re-invoke tick() until it stops advancing. Returns the number of
        advances performed.
        """
        if max_iterations is None:
            max_iterations = self._indices.node_count if self._indices is not None else 0
        advanced = 0
        while advanced < max_iterations and self.tick() is not None:
            advanced += 1
        return advanced

    def __repr__(self):
        return f'<SelectionController selections={self._selections!r} auto_advance={self.auto_advance}>'
