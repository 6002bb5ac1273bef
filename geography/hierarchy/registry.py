"""
Geography — Index Registry

Holds one built Indices value per tenant. A refresh builds a new value
outside the lock and swaps the reference in; readers either see the
previous snapshot or the new one, never a partially built index.

@file geography/hierarchy/registry.py
"""

import logging
import threading
from dataclasses import dataclass
from typing import Callable, Hashable

from core.constants import LOGGER_NAME

from .types import Indices, LevelType

logger = logging.getLogger(LOGGER_NAME)


@dataclass(frozen=True)
class Snapshot:
    indices: Indices
    types: tuple[LevelType, ...]
    version: int


class IndexRegistry:
    """Per-key cache of immutable hierarchy snapshots."""

    def __init__(self):
        self._entries: dict[Hashable, Snapshot] = {}
        self._lock = threading.Lock()

    def get(self, key: Hashable, version: int = 0) -> Snapshot | None:
        entry = self._entries.get(key)
        if entry is None or entry.version != version:
            return None
        return entry

    def swap(self, key: Hashable, snapshot: Snapshot) -> Snapshot | None:
        with self._lock:
            previous = self._entries.get(key)
            self._entries[key] = snapshot
        logger.info(
            'Hierarchy snapshot swapped for %s (version %s, %d areas)',
            key, snapshot.version, snapshot.indices.node_count,
        )
        return previous

    def get_or_build(
        self,
        key: Hashable,
        build: Callable[[], Snapshot],
        version: int = 0,
    ) -> Snapshot:
        entry = self.get(key, version)
        if entry is not None:
            return entry
        snapshot = build()
        self.swap(key, snapshot)
        return snapshot

    def invalidate(self, key: Hashable) -> None:
        with self._lock:
            self._entries.pop(key, None)

    def clear(self) -> None:
        with self._lock:
            self._entries = {}
