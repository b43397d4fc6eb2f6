"""Undo/Redo manager — snapshot-based lens history.

Stores serialized lens documents (dicts) in bounded stacks, each tagged
with a short description for the Edit menu. Pure Python class (no Qt
dependency).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from lenssketch.constants import MAX_UNDO_LEVELS


@dataclass
class Checkpoint:
    """One history entry: a document snapshot and what produced it."""
    snapshot: dict[str, Any]
    description: str = ""


class UndoManager:
    """Snapshot-based undo/redo manager.

    Each push saves a pre-mutation snapshot; undo/redo swap between stacks.

    Usage::

        mgr = UndoManager()
        mgr.push(current_snapshot, "Set radius")       # Before mutation
        previous = mgr.undo(current_snapshot)          # Revert
        next_ = mgr.redo(current_snapshot)             # Re-apply
    """

    def __init__(self, max_levels: int = MAX_UNDO_LEVELS) -> None:
        self._undo_stack: list[Checkpoint] = []
        self._redo_stack: list[Checkpoint] = []
        self._max_levels = max_levels

    @property
    def can_undo(self) -> bool:
        return len(self._undo_stack) > 0

    @property
    def can_redo(self) -> bool:
        return len(self._redo_stack) > 0

    @property
    def undo_count(self) -> int:
        return len(self._undo_stack)

    @property
    def redo_count(self) -> int:
        return len(self._redo_stack)

    @property
    def undo_description(self) -> str:
        return self._undo_stack[-1].description if self._undo_stack else ""

    @property
    def redo_description(self) -> str:
        return self._redo_stack[-1].description if self._redo_stack else ""

    def push(self, snapshot: dict[str, Any], description: str = "") -> None:
        """Save a pre-mutation snapshot. Clears redo stack."""
        self._undo_stack.append(Checkpoint(snapshot, description))
        if len(self._undo_stack) > self._max_levels:
            self._undo_stack.pop(0)  # Drop oldest
        self._redo_stack.clear()

    def undo(self, current: dict[str, Any]) -> dict[str, Any] | None:
        """Undo: push current to redo, pop from undo.

        Returns:
            Previous snapshot to restore, or None if nothing to undo.
        """
        if not self._undo_stack:
            return None
        entry = self._undo_stack.pop()
        self._redo_stack.append(Checkpoint(current, entry.description))
        return entry.snapshot

    def redo(self, current: dict[str, Any]) -> dict[str, Any] | None:
        """Redo: push current to undo, pop from redo.

        Returns:
            Next snapshot to restore, or None if nothing to redo.
        """
        if not self._redo_stack:
            return None
        entry = self._redo_stack.pop()
        self._undo_stack.append(Checkpoint(current, entry.description))
        return entry.snapshot

    def clear(self) -> None:
        """Clear both stacks (e.g. after File > New)."""
        self._undo_stack.clear()
        self._redo_stack.clear()
