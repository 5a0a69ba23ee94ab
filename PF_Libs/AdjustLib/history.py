"""
Linear undo/redo history for adjustment edits.

The log is a list of immutable snapshots plus a cursor pointing at the
snapshot that matches the current state. Committing while the cursor is not
at the end abandons the redo branch. Undo and redo only move the cursor.
"""

from typing import Generic, List, Optional, TypeVar
import logging

logger = logging.getLogger(__name__)

SnapshotT = TypeVar("SnapshotT")


class HistoryLog(Generic[SnapshotT]):
    """
    Ordered snapshots with a cursor index.

    Invariant: the log is never empty and 0 <= cursor <= len(log) - 1.

    Example:
        >>> log = HistoryLog("a")
        >>> log.commit("b")
        >>> log.undo()
        'a'
        >>> log.redo()
        'b'
    """

    def __init__(self, initial: SnapshotT):
        self._entries: List[SnapshotT] = [initial]
        self._cursor = 0

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def current(self) -> SnapshotT:
        return self._entries[self._cursor]

    @property
    def entries(self) -> List[SnapshotT]:
        return list(self._entries)

    @property
    def can_undo(self) -> bool:
        return self._cursor > 0

    @property
    def can_redo(self) -> bool:
        return self._cursor < len(self._entries) - 1

    def commit(self, snapshot: SnapshotT) -> None:
        """
        Append a snapshot and move the cursor onto it.

        Entries after the cursor (the redo branch) are discarded first.
        """
        if self.can_redo:
            dropped = len(self._entries) - self._cursor - 1
            del self._entries[self._cursor + 1:]
            logger.debug(f"Discarded {dropped} redo entries")

        self._entries.append(snapshot)
        self._cursor = len(self._entries) - 1

    def undo(self) -> Optional[SnapshotT]:
        """
        Step the cursor back.

        Returns:
            The snapshot now at the cursor, or None if already at the start
        """
        if not self.can_undo:
            return None
        self._cursor -= 1
        return self._entries[self._cursor]

    def redo(self) -> Optional[SnapshotT]:
        """
        Step the cursor forward.

        Returns:
            The snapshot now at the cursor, or None if already at the end
        """
        if not self.can_redo:
            return None
        self._cursor += 1
        return self._entries[self._cursor]

    def reinitialize(self, snapshot: SnapshotT) -> None:
        """Replace the whole log with a single entry."""
        self._entries = [snapshot]
        self._cursor = 0
