"""
History - Generic undo/redo container wrapped around a reducer.

The container holds the classic history triple:
- past: states that Undo walks back through (oldest first)
- present: the current state
- future: states that Redo walks forward through (next first)

A dispatched action that is not UNDO/REDO/CLEAR_HISTORY is handed to the
inner reducer. The reducer signals "nothing changed" by returning the very
same object it was given; such results never touch past or future.

Coalescing sessions batch a burst of tracked changes (a pointer drag) into
a single history entry:

    history.begin_coalesce()
    for tick in drag:
        history.dispatch(update_action)
    history.commit_coalesce()   # or abort_coalesce() to roll back
"""

from collections import deque
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Generic, Optional, TypeVar
import logging

logger = logging.getLogger(__name__)

S = TypeVar('S')


class HistoryAction(str, Enum):
    """Action types handled by the history container itself."""
    UNDO = "UNDO"
    REDO = "REDO"
    CLEAR_HISTORY = "CLEAR_HISTORY"


UNDO = HistoryAction.UNDO
REDO = HistoryAction.REDO
CLEAR_HISTORY = HistoryAction.CLEAR_HISTORY

DEFAULT_LIMIT = 50

_NO_ANCHOR = object()


def action_type(action: Any) -> str:
    """Get the type string of an action (plain strings are their own type)."""
    if isinstance(action, str):
        return action
    return getattr(action, 'type', '')


def track_all(action: Any) -> bool:
    """Default filter: every action creates a history entry."""
    return True


@dataclass(frozen=True)
class HistoryCounts:
    """Number of available undo and redo steps."""
    undo_count: int
    redo_count: int


class History(Generic[S]):
    """
    Undo/redo wrapper around a reducer ``reducer(state, action) -> state``.

    Args:
        reducer: Inner reducer. Must return its input unchanged (same
            object) for no-op actions.
        initial: Initial present state.
        limit: Maximum number of past entries; oldest are dropped first.
            None keeps everything.
        filter: Predicate deciding whether an action is tracked. Untracked
            actions update present only.
    """

    def __init__(
        self,
        reducer: Callable[[S, Any], S],
        initial: S,
        limit: Optional[int] = DEFAULT_LIMIT,
        filter: Callable[[Any], bool] = track_all,
    ):
        self._reducer = reducer
        self._filter = filter
        self.limit = limit
        self.past: deque[S] = deque(maxlen=limit)
        self.present: S = initial
        self.future: deque[S] = deque()

        # Coalescing session state
        self._anchor: Any = _NO_ANCHOR
        self._anchor_tracked = False

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def dispatch(self, action: Any) -> S:
        """
        Apply an action and return the resulting present state.

        UNDO, REDO and CLEAR_HISTORY are handled here; everything else goes
        through the inner reducer.
        """
        kind = action_type(action)

        if kind == UNDO:
            return self.undo()
        if kind == REDO:
            return self.redo()
        if kind == CLEAR_HISTORY:
            return self.clear()

        next_state = self._reducer(self.present, action)
        if next_state is self.present:
            return self.present

        if not self._filter(action):
            self.present = next_state
            return self.present

        if self.is_coalescing:
            # Entry is pushed once, on commit
            self._anchor_tracked = True
            self.present = next_state
            return self.present

        self.past.append(self.present)
        self.present = next_state
        self.future.clear()
        return self.present

    def undo(self) -> S:
        """Step back one entry. No-op when there is nothing to undo."""
        if self.is_coalescing:
            self.commit_coalesce()
        if not self.past:
            return self.present
        self.future.appendleft(self.present)
        self.present = self.past.pop()
        return self.present

    def redo(self) -> S:
        """Step forward one entry. No-op when there is nothing to redo."""
        if self.is_coalescing:
            self.commit_coalesce()
        if not self.future:
            return self.present
        self.past.append(self.present)
        self.present = self.future.popleft()
        return self.present

    def clear(self) -> S:
        """Forget past and future, keeping the present state."""
        self.past.clear()
        self.future.clear()
        return self.present

    def reset(self, state: S) -> None:
        """Replace present and drop all history (used after hydration)."""
        self._anchor = _NO_ANCHOR
        self._anchor_tracked = False
        self.present = state
        self.clear()

    # ------------------------------------------------------------------
    # Coalescing sessions
    # ------------------------------------------------------------------

    @property
    def is_coalescing(self) -> bool:
        return self._anchor is not _NO_ANCHOR

    def begin_coalesce(self) -> None:
        """Start batching tracked changes into a single future entry."""
        if self.is_coalescing:
            return
        self._anchor = self.present
        self._anchor_tracked = False

    def commit_coalesce(self) -> bool:
        """
        Close the session, recording at most one history entry.

        Returns:
            True if an entry was recorded
        """
        if not self.is_coalescing:
            return False
        anchor = self._anchor
        tracked = self._anchor_tracked
        self._anchor = _NO_ANCHOR
        self._anchor_tracked = False

        if not tracked or anchor is self.present:
            return False
        self.past.append(anchor)
        self.future.clear()
        return True

    def abort_coalesce(self) -> S:
        """Close the session and restore the present from before it began."""
        if not self.is_coalescing:
            return self.present
        self.present = self._anchor
        self._anchor = _NO_ANCHOR
        self._anchor_tracked = False
        logger.debug("History session aborted, present restored")
        return self.present

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @property
    def can_undo(self) -> bool:
        return len(self.past) > 0

    @property
    def can_redo(self) -> bool:
        return len(self.future) > 0

    def counts(self) -> HistoryCounts:
        """Get the number of undo and redo steps."""
        return HistoryCounts(undo_count=len(self.past), redo_count=len(self.future))
