"""
Tests for the generic undo/redo history container.

Tests cover:
- Undo/redo inverse laws
- Untracked and no-op actions
- History limit and eviction order
- Coalescing sessions (drags)
"""

from dataclasses import dataclass, replace

import pytest

from slideforge.history import CLEAR_HISTORY, REDO, UNDO, History, HistoryCounts


@dataclass(frozen=True)
class Counter:
    value: int = 0
    selected: bool = False


def counter_reducer(state: Counter, action: str) -> Counter:
    if action == 'INC':
        return replace(state, value=state.value + 1)
    if action == 'SELECT':
        return replace(state, selected=not state.selected)
    return state


def tracked(action: str) -> bool:
    return action != 'SELECT'


@pytest.fixture
def history() -> History[Counter]:
    return History(counter_reducer, Counter(), limit=50, filter=tracked)


class TestUndoRedo:
    """Undo/redo behavior."""

    def test_three_increments_two_undos_one_redo(self, history):
        """Test undo walks back and redo forward one entry at a time."""
        for _ in range(3):
            history.dispatch('INC')

        history.dispatch(UNDO)
        history.dispatch(UNDO)
        assert history.present.value == 1

        history.dispatch(REDO)
        assert history.present.value == 2

    def test_undo_redo_inverse(self, history):
        """Test Undo(Redo(S)) and Redo(Undo(S)) return the same state."""
        history.dispatch('INC')
        history.dispatch('INC')
        before = history.present

        history.undo()
        history.redo()
        assert history.present is before

        history.undo()
        middle = history.present
        history.redo()
        history.undo()
        assert history.present is middle

    def test_undo_on_empty_past_is_noop(self, history):
        """Test undo without history returns the same state object."""
        present = history.present
        assert history.dispatch(UNDO) is present
        assert history.counts() == HistoryCounts(0, 0)

    def test_redo_on_empty_future_is_noop(self, history):
        """Test redo without future returns the same state object."""
        history.dispatch('INC')
        present = history.present
        assert history.dispatch(REDO) is present

    def test_new_action_clears_future(self, history):
        """Test a tracked change after undo drops the redo stack."""
        history.dispatch('INC')
        history.dispatch('INC')
        history.undo()
        assert history.can_redo

        history.dispatch('INC')
        assert not history.can_redo

    def test_clear_keeps_present(self, history):
        """Test CLEAR_HISTORY forgets past and future only."""
        history.dispatch('INC')
        history.dispatch('INC')
        history.undo()
        present = history.present

        history.dispatch(CLEAR_HISTORY)

        assert history.present is present
        assert history.counts() == HistoryCounts(0, 0)

    def test_reset_replaces_present(self, history):
        """Test reset drops all history and installs a new present."""
        history.dispatch('INC')
        history.reset(Counter(value=10))

        assert history.present.value == 10
        assert not history.can_undo


class TestFiltering:
    """Untracked and no-op actions."""

    def test_untracked_action_updates_present_only(self, history):
        """Test filtered actions change present without history entries."""
        history.dispatch('INC')
        counts = history.counts()

        history.dispatch('SELECT')

        assert history.present.selected is True
        assert history.counts() == counts

    def test_untracked_action_keeps_future(self, history):
        """Test filtered actions do not clear the redo stack."""
        history.dispatch('INC')
        history.undo()

        history.dispatch('SELECT')

        assert history.can_redo

    def test_noop_does_not_touch_history(self, history):
        """Test a reducer returning its input leaves past and future alone."""
        history.dispatch('INC')
        history.dispatch('INC')
        history.undo()
        present = history.present
        counts = history.counts()

        assert history.dispatch('UNKNOWN') is present
        assert history.counts() == counts
        assert history.can_redo


class TestLimit:
    """History size limit."""

    def test_limit_evicts_oldest_first(self):
        """Test the past never exceeds the limit and drops the oldest state."""
        history = History(counter_reducer, Counter(), limit=3)
        for _ in range(5):
            history.dispatch('INC')

        assert len(history.past) == 3

        while history.can_undo:
            history.undo()
        assert history.present.value == 2

    def test_no_limit(self):
        """Test limit=None keeps every entry."""
        history = History(counter_reducer, Counter(), limit=None)
        for _ in range(100):
            history.dispatch('INC')
        assert history.counts().undo_count == 100


class TestCoalescing:
    """Batching a burst of changes into one entry."""

    def test_commit_records_single_entry(self, history):
        """Test a whole session becomes one undo step."""
        history.begin_coalesce()
        for _ in range(10):
            history.dispatch('INC')
        assert history.commit_coalesce() is True

        assert history.counts().undo_count == 1
        history.undo()
        assert history.present.value == 0

    def test_commit_without_change_records_nothing(self, history):
        """Test an empty session leaves no entry."""
        history.begin_coalesce()
        assert history.commit_coalesce() is False
        assert not history.can_undo

    def test_abort_restores_anchor(self, history):
        """Test aborting returns to the state before the session."""
        history.dispatch('INC')
        before = history.present

        history.begin_coalesce()
        history.dispatch('INC')
        history.dispatch('INC')
        history.abort_coalesce()

        assert history.present is before
        assert history.counts().undo_count == 1
        assert not history.is_coalescing

    def test_session_clears_future_on_commit(self, history):
        """Test a committed session drops the redo stack."""
        history.dispatch('INC')
        history.undo()

        history.begin_coalesce()
        history.dispatch('INC')
        history.commit_coalesce()

        assert not history.can_redo

    def test_undo_commits_open_session(self, history):
        """Test undo during a session first closes it."""
        history.begin_coalesce()
        history.dispatch('INC')
        history.dispatch('INC')

        history.undo()

        assert not history.is_coalescing
        assert history.present.value == 0

    def test_untracked_only_session_records_nothing(self, history):
        """Test sessions with only filtered actions leave no entry."""
        history.begin_coalesce()
        history.dispatch('SELECT')
        assert history.commit_coalesce() is False
        assert history.present.selected is True
