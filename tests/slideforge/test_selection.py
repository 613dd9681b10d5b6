"""
Tests for the edit-mode state machine.

Tests cover:
- Auto-open on LayerAdded (and when it is suppressed)
- Editor exclusivity within a frame
- Cancel/Done snapshots
- Deselection and layer removal
- Frames shifting under open editors
"""

import pytest

from slideforge.layers import LayerKind
from slideforge.selection import IDLE, EditMode, SelectionMachine
from slideforge.store import actions

FILL, IMAGE, ICON, PATTERN = LayerKind.FILL, LayerKind.IMAGE, LayerKind.ICON, LayerKind.PATTERN


@pytest.fixture
def machine(selected_store):
    """Machine bound to a store with frame 1 selected."""
    machine = SelectionMachine(selected_store)
    yield machine
    machine.close()


@pytest.fixture
def fill_machine(filled_store):
    """Machine bound to a store whose selected frame has a red fill."""
    machine = SelectionMachine(filled_store)
    yield machine
    machine.close()


class TestAutoOpen:
    """LayerAdded opens the editor on the selected frame."""

    def test_add_opens_editor(self, machine, selected_store):
        """Test adding an image opens the image editor."""
        selected_store.dispatch(actions.add_image(1, 1, 'photo.jpg'))
        state = machine.state(1, 1)
        assert state.is_editing(IMAGE)
        assert state.marked_layer == IMAGE

    def test_unselected_frame_stays_idle(self, machine, selected_store):
        """Test layers added to other frames open nothing."""
        selected_store.dispatch(actions.add_image(1, 2, 'photo.jpg'))
        assert machine.state(1, 2) is IDLE
        assert machine.state(1, 1) is IDLE

    def test_suppressed_during_drag(self, machine, selected_store):
        """Test a layer created mid-drag does not open an editor, even later."""
        selected_store.begin_drag()
        selected_store.dispatch(actions.update_layer(1, 1, IMAGE, {'x': 0.4}))
        assert machine.state(1, 1).is_idle

        selected_store.end_drag()
        assert machine.state(1, 1).is_idle
        assert selected_store.frame(1, 1).image_layer is not None

    def test_undo_of_remove_opens_editor(self, machine, selected_store):
        """Test a layer coming back through undo opens its editor."""
        selected_store.dispatch(actions.add_image(1, 1, 'photo.jpg'))
        machine.done(1, 1)
        selected_store.dispatch(actions.remove_layer(1, 1, IMAGE))

        selected_store.undo()
        assert machine.state(1, 1).is_editing(IMAGE)

    def test_drag_abort_does_not_open(self, machine, selected_store):
        """Test a layer brought back by aborting a drag stays closed."""
        selected_store.dispatch(actions.add_image(1, 1, 'photo.jpg'))
        machine.done(1, 1)
        selected_store.begin_drag()
        selected_store.dispatch(actions.remove_layer(1, 1, IMAGE))

        selected_store.cancel_drag()

        assert selected_store.frame(1, 1).image_layer is not None
        assert machine.state(1, 1).is_idle

    def test_stretched_pattern_undo_opens_editor(self, machine, selected_store):
        """Test undoing the removal of one pattern slice reopens its editor."""
        selected_store.dispatch(actions.set_stretched_pattern(1, 'geo-dots-grid'))
        machine.done(1, 1)
        selected_store.dispatch(actions.remove_layer(1, 1, PATTERN))

        selected_store.undo()
        assert machine.state(1, 1).is_editing(PATTERN)


class TestExclusivity:
    """One editor per frame."""

    def test_layer_closes_text(self, machine, selected_store):
        """Test opening a layer editor closes the text editor."""
        machine.edit_text(1, 1, 'headline')
        assert selected_store.state.active_text_field == 'headline'

        state = machine.edit_layer(1, 1, FILL)

        assert state.mode == EditMode.LAYER
        assert state.text_field is None
        assert selected_store.state.active_text_field is None

    def test_layer_replaces_layer(self, machine):
        """Test opening another layer editor drops the first snapshot."""
        machine.edit_layer(1, 1, FILL)
        machine.edit_layer(1, 1, IMAGE)

        assert machine.state(1, 1).is_editing(IMAGE)
        assert not machine.has_snapshot(1, 1, FILL)
        assert machine.has_snapshot(1, 1, IMAGE)

    def test_text_clears_marker(self, machine):
        """Test the text editor clears the selected-layer outline."""
        machine.edit_layer(1, 1, IMAGE)
        state = machine.edit_text(1, 1, 'body')
        assert state.mode == EditMode.TEXT
        assert state.marked_layer is None
        assert not machine.has_snapshot(1, 1, IMAGE)

    def test_reopen_keeps_snapshot(self, fill_machine, filled_store):
        """Test reopening the open editor keeps the original snapshot."""
        fill_machine.edit_layer(1, 1, FILL)
        filled_store.dispatch(actions.update_fill(1, 1, color='#00ff00'))
        fill_machine.edit_layer(1, 1, FILL)
        assert fill_machine.snapshot(1, 1, FILL)['color'] == '#ff0000'

    def test_mark_layer(self, machine):
        """Test the outline can be set and cleared without an editor."""
        assert machine.mark_layer(1, 1, ICON).marked_layer == ICON
        assert machine.state(1, 1).is_idle
        machine.mark_layer(1, 1, None)
        assert machine.state(1, 1) is IDLE


class TestCancelDone:
    """Closing editors."""

    def test_cancel_restores_snapshot(self, fill_machine, filled_store):
        """Test Cancel puts the layer back as it was when opened."""
        fill_machine.edit_layer(1, 1, FILL)
        filled_store.dispatch(actions.update_fill(1, 1, color='#00ff00', opacity=0.3))

        state = fill_machine.cancel(1, 1)

        fill = filled_store.frame(1, 1).background_override
        assert (fill.color, fill.opacity) == ('#ff0000', 1.0)
        assert state.is_idle
        assert state.marked_layer == FILL

    def test_cancel_removes_new_layer(self, machine, selected_store):
        """Test Cancel removes a layer that was absent when its editor opened."""
        machine.edit_layer(1, 1, IMAGE)
        selected_store.dispatch(actions.add_image(1, 1, 'photo.jpg'))

        machine.cancel(1, 1)

        assert selected_store.frame(1, 1).image_layer is None
        assert machine.state(1, 1).is_idle

    def test_cancel_after_auto_open_keeps_layer(self, machine, selected_store):
        """Test Cancel after auto-open only reverts edits made since opening."""
        selected_store.dispatch(actions.add_image(1, 1, 'photo.jpg'))
        selected_store.dispatch(actions.update_layer(1, 1, IMAGE, {'scale': 3}))

        machine.cancel(1, 1)

        layer = selected_store.frame(1, 1).image_layer
        assert layer is not None
        assert layer.scale == 1.0

    def test_cancel_during_drag(self, machine, selected_store):
        """Test Cancel mid-drag rolls the drag back."""
        selected_store.dispatch(actions.add_image(1, 1, 'photo.jpg'))
        selected_store.begin_drag()
        selected_store.dispatch(actions.update_layer(1, 1, IMAGE, {'x': 0.8}))

        machine.cancel(1, 1)

        assert not selected_store.is_dragging
        assert selected_store.frame(1, 1).image_layer.x == 0.0

    def test_done_keeps_values(self, fill_machine, filled_store):
        """Test Done keeps edits and drops the snapshot."""
        fill_machine.edit_layer(1, 1, FILL)
        filled_store.dispatch(actions.update_fill(1, 1, opacity=0.3))

        state = fill_machine.done(1, 1)

        assert filled_store.frame(1, 1).background_override.opacity == 0.3
        assert state.is_idle
        assert state.marked_layer == FILL
        assert not fill_machine.has_snapshot(1, 1, FILL)

    def test_done_commits_drag(self, machine, selected_store):
        """Test Done mid-drag records the drag."""
        selected_store.dispatch(actions.add_image(1, 1, 'photo.jpg'))
        selected_store.begin_drag()
        selected_store.dispatch(actions.update_layer(1, 1, IMAGE, {'x': 0.8}))

        machine.done(1, 1)

        assert not selected_store.is_dragging
        assert selected_store.counts().undo_count == 2

    def test_cancel_text(self, machine, selected_store):
        """Test Cancel on the text editor just closes it."""
        machine.edit_text(1, 1, 'headline')
        machine.cancel(1, 1)
        assert machine.state(1, 1) is IDLE
        assert selected_store.state.active_text_field is None


class TestDeselection:
    """Store events that force Idle."""

    def test_deselect_clears_state(self, fill_machine, filled_store):
        """Test selecting another frame resets the old one."""
        fill_machine.edit_layer(1, 1, FILL)
        filled_store.dispatch(actions.select_frame(1, 2))

        assert fill_machine.state(1, 1) is IDLE
        assert not fill_machine.has_snapshot(1, 1, FILL)

    def test_removed_layer_returns_to_idle(self, fill_machine, filled_store):
        """Test removing the layer being edited closes its editor."""
        fill_machine.edit_layer(1, 1, FILL)
        filled_store.dispatch(actions.remove_layer(1, 1, FILL))
        assert fill_machine.state(1, 1) is IDLE

    def test_removed_other_layer_keeps_editor(self, fill_machine, filled_store):
        """Test removing a different kind leaves the editor open."""
        filled_store.dispatch(actions.add_image(1, 1, 'photo.jpg'))
        fill_machine.edit_layer(1, 1, FILL)
        filled_store.dispatch(actions.remove_layer(1, 1, IMAGE))
        assert fill_machine.state(1, 1).is_editing(FILL)

    def test_removed_pattern_slice_closes_editor(self, machine, selected_store):
        """Test removing the pattern slice being edited closes its editor."""
        selected_store.dispatch(actions.set_stretched_pattern(1, 'geo-dots-grid'))
        assert machine.state(1, 1).is_editing(PATTERN)

        selected_store.dispatch(actions.remove_layer(1, 1, PATTERN))
        assert machine.state(1, 1) is IDLE

    def test_close_stops_listening(self, selected_store):
        """Test a closed machine ignores store events."""
        machine = SelectionMachine(selected_store)
        machine.close()
        selected_store.dispatch(actions.add_image(1, 1, 'photo.jpg'))
        assert machine.state(1, 1) is IDLE


class TestFrameShifts:
    """Edit state is dropped when frame ids move to other frames."""

    def test_remove_frame_resets_project(self, store):
        """Test removing an earlier frame closes editors on the frames after it."""
        store.dispatch(actions.select_frame(1, 2))
        machine = SelectionMachine(store)
        store.dispatch(actions.add_image(1, 2, 'frame2.jpg'))
        assert machine.state(1, 2).is_editing(IMAGE)

        store.dispatch(actions.remove_frame(1, 1))

        assert machine.state(1, 2) is IDLE
        assert not machine.has_snapshot(1, 2, IMAGE)
        machine.close()

    def test_cancel_after_shift_leaves_frames(self, store):
        """Test Cancel after a shift does not copy one frame's layer into another."""
        store.dispatch(actions.select_frame(1, 2))
        machine = SelectionMachine(store)
        store.dispatch(actions.add_image(1, 2, 'frame2.jpg'))
        store.dispatch(actions.remove_frame(1, 1))

        machine.cancel(1, 2)

        frames = store.project(1).frames
        assert [f.style for f in frames] == ['style-2', 'style-3']
        assert frames[0].image_layer.src == 'frame2.jpg'
        assert frames[1].image_layer is None
        machine.close()

    def test_reorder_resets_project(self, fill_machine, filled_store):
        """Test reordering frames closes the open editors of that project."""
        fill_machine.edit_layer(1, 1, FILL)
        filled_store.dispatch(actions.reorder_frames(1, 0, 2))
        assert fill_machine.state(1, 1) is IDLE
        assert not fill_machine.has_snapshot(1, 1, FILL)

    def test_append_keeps_editor(self, fill_machine, filled_store):
        """Test appending a frame leaves open editors alone."""
        fill_machine.edit_layer(1, 1, FILL)
        filled_store.dispatch(actions.add_frame(1))
        assert fill_machine.state(1, 1).is_editing(FILL)
