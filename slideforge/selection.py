"""
Selection & edit mode - Which editing surface is open on each frame.

Every frame is in one of three modes:

- Idle
- TextEditing(field)  - inline text editor on a text field
- LayerEditing(kind)  - property panel of one layer kind

Only one editor is open per frame. Opening a layer editor closes the text
editor and any other layer editor; opening the text editor closes the layer
editor and clears the selected-layer outline.

The machine subscribes to its store. A ``LayerAdded`` event on the selected
frame opens that layer's editor, unless a drag is in progress (the event is
dropped, so nothing opens late when the drag ends) or the layer came back
through a drag abort. ``FrameDeselected`` returns the frame to Idle and
forgets its cancel snapshots; ``FramesShifted`` does the same for every frame
of the project, since its frame ids now name other frames.

Cancel/Done:

    machine.edit_layer(1, 2, LayerKind.FILL)      # snapshots the fill
    store.dispatch(actions.update_fill(1, 2, opacity=0.4))
    machine.cancel(1, 2)                          # fill restored, Idle
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Optional
import logging

from .layers import LayerKind
from .store import actions
from .store.events import FrameDeselected, FramesShifted, LayerAdded, LayerRemoved, StoreEvent
from .store.store import Store

logger = logging.getLogger(__name__)

FrameKey = tuple[int, int]


class EditMode(str, Enum):
    IDLE = "idle"
    TEXT = "text"
    LAYER = "layer"


@dataclass(frozen=True)
class FrameEditState:
    """
    Edit state of one frame.

    Attributes:
        mode: Which editor is open
        text_field: Field being edited in TEXT mode
        layer_kind: Layer being edited in LAYER mode
        marked_layer: Layer showing the selection outline
    """
    mode: EditMode = EditMode.IDLE
    text_field: Optional[str] = None
    layer_kind: Optional[LayerKind] = None
    marked_layer: Optional[LayerKind] = None

    @property
    def is_idle(self) -> bool:
        return self.mode == EditMode.IDLE

    def is_editing(self, kind: LayerKind) -> bool:
        return self.mode == EditMode.LAYER and self.layer_kind == LayerKind(kind)


IDLE = FrameEditState()


class SelectionMachine:
    """
    Edit-mode state machine bound to a store.

    Args:
        store: Store whose events drive auto-open and deselection
    """

    def __init__(self, store: Store):
        self.store = store
        self._states: dict[FrameKey, FrameEditState] = {}
        # Per frame: layer kind -> serialized layer at editor open (None = absent)
        self._snapshots: dict[FrameKey, dict[LayerKind, Optional[dict[str, Any]]]] = {}
        self._restoring = False
        self._unsubscribe = store.subscribe(self.handle_event)

    def close(self) -> None:
        """Stop listening to the store."""
        self._unsubscribe()

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def state(self, project_id: int, frame_id: int) -> FrameEditState:
        return self._states.get((project_id, frame_id), IDLE)

    def snapshot(self, project_id: int, frame_id: int, kind: LayerKind) -> Optional[dict[str, Any]]:
        """Cancel snapshot of a layer; None if absent or not captured."""
        return self._snapshots.get((project_id, frame_id), {}).get(LayerKind(kind))

    def has_snapshot(self, project_id: int, frame_id: int, kind: LayerKind) -> bool:
        return LayerKind(kind) in self._snapshots.get((project_id, frame_id), {})

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def edit_text(self, project_id: int, frame_id: int, field: str) -> FrameEditState:
        """Open the text editor; closes the layer editor and the outline."""
        key = (project_id, frame_id)
        current = self.state(*key)
        if current.mode == EditMode.LAYER:
            self._drop_snapshot(key, current.layer_kind)
        state = FrameEditState(mode=EditMode.TEXT, text_field=field)
        self._set(key, state)
        if self._is_selected(key):
            self.store.dispatch(actions.set_active_text_field(field))
        return state

    def edit_layer(self, project_id: int, frame_id: int, kind: LayerKind) -> FrameEditState:
        """
        Open the editor for ``kind``.

        Closes the text editor and any other layer editor (keeping their
        values) and snapshots the layer for Cancel. Reopening the editor
        that is already open keeps the original snapshot.
        """
        key = (project_id, frame_id)
        kind = LayerKind(kind)
        current = self.state(*key)
        if current.is_editing(kind):
            return current

        if current.mode == EditMode.LAYER:
            self._drop_snapshot(key, current.layer_kind)
        was_text = current.mode == EditMode.TEXT

        frame = self.store.frame(project_id, frame_id)
        layer = frame.layer(kind) if frame is not None else None
        self._snapshots.setdefault(key, {})[kind] = layer.to_api_dict() if layer is not None else None

        state = FrameEditState(mode=EditMode.LAYER, layer_kind=kind, marked_layer=kind)
        self._set(key, state)
        if was_text and self._is_selected(key):
            self.store.dispatch(actions.set_active_text_field(None))
        return state

    def mark_layer(self, project_id: int, frame_id: int, kind: Optional[LayerKind]) -> FrameEditState:
        """Show (or clear) the selection outline without opening an editor."""
        key = (project_id, frame_id)
        marked = LayerKind(kind) if kind is not None else None
        return self._set(key, replace(self.state(*key), marked_layer=marked))

    def done(self, project_id: int, frame_id: int) -> FrameEditState:
        """Close the open editor keeping the current values."""
        key = (project_id, frame_id)
        current = self.state(*key)
        if self.store.is_dragging:
            self.store.end_drag()
        if current.mode == EditMode.LAYER:
            self._drop_snapshot(key, current.layer_kind)
        elif current.mode == EditMode.TEXT and self._is_selected(key):
            self.store.dispatch(actions.set_active_text_field(None))
        return self._set(key, FrameEditState(marked_layer=current.marked_layer))

    def cancel(self, project_id: int, frame_id: int) -> FrameEditState:
        """
        Close the open editor, restoring the layer as it was when opened.

        A layer that did not exist when its editor opened is removed.
        """
        key = (project_id, frame_id)
        current = self.state(*key)
        if self.store.is_dragging:
            self.store.cancel_drag()
        if current.mode != EditMode.LAYER:
            return self.done(project_id, frame_id)

        kind = current.layer_kind
        captured = self.has_snapshot(project_id, frame_id, kind)
        snapshot = self.snapshot(project_id, frame_id, kind)
        self._drop_snapshot(key, kind)
        state = self._set(key, FrameEditState(marked_layer=current.marked_layer))

        if captured:
            self._restoring = True
            try:
                self.store.dispatch(actions.restore_layer(project_id, frame_id, kind, snapshot))
            finally:
                self._restoring = False
        return state

    def deselect(self, project_id: int, frame_id: int) -> FrameEditState:
        """Force Idle and forget every cancel snapshot of the frame."""
        key = (project_id, frame_id)
        self._snapshots.pop(key, None)
        self._states.pop(key, None)
        return IDLE

    def reset_project(self, project_id: int) -> None:
        """Force Idle on every frame of a project and forget their snapshots."""
        for key in [k for k in self._states if k[0] == project_id]:
            del self._states[key]
        for key in [k for k in self._snapshots if k[0] == project_id]:
            del self._snapshots[key]

    # ------------------------------------------------------------------
    # Store events
    # ------------------------------------------------------------------

    def handle_event(self, event: StoreEvent) -> None:
        if isinstance(event, LayerAdded):
            self._on_layer_added(event)
        elif isinstance(event, LayerRemoved):
            self._on_layer_removed(event)
        elif isinstance(event, FrameDeselected):
            self.deselect(event.project_id, event.frame_id)
        elif isinstance(event, FramesShifted):
            logger.debug(f"Frames of project {event.project_id} shifted, resetting edit state")
            self.reset_project(event.project_id)

    def _on_layer_added(self, event: LayerAdded) -> None:
        if self._restoring or event.restored:
            return
        if self.store.is_dragging:
            logger.debug(f"Auto-open of {event.kind} suppressed during drag")
            return
        key = (event.project_id, event.frame_id)
        if not self._is_selected(key):
            return
        self.edit_layer(event.project_id, event.frame_id, event.kind)

    def _on_layer_removed(self, event: LayerRemoved) -> None:
        key = (event.project_id, event.frame_id)
        current = self.state(*key)
        if current.is_editing(event.kind) and not self._restoring:
            self._drop_snapshot(key, event.kind)
            self._set(key, IDLE)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _is_selected(self, key: FrameKey) -> bool:
        state = self.store.state
        return (state.selected_project_id, state.selected_frame_id) == key

    def _set(self, key: FrameKey, state: FrameEditState) -> FrameEditState:
        if state == IDLE:
            self._states.pop(key, None)
        else:
            self._states[key] = state
        return state

    def _drop_snapshot(self, key: FrameKey, kind: Optional[LayerKind]) -> None:
        snapshots = self._snapshots.get(key)
        if snapshots is not None and kind is not None:
            snapshots.pop(kind, None)
            if not snapshots:
                del self._snapshots[key]
