"""
Store actions.

An action is a type plus a payload of keyword arguments. The constructor
functions below mirror the editor's callbacks and are the preferred way to
build actions; ``Action.of`` covers everything else.

Payload keys used throughout:
    project_id  - Target project
    frame_id    - Target frame / section (1-based id)
    kind        - LayerKind for layer actions
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping, Optional, Sequence

from ..history import CLEAR_HISTORY, REDO, UNDO
from ..layers import LayerKind


class ActionType(str, Enum):
    """Actions understood by the project reducers."""

    # Selection (untracked)
    SET_PROJECTS = "SET_PROJECTS"
    SELECT_PROJECT = "SELECT_PROJECT"
    SELECT_FRAME = "SELECT_FRAME"
    SET_ACTIVE_TEXT_FIELD = "SET_ACTIVE_TEXT_FIELD"
    SET_ACTIVE_LAYER = "SET_ACTIVE_LAYER"
    CLEAR_SELECTION = "CLEAR_SELECTION"
    DESELECT_FRAME = "DESELECT_FRAME"

    # Frame content
    SET_VARIANT = "SET_VARIANT"
    SET_LAYOUT = "SET_LAYOUT"
    SHUFFLE_LAYOUT_VARIANT = "SHUFFLE_LAYOUT_VARIANT"
    UPDATE_TEXT = "UPDATE_TEXT"
    UPDATE_FORMATTING = "UPDATE_FORMATTING"

    # Frame layers
    SET_FRAME_BACKGROUND = "SET_FRAME_BACKGROUND"
    ADD_LAYER = "ADD_LAYER"
    UPDATE_LAYER = "UPDATE_LAYER"
    REMOVE_LAYER = "REMOVE_LAYER"
    RESTORE_LAYER = "RESTORE_LAYER"
    REORDER_BACKGROUND_LAYERS = "REORDER_BACKGROUND_LAYERS"

    # Frames within a project
    ADD_FRAME = "ADD_FRAME"
    REMOVE_FRAME = "REMOVE_FRAME"
    REORDER_FRAMES = "REORDER_FRAMES"
    CHANGE_FRAME_SIZE = "CHANGE_FRAME_SIZE"
    SET_STRETCHED_BACKGROUND = "SET_STRETCHED_BACKGROUND"
    SET_STRETCHED_PATTERN = "SET_STRETCHED_PATTERN"
    SYNC_LINKED_IMAGES = "SYNC_LINKED_IMAGES"

    # Projects
    ADD_PROJECT = "ADD_PROJECT"
    REMOVE_PROJECT = "REMOVE_PROJECT"
    REORDER_PROJECTS = "REORDER_PROJECTS"
    RESET_PROJECT = "RESET_PROJECT"
    UPDATE_PROJECT = "UPDATE_PROJECT"

    # Video covers
    TOGGLE_PLAY_BUTTON = "TOGGLE_PLAY_BUTTON"
    UPDATE_EPISODE_NUMBER = "UPDATE_EPISODE_NUMBER"

    # Single images
    UPDATE_CANVAS_SIZE = "UPDATE_CANVAS_SIZE"
    UPDATE_BACKGROUND = "UPDATE_BACKGROUND"
    SET_BACKGROUND_GRADIENT = "SET_BACKGROUND_GRADIENT"
    ADD_STACK_LAYER = "ADD_STACK_LAYER"
    UPDATE_STACK_LAYER = "UPDATE_STACK_LAYER"
    REMOVE_STACK_LAYER = "REMOVE_STACK_LAYER"
    REORDER_STACK_LAYERS = "REORDER_STACK_LAYERS"


# Actions that never create history entries
UNTRACKED_ACTIONS = frozenset({
    ActionType.SET_PROJECTS,
    ActionType.SELECT_PROJECT,
    ActionType.SELECT_FRAME,
    ActionType.SET_ACTIVE_TEXT_FIELD,
    ActionType.SET_ACTIVE_LAYER,
    ActionType.CLEAR_SELECTION,
    ActionType.DESELECT_FRAME,
})


@dataclass(frozen=True)
class Action:
    """A dispatched action."""
    type: str
    payload: Mapping[str, Any] = field(default_factory=dict)

    @classmethod
    def of(cls, type: str, **payload: Any) -> 'Action':
        return cls(type=type, payload=payload)

    def get(self, key: str, default: Any = None) -> Any:
        return self.payload.get(key, default)

    def __getitem__(self, key: str) -> Any:
        return self.payload[key]

    def __contains__(self, key: str) -> bool:
        return key in self.payload


def is_tracked(action: Any) -> bool:
    """History filter: selection changes are not undoable."""
    return getattr(action, 'type', action) not in UNTRACKED_ACTIONS


def undo() -> Action:
    return Action.of(UNDO)


def redo() -> Action:
    return Action.of(REDO)


def clear_history() -> Action:
    return Action.of(CLEAR_HISTORY)


# ---------------------------------------------------------------------------
# Selection
# ---------------------------------------------------------------------------

def select_project(project_id: Optional[int]) -> Action:
    return Action.of(ActionType.SELECT_PROJECT, project_id=project_id)


def select_frame(project_id: int, frame_id: int) -> Action:
    return Action.of(ActionType.SELECT_FRAME, project_id=project_id, frame_id=frame_id)


def set_active_text_field(field: Optional[str]) -> Action:
    return Action.of(ActionType.SET_ACTIVE_TEXT_FIELD, field=field)


def set_active_layer(layer_id: Optional[int]) -> Action:
    return Action.of(ActionType.SET_ACTIVE_LAYER, layer_id=layer_id)


def clear_selection() -> Action:
    return Action.of(ActionType.CLEAR_SELECTION)


def deselect_frame() -> Action:
    return Action.of(ActionType.DESELECT_FRAME)


# ---------------------------------------------------------------------------
# Frame content
# ---------------------------------------------------------------------------

def set_variant(project_id: int, frame_id: int, variant_index: int) -> Action:
    return Action.of(ActionType.SET_VARIANT, project_id=project_id, frame_id=frame_id,
                     variant_index=variant_index)


def set_layout(project_id: int, frame_id: int, layout_index: int) -> Action:
    return Action.of(ActionType.SET_LAYOUT, project_id=project_id, frame_id=frame_id,
                     layout_index=layout_index)


def shuffle_layout_variant(project_id: int, frame_id: int) -> Action:
    return Action.of(ActionType.SHUFFLE_LAYOUT_VARIANT, project_id=project_id, frame_id=frame_id)


def update_text(project_id: int, frame_id: int, field: str, value: str) -> Action:
    return Action.of(ActionType.UPDATE_TEXT, project_id=project_id, frame_id=frame_id,
                     field=field, value=value)


def update_formatting(project_id: int, frame_id: int, field: str, key: str, value: Any) -> Action:
    return Action.of(ActionType.UPDATE_FORMATTING, project_id=project_id, frame_id=frame_id,
                     field=field, key=key, value=value)


# ---------------------------------------------------------------------------
# Layers
# ---------------------------------------------------------------------------

def set_frame_background(project_id: int, frame_id: int, background: Any) -> Action:
    """Set the fill: a color, a CSS gradient, a fill dict, or None to clear."""
    return Action.of(ActionType.SET_FRAME_BACKGROUND, project_id=project_id, frame_id=frame_id,
                     background=background)


def add_layer(project_id: int, frame_id: Optional[int], kind: LayerKind, **properties: Any) -> Action:
    return Action.of(ActionType.ADD_LAYER, project_id=project_id, frame_id=frame_id,
                     kind=LayerKind(kind), properties=properties)


def add_image(project_id: int, frame_id: int, src: str) -> Action:
    return add_layer(project_id, frame_id, LayerKind.IMAGE, src=src)


def add_pattern(project_id: int, frame_id: Optional[int], pattern_id: str) -> Action:
    return add_layer(project_id, frame_id, LayerKind.PATTERN, patternId=pattern_id)


def add_product_image(project_id: int, frame_id: int, src: str) -> Action:
    return add_layer(project_id, frame_id, LayerKind.PRODUCT_IMAGE, src=src)


def add_icon(
    project_id: int,
    frame_id: int,
    icon_id: str,
    path: Optional[str] = None,
    name: Optional[str] = None,
) -> Action:
    properties = {'iconId': icon_id}
    if path is not None:
        properties['path'] = path
    if name is not None:
        properties['name'] = name
    return add_layer(project_id, frame_id, LayerKind.ICON, **properties)


def update_layer(project_id: int, frame_id: Optional[int], kind: LayerKind, updates: Mapping[str, Any]) -> Action:
    return Action.of(ActionType.UPDATE_LAYER, project_id=project_id, frame_id=frame_id,
                     kind=LayerKind(kind), updates=dict(updates))


def update_fill(project_id: int, frame_id: int, **updates: Any) -> Action:
    return update_layer(project_id, frame_id, LayerKind.FILL, updates)


def update_progress_indicator(project_id: int, frame_id: int, **updates: Any) -> Action:
    return update_layer(project_id, frame_id, LayerKind.PROGRESS, updates)


def remove_layer(project_id: int, frame_id: Optional[int], kind: LayerKind) -> Action:
    return Action.of(ActionType.REMOVE_LAYER, project_id=project_id, frame_id=frame_id,
                     kind=LayerKind(kind))


def restore_layer(
    project_id: int,
    frame_id: int,
    kind: LayerKind,
    snapshot: Optional[Mapping[str, Any]],
) -> Action:
    """Put a layer back as captured in ``snapshot`` (None removes it)."""
    return Action.of(ActionType.RESTORE_LAYER, project_id=project_id, frame_id=frame_id,
                     kind=LayerKind(kind), snapshot=dict(snapshot) if snapshot is not None else None)


def reorder_background_layers(
    project_id: int,
    frame_id: int,
    active: Optional[LayerKind] = None,
    over: Optional[LayerKind] = None,
    order: Optional[Sequence[LayerKind]] = None,
) -> Action:
    """Reorder by drag (``active`` over ``over``) or by a complete ``order``."""
    return Action.of(ActionType.REORDER_BACKGROUND_LAYERS, project_id=project_id, frame_id=frame_id,
                     active=active, over=over, order=tuple(order) if order is not None else None)


# ---------------------------------------------------------------------------
# Frames
# ---------------------------------------------------------------------------

def add_frame(project_id: int, position: Optional[int] = None) -> Action:
    return Action.of(ActionType.ADD_FRAME, project_id=project_id, position=position)


def remove_frame(project_id: int, frame_id: int) -> Action:
    return Action.of(ActionType.REMOVE_FRAME, project_id=project_id, frame_id=frame_id)


def reorder_frames(project_id: int, old_index: int, new_index: int) -> Action:
    return Action.of(ActionType.REORDER_FRAMES, project_id=project_id,
                     old_index=old_index, new_index=new_index)


def move_frame(project_id: int, active_id: int, over_id: int) -> Action:
    """Drag-and-drop reorder by frame ids."""
    return Action.of(ActionType.REORDER_FRAMES, project_id=project_id,
                     active_id=active_id, over_id=over_id)


def change_frame_size(project_id: int, size: str) -> Action:
    return Action.of(ActionType.CHANGE_FRAME_SIZE, project_id=project_id, size=size)


def set_stretched_background(
    project_id: int,
    gradient: str,
    start_index: int = 0,
    end_index: Optional[int] = None,
) -> Action:
    return Action.of(ActionType.SET_STRETCHED_BACKGROUND, project_id=project_id, gradient=gradient,
                     start_index=start_index, end_index=end_index)


def set_stretched_pattern(
    project_id: int,
    pattern_id: str,
    start_index: int = 0,
    end_index: Optional[int] = None,
) -> Action:
    return Action.of(ActionType.SET_STRETCHED_PATTERN, project_id=project_id, pattern_id=pattern_id,
                     start_index=start_index, end_index=end_index)


def sync_linked_images(linked_group_id: str, updates: Mapping[str, Any]) -> Action:
    return Action.of(ActionType.SYNC_LINKED_IMAGES, linked_group_id=linked_group_id,
                     updates=dict(updates))


# ---------------------------------------------------------------------------
# Projects
# ---------------------------------------------------------------------------

def add_project(after_index: Optional[int] = None, name: Optional[str] = None) -> Action:
    return Action.of(ActionType.ADD_PROJECT, after_index=after_index, name=name)


def remove_project(project_id: int) -> Action:
    return Action.of(ActionType.REMOVE_PROJECT, project_id=project_id)


def reorder_projects(old_index: int, new_index: int) -> Action:
    return Action.of(ActionType.REORDER_PROJECTS, old_index=old_index, new_index=new_index)


def reset_project(project_id: int, original: Any) -> Action:
    return Action.of(ActionType.RESET_PROJECT, project_id=project_id, original=original)


def update_project(project_id: int, **updates: Any) -> Action:
    """Update plain project fields (name, subtitle, previewText, ...)."""
    return Action.of(ActionType.UPDATE_PROJECT, project_id=project_id, updates=updates)


def toggle_play_button(project_id: int) -> Action:
    return Action.of(ActionType.TOGGLE_PLAY_BUTTON, project_id=project_id)


def update_episode_number(project_id: int, episode_number: Optional[str]) -> Action:
    return Action.of(ActionType.UPDATE_EPISODE_NUMBER, project_id=project_id,
                     episode_number=episode_number)


# ---------------------------------------------------------------------------
# Single images
# ---------------------------------------------------------------------------

def update_canvas_size(
    project_id: int,
    canvas_size: Optional[str] = None,
    width: Optional[int] = None,
    height: Optional[int] = None,
) -> Action:
    return Action.of(ActionType.UPDATE_CANVAS_SIZE, project_id=project_id, canvas_size=canvas_size,
                     width=width, height=height)


def update_background(project_id: int, background: Mapping[str, Any]) -> Action:
    return Action.of(ActionType.UPDATE_BACKGROUND, project_id=project_id, background=dict(background))


def set_background_gradient(project_id: int, gradient: Optional[str]) -> Action:
    return Action.of(ActionType.SET_BACKGROUND_GRADIENT, project_id=project_id, gradient=gradient)


def add_stack_layer(
    project_id: int,
    layer_type: str,
    template: Optional[str] = None,
    decorator_type: Optional[str] = None,
) -> Action:
    return Action.of(ActionType.ADD_STACK_LAYER, project_id=project_id, layer_type=layer_type,
                     template=template, decorator_type=decorator_type)


def update_stack_layer(project_id: int, layer_id: int, updates: Mapping[str, Any]) -> Action:
    return Action.of(ActionType.UPDATE_STACK_LAYER, project_id=project_id, layer_id=layer_id,
                     updates=dict(updates))


def remove_stack_layer(project_id: int, layer_id: int) -> Action:
    return Action.of(ActionType.REMOVE_STACK_LAYER, project_id=project_id, layer_id=layer_id)


def reorder_stack_layers(project_id: int, old_index: int, new_index: int) -> Action:
    return Action.of(ActionType.REORDER_STACK_LAYERS, project_id=project_id,
                     old_index=old_index, new_index=new_index)
