"""
Project reducers.

Handler tables per project type. Carousels, eblasts and video covers share
selection, project and frame management and route frame-level actions to
``reduce_frame``. Single images get their own table for the free canvas.

Handlers are pure functions of ``(state, action, context)`` and return the same
state object when nothing changes.
"""

from dataclasses import replace
from typing import Any, Callable, Optional
import logging

from ..layers import (
    Carousel,
    Eblast,
    FillLayer,
    LayerKind,
    Project,
    SingleImage,
    VideoCover,
    new_stack_layer,
)
from ..layers.single_image import Background
from ..zorder import array_move, move_element
from .actions import Action, ActionType
from .frame_reducer import FRAME_HANDLERS, ReducerContext, reduce_frame
from .state import StoreState

logger = logging.getLogger(__name__)

Handler = Callable[[StoreState, Action, ReducerContext], StoreState]


def frame_limit(project: Project, context: ReducerContext) -> Optional[int]:
    """Maximum number of frames for a project type."""
    if isinstance(project, Carousel):
        return context.settings.MAX_FRAMES_PER_CAROUSEL
    if isinstance(project, Eblast):
        return context.settings.MAX_SECTIONS_PER_EBLAST
    return None


def _span(count: int, start: int, end: Optional[int]) -> Optional[tuple[int, int]]:
    """Validated inclusive index range within ``count`` frames."""
    if count == 0:
        return None
    end = count - 1 if end is None else end
    if start < 0 or end >= count or start > end:
        return None
    return start, end


# ---------------------------------------------------------------------------
# Selection
# ---------------------------------------------------------------------------

def _set_projects(state: StoreState, action: Action, context: ReducerContext) -> StoreState:
    return replace(state, projects=tuple(action.get('projects', ())))


def _select_project(state: StoreState, action: Action, context: ReducerContext) -> StoreState:
    project_id = action.get('project_id')
    # Selecting the open project again closes it
    if project_id is None or project_id == state.selected_project_id:
        project_id = None
    return state.with_selection(
        selected_project_id=project_id,
        selected_frame_id=None,
        active_text_field=None,
        selected_layer_id=None,
    )


def _select_frame(state: StoreState, action: Action, context: ReducerContext) -> StoreState:
    project_id = action.get('project_id')
    frame_id = action.get('frame_id')
    if project_id == state.selected_project_id and frame_id == state.selected_frame_id:
        frame_id = None
    return state.with_selection(
        selected_project_id=project_id,
        selected_frame_id=frame_id,
        active_text_field=None,
    )


def _set_active_text_field(state: StoreState, action: Action, context: ReducerContext) -> StoreState:
    return state.with_selection(active_text_field=action.get('field'))


def _set_active_layer(state: StoreState, action: Action, context: ReducerContext) -> StoreState:
    return state.with_selection(selected_layer_id=action.get('layer_id'))


def _clear_selection(state: StoreState, action: Action, context: ReducerContext) -> StoreState:
    return state.with_selection(
        selected_project_id=None,
        selected_frame_id=None,
        active_text_field=None,
        selected_layer_id=None,
    )


def _deselect_frame(state: StoreState, action: Action, context: ReducerContext) -> StoreState:
    return state.with_selection(selected_frame_id=None, active_text_field=None)


# ---------------------------------------------------------------------------
# Projects
# ---------------------------------------------------------------------------

def _project_reducer(project_cls: type) -> dict[str, Handler]:
    """Handlers for adding, removing and reordering projects of one type."""

    def add_project(state: StoreState, action: Action, context: ReducerContext) -> StoreState:
        project = project_cls.blank(state.next_project_id(), action.get('name'))
        after = action.get('after_index')
        index = len(state.projects) if after is None else max(0, min(after + 1, len(state.projects)))
        projects = state.projects[:index] + (project,) + state.projects[index:]
        logger.info(f"Added {project_cls.PROJECT_TYPE} {project.id}")
        return replace(state, projects=projects, selected_project_id=project.id,
                       selected_frame_id=None, active_text_field=None, selected_layer_id=None)

    def remove_project(state: StoreState, action: Action, context: ReducerContext) -> StoreState:
        project_id = action.get('project_id')
        if len(state.projects) <= 1 or state.find_project(project_id) is None:
            logger.debug(f"Refusing to remove {project_cls.PROJECT_TYPE} {project_id}")
            return state
        projects = tuple(p for p in state.projects if p.id != project_id)
        if state.selected_project_id != project_id:
            return replace(state, projects=projects)
        logger.info(f"Removed selected {project_cls.PROJECT_TYPE} {project_id}")
        return replace(state, projects=projects, selected_project_id=None,
                       selected_frame_id=None, active_text_field=None, selected_layer_id=None)

    def reset_project(state: StoreState, action: Action, context: ReducerContext) -> StoreState:
        original = action.get('original')
        if original is None:
            return state
        if isinstance(original, dict):
            original = project_cls.from_api_dict(original)
        index = state.project_index(action.get('project_id'))
        if index < 0:
            return state
        if original.id != state.projects[index].id:
            original = original.model_copy(update={'id': state.projects[index].id})
        return state.with_project(original)

    return {
        ActionType.ADD_PROJECT: add_project,
        ActionType.REMOVE_PROJECT: remove_project,
        ActionType.RESET_PROJECT: reset_project,
    }


def _reorder_projects(state: StoreState, action: Action, context: ReducerContext) -> StoreState:
    projects = array_move(state.projects, action.get('old_index', -1), action.get('new_index', -1))
    if all(a is b for a, b in zip(projects, state.projects)):
        return state
    return replace(state, projects=projects)


def _update_project(state: StoreState, action: Action, context: ReducerContext) -> StoreState:
    project = state.find_project(action.get('project_id'))
    if project is None:
        return state
    updates = {}
    for key, value in action.get('updates', {}).items():
        name = _field_name(type(project), key)
        if name is None or name in ('id', 'version', 'frames', 'sections', 'frame', 'layers'):
            logger.debug(f"Ignoring project update of {key}")
            continue
        updates[name] = value
    if not updates:
        return state
    return state.with_project(project.with_updates(**updates))


def _field_name(model: type, key: str) -> Optional[str]:
    for name, info in model.model_fields.items():
        if key in (name, info.alias):
            return name
    return None


# ---------------------------------------------------------------------------
# Frames
# ---------------------------------------------------------------------------

def _with_project(state: StoreState, action: Action, update: Callable[[Any], Any]) -> StoreState:
    project = state.find_project(action.get('project_id'))
    if project is None:
        logger.debug(f"No project {action.get('project_id')} for {action.type}")
        return state
    return state.with_project(update(project))


def _frame_action(state: StoreState, action: Action, context: ReducerContext) -> StoreState:
    def update(project: Project) -> Project:
        frame = project.find_frame(action.get('frame_id'))
        if frame is None:
            return project
        return project.replace_frame(reduce_frame(frame, action, context))

    return _with_project(state, action, update)


def _add_frame(state: StoreState, action: Action, context: ReducerContext) -> StoreState:
    def update(project: Project) -> Project:
        if isinstance(project, VideoCover):
            return project
        frames = project.frame_list()
        limit = frame_limit(project, context)
        if limit is not None and len(frames) >= limit:
            logger.debug(f"Project {project.id} already has {len(frames)} frames")
            return project
        position = action.get('position')
        index = len(frames) if position is None else max(0, min(position, len(frames)))
        adjacent = frames[max(0, index - 1)] if frames else None
        frame = project.new_frame(adjacent, context.settings.DEFAULT_FILL_COLOR)
        return project.with_frames(frames[:index] + (frame,) + frames[index:])

    return _with_project(state, action, update)


def _remove_frame(state: StoreState, action: Action, context: ReducerContext) -> StoreState:
    project_id = action.get('project_id')
    frame_id = action.get('frame_id')

    def update(project: Project) -> Project:
        frames = project.frame_list()
        if len(frames) <= 1 or project.find_frame(frame_id) is None:
            logger.debug(f"Refusing to remove frame {frame_id} of project {project.id}")
            return project
        return project.with_frames(tuple(f for f in frames if f.id != frame_id))

    next_state = _with_project(state, action, update)
    if next_state is state:
        return state
    if state.selected_project_id == project_id and state.selected_frame_id == frame_id:
        next_state = replace(next_state, selected_frame_id=None, active_text_field=None)
    return next_state


def _reorder_frames(state: StoreState, action: Action, context: ReducerContext) -> StoreState:
    def update(project: Project) -> Project:
        frames = project.frame_list()
        if 'active_id' in action:
            ids = move_element(tuple(f.id for f in frames), action['active_id'], action['over_id'])
            by_id = {f.id: f for f in frames}
            reordered = tuple(by_id[i] for i in ids)
        else:
            reordered = array_move(frames, action.get('old_index', -1), action.get('new_index', -1))
        if all(a is b for a, b in zip(reordered, frames)):
            return project
        return project.with_frames(reordered)

    return _with_project(state, action, update)


def _change_frame_size(state: StoreState, action: Action, context: ReducerContext) -> StoreState:
    def update(project: Project) -> Project:
        size = action.get('size')
        if not size or not hasattr(project, 'frame_size'):
            return project
        return project.with_updates(frame_size=size)

    return _with_project(state, action, update)


def _set_stretched_background(state: StoreState, action: Action, context: ReducerContext) -> StoreState:
    def update(project: Project) -> Project:
        frames = project.frame_list()
        span = _span(len(frames), action.get('start_index', 0), action.get('end_index'))
        if span is None:
            return project
        start, end = span
        count = end - start + 1
        gradient = action['gradient']
        updated = list(frames)
        for index in range(start, end + 1):
            fill = FillLayer.stretched(gradient, index - start, count)
            current = frames[index].background_override
            if current is not None:
                # Keep opacity/rotation of the existing fill
                fill = fill.updated({'opacity': current.opacity, 'rotation': current.rotation})
            updated[index] = frames[index].with_layer(LayerKind.FILL, fill)
        return project.with_frames(tuple(updated))

    return _with_project(state, action, update)


def _set_stretched_pattern(state: StoreState, action: Action, context: ReducerContext) -> StoreState:
    base = context.patterns.create_pattern_layer(action.get('pattern_id', ''))
    if base is None:
        return state

    def update(project: Project) -> Project:
        frames = project.frame_list()
        span = _span(len(frames), action.get('start_index', 0), action.get('end_index'))
        if span is None:
            return project
        start, end = span
        count = end - start + 1
        updated = list(frames)
        for index in range(start, end + 1):
            updated[index] = frames[index].with_layer(
                LayerKind.PATTERN, base.stretched_slice(index - start, count)
            )
        return project.with_frames(tuple(updated))

    return _with_project(state, action, update)


def _sync_linked_images(state: StoreState, action: Action, context: ReducerContext) -> StoreState:
    group_id = action.get('linked_group_id')
    if not group_id:
        return state
    updates = action.get('updates', {})
    for project in state.projects:
        frames = project.frame_list()
        synced = tuple(
            frame.with_layer(LayerKind.IMAGE, frame.image_layer.updated(updates))
            if frame.image_layer is not None and frame.image_layer.linked_group_id == group_id
            else frame
            for frame in frames
        )
        if any(a is not b for a, b in zip(synced, frames)):
            state = state.with_project(project.with_frames(synced))
    return state


def _toggle_play_button(state: StoreState, action: Action, context: ReducerContext) -> StoreState:
    def update(project: Project) -> Project:
        if not isinstance(project, VideoCover):
            return project
        return project.with_updates(show_play_button=not project.show_play_button)

    return _with_project(state, action, update)


def _update_episode_number(state: StoreState, action: Action, context: ReducerContext) -> StoreState:
    def update(project: Project) -> Project:
        if not isinstance(project, VideoCover):
            return project
        return project.with_updates(episode_number=action.get('episode_number'))

    return _with_project(state, action, update)


SELECTION_HANDLERS: dict[str, Handler] = {
    ActionType.SET_PROJECTS: _set_projects,
    ActionType.SELECT_PROJECT: _select_project,
    ActionType.SELECT_FRAME: _select_frame,
    ActionType.SET_ACTIVE_TEXT_FIELD: _set_active_text_field,
    ActionType.SET_ACTIVE_LAYER: _set_active_layer,
    ActionType.CLEAR_SELECTION: _clear_selection,
    ActionType.DESELECT_FRAME: _deselect_frame,
}

FRAME_PROJECT_HANDLERS: dict[str, Handler] = {
    **SELECTION_HANDLERS,
    **{action_type: _frame_action for action_type in FRAME_HANDLERS},
    ActionType.ADD_FRAME: _add_frame,
    ActionType.REMOVE_FRAME: _remove_frame,
    ActionType.REORDER_FRAMES: _reorder_frames,
    ActionType.CHANGE_FRAME_SIZE: _change_frame_size,
    ActionType.SET_STRETCHED_BACKGROUND: _set_stretched_background,
    ActionType.SET_STRETCHED_PATTERN: _set_stretched_pattern,
    ActionType.SYNC_LINKED_IMAGES: _sync_linked_images,
    ActionType.REORDER_PROJECTS: _reorder_projects,
    ActionType.UPDATE_PROJECT: _update_project,
    ActionType.TOGGLE_PLAY_BUTTON: _toggle_play_button,
    ActionType.UPDATE_EPISODE_NUMBER: _update_episode_number,
}


def make_handlers(project_cls: type) -> dict[str, Handler]:
    """Handler table for a frame-based project type."""
    return {**FRAME_PROJECT_HANDLERS, **_project_reducer(project_cls)}


# ---------------------------------------------------------------------------
# Single images
# ---------------------------------------------------------------------------

def _update_canvas_size(state: StoreState, action: Action, context: ReducerContext) -> StoreState:
    def update(image: SingleImage) -> SingleImage:
        updates = {}
        if action.get('canvas_size'):
            updates['canvas_size'] = action['canvas_size']
        if action.get('width') is not None:
            updates['canvas_width'] = action['width']
        if action.get('height') is not None:
            updates['canvas_height'] = action['height']
        return image.with_updates(**updates) if updates else image

    return _with_project(state, action, update)


def _update_background(state: StoreState, action: Action, context: ReducerContext) -> StoreState:
    def update(image: SingleImage) -> SingleImage:
        background = action.get('background')
        if not background:
            return image
        merged = {**image.background.model_dump(by_alias=True), **background}
        return image.with_updates(background=Background.model_validate(merged))

    return _with_project(state, action, update)


def _set_background_gradient(state: StoreState, action: Action, context: ReducerContext) -> StoreState:
    return _with_project(state, action, lambda image: image.with_updates(background_gradient=action.get('gradient')))


def _image_pattern(state: StoreState, action: Action, context: ReducerContext) -> StoreState:
    """Pattern add/update/remove on the canvas; other layer kinds do not apply."""
    if LayerKind(action['kind']) != LayerKind.PATTERN:
        return state

    def update(image: SingleImage) -> SingleImage:
        if action.type == ActionType.ADD_LAYER:
            properties = dict(action.get('properties', {}))
            layer = context.patterns.create_pattern_layer(
                properties.pop('patternId', properties.pop('pattern_id', ''))
            )
            if layer is None:
                return image
            return image.with_updates(pattern_layer=layer.updated(properties) if properties else layer)
        if action.type == ActionType.REMOVE_LAYER:
            return image.with_updates(pattern_layer=None)
        if image.pattern_layer is None:
            return image
        return image.with_updates(pattern_layer=image.pattern_layer.updated(action.get('updates', {})))

    return _with_project(state, action, update)


def _add_stack_layer(state: StoreState, action: Action, context: ReducerContext) -> StoreState:
    image = state.find_project(action.get('project_id'))
    if image is None:
        return state
    layer = new_stack_layer(
        action.get('layer_type') or 'text',
        image.next_layer_id(),
        len(image.layers),
        template=action.get('template'),
        decorator_type=action.get('decorator_type'),
    )
    next_state = state.with_project(image.with_layers(image.layers + (layer,)))
    return replace(next_state, selected_layer_id=layer.id)


def _update_stack_layer(state: StoreState, action: Action, context: ReducerContext) -> StoreState:
    def update(image: SingleImage) -> SingleImage:
        layer_id = action.get('layer_id')
        return image.with_layers(tuple(
            layer.updated(action.get('updates', {})) if layer.id == layer_id else layer
            for layer in image.layers
        ))

    return _with_project(state, action, update)


def _remove_stack_layer(state: StoreState, action: Action, context: ReducerContext) -> StoreState:
    layer_id = action.get('layer_id')

    def update(image: SingleImage) -> SingleImage:
        if image.find_layer(layer_id) is None:
            return image
        return image.with_layers(tuple(layer for layer in image.layers if layer.id != layer_id))

    next_state = _with_project(state, action, update)
    if next_state is not state and state.selected_layer_id == layer_id:
        next_state = replace(next_state, selected_layer_id=None)
    return next_state


def _reorder_stack_layers(state: StoreState, action: Action, context: ReducerContext) -> StoreState:
    def update(image: SingleImage) -> SingleImage:
        moved = array_move(image.layers, action.get('old_index', -1), action.get('new_index', -1))
        if all(a is b for a, b in zip(moved, image.layers)):
            return image
        # Stack position is the z-order
        return image.with_layers(tuple(
            layer if layer.z_index == index else layer.model_copy(update={'z_index': index})
            for index, layer in enumerate(moved, start=1)
        ))

    return _with_project(state, action, update)


SINGLE_IMAGE_HANDLERS: dict[str, Handler] = {
    **SELECTION_HANDLERS,
    **_project_reducer(SingleImage),
    ActionType.REORDER_PROJECTS: _reorder_projects,
    ActionType.UPDATE_PROJECT: _update_project,
    ActionType.UPDATE_CANVAS_SIZE: _update_canvas_size,
    ActionType.UPDATE_BACKGROUND: _update_background,
    ActionType.SET_BACKGROUND_GRADIENT: _set_background_gradient,
    ActionType.ADD_LAYER: _image_pattern,
    ActionType.UPDATE_LAYER: _image_pattern,
    ActionType.REMOVE_LAYER: _image_pattern,
    ActionType.ADD_STACK_LAYER: _add_stack_layer,
    ActionType.UPDATE_STACK_LAYER: _update_stack_layer,
    ActionType.REMOVE_STACK_LAYER: _remove_stack_layer,
    ActionType.REORDER_STACK_LAYERS: _reorder_stack_layers,
}

HANDLERS_BY_TYPE: dict[type, dict[str, Handler]] = {
    Carousel: make_handlers(Carousel),
    Eblast: make_handlers(Eblast),
    VideoCover: make_handlers(VideoCover),
    SingleImage: SINGLE_IMAGE_HANDLERS,
}


def reduce(
    state: StoreState,
    action: Action,
    context: ReducerContext,
    handlers: dict[str, Handler],
) -> StoreState:
    """Run the handler for ``action.type``; unknown actions are no-ops."""
    handler = handlers.get(getattr(action, 'type', None))
    if handler is None:
        logger.debug(f"Unhandled action: {getattr(action, 'type', action)!r}")
        return state
    return handler(state, action, context)
