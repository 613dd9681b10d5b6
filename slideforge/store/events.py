"""
Domain events published by the store after each state change.

Events are derived by comparing the previous and the new present, so undo,
redo and drag cancellation produce the same events as ordinary actions.
"""

from collections import defaultdict
from dataclasses import dataclass
from typing import Any, Union

from ..layers import Frame, LayerKind
from .state import StoreState


@dataclass(frozen=True)
class LayerAdded:
    """A layer slot went from empty to filled."""
    project_id: int
    frame_id: int
    kind: LayerKind
    restored: bool = False


@dataclass(frozen=True)
class LayerRemoved:
    """A layer slot went from filled to empty."""
    project_id: int
    frame_id: int
    kind: LayerKind
    restored: bool = False


@dataclass(frozen=True)
class FrameDeselected:
    """The selected frame changed away from this frame."""
    project_id: int
    frame_id: int


@dataclass(frozen=True)
class FramesShifted:
    """Frames of a project were inserted, removed or reordered, so frame ids now name other frames."""
    project_id: int


@dataclass(frozen=True)
class HistoryChanged:
    can_undo: bool
    can_redo: bool
    undo_count: int
    redo_count: int


StoreEvent = Union[LayerAdded, LayerRemoved, FrameDeselected, FramesShifted, HistoryChanged]

LayerGroup = tuple[int, LayerKind, str]


def _frame_layers(state: StoreState) -> dict[tuple[int, int, LayerKind], str]:
    """(project id, frame id, kind) -> layer id for every filled slot."""
    return {
        (project.id, frame.id, kind): frame.layer(kind).id
        for project in state.projects
        for frame in project.frame_list()
        for kind in frame.present_kinds()
    }


def _group_by_layer(slots: dict[tuple[int, int, LayerKind], str]) -> dict[LayerGroup, list[int]]:
    """(project id, kind, layer id) -> frame ids holding that layer."""
    groups: dict[LayerGroup, list[int]] = defaultdict(list)
    for (project_id, frame_id, kind), layer_id in slots.items():
        groups[(project_id, kind, layer_id)].append(frame_id)
    return groups


def layer_events(before: StoreState, after: StoreState, restored: bool = False) -> list[StoreEvent]:
    """
    Layer presence changes between two states.

    Slots are grouped by project, kind and layer id. A group only produces
    edges when the number of slots holding that layer changes, so frames
    shifting position (insert, remove, reorder) carry their layers along
    silently while a layer shared by several frames (stretched patterns,
    hydrated snapshots) still reports each frame it leaves or enters.
    Edges are only reported for slots that were empty before (added) or
    are empty after (removed).

    Args:
        before: Present before the change
        after: Present after the change
        restored: Mark the events as coming from a restore (drag abort)
    """
    if before.projects is after.projects:
        return []
    old = _frame_layers(before)
    new = _frame_layers(after)
    old_groups = _group_by_layer(old)
    new_groups = _group_by_layer(new)

    events: list[StoreEvent] = []
    for group, frame_ids in new_groups.items():
        surplus = len(frame_ids) - len(old_groups.get(group, ()))
        if surplus <= 0:
            continue
        project_id, kind, _ = group
        entered = [f for f in frame_ids if (project_id, f, kind) not in old]
        events.extend(LayerAdded(project_id, f, kind, restored) for f in entered[:surplus])
    for group, frame_ids in old_groups.items():
        deficit = len(frame_ids) - len(new_groups.get(group, ()))
        if deficit <= 0:
            continue
        project_id, kind, _ = group
        left = [f for f in frame_ids if (project_id, f, kind) not in new]
        events.extend(LayerRemoved(project_id, f, kind, restored) for f in left[:deficit])
    return events


def _content(frame: Frame) -> dict[str, Any]:
    """Frame data without its positional id."""
    return frame.model_dump(exclude={'id'})


def _frames_shifted(old: tuple[Frame, ...], new: tuple[Frame, ...]) -> bool:
    if len(new) > len(old) and all(a is b for a, b in zip(old, new)):
        # Appended frames rename nothing
        return False
    if len(old) != len(new):
        return True
    changed = [i for i, (a, b) in enumerate(zip(old, new)) if a is not b]
    if len(changed) < 2:
        return False
    old_content = [_content(old[i]) for i in changed]
    for position, i in enumerate(changed):
        content = _content(new[i])
        # A frame now holding another position's frame has moved
        if content != old_content[position] and content in old_content:
            return True
    return False


def shift_events(before: StoreState, after: StoreState) -> list[StoreEvent]:
    """FramesShifted for every project whose frames were inserted, removed or reordered."""
    if before.projects is after.projects:
        return []
    old_projects = {project.id: project for project in before.projects}
    events: list[StoreEvent] = []
    for project in after.projects:
        previous = old_projects.get(project.id)
        if previous is None or previous is project:
            continue
        if _frames_shifted(previous.frame_list(), project.frame_list()):
            events.append(FramesShifted(project.id))
    return events


def selection_events(before: StoreState, after: StoreState) -> list[StoreEvent]:
    """FrameDeselected when the selected frame changes or is cleared."""
    if before.selected_frame_id is None:
        return []
    if (before.selected_project_id, before.selected_frame_id) == (
        after.selected_project_id, after.selected_frame_id
    ):
        return []
    return [FrameDeselected(before.selected_project_id, before.selected_frame_id)]
