"""
Entity store - Projects of one type, their reducers, history and events.

    from slideforge.store import CarouselStore, actions

    store = CarouselStore([Carousel.blank(1)])
    store.dispatch(actions.add_pattern(1, 1, 'geo-dots-grid'))
"""

from . import actions
from .actions import Action, ActionType, UNTRACKED_ACTIONS, is_tracked
from .events import (
    FrameDeselected,
    FramesShifted,
    HistoryChanged,
    LayerAdded,
    LayerRemoved,
    StoreEvent,
    layer_events,
    selection_events,
    shift_events,
)
from .frame_reducer import ReducerContext, create_layer, default_layer, reduce_frame
from .reducers import HANDLERS_BY_TYPE, reduce
from .state import StoreState
from .store import (
    SNAPSHOT_VERSION,
    CarouselStore,
    EblastStore,
    SingleImageStore,
    Store,
    VideoCoverStore,
)

__all__ = [
    'actions',
    'Action',
    'ActionType',
    'UNTRACKED_ACTIONS',
    'is_tracked',
    # Events
    'FrameDeselected',
    'FramesShifted',
    'HistoryChanged',
    'LayerAdded',
    'LayerRemoved',
    'StoreEvent',
    'layer_events',
    'selection_events',
    'shift_events',
    # Reducers
    'ReducerContext',
    'create_layer',
    'default_layer',
    'reduce_frame',
    'HANDLERS_BY_TYPE',
    'reduce',
    # Stores
    'StoreState',
    'SNAPSHOT_VERSION',
    'Store',
    'CarouselStore',
    'EblastStore',
    'VideoCoverStore',
    'SingleImageStore',
]
