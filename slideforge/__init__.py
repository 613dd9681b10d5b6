"""
Slideforge - State, history and geometry core of a multi-frame design tool.

Projects (carousels, eblasts, video covers, single images) are immutable
pydantic models. Each project type lives in its own store with undo/redo;
z-order, overflow and layout estimates are pure queries on that state.
"""

from .config import Settings, settings
from .exceptions import ExportRequestError, SlideforgeError, SnapshotError
from .history import History, HistoryCounts
from .layers import (
    Carousel,
    ContentVariant,
    Eblast,
    FillLayer,
    Frame,
    IconLayer,
    ImageLayer,
    LayerKind,
    PatternLayer,
    ProductImageLayer,
    ProgressIndicatorLayer,
    SingleImage,
    VideoCover,
)
from .store import (
    CarouselStore,
    EblastStore,
    SingleImageStore,
    Store,
    VideoCoverStore,
    actions,
)
from .selection import EditMode, FrameEditState, SelectionMachine
from .workspace import OperationResult, ProjectRecord, ProjectType, Workspace
from .export import ExportRequest, Exporter

__all__ = [
    # Config
    "Settings",
    "settings",
    # Errors
    "SlideforgeError",
    "SnapshotError",
    "ExportRequestError",
    # History
    "History",
    "HistoryCounts",
    # Models
    "LayerKind",
    "FillLayer",
    "PatternLayer",
    "ImageLayer",
    "ProductImageLayer",
    "IconLayer",
    "ProgressIndicatorLayer",
    "ContentVariant",
    "Frame",
    "Carousel",
    "Eblast",
    "VideoCover",
    "SingleImage",
    # Stores
    "actions",
    "Store",
    "CarouselStore",
    "EblastStore",
    "VideoCoverStore",
    "SingleImageStore",
    # Editing
    "EditMode",
    "FrameEditState",
    "SelectionMachine",
    # Workspace
    "OperationResult",
    "ProjectRecord",
    "ProjectType",
    "Workspace",
    # Export
    "ExportRequest",
    "Exporter",
]
