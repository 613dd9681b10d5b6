"""
Store - Entity store for one project type with undo/redo and events.

    store = CarouselStore([Carousel.blank(1)])
    store.subscribe(print)
    store.dispatch(actions.add_image(1, 1, 'photo.jpg'))
    store.undo()

Every project type has its own store and therefore its own history.
Selection actions update the present without creating history entries.
"""

from functools import partial
from typing import Any, Callable, ClassVar, Iterable, Optional
import logging

from pydantic import ValidationError

from ..config import Settings, settings as default_settings
from ..exceptions import SnapshotError
from ..history import History, HistoryCounts
from ..layers import Carousel, Eblast, Frame, SingleImage, VideoCover
from .actions import Action, is_tracked, undo as undo_action, redo as redo_action, clear_history
from .events import HistoryChanged, StoreEvent, layer_events, selection_events, shift_events
from .frame_reducer import ReducerContext
from .reducers import HANDLERS_BY_TYPE, reduce
from .state import StoreState

logger = logging.getLogger(__name__)

SNAPSHOT_VERSION = 1

Listener = Callable[[StoreEvent], None]


class Store:
    """
    Projects of a single type behind a history container.

    Args:
        projects: Initial projects
        context: Catalogs and settings for the reducers
        settings: Settings (history limit); defaults to the module settings
    """

    PROJECT_CLASS: ClassVar[type] = Carousel

    def __init__(
        self,
        projects: Iterable[Any] = (),
        context: Optional[ReducerContext] = None,
        settings: Optional[Settings] = None,
    ):
        self.settings = settings or default_settings
        self.context = context or ReducerContext(settings=self.settings)
        reducer = partial(reduce, context=self.context, handlers=HANDLERS_BY_TYPE[self.PROJECT_CLASS])
        self.history: History[StoreState] = History(
            reducer,
            StoreState(projects=tuple(projects)),
            limit=self.settings.HISTORY_LIMIT,
            filter=is_tracked,
        )
        self._listeners: list[Listener] = []

    # ------------------------------------------------------------------
    # State access
    # ------------------------------------------------------------------

    @property
    def state(self) -> StoreState:
        return self.history.present

    @property
    def projects(self) -> tuple:
        return self.history.present.projects

    def project(self, project_id: int) -> Optional[Any]:
        return self.state.find_project(project_id)

    def frame(self, project_id: int, frame_id: int) -> Optional[Frame]:
        """Get a frame of a frame-based project (always None for single images)."""
        project = self.project(project_id)
        if project is None:
            return None
        for frame in project.frame_list():
            if frame.id == frame_id:
                return frame
        return None

    @property
    def can_undo(self) -> bool:
        return self.history.can_undo

    @property
    def can_redo(self) -> bool:
        return self.history.can_redo

    def counts(self) -> HistoryCounts:
        return self.history.counts()

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def dispatch(self, action: Action) -> StoreState:
        """Apply an action and publish the resulting events."""
        before = self.history.present
        counts = self.history.counts()
        self.history.dispatch(action)
        self._publish(before, counts)
        return self.history.present

    def undo(self) -> StoreState:
        return self.dispatch(undo_action())

    def redo(self) -> StoreState:
        return self.dispatch(redo_action())

    def clear_history(self) -> StoreState:
        return self.dispatch(clear_history())

    # ------------------------------------------------------------------
    # Drag sessions
    # ------------------------------------------------------------------

    @property
    def is_dragging(self) -> bool:
        return self.history.is_coalescing

    def begin_drag(self) -> None:
        """
        Start a drag; every change until ``end_drag`` becomes one undo step.
        """
        self.history.begin_coalesce()

    def end_drag(self) -> bool:
        """
        Finish the drag.

        Returns:
            True if the drag changed anything and was recorded
        """
        counts = self.history.counts()
        recorded = self.history.commit_coalesce()
        if recorded:
            self._publish(self.history.present, counts)
        return recorded

    def cancel_drag(self) -> StoreState:
        """
        Abort the drag and restore the state from before it started.

        Layer events of the abort are flagged as restored.
        """
        before = self.history.present
        counts = self.history.counts()
        self.history.abort_coalesce()
        self._publish(before, counts, restored=True)
        return self.history.present

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        Register an event listener.

        Returns:
            Function removing the listener again
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _emit(self, event: StoreEvent) -> None:
        for listener in list(self._listeners):
            listener(event)

    def _publish(
        self,
        before: StoreState,
        counts: HistoryCounts,
        layers: bool = True,
        restored: bool = False,
    ) -> None:
        after = self.history.present
        events: list[StoreEvent] = []
        if after is not before:
            if layers:
                # FramesShifted precedes the layer edges of the same change
                events.extend(shift_events(before, after))
                events.extend(layer_events(before, after, restored))
            events.extend(selection_events(before, after))
        new_counts = self.history.counts()
        if new_counts != counts:
            events.append(HistoryChanged(
                can_undo=self.history.can_undo,
                can_redo=self.history.can_redo,
                undo_count=new_counts.undo_count,
                redo_count=new_counts.redo_count,
            ))
        for event in events:
            self._emit(event)

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def serialize(self) -> dict[str, Any]:
        """
        Snapshot the projects (not the selection or history).

        Returns:
            JSON-compatible dict
        """
        return {
            '_version': SNAPSHOT_VERSION,
            'projectType': self.PROJECT_CLASS.PROJECT_TYPE,
            'projects': [project.to_api_dict() for project in self.projects],
        }

    def hydrate(self, snapshot: dict[str, Any]) -> None:
        """
        Replace all projects from a snapshot and forget the history.

        Raises:
            SnapshotError: If the snapshot is not a valid snapshot of this
                project type
        """
        if not isinstance(snapshot, dict):
            raise SnapshotError(f"Snapshot must be a dict, got {type(snapshot).__name__}")
        project_type = snapshot.get('projectType', self.PROJECT_CLASS.PROJECT_TYPE)
        if project_type != self.PROJECT_CLASS.PROJECT_TYPE:
            raise SnapshotError(
                f"Snapshot holds {project_type} projects, expected {self.PROJECT_CLASS.PROJECT_TYPE}"
            )
        items = snapshot.get('projects')
        if not isinstance(items, list):
            raise SnapshotError("Snapshot has no project list")

        try:
            projects = tuple(self.PROJECT_CLASS.from_api_dict(item) for item in items)
        except (ValidationError, TypeError, ValueError) as e:
            raise SnapshotError(f"Invalid {project_type} snapshot: {e}") from e

        before = self.history.present
        counts = self.history.counts()
        self.history.reset(StoreState(projects=projects))
        logger.info(f"Hydrated {len(projects)} {project_type} project(s)")
        self._publish(before, counts, layers=False)


class CarouselStore(Store):
    PROJECT_CLASS: ClassVar[type] = Carousel


class EblastStore(Store):
    PROJECT_CLASS: ClassVar[type] = Eblast


class VideoCoverStore(Store):
    PROJECT_CLASS: ClassVar[type] = VideoCover


class SingleImageStore(Store):
    PROJECT_CLASS: ClassVar[type] = SingleImage
