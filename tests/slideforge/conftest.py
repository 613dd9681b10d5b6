"""Test fixtures for slideforge.

All fixtures are plain in-memory objects; no server or browser is needed.
"""

import pytest

from slideforge.config import Settings
from slideforge.layers import Carousel, FillLayer, Frame
from slideforge.store import CarouselStore, actions


def make_carousel(project_id: int = 1, count: int = 3) -> Carousel:
    """Carousel with ``count`` frames styled 'style-1', 'style-2', ..."""
    frames = tuple(Frame(id=i, style=f"style-{i}") for i in range(1, count + 1))
    return Carousel(id=project_id, name=f"Row {project_id}", frames=frames)


class EventRecorder:
    """Collects store events in order."""

    def __init__(self):
        self.events = []

    def __call__(self, event):
        self.events.append(event)

    def of_type(self, event_type):
        return [e for e in self.events if isinstance(e, event_type)]

    def clear(self):
        self.events.clear()


@pytest.fixture
def settings() -> Settings:
    """Default settings, independent of the environment."""
    return Settings()


@pytest.fixture
def carousel() -> Carousel:
    return make_carousel()


@pytest.fixture
def store(carousel, settings) -> CarouselStore:
    """Carousel store with one 3-frame row."""
    return CarouselStore([carousel], settings=settings)


@pytest.fixture
def selected_store(store) -> CarouselStore:
    """Store with frame 1 of row 1 selected."""
    store.dispatch(actions.select_frame(1, 1))
    return store


@pytest.fixture
def filled_store(settings) -> CarouselStore:
    """Store whose frame 1 has a red fill, with that frame selected."""
    row = make_carousel()
    frame = row.frames[0].with_layer('fill', FillLayer.solid('#ff0000'))
    store = CarouselStore([row.replace_frame(frame)], settings=settings)
    store.dispatch(actions.select_frame(1, 1))
    return store


@pytest.fixture
def recorder(store) -> EventRecorder:
    """Event recorder subscribed to ``store``."""
    recorder = EventRecorder()
    store.subscribe(recorder)
    return recorder


@pytest.fixture
def make_row():
    """Factory for carousels: ``make_row(project_id, count)``."""
    return make_carousel
