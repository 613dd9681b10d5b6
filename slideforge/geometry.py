"""
Geometry - Pan/zoom/rotate transforms and cross-frame image overflow.

Image pan is normalized to half the frame size: x = 1 moves the image
center by half a frame width to the right. A frame is therefore 2 units
wide, which is why overflow into a neighbor shifts x by 2.

All functions are pure: they take layers/frames and return new values or
update dicts to dispatch through the store.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Sequence

from .config import settings
from .layers import Frame, ImageLayer, ProductImageLayer
from .layers.image_layer import PAN_MAX, PAN_MIN, SCALE_MAX, SCALE_MIN
from .layers.base import clamp, wrap_degrees

# Overflow starts once the image is panned past this fraction
OVERFLOW_PAN_THRESHOLD = 0.3
# Width of one frame in normalized pan units
OVERFLOW_FRAME_SHIFT = 2.0
# Overflow requires the image to be zoomed past its frame
OVERFLOW_MIN_SCALE = 1.0

ARROW_KEYS: dict[str, tuple[int, int]] = {
    'ArrowLeft': (-1, 0),
    'ArrowRight': (1, 0),
    'ArrowUp': (0, -1),
    'ArrowDown': (0, 1),
}


class OverflowSide(str, Enum):
    """Neighbor receiving an overflow, seen from the owning frame."""
    NEXT = "next"
    PREVIOUS = "previous"


# ---------------------------------------------------------------------------
# Pan / zoom / rotate
# ---------------------------------------------------------------------------

def drag_to_pan(
    start_x: float,
    start_y: float,
    dx: float,
    dy: float,
    frame_width: float,
    frame_height: float,
) -> tuple[float, float]:
    """
    Convert a pointer drag into a normalized pan.

    The pan is computed from the offset at drag start plus the total pointer
    delta, never accumulated per tick, so rounding cannot drift.

    Args:
        start_x, start_y: Pan at drag start
        dx, dy: Total pointer movement in pixels since drag start
        frame_width, frame_height: Rendered frame size in pixels

    Returns:
        (x, y) clamped to [-1, 1]
    """
    x = start_x + dx / (frame_width / 2) if frame_width else start_x
    y = start_y + dy / (frame_height / 2) if frame_height else start_y
    return clamp(x, PAN_MIN, PAN_MAX), clamp(y, PAN_MIN, PAN_MAX)


@dataclass(frozen=True)
class PanDrag:
    """Pan drag anchored at the image position when the pointer went down."""
    start_x: float
    start_y: float
    frame_width: float
    frame_height: float

    @classmethod
    def begin(cls, layer: ImageLayer, frame_width: float, frame_height: float) -> 'PanDrag':
        return cls(layer.x, layer.y, frame_width, frame_height)

    def updates(self, dx: float, dy: float) -> dict[str, float]:
        """Layer updates for a pointer at (dx, dy) from the drag start."""
        x, y = drag_to_pan(self.start_x, self.start_y, dx, dy, self.frame_width, self.frame_height)
        return {'x': x, 'y': y}


@dataclass(frozen=True)
class OffsetDrag:
    """Product image drag; pixel offsets are unbounded."""
    start_x: float
    start_y: float

    @classmethod
    def begin(cls, layer: ProductImageLayer) -> 'OffsetDrag':
        return cls(layer.offset_x, layer.offset_y)

    def updates(self, dx: float, dy: float) -> dict[str, float]:
        return {'offsetX': self.start_x + dx, 'offsetY': self.start_y + dy}


def nudge(layer: ImageLayer, key: str, large: bool = False) -> dict[str, float]:
    """
    Keyboard nudge of an image pan.

    Args:
        layer: Image being nudged
        key: Arrow key name ('ArrowLeft', ...)
        large: True when the modifier key is held

    Returns:
        Layer updates, empty for keys that do not nudge
    """
    direction = ARROW_KEYS.get(key)
    if direction is None:
        return {}
    step = settings.NUDGE_STEP_LARGE if large else settings.NUDGE_STEP
    return {
        'x': clamp(round(layer.x + direction[0] * step, 4), PAN_MIN, PAN_MAX),
        'y': clamp(round(layer.y + direction[1] * step, 4), PAN_MIN, PAN_MAX),
    }


def zoom(layer: ImageLayer, direction: int) -> dict[str, float]:
    """Zoom in (direction > 0) or out by one step."""
    step = settings.ZOOM_STEP if direction > 0 else -settings.ZOOM_STEP
    return {'scale': clamp(round(layer.scale + step, 4), SCALE_MIN, SCALE_MAX)}


def rotate(layer: Any, direction: int = 1) -> dict[str, float]:
    """Rotate an image, pattern or fill by one step, wrapping at 360."""
    step = settings.ROTATION_STEP if direction > 0 else -settings.ROTATION_STEP
    return {'rotation': wrap_degrees(layer.rotation + step)}


def reset_transform() -> dict[str, float]:
    """Updates that recenter an image at its natural size."""
    return {'x': 0.0, 'y': 0.0, 'scale': 1.0}


# ---------------------------------------------------------------------------
# Cross-frame overflow
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class OverflowProjection:
    """
    Read-only view of a neighbor's image as seen from the receiving frame.

    ``x`` lies outside [-1, 1] on purpose: it places the image in the
    receiver's local coordinates.
    """
    source_frame_id: int
    side: OverflowSide
    layer: ImageLayer
    x: float

    @property
    def y(self) -> float:
        return self.layer.y

    @property
    def scale(self) -> float:
        return self.layer.scale


def overflow_side(layer: Optional[ImageLayer]) -> Optional[OverflowSide]:
    """Get the neighbor an image extends into, if any."""
    if layer is None or layer.scale <= OVERFLOW_MIN_SCALE:
        return None
    if layer.x > OVERFLOW_PAN_THRESHOLD:
        return OverflowSide.NEXT
    if layer.x < -OVERFLOW_PAN_THRESHOLD:
        return OverflowSide.PREVIOUS
    return None


def project_overflow(owner: Frame, receiver: Frame, side: OverflowSide) -> Optional[OverflowProjection]:
    """
    Project the owner's image into an adjacent receiving frame.

    Args:
        owner: Frame holding the image
        receiver: The adjacent frame
        side: Where ``receiver`` sits relative to ``owner``

    Returns:
        The projection, or None if the image does not extend toward
        ``side`` or the receiver has an image of its own
    """
    if receiver.image_layer is not None:
        return None
    layer = owner.image_layer
    side = OverflowSide(side)
    if overflow_side(layer) != side:
        return None
    shift = -OVERFLOW_FRAME_SHIFT if side == OverflowSide.NEXT else OVERFLOW_FRAME_SHIFT
    return OverflowProjection(
        source_frame_id=owner.id,
        side=side,
        layer=layer,
        x=layer.x + shift,
    )


def overflow_projections(frames: Sequence[Frame]) -> dict[int, list[OverflowProjection]]:
    """
    All overflow projections across a row of frames.

    Returns:
        Receiving frame id -> projections (from the previous frame first)
    """
    result: dict[int, list[OverflowProjection]] = {}
    for index, frame in enumerate(frames):
        projections = []
        if index > 0:
            projection = project_overflow(frames[index - 1], frame, OverflowSide.NEXT)
            if projection is not None:
                projections.append(projection)
        if index + 1 < len(frames):
            projection = project_overflow(frames[index + 1], frame, OverflowSide.PREVIOUS)
            if projection is not None:
                projections.append(projection)
        if projections:
            result[frame.id] = projections
    return result
