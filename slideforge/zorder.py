"""
Z-Order - Stacking of frame content.

Background layers (fill, pattern, image) stack in the frame's
``backgroundLayerOrder``: position i (0-based) resolves to z-index i + 1.
Foreground content sits in fixed bands above them. An image being edited or
dragged is lifted above everything so its handles stay reachable; that lift
is a render-time value and never stored.
"""

from typing import Hashable, Optional, Sequence, TypeVar
import logging

from .layers import BACKGROUND_KINDS, DEFAULT_BACKGROUND_ORDER, Frame, LayerKind

logger = logging.getLogger(__name__)

T = TypeVar('T', bound=Hashable)

# Foreground bands
TEXT_Z = 10
PROGRESS_Z = 10
PRODUCT_IMAGE_Z = 20
REMOVE_CONTROL_Z = 20
ICON_Z = 30
EDITING_Z = 50

FOREGROUND_Z: dict[LayerKind, int] = {
    LayerKind.PRODUCT_IMAGE: PRODUCT_IMAGE_Z,
    LayerKind.ICON: ICON_Z,
    LayerKind.PROGRESS: PROGRESS_Z,
}


def resolve_z_index(
    kind: LayerKind,
    order: Sequence[LayerKind] = DEFAULT_BACKGROUND_ORDER,
    editing: bool = False,
) -> int:
    """
    Resolve the render z-index of a layer kind.

    Args:
        kind: Layer kind to place
        order: The frame's background stacking order (bottom to top)
        editing: True while the layer is in an edit or drag session

    Returns:
        1..3 for background kinds, the fixed band for foreground kinds,
        ``EDITING_Z`` for an image being edited
    """
    kind = LayerKind(kind)
    if editing and kind == LayerKind.IMAGE:
        return EDITING_Z
    if kind in FOREGROUND_Z:
        return FOREGROUND_Z[kind]
    return list(order).index(kind) + 1


def frame_z_indices(frame: Frame, editing: Optional[LayerKind] = None) -> dict[LayerKind, int]:
    """Resolved z-index of every layer present in ``frame``."""
    return {
        kind: resolve_z_index(kind, frame.background_layer_order, editing == kind)
        for kind in LayerKind
        if frame.has_layer(kind)
    }


def move_element(items: Sequence[T], active: T, over: T) -> tuple[T, ...]:
    """
    Move ``active`` to the position ``over`` occupied.

    The active item is removed and reinserted at over's former index, so
    dragging down lands after ``over`` and dragging up lands before it.
    Used for background kinds as well as frame, section and row ids.

    Returns:
        The reordered items, or the input unchanged if either item is absent
        or they are the same
    """
    items = tuple(items)
    if active == over or active not in items or over not in items:
        return items
    old_index = items.index(active)
    new_index = items.index(over)
    return array_move(items, old_index, new_index)


def array_move(items: Sequence[T], old_index: int, new_index: int) -> tuple[T, ...]:
    """Move the item at ``old_index`` to ``new_index``."""
    items = list(items)
    if not (0 <= old_index < len(items)) or not (0 <= new_index < len(items)):
        return tuple(items)
    item = items.pop(old_index)
    items.insert(new_index, item)
    return tuple(items)


def reorder_background(
    order: Sequence[LayerKind],
    active: LayerKind,
    over: LayerKind,
) -> tuple[LayerKind, ...]:
    """
    Reorder the background stack by drag and drop.

    Unknown kinds leave the order untouched.
    """
    try:
        active, over = LayerKind(active), LayerKind(over)
    except ValueError:
        logger.debug(f"Ignoring background reorder of unknown kind: {active!r} over {over!r}")
        return tuple(order)
    if active not in BACKGROUND_KINDS or over not in BACKGROUND_KINDS:
        logger.debug(f"Ignoring background reorder of foreground kind: {active} over {over}")
        return tuple(order)
    return move_element(tuple(LayerKind(k) for k in order), active, over)
