"""
Frame reducer - Actions that touch a single frame.

Each handler takes ``(frame, action, context)`` and returns the new frame,
or the very same frame when the action changes nothing. Invalid requests
(unknown pattern, out of range variant, ...) are no-ops, never errors.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Optional
import logging

from ..catalog import AssetCatalog, default_icons, default_patterns
from ..config import Settings, settings as default_settings
from ..layers import (
    BaseLayer,
    FillLayer,
    Frame,
    IconLayer,
    ImageLayer,
    LayerKind,
    PatternLayer,
    ProductImageLayer,
    ProgressIndicatorLayer,
    get_layer_class,
    layer_from_dict,
)
from ..layout import default_position
from ..zorder import reorder_background
from .actions import Action, ActionType

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReducerContext:
    """Collaborators the reducers need besides state and action."""
    patterns: AssetCatalog = field(default_factory=default_patterns)
    icons: AssetCatalog = field(default_factory=default_icons)
    settings: Settings = field(default_factory=lambda: default_settings)


# ---------------------------------------------------------------------------
# Layer factories
# ---------------------------------------------------------------------------

def default_layer(kind: LayerKind, frame: Frame, context: ReducerContext) -> BaseLayer:
    """Layer with default values, used when an update targets an empty slot."""
    kind = LayerKind(kind)
    if kind == LayerKind.FILL:
        return FillLayer.solid(context.settings.DEFAULT_FILL_COLOR)
    if kind == LayerKind.PRODUCT_IMAGE:
        return ProductImageLayer.create(
            position=default_position(frame.current_layout, frame.layout_variant)
        )
    return get_layer_class(kind).create()


def create_layer(
    kind: LayerKind,
    properties: dict[str, Any],
    frame: Frame,
    context: ReducerContext,
) -> Optional[BaseLayer]:
    """
    Build a new layer for ``kind``.

    Patterns come from the pattern catalog; icons from the icon catalog
    unless a path is given. Returns None for unknown asset ids.
    """
    kind = LayerKind(kind)
    properties = dict(properties)

    if kind == LayerKind.PATTERN:
        pattern_id = properties.pop('patternId', properties.pop('pattern_id', ''))
        layer = context.patterns.create_pattern_layer(pattern_id)
    elif kind == LayerKind.ICON:
        icon_id = properties.pop('iconId', properties.pop('icon_id', ''))
        if properties.get('path'):
            layer = IconLayer.create(icon_id=icon_id)
        else:
            layer = context.icons.create_icon_layer(icon_id)
    elif kind == LayerKind.PRODUCT_IMAGE:
        layer = default_layer(kind, frame, context)
    elif kind == LayerKind.IMAGE:
        layer = ImageLayer.create()
    elif kind == LayerKind.PROGRESS:
        layer = ProgressIndicatorLayer.create()
    else:
        layer = FillLayer.solid(context.settings.DEFAULT_FILL_COLOR)

    if layer is None:
        return None
    return layer.updated(properties) if properties else layer


# ---------------------------------------------------------------------------
# Handlers
# ---------------------------------------------------------------------------

def _set_variant(frame: Frame, action: Action, context: ReducerContext) -> Frame:
    index = action.get('variant_index', 0)
    if not 0 <= index < len(frame.variants):
        logger.debug(f"Variant index {index} out of range for frame {frame.id}")
        return frame
    return frame.with_updates(current_variant=index)


def _set_layout(frame: Frame, action: Action, context: ReducerContext) -> Frame:
    return frame.with_updates(current_layout=action.get('layout_index', 0), layout_variant=0)


def _shuffle_layout_variant(frame: Frame, action: Action, context: ReducerContext) -> Frame:
    return frame.with_updates(layout_variant=(frame.layout_variant + 1) % Frame.LAYOUT_VARIANTS)


def _update_text(frame: Frame, action: Action, context: ReducerContext) -> Frame:
    content = frame.content.with_text(action['field'], action.get('value', ''))
    return frame.with_content(content)


def _update_formatting(frame: Frame, action: Action, context: ReducerContext) -> Frame:
    content = frame.content.with_formatting(action['field'], action['key'], action.get('value'))
    return frame.with_content(content)


def _set_frame_background(frame: Frame, action: Action, context: ReducerContext) -> Frame:
    background = action.get('background')
    if background is None:
        return frame.with_layer(LayerKind.FILL, None)

    values = FillLayer.migrate(background if isinstance(background, str) else dict(background))
    current = frame.background_override
    if current is None:
        return frame.with_layer(LayerKind.FILL, FillLayer.create(**values))

    # Keep opacity/rotation of the current fill unless given
    values.pop('id', None)
    values.pop('_version', None)
    updates = {
        'color': None,
        'gradient': None,
        'isStretched': False,
        'size': None,
        'position': None,
        **values,
    }
    return frame.with_layer(LayerKind.FILL, current.updated(updates))


def _add_layer(frame: Frame, action: Action, context: ReducerContext) -> Frame:
    kind = LayerKind(action['kind'])
    layer = create_layer(kind, action.get('properties', {}), frame, context)
    if layer is None:
        return frame
    return frame.with_layer(kind, layer)


def _update_layer(frame: Frame, action: Action, context: ReducerContext) -> Frame:
    kind = LayerKind(action['kind'])
    current = frame.layer(kind)
    if current is None:
        current = default_layer(kind, frame, context)
    return frame.with_layer(kind, current.updated(action.get('updates', {})))


def _remove_layer(frame: Frame, action: Action, context: ReducerContext) -> Frame:
    return frame.with_layer(LayerKind(action['kind']), None)


def _restore_layer(frame: Frame, action: Action, context: ReducerContext) -> Frame:
    kind = LayerKind(action['kind'])
    snapshot = action.get('snapshot')
    if snapshot is None:
        return frame.with_layer(kind, None)
    restored = layer_from_dict(kind, snapshot)
    if restored == frame.layer(kind):
        return frame
    return frame.with_layer(kind, restored)


def _reorder_background_layers(frame: Frame, action: Action, context: ReducerContext) -> Frame:
    order = action.get('order')
    if order is None:
        order = reorder_background(frame.background_layer_order, action.get('active'), action.get('over'))
    return frame.with_background_order(tuple(order))


FRAME_HANDLERS: dict[str, Callable[[Frame, Action, ReducerContext], Frame]] = {
    ActionType.SET_VARIANT: _set_variant,
    ActionType.SET_LAYOUT: _set_layout,
    ActionType.SHUFFLE_LAYOUT_VARIANT: _shuffle_layout_variant,
    ActionType.UPDATE_TEXT: _update_text,
    ActionType.UPDATE_FORMATTING: _update_formatting,
    ActionType.SET_FRAME_BACKGROUND: _set_frame_background,
    ActionType.ADD_LAYER: _add_layer,
    ActionType.UPDATE_LAYER: _update_layer,
    ActionType.REMOVE_LAYER: _remove_layer,
    ActionType.RESTORE_LAYER: _restore_layer,
    ActionType.REORDER_BACKGROUND_LAYERS: _reorder_background_layers,
}


def reduce_frame(frame: Frame, action: Action, context: ReducerContext) -> Frame:
    """Apply a frame-level action; unknown actions return ``frame``."""
    handler = FRAME_HANDLERS.get(action.type)
    if handler is None:
        return frame
    return handler(frame, action, context)
