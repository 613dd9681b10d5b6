"""
Slideforge Layer Models

Immutable pydantic models for projects, frames and their layers, matching
the JS objects they are serialized as.

Layer Hierarchy:
    BaseLayer (abstract)
    ├── FillLayer (kind: 'fill', stored as backgroundOverride)
    ├── PatternLayer (kind: 'pattern')
    ├── ImageLayer (kind: 'image')
    ├── ProductImageLayer (kind: 'productImage')
    ├── IconLayer (kind: 'icon')
    └── ProgressIndicatorLayer (kind: 'progress')

A Frame holds at most one layer per kind (see ``LAYER_SLOTS``). SingleImage
projects keep their own free stack of mockup/decorator/text layers.
"""

from typing import Any

from .base import BaseLayer, LayerKind, clamp, new_layer_id, wrap_degrees
from .fill_layer import FillLayer
from .pattern_layer import PatternLayer
from .image_layer import ImageFit, ImageLayer
from .product_image_layer import ProductImageLayer, ProductImagePosition
from .icon_layer import IconLayer
from .progress_indicator import ProgressIndicatorLayer, ProgressType
from .frame import (
    BACKGROUND_KINDS,
    DEFAULT_BACKGROUND_ORDER,
    LAYER_CLASSES,
    LAYER_SLOTS,
    ContentVariant,
    Frame,
    is_background_permutation,
)
from .project import Carousel, Eblast, Project, VideoCover
from .single_image import (
    CANVAS_SIZES,
    Background,
    DecoratorLayer,
    MockupLayer,
    SingleImage,
    StackLayer,
    TextStackLayer,
    Transform,
    new_stack_layer,
)


def get_layer_class(kind: str) -> type[BaseLayer]:
    """
    Get the layer class for a layer kind.

    Args:
        kind: Layer kind ('fill', 'pattern', 'image', 'productImage',
            'icon', 'progress')

    Returns:
        Layer class

    Raises:
        ValueError: If the kind is unknown
    """
    return LAYER_CLASSES[LayerKind(kind)]


def layer_from_dict(kind: str, data: Any) -> BaseLayer:
    """
    Create a layer instance from serialized data.

    The kind comes from the slot the data was stored in; layers carry no
    type field of their own.

    Args:
        kind: Layer kind
        data: Serialized layer data

    Returns:
        Layer instance of the appropriate type
    """
    return get_layer_class(kind).from_api_dict(data)


__all__ = [
    # Base
    'BaseLayer',
    'LayerKind',
    'clamp',
    'new_layer_id',
    'wrap_degrees',
    # Layers
    'FillLayer',
    'PatternLayer',
    'ImageFit',
    'ImageLayer',
    'ProductImageLayer',
    'ProductImagePosition',
    'IconLayer',
    'ProgressIndicatorLayer',
    'ProgressType',
    # Frames
    'BACKGROUND_KINDS',
    'DEFAULT_BACKGROUND_ORDER',
    'LAYER_CLASSES',
    'LAYER_SLOTS',
    'ContentVariant',
    'Frame',
    'is_background_permutation',
    # Projects
    'Project',
    'Carousel',
    'Eblast',
    'VideoCover',
    'SingleImage',
    'Background',
    'CANVAS_SIZES',
    'StackLayer',
    'MockupLayer',
    'DecoratorLayer',
    'TextStackLayer',
    'Transform',
    'new_stack_layer',
    # Registry
    'get_layer_class',
    'layer_from_dict',
]
