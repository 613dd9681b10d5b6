"""
ProductImageLayer - Product shot placed above or below the text block.

Vertical placement comes from the adaptive layout estimator; the user can
still drag it by an unbounded pixel offset.
"""

from enum import Enum
from typing import ClassVar

from pydantic import Field, field_validator

from .base import BaseLayer, LayerKind, clamp

SCALE_MIN = 0.5
SCALE_MAX = 2.0
BORDER_RADIUS_MIN = 0.0
BORDER_RADIUS_MAX = 48.0


class ProductImagePosition(str, Enum):
    """Where the product image sits relative to the text block."""
    TOP = "top"
    BOTTOM = "bottom"


class ProductImageLayer(BaseLayer):
    """
    Product image layer.

    Serialization format:
    {
        "_version": 1,
        "id": "product-...",
        "src": "...",
        "position": "top",
        "scale": 1.0,
        "borderRadius": 8.0,
        "offsetX": 0.0,
        "offsetY": 0.0
    }
    """

    KIND: ClassVar[LayerKind] = LayerKind.PRODUCT_IMAGE
    ID_PREFIX: ClassVar[str] = 'product'

    src: str = Field(default='')
    position: ProductImagePosition = Field(default=ProductImagePosition.TOP)
    scale: float = Field(default=1.0)
    border_radius: float = Field(default=8.0, alias='borderRadius')

    # Drag-accumulated pixel offset (unbounded)
    offset_x: float = Field(default=0.0, alias='offsetX')
    offset_y: float = Field(default=0.0, alias='offsetY')

    @field_validator('scale')
    @classmethod
    def _clamp_scale(cls, v: float) -> float:
        return clamp(v, SCALE_MIN, SCALE_MAX)

    @field_validator('border_radius')
    @classmethod
    def _clamp_border_radius(cls, v: float) -> float:
        return clamp(v, BORDER_RADIUS_MIN, BORDER_RADIUS_MAX)
