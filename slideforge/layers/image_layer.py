"""
ImageLayer - Photo layer with normalized pan, zoom and rotation.

Pan is resolution independent: ``x`` and ``y`` are offsets in units of half
the frame dimension, so x=1 moves the image center to the right edge.
"""

from enum import Enum
from typing import ClassVar, Optional

from pydantic import Field, field_validator

from .base import BaseLayer, LayerKind, clamp, wrap_degrees

PAN_MIN = -1.0
PAN_MAX = 1.0
SCALE_MIN = 0.5
SCALE_MAX = 5.0


class ImageFit(str, Enum):
    """CSS object-fit modes supported for photos."""
    COVER = "cover"
    CONTAIN = "contain"
    FILL = "fill"
    NONE = "none"
    SCALE_DOWN = "scale-down"


class ImageLayer(BaseLayer):
    """
    Photo layer.

    Serialization format:
    {
        "_version": 1,
        "id": "img-...",
        "src": "https://...",
        "x": 0.0,
        "y": 0.0,
        "scale": 1.0,
        "opacity": 1.0,
        "rotation": 0.0,
        "zIndex": 0,
        "fit": "cover",
        "linkedGroupId": null
    }
    """

    KIND: ClassVar[LayerKind] = LayerKind.IMAGE
    ID_PREFIX: ClassVar[str] = 'img'

    src: str = Field(default='')
    x: float = Field(default=0.0)
    y: float = Field(default=0.0)
    scale: float = Field(default=1.0)
    rotation: float = Field(default=0.0)
    fit: ImageFit = Field(default=ImageFit.COVER)

    # Images sharing a group id are edited together
    linked_group_id: Optional[str] = Field(default=None, alias='linkedGroupId')

    @field_validator('x', 'y')
    @classmethod
    def _clamp_pan(cls, v: float) -> float:
        return clamp(v, PAN_MIN, PAN_MAX)

    @field_validator('scale')
    @classmethod
    def _clamp_scale(cls, v: float) -> float:
        return clamp(v, SCALE_MIN, SCALE_MAX)

    @field_validator('rotation')
    @classmethod
    def _wrap_rotation(cls, v: float) -> float:
        return wrap_degrees(v)
