"""
FillLayer - Solid color or gradient frame background.

A fill is stored as the frame's ``backgroundOverride``. In stretched mode a
single gradient spans several adjacent frames: every frame carries the same
gradient with an absolute size (``N * 100% 100%``) and its own horizontal
position inside it.
"""

from typing import Any, ClassVar, Optional

from pydantic import Field, field_validator

from .base import BaseLayer, LayerKind, wrap_degrees


class FillLayer(BaseLayer):
    """
    Frame background fill.

    Serialization format matches the JS backgroundOverride object:
    {
        "_version": 1,
        "id": "fill-...",
        "color": "#6466e9",
        "gradient": null,
        "opacity": 1.0,
        "rotation": 0.0,
        "isStretched": false,
        "size": null,
        "position": null
    }
    """

    KIND: ClassVar[LayerKind] = LayerKind.FILL
    ID_PREFIX: ClassVar[str] = 'fill'

    color: Optional[str] = Field(default=None)
    gradient: Optional[str] = Field(default=None)
    rotation: float = Field(default=0.0)

    # Stretched mode (CSS background-size / background-position)
    is_stretched: bool = Field(default=False, alias='isStretched')
    stretch_size: Optional[str] = Field(default=None, alias='size')
    stretch_position: Optional[str] = Field(default=None, alias='position')

    @field_validator('rotation')
    @classmethod
    def _wrap_rotation(cls, v: float) -> float:
        return wrap_degrees(v)

    @property
    def is_gradient(self) -> bool:
        return self.gradient is not None

    @classmethod
    def solid(cls, color: str) -> 'FillLayer':
        """Create a plain color fill."""
        return cls.create(color=color)

    @classmethod
    def stretched(cls, gradient: str, index: int, count: int) -> 'FillLayer':
        """
        Create the slice of a gradient stretched across ``count`` frames.

        Args:
            gradient: CSS gradient spanning the whole range
            index: Position of this frame within the range (0-based)
            count: Number of frames in the range
        """
        position = (index / (count - 1)) * 100 if count > 1 else 0
        return cls.create(
            gradient=gradient,
            is_stretched=True,
            stretch_size=f"{count * 100}% 100%",
            stretch_position=f"{position:g}% 0%",
        )

    @classmethod
    def migrate(cls, data: Any) -> dict[str, Any]:
        """Accept legacy plain-string overrides ("#fff" or a CSS gradient)."""
        if isinstance(data, str):
            key = 'gradient' if 'gradient(' in data else 'color'
            data = {key: data}
        return super().migrate(data)
