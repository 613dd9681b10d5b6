"""
PatternLayer - Tiled SVG pattern overlay referenced by catalog id.

Only the pattern id is stored; the pattern artwork lives in the asset
catalog. Defaults for scale and opacity come from the catalog record at
creation time.
"""

from typing import ClassVar, Optional

from pydantic import Field, field_validator

from .base import BaseLayer, LayerKind, new_layer_id, wrap_degrees


class PatternLayer(BaseLayer):
    """
    Pattern overlay layer.

    Serialization format:
    {
        "_version": 1,
        "id": "pattern-...",
        "patternId": "dots-grid",
        "scale": 1.0,
        "rotation": 0.0,
        "opacity": 0.3,
        "blendMode": "normal",
        "color": null,
        "isStretched": false,
        "stretchSize": null,
        "stretchPosition": null
    }
    """

    KIND: ClassVar[LayerKind] = LayerKind.PATTERN
    ID_PREFIX: ClassVar[str] = 'pattern'

    pattern_id: str = Field(default='', alias='patternId')
    scale: float = Field(default=1.0)
    rotation: float = Field(default=0.0)
    blend_mode: str = Field(default='normal', alias='blendMode')

    # Optional tint
    color: Optional[str] = Field(default=None)

    # Stretched mode
    is_stretched: bool = Field(default=False, alias='isStretched')
    stretch_size: Optional[str] = Field(default=None, alias='stretchSize')
    stretch_position: Optional[str] = Field(default=None, alias='stretchPosition')

    @field_validator('rotation')
    @classmethod
    def _wrap_rotation(cls, v: float) -> float:
        return wrap_degrees(v)

    def stretched_slice(self, index: int, count: int) -> 'PatternLayer':
        """Copy of this pattern as slice ``index`` of a ``count``-frame span, with its own id."""
        return self.model_copy(update={
            'id': new_layer_id(self.ID_PREFIX),
            'is_stretched': True,
            'stretch_size': f"{count * 100}% 100%",
            'stretch_position': f"{-index * 100}% 0%",
        })
