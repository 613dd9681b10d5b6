"""ProgressIndicatorLayer - Slide position marker (dots, bar, ...)."""

from enum import Enum
from typing import ClassVar

from pydantic import Field

from .base import BaseLayer, LayerKind


class ProgressType(str, Enum):
    """Progress indicator styles."""
    DOTS = "dots"
    NUMBERED_DOTS = "numberedDots"
    DASHES = "dashes"
    ARROWS = "arrows"
    BAR = "bar"
    BUILDINGS = "buildings"
    MAP_PINS = "mapPins"
    FORECAST = "forecast"
    BAR_CHART = "barChart"


class ProgressIndicatorLayer(BaseLayer):
    """
    Progress indicator layer.

    Serialization format:
    {
        "_version": 1,
        "id": "progress-...",
        "type": "dots",
        "color": "#ffffff",
        "isHidden": false
    }
    """

    KIND: ClassVar[LayerKind] = LayerKind.PROGRESS
    ID_PREFIX: ClassVar[str] = 'progress'

    indicator_type: ProgressType = Field(default=ProgressType.DOTS, alias='type')
    color: str = Field(default='#ffffff')
    is_hidden: bool = Field(default=False, alias='isHidden')
