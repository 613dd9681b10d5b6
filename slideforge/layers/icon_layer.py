"""IconLayer - Brand icon drawn from an SVG path."""

from typing import ClassVar, Optional

from pydantic import Field

from .base import BaseLayer, LayerKind


class IconLayer(BaseLayer):
    """
    Icon layer.

    Serialization format:
    {
        "_version": 1,
        "id": "icon-...",
        "iconId": "users",
        "path": "M17 21V19...",
        "name": "Users",
        "scale": 1.0,
        "color": "#ffffff",
        "borderColor": null,
        "backgroundColor": null,
        "isHidden": false
    }
    """

    KIND: ClassVar[LayerKind] = LayerKind.ICON
    ID_PREFIX: ClassVar[str] = 'icon'

    icon_id: str = Field(default='', alias='iconId')
    path: str = Field(default='')
    name: str = Field(default='')
    scale: float = Field(default=1.0)
    color: str = Field(default='#ffffff')
    border_color: Optional[str] = Field(default=None, alias='borderColor')
    background_color: Optional[str] = Field(default=None, alias='backgroundColor')
    is_hidden: bool = Field(default=False, alias='isHidden')
