"""
Export requests - Options handed to an external exporter.

Slideforge does not render. It validates what the user picked (frames,
format, resolution, background) and passes the request plus the selected
frames to an ``Exporter`` implementation.
"""

from enum import Enum
import re
from typing import Any, Optional, Protocol, Sequence, runtime_checkable

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from .exceptions import ExportRequestError
from .layers import Frame

HEX_COLOR = re.compile(r'^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6})$')


class ExportFormat(str, Enum):
    PNG = "png"
    JPG = "jpg"
    WEBP = "webp"
    SVG = "svg"
    PDF = "pdf"
    PPTX = "pptx"

    @property
    def supports_transparency(self) -> bool:
        return self in (ExportFormat.PNG, ExportFormat.WEBP, ExportFormat.SVG)


class ExportResolution(str, Enum):
    X1 = "1x"
    X2 = "2x"
    X3 = "3x"

    @property
    def scale(self) -> int:
        return int(self.value[0])


class ExportBackground(str, Enum):
    ORIGINAL = "original"
    TRANSPARENT = "transparent"
    CUSTOM_COLOR = "custom-color"


class ExportRequest(BaseModel):
    """
    Validated export request.

    Serialization format:
    {
        "projectId": 1,
        "frameIds": [1, 2, 3],
        "format": "png",
        "resolution": "2x",
        "background": "custom-color",
        "customColor": "#000000"
    }
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True, extra='forbid')

    project_id: Optional[int] = Field(default=None, alias='projectId')
    frame_ids: tuple[int, ...] = Field(alias='frameIds')
    format: ExportFormat = Field(default=ExportFormat.PNG)
    resolution: ExportResolution = Field(default=ExportResolution.X2)
    background: ExportBackground = Field(default=ExportBackground.ORIGINAL)
    custom_color: Optional[str] = Field(default=None, alias='customColor')

    @field_validator('frame_ids')
    @classmethod
    def _unique_frames(cls, v: tuple[int, ...]) -> tuple[int, ...]:
        if not v:
            raise ValueError("at least one frame must be selected")
        return tuple(dict.fromkeys(v))

    @model_validator(mode='after')
    def _check_background(self) -> 'ExportRequest':
        if self.background == ExportBackground.CUSTOM_COLOR:
            if not self.custom_color or not HEX_COLOR.match(self.custom_color):
                raise ValueError("custom-color background needs a hex customColor")
        if self.background == ExportBackground.TRANSPARENT and not self.format.supports_transparency:
            raise ValueError(f"{self.format.value} does not support transparent backgrounds")
        return self

    @classmethod
    def create(cls, **options: Any) -> 'ExportRequest':
        """
        Build a request from keyword options (camelCase or snake_case).

        Raises:
            ExportRequestError: If any option is invalid
        """
        try:
            return cls.model_validate(options)
        except ValidationError as e:
            raise ExportRequestError(f"Invalid export request: {e}") from e

    @property
    def scale(self) -> int:
        return self.resolution.scale

    @property
    def fill_color(self) -> Optional[str]:
        """Solid color to paint under the frames, None to keep the original."""
        if self.background == ExportBackground.CUSTOM_COLOR:
            return self.custom_color
        return None

    def to_api_dict(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, mode='json')


@runtime_checkable
class Exporter(Protocol):
    """Renders frames for an export request."""

    def export(self, request: ExportRequest, frames: Sequence[Frame]) -> Any:
        ...


def select_frames(project: Any, request: ExportRequest) -> list[Frame]:
    """
    Frames of ``project`` named by the request, in request order.

    Raises:
        ExportRequestError: If a frame id does not exist in the project
    """
    frames = {frame.id: frame for frame in project.frame_list()}
    missing = [i for i in request.frame_ids if i not in frames]
    if missing:
        raise ExportRequestError(f"Unknown frame id(s) for project {project.id}: {missing}")
    return [frames[i] for i in request.frame_ids]


def run_export(exporter: Exporter, project: Any, request: ExportRequest) -> Any:
    """Hand the selected frames of ``project`` to ``exporter``."""
    return exporter.export(request, select_frames(project, request))
