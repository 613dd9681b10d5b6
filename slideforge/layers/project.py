"""
Project models - Carousel, Eblast and VideoCover.

All three own frames: a carousel a row of frames, an eblast a column of
sections, a video cover exactly one frame. ``frame_list()`` / ``with_frames()``
give the stores one way to reach them regardless of the field name.
"""

from abc import ABC, abstractmethod
from typing import Any, ClassVar, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .fill_layer import FillLayer
from .frame import ContentVariant, Frame, default_variants


class Project(BaseModel, ABC):
    """Common project fields and frame access."""

    model_config = ConfigDict(
        populate_by_name=True,
        frozen=True,
        extra='ignore',
    )

    VERSION: ClassVar[int] = 1
    PROJECT_TYPE: ClassVar[str] = 'project'

    version: int = Field(default=1, alias='_version')
    id: int
    name: str = Field(default='Untitled')
    subtitle: str = Field(default='')

    @classmethod
    @abstractmethod
    def blank(cls, project_id: int, name: Optional[str] = None) -> 'Project':
        """Create a new project with default content."""
        pass

    @classmethod
    @abstractmethod
    def new_frame(cls, adjacent: Optional[Frame] = None, fill_color: Optional[str] = None) -> Frame:
        """Create a frame to insert next to ``adjacent``."""
        pass

    @abstractmethod
    def frame_list(self) -> tuple[Frame, ...]:
        pass

    @abstractmethod
    def with_frames(self, frames: tuple[Frame, ...]) -> 'Project':
        """Replace the frames, renumbering them in display order."""
        pass

    def find_frame(self, frame_id: int) -> Optional[Frame]:
        """Get a frame by id."""
        for frame in self.frame_list():
            if frame.id == frame_id:
                return frame
        return None

    def frame_index(self, frame_id: int) -> int:
        """Get the position of a frame, -1 if not found."""
        for index, frame in enumerate(self.frame_list()):
            if frame.id == frame_id:
                return index
        return -1

    def replace_frame(self, frame: Frame) -> 'Project':
        """Swap in an updated frame with the same id; ``self`` if unchanged."""
        frames = self.frame_list()
        index = self.frame_index(frame.id)
        if index < 0 or frames[index] is frame:
            return self
        return self.with_frames(frames[:index] + (frame,) + frames[index + 1:])

    def with_updates(self, **updates: Any) -> 'Project':
        if all(getattr(self, key) == value for key, value in updates.items()):
            return self
        return self.model_copy(update=updates)

    def to_api_dict(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, mode='json')

    @classmethod
    def from_api_dict(cls, data: dict[str, Any]) -> 'Project':
        return cls.model_validate(cls.migrate(dict(data)))

    @classmethod
    def migrate(cls, data: dict[str, Any]) -> dict[str, Any]:
        """Migrate the project and every frame it owns."""
        if data.get('_version', 0) < 1:
            data['_version'] = 1
        return data


def _renumber(frames: tuple[Frame, ...]) -> tuple[Frame, ...]:
    """Assign 1-based ids in display order."""
    return tuple(
        frame if frame.id == index else frame.model_copy(update={'id': index})
        for index, frame in enumerate(frames, start=1)
    )


def _variants(*texts: tuple[str, str]) -> tuple[ContentVariant, ...]:
    return tuple(ContentVariant(headline=headline, body=body) for headline, body in texts)


def _migrate_frames(items: Any) -> Any:
    if isinstance(items, list):
        return [Frame.migrate(dict(item)) if isinstance(item, dict) else item for item in items]
    return items


class Carousel(Project):
    """
    A row of frames sharing one frame size.

    Serialization format:
    {
        "_version": 1,
        "id": 1,
        "name": "Spring launch",
        "subtitle": "",
        "frameSize": "portrait",
        "frames": [{...Frame}]
    }
    """

    PROJECT_TYPE: ClassVar[str] = 'carousel'

    frame_size: str = Field(default='portrait', alias='frameSize')
    frames: tuple[Frame, ...] = Field(default_factory=lambda: (Frame(id=1),))

    @classmethod
    def blank(cls, project_id: int, name: Optional[str] = None) -> 'Carousel':
        frame = Frame(
            id=1,
            variants=_variants(
                ('Your headline here', 'Your body text here.'),
                ('Alternative headline', 'Alternative body text.'),
                ('Third variation', 'Third body option.'),
            ),
        )
        return cls(id=project_id, name=name or 'New Row', subtitle='Click to edit', frames=(frame,))

    @classmethod
    def new_frame(cls, adjacent: Optional[Frame] = None, fill_color: Optional[str] = None) -> Frame:
        return Frame(
            id=0,
            variants=default_variants(),
            style=adjacent.style if adjacent is not None else Frame.model_fields['style'].default,
            background_override=FillLayer.solid(fill_color) if fill_color else None,
        )

    def frame_list(self) -> tuple[Frame, ...]:
        return self.frames

    def with_frames(self, frames: tuple[Frame, ...]) -> 'Carousel':
        return self.model_copy(update={'frames': _renumber(tuple(frames))})

    @classmethod
    def migrate(cls, data: dict[str, Any]) -> dict[str, Any]:
        data['frames'] = _migrate_frames(data.get('frames'))
        return super().migrate(data)


class Eblast(Project):
    """
    An email made of stacked sections.

    Serialization format:
    {
        "_version": 1,
        "id": 1,
        "name": "Newsletter",
        "subtitle": "",
        "previewText": "...",
        "sections": [{...Frame, "sectionType": "hero", "size": "medium"}]
    }
    """

    PROJECT_TYPE: ClassVar[str] = 'eblast'

    preview_text: str = Field(default='', alias='previewText')
    sections: tuple[Frame, ...] = Field(
        default_factory=lambda: (Frame(id=1, section_type='hero', size='emailHero'),)
    )

    @classmethod
    def blank(cls, project_id: int, name: Optional[str] = None) -> 'Eblast':
        section = Frame(
            id=1,
            section_type='hero',
            style='hero-gradient',
            size='emailHero',
            variants=_variants(
                ('Your Headline', 'Your message here.'),
                ('Alternative', 'Second version.'),
                ('Third', 'Third version.'),
            ),
        )
        return cls(id=project_id, name=name or 'New Email', subtitle='Email Campaign', sections=(section,))

    @classmethod
    def new_frame(cls, adjacent: Optional[Frame] = None, fill_color: Optional[str] = None) -> Frame:
        return Frame(
            id=0,
            section_type='feature',
            style='feature-dark',
            size='emailHero',
            variants=_variants(
                ('New Section', 'Add your content here.'),
                ('Alternative', 'Second version.'),
                ('Third Option', 'Third version.'),
            ),
        )

    def frame_list(self) -> tuple[Frame, ...]:
        return self.sections

    def with_frames(self, frames: tuple[Frame, ...]) -> 'Eblast':
        return self.model_copy(update={'sections': _renumber(tuple(frames))})

    @classmethod
    def migrate(cls, data: dict[str, Any]) -> dict[str, Any]:
        data['sections'] = _migrate_frames(data.get('sections'))
        return super().migrate(data)


class VideoCover(Project):
    """
    A video thumbnail with exactly one frame.

    Serialization format:
    {
        "_version": 1,
        "id": 1,
        "name": "Episode 12",
        "subtitle": "",
        "frameSize": "youtube",
        "showPlayButton": true,
        "episodeNumber": "12",
        "seriesName": null,
        "frame": {...Frame}
    }
    """

    PROJECT_TYPE: ClassVar[str] = 'videoCover'

    frame_size: str = Field(default='youtube', alias='frameSize')
    show_play_button: bool = Field(default=True, alias='showPlayButton')
    episode_number: Optional[str] = Field(default=None, alias='episodeNumber')
    series_name: Optional[str] = Field(default=None, alias='seriesName')
    frame: Frame = Field(default_factory=lambda: Frame(id=1))

    @field_validator('episode_number', mode='before')
    @classmethod
    def _episode_as_text(cls, v: Any) -> Any:
        return str(v) if isinstance(v, int) else v

    @classmethod
    def blank(cls, project_id: int, name: Optional[str] = None) -> 'VideoCover':
        frame = Frame(
            id=1,
            style='video-bold',
            variants=_variants(
                ('Your Title', 'Your subtitle'),
                ('Alternative', 'Second version'),
                ('Third', 'Third version'),
            ),
        )
        return cls(
            id=project_id,
            name=name or 'New Video Cover',
            subtitle='Video Thumbnail',
            show_play_button=False,
            frame=frame,
        )

    @classmethod
    def new_frame(cls, adjacent: Optional[Frame] = None, fill_color: Optional[str] = None) -> Frame:
        raise TypeError("Video covers have exactly one frame")

    def frame_list(self) -> tuple[Frame, ...]:
        return (self.frame,)

    def with_frames(self, frames: tuple[Frame, ...]) -> 'VideoCover':
        # Single frame: inserting, removing or reordering never applies
        if len(frames) != 1:
            return self
        frame = frames[0] if frames[0].id == 1 else frames[0].model_copy(update={'id': 1})
        if frame is self.frame:
            return self
        return self.model_copy(update={'frame': frame})

    @classmethod
    def migrate(cls, data: dict[str, Any]) -> dict[str, Any]:
        if isinstance(data.get('frame'), dict):
            data['frame'] = Frame.migrate(dict(data['frame']))
        return super().migrate(data)
