"""
BaseLayer - Abstract base model for all frame layer types.

Provides shared properties for all layers:
- Identity: id, _version
- Appearance: opacity
- Stacking: zIndex (a hint; background stacking is resolved per frame)

Layers are immutable. Edits go through ``updated()`` which merges the
changes, re-validates and clamps, and returns ``self`` when nothing
actually changed so reducers can signal a no-op by identity.

Uses Pydantic v2 with camelCase aliases for JS serialization compatibility.
"""

from enum import Enum
from typing import Any, ClassVar, Mapping
import uuid

from pydantic import BaseModel, ConfigDict, Field, field_validator


class LayerKind(str, Enum):
    """Layer kinds a frame can hold, one slot each."""
    FILL = "fill"
    PATTERN = "pattern"
    IMAGE = "image"
    PRODUCT_IMAGE = "productImage"
    ICON = "icon"
    PROGRESS = "progress"


def clamp(value: float, low: float, high: float) -> float:
    """Clamp a value into [low, high]."""
    return max(low, min(high, value))


def wrap_degrees(value: float) -> float:
    """Wrap an angle into [0, 360)."""
    wrapped = value % 360.0
    # -0.0 and float noise at the upper edge both wrap to 0
    return 0.0 if wrapped >= 360.0 or wrapped == 0 else wrapped


def new_layer_id(prefix: str) -> str:
    """Create a unique layer id such as ``img-1b2c3d4e``."""
    return f"{prefix}-{uuid.uuid4().hex[:12]}"


class BaseLayer(BaseModel):
    """
    Base model for all layer types.

    Serializes to JSON format matching the JS layer objects:
    {
        "_version": 1,
        "id": "img-...",
        "opacity": 1.0,
        "zIndex": 0,
        ...subclass properties
    }
    """

    model_config = ConfigDict(
        # Allow both snake_case and camelCase input
        populate_by_name=True,
        # Layers are values; history keeps references to old ones
        frozen=True,
        # Allow extra fields for forward compatibility
        extra='ignore',
        # Serialize enums by value (e.g., "cover" not "ImageFit.COVER")
        use_enum_values=True,
    )

    VERSION: ClassVar[int] = 1
    KIND: ClassVar[LayerKind]
    ID_PREFIX: ClassVar[str] = 'layer'

    version: int = Field(default=1, alias='_version')
    id: str = Field(default_factory=lambda: new_layer_id('layer'))

    opacity: float = Field(default=1.0)
    z_index: int = Field(default=0, alias='zIndex')

    @field_validator('opacity')
    @classmethod
    def _clamp_opacity(cls, v: float) -> float:
        return clamp(v, 0.0, 1.0)

    @classmethod
    def create(cls, **values: Any) -> 'BaseLayer':
        """Create a layer with a fresh id using the class prefix."""
        values.setdefault('id', new_layer_id(cls.ID_PREFIX))
        return cls.model_validate(cls._to_field_names(values))

    @classmethod
    def _to_field_names(cls, data: Mapping[str, Any]) -> dict[str, Any]:
        """Map camelCase aliases onto field names, dropping unknown keys."""
        lookup: dict[str, str] = {}
        for name, info in cls.model_fields.items():
            lookup[name] = name
            if info.alias:
                lookup[info.alias] = name
        return {lookup[key]: value for key, value in data.items() if key in lookup}

    def updated(self, updates: Mapping[str, Any]) -> 'BaseLayer':
        """
        Return a copy with ``updates`` applied, validated and clamped.

        Args:
            updates: Partial properties (camelCase or snake_case keys)

        Returns:
            New layer, or ``self`` if the result equals the current layer
        """
        changes = self._to_field_names(updates)
        if not changes:
            return self
        data = self.model_dump()
        data.update(changes)
        result = self.__class__.model_validate(data)
        return self if result == self else result

    def stepped(self, field: str, delta: float, *, precision: int = 4) -> 'BaseLayer':
        """
        Increment a numeric property by ``delta`` and clamp it.

        The result is rounded so repeated +/- steps don't accumulate float
        noise.
        """
        name = self._to_field_names({field: None})
        if not name:
            return self
        key = next(iter(name))
        current = getattr(self, key)
        return self.updated({key: round(current + delta, precision)})

    def properties(self) -> dict[str, Any]:
        """Editable properties (everything except identity) in camelCase."""
        data = self.to_api_dict()
        data.pop('_version', None)
        data.pop('id', None)
        return data

    def to_api_dict(self) -> dict[str, Any]:
        """
        Convert to API response dictionary.

        Returns:
            Dict matching JS serialization format
        """
        return self.model_dump(by_alias=True, mode='json')

    @classmethod
    def from_api_dict(cls, data: dict[str, Any]) -> 'BaseLayer':
        """
        Create layer from a serialized dictionary.

        Accepts both camelCase (JS) and snake_case (Python) keys.
        """
        if isinstance(data, Mapping):
            data = dict(data)
        return cls.model_validate(cls.migrate(data))

    @classmethod
    def migrate(cls, data: dict[str, Any]) -> dict[str, Any]:
        """
        Migrate serialized data from older versions.

        Args:
            data: Serialized layer data

        Returns:
            Migrated data at current version
        """
        # Pre-versioned layers carry no extra meaning, just stamp them
        if data.get('_version', 0) < 1:
            data['_version'] = 1
        return data
