"""
Frame - One slide / email section / cover within a project.

A frame is a fixed-slot composition: at most one layer of each kind, each
in its own optional field. ``LAYER_SLOTS`` maps every ``LayerKind`` to the
field holding it, so layer handling stays exhaustive.
"""

from typing import Any, ClassVar, Optional
import logging

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .base import BaseLayer, LayerKind
from .fill_layer import FillLayer
from .icon_layer import IconLayer
from .image_layer import ImageLayer
from .pattern_layer import PatternLayer
from .product_image_layer import ProductImageLayer
from .progress_indicator import ProgressIndicatorLayer

logger = logging.getLogger(__name__)

# Background stacking kinds and their default bottom-to-top order
BACKGROUND_KINDS: tuple[LayerKind, ...] = (LayerKind.FILL, LayerKind.PATTERN, LayerKind.IMAGE)
DEFAULT_BACKGROUND_ORDER: tuple[LayerKind, ...] = BACKGROUND_KINDS

LAYER_SLOTS: dict[LayerKind, str] = {
    LayerKind.FILL: 'background_override',
    LayerKind.PATTERN: 'pattern_layer',
    LayerKind.IMAGE: 'image_layer',
    LayerKind.PRODUCT_IMAGE: 'product_image_layer',
    LayerKind.ICON: 'icon_layer',
    LayerKind.PROGRESS: 'progress_indicator',
}

LAYER_CLASSES: dict[LayerKind, type[BaseLayer]] = {
    LayerKind.FILL: FillLayer,
    LayerKind.PATTERN: PatternLayer,
    LayerKind.IMAGE: ImageLayer,
    LayerKind.PRODUCT_IMAGE: ProductImageLayer,
    LayerKind.ICON: IconLayer,
    LayerKind.PROGRESS: ProgressIndicatorLayer,
}


def is_background_permutation(order: Any) -> bool:
    """Check that ``order`` holds each background kind exactly once."""
    try:
        kinds = [LayerKind(k) for k in order]
    except (TypeError, ValueError):
        return False
    return len(kinds) == len(BACKGROUND_KINDS) and set(kinds) == set(BACKGROUND_KINDS)


class ContentVariant(BaseModel):
    """
    Text content of a frame with per-field formatting.

    Any extra text field (e.g. "eyebrow") is kept alongside the standard
    ones.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True, extra='allow')

    headline: str = Field(default='')
    body: str = Field(default='')
    subhead: Optional[str] = Field(default=None)
    cta: Optional[str] = Field(default=None)
    formatting: dict[str, dict[str, Any]] = Field(default_factory=dict)

    def text(self, field: str) -> str:
        """Get a text field ('' when unset)."""
        value = self.model_dump().get(field)
        return value if isinstance(value, str) else ''

    def with_text(self, field: str, value: str) -> 'ContentVariant':
        if field == 'formatting' or self.model_dump().get(field) == value:
            return self
        data = self.model_dump()
        data[field] = value
        return ContentVariant.model_validate(data)

    def with_formatting(self, field: str, key: str, value: Any) -> 'ContentVariant':
        current = self.formatting.get(field, {})
        if key in current and current[key] == value:
            return self
        formatting = dict(self.formatting)
        formatting[field] = {**current, key: value}
        data = self.model_dump()
        data['formatting'] = formatting
        return ContentVariant.model_validate(data)


def default_variants() -> tuple[ContentVariant, ...]:
    """Placeholder copy for a freshly added frame."""
    return (
        ContentVariant(headline='Add your headline', body='Add your supporting copy here.'),
        ContentVariant(headline='Alternative headline', body='Alternative supporting copy.'),
        ContentVariant(headline='Third option', body='Third copy variation.'),
    )


class Frame(BaseModel):
    """
    A single frame.

    Serialization format:
    {
        "id": 1,
        "variants": [{"headline": "...", "body": "...", "formatting": {}}],
        "currentVariant": 0,
        "currentLayout": 0,
        "layoutVariant": 0,
        "style": "dark-single-pin",
        "backgroundOverride": {...FillLayer} | null,
        "backgroundLayerOrder": ["fill", "pattern", "image"],
        "patternLayer": {...} | null,
        "imageLayer": {...} | null,
        "productImageLayer": {...} | null,
        "iconLayer": {...} | null,
        "progressIndicator": {...} | null
    }
    """

    model_config = ConfigDict(
        populate_by_name=True,
        frozen=True,
        extra='ignore',
        use_enum_values=True,
    )

    LAYOUT_VARIANTS: ClassVar[int] = 3

    id: int = Field(default=1)
    variants: tuple[ContentVariant, ...] = Field(default_factory=default_variants)
    current_variant: int = Field(default=0, alias='currentVariant')
    current_layout: int = Field(default=0, alias='currentLayout')
    layout_variant: int = Field(default=0, alias='layoutVariant')
    style: str = Field(default='dark-single-pin')

    # Eblast sections only
    section_type: Optional[str] = Field(default=None, alias='sectionType')
    size: Optional[str] = Field(default=None)

    # Layers, one slot per kind
    background_override: Optional[FillLayer] = Field(default=None, alias='backgroundOverride')
    background_layer_order: tuple[LayerKind, ...] = Field(
        default=DEFAULT_BACKGROUND_ORDER, alias='backgroundLayerOrder'
    )
    pattern_layer: Optional[PatternLayer] = Field(default=None, alias='patternLayer')
    image_layer: Optional[ImageLayer] = Field(default=None, alias='imageLayer')
    product_image_layer: Optional[ProductImageLayer] = Field(default=None, alias='productImageLayer')
    icon_layer: Optional[IconLayer] = Field(default=None, alias='iconLayer')
    progress_indicator: Optional[ProgressIndicatorLayer] = Field(default=None, alias='progressIndicator')

    @field_validator('background_override', mode='before')
    @classmethod
    def _coerce_fill(cls, v: Any) -> Any:
        """Accept legacy string overrides and raw dicts."""
        if isinstance(v, (str, dict)):
            return FillLayer.migrate(v if isinstance(v, str) else dict(v))
        return v

    @field_validator('background_layer_order', mode='before')
    @classmethod
    def _repair_order(cls, v: Any) -> Any:
        """Keep the stacking order a permutation of the background kinds."""
        if v is None or not is_background_permutation(v):
            if v is not None:
                logger.warning(f"Invalid backgroundLayerOrder {v!r}, using default")
            return DEFAULT_BACKGROUND_ORDER
        return tuple(LayerKind(k) for k in v)

    @model_validator(mode='after')
    def _check_indices(self) -> 'Frame':
        if not self.variants:
            object.__setattr__(self, 'variants', default_variants())
        if not 0 <= self.current_variant < len(self.variants):
            object.__setattr__(self, 'current_variant', 0)
        return self

    # ------------------------------------------------------------------
    # Layer slots
    # ------------------------------------------------------------------

    def layer(self, kind: LayerKind) -> Optional[BaseLayer]:
        """Get the layer in the ``kind`` slot, if any."""
        return getattr(self, LAYER_SLOTS[LayerKind(kind)])

    def has_layer(self, kind: LayerKind) -> bool:
        return self.layer(kind) is not None

    def present_kinds(self) -> frozenset[LayerKind]:
        """Kinds whose slot currently holds a layer."""
        return frozenset(kind for kind in LayerKind if self.layer(kind) is not None)

    def with_layer(self, kind: LayerKind, layer: Optional[BaseLayer]) -> 'Frame':
        """Return a frame with the ``kind`` slot replaced (None removes)."""
        kind = LayerKind(kind)
        if layer is not None and not isinstance(layer, LAYER_CLASSES[kind]):
            raise TypeError(f"{type(layer).__name__} cannot fill the {kind.value} slot")
        if self.layer(kind) is layer:
            return self
        return self.model_copy(update={LAYER_SLOTS[kind]: layer})

    def with_background_order(self, order: tuple[LayerKind, ...]) -> 'Frame':
        if not is_background_permutation(order):
            return self
        order = tuple(LayerKind(k) for k in order)
        if tuple(self.background_layer_order) == order:
            return self
        return self.model_copy(update={'background_layer_order': order})

    # ------------------------------------------------------------------
    # Content
    # ------------------------------------------------------------------

    @property
    def content(self) -> ContentVariant:
        """The currently selected content variant."""
        return self.variants[self.current_variant]

    def with_content(self, variant: ContentVariant) -> 'Frame':
        if variant is self.content:
            return self
        variants = list(self.variants)
        variants[self.current_variant] = variant
        return self.model_copy(update={'variants': tuple(variants)})

    def with_updates(self, **updates: Any) -> 'Frame':
        """Copy with plain field updates; ``self`` if nothing differs."""
        if all(getattr(self, key) == value for key, value in updates.items()):
            return self
        return self.model_copy(update=updates)

    def to_api_dict(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, mode='json')

    @classmethod
    def migrate(cls, data: dict[str, Any]) -> dict[str, Any]:
        """
        Migrate serialized frames from older versions.

        Older frames kept fill opacity/rotation next to a plain string
        backgroundOverride.
        """
        fill_opacity = data.pop('fillOpacity', None)
        fill_rotation = data.pop('fillRotation', None)
        if fill_opacity is not None or fill_rotation is not None:
            fill = FillLayer.migrate(data.get('backgroundOverride') or {})
            if fill_opacity is not None:
                fill['opacity'] = fill_opacity
            if fill_rotation is not None:
                fill['rotation'] = fill_rotation
            data['backgroundOverride'] = fill
        return data
