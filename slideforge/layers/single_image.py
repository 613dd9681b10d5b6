"""
SingleImage - Free-form canvas project for product mockups.

Unlike frame-based projects, a single image keeps an ordered, unbounded
stack of layers (mockups, decorators, text). Stack position is the z-order:
``zIndex`` is renumbered 1..N after every reorder.
"""

from typing import Annotated, Any, ClassVar, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .base import clamp, wrap_degrees
from .pattern_layer import PatternLayer

CANVAS_SIZES: dict[str, tuple[int, int]] = {
    'hero': (1200, 630),
    'square': (1080, 1080),
    'wide': (1920, 1080),
    'tall': (800, 1200),
    'og': (1200, 630),
    'twitter': (1200, 675),
}

_MODEL_CONFIG = ConfigDict(populate_by_name=True, frozen=True, extra='ignore')


class Transform(BaseModel):
    """Position and size of a stack layer in canvas pixels."""

    model_config = _MODEL_CONFIG

    x: float = 100.0
    y: float = 100.0
    width: float = 100.0
    height: float = 40.0
    rotation: float = 0.0
    scale_x: float = Field(default=1.0, alias='scaleX')
    scale_y: float = Field(default=1.0, alias='scaleY')

    @field_validator('rotation')
    @classmethod
    def _wrap_rotation(cls, v: float) -> float:
        return wrap_degrees(v)


class GradientSpec(BaseModel):
    model_config = _MODEL_CONFIG

    type: Literal['linear', 'radial'] = 'linear'
    from_color: str = Field(default='#18191A', alias='from')
    to_color: str = Field(default='#2d2e30', alias='to')
    angle: float = 135.0


class Background(BaseModel):
    """Canvas background: solid color or two-stop gradient."""

    model_config = _MODEL_CONFIG

    type: Literal['solid', 'gradient', 'transparent'] = 'gradient'
    color: Optional[str] = None
    gradient: Optional[GradientSpec] = Field(default_factory=GradientSpec)


class StackLayer(BaseModel):
    """Shared fields of free-stack layers."""

    model_config = _MODEL_CONFIG

    id: int
    name: str = 'Layer'
    transform: Transform = Field(default_factory=Transform)
    opacity: float = 1.0
    visible: bool = True
    locked: bool = False
    z_index: int = Field(default=1, alias='zIndex')

    @field_validator('opacity')
    @classmethod
    def _clamp_opacity(cls, v: float) -> float:
        return clamp(v, 0.0, 1.0)

    def updated(self, updates: dict[str, Any]) -> 'StackLayer':
        """Merge ``updates`` (camelCase or snake_case); ``self`` if unchanged."""
        data = self.model_dump(by_alias=True)
        for key, value in updates.items():
            field = type(self).model_fields.get(key)
            alias = field.alias if field is not None and field.alias else key
            if alias in ('id', 'type'):
                continue
            if alias == 'transform' and isinstance(value, dict):
                value = {**data['transform'], **value}
            data[alias] = value
        result = self.__class__.model_validate(data)
        return self if result == self else result


class MockupLayer(StackLayer):
    type: Literal['mockup'] = 'mockup'
    template: str = 'dashboard-full'
    placeholder_type: Optional[str] = Field(default='analytics', alias='placeholderType')
    image_url: Optional[str] = Field(default=None, alias='imageUrl')
    style: dict[str, Any] = Field(default_factory=lambda: dict(DEFAULT_MOCKUP_STYLE))


class DecoratorLayer(StackLayer):
    type: Literal['decorator'] = 'decorator'
    decorator_type: str = Field(default='chip', alias='decoratorType')
    content: str = '+23%'
    variant: str = 'success'
    size: Literal['sm', 'md', 'lg'] = 'md'
    decorator_style: dict[str, Any] = Field(
        default_factory=lambda: dict(DEFAULT_DECORATOR_STYLE), alias='decoratorStyle'
    )


class TextStackLayer(StackLayer):
    type: Literal['text'] = 'text'
    content: str = 'Text'
    font_family: str = Field(default='Inter', alias='fontFamily')
    font_size: float = Field(default=32.0, alias='fontSize')
    font_weight: int = Field(default=600, alias='fontWeight')
    color: str = '#ffffff'
    text_align: Literal['left', 'center', 'right'] = Field(default='left', alias='textAlign')
    line_height: float = Field(default=1.2, alias='lineHeight')


AnyStackLayer = Annotated[
    Union[MockupLayer, DecoratorLayer, TextStackLayer],
    Field(discriminator='type'),
]

STACK_LAYER_CLASSES: dict[str, type[StackLayer]] = {
    'mockup': MockupLayer,
    'decorator': DecoratorLayer,
    'text': TextStackLayer,
}

DEFAULT_MOCKUP_STYLE: dict[str, Any] = {
    'cornerRadius': 12,
    'borderWidth': 1,
    'borderColor': 'rgba(255,255,255,0.1)',
    'borderStyle': 'solid',
    'shadowEnabled': True,
    'shadowX': 0,
    'shadowY': 24,
    'shadowBlur': 48,
    'shadowSpread': -12,
    'shadowColor': 'rgba(0,0,0,0.25)',
    'glowEnabled': False,
    'glowColor': '#6466e9',
    'glowBlur': 24,
}

DEFAULT_DECORATOR_STYLE: dict[str, Any] = {
    'backgroundColor': '#059669',
    'textColor': '#ffffff',
    'borderRadius': 16,
    'hasShadow': True,
    'hasGlow': False,
}


def new_stack_layer(kind: str, layer_id: int, existing_count: int, **values: Any) -> StackLayer:
    """
    Create a stack layer cascaded below the previous ones.

    Args:
        kind: 'mockup', 'decorator' or 'text'
        layer_id: Id for the new layer
        existing_count: Layers already on the canvas (offsets the position)
    """
    cls = STACK_LAYER_CLASSES.get(kind, TextStackLayer)
    is_mockup = cls is MockupLayer
    offset = 100 + existing_count * 20
    transform = Transform(
        x=offset,
        y=offset,
        width=800 if is_mockup else 100,
        height=500 if is_mockup else 40,
    )
    names = {MockupLayer: 'Dashboard', DecoratorLayer: 'Decorator', TextStackLayer: 'Text'}
    data = {
        'id': layer_id,
        'name': names[cls],
        'transform': transform,
        'z_index': existing_count + 1,
    }
    data.update({k: v for k, v in values.items() if v is not None})
    return cls.model_validate(data)


class SingleImage(BaseModel):
    """
    A single canvas with a background and a free layer stack.

    Serialization format:
    {
        "_version": 1,
        "id": 1,
        "name": "New Mockup",
        "subtitle": "Product Mockup",
        "canvasSize": "hero",
        "canvasWidth": 1200,
        "canvasHeight": 630,
        "background": {"type": "gradient", "gradient": {...}},
        "backgroundGradient": null,
        "patternLayer": {...} | null,
        "layers": [{"type": "mockup", ...}]
    }
    """

    model_config = _MODEL_CONFIG

    PROJECT_TYPE: ClassVar[str] = 'singleImage'

    version: int = Field(default=1, alias='_version')
    id: int
    name: str = 'New Mockup'
    subtitle: str = 'Product Mockup'
    canvas_size: str = Field(default='hero', alias='canvasSize')
    canvas_width: int = Field(default=1200, alias='canvasWidth')
    canvas_height: int = Field(default=630, alias='canvasHeight')
    background: Background = Field(default_factory=Background)
    background_gradient: Optional[str] = Field(default=None, alias='backgroundGradient')
    pattern_layer: Optional[PatternLayer] = Field(default=None, alias='patternLayer')
    layers: tuple[AnyStackLayer, ...] = Field(default=())

    @classmethod
    def blank(cls, project_id: int, name: Optional[str] = None) -> 'SingleImage':
        return cls(id=project_id, name=name or 'New Mockup')

    def find_layer(self, layer_id: int) -> Optional[StackLayer]:
        for layer in self.layers:
            if layer.id == layer_id:
                return layer
        return None

    def next_layer_id(self) -> int:
        return max((layer.id for layer in self.layers), default=0) + 1

    def with_layers(self, layers: tuple[StackLayer, ...]) -> 'SingleImage':
        if tuple(layers) == self.layers and all(a is b for a, b in zip(layers, self.layers)):
            return self
        return self.model_copy(update={'layers': tuple(layers)})

    def with_updates(self, **updates: Any) -> 'SingleImage':
        if all(getattr(self, key) == value for key, value in updates.items()):
            return self
        return self.model_copy(update=updates)

    def frame_list(self) -> tuple:
        """Single images own no frames."""
        return ()

    def to_api_dict(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, mode='json')

    @classmethod
    def from_api_dict(cls, data: dict[str, Any]) -> 'SingleImage':
        data = dict(data)
        if data.get('_version', 0) < 1:
            data['_version'] = 1
        return cls.model_validate(data)
