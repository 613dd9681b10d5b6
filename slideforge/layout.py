"""
Adaptive layout - Space reserved for a product image from live text length.

The text block takes a share of the frame height that grows with the
estimated number of lines. The product image gets what is left between the
text block and the frame margins:

    top position:     [TOP_MARGIN, 1 - reserve]
    bottom position:  [reserve, 1 - BOTTOM_MARGIN]

All values are fractions of the frame height. Nothing is cached; callers
query again after every text edit.
"""

from dataclasses import dataclass
from typing import Optional
import math

from .layers import ContentVariant, Frame, ProductImagePosition

HEADLINE_CHARS_PER_LINE = 17
BODY_CHARS_PER_LINE = 27

RESERVE_BASE = 0.18
RESERVE_PER_LINE = 0.06
RESERVE_MIN = 0.42
RESERVE_MAX = 0.65

# Progress indicator zone
TOP_MARGIN = 0.12
BOTTOM_MARGIN = 0.08


@dataclass(frozen=True)
class ImageBand:
    """Vertical band for the product image, as fractions of frame height."""
    top: float
    bottom: float

    @property
    def height(self) -> float:
        return max(0.0, self.bottom - self.top)

    @property
    def center(self) -> float:
        return (self.top + self.bottom) / 2

    def to_pixels(self, frame_height: float) -> tuple[float, float]:
        return self.top * frame_height, self.bottom * frame_height


def estimate_lines(text: str, chars_per_line: int) -> int:
    """Estimated wrapped line count; empty text still takes one line."""
    return max(1, math.ceil(len(text or '') / chars_per_line))


def reserve_fraction(headline: str, body: str) -> float:
    """
    Share of the frame height reserved for the text block.

    Examples:
        >>> reserve_fraction('x' * 40, 'y' * 80)
        0.54
    """
    lines = (
        estimate_lines(headline, HEADLINE_CHARS_PER_LINE)
        + estimate_lines(body, BODY_CHARS_PER_LINE)
    )
    reserve = RESERVE_BASE + RESERVE_PER_LINE * lines
    return round(min(RESERVE_MAX, max(RESERVE_MIN, reserve)), 4)


def image_band(content: ContentVariant, position: ProductImagePosition) -> ImageBand:
    """Band left for the product image beside the given text."""
    reserve = reserve_fraction(content.headline, content.body)
    if ProductImagePosition(position) == ProductImagePosition.TOP:
        return ImageBand(top=TOP_MARGIN, bottom=round(1.0 - reserve, 4))
    return ImageBand(top=reserve, bottom=round(1.0 - BOTTOM_MARGIN, 4))


def frame_image_band(frame: Frame) -> Optional[ImageBand]:
    """Band for the frame's product image, None if it has none."""
    layer = frame.product_image_layer
    if layer is None:
        return None
    return image_band(frame.content, layer.position)


def default_position(layout_index: int, layout_variant: int) -> ProductImagePosition:
    """
    Initial product image position for a layout.

    Layouts that put the text at the top place the image below it.
    """
    if (layout_index, layout_variant) in ((0, 1), (1, 2)):
        return ProductImagePosition.BOTTOM
    return ProductImagePosition.TOP
