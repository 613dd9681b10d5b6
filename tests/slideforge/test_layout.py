"""
Tests for the adaptive layout estimator.
"""

import pytest

from slideforge.layers import ContentVariant, Frame, ProductImageLayer, ProductImagePosition
from slideforge.layout import (
    BOTTOM_MARGIN,
    RESERVE_MAX,
    RESERVE_MIN,
    TOP_MARGIN,
    ImageBand,
    default_position,
    estimate_lines,
    frame_image_band,
    image_band,
    reserve_fraction,
)


class TestReserve:
    """Text block reserve from live text length."""

    def test_headline_40_body_80(self):
        """Test 3 headline lines and 3 body lines reserve 0.54."""
        assert estimate_lines('x' * 40, 17) == 3
        assert estimate_lines('y' * 80, 27) == 3
        assert reserve_fraction('x' * 40, 'y' * 80) == pytest.approx(0.54)

    def test_empty_text_counts_one_line(self):
        """Test empty fields still take a line each."""
        assert estimate_lines('', 17) == 1
        assert estimate_lines(None, 27) == 1

    def test_clamped_low(self):
        """Test short text reserves at least the minimum."""
        assert reserve_fraction('Hi', 'Short') == RESERVE_MIN

    def test_clamped_high(self):
        """Test long text reserves at most the maximum."""
        assert reserve_fraction('x' * 200, 'y' * 400) == RESERVE_MAX

    def test_exact_line_boundary(self):
        """Test 17 characters still fit on one headline line."""
        assert estimate_lines('x' * 17, 17) == 1
        assert estimate_lines('x' * 18, 17) == 2


class TestImageBand:
    """Band left for the product image."""

    def test_top_band(self):
        """Test a top image ends where the text block begins."""
        content = ContentVariant(headline='x' * 40, body='y' * 80)
        band = image_band(content, ProductImagePosition.TOP)
        assert band.top == TOP_MARGIN
        assert band.bottom == pytest.approx(0.46)

    def test_bottom_band(self):
        """Test a bottom image starts below the text block."""
        content = ContentVariant(headline='x' * 40, body='y' * 80)
        band = image_band(content, 'bottom')
        assert band.top == pytest.approx(0.54)
        assert band.bottom == pytest.approx(1 - BOTTOM_MARGIN)

    def test_band_geometry(self):
        """Test derived band values."""
        band = ImageBand(top=0.2, bottom=0.6)
        assert band.height == pytest.approx(0.4)
        assert band.center == pytest.approx(0.4)
        assert band.to_pixels(1000) == pytest.approx((200, 600))

    def test_frame_without_product_image(self):
        """Test frames without a product image have no band."""
        assert frame_image_band(Frame()) is None

    def test_band_follows_text_edits(self):
        """Test the band is recomputed from the current text."""
        frame = Frame(product_image_layer=ProductImageLayer.create(position='bottom'))
        before = frame_image_band(frame)

        long_text = frame.content.with_text('body', 'word ' * 40)
        after = frame_image_band(frame.with_content(long_text))

        assert after.top > before.top


class TestDefaultPosition:
    """Initial product image placement per layout."""

    @pytest.mark.parametrize('layout,variant', [(0, 1), (1, 2)])
    def test_bottom_layouts(self, layout, variant):
        """Test layouts with text on top place the image below."""
        assert default_position(layout, variant) == ProductImagePosition.BOTTOM

    @pytest.mark.parametrize('layout,variant', [(0, 0), (0, 2), (1, 0), (2, 1)])
    def test_top_layouts(self, layout, variant):
        """Test every other layout places the image on top."""
        assert default_position(layout, variant) == ProductImagePosition.TOP
