"""
Tests for z-order resolution and drag-and-drop reordering.
"""

import itertools
import random

import pytest

from slideforge.layers import (
    BACKGROUND_KINDS,
    FillLayer,
    Frame,
    IconLayer,
    ImageLayer,
    LayerKind,
    is_background_permutation,
)
from slideforge.zorder import (
    EDITING_Z,
    ICON_Z,
    PRODUCT_IMAGE_Z,
    PROGRESS_Z,
    array_move,
    frame_z_indices,
    move_element,
    reorder_background,
    resolve_z_index,
)

FILL, PATTERN, IMAGE = LayerKind.FILL, LayerKind.PATTERN, LayerKind.IMAGE


class TestResolveZIndex:
    """Render z-index per layer kind."""

    def test_default_order(self):
        """Test background kinds resolve to 1..3 in default order."""
        assert resolve_z_index(FILL) == 1
        assert resolve_z_index(PATTERN) == 2
        assert resolve_z_index(IMAGE) == 3

    def test_custom_order(self):
        """Test the frame's order decides the background stacking."""
        order = (IMAGE, FILL, PATTERN)
        assert resolve_z_index(IMAGE, order) == 1
        assert resolve_z_index(PATTERN, order) == 3

    def test_foreground_bands(self):
        """Test foreground kinds use fixed bands above the background."""
        assert resolve_z_index(LayerKind.PROGRESS) == PROGRESS_Z
        assert resolve_z_index(LayerKind.PRODUCT_IMAGE) == PRODUCT_IMAGE_Z
        assert resolve_z_index(LayerKind.ICON) == ICON_Z
        assert max(resolve_z_index(k) for k in BACKGROUND_KINDS) < PROGRESS_Z

    def test_editing_image_lifted(self):
        """Test an image being edited sits above everything."""
        assert resolve_z_index(IMAGE, editing=True) == EDITING_Z
        assert EDITING_Z > ICON_Z

    def test_editing_only_lifts_images(self):
        """Test other kinds keep their z-index while edited."""
        assert resolve_z_index(FILL, editing=True) == 1

    @pytest.mark.parametrize('order', list(itertools.permutations(BACKGROUND_KINDS)))
    def test_monotonic_with_position(self, order):
        """Test z-index strictly increases with stacking position."""
        z = [resolve_z_index(kind, order) for kind in order]
        assert z == sorted(z)
        assert len(set(z)) == len(z)

    def test_frame_z_indices(self):
        """Test only present layers are resolved."""
        frame = Frame(
            background_override=FillLayer.solid('#000000'),
            image_layer=ImageLayer.create(),
            icon_layer=IconLayer.create(),
        )
        assert frame_z_indices(frame) == {FILL: 1, IMAGE: 3, LayerKind.ICON: ICON_Z}
        assert frame_z_indices(frame, editing=IMAGE)[IMAGE] == EDITING_Z


class TestReorder:
    """Drag-and-drop reordering."""

    def test_fill_over_image(self):
        """Test dragging fill onto image moves it to the top."""
        assert reorder_background((FILL, PATTERN, IMAGE), FILL, IMAGE) == (PATTERN, IMAGE, FILL)

    def test_image_over_fill(self):
        """Test dragging up lands before the target."""
        assert reorder_background((FILL, PATTERN, IMAGE), IMAGE, FILL) == (IMAGE, FILL, PATTERN)

    def test_unknown_kind_is_noop(self):
        """Test unknown kinds leave the order unchanged."""
        order = (FILL, PATTERN, IMAGE)
        assert reorder_background(order, 'sticker', FILL) == order

    def test_foreground_kind_is_noop(self):
        """Test foreground kinds cannot enter the background stack."""
        order = (FILL, PATTERN, IMAGE)
        assert reorder_background(order, LayerKind.ICON, FILL) == order

    def test_random_reorders_stay_permutation(self):
        """Test any sequence of reorders keeps a permutation of the kinds."""
        rng = random.Random(42)
        candidates = list(LayerKind) + ['bogus']
        order = (FILL, PATTERN, IMAGE)
        for _ in range(500):
            order = reorder_background(order, rng.choice(candidates), rng.choice(candidates))
            assert is_background_permutation(order)

    def test_move_element_ids(self):
        """Test frame id reordering by drag."""
        assert move_element((1, 2, 3, 4), 4, 1) == (4, 1, 2, 3)
        assert move_element((1, 2, 3, 4), 1, 3) == (2, 3, 1, 4)

    def test_move_element_absent(self):
        """Test missing or identical ids leave the order unchanged."""
        assert move_element((1, 2, 3), 9, 1) == (1, 2, 3)
        assert move_element((1, 2, 3), 2, 2) == (1, 2, 3)

    def test_array_move_out_of_range(self):
        """Test invalid indices leave the items unchanged."""
        assert array_move(['a', 'b'], 0, 5) == ('a', 'b')
        assert array_move(['a', 'b'], -1, 0) == ('a', 'b')
        assert array_move(['a', 'b', 'c'], 2, 0) == ('c', 'a', 'b')
