"""Tests for openings, door, railing and mass components."""

import pytest

from building_grammar.components.door import door
from building_grammar.components.massing import (
    l_shape_band_corners,
    l_shape_mass,
    polygon_mass,
    rectangle_mass,
)
from building_grammar.components.openings import (
    FULL_PANEL_STYLE,
    OPENING_STYLES,
    get_recipe,
    opening,
    select_style,
)
from building_grammar.components.railing import railing
from building_grammar.config import OverhangParams, WindowBand
from building_grammar.errors import GeometryError, UnknownStyleError
from building_grammar.geometry.primitives import regular_prism


class TestOpeningRegistry:
    def test_five_styles_registered(self):
        assert sorted(OPENING_STYLES) == [1, 2, 3, 4, 5]

    def test_unknown_style_raises(self):
        with pytest.raises(UnknownStyleError, match="Unknown opening style 9"):
            get_recipe(9)

    @pytest.mark.parametrize("style_id", [1, 2, 3, 4, 5])
    def test_style_builds_valid_solid(self, style_id):
        w = opening(style_id, 60, 90)
        assert not w.is_empty()
        assert w.volume() > 0

    @pytest.mark.parametrize("style_id", [1, 2, 3, 4, 5])
    def test_style_spans_opening_width(self, style_id):
        min_x, min_y, min_z, max_x, max_y, max_z = opening(style_id, 60, 90).bounding_box()
        assert max_y - min_y >= 60 - 0.01

    def test_mirrored_turns_about_z(self):
        plain = opening(3, 60, 90).bounding_box()
        mirrored = opening(3, 60, 90, mirrored=True).bounding_box()
        assert abs(mirrored[0] + plain[3]) < 0.01
        assert abs(mirrored[3] + plain[0]) < 0.01
        assert abs(mirrored[2] - plain[2]) < 0.01


class TestSelectStyle:
    def test_uses_band_design(self):
        assert select_style(WindowBand(width_scale=2, height_scale=3, design=4)) == 4

    def test_full_width_forces_panel(self):
        band = WindowBand(width_scale=1, height_scale=2, design=4)
        assert select_style(band) == FULL_PANEL_STYLE

    def test_full_height_forces_panel(self):
        band = WindowBand(width_scale=2, height_scale=1, design=5)
        assert select_style(band) == FULL_PANEL_STYLE


class TestDoor:
    def test_door_reaches_ground(self):
        d = door(50, 60, tile_width=100, tile_height=120, bottom_allowance=200)
        min_x, min_y, min_z, max_x, max_y, max_z = d.bounding_box()
        # Posts end at the bottom of the tile, lowered by the allowance
        assert abs(min_z - (-60 - 200)) < 0.01

    def test_door_posts_span(self):
        d = door(50, 60, tile_width=100, tile_height=120, bottom_allowance=0)
        min_x, min_y, min_z, max_x, max_y, max_z = d.bounding_box()
        # Posts of diameter 20 centered at +/-0.6w reach past the 1.5w canopy
        assert abs((max_y - min_y) - 80) < 0.01

    def test_door_larger_than_tile_raises(self):
        with pytest.raises(GeometryError, match="does not fit"):
            door(150, 60, tile_width=100, tile_height=120, bottom_allowance=0)


class TestRailing:
    def test_spans_facade(self):
        r = railing(100, 150, 40, 600)
        min_x, min_y, min_z, max_x, max_y, max_z = r.bounding_box()
        assert abs((max_y - min_y) - 600) < 0.01

    def test_sticks_out_towards_negative_x(self):
        r = railing(100, 150, 40, 600)
        min_x, min_y, min_z, max_x, max_y, max_z = r.bounding_box()
        assert abs(min_x - (-1 - 20)) < 0.01
        assert abs(max_x - (-1 + 20)) < 0.01

    def test_rails_below_tile_top(self):
        r = railing(100, 150, 40, 600)
        *_, max_z = r.bounding_box()
        assert max_z < 75


class TestMasses:
    def test_rectangle_overhang_extents(self):
        overhang = OverhangParams(width=20, thickness=10, height=20)
        m = rectangle_mass(400, 300, 500, overhang)
        min_x, min_y, min_z, max_x, max_y, max_z = m.bounding_box()
        assert abs((max_x - min_x) - 440) < 0.01
        assert abs((max_y - min_y) - 340) < 0.01
        assert abs(min_z + 250) < 0.01

    def test_rectangle_volume_at_least_envelope(self):
        m = rectangle_mass(400, 300, 500, OverhangParams())
        assert m.volume() >= 400 * 300 * 500

    @pytest.mark.parametrize("sides", [3, 5, 6])
    def test_polygon_mass(self, sides):
        m = polygon_mass(200, 400, sides, OverhangParams())
        assert not m.is_empty()
        assert m.volume() > regular_prism(200, 400, sides).volume()

    def test_l_shape_band_corner_tables(self):
        bands = l_shape_band_corners(400, 300, 200, 250, 500, OverhangParams())
        assert len(bands) == 3
        for outer, cutter in bands:
            assert len(outer) == 8
            assert len(cutter) == 8

    def test_l_shape_mass(self):
        m = l_shape_mass(400, 300, 200, 250, 500, OverhangParams())
        assert not m.is_empty()
        min_x, min_y, min_z, max_x, max_y, max_z = m.bounding_box()
        assert abs(min_z + 250) < 0.01
        assert m.volume() > 400 * 300 * 500
