"""Tests for geometry primitives, booleans, and transforms."""

import math

import pytest
from manifold3d import Manifold

from building_grammar.errors import GeometryError
from building_grammar.geometry.booleans import (
    difference_all,
    evaluate,
    union_all,
    union_tree,
)
from building_grammar.geometry.primitives import (
    apothem,
    box,
    circumradius,
    convex_hull,
    cube,
    cylinder,
    regular_prism,
    unit_cube,
    unit_prism,
)
from building_grammar.geometry.transforms import rotate, safe_scale, translate


def extents(solid):
    min_x, min_y, min_z, max_x, max_y, max_z = solid.bounding_box()
    return (max_x - min_x, max_y - min_y, max_z - min_z)


class TestBox:
    def test_box_volume(self):
        b = box(2, 3, 4)
        assert abs(b.volume() - 24.0) < 0.01

    def test_box_centered_on_all_axes(self):
        b = box(4, 6, 2)
        min_x, min_y, min_z, max_x, max_y, max_z = b.bounding_box()
        assert abs(min_x + 2) < 0.01
        assert abs(max_y - 3) < 0.01
        assert abs(min_z + 1) < 0.01
        assert abs(max_z - 1) < 0.01

    def test_cube(self):
        assert abs(cube(3).volume() - 27.0) < 0.01

    def test_zero_width_raises(self):
        with pytest.raises(GeometryError):
            box(0, 1, 1)

    def test_negative_height_raises(self):
        with pytest.raises(GeometryError):
            box(1, 1, -1)

    def test_template_is_shared(self):
        assert unit_cube() is unit_cube()
        box(5, 5, 5)
        assert abs(unit_cube().volume() - 1.0) < 1e-9


class TestCylinder:
    def test_height_and_diameter(self):
        c = cylinder(10, diameter=4)
        dx, dy, dz = extents(c)
        assert abs(dz - 10) < 0.01
        assert abs(dx - 4) < 0.01

    def test_centered(self):
        min_x, min_y, min_z, max_x, max_y, max_z = cylinder(6).bounding_box()
        assert abs(min_z + 3) < 0.01
        assert abs(max_z - 3) < 0.01

    def test_zero_diameter_raises(self):
        with pytest.raises(GeometryError):
            cylinder(5, diameter=0)


class TestPolygonMeasures:
    def test_square(self):
        assert abs(apothem(2, 4) - 1.0) < 1e-9
        assert abs(circumradius(2, 4) - math.sqrt(2)) < 1e-9

    def test_hexagon_circumradius_equals_side(self):
        assert abs(circumradius(10, 6) - 10) < 1e-9


class TestRegularPrism:
    def test_first_vertex_on_positive_x(self):
        p = regular_prism(10, 5, 6)
        min_x, min_y, min_z, max_x, max_y, max_z = p.bounding_box()
        assert abs(max_x - circumradius(10, 6)) < 0.01

    def test_height(self):
        _, _, dz = extents(regular_prism(10, 7, 5))
        assert abs(dz - 7) < 0.01

    def test_circumradius_addition(self):
        p = regular_prism(10, 5, 6, circumradius_addition=3)
        min_x, _, _, max_x, _, _ = p.bounding_box()
        assert abs(max_x - 13) < 0.01

    def test_square_prism_volume(self):
        p = regular_prism(2, 1, 4)
        assert abs(p.volume() - 4.0) < 0.01

    def test_too_few_sides_raises(self):
        with pytest.raises(GeometryError):
            unit_prism(2)


class TestConvexHull:
    def test_tetrahedron(self):
        hull = convex_hull([(0, 0, 0), (1, 0, 0), (0, 1, 0), (0, 0, 1)])
        assert abs(hull.volume() - 1 / 6) < 1e-6

    def test_flat_points_raise(self):
        with pytest.raises(GeometryError):
            convex_hull([(0, 0, 0), (1, 0, 0), (0, 1, 0), (1, 1, 0)])

    def test_too_few_points_raise(self):
        with pytest.raises(GeometryError):
            convex_hull([(0, 0, 0), (1, 0, 0), (0, 1, 0)])


class TestTransforms:
    def test_translate(self):
        b = translate(box(2, 2, 2), x=5, z=-1)
        min_x, _, min_z, max_x, _, _ = b.bounding_box()
        assert abs(min_x - 4) < 0.01
        assert abs(min_z + 2) < 0.01

    def test_rotation_order_x_then_y(self):
        # X turns (1, 2, 3) into (1, 3, 2); Y then gives (2, 3, 1)
        dx, dy, dz = extents(rotate(box(1, 2, 3), x=90, y=90))
        assert abs(dx - 2) < 0.01
        assert abs(dy - 3) < 0.01
        assert abs(dz - 1) < 0.01

    def test_zero_rotation_is_identity(self):
        b = box(1, 2, 3)
        assert extents(rotate(b)) == extents(b)

    def test_safe_scale(self):
        s = safe_scale(box(1, 1, 1), 2, 3, 4)
        assert abs(s.volume() - 24.0) < 0.01


class TestBooleans:
    def test_union_all_filters_empty(self):
        r = union_all([box(1, 1, 1), Manifold()])
        assert abs(r.volume() - 1.0) < 0.01

    def test_union_all_empty_list(self):
        assert union_all([]).is_empty()

    def test_union_tree_matches_union_all(self):
        parts = [translate(box(1, 1, 1), x=3 * i) for i in range(5)]
        assert abs(union_tree(parts).volume() - 5.0) < 0.01
        assert abs(union_tree(parts).volume() - union_all(parts).volume()) < 1e-6

    def test_union_tree_empty(self):
        assert union_tree([Manifold(), Manifold()]).is_empty()

    def test_difference_all(self):
        r = difference_all(box(4, 4, 4), [box(2, 2, 6)])
        assert abs(r.volume() - (64 - 16)) < 0.01

    def test_difference_from_empty_raises(self):
        with pytest.raises(GeometryError):
            difference_all(Manifold(), [box(1, 1, 1)])

    def test_evaluate_rejects_empty(self):
        with pytest.raises(GeometryError, match="facade"):
            evaluate(Manifold(), "facade")

    def test_evaluate_allows_empty(self):
        assert evaluate(Manifold(), "facade", allow_empty=True).is_empty()
