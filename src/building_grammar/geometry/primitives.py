"""Geometry primitives derived from shared unit templates.

Every template is built once per process and never modified. Derived
solids are produced by a single scale of the matching template, so they
stay topologically identical to it; only vertex coordinates differ.
All primitives are centered on the origin in X, Y and Z.
"""

import math
from functools import lru_cache

import numpy as np
from manifold3d import Manifold

from building_grammar.errors import GeometryError
from building_grammar.geometry.transforms import safe_scale

# Extend cutters past the faces they would otherwise share with the target
BOOLEAN_OVERSHOOT = 0.1

# Edge length of the unit cube template
TEMPLATE_WIDTH = 1.0
# Segments of the cylinder template
CYLINDER_SEGMENTS = 20


def _check_positive(value: float, name: str) -> None:
    """Raise GeometryError if value is not positive."""
    if value <= 0:
        raise GeometryError(f"{name} must be positive, got {value}")


@lru_cache(maxsize=None)
def unit_cube() -> Manifold:
    """Cube template of edge TEMPLATE_WIDTH, centered on the origin."""
    return Manifold.cube([TEMPLATE_WIDTH] * 3, center=True)


@lru_cache(maxsize=None)
def unit_prism(sides: int) -> Manifold:
    """Regular n-gon prism template: circumradius 1, height 1.

    Vertex i sits at angle 360*i/sides, so vertex 0 lies on +X.
    """
    if sides < 3:
        raise GeometryError(f"A prism needs at least 3 sides, got {sides}")
    step = 2 * math.pi / sides
    points = []
    for i in range(sides):
        x = math.cos(step * i)
        y = math.sin(step * i)
        points.append((x, y, 0.5))
        points.append((x, y, -0.5))
    return Manifold.hull_points(np.array(points, dtype=np.float64))


@lru_cache(maxsize=None)
def unit_cylinder(segments: int = CYLINDER_SEGMENTS) -> Manifold:
    """Cylinder template: radius 1, height 1."""
    return Manifold.cylinder(1.0, 1.0, circular_segments=segments, center=True)


def box(width: float, length: float, height: float) -> Manifold:
    """Create a box centered on the origin.

    Args:
        width: Size along X axis.
        length: Size along Y axis.
        height: Size along Z axis.
    """
    _check_positive(width, "width")
    _check_positive(length, "length")
    _check_positive(height, "height")
    return safe_scale(
        unit_cube(),
        width / TEMPLATE_WIDTH,
        length / TEMPLATE_WIDTH,
        height / TEMPLATE_WIDTH,
    )


def cube(width: float) -> Manifold:
    """Create a cube of edge `width` centered on the origin."""
    return box(width, width, width)


def cylinder(height: float, diameter: float = 1.0) -> Manifold:
    """Create a Z-aligned cylinder centered on the origin."""
    _check_positive(height, "height")
    _check_positive(diameter, "diameter")
    radius = diameter / 2
    return safe_scale(unit_cylinder(), radius, radius, height)


def circumradius(width: float, sides: int) -> float:
    """Center-to-vertex distance of a regular polygon with side `width`."""
    return width / (2 * math.sin(math.pi / sides))


def apothem(width: float, sides: int) -> float:
    """Center-to-edge-midpoint distance of a regular polygon with side `width`."""
    return width / (2 * math.tan(math.pi / sides))


def regular_prism(
    width: float,
    height: float,
    sides: int,
    circumradius_addition: float = 0.0,
) -> Manifold:
    """Create a regular n-gon prism centered on the origin.

    Args:
        width: Side length of the polygon before the addition.
        height: Prism height along Z.
        sides: Number of polygon sides.
        circumradius_addition: Extra distance added to the circumradius,
            used to grow roof and overhang rings past the footprint.
    """
    _check_positive(width, "width")
    _check_positive(height, "height")
    radius = circumradius(width, sides) + circumradius_addition
    _check_positive(radius, "circumradius")
    return safe_scale(unit_prism(sides), radius, radius, height)


def convex_hull(points: list[tuple[float, float, float]]) -> Manifold:
    """Create the convex hull of explicit 3-D points.

    Raises GeometryError if the hull is degenerate (flat or empty).
    """
    pts = np.asarray(points, dtype=np.float64)
    if pts.ndim != 2 or pts.shape[1] != 3 or pts.shape[0] < 4:
        raise GeometryError(f"Hull needs at least 4 3-D points, got {pts.shape}")
    hull = Manifold.hull_points(pts)
    if hull.is_empty() or hull.volume() <= 0:
        raise GeometryError("Convex hull is degenerate (zero volume)")
    return hull
