"""Building envelopes with flat roof caps and overhang bands.

All masses are centered on Z=0 (the final building is lifted by half
its height once the facades are attached).
"""

from manifold3d import Manifold

from building_grammar.config import OverhangParams
from building_grammar.geometry.booleans import union_all
from building_grammar.geometry.primitives import (
    BOOLEAN_OVERSHOOT,
    box,
    convex_hull,
    regular_prism,
)
from building_grammar.geometry.transforms import translate

Point = tuple[float, float, float]


def rectangle_mass(
    width: float,
    length: float,
    height: float,
    overhang: OverhangParams,
) -> Manifold:
    """Box envelope, a thin roof cap and a rectangular overhang ring.

    Width runs along X, length along Y.
    """
    ow, ot, oh = overhang.width, overhang.thickness, overhang.height

    building = box(width, length, height)
    roof = translate(
        box(width + ow * 1.99, length + ow * 1.99, 1), z=height / 2
    )

    ring = translate(box(width + ow * 2, length + ow * 2, oh), z=height / 2)
    ring_cut = translate(
        box(
            width + ow * 2 - ot * 2,
            length + ow * 2 - ot * 2,
            oh + 2 * BOOLEAN_OVERSHOOT,
        ),
        z=height / 2,
    )
    return union_all([building, roof, ring - ring_cut])


def polygon_mass(
    width: float,
    height: float,
    sides: int,
    overhang: OverhangParams,
) -> Manifold:
    """Regular prism envelope with a prism roof cap and overhang cup.

    The overhang cutter sits slightly higher than the overhang so the
    cup keeps a thin floor.
    """
    ow, ot, oh = overhang.width, overhang.thickness, overhang.height

    building = regular_prism(width, height, sides)
    roof = translate(
        regular_prism(width, oh * 0.1, sides, circumradius_addition=ow * 0.9),
        z=height / 2,
    )
    ring = translate(
        regular_prism(width, oh / 2, sides, circumradius_addition=ow),
        z=height / 2 + oh / 2,
    )
    ring_cut = translate(
        regular_prism(width, oh / 2, sides, circumradius_addition=ow - ot),
        z=height / 2 + oh / 2 * 1.01,
    )
    return union_all([building, roof, ring - ring_cut])


def _prism_points(
    corners: list[tuple[float, float]], z_top: float, z_bottom: float
) -> list[Point]:
    """Four plan corners at the top level followed by the same at the bottom."""
    return [(x, y, z_top) for x, y in corners] + [
        (x, y, z_bottom) for x, y in corners
    ]


def l_shape_band_corners(
    width_1: float,
    length_1: float,
    width_2: float,
    length_2: float,
    height: float,
    overhang: OverhangParams,
) -> list[tuple[list[Point], list[Point]]]:
    """Outer and cutter hull points of the three L-shape overhang bands.

    Band 1 runs along the long side of lobe 1, band 2 covers the corner
    shared with lobe 2 and band 3 runs along lobe 2. The cutter hulls are
    twice as tall as the bands so they pass through both faces.
    """
    w1, l1, w2, l2 = width_1, length_1, width_2, length_2
    ow, ot, oh = overhang.width, overhang.thickness, overhang.height
    h2 = height / 2

    band_1 = _prism_points(
        [
            (l2 / 2 + l1 + ow, w1 / 2 + ow),
            (l2 / 2 + l1 + ow, -w1 / 2 - ow),
            (l2 / 2 + ow - ot, w1 / 2 + ow),
            (l2 / 2 + ow - ot, -w1 / 2 - ow),
        ],
        h2 + oh / 2,
        h2 - oh / 2,
    )
    band_1_cut = _prism_points(
        [
            (l2 / 2 + l1 + ow - ot, w1 / 2 + ow - ot),
            (l2 / 2 + l1 + ow - ot, -w1 / 2 - ow + ot),
            (l2 / 2 + ow - ot, w1 / 2 + ow - ot),
            (l2 / 2 + ow - ot, -w1 / 2 - ow + ot),
        ],
        h2 + oh,
        h2 - oh,
    )

    band_2 = _prism_points(
        [
            (-l2 / 2 - ow, -w1 / 2 - ow),
            (-l2 / 2 - ow, w1 / 2 + ow),
            (l2 / 2 + ow - ot, w1 / 2 + ow),
            (l2 / 2 + ow - ot, -w1 / 2 - ow),
        ],
        h2 + oh / 2,
        h2 - oh / 2,
    )
    band_2_cut = _prism_points(
        [
            (-l2 / 2 - ow + ot, -w1 / 2 - ow + ot),
            (-l2 / 2 - ow + ot, w1 / 2 + ow),
            (l2 + ow - ot, w1 + ow),
            (l2 + ow - ot, -w1 / 2 - ow + ot),
        ],
        h2 + oh,
        h2 - oh,
    )

    band_3 = _prism_points(
        [
            (l2 / 2 + ow, w1 / 2 + w2 + ow),
            (-l2 / 2 - ow, w1 / 2 + w2 + ow),
            (l2 / 2 + ow, w1 / 2 + ow),
            (-l2 / 2 - ow, w1 / 2 + ow),
        ],
        h2 + oh / 2,
        h2 - oh / 2,
    )
    band_3_cut = _prism_points(
        [
            (l2 / 2 + ow - ot, w1 / 2 + w2 + ow - ot),
            (-l2 / 2 - ow + ot, w1 / 2 + w2 + ow - ot),
            (l2 / 2 + ow - ot, w1 / 2 + ow),
            (-l2 / 2 - ow + ot, w1 / 4 + ow),
        ],
        h2 + oh,
        h2 - oh,
    )

    return [(band_1, band_1_cut), (band_2, band_2_cut), (band_3, band_3_cut)]


def l_shape_overhang_bands(
    width_1: float,
    length_1: float,
    width_2: float,
    length_2: float,
    height: float,
    overhang: OverhangParams,
) -> list[Manifold]:
    """Three hull-minus-hull bands that wrap the L's outer corners."""
    corners = l_shape_band_corners(
        width_1, length_1, width_2, length_2, height, overhang
    )
    return [convex_hull(outer) - convex_hull(cut) for outer, cut in corners]


def l_shape_mass(
    width_1: float,
    length_1: float,
    width_2: float,
    length_2: float,
    height: float,
    overhang: OverhangParams,
) -> Manifold:
    """Two abutting lobes with roof caps and three overhang bands.

    Lobe 1 spans X in [-length_2/2, length_1 + length_2/2] and Y in
    [-width_1/2, width_1/2]. Lobe 2 sits on its +Y side over X in
    [-length_2/2, length_2/2].
    """
    ow = overhang.width

    main = box(length_1 + length_2, width_1, height)

    wing = box(length_2, width_2, height)
    wing_roof = translate(
        box(length_2 + ow * 1.8, width_2 + ow * 1.8, 1), z=height / 2
    )
    wing = translate(
        union_all([wing, wing_roof]),
        x=-length_1 / 2,
        y=(width_1 + width_2) / 2,
    )

    main_roof = translate(
        box(length_1 + length_2 + ow * 1.8, width_1 + ow * 1.8, 1), z=height / 2
    )
    body = translate(union_all([main, wing, main_roof]), x=length_1 / 2)

    bands = l_shape_overhang_bands(
        width_1, length_1, width_2, length_2, height, overhang
    )
    return union_all([body] + bands)
