"""Railing component spanning a full facade row."""

from manifold3d import Manifold

from building_grammar.geometry.booleans import union_all
from building_grammar.geometry.primitives import box
from building_grammar.geometry.transforms import rotate, rotate_z, safe_scale, translate


def railing(
    tile_width: float,
    tile_height: float,
    scale: float,
    facade_width: float,
) -> Manifold:
    """Create a two-rail railing along the facade.

    The top rail sticks out `scale` units from the wall, the bottom rail
    half as far. Centered on Y, heights relative to the row's tile center.

    Args:
        tile_width: Width of the row's tiles (unused by the rail profile).
        tile_height: Height of the row's tiles.
        scale: Depth of the top rail.
        facade_width: Full length of the facade.
    """
    rail = rotate(box(tile_height / 5, facade_width, 1), 90, 90, 90)

    top = safe_scale(rail, sx=scale)
    top = translate(top, x=1, z=tile_height / 2 - tile_height / 5)

    bottom = safe_scale(rail, sx=scale / 2)
    bottom = translate(bottom, x=1, z=tile_height / 2 - tile_height / 3)

    return rotate_z(union_all([top, bottom]), 180)
