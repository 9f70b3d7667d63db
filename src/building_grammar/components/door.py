"""Ground-row door component."""

from manifold3d import Manifold

from building_grammar.errors import GeometryError
from building_grammar.geometry.booleans import union_all
from building_grammar.geometry.primitives import box, cylinder
from building_grammar.geometry.transforms import translate


def door(
    width: float,
    height: float,
    tile_width: float,
    tile_height: float,
    bottom_allowance: float,
) -> Manifold:
    """Create a door with a canopy slab and two round posts.

    Built relative to the center of its tile; the whole door is then
    lowered by the bottom-row allowance so it reaches the ground.

    Args:
        width: Door width.
        height: Door height.
        tile_width: Width of the tile holding the door.
        tile_height: Height of the tile holding the door.
        bottom_allowance: Height of the band below the first row.
    """
    if width > tile_width or height > tile_height:
        raise GeometryError(
            f"door {width}x{height} does not fit its {tile_width}x{tile_height} tile"
        )
    drop = tile_height / 2 - height / 2

    canopy = translate(box(20, width * 1.5, 10), x=1, z=height / 2 - drop)
    post = cylinder(height, diameter=20)
    parts = [canopy]
    for i in range(2):
        parts.append(translate(post, y=width / 2 * 1.2 - width * i * 1.2, z=-drop))

    return translate(union_all(parts), z=-bottom_allowance)
