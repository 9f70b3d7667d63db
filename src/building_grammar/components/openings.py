"""Window recipes, the style registry and the per-band style selector.

Each recipe builds a window centered on the origin in the facade's
local frame: the wall plane is X=0 with the outside towards -X, the
facade runs along +Y and Z points up. Part sizes are in building units.
"""

from __future__ import annotations

from typing import Callable

from manifold3d import Manifold

from building_grammar.config import WindowBand
from building_grammar.errors import UnknownStyleError
from building_grammar.geometry.booleans import union_all
from building_grammar.geometry.primitives import box, cylinder
from building_grammar.geometry.transforms import rotate, rotate_z, translate

OpeningRecipe = Callable[[float, float], Manifold]

# Global opening registry, keyed by style id
OPENING_STYLES: dict[int, OpeningRecipe] = {}

# Style used when a band's opening fills the whole tile
FULL_PANEL_STYLE = 1


def register_opening(style_id: int) -> Callable[[OpeningRecipe], OpeningRecipe]:
    """Decorator to register a window recipe in OPENING_STYLES."""

    def decorator(fn: OpeningRecipe) -> OpeningRecipe:
        OPENING_STYLES[style_id] = fn
        return fn

    return decorator


def _part(
    width: float,
    length: float,
    height: float,
    x: float = 0,
    y: float = 0,
    z: float = 0,
) -> Manifold:
    """A box moved to (x, y, z)."""
    return translate(box(width, length, height), x, y, z)


@register_opening(1)
def window_style_1(width: float, height: float) -> Manifold:
    """Full panel: sill, head and mullion bar between two round jambs."""
    parts = [
        _part(20, width * 1.5, 5, x=-1, z=-height / 2),
        _part(10, width * 1.5, 5, x=-1, z=height / 2),
        _part(5, width, 3, x=-1),
    ]
    jamb = cylinder(height, diameter=5)
    for i in range(2):
        parts.append(translate(jamb, x=-1, y=width / 2 - width * i))
    return union_all(parts)


@register_opening(2)
def window_style_2(width: float, height: float) -> Manifold:
    """Thin frame with a center post, mirrored side posts and rails."""
    parts = [
        _part(2, width * 1.5, 0.5, x=-2, z=-height / 2),
        _part(1, width * 1.5, 0.5, x=-2, z=height / 2),
        _part(height * 0.1, height * 0.1, height, x=-2),
    ]
    post = _part(height * 0.1, height * 0.15, height, x=-1, y=width / 2 * 1.2)
    rail = _part(0.5, width, 2, x=-2, z=height / 2 * 0.3)
    for i in range(2):
        parts.append(rotate(post, x=180 * i))
        parts.append(rotate(rail, x=180 * i))
    return union_all(parts)


@register_opening(3)
def window_style_3(width: float, height: float) -> Manifold:
    """Deep stepped sill with a slanted hood and two shutters."""
    hood = _part(width * 0.5, width * 1.6, 10, x=40, z=height / 2)
    parts = [
        _part(30, width * 1.2, 10, x=-1, z=-height / 2 * 1.15),
        _part(50, width * 1.3, 10, x=-1, z=-height / 2),
        _part(1, width * 1.3, 0.5, x=-1, z=height / 2),
        _part(4.5, width, 2, x=-1, z=height / 2 * 0.2),
        rotate(hood, y=-45),
        _part(height * 0.1, height * 0.1, height * 0.6, x=-1, z=-height / 5),
    ]
    shutter = _part(height * 0.3, height * 0.15, height, x=-1, y=width / 2 * 1.2)
    for i in range(2):
        parts.append(rotate(shutter, x=180 * i))
    return union_all(parts)


@register_opening(4)
def window_style_4(width: float, height: float) -> Manifold:
    """Round jambs with a deep lintel above and below."""
    jamb = translate(cylinder(height, diameter=5), x=-0.5, y=width / 2)
    lintel = _part(15, width, 4, z=height / 2)
    parts = []
    for i in range(2):
        parts.append(rotate(lintel, y=180 * i))
        parts.append(rotate(jamb, x=180 * i))
    return union_all(parts)


@register_opening(5)
def window_style_5(width: float, height: float) -> Manifold:
    """Framed window with tall columns and small turned knobs."""
    span = height * 1.35
    parts = [
        _part(10, width, 3, x=-0.5, z=span / 4),
        _part(25, width * 1.2, 5, x=-1, z=span / 10 - span / 4),
        _part(20, width * 1.2, 7, x=-1, z=span / 10 + span / 4),
        _part(4, width, 1, x=-0.3, z=span / 12),
        _part(4, width, 1, x=-0.3, z=-span / 12),
    ]
    column = cylinder(height / 2 * 1.35, diameter=5)
    knob = translate(cylinder(height / 2, diameter=2), x=-0.5, y=width * 0.3, z=span / 20)
    for i in range(2):
        parts.append(translate(column, x=-0.5, y=width / 2 - width * i, z=span / 10))
        parts.append(rotate(knob, z=180 * i))
    return union_all(parts)


def select_style(band: WindowBand) -> int:
    """Style id for a band: the full panel when the opening fills its tile."""
    if band.width_scale == 1 or band.height_scale == 1:
        return FULL_PANEL_STYLE
    return band.design


def get_recipe(style_id: int) -> OpeningRecipe:
    """Look up a window recipe, raising UnknownStyleError if absent."""
    if style_id not in OPENING_STYLES:
        available = sorted(OPENING_STYLES)
        raise UnknownStyleError(
            f"Unknown opening style {style_id}. "
            f"Available: {', '.join(str(s) for s in available)}"
        )
    return OPENING_STYLES[style_id]


def opening(
    style_id: int,
    width: float,
    height: float,
    mirrored: bool = False,
) -> Manifold:
    """Build the opening for a style id.

    Mirrored facades turn the opening 180 degrees about Z.
    """
    solid = get_recipe(style_id)(width, height)
    if mirrored:
        solid = rotate_z(solid, 180)
    return solid
