"""Facade composition: rows of tiles holding windows, doors and railings.

A facade is planned row by row first (tile sizes, which cell holds what,
which railing applies) and then folded into a solid. Planning is cheap
and exercises all of the grid rules without touching the CSG kernel.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from enum import Enum

from manifold3d import Manifold

from building_grammar.components.door import door
from building_grammar.components.openings import opening, select_style
from building_grammar.components.railing import railing
from building_grammar.config import BandGrid, ParameterSet, RailingSpec, WindowBand
from building_grammar.errors import BuildTimeoutError
from building_grammar.geometry.booleans import evaluate, union_all, union_tree
from building_grammar.geometry.transforms import rotate, translate
from building_grammar.layout.footprint import FacadePlacement

logger = logging.getLogger(__name__)

BOTTOM = "bottom"
CENTER = "center"
TOP = "top"


class CellKind(str, Enum):
    """What a single tile of a level holds."""

    OPENING = "opening"
    DOOR = "door"
    REMOVED = "removed"
    EMPTY = "empty"  # bottom row without a bottom allowance


@dataclass(frozen=True)
class LevelPlan:
    """Resolved sizes and cell contents of one facade row."""

    row: int
    side: int
    band: str
    facade_width: float
    tile_width: float
    tile_height: float
    bottom_allowance: float
    vertical_offset: float
    opening_width: float
    opening_height: float
    opening_z: float
    style_id: int | None
    door_width: float
    door_height: float
    mirror_openings: bool
    cells: tuple[CellKind, ...]
    railing: RailingSpec | None = None

    @property
    def columns(self) -> int:
        return len(self.cells)

    @property
    def base_z(self) -> float:
        """Bottom of the row's tile in the facade frame."""
        return self.bottom_allowance + self.row * self.tile_height

    def cell_center(self, column: int) -> tuple[float, float]:
        """(y, z) of a tile center in the facade frame."""
        return (
            self.tile_width * column + self.tile_width / 2,
            self.base_z + self.tile_height / 2,
        )

    def count(self, kind: CellKind) -> int:
        return sum(1 for cell in self.cells if cell == kind)


def band_for_row(row: int, grid_height: int) -> str:
    """Row 0 is the bottom band, the last row the top band."""
    if row == 0:
        return BOTTOM
    if row == grid_height - 1:
        return TOP
    return CENTER


def bands_in_use(grid_height: int) -> list[str]:
    """Bands that own at least one row, bottom to top."""
    bands = []
    for row in range(grid_height):
        band = band_for_row(row, grid_height)
        if band not in bands:
            bands.append(band)
    return bands


def band_parameters(params: ParameterSet, band: str) -> tuple[BandGrid, WindowBand]:
    """Grid and window settings of a band."""
    if band == BOTTOM:
        return params.grid_bottom, params.window_bottom
    if band == TOP:
        return params.grid_top, params.window_top
    return params.grid_center, params.window_center


def match_railing(
    railings: tuple[RailingSpec, ...], row: int, side: int
) -> RailingSpec | None:
    """First railing rule matching the row and side; later matches are ignored."""
    for rule in railings:
        if rule.matches(row, side):
            return rule
    return None


def is_removed(params: ParameterSet, column: int, row: int, side: int) -> bool:
    """True if any removal rule matches the cell."""
    return any(rule.matches(column, row, side) for rule in params.removals)


def plan_level(
    params: ParameterSet,
    placement: FacadePlacement,
    row: int,
) -> LevelPlan:
    """Resolve tile and opening sizes and the content of every cell of a row."""
    band = band_for_row(row, params.grid_height)
    grid, window = band_parameters(params, band)
    columns = grid.columns_for(placement.grid_side, band)

    bottom_allowance = params.bottom_tile_height * 2
    tile_width = placement.length / columns
    tile_height = (params.height - bottom_allowance) / params.grid_height
    vertical_offset = params.effective_vertical_offset

    opening_width = tile_width / window.width_scale
    if row == 0:
        # The bottom row's opening sits in the allowance below the grid
        opening_height = bottom_allowance / window.height_scale
        opening_z = -bottom_allowance + opening_height / 2
        has_opening = bottom_allowance > 0
    else:
        opening_height = tile_height / window.height_scale
        opening_z = vertical_offset
        has_opening = True

    cells = []
    for column in range(columns):
        if placement.door_enabled and row == 0 and column == params.door.column:
            cells.append(CellKind.DOOR)
        elif is_removed(params, column, row, placement.side):
            cells.append(CellKind.REMOVED)
        elif has_opening:
            cells.append(CellKind.OPENING)
        else:
            cells.append(CellKind.EMPTY)

    return LevelPlan(
        row=row,
        side=placement.side,
        band=band,
        facade_width=placement.length,
        tile_width=tile_width,
        tile_height=tile_height,
        bottom_allowance=bottom_allowance,
        vertical_offset=vertical_offset,
        opening_width=opening_width,
        opening_height=opening_height,
        opening_z=opening_z,
        style_id=select_style(window) if has_opening else None,
        door_width=tile_width / params.door.width_scale,
        door_height=tile_height / params.door.height_scale,
        mirror_openings=placement.mirror_openings,
        cells=tuple(cells),
        railing=match_railing(params.railings, row, placement.side),
    )


def plan_facade(params: ParameterSet, placement: FacadePlacement) -> list[LevelPlan]:
    """Plans for every row of a facade, bottom to top."""
    return [plan_level(params, placement, row) for row in range(params.grid_height)]


def build_level(plan: LevelPlan) -> Manifold:
    """Fold a level plan into one solid in the facade frame."""
    parts = []

    if plan.railing is not None:
        rail = railing(
            plan.tile_width, plan.tile_height, plan.railing.scale, plan.facade_width
        )
        rail = translate(
            rail,
            y=plan.facade_width / 2,
            z=plan.base_z + plan.tile_height / 2 + plan.vertical_offset,
        )
        parts.append(rail)
        logger.debug("Railing on side %d, row %d", plan.side, plan.row)

    # One opening per row, reused by every cell
    window = None
    if plan.count(CellKind.OPENING):
        window = opening(
            plan.style_id,
            plan.opening_width,
            plan.opening_height,
            mirrored=plan.mirror_openings,
        )
        window = translate(window, z=plan.opening_z)

    for column, kind in enumerate(plan.cells):
        if kind == CellKind.DOOR:
            solid = door(
                plan.door_width,
                plan.door_height,
                plan.tile_width,
                plan.tile_height,
                plan.bottom_allowance,
            )
            logger.debug("Door on side %d, column %d", plan.side, column)
        elif kind == CellKind.OPENING:
            solid = window
        else:
            continue
        y, z = plan.cell_center(column)
        parts.append(translate(solid, y=y, z=z))

    return union_all(parts)


def build_facade(
    plans: list[LevelPlan],
    placement: FacadePlacement,
    deadline: float | None = None,
) -> Manifold:
    """Stack the planned levels of a facade and move it into the building frame.

    Each level is evaluated before the next one starts. With a deadline
    (a ``time.time()`` value) the stack stops with BuildTimeoutError at
    the first row that begins after it.
    """
    levels = []
    for plan in plans:
        if deadline is not None and time.time() > deadline:
            raise BuildTimeoutError(
                f"Facade on side {placement.side} stopped at row {plan.row}: "
                "build deadline passed"
            )
        levels.append(evaluate(build_level(plan), f"row {plan.row}", allow_empty=True))
    facade = union_tree(levels)
    facade = translate(facade, *placement.origin)
    return rotate(facade, *placement.rotation)
