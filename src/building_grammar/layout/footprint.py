"""Facade placements around each footprint topology.

A facade is built in its own frame (wall plane X=0, running along +Y
from 0 to its length, base at Z=0), then translated to `origin` and
rotated by `rotation` (X, then Y, then Z) into the building frame.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from building_grammar.config import ParameterSet, Topology
from building_grammar.errors import InvalidParamsError
from building_grammar.geometry.primitives import apothem

Vec3 = tuple[float, float, float]


@dataclass(frozen=True)
class FacadePlacement:
    """Where one facade goes and which parameters drive it."""

    length: float
    origin: Vec3
    rotation: Vec3
    side: int  # matched against removal and railing rules
    grid_side: int  # index into the band column counts
    door_enabled: bool = False
    mirror_openings: bool = False


def rectangle_facades(width: float, length: float, height: float) -> list[FacadePlacement]:
    """Two facades along the length axis, then two along the width axis.

    Both facades of a pair share one side index; the door goes on the
    first facade.
    """
    placements = []
    for i in range(2):
        placements.append(
            FacadePlacement(
                length=length,
                origin=(-width / 2, -length / 2, -height / 2),
                rotation=(0, 0, 180 * i),
                side=0,
                grid_side=0,
                door_enabled=i == 0,
            )
        )
    for i in range(2):
        placements.append(
            FacadePlacement(
                length=width,
                origin=(-length / 2, -width / 2, -height / 2),
                rotation=(0, 0, 90 + 180 * i),
                side=1,
                grid_side=1,
            )
        )
    return placements


def polygon_step_angle(sides: int) -> float:
    """Half the angle between neighbouring facades: 180 - (interior/2 + 90)."""
    interior = (sides - 2) * 180 / sides
    return 180 - (interior / 2 + 90)


def polygon_facades(width: float, height: float, sides: int) -> list[FacadePlacement]:
    """One facade per polygon edge, all of length `width`.

    Facades start at the apothem on +X and are turned onto the edge
    midpoints, which sit at odd multiples of the step angle. They all use
    the first band column count and face inward before mirroring, so their
    openings are turned around.
    """
    step = polygon_step_angle(sides)
    distance = apothem(width, sides)
    return [
        FacadePlacement(
            length=width,
            origin=(distance, -width / 2, -height / 2),
            rotation=(0, 0, step * (2 * k + 1)),
            side=k,
            grid_side=0,
            door_enabled=k == 0,
            mirror_openings=True,
        )
        for k in range(sides)
    ]


def l_shape_facades(
    width_1: float,
    length_1: float,
    width_2: float,
    length_2: float,
    height: float,
) -> list[FacadePlacement]:
    """The six facades of the L, in fixed side order.

    0: west wall of both lobes, 1: north wall of lobe 2, 2: south wall of
    lobe 1, 3: east end of lobe 1, 4: inner wall of lobe 2, 5: inner wall
    of lobe 1.
    """
    w1, l1, w2, l2 = width_1, length_1, width_2, length_2
    z = -height / 2
    table = [
        (w1 + w2, (-l2 / 2, -w1 / 2, z), 0),
        (l2, (-(w1 / 2 + w2), -l2 / 2, z), 270),
        (l1 + l2, (-w1 / 2, -(l2 / 2 + l1), z), 90),
        (w1, (-(l2 / 2 + l1), -w1 / 2, z), 180),
        (w2, (-l2 / 2, -(w1 / 2 + w2), z), 180),
        (l1, (-w1 / 2, l2 / 2, z), 270),
    ]
    return [
        FacadePlacement(
            length=length,
            origin=origin,
            rotation=(0, 0, angle),
            side=side,
            grid_side=side,
            door_enabled=side == 0,
        )
        for side, (length, origin, angle) in enumerate(table)
    ]


def _rectangle(params: ParameterSet) -> list[FacadePlacement]:
    return rectangle_facades(params.width_1, params.length_1, params.height)


def _polygon(params: ParameterSet) -> list[FacadePlacement]:
    return polygon_facades(params.width_1, params.height, params.sides)


def _l_shape(params: ParameterSet) -> list[FacadePlacement]:
    return l_shape_facades(
        params.width_1, params.length_1, params.width_2, params.length_2, params.height
    )


FACADE_LAYOUTS: dict[Topology, Callable[[ParameterSet], list[FacadePlacement]]] = {
    Topology.RECTANGLE: _rectangle,
    Topology.POLYGON: _polygon,
    Topology.L_SHAPE: _l_shape,
}


def enumerate_facades(params: ParameterSet) -> list[FacadePlacement]:
    """All facade placements for the parameter set's footprint."""
    if params.shape not in FACADE_LAYOUTS:
        raise InvalidParamsError(f"Unknown footprint shape '{params.shape}'")
    return FACADE_LAYOUTS[params.shape](params)
