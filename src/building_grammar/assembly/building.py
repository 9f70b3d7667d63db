"""Top-level grammar, BuildingBuilder orchestrator and BuildResult dataclass."""

from __future__ import annotations

import logging
import time
from concurrent.futures import Future, ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeoutError
from dataclasses import dataclass, field
from functools import partial
from typing import Any, Callable

from manifold3d import Manifold

from building_grammar.components.facade import (
    BOTTOM,
    CellKind,
    band_parameters,
    bands_in_use,
    build_facade,
    plan_facade,
)
from building_grammar.components.massing import l_shape_mass, polygon_mass, rectangle_mass
from building_grammar.components.openings import get_recipe, select_style
from building_grammar.config import ParameterSet, Topology
from building_grammar.errors import BuildTimeoutError, InvalidParamsError
from building_grammar.geometry.booleans import evaluate, union_tree
from building_grammar.geometry.transforms import translate
from building_grammar.layout.footprint import FacadePlacement, enumerate_facades
from building_grammar.settings import Settings

logger = logging.getLogger(__name__)


def _rectangle(params: ParameterSet) -> Manifold:
    return rectangle_mass(params.width_1, params.length_1, params.height, params.overhang)


def _polygon(params: ParameterSet) -> Manifold:
    return polygon_mass(params.width_1, params.height, params.sides, params.overhang)


def _l_shape(params: ParameterSet) -> Manifold:
    return l_shape_mass(
        params.width_1,
        params.length_1,
        params.width_2,
        params.length_2,
        params.height,
        params.overhang,
    )


MASS_BUILDERS: dict[Topology, Callable[[ParameterSet], Manifold]] = {
    Topology.RECTANGLE: _rectangle,
    Topology.POLYGON: _polygon,
    Topology.L_SHAPE: _l_shape,
}


def compose_mass(params: ParameterSet) -> Manifold:
    """Envelope, roof caps and overhang for the footprint."""
    if params.shape not in MASS_BUILDERS:
        raise InvalidParamsError(f"Unknown footprint shape '{params.shape}'")
    return MASS_BUILDERS[params.shape](params)


def check_parameters(params: ParameterSet) -> list[FacadePlacement]:
    """Fail fast on anything composition would trip over.

    Every band that owns a row must hold a column count for every facade
    side the footprint uses (MissingParameterError), and every band that
    carries openings must resolve to a registered opening style
    (UnknownStyleError). The bottom band carries openings only with a
    bottom allowance.

    Returns the facade placements.
    """
    placements = enumerate_facades(params)
    bands = bands_in_use(params.grid_height)
    for placement in placements:
        for band in bands:
            grid, _ = band_parameters(params, band)
            grid.columns_for(placement.grid_side, band)
    for band in bands:
        if band == BOTTOM and params.bottom_tile_height <= 0:
            continue
        _, window = band_parameters(params, band)
        get_recipe(select_style(window))
    return placements


def compose_building(params: ParameterSet) -> Manifold:
    """Mass plus every facade, lifted so the base sits at Z=0.

    Builds inline; BuildingBuilder spreads the same work over a pool.
    """
    placements = check_parameters(params)
    parts = [compose_mass(params)]
    parts.extend(build_facade(plan_facade(params, p), p) for p in placements)
    return translate(union_tree(parts), z=params.height / 2)


@dataclass
class BuildResult:
    """Result of building a shell, including metadata."""

    manifold: Manifold
    triangle_count: int
    bounding_box: tuple
    is_watertight: bool
    facade_count: int
    opening_count: int
    door_count: int
    railing_count: int
    warnings: list[str] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)


class BuildingBuilder:
    """Orchestrator that builds a building shell from parameters.

    Responsibility: validate, plan, evaluate the mass and the facades as
    independent tasks, fold them and report statistics. Does NOT do
    geometry construction itself.
    """

    def __init__(self, settings: Settings) -> None:
        self.settings = settings

    def build(self, params: ParameterSet) -> BuildResult:
        """Build a building shell.

        1. Check parameters and enumerate facades
        2. Plan every facade once (counts and geometry share the plans)
        3. Evaluate the mass and each facade on the pool
        4. Fold with a pairwise reduction and lift to Z=0
        5. Return BuildResult with metadata

        Raises BuildTimeoutError if the build exceeds settings.build_timeout.
        Facade tasks already running stop at their next row.
        """
        start_time = time.time()
        warnings: list[str] = []

        # 1. Validate before any geometry is built
        placements = check_parameters(params)
        logger.info(
            "Building %s shell: %d facades, %d rows",
            params.shape.value, len(placements), params.grid_height,
        )

        # 2. Plans drive both the counts and the facade solids
        facade_plans = [plan_facade(params, p) for p in placements]
        plans = [plan for facade in facade_plans for plan in facade]
        opening_count = sum(plan.count(CellKind.OPENING) for plan in plans)
        door_count = sum(plan.count(CellKind.DOOR) for plan in plans)
        railing_count = sum(1 for plan in plans if plan.railing is not None)

        # 3-4. Evaluate independent subtrees, then fold
        deadline = start_time + self.settings.build_timeout
        workers = max(1, self.settings.max_workers)
        executor = ThreadPoolExecutor(max_workers=workers)
        try:
            tasks = [
                executor.submit(self._evaluate, partial(compose_mass, params), "mass")
            ]
            for i, (placement, levels) in enumerate(zip(placements, facade_plans)):
                # A facade whose cells were all removed is legitimately empty
                tasks.append(
                    executor.submit(
                        self._evaluate,
                        partial(build_facade, levels, placement, deadline=deadline),
                        f"facade {i}",
                        True,
                    )
                )
            parts = [self._wait(task, deadline) for task in tasks]

            folded = executor.submit(self._fold, parts, params.height)
            building = self._wait(folded, deadline)
        finally:
            executor.shutdown(wait=False, cancel_futures=True)

        # 5. Mesh statistics
        mesh = building.to_mesh()
        tri_count = mesh.tri_verts.shape[0]
        if tri_count > self.settings.max_triangles:
            warnings.append(
                f"Mesh has {tri_count} triangles, over the budget of "
                f"{self.settings.max_triangles}"
            )
            logger.warning("Mesh has %d triangles", tri_count)

        elapsed = time.time() - start_time
        logger.info(
            "Built %s shell in %.2fs: %d openings, %d doors, %d railings, %d triangles",
            params.shape.value, elapsed, opening_count, door_count,
            railing_count, tri_count,
        )

        return BuildResult(
            manifold=building,
            triangle_count=tri_count,
            bounding_box=building.bounding_box(),
            is_watertight=True,  # manifold3d guarantees watertight
            facade_count=len(placements),
            opening_count=opening_count,
            door_count=door_count,
            railing_count=railing_count,
            warnings=warnings,
            metadata={
                "shape": params.shape.value,
                "sides": params.sides if params.shape == Topology.POLYGON else None,
                "grid_height": params.grid_height,
                "generation_time_ms": round(elapsed * 1000),
            },
        )

    @staticmethod
    def _evaluate(
        build: Callable[[], Manifold],
        label: str,
        allow_empty: bool = False,
    ) -> Manifold:
        """Build a subtree and force the kernel to evaluate it."""
        solid = evaluate(build(), label, allow_empty=allow_empty)
        logger.debug("Evaluated %s (%d triangles)", label, solid.num_tri())
        return solid

    @staticmethod
    def _fold(parts: list[Manifold], height: float) -> Manifold:
        building = translate(union_tree(parts), z=height / 2)
        return evaluate(building, "building")

    @staticmethod
    def _wait(task: Future, deadline: float) -> Manifold:
        remaining = max(0.0, deadline - time.time())
        try:
            return task.result(timeout=remaining)
        except FutureTimeoutError as exc:
            raise BuildTimeoutError(
                "Build exceeded the configured timeout; no mesh was produced"
            ) from exc
