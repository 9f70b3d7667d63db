"""Validation checks for generated building geometry."""

import numpy as np
from manifold3d import Manifold

from building_grammar.errors import ValidationError
from building_grammar.export.stl import manifold_to_trimesh

# Checks that must pass for a mesh to be written
CRITICAL_CHECKS = (
    "is_watertight",
    "positive_volume",
    "triangle_count_ok",
)


def validate_manifold(solid: Manifold, max_triangles: int = 2_000_000) -> dict:
    """Run validation checklist on a generated manifold.

    Returns a dict with check results and overall pass/fail.
    """
    results = {}

    # Convert to trimesh for checks
    tmesh = manifold_to_trimesh(solid)

    # 1. Watertight
    results["is_watertight"] = bool(tmesh.is_watertight)

    # 2. Positive volume
    vol = tmesh.volume
    results["volume"] = float(vol)
    results["positive_volume"] = vol > 0

    # 3. Base resting on Z=0
    bbox = tmesh.bounds
    size = bbox[1] - bbox[0]
    results["base_at_z0"] = bool(abs(bbox[0][2]) <= 1e-6 * max(1.0, float(size.max())))

    # 4. Triangle count
    tri_count = len(tmesh.faces)
    results["triangle_count"] = tri_count
    results["triangle_count_ok"] = 4 <= tri_count <= max_triangles

    # 5. No degenerate triangles
    areas = tmesh.area_faces
    results["no_degenerate_triangles"] = bool(np.all(areas > 1e-10))

    results["pass"] = all(results.get(c, False) for c in CRITICAL_CHECKS)
    return results


def require_valid(solid: Manifold, max_triangles: int = 2_000_000) -> dict:
    """Validate and raise ValidationError naming the failed critical checks."""
    results = validate_manifold(solid, max_triangles=max_triangles)
    if not results["pass"]:
        failed = [c for c in CRITICAL_CHECKS if not results.get(c, False)]
        raise ValidationError(f"Mesh failed checks: {', '.join(failed)}")
    return results
