"""Boolean operations with empty-manifold guards.

All operations filter empty manifolds before processing. An empty
manifold stands for "no geometry" (for example a removed window cell).
"""

from manifold3d import Manifold, OpType

from building_grammar.errors import GeometryError


def _filter_empty(parts: list[Manifold]) -> list[Manifold]:
    """Remove empty manifolds from a list."""
    return [p for p in parts if not p.is_empty()]


def union_all(parts: list[Manifold]) -> Manifold:
    """Union a list of manifolds. Filters empty manifolds first.

    Returns an empty Manifold if no valid parts remain.
    """
    valid = _filter_empty(parts)
    if not valid:
        return Manifold()
    if len(valid) == 1:
        return valid[0]
    return Manifold.batch_boolean(valid, OpType.Add)


def union_tree(parts: list[Manifold]) -> Manifold:
    """Union a list of manifolds by pairwise reduction.

    Neighbours are combined level by level, so intermediate solids stay
    balanced instead of growing along one long left-to-right fold.
    """
    level = _filter_empty(parts)
    if not level:
        return Manifold()
    while len(level) > 1:
        paired = [a + b for a, b in zip(level[0::2], level[1::2])]
        if len(level) % 2:
            paired.append(level[-1])
        level = paired
    return level[0]


def difference_all(base: Manifold, cutouts: list[Manifold]) -> Manifold:
    """Subtract all cutouts from base. Filters empty manifolds first.

    Raises GeometryError if base is empty.
    """
    if base.is_empty():
        raise GeometryError("Cannot subtract from an empty base manifold")
    valid_cutouts = _filter_empty(cutouts)
    if not valid_cutouts:
        return base
    cutter = union_all(valid_cutouts)
    if cutter.is_empty():
        return base
    return base - cutter


def evaluate(solid: Manifold, label: str, allow_empty: bool = False) -> Manifold:
    """Force the kernel to evaluate a lazily built solid.

    Raises GeometryError if the result is empty and that is not allowed.
    """
    if solid.num_vert() == 0 and not allow_empty:
        raise GeometryError(f"{label} produced an empty manifold")
    return solid
