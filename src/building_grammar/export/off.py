"""OFF (Object File Format) export via trimesh.

Layout: an `OFF` header line, `<vertices> <faces> 0`, one `x y z` line
per vertex and one `<n> i0 i1 ...` line per face.
"""

from __future__ import annotations

from pathlib import Path

from manifold3d import Manifold

from building_grammar.export.stl import manifold_to_trimesh


def export_off_text(solid: Manifold) -> str:
    """Export a Manifold as OFF text."""
    tmesh = manifold_to_trimesh(solid)
    text = tmesh.export(file_type="off")
    if isinstance(text, bytes):
        text = text.decode("utf-8")
    if not text.endswith("\n"):
        text += "\n"
    return text


def write_off(solid: Manifold, path: str | Path) -> Path:
    """Write a Manifold to an OFF file."""
    out = Path(path)
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(export_off_text(solid))
    return out
