"""GLB export via trimesh for web preview."""

import io

from manifold3d import Manifold
import trimesh

from building_grammar.export.stl import manifold_to_trimesh


def export_glb_bytes(solid: Manifold) -> bytes:
    """Export a Manifold as GLB bytes for web preview."""
    tmesh = manifold_to_trimesh(solid)
    scene = trimesh.Scene(geometry={"building": tmesh})
    buffer = io.BytesIO()
    scene.export(buffer, file_type="glb")
    return buffer.getvalue()
