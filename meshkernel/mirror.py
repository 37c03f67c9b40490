"""
Mirror Module

Duplicates a mesh reflected across an axis-aligned plane through the origin.
The result holds the original geometry plus the reflected copy. Mirrored
triangles have their winding reversed so their normals still face outward.

Vertices on the mirror plane are NOT welded; coincident vertices stay
duplicated.
"""

import logging
from enum import Enum

import numpy as np

from meshkernel.edit_mesh import EditMesh

logger = logging.getLogger(__name__)


class MirrorAxis(Enum):
    """Axis to mirror across (the plane is perpendicular to it)."""
    X = "x"
    Y = "y"
    Z = "z"

    @property
    def index(self) -> int:
        """Component index of the axis in a 3D vector."""
        return "xyz".index(self.value)

    @property
    def display_name(self) -> str:
        return self.name


def mirror_mesh(mesh: EditMesh, axis: MirrorAxis) -> EditMesh:
    """
    Mirror the entire mesh across an axis-aligned plane through the origin.

    Args:
        mesh: Source mesh (not modified)
        axis: Axis whose component is negated

    Returns:
        New EditMesh with 2x the vertices and 2x the triangles
    """
    axis = MirrorAxis(axis)
    vert_count = mesh.vertex_count

    mirrored_pos = mesh.positions.copy()
    mirrored_nrm = mesh.normals.copy()
    mirrored_pos[:, axis.index] *= -1.0
    mirrored_nrm[:, axis.index] *= -1.0

    # Swap the 2nd and 3rd index to reverse winding
    mirrored_tris = mesh.triangles[:, [0, 2, 1]] + vert_count

    result = EditMesh(
        positions=np.vstack([mesh.positions, mirrored_pos]),
        normals=np.vstack([mesh.normals, mirrored_nrm]),
        uvs=np.vstack([mesh.uvs, mesh.uvs]),
        triangles=np.vstack([mesh.triangles, mirrored_tris]),
    )

    logger.info(
        f"Mirrored across {axis.display_name}: "
        f"{vert_count} -> {result.vertex_count} vertices, "
        f"{mesh.face_count} -> {result.face_count} faces"
    )
    return result
