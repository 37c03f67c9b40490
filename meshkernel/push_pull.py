"""
Push/Pull Module

Moves selected faces along their face normals without creating side walls
(unlike an extrude, which adds connecting geometry).

Vertices are classified against the selection:
- interior: used only by selected faces, moved in place
- boundary: also used by an unselected face, duplicated so the unselected
  faces keep the original (unmoved) vertex while the selected faces are
  remapped onto the moved copy
"""

import logging
from typing import Iterable

import numpy as np

from meshkernel.edit_mesh import EditMesh, INDEX_DTYPE, POSITION_DTYPE
from meshkernel.selection import face_mask, boundary_vertices

logger = logging.getLogger(__name__)

PARAM_EPSILON = 1e-6


def push_pull_faces(mesh: EditMesh, selected: Iterable[int], distance: float) -> EditMesh:
    """
    Push or pull selected faces along their face normals.

    Every selected face contributes `face_normal * distance` to each of its
    vertices; a vertex touched by several selected faces moves by the
    average of those contributions.

    Args:
        mesh: Source mesh (not modified)
        selected: Selected face indices; out-of-range entries are ignored
        distance: Signed offset along the face normals

    Returns:
        New EditMesh with the selected faces moved
    """
    mask = face_mask(mesh, selected)
    if not mask.any() or abs(distance) < PARAM_EPSILON:
        logger.debug("Push/pull skipped (empty selection or zero distance)")
        return mesh.copy()

    selected_ids = np.flatnonzero(mask)
    selected_tris = mesh.triangles[selected_ids]
    face_normals = mesh.face_normals()[selected_ids]

    # Accumulate per-vertex offsets and contribution counts
    offset = np.zeros((mesh.vertex_count, 3), dtype=POSITION_DTYPE)
    count = np.zeros(mesh.vertex_count, dtype=INDEX_DTYPE)
    for corner in range(3):
        np.add.at(offset, selected_tris[:, corner], face_normals * distance)
        np.add.at(count, selected_tris[:, corner], 1)
    touched = count > 0
    offset[touched] /= count[touched, np.newaxis]

    boundary = np.array(sorted(boundary_vertices(mesh, selected_ids)), dtype=INDEX_DTYPE)
    interior = touched.copy()
    interior[boundary] = False

    positions = mesh.positions.copy()
    positions[interior] += offset[interior]

    # Duplicates are appended in ascending original-index order
    dup_ids = mesh.vertex_count + np.arange(len(boundary), dtype=INDEX_DTYPE)
    remap = np.arange(mesh.vertex_count, dtype=INDEX_DTYPE)
    remap[boundary] = dup_ids

    triangles = mesh.triangles.copy()
    triangles[selected_ids] = remap[selected_tris]

    result = EditMesh(
        positions=np.vstack([positions, mesh.positions[boundary] + offset[boundary]]),
        normals=np.vstack([mesh.normals, mesh.normals[boundary]]),
        uvs=np.vstack([mesh.uvs, mesh.uvs[boundary]]),
        triangles=triangles,
    )
    result.recompute_normals()

    logger.info(
        f"Push/pull {len(selected_ids)} faces by {distance:.4f}: "
        f"{int(interior.sum())} vertices moved in place, {len(boundary)} duplicated"
    )
    return result
