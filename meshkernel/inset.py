"""
Face Inset Module

Insets selected faces by creating a smaller inner triangle pulled toward
each face's centroid, then bridging the gap between the original (outer)
edges and the inner edges with quad strips.

Each selected face is processed individually: adjacent selected faces do not
share or weld their inner rings. Unselected faces keep their original vertex
indices, so outer vertices are never duplicated.

Triangle count: output = input - selected + 7 * selected
(1 inner triangle + 3 bridge quads of 2 triangles per selected face).
"""

import logging
from typing import Iterable

import numpy as np

from meshkernel.edit_mesh import EditMesh, normalize_rows, INDEX_DTYPE
from meshkernel.selection import face_mask

logger = logging.getLogger(__name__)

# Fraction range (0 = no change, 1 = collapse to centroid)
INSET_MIN_FRACTION = 0.001
INSET_MAX_FRACTION = 0.999

# Parameters with a smaller magnitude are treated as "no-op"
PARAM_EPSILON = 1e-6

TRIANGLES_PER_INSET_FACE = 7


def _lerp(start: np.ndarray, end: np.ndarray, t: float) -> np.ndarray:
    return start + (end - start) * t


def inset_faces(mesh: EditMesh, selected: Iterable[int], inset_fraction: float) -> EditMesh:
    """
    Inset each selected face individually.

    For a selected triangle (a, b, c):
    1. Create 3 inner vertices lerped toward the face centroid by the
       clamped fraction (positions, normals and UVs)
    2. Replace the triangle with the inner triangle (same winding)
    3. Add 3 bridge quads (6 triangles) joining each outer edge to the
       matching inner edge

    Args:
        mesh: Source mesh (not modified)
        selected: Selected face indices; out-of-range entries are ignored
        inset_fraction: Inset amount, clamped to [0.001, 0.999]

    Returns:
        New EditMesh with the inset applied
    """
    mask = face_mask(mesh, selected)
    if not mask.any() or abs(inset_fraction) < PARAM_EPSILON:
        logger.debug("Inset skipped (empty selection or zero fraction)")
        return mesh.copy()

    frac = float(np.clip(inset_fraction, INSET_MIN_FRACTION, INSET_MAX_FRACTION))

    selected_tris = mesh.triangles[mask]  # (K, 3)
    k = len(selected_tris)
    base = mesh.vertex_count

    # Corner attributes, (K, 3, D)
    corner_pos = mesh.positions[selected_tris]
    corner_nrm = mesh.normals[selected_tris]
    corner_uv = mesh.uvs[selected_tris]

    center = corner_pos.mean(axis=1, keepdims=True)
    nrm_center = normalize_rows(corner_nrm.mean(axis=1))[:, np.newaxis, :]
    uv_center = corner_uv.mean(axis=1, keepdims=True)

    inner_pos = _lerp(corner_pos, center, frac)
    inner_nrm = normalize_rows(_lerp(corner_nrm, nrm_center, frac).reshape(-1, 3)).reshape(k, 3, 3)
    inner_uv = _lerp(corner_uv, uv_center, frac)

    # Inner vertex ids: face j gets base + 3j + (0, 1, 2)
    inner_ids = base + np.arange(k * 3, dtype=INDEX_DTYPE).reshape(k, 3)

    a, b, c = selected_tris[:, 0], selected_tris[:, 1], selected_tris[:, 2]
    ia, ib, ic = inner_ids[:, 0], inner_ids[:, 1], inner_ids[:, 2]

    new_faces = np.stack([
        np.stack([ia, ib, ic], axis=1),   # inner triangle
        np.stack([a, b, ib], axis=1),     # edge a->b
        np.stack([a, ib, ia], axis=1),
        np.stack([b, c, ic], axis=1),     # edge b->c
        np.stack([b, ic, ib], axis=1),
        np.stack([c, a, ia], axis=1),     # edge c->a
        np.stack([c, ia, ic], axis=1),
    ], axis=1).reshape(-1, 3)

    result = EditMesh(
        positions=np.vstack([mesh.positions, inner_pos.reshape(-1, 3)]),
        normals=np.vstack([mesh.normals, inner_nrm.reshape(-1, 3)]),
        uvs=np.vstack([mesh.uvs, inner_uv.reshape(-1, 2)]),
        triangles=np.vstack([mesh.triangles[~mask], new_faces]),
    )
    result.recompute_normals()

    logger.info(
        f"Inset {k} faces by {frac:.3f}: "
        f"{mesh.face_count} -> {result.face_count} faces, "
        f"{mesh.vertex_count} -> {result.vertex_count} vertices"
    )
    return result
