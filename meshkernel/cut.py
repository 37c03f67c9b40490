"""
Cut Module

Splits a mesh into two independent meshes along the boundary of a face
selection:
- remaining: the unselected faces
- cut_out:   the selected faces

Each part is compacted on its own (vertex indices renumbered from zero), so
vertices on the selection boundary end up duplicated, one copy per side.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, Tuple

import numpy as np

from meshkernel.edit_mesh import EditMesh
from meshkernel.selection import face_mask

logger = logging.getLogger(__name__)


@dataclass
class CutResult:
    """Result of splitting a mesh by a face selection."""
    remaining: EditMesh
    cut_out: EditMesh
    # Old vertex index -> new vertex index, per output mesh
    remaining_vertex_map: Dict[int, int] = field(default_factory=dict)
    cut_out_vertex_map: Dict[int, int] = field(default_factory=dict)

    def __iter__(self):
        return iter((self.remaining, self.cut_out))


def empty_mesh() -> EditMesh:
    """Create a mesh with no geometry."""
    return EditMesh()


def _identity_map(mesh: EditMesh) -> Dict[int, int]:
    return {i: i for i in range(mesh.vertex_count)}


def extract_faces(mesh: EditMesh, include: np.ndarray) -> Tuple[EditMesh, Dict[int, int]]:
    """
    Extract the faces selected by a boolean mask into a new compact mesh.

    Vertices are renumbered in order of first use; triangle order is kept.

    Args:
        mesh: Source mesh
        include: Boolean (M,) face mask

    Returns:
        Tuple of (compact mesh, old->new vertex index map)
    """
    triangles = mesh.triangles[include]
    if len(triangles) == 0:
        return empty_mesh(), {}

    flat = triangles.ravel()
    # First-use order: unique vertices sorted by the position they first appear
    unique, first_seen = np.unique(flat, return_index=True)
    used = unique[np.argsort(first_seen)]

    remap = np.empty(mesh.vertex_count, dtype=triangles.dtype)
    remap[used] = np.arange(len(used), dtype=triangles.dtype)

    compact = EditMesh(
        positions=mesh.positions[used],
        normals=mesh.normals[used],
        uvs=mesh.uvs[used],
        triangles=remap[triangles],
    )
    vertex_map = {int(old): new for new, old in enumerate(used.tolist())}
    return compact, vertex_map


def split_faces(mesh: EditMesh, selected: Iterable[int]) -> CutResult:
    """
    Split the mesh into unselected and selected parts, keeping vertex maps.

    Args:
        mesh: Source mesh (not modified)
        selected: Selected face indices; out-of-range entries are ignored

    Returns:
        CutResult with both meshes and their old->new vertex maps
    """
    mask = face_mask(mesh, selected)
    selected_count = int(mask.sum())

    if selected_count == 0:
        logger.debug("Cut with empty selection - returning input unchanged")
        return CutResult(
            remaining=mesh.copy(),
            cut_out=empty_mesh(),
            remaining_vertex_map=_identity_map(mesh),
        )
    if selected_count == mesh.face_count:
        logger.debug("Cut with every face selected - whole mesh is cut out")
        return CutResult(
            remaining=empty_mesh(),
            cut_out=mesh.copy(),
            cut_out_vertex_map=_identity_map(mesh),
        )

    remaining, remaining_map = extract_faces(mesh, ~mask)
    cut_out, cut_out_map = extract_faces(mesh, mask)
    remaining.recompute_normals()
    cut_out.recompute_normals()

    logger.info(
        f"Cut {selected_count} of {mesh.face_count} faces: "
        f"remaining {remaining.vertex_count} vertices / {remaining.face_count} faces, "
        f"cut out {cut_out.vertex_count} vertices / {cut_out.face_count} faces"
    )
    return CutResult(
        remaining=remaining,
        cut_out=cut_out,
        remaining_vertex_map=remaining_map,
        cut_out_vertex_map=cut_out_map,
    )


def cut_faces(mesh: EditMesh, selected: Iterable[int]) -> Tuple[EditMesh, EditMesh]:
    """
    Split the mesh into two parts.

    Returns:
        Tuple of (remaining, cut_out)
    """
    result = split_faces(mesh, selected)
    return result.remaining, result.cut_out
