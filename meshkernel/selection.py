"""
Selection Utilities

Derives vertex sets from face selections and provides the selection
expansion tools: grow, shrink, select linked and select by normal for faces,
grow and shrink for vertex and edge selections on a HalfEdgeMesh.

Selections are transient sets of face or vertex indices that are only valid
against the mesh snapshot they came from. Indices that are out of range for
the given mesh are skipped, never raised on.
"""

import logging
from typing import Iterable, List, Set

import numpy as np

from meshkernel.edit_mesh import EditMesh, Edge, INDEX_DTYPE, normalize_rows
from meshkernel.half_edge import HalfEdgeMesh

logger = logging.getLogger(__name__)


def _valid_indices(indices: Iterable[int], limit: int, kind: str) -> np.ndarray:
    # Filter on Python ints so values beyond int64 are skipped too
    requested = [int(i) for i in indices]
    in_range = [i for i in requested if 0 <= i < limit]
    valid = np.unique(np.array(in_range, dtype=INDEX_DTYPE))
    skipped = len(requested) - len(in_range)
    if skipped:
        logger.debug(f"Skipping {skipped} out-of-range {kind} indices (limit {limit})")
    return valid


def valid_face_indices(mesh: EditMesh, faces: Iterable[int]) -> np.ndarray:
    """
    Sanitize a face selection.

    Args:
        mesh: Mesh the selection refers to
        faces: Any iterable of face indices

    Returns:
        Sorted, de-duplicated array of in-range face indices
    """
    return _valid_indices(faces, mesh.face_count, "face")


def valid_vertex_indices(mesh: EditMesh, vertices: Iterable[int]) -> np.ndarray:
    """Sorted, de-duplicated array of in-range vertex indices."""
    return _valid_indices(vertices, mesh.vertex_count, "vertex")


def face_mask(mesh: EditMesh, faces: Iterable[int]) -> np.ndarray:
    """Boolean (M,) mask that is True for each valid selected face."""
    mask = np.zeros(mesh.face_count, dtype=bool)
    mask[valid_face_indices(mesh, faces)] = True
    return mask


def selected_vertices(mesh: EditMesh, faces: Iterable[int]) -> Set[int]:
    """
    Collect all unique vertex indices used by the selected faces.

    Args:
        mesh: Source mesh
        faces: Selected face indices

    Returns:
        Set of vertex indices
    """
    valid = valid_face_indices(mesh, faces)
    return set(np.unique(mesh.triangles[valid]).tolist())


def boundary_vertices(mesh: EditMesh, faces: Iterable[int]) -> Set[int]:
    """
    Collect vertices shared between the selection and the rest of the mesh.

    A vertex is on the selection boundary when it is referenced by at least
    one selected face AND at least one unselected face. These are the
    vertices an operator must duplicate instead of moving in place.
    """
    mask = face_mask(mesh, faces)
    used_by_selected = np.unique(mesh.triangles[mask])
    used_by_unselected = np.unique(mesh.triangles[~mask])
    return set(np.intersect1d(used_by_selected, used_by_unselected).tolist())


def boundary_edges(mesh: EditMesh, faces: Iterable[int]) -> List[Edge]:
    """
    Find the boundary edges of a face selection.

    An edge is on the boundary when it is used by a selected face and either
    by an unselected face or by no other face at all (open mesh border).
    """
    selected = set(valid_face_indices(mesh, faces).tolist())
    boundary = []
    for edge, edge_faces in mesh.build_adjacency().items():
        sel_count = sum(1 for f in edge_faces if f in selected)
        unsel_count = len(edge_faces) - sel_count
        if sel_count > 0 and (unsel_count > 0 or len(edge_faces) == 1):
            boundary.append(edge)
    return sorted(boundary)


# =============================================================================
# SELECTION EXPANSION
# =============================================================================

def grow_face_selection(mesh: EditMesh, faces: Iterable[int]) -> Set[int]:
    """Grow a face selection by one ring of edge-adjacent faces."""
    selected = set(valid_face_indices(mesh, faces).tolist())
    adjacency = mesh.build_adjacency()
    grown = set(selected)
    for fi in selected:
        for edge in mesh.face_edges(fi):
            grown.update(adjacency.get(edge, []))
    return grown


def shrink_face_selection(mesh: EditMesh, faces: Iterable[int]) -> Set[int]:
    """
    Shrink a face selection by dropping faces on its boundary.

    A selected face is on the boundary when one of its edges is shared with
    an unselected face. Open border edges do not shrink the selection.
    """
    selected = set(valid_face_indices(mesh, faces).tolist())
    adjacency = mesh.build_adjacency()
    border = set()
    for fi in selected:
        for edge in mesh.face_edges(fi):
            neighbors = adjacency.get(edge, [])
            if any(n not in selected for n in neighbors):
                border.add(fi)
                break
    return selected - border


def select_linked_faces(mesh: EditMesh, faces: Iterable[int]) -> Set[int]:
    """Flood-fill a face selection across shared edges."""
    result = set(valid_face_indices(mesh, faces).tolist())
    adjacency = mesh.build_adjacency()
    frontier = list(result)
    while frontier:
        fi = frontier.pop()
        for edge in mesh.face_edges(fi):
            for neighbor in adjacency.get(edge, []):
                if neighbor not in result:
                    result.add(neighbor)
                    frontier.append(neighbor)
    return result


def select_by_normal(mesh: EditMesh, faces: Iterable[int], angle_threshold_degrees: float) -> Set[int]:
    """
    Select every face whose normal is close to the selection's average normal.

    The average is area weighted. When it cancels out to zero (for example
    two opposite faces) the valid selection is returned unchanged.

    Args:
        mesh: Source mesh
        faces: Selected face indices
        angle_threshold_degrees: Maximum deviation from the average normal

    Returns:
        Set of face indices, possibly including faces outside the selection
    """
    valid = valid_face_indices(mesh, faces)
    if len(valid) == 0:
        return set()

    tris = mesh.triangles[valid]
    p = mesh.positions
    # Cross products are normals scaled by twice the face area
    weighted = np.cross(p[tris[:, 1]] - p[tris[:, 0]], p[tris[:, 2]] - p[tris[:, 0]])
    avg_normal = normalize_rows(weighted.sum(axis=0, keepdims=True))[0]
    if not avg_normal.any():
        return set(valid.tolist())

    threshold_cos = np.cos(np.radians(angle_threshold_degrees))
    matching = np.flatnonzero(mesh.face_normals() @ avg_normal >= threshold_cos)
    logger.debug(f"Select by normal ({angle_threshold_degrees:.1f} deg): {len(valid)} -> {len(matching)} faces")
    return set(matching.tolist())


# =============================================================================
# VERTEX / EDGE SELECTION
# =============================================================================
# Vertex selections hold vertex ids, edge selections hold the canonical
# (lower-id) half-edge of each edge as returned by `HalfEdgeMesh.vertex_edges`.

def grow_vertex_selection(he_mesh: HalfEdgeMesh, vertices: Iterable[int]) -> Set[int]:
    """Grow a vertex selection by one ring of edge-connected vertices."""
    selected = set(_valid_indices(vertices, len(he_mesh.vertices), "vertex").tolist())
    grown = set(selected)
    for vi in selected:
        grown.update(he_mesh.vertex_neighbors(vi))
    return grown


def shrink_vertex_selection(he_mesh: HalfEdgeMesh, vertices: Iterable[int]) -> Set[int]:
    """Drop selected vertices that have at least one unselected neighbor."""
    selected = set(_valid_indices(vertices, len(he_mesh.vertices), "vertex").tolist())
    return {
        vi for vi in selected
        if all(n in selected for n in he_mesh.vertex_neighbors(vi))
    }


def grow_edge_selection(he_mesh: HalfEdgeMesh, edges: Iterable[int]) -> Set[int]:
    """
    Grow an edge selection by every edge touching a selected edge's endpoints.

    Args:
        he_mesh: Half-edge structure of the mesh
        edges: Selected half-edge ids

    Returns:
        Selected ids plus the canonical half-edges of all neighboring edges
    """
    selected = set(_valid_indices(edges, len(he_mesh.half_edges), "half-edge").tolist())
    grown = set(selected)
    for he in selected:
        for vi in he_mesh.edge_vertices(he):
            grown.update(he_mesh.vertex_edges(vi))
    return grown


def shrink_edge_selection(he_mesh: HalfEdgeMesh, edges: Iterable[int]) -> Set[int]:
    """
    Drop selected edges with an endpoint that also touches an unselected edge.
    """
    selected = set(_valid_indices(edges, len(he_mesh.half_edges), "half-edge").tolist())
    result = set(selected)
    for he in selected:
        for vi in he_mesh.edge_vertices(he):
            if any(e not in selected for e in he_mesh.vertex_edges(vi)):
                result.discard(he)
                break
    return result
