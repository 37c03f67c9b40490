"""
UV Seam Marking

Seams mark where a mesh surface is cut for UV unwrapping. They are stored as
a set of canonical undirected edges (min_vertex, max_vertex) that reference
raw vertex indices.

Seams are not remapped automatically when an operator changes the vertex
index space. Callers that keep seams across a cut use `remap_seams` with the
vertex map from `split_faces`; mirrored meshes can carry seams over with
`mirror_seams`.
"""

import logging
from typing import Dict, Set, Tuple

from meshkernel.half_edge import HalfEdgeMesh

logger = logging.getLogger(__name__)

SeamEdge = Tuple[int, int]


def seam_key(a: int, b: int) -> SeamEdge:
    """Canonical edge key: (min_vertex, max_vertex)."""
    a, b = int(a), int(b)
    return (a, b) if a <= b else (b, a)


def toggle_seam(seams: Set[SeamEdge], a: int, b: int) -> bool:
    """
    Toggle a seam edge in the set.

    Returns:
        True if the seam was added, False if it was removed
    """
    key = seam_key(a, b)
    if key in seams:
        seams.remove(key)
        return False
    seams.add(key)
    return True


def toggle_seam_he(seams: Set[SeamEdge], he_mesh: HalfEdgeMesh, half_edge_id: int) -> bool:
    """
    Toggle the seam on the edge of a half-edge.

    An unknown half-edge id leaves the set untouched.

    Returns:
        True if the seam was added, False if it was removed or skipped
    """
    if not he_mesh.is_valid_half_edge(half_edge_id):
        logger.debug(f"Ignoring seam toggle on unknown half-edge {half_edge_id}")
        return False
    origin, dest = he_mesh.edge_vertices(half_edge_id)
    return toggle_seam(seams, origin, dest)


def is_seam(seams: Set[SeamEdge], a: int, b: int) -> bool:
    """Check if an edge is marked as a seam."""
    return seam_key(a, b) in seams


def seam_edge_set(seams: Set[SeamEdge]) -> Set[SeamEdge]:
    """Copy of the seam set, for handing to an unwrapper."""
    return set(seams)


def remap_seams(seams: Set[SeamEdge], vertex_map: Dict[int, int]) -> Set[SeamEdge]:
    """
    Translate seams into a new vertex index space.

    Seams with an endpoint missing from `vertex_map` are dropped.

    Args:
        seams: Seams in the old index space
        vertex_map: Old vertex index -> new vertex index

    Returns:
        New seam set
    """
    remapped = set()
    for a, b in seams:
        if a in vertex_map and b in vertex_map:
            remapped.add(seam_key(vertex_map[a], vertex_map[b]))
    dropped = len(seams) - len(remapped)
    if dropped:
        logger.debug(f"Dropped {dropped} seams outside the new index space")
    return remapped


def mirror_seams(seams: Set[SeamEdge], vertex_count: int) -> Set[SeamEdge]:
    """
    Extend seams to the mirrored half of a `mirror_mesh` result.

    Args:
        seams: Seams on the source mesh
        vertex_count: Vertex count of the source mesh (the mirror offset)

    Returns:
        Original seams plus their mirrored copies
    """
    result = set(seams)
    result.update(seam_key(a + vertex_count, b + vertex_count) for a, b in seams)
    return result
