"""
Half-Edge Mesh Module

Index-based half-edge structure for edge-oriented topology queries.

Every element (vertex, face, half-edge) is a plain integer handle into flat
arrays, so there are no ownership cycles. A HalfEdgeMesh is derived from an
EditMesh on demand and is NOT updated when that mesh changes; rebuild it
from the new snapshot after every edit.

Layout:
- Interior half-edges 3*f + i belong to triangle f, starting at corner i
- Boundary half-edges (face == INVALID) are appended after the interior
  ones and linked into chains around each open border
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Tuple

import numpy as np

from meshkernel.edit_mesh import EditMesh, normalize_rows, POSITION_DTYPE

logger = logging.getLogger(__name__)

# Sentinel for "no element"
INVALID = -1


@dataclass
class HalfEdge:
    """A single directed half-edge."""
    twin: int = INVALID
    next: int = INVALID
    prev: int = INVALID
    # Vertex this half-edge originates from
    vertex: int = INVALID
    # Face this half-edge borders (INVALID for boundary half-edges)
    face: int = INVALID


@dataclass
class HVertex:
    """A vertex with its attributes and one outgoing half-edge."""
    position: np.ndarray
    normal: np.ndarray
    uv: np.ndarray
    half_edge: int = INVALID


@dataclass
class HFace:
    """A face, referenced by one of its half-edges."""
    half_edge: int = INVALID


@dataclass
class HalfEdgeMesh:
    """
    Half-edge mesh with index-based arena storage.

    Supports traversal of vertex neighborhoods and face boundaries, and
    maps half-edge ids back to (from, to) vertex pairs.
    """
    half_edges: List[HalfEdge] = field(default_factory=list)
    vertices: List[HVertex] = field(default_factory=list)
    faces: List[HFace] = field(default_factory=list)

    # -------------------------------------------------------------------------
    # Construction
    # -------------------------------------------------------------------------

    @classmethod
    def from_edit_mesh(cls, mesh: EditMesh) -> 'HalfEdgeMesh':
        """
        Build a HalfEdgeMesh from an EditMesh.

        Each triangle produces 3 half-edges. Twins are linked where triangles
        share an edge in opposite directions; unmatched half-edges get a
        boundary twin so traversal never dead-ends.

        Args:
            mesh: Source triangle mesh

        Returns:
            New HalfEdgeMesh
        """
        vertices = [
            HVertex(position=p.copy(), normal=n.copy(), uv=uv.copy())
            for p, n, uv in zip(mesh.positions, mesh.normals, mesh.uvs)
        ]
        he_mesh = cls(half_edges=[], vertices=vertices, faces=[])
        for a, b, c in mesh.triangles.tolist():
            he_mesh._append_face([a, b, c])
        he_mesh._link_twins()

        logger.debug(
            f"Built half-edge mesh: {len(he_mesh.vertices)} vertices, "
            f"{len(he_mesh.faces)} faces, {len(he_mesh.half_edges)} half-edges"
        )
        return he_mesh

    def _append_face(self, verts: List[int]) -> int:
        face_id = len(self.faces)
        base = len(self.half_edges)
        n = len(verts)
        for i, v in enumerate(verts):
            he_id = base + i
            self.half_edges.append(HalfEdge(
                twin=INVALID,
                next=base + (i + 1) % n,
                prev=base + (i + n - 1) % n,
                vertex=v,
                face=face_id,
            ))
            vertex = self.vertices[v]
            if vertex.half_edge == INVALID or self.half_edges[vertex.half_edge].face == INVALID:
                vertex.half_edge = he_id
        self.faces.append(HFace(half_edge=base))
        return face_id

    def _link_twins(self):
        """Link twin half-edges and create boundary half-edges."""
        edge_map: Dict[Tuple[int, int], int] = {}
        for he_id, he in enumerate(self.half_edges):
            edge_map[(he.vertex, self.half_edges[he.next].vertex)] = he_id

        interior_count = len(self.half_edges)
        boundary: List[HalfEdge] = []

        for he_id in range(interior_count):
            he = self.half_edges[he_id]
            if he.twin != INVALID:
                continue
            origin = he.vertex
            dest = self.half_edges[he.next].vertex
            twin_id = edge_map.get((dest, origin))
            if twin_id is not None and self.half_edges[twin_id].twin == INVALID and twin_id != he_id:
                he.twin = twin_id
                self.half_edges[twin_id].twin = he_id
            else:
                # Boundary half-edge runs the opposite direction
                boundary_id = interior_count + len(boundary)
                he.twin = boundary_id
                boundary.append(HalfEdge(twin=he_id, vertex=dest, face=INVALID))

        self.half_edges.extend(boundary)
        self._link_boundary_chains(interior_count)

    def _link_boundary_chains(self, interior_count: int):
        """Link next/prev for boundary half-edges around each open border."""
        boundary_from: Dict[int, int] = {}
        for he_id in range(interior_count, len(self.half_edges)):
            boundary_from[self.half_edges[he_id].vertex] = he_id

        for he_id in range(interior_count, len(self.half_edges)):
            he = self.half_edges[he_id]
            end_vertex = self.half_edges[he.twin].vertex
            next_id = boundary_from.get(end_vertex)
            if next_id is not None:
                he.next = next_id
                self.half_edges[next_id].prev = he_id

    def rebuild_twins(self):
        """
        Rebuild all half-edges and twin links from the current faces.

        Call after batch `add_face` insertion.
        """
        faces_data = [self.face_vertices(fi) for fi in range(len(self.faces))]
        self.half_edges = []
        self.faces = []
        for vertex in self.vertices:
            vertex.half_edge = INVALID
        for verts in faces_data:
            self._append_face(verts)
        self._link_twins()

    def to_edit_mesh(self) -> EditMesh:
        """
        Convert back to an EditMesh.

        Faces must still be triangles.
        """
        if self.vertices:
            positions = np.array([v.position for v in self.vertices], dtype=POSITION_DTYPE)
            normals = np.array([v.normal for v in self.vertices], dtype=POSITION_DTYPE)
            uvs = np.array([v.uv for v in self.vertices], dtype=POSITION_DTYPE)
        else:
            positions, normals, uvs = [], [], []
        triangles = [self.face_vertices(fi)[:3] for fi in range(len(self.faces))]
        return EditMesh.from_arrays(positions, triangles, normals=normals, uvs=uvs)

    # -------------------------------------------------------------------------
    # Editing
    # -------------------------------------------------------------------------

    def add_vertex(self, position, normal, uv) -> int:
        """Append a vertex and return its id."""
        self.vertices.append(HVertex(
            position=np.asarray(position, dtype=POSITION_DTYPE),
            normal=np.asarray(normal, dtype=POSITION_DTYPE),
            uv=np.asarray(uv, dtype=POSITION_DTYPE),
        ))
        return len(self.vertices) - 1

    def add_face(self, v0: int, v1: int, v2: int) -> int:
        """
        Append a triangle and return its face id.

        Twins are NOT linked; call `rebuild_twins()` after batch insertion.
        """
        return self._append_face([v0, v1, v2])

    # -------------------------------------------------------------------------
    # Traversal
    # -------------------------------------------------------------------------

    def is_valid_half_edge(self, he: int) -> bool:
        return 0 <= he < len(self.half_edges)

    def edge_vertices(self, he: int) -> Tuple[int, int]:
        """Get the (from, to) vertex pair of a half-edge."""
        half_edge = self.half_edges[he]
        return half_edge.vertex, self.half_edges[half_edge.twin].vertex

    def is_boundary(self, he: int) -> bool:
        """True when the half-edge has no face."""
        return self.half_edges[he].face == INVALID

    def face_half_edges(self, face: int) -> List[int]:
        """Half-edge ids around a face, in order."""
        start = self.faces[face].half_edge
        result = []
        current = start
        while True:
            result.append(current)
            current = self.half_edges[current].next
            if current == start or current == INVALID:
                break
        return result

    def face_vertices(self, face: int) -> List[int]:
        """Vertex ids around a face, in order."""
        return [self.half_edges[he].vertex for he in self.face_half_edges(face)]

    def vertex_half_edges(self, vertex: int) -> List[int]:
        """
        All outgoing half-edges of a vertex, including boundary ones.

        Walks the fan with twin -> next, and from the other side with
        prev -> twin when the fan is open.
        """
        start = self.vertices[vertex].half_edge
        if start == INVALID:
            return []

        result = [start]
        seen = {start}
        current = start
        while True:
            twin = self.half_edges[current].twin
            if twin == INVALID:
                break
            current = self.half_edges[twin].next
            if current == INVALID or current in seen:
                break
            result.append(current)
            seen.add(current)

        if current != start:
            # Open fan: walk backwards from the start
            current = start
            while True:
                prev = self.half_edges[current].prev
                if prev == INVALID:
                    break
                current = self.half_edges[prev].twin
                if current == INVALID or current in seen:
                    break
                result.append(current)
                seen.add(current)

        return result

    def vertex_faces(self, vertex: int) -> List[int]:
        """Faces adjacent to a vertex."""
        return [
            self.half_edges[he].face
            for he in self.vertex_half_edges(vertex)
            if self.half_edges[he].face != INVALID
        ]

    def vertex_neighbors(self, vertex: int) -> List[int]:
        """Vertices connected to `vertex` by an edge."""
        return [self.edge_vertices(he)[1] for he in self.vertex_half_edges(vertex)]

    def vertex_edges(self, vertex: int) -> List[int]:
        """Canonical (lower-id) half-edge of every edge around a vertex."""
        result = []
        for he in self.vertex_half_edges(vertex):
            twin = self.half_edges[he].twin
            result.append(twin if twin != INVALID and twin < he else he)
        return result

    def unique_edges(self) -> List[int]:
        """One interior half-edge id per geometric edge."""
        edges = []
        for he_id, he in enumerate(self.half_edges):
            if he.face == INVALID:
                continue
            if he.twin == INVALID or he_id < he.twin or self.half_edges[he.twin].face == INVALID:
                edges.append(he_id)
        return edges

    def edge_count(self) -> int:
        """Number of geometric edges."""
        return len(self.unique_edges())

    # -------------------------------------------------------------------------
    # Geometry
    # -------------------------------------------------------------------------

    def edge_midpoint(self, he: int) -> np.ndarray:
        origin, dest = self.edge_vertices(he)
        return (self.vertices[origin].position + self.vertices[dest].position) * 0.5

    def _face_cross(self, face: int) -> np.ndarray:
        verts = self.face_vertices(face)
        if len(verts) < 3:
            return np.zeros(3, dtype=POSITION_DTYPE)
        p0 = self.vertices[verts[0]].position
        p1 = self.vertices[verts[1]].position
        p2 = self.vertices[verts[2]].position
        return np.cross(p1 - p0, p2 - p0)

    def face_normal(self, face: int) -> np.ndarray:
        """Unit face normal (zero for degenerate faces)."""
        return normalize_rows(self._face_cross(face)[np.newaxis, :])[0]

    def face_center(self, face: int) -> np.ndarray:
        verts = self.face_vertices(face)
        if not verts:
            return np.zeros(3, dtype=POSITION_DTYPE)
        return np.mean([self.vertices[v].position for v in verts], axis=0)

    def face_area(self, face: int) -> float:
        return float(np.linalg.norm(self._face_cross(face)) * 0.5)

    def recompute_normals(self):
        """Recompute smooth vertex normals from face cross products."""
        accum = np.zeros((len(self.vertices), 3), dtype=POSITION_DTYPE)
        for fi in range(len(self.faces)):
            cross = self._face_cross(fi)
            for v in self.face_vertices(fi):
                accum[v] += cross
        for vertex, normal in zip(self.vertices, normalize_rows(accum)):
            vertex.normal = normal
