"""
Edit Mesh Module

Core indexed-triangle mesh value used by every modeling operator.

An EditMesh is four parallel arrays:
- positions (N, 3) vertex positions
- normals   (N, 3) vertex normals
- uvs       (N, 2) texture coordinates
- triangles (M, 3) vertex indices per face

Vertex sharing between triangles is the only connectivity information. A
face index is the row of a triangle in `triangles` and is only meaningful
against the mesh it was taken from.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, NamedTuple, Optional, Sequence

import numpy as np
import trimesh

logger = logging.getLogger(__name__)

POSITION_DTYPE = np.float64
INDEX_DTYPE = np.int64

# Lengths below this are treated as zero when normalizing
NORMAL_EPSILON = 1e-12


class Edge(NamedTuple):
    """Canonical undirected edge (lower vertex index first)."""
    a: int
    b: int

    @classmethod
    def new(cls, a: int, b: int) -> 'Edge':
        """Create a canonical edge with the lower index first."""
        a, b = int(a), int(b)
        return cls(a, b) if a <= b else cls(b, a)


def normalize_rows(vectors: np.ndarray) -> np.ndarray:
    """
    Normalize each row of an (K, D) array.

    Rows with (near) zero length are returned as zero vectors rather than
    being divided by zero.
    """
    vectors = np.asarray(vectors, dtype=POSITION_DTYPE)
    if vectors.size == 0:
        return vectors.copy()
    lengths = np.linalg.norm(vectors, axis=-1, keepdims=True)
    safe = np.where(lengths > NORMAL_EPSILON, lengths, 1.0)
    return np.where(lengths > NORMAL_EPSILON, vectors / safe, 0.0)


def _as_array(values, columns: int, dtype) -> np.ndarray:
    array = np.asarray(values, dtype=dtype)
    if array.size == 0:
        return np.zeros((0, columns), dtype=dtype)
    if array.ndim != 2 or array.shape[1] != columns:
        raise ValueError(f"Expected an (N, {columns}) array, got shape {array.shape}")
    return array


@dataclass(eq=False)
class EditMesh:
    """
    Indexed triangle mesh suitable for face-level editing.

    Operators treat an EditMesh as an immutable value: they read from the
    input and build a new EditMesh for their result.
    """
    positions: np.ndarray = field(default_factory=lambda: np.zeros((0, 3), dtype=POSITION_DTYPE))
    normals: np.ndarray = field(default_factory=lambda: np.zeros((0, 3), dtype=POSITION_DTYPE))
    uvs: np.ndarray = field(default_factory=lambda: np.zeros((0, 2), dtype=POSITION_DTYPE))
    triangles: np.ndarray = field(default_factory=lambda: np.zeros((0, 3), dtype=INDEX_DTYPE))

    def __post_init__(self):
        self.positions = _as_array(self.positions, 3, POSITION_DTYPE)
        self.normals = _as_array(self.normals, 3, POSITION_DTYPE)
        self.uvs = _as_array(self.uvs, 2, POSITION_DTYPE)
        self.triangles = _as_array(self.triangles, 3, INDEX_DTYPE)

        n = len(self.positions)
        if len(self.normals) != n or len(self.uvs) != n:
            raise ValueError(
                f"Attribute length mismatch: {n} positions, "
                f"{len(self.normals)} normals, {len(self.uvs)} uvs"
            )

    # -------------------------------------------------------------------------
    # Construction / conversion
    # -------------------------------------------------------------------------

    @classmethod
    def from_arrays(cls,
                    positions: Sequence,
                    triangles: Sequence,
                    normals: Optional[Sequence] = None,
                    uvs: Optional[Sequence] = None) -> 'EditMesh':
        """
        Build an EditMesh from plain sequences.

        Missing normals or UVs are filled with zeros.

        Args:
            positions: N points [x, y, z]
            triangles: M index triples, or a flat index list of length 3*M
            normals: Optional N vectors
            uvs: Optional N texture coordinates

        Returns:
            New EditMesh
        """
        positions = _as_array(positions, 3, POSITION_DTYPE)
        n = len(positions)

        tri_array = np.asarray(triangles, dtype=INDEX_DTYPE)
        if tri_array.ndim == 1:
            if len(tri_array) % 3 != 0:
                raise ValueError(f"Flat index list length {len(tri_array)} is not a multiple of 3")
            tri_array = tri_array.reshape(-1, 3)

        if normals is None or len(normals) == 0:
            normals = np.zeros((n, 3), dtype=POSITION_DTYPE)
        if uvs is None or len(uvs) == 0:
            uvs = np.zeros((n, 2), dtype=POSITION_DTYPE)

        return cls(positions=positions, normals=normals, uvs=uvs, triangles=tri_array)

    @classmethod
    def from_trimesh(cls, mesh: trimesh.Trimesh) -> 'EditMesh':
        """
        Build an EditMesh from a trimesh mesh.

        Uses the mesh's vertex normals and, when the visual carries texture
        coordinates, its UVs.
        """
        positions = np.asarray(mesh.vertices, dtype=POSITION_DTYPE)
        normals = np.asarray(mesh.vertex_normals, dtype=POSITION_DTYPE)

        uvs = None
        visual_uv = getattr(mesh.visual, 'uv', None)
        if visual_uv is not None and len(visual_uv) == len(positions):
            uvs = np.asarray(visual_uv, dtype=POSITION_DTYPE)

        return cls.from_arrays(positions, np.asarray(mesh.faces), normals=normals, uvs=uvs)

    def to_trimesh(self) -> trimesh.Trimesh:
        """
        Convert to a trimesh mesh for rendering or collider construction.

        `process=False` keeps the vertex layout exactly as-is so indices
        stay valid on both sides of the conversion.
        """
        visual = trimesh.visual.TextureVisuals(uv=self.uvs.copy())
        return trimesh.Trimesh(
            vertices=self.positions.copy(),
            faces=self.triangles.copy(),
            vertex_normals=self.normals.copy(),
            visual=visual,
            process=False,
        )

    def to_dict(self) -> dict:
        """Convert to a dictionary of plain lists."""
        return {
            'positions': self.positions.tolist(),
            'normals': self.normals.tolist(),
            'uvs': self.uvs.tolist(),
            'triangles': self.triangles.tolist(),
        }

    def copy(self) -> 'EditMesh':
        """Return an independent deep copy."""
        return EditMesh(
            positions=self.positions.copy(),
            normals=self.normals.copy(),
            uvs=self.uvs.copy(),
            triangles=self.triangles.copy(),
        )

    def __eq__(self, other) -> bool:
        if not isinstance(other, EditMesh):
            return NotImplemented
        return (
            np.array_equal(self.positions, other.positions)
            and np.array_equal(self.normals, other.normals)
            and np.array_equal(self.uvs, other.uvs)
            and np.array_equal(self.triangles, other.triangles)
        )

    __hash__ = None

    def __repr__(self) -> str:
        return f"EditMesh(vertices={self.vertex_count}, faces={self.face_count})"

    # -------------------------------------------------------------------------
    # Counts
    # -------------------------------------------------------------------------

    @property
    def vertex_count(self) -> int:
        """Number of vertices."""
        return len(self.positions)

    @property
    def face_count(self) -> int:
        """Number of triangle faces."""
        return len(self.triangles)

    def is_empty(self) -> bool:
        return self.vertex_count == 0 and self.face_count == 0

    # -------------------------------------------------------------------------
    # Face queries
    # -------------------------------------------------------------------------

    def face_normal(self, face: int) -> np.ndarray:
        """
        Compute the unit normal of a triangle.

        A degenerate (zero-area) triangle yields the zero vector.
        """
        a, b, c = self.triangles[face]
        v0 = self.positions[a]
        normal = np.cross(self.positions[b] - v0, self.positions[c] - v0)
        return normalize_rows(normal[np.newaxis, :])[0]

    def face_normals(self) -> np.ndarray:
        """Compute unit normals for all faces as an (M, 3) array."""
        if self.face_count == 0:
            return np.zeros((0, 3), dtype=POSITION_DTYPE)
        return normalize_rows(self._face_cross_products())

    def face_center(self, face: int) -> np.ndarray:
        """Centroid of a triangle."""
        return self.positions[self.triangles[face]].mean(axis=0)

    def face_area(self, face: int) -> float:
        """Area of a triangle."""
        a, b, c = self.triangles[face]
        v0 = self.positions[a]
        return float(np.linalg.norm(np.cross(self.positions[b] - v0, self.positions[c] - v0)) * 0.5)

    def face_edges(self, face: int) -> List[Edge]:
        """The three canonical edges of a triangle."""
        a, b, c = self.triangles[face]
        return [Edge.new(a, b), Edge.new(b, c), Edge.new(c, a)]

    def face_uv_center(self, face: int) -> np.ndarray:
        """Average UV coordinate of a triangle."""
        return self.uvs[self.triangles[face]].mean(axis=0)

    def build_adjacency(self) -> Dict[Edge, List[int]]:
        """
        Build edge adjacency.

        Returns:
            Dict mapping each canonical edge to the faces that use it
        """
        adjacency: Dict[Edge, List[int]] = {}
        for fi in range(self.face_count):
            for edge in self.face_edges(fi):
                adjacency.setdefault(edge, []).append(fi)
        return adjacency

    # -------------------------------------------------------------------------
    # Normals
    # -------------------------------------------------------------------------

    def _face_cross_products(self) -> np.ndarray:
        v0 = self.positions[self.triangles[:, 0]]
        v1 = self.positions[self.triangles[:, 1]]
        v2 = self.positions[self.triangles[:, 2]]
        return np.cross(v1 - v0, v2 - v0)

    def recompute_normals(self) -> 'EditMesh':
        """
        Recompute smooth vertex normals in place.

        Each vertex normal is the normalized sum of the (area-weighted) cross
        products of every triangle referencing it. Vertices with no
        contribution get a zero normal.

        Returns:
            self, for chaining
        """
        accum = np.zeros((self.vertex_count, 3), dtype=POSITION_DTYPE)
        if self.face_count > 0:
            cross = self._face_cross_products()
            np.add.at(accum, self.triangles[:, 0], cross)
            np.add.at(accum, self.triangles[:, 1], cross)
            np.add.at(accum, self.triangles[:, 2], cross)
        self.normals = normalize_rows(accum)
        return self
