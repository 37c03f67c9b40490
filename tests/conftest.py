import numpy as np
import pytest

from meshkernel import EditMesh


def make_single_triangle() -> EditMesh:
    return EditMesh.from_arrays(
        positions=[[0.0, 0.0, 0.0], [1.0, 0.0, 0.0], [0.0, 1.0, 0.0]],
        triangles=[[0, 1, 2]],
        normals=[[0.0, 0.0, 1.0]] * 3,
        uvs=[[0.5, 0.5]] * 3,
    )


def make_quad() -> EditMesh:
    # Two triangles sharing the diagonal 0-2, facing +Z
    return EditMesh.from_arrays(
        positions=[[0.0, 0.0, 0.0], [1.0, 0.0, 0.0], [1.0, 1.0, 0.0], [0.0, 1.0, 0.0]],
        triangles=[[0, 1, 2], [0, 2, 3]],
        normals=[[0.0, 0.0, 1.0]] * 4,
        uvs=[[0.0, 0.0], [1.0, 0.0], [1.0, 1.0], [0.0, 1.0]],
    )


def make_cube() -> EditMesh:
    # Closed cube [-1, 1]^3 with outward winding
    positions = [
        [-1, -1, -1], [1, -1, -1], [1, 1, -1], [-1, 1, -1],
        [-1, -1, 1], [1, -1, 1], [1, 1, 1], [-1, 1, 1],
    ]
    triangles = [
        [0, 2, 1], [0, 3, 2],   # bottom (-Z)
        [4, 5, 6], [4, 6, 7],   # top (+Z)
        [0, 1, 5], [0, 5, 4],   # front (-Y)
        [3, 7, 6], [3, 6, 2],   # back (+Y)
        [0, 4, 7], [0, 7, 3],   # left (-X)
        [1, 2, 6], [1, 6, 5],   # right (+X)
    ]
    uvs = [[p[0] * 0.5 + 0.5, p[1] * 0.5 + 0.5] for p in positions]
    mesh = EditMesh.from_arrays(positions, triangles, uvs=uvs)
    return mesh.recompute_normals()


@pytest.fixture
def single_triangle():
    return make_single_triangle()


@pytest.fixture
def quad():
    return make_quad()


@pytest.fixture
def cube():
    return make_cube()


@pytest.fixture
def line_mesh():
    # Five vertices along +X at unit spacing
    positions = [[float(i), 0.0, 0.0] for i in range(5)]
    return EditMesh.from_arrays(positions, [[0, 1, 2], [2, 3, 4]])


def signed_normal(mesh: EditMesh, face: int) -> np.ndarray:
    a, b, c = mesh.triangles[face]
    p = mesh.positions
    return np.cross(p[b] - p[a], p[c] - p[a])
