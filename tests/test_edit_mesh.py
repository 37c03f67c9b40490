import numpy as np
import pytest

from meshkernel import EditMesh, Edge, normalize_rows


def test_attribute_length_mismatch_raises():
    with pytest.raises(ValueError):
        EditMesh(
            positions=np.zeros((3, 3)),
            normals=np.zeros((2, 3)),
            uvs=np.zeros((3, 2)),
            triangles=[[0, 1, 2]],
        )


def test_wrong_column_count_raises():
    with pytest.raises(ValueError):
        EditMesh.from_arrays([[0.0, 0.0]], [])


def test_from_arrays_fills_missing_attributes():
    mesh = EditMesh.from_arrays([[0, 0, 0], [1, 0, 0], [0, 1, 0]], [0, 1, 2])
    assert mesh.triangles.shape == (1, 3)
    assert mesh.normals.shape == (3, 3)
    assert mesh.uvs.shape == (3, 2)
    assert not mesh.normals.any()
    assert not mesh.uvs.any()


def test_empty_mesh_defaults():
    mesh = EditMesh()
    assert mesh.is_empty()
    assert mesh.vertex_count == 0
    assert mesh.face_count == 0
    assert mesh.face_normals().shape == (0, 3)


def test_face_normal_unit(single_triangle):
    np.testing.assert_allclose(single_triangle.face_normal(0), [0.0, 0.0, 1.0])


def test_face_normal_degenerate_is_zero():
    mesh = EditMesh.from_arrays([[0, 0, 0], [1, 0, 0], [2, 0, 0]], [[0, 1, 2]])
    np.testing.assert_array_equal(mesh.face_normal(0), [0.0, 0.0, 0.0])
    np.testing.assert_array_equal(mesh.face_normals(), [[0.0, 0.0, 0.0]])


def test_face_queries(quad):
    np.testing.assert_allclose(quad.face_center(0), [2.0 / 3.0, 1.0 / 3.0, 0.0])
    assert quad.face_area(0) == pytest.approx(0.5)
    assert quad.face_edges(1) == [Edge(0, 2), Edge(2, 3), Edge(0, 3)]
    np.testing.assert_allclose(quad.face_uv_center(0), [2.0 / 3.0, 1.0 / 3.0])


def test_build_adjacency_shared_diagonal(quad):
    adjacency = quad.build_adjacency()
    assert adjacency[Edge(0, 2)] == [0, 1]
    assert adjacency[Edge(0, 1)] == [0]
    assert len(adjacency) == 5


def test_edge_is_canonical():
    assert Edge.new(5, 2) == Edge.new(2, 5) == (2, 5)


def test_recompute_normals_planar(quad):
    mesh = quad.copy()
    mesh.normals[:] = 0.0
    mesh.recompute_normals()
    np.testing.assert_allclose(mesh.normals, np.tile([0.0, 0.0, 1.0], (4, 1)))


def test_recompute_normals_cube_corners(cube):
    expected = np.array([1.0, 1.0, 1.0]) / np.sqrt(3.0)
    np.testing.assert_allclose(cube.normals[6], expected, atol=1e-12)
    np.testing.assert_allclose(cube.normals[0], -expected, atol=1e-12)
    np.testing.assert_allclose(np.linalg.norm(cube.normals, axis=1), 1.0)


def test_recompute_normals_unreferenced_vertex_is_zero():
    mesh = EditMesh.from_arrays(
        [[0, 0, 0], [1, 0, 0], [0, 1, 0], [5, 5, 5]],
        [[0, 1, 2]],
        normals=[[1.0, 0.0, 0.0]] * 4,
    )
    mesh.recompute_normals()
    np.testing.assert_array_equal(mesh.normals[3], [0.0, 0.0, 0.0])


def test_equality_and_copy_are_independent(quad):
    duplicate = quad.copy()
    assert duplicate == quad
    duplicate.positions[0, 0] = 42.0
    assert duplicate != quad
    assert quad.positions[0, 0] == 0.0


def test_normalize_rows_handles_zero():
    result = normalize_rows(np.array([[3.0, 0.0, 4.0], [0.0, 0.0, 0.0]]))
    np.testing.assert_allclose(result, [[0.6, 0.0, 0.8], [0.0, 0.0, 0.0]])


def test_trimesh_conversion_keeps_layout(cube):
    tm = cube.to_trimesh()
    assert len(tm.vertices) == cube.vertex_count
    assert len(tm.faces) == cube.face_count

    back = EditMesh.from_trimesh(tm)
    np.testing.assert_allclose(back.positions, cube.positions)
    np.testing.assert_array_equal(back.triangles, cube.triangles)
    np.testing.assert_allclose(back.uvs, cube.uvs)
    assert back.normals.shape == cube.normals.shape


def test_to_dict_lists(single_triangle):
    data = single_triangle.to_dict()
    assert data['triangles'] == [[0, 1, 2]]
    assert len(data['positions']) == 3
    assert data['uvs'][0] == [0.5, 0.5]
