import numpy as np
import pytest

from meshkernel import push_pull_faces


def test_empty_selection_is_identity(cube):
    assert push_pull_faces(cube, set(), 1.0) == cube


@pytest.mark.parametrize("distance", [0.0, 5e-7])
def test_zero_distance_is_identity(cube, distance):
    assert push_pull_faces(cube, {0, 1}, distance) == cube


def test_isolated_triangle_moves_in_place(single_triangle):
    result = push_pull_faces(single_triangle, {0}, 1.0)
    assert result.vertex_count == 3
    np.testing.assert_allclose(result.positions[:, 2], [1.0, 1.0, 1.0])
    np.testing.assert_array_equal(result.triangles, single_triangle.triangles)


def test_negative_distance_pulls_inward(single_triangle):
    result = push_pull_faces(single_triangle, {0}, -0.5)
    np.testing.assert_allclose(result.positions[:, 2], [-0.5, -0.5, -0.5])


def test_boundary_vertices_are_duplicated(quad):
    result = push_pull_faces(quad, {0}, 1.0)

    # Vertices 0 and 2 are shared with face 1 and get copies 4 and 5
    assert result.vertex_count == 6
    np.testing.assert_array_equal(result.triangles[0], [4, 1, 5])
    np.testing.assert_array_equal(result.triangles[1], [0, 2, 3])

    assert result.positions[0, 2] == 0.0
    assert result.positions[2, 2] == 0.0
    assert result.positions[1, 2] == pytest.approx(1.0)
    np.testing.assert_allclose(result.positions[4], [0.0, 0.0, 1.0])
    np.testing.assert_allclose(result.positions[5], [1.0, 1.0, 1.0])
    np.testing.assert_allclose(result.uvs[4:], quad.uvs[[0, 2]])


def test_shared_vertex_offsets_are_averaged(cube):
    # Top and one right-side triangle share vertex 6
    result = push_pull_faces(cube, {2, 10}, 1.0)

    assert result.vertex_count == 8 + 5
    np.testing.assert_allclose(result.positions[12], [1.5, 1.0, 1.5])
    # Unselected faces still reference the unmoved originals
    np.testing.assert_allclose(result.positions[:8], cube.positions)
    np.testing.assert_array_equal(result.triangles[3], cube.triangles[3])


def test_out_of_range_faces_are_ignored(quad):
    result = push_pull_faces(quad, {0, 42}, 1.0)
    assert result.vertex_count == 6


def test_push_pull_does_not_mutate_input(cube):
    before = cube.copy()
    push_pull_faces(cube, {2, 3}, 0.5)
    assert cube == before
