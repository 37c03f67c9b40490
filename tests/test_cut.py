import numpy as np

from meshkernel import EditMesh, cut_faces, split_faces, empty_mesh


def test_empty_selection_returns_input_and_empty(cube):
    remaining, cut_out = cut_faces(cube, set())
    assert remaining == cube
    assert remaining is not cube
    assert cut_out == empty_mesh()


def test_full_selection_returns_empty_and_input(cube):
    remaining, cut_out = cut_faces(cube, set(range(cube.face_count)))
    assert remaining == EditMesh()
    assert cut_out == cube


def test_out_of_range_selection_behaves_as_empty(quad):
    remaining, cut_out = cut_faces(quad, {7, -1})
    assert remaining == quad
    assert cut_out.is_empty()


def test_cut_quad_compacts_both_sides(quad):
    remaining, cut_out = cut_faces(quad, {1})

    np.testing.assert_array_equal(remaining.triangles, [[0, 1, 2]])
    np.testing.assert_allclose(remaining.positions, quad.positions[[0, 1, 2]])

    np.testing.assert_array_equal(cut_out.triangles, [[0, 1, 2]])
    np.testing.assert_allclose(cut_out.positions, quad.positions[[0, 2, 3]])
    np.testing.assert_allclose(cut_out.uvs, quad.uvs[[0, 2, 3]])
    np.testing.assert_allclose(cut_out.normals, np.tile([0.0, 0.0, 1.0], (3, 1)))


def test_cut_preserves_face_count_and_order(cube):
    selection = {0, 1, 5, 9}
    remaining, cut_out = cut_faces(cube, selection)

    assert remaining.face_count + cut_out.face_count == cube.face_count
    for part in (remaining, cut_out):
        assert part.triangles.min() == 0
        assert part.triangles.max() < part.vertex_count

    # Relative order of the source triangles is kept on each side
    unselected = [f for f in range(cube.face_count) if f not in selection]
    np.testing.assert_allclose(
        remaining.positions[remaining.triangles],
        cube.positions[cube.triangles[unselected]],
    )
    np.testing.assert_allclose(
        cut_out.positions[cut_out.triangles],
        cube.positions[cube.triangles[sorted(selection)]],
    )


def test_boundary_vertices_duplicated_per_side(cube):
    remaining, cut_out = cut_faces(cube, {0, 1})
    # Bottom face uses 4 vertices, all of them also used by the side walls
    assert cut_out.vertex_count == 4
    assert remaining.vertex_count == 8


def test_split_faces_vertex_maps_are_consistent(cube):
    result = split_faces(cube, {2, 3})
    for part, vertex_map in (
        (result.remaining, result.remaining_vertex_map),
        (result.cut_out, result.cut_out_vertex_map),
    ):
        assert len(vertex_map) == part.vertex_count
        for old, new in vertex_map.items():
            np.testing.assert_allclose(part.positions[new], cube.positions[old])

    remaining, cut_out = result
    assert remaining is result.remaining
    assert cut_out is result.cut_out


def test_cut_does_not_mutate_input(cube):
    before = cube.copy()
    cut_faces(cube, {0, 3, 7})
    assert cube == before
