from meshkernel import (
    HalfEdgeMesh,
    split_faces,
    seam_key,
    toggle_seam,
    toggle_seam_he,
    is_seam,
    seam_edge_set,
    remap_seams,
    mirror_seams,
)


def test_toggle_adds_then_removes():
    seams = set()
    assert toggle_seam(seams, 3, 1) is True
    assert seams == {(1, 3)}
    assert toggle_seam(seams, 1, 3) is False
    assert seams == set()


def test_is_seam_is_symmetric():
    seams = set()
    toggle_seam(seams, 5, 2)
    assert is_seam(seams, 2, 5)
    assert is_seam(seams, 5, 2)
    assert not is_seam(seams, 2, 4)


def test_seam_key_is_canonical():
    assert seam_key(9, 4) == (4, 9)
    assert seam_key(4, 4) == (4, 4)


def test_toggle_by_half_edge(quad):
    he_mesh = HalfEdgeMesh.from_edit_mesh(quad)
    seams = set()
    # Half-edge 2 of face 0 runs 2 -> 0
    assert toggle_seam_he(seams, he_mesh, 2) is True
    assert seams == {(0, 2)}
    # Its twin names the same undirected edge
    assert toggle_seam_he(seams, he_mesh, he_mesh.half_edges[2].twin) is False
    assert seams == set()


def test_toggle_by_unknown_half_edge_is_ignored(quad):
    he_mesh = HalfEdgeMesh.from_edit_mesh(quad)
    seams = {(0, 1)}
    assert toggle_seam_he(seams, he_mesh, 999) is False
    assert toggle_seam_he(seams, he_mesh, -1) is False
    assert seams == {(0, 1)}


def test_seam_edge_set_is_a_copy():
    seams = {(0, 1)}
    exported = seam_edge_set(seams)
    exported.add((2, 3))
    assert seams == {(0, 1)}


def test_remap_seams_after_cut(quad):
    seams = {(0, 1), (2, 3)}
    result = split_faces(quad, {1})
    assert remap_seams(seams, result.remaining_vertex_map) == {(0, 1)}
    # Cut-out side keeps vertices 0, 2, 3 as 0, 1, 2
    assert remap_seams(seams, result.cut_out_vertex_map) == {(1, 2)}


def test_mirror_seams_offsets_copy():
    assert mirror_seams({(0, 2)}, 4) == {(0, 2), (4, 6)}
    assert mirror_seams(set(), 4) == set()
