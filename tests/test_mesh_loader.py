import numpy as np

from meshkernel import MeshLoader, load_mesh_file, save_mesh_file

ASCII_STL = """solid triangle
  facet normal 0 0 1
    outer loop
      vertex 0 0 0
      vertex 1 0 0
      vertex 0 1 0
    endloop
  endfacet
endsolid triangle
"""


def test_load_ascii_stl(tmp_path):
    path = tmp_path / "triangle.stl"
    path.write_text(ASCII_STL)

    result = load_mesh_file(str(path))

    assert result.success, result.error_message
    assert result.file_name == "triangle.stl"
    assert result.file_size_bytes == path.stat().st_size
    assert result.mesh.vertex_count == 3
    assert result.mesh.face_count == 1
    np.testing.assert_allclose(result.mesh.face_normal(0), [0.0, 0.0, 1.0])


def test_missing_file_reports_error(tmp_path):
    result = load_mesh_file(str(tmp_path / "missing.stl"))
    assert not result.success
    assert result.mesh is None
    assert "does not exist" in result.error_message


def test_unsupported_extension(tmp_path):
    path = tmp_path / "notes.txt"
    path.write_text("not a mesh")
    valid, message = MeshLoader().is_valid_mesh_file(str(path))
    assert not valid
    assert "Unsupported file extension" in message


def test_empty_file(tmp_path):
    path = tmp_path / "empty.obj"
    path.write_text("")
    result = load_mesh_file(str(path))
    assert not result.success
    assert result.error_message == "File is empty"


def test_loader_remembers_last_result(tmp_path):
    loader = MeshLoader()
    assert loader.last_result is None
    result = loader.load(str(tmp_path / "missing.obj"))
    assert loader.last_result is result


def test_save_and_reload(cube, tmp_path):
    path = tmp_path / "cube.stl"
    save_mesh_file(cube, str(path))

    result = load_mesh_file(str(path))
    assert result.success, result.error_message
    assert result.mesh.face_count == 12
    np.testing.assert_allclose(result.mesh.positions.min(axis=0), [-1.0, -1.0, -1.0])
    np.testing.assert_allclose(result.mesh.positions.max(axis=0), [1.0, 1.0, 1.0])
