"""
Mesh File Loader

Loads mesh files into EditMesh values and writes them back out, using
trimesh for parsing and export. Loading never raises: failures are reported
through LoadResult.
"""

import logging
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple

import trimesh

from meshkernel.edit_mesh import EditMesh

logger = logging.getLogger(__name__)


@dataclass
class LoadResult:
    """Outcome of reading one mesh file."""
    mesh: Optional[EditMesh]
    file_path: str
    file_name: str
    file_size_bytes: int
    success: bool
    error_message: Optional[str] = None
    load_time_ms: float = 0.0


def _single_trimesh(loaded) -> trimesh.Trimesh:
    """Reduce whatever trimesh.load returned to one Trimesh."""
    if isinstance(loaded, trimesh.Scene):
        geometries = list(loaded.geometry.values())
        if not geometries:
            raise ValueError("No geometry found in file")
        loaded = geometries[0]
    if not isinstance(loaded, trimesh.Trimesh):
        raise ValueError(f"Expected Trimesh, got {type(loaded).__name__}")
    return loaded


class MeshLoader:
    """
    Reads the formats trimesh can turn into a single triangle mesh.

    Files are read with `process=False`, so vertices are never merged or
    reordered and the UV layout of the file survives.
    """

    SUPPORTED_EXTENSIONS = {'.stl', '.obj', '.ply', '.off', '.glb', '.gltf'}

    def __init__(self):
        self.last_result: Optional[LoadResult] = None

    def is_valid_mesh_file(self, file_path: str) -> Tuple[bool, str]:
        """
        Cheap pre-checks before handing a file to trimesh.

        Returns:
            (is_valid, error_message); the message is empty when valid
        """
        path = Path(file_path)
        if not path.exists():
            return False, f"File does not exist: {file_path}"
        if not path.is_file():
            return False, f"Path is not a file: {file_path}"
        if path.suffix.lower() not in self.SUPPORTED_EXTENSIONS:
            expected = ", ".join(sorted(self.SUPPORTED_EXTENSIONS))
            return False, f"Unsupported file extension: {path.suffix}. Expected one of {expected}"
        if path.stat().st_size == 0:
            return False, "File is empty"
        return True, ""

    def _finish(self, path: Path, started: float, mesh: Optional[EditMesh] = None,
                error: Optional[str] = None) -> LoadResult:
        size = path.stat().st_size if path.is_file() else 0
        self.last_result = LoadResult(
            mesh=mesh,
            file_path=str(path.absolute()),
            file_name=path.name,
            file_size_bytes=size,
            success=mesh is not None,
            error_message=error,
            load_time_ms=(time.perf_counter() - started) * 1000,
        )
        return self.last_result

    def load(self, file_path: str) -> LoadResult:
        """
        Read a mesh file as an EditMesh.

        Args:
            file_path: Path to the mesh file

        Returns:
            LoadResult holding either the mesh or the reason it failed
        """
        started = time.perf_counter()
        path = Path(file_path)

        ok, reason = self.is_valid_mesh_file(file_path)
        if not ok:
            logger.warning(f"Cannot load {file_path}: {reason}")
            return self._finish(path, started, error=reason)

        try:
            tm = _single_trimesh(trimesh.load(file_path, force='mesh', process=False))
            mesh = EditMesh.from_trimesh(tm)
        except Exception as e:
            logger.warning(f"Failed to load {path.name}: {e}")
            return self._finish(path, started, error=str(e))

        result = self._finish(path, started, mesh=mesh)
        logger.info(
            f"Loaded {path.name}: {mesh.vertex_count:,} vertices, "
            f"{mesh.face_count:,} faces in {result.load_time_ms:.0f}ms"
        )
        return result


def load_mesh_file(file_path: str) -> LoadResult:
    """Load a mesh file with a fresh MeshLoader."""
    return MeshLoader().load(file_path)


def save_mesh_file(mesh: EditMesh, file_path: str) -> None:
    """
    Export an EditMesh; the format follows the file extension.

    Raises:
        ValueError: if trimesh cannot export the extension
    """
    mesh.to_trimesh().export(file_path)
    logger.info(f"Saved {mesh.face_count:,} faces to {file_path}")
