"""
Soft Selection Module

Distance-based falloff weighting for vertex transforms. When soft selection
is active, moving the selected vertices also drags nearby unselected
vertices, scaled by a falloff weight of their distance to the nearest
selected vertex.
"""

import logging
from enum import Enum
from typing import Iterable

import numpy as np
from scipy.spatial import cKDTree

from meshkernel.edit_mesh import EditMesh, POSITION_DTYPE
from meshkernel.selection import valid_vertex_indices

logger = logging.getLogger(__name__)


class FalloffCurve(Enum):
    """Falloff curve over the normalized distance t (0 = at selection, 1 = at radius)."""
    LINEAR = "linear"   # 1 - t
    SMOOTH = "smooth"   # (cos(pi * t) + 1) / 2
    SHARP = "sharp"     # (1 - t)^2
    ROOT = "root"       # sqrt(1 - t)

    @classmethod
    def default(cls) -> 'FalloffCurve':
        return cls.SMOOTH

    @property
    def display_name(self) -> str:
        return self.value.capitalize()

    def weight(self, t: float) -> float:
        """Falloff weight for a single normalized distance."""
        return float(self.weights(t))

    def weights(self, t: np.ndarray) -> np.ndarray:
        """Falloff weights for normalized distances, clamped to [0, 1]."""
        t = np.clip(np.asarray(t, dtype=POSITION_DTYPE), 0.0, 1.0)
        return _CURVE_FUNCTIONS[self](t)


_CURVE_FUNCTIONS = {
    FalloffCurve.LINEAR: lambda t: 1.0 - t,
    FalloffCurve.SMOOTH: lambda t: np.cos(np.pi * t) * 0.5 + 0.5,
    FalloffCurve.SHARP: lambda t: (1.0 - t) ** 2,
    FalloffCurve.ROOT: lambda t: np.sqrt(1.0 - t),
}


def compute_soft_weights(mesh: EditMesh,
                         selected: Iterable[int],
                         radius: float,
                         curve: FalloffCurve = FalloffCurve.SMOOTH) -> np.ndarray:
    """
    Compute soft selection weights for all vertices.

    Selected vertices get weight 1.0. Every other vertex gets
    `curve(d / radius)` where d is its distance to the nearest selected
    vertex, or 0.0 when d >= radius. With a non-positive radius or an
    empty selection the weights are binary (selected = 1, rest = 0).

    Args:
        mesh: Source mesh
        selected: Selected vertex indices; out-of-range entries are ignored
        radius: Falloff radius in mesh units
        curve: Falloff curve

    Returns:
        (N,) array of weights in [0, 1]
    """
    curve = FalloffCurve(curve)
    sel = valid_vertex_indices(mesh, selected)
    weights = np.zeros(mesh.vertex_count, dtype=POSITION_DTYPE)

    if radius <= 0.0 or len(sel) == 0:
        weights[sel] = 1.0
        return weights

    unselected = np.ones(mesh.vertex_count, dtype=bool)
    unselected[sel] = False
    candidates = np.flatnonzero(unselected)

    if len(candidates) > 0:
        tree = cKDTree(mesh.positions[sel])
        # Distances at or beyond the radius come back as inf
        distances, _ = tree.query(mesh.positions[candidates], k=1, distance_upper_bound=radius)
        inside = distances < radius
        weights[candidates[inside]] = curve.weights(distances[inside] / radius)

    weights[sel] = 1.0

    logger.debug(
        f"Soft selection ({curve.display_name}, r={radius:.4f}): "
        f"{len(sel)} selected, {int(np.count_nonzero(weights)) - len(sel)} influenced"
    )
    return weights


def apply_soft_displacement(mesh: EditMesh, weights: np.ndarray, delta) -> EditMesh:
    """
    Move vertices by `delta * weight`.

    Zero-weight vertices are untouched. Weights beyond the vertex count are
    ignored; vertices beyond the end of `weights` are not moved.

    Args:
        mesh: Source mesh (not modified)
        weights: Per-vertex weights
        delta: Displacement vector [dx, dy, dz]

    Returns:
        New EditMesh with displaced positions and recomputed normals
    """
    result = mesh.copy()
    weights = np.asarray(weights, dtype=POSITION_DTYPE)[:mesh.vertex_count]
    delta = np.asarray(delta, dtype=POSITION_DTYPE).reshape(3)

    moving = np.flatnonzero(weights > 0.0)
    result.positions[moving] += weights[moving, np.newaxis] * delta
    result.recompute_normals()

    logger.debug(f"Soft displacement moved {len(moving)} vertices by up to {np.linalg.norm(delta):.4f}")
    return result
