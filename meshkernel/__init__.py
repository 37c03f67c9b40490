# Mesh editing kernel: mesh value, topology operators and seam bookkeeping
from meshkernel.edit_mesh import EditMesh, Edge, normalize_rows
from meshkernel.selection import (
    selected_vertices,
    boundary_vertices,
    boundary_edges,
    valid_face_indices,
    valid_vertex_indices,
    grow_face_selection,
    shrink_face_selection,
    select_linked_faces,
    select_by_normal,
    grow_vertex_selection,
    shrink_vertex_selection,
    grow_edge_selection,
    shrink_edge_selection,
)
from meshkernel.half_edge import HalfEdgeMesh, HalfEdge, HVertex, HFace, INVALID
from meshkernel.cut import cut_faces, split_faces, extract_faces, empty_mesh, CutResult
from meshkernel.inset import inset_faces, INSET_MIN_FRACTION, INSET_MAX_FRACTION
from meshkernel.push_pull import push_pull_faces
from meshkernel.mirror import mirror_mesh, MirrorAxis
from meshkernel.soft_select import (
    compute_soft_weights,
    apply_soft_displacement,
    FalloffCurve,
)
from meshkernel.uv_seam import (
    seam_key,
    toggle_seam,
    toggle_seam_he,
    is_seam,
    seam_edge_set,
    remap_seams,
    mirror_seams,
    SeamEdge,
)
from meshkernel.mesh_loader import MeshLoader, load_mesh_file, save_mesh_file, LoadResult

__all__ = [
    'EditMesh',
    'Edge',
    'normalize_rows',
    # Selection
    'selected_vertices',
    'boundary_vertices',
    'boundary_edges',
    'valid_face_indices',
    'valid_vertex_indices',
    'grow_face_selection',
    'shrink_face_selection',
    'select_linked_faces',
    'select_by_normal',
    'grow_vertex_selection',
    'shrink_vertex_selection',
    'grow_edge_selection',
    'shrink_edge_selection',
    # Half-edge
    'HalfEdgeMesh',
    'HalfEdge',
    'HVertex',
    'HFace',
    'INVALID',
    # Operators
    'cut_faces',
    'split_faces',
    'extract_faces',
    'empty_mesh',
    'CutResult',
    'inset_faces',
    'INSET_MIN_FRACTION',
    'INSET_MAX_FRACTION',
    'push_pull_faces',
    'mirror_mesh',
    'MirrorAxis',
    # Soft selection
    'compute_soft_weights',
    'apply_soft_displacement',
    'FalloffCurve',
    # Seams
    'seam_key',
    'toggle_seam',
    'toggle_seam_he',
    'is_seam',
    'seam_edge_set',
    'remap_seams',
    'mirror_seams',
    'SeamEdge',
    # File IO
    'MeshLoader',
    'load_mesh_file',
    'save_mesh_file',
    'LoadResult',
]
