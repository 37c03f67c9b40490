# FastAPI server exposing the mesh editing operators to the editor frontend

from fastapi import FastAPI, UploadFile, File, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field
from typing import List, Optional
import logging
import os
import sys
import tempfile

from meshkernel import (
    EditMesh,
    HalfEdgeMesh,
    FalloffCurve,
    MirrorAxis,
    apply_soft_displacement,
    compute_soft_weights,
    cut_faces,
    inset_faces,
    load_mesh_file,
    mirror_mesh,
    push_pull_faces,
    seam_key,
    toggle_seam,
    toggle_seam_he,
)

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[
        logging.StreamHandler(sys.stdout)
    ]
)
logger = logging.getLogger(__name__)

# Silence noisy third-party loggers
logging.getLogger('trimesh').setLevel(logging.WARNING)

app = FastAPI(title="Mesh Editing Backend")

# Enable CORS for frontend communication
app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:5173", "http://localhost:5174", "http://localhost:3000"],  # Vite default ports
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# REQUEST / RESPONSE MODELS
# =============================================================================

class MeshPayload(BaseModel):
    """The four parallel mesh arrays. Normals and UVs may be omitted."""
    positions: List[List[float]]
    triangles: List[List[int]]
    normals: Optional[List[List[float]]] = None
    uvs: Optional[List[List[float]]] = None


class FaceSelectionRequest(BaseModel):
    mesh: MeshPayload
    faces: List[int] = []


class InsetRequest(FaceSelectionRequest):
    fraction: float = 0.2  # 0 = no change, 1 = collapse to centroid


class PushPullRequest(FaceSelectionRequest):
    distance: float = 0.1  # Signed offset along face normals


class MirrorRequest(BaseModel):
    mesh: MeshPayload
    axis: MirrorAxis = MirrorAxis.X


class SoftSelectRequest(BaseModel):
    mesh: MeshPayload
    vertices: List[int] = []
    radius: float = 1.0
    curve: FalloffCurve = FalloffCurve.SMOOTH


class SoftDisplaceRequest(SoftSelectRequest):
    delta: List[float] = Field(default_factory=lambda: [0.0, 0.0, 0.0], min_length=3, max_length=3)
    weights: Optional[List[float]] = None  # Precomputed weights; computed from the selection if omitted


class SeamToggleRequest(BaseModel):
    seams: List[List[int]] = []
    a: Optional[int] = None
    b: Optional[int] = None
    half_edge: Optional[int] = None
    mesh: Optional[MeshPayload] = None  # Required when toggling by half-edge


def to_edit_mesh(payload: MeshPayload) -> EditMesh:
    """Build an EditMesh from a payload, mapping shape errors to HTTP 400."""
    try:
        mesh = EditMesh.from_arrays(
            payload.positions,
            payload.triangles,
            normals=payload.normals,
            uvs=payload.uvs,
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=f"Invalid mesh: {str(e)}")

    if mesh.face_count > 0 and (mesh.triangles.min() < 0 or mesh.triangles.max() >= mesh.vertex_count):
        raise HTTPException(
            status_code=400,
            detail=f"Invalid mesh: triangle indices must be in [0, {mesh.vertex_count})"
        )
    return mesh


# =============================================================================
# ENDPOINTS
# =============================================================================

@app.get("/health")
async def health_check():
    return {"status": "ok"}


@app.post("/mesh/upload")
async def upload_mesh(file: UploadFile = File(...)):
    """
    Load an uploaded mesh file and return its arrays.
    """
    file_ext = os.path.splitext(file.filename or "")[1].lower()
    tmp_path = None
    try:
        with tempfile.NamedTemporaryFile(delete=False, suffix=file_ext) as tmp:
            tmp.write(await file.read())
            tmp_path = tmp.name

        result = load_mesh_file(tmp_path)
        if not result.success:
            raise HTTPException(status_code=400, detail=f"Could not load mesh: {result.error_message}")

        return {
            "success": True,
            "mesh": result.mesh.to_dict(),
            "load_time_ms": result.load_time_ms,
        }
    finally:
        if tmp_path and os.path.exists(tmp_path):
            os.unlink(tmp_path)


@app.post("/mesh/cut")
async def cut_mesh(request: FaceSelectionRequest):
    mesh = to_edit_mesh(request.mesh)
    remaining, cut_out = cut_faces(mesh, request.faces)
    return {
        "success": True,
        "remaining": remaining.to_dict(),
        "cut_out": cut_out.to_dict(),
    }


@app.post("/mesh/inset")
async def inset_mesh(request: InsetRequest):
    mesh = to_edit_mesh(request.mesh)
    result = inset_faces(mesh, request.faces, request.fraction)
    return {"success": True, "mesh": result.to_dict()}


@app.post("/mesh/push-pull")
async def push_pull_mesh(request: PushPullRequest):
    mesh = to_edit_mesh(request.mesh)
    result = push_pull_faces(mesh, request.faces, request.distance)
    return {"success": True, "mesh": result.to_dict()}


@app.post("/mesh/mirror")
async def mirror(request: MirrorRequest):
    mesh = to_edit_mesh(request.mesh)
    result = mirror_mesh(mesh, request.axis)
    return {"success": True, "mesh": result.to_dict()}


@app.post("/mesh/soft-select/weights")
async def soft_select_weights(request: SoftSelectRequest):
    mesh = to_edit_mesh(request.mesh)
    weights = compute_soft_weights(mesh, request.vertices, request.radius, request.curve)
    return {"success": True, "weights": weights.tolist()}


@app.post("/mesh/soft-select/displace")
async def soft_select_displace(request: SoftDisplaceRequest):
    mesh = to_edit_mesh(request.mesh)
    if request.weights is not None:
        weights = request.weights
    else:
        weights = compute_soft_weights(mesh, request.vertices, request.radius, request.curve)
    result = apply_soft_displacement(mesh, weights, request.delta)
    return {"success": True, "mesh": result.to_dict()}


@app.post("/seams/toggle")
async def toggle_seam_edge(request: SeamToggleRequest):
    """
    Toggle a seam given either a vertex pair (a, b) or a half-edge id.
    """
    seams = {seam_key(*edge) for edge in request.seams if len(edge) == 2}

    if request.half_edge is not None:
        if request.mesh is None:
            raise HTTPException(status_code=400, detail="Toggling by half-edge requires a mesh")
        he_mesh = HalfEdgeMesh.from_edit_mesh(to_edit_mesh(request.mesh))
        added = toggle_seam_he(seams, he_mesh, request.half_edge)
    elif request.a is not None and request.b is not None:
        added = toggle_seam(seams, request.a, request.b)
    else:
        raise HTTPException(status_code=400, detail="Provide either a and b, or half_edge")

    return {
        "success": True,
        "added": added,
        "seams": sorted([list(edge) for edge in seams]),
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
