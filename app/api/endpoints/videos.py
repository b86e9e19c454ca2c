"""
Technique video endpoints.

These answer in the flat shape the upload and edit forms expect:
``{"success": true}`` / ``{"technique": ...}`` on success and
``{"error": "..."}`` on failure, rather than FastAPI's ``{"detail": ...}``.
"""
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from app.core.exceptions import APIException
from app.services import auth_service, video_service
from app.models import profile as profile_model
from app.schemas import video_schemas
from app.api.dependencies import get_db

router = APIRouter()

def _error(exc: APIException) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"error": exc.detail})

# Mux calls are blocking, so these handlers are plain functions run in the threadpool.

@router.post("/delete-asset")
def delete_asset_endpoint(
    request: video_schemas.DeleteAssetRequest,
    db: Session = Depends(get_db),
    mux: video_service.MuxClient = Depends(video_service.get_mux_client),
    current_user: profile_model.Profile = Depends(auth_service.get_current_user),
):
    try:
        video_service.delete_technique_asset(db=db, mux=mux, request=request, current_user_id=current_user.id)
    except APIException as e:
        return _error(e)
    return {"success": True}

@router.post("/metadata", status_code=201)
def save_metadata_endpoint(
    request: video_schemas.SaveMetadataRequest,
    db: Session = Depends(get_db),
    mux: video_service.MuxClient = Depends(video_service.get_mux_client),
    current_user: profile_model.Profile = Depends(auth_service.get_current_user),
):
    try:
        technique = video_service.save_technique_metadata(db=db, mux=mux, request=request, current_user_id=current_user.id)
    except APIException as e:
        return _error(e)
    return {"technique": video_schemas.TechniqueRead.model_validate(technique).model_dump(mode="json")}

@router.post("/update")
def update_technique_endpoint(
    request: video_schemas.TechniqueUpdateRequest,
    db: Session = Depends(get_db),
    current_user: profile_model.Profile = Depends(auth_service.get_current_user),
):
    try:
        technique = video_service.update_technique(db=db, request=request, current_user_id=current_user.id)
    except APIException as e:
        return _error(e)
    return {"success": True, "data": video_schemas.TechniqueRead.model_validate(technique).model_dump(mode="json")}
