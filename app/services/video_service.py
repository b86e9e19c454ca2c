"""
Technique videos hosted on Mux.

Only metadata lives in our database; the video itself is an asset in Mux.
``MuxClient`` wraps the few Mux Video API calls the technique flows need.
"""
import logging
from typing import Any, Dict, Optional

import httpx
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.exceptions import BadRequestError, ConflictError, ForbiddenError, NotFoundError, UpstreamError
from app.models import technique as technique_model
from app.schemas import video_schemas

logger = logging.getLogger(__name__)


class MuxClient:
    def __init__(
        self,
        token_id: str,
        token_secret: str,
        base_url: str = "https://api.mux.com",
        timeout: float = 10.0,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self._client = httpx.Client(
            base_url=base_url,
            auth=(token_id, token_secret),
            timeout=timeout,
            transport=transport,
        )

    def _request(self, method: str, path: str) -> Dict[str, Any]:
        try:
            response = self._client.request(method, path)
        except httpx.RequestError as e:
            logger.error(f"Mux {method} {path} failed: {e}")
            raise UpstreamError(f"Could not reach Mux: {e}")

        if response.status_code == 404:
            raise NotFoundError("Mux resource", path)
        if response.is_error:
            logger.error(f"Mux {method} {path} returned {response.status_code}: {response.text}")
            raise UpstreamError(f"Mux returned {response.status_code}")
        if response.status_code == 204 or not response.content:
            return {}
        return response.json().get("data", {})

    def get_upload(self, upload_id: str) -> Dict[str, Any]:
        return self._request("GET", f"/video/v1/uploads/{upload_id}")

    def get_asset(self, asset_id: str) -> Dict[str, Any]:
        return self._request("GET", f"/video/v1/assets/{asset_id}")

    def get_asset_id_for_playback(self, playback_id: str) -> str:
        data = self._request("GET", f"/video/v1/playback-ids/{playback_id}")
        asset_id = (data.get("object") or {}).get("id")
        if not asset_id:
            logger.error(f"Mux playback id {playback_id} resolved to no asset: {data}")
            raise UpstreamError(f"Mux returned no asset for playback id {playback_id}")
        return asset_id

    def delete_asset(self, asset_id: str) -> None:
        self._request("DELETE", f"/video/v1/assets/{asset_id}")

    def close(self) -> None:
        self._client.close()


def get_mux_client():
    client = MuxClient(
        settings.MUX_TOKEN_ID,
        settings.MUX_TOKEN_SECRET,
        base_url=settings.MUX_BASE_URL,
        timeout=settings.MUX_TIMEOUT_SECONDS,
    )
    try:
        yield client
    finally:
        client.close()


def get_technique(db: Session, technique_id: int) -> Optional[technique_model.Technique]:
    return db.query(technique_model.Technique).filter(technique_model.Technique.id == technique_id).first()

def _ensure_caller(claimed_user_id: Optional[int], current_user_id: int) -> None:
    # Bodies carry the user id; it has to be the authenticated caller.
    if claimed_user_id is not None and claimed_user_id != current_user_id:
        raise ForbiddenError("user_id does not match the authenticated user")

def delete_technique_asset(
    db: Session,
    mux: MuxClient,
    request: video_schemas.DeleteAssetRequest,
    current_user_id: int,
) -> bool:
    technique = get_technique(db, request.technique_id)
    if not technique:
        raise NotFoundError("Technique", request.technique_id)
    if technique.user_id != current_user_id:
        raise ForbiddenError("Only the owner can delete this video")
    if technique.mux_playback_id != request.mux_playback_id:
        raise BadRequestError("Playback id does not belong to this technique")

    asset_id = technique.mux_asset_id or mux.get_asset_id_for_playback(request.mux_playback_id)
    try:
        mux.delete_asset(asset_id)
    except NotFoundError:
        logger.warning(f"Mux asset {asset_id} already gone, deleting technique {technique.id} anyway")

    db.delete(technique)
    db.commit()
    logger.info(f"Technique {request.technique_id} and Mux asset {asset_id} deleted")
    return True

def save_technique_metadata(
    db: Session,
    mux: MuxClient,
    request: video_schemas.SaveMetadataRequest,
    current_user_id: int,
) -> technique_model.Technique:
    """Create the technique for a finished direct upload."""
    _ensure_caller(request.user_id, current_user_id)

    upload = mux.get_upload(request.upload_id)
    asset_id = upload.get("asset_id")
    if not asset_id:
        raise ConflictError("Upload has not produced an asset yet, try again shortly")

    asset = mux.get_asset(asset_id)
    playback_ids = asset.get("playback_ids") or []
    if not playback_ids:
        raise ConflictError("Asset has no playback id yet, try again shortly")

    technique = technique_model.Technique(
        user_id=current_user_id,
        title=request.title,
        position=request.position,
        description=request.description,
        thumbnail_time=request.thumbnail_time,
        mux_upload_id=request.upload_id,
        mux_asset_id=asset_id,
        mux_playback_id=playback_ids[0]["id"],
    )
    db.add(technique)
    db.commit()
    db.refresh(technique)
    logger.info(f"Technique {technique.id} saved for upload {request.upload_id}")
    return technique

def update_technique(
    db: Session,
    request: video_schemas.TechniqueUpdateRequest,
    current_user_id: int,
) -> technique_model.Technique:
    _ensure_caller(request.user_id, current_user_id)

    technique = db.query(technique_model.Technique).filter(
        technique_model.Technique.mux_playback_id == request.playback_id,
        technique_model.Technique.user_id == current_user_id,
    ).first()
    if not technique:
        raise NotFoundError("Technique with playback id", request.playback_id)

    technique.title = request.title
    technique.position = request.position
    technique.description = request.description
    technique.thumbnail_time = request.thumbnail_time
    if request.thumbnail_url:
        technique.thumbnail_url = request.thumbnail_url

    db.commit()
    db.refresh(technique)
    return technique
