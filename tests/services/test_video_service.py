import httpx
import pytest

from app.core.exceptions import BadRequestError, ConflictError, ForbiddenError, NotFoundError, UpstreamError
from app.models.technique import Technique
from app.schemas import video_schemas
from app.services import video_service


def mux_handler(routes, calls):
    """Answer Mux API calls from a {(method, path): (status, body)} table."""
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.headers["authorization"].startswith("Basic ")
        key = (request.method, request.url.path)
        calls.append(key)
        if key not in routes:
            return httpx.Response(404, json={"error": {"type": "not_found"}})
        status_code, body = routes[key]
        if body is None:
            return httpx.Response(status_code)
        return httpx.Response(status_code, json=body)
    return handler

def make_client(routes, calls=None):
    calls = [] if calls is None else calls
    return video_service.MuxClient(
        "token-id",
        "token-secret",
        transport=httpx.MockTransport(mux_handler(routes, calls)),
    )

READY_UPLOAD = {
    ("GET", "/video/v1/uploads/up-1"): (200, {"data": {"id": "up-1", "status": "asset_created", "asset_id": "asset-1"}}),
    ("GET", "/video/v1/assets/asset-1"): (200, {"data": {"id": "asset-1", "playback_ids": [{"id": "pb-1", "policy": "public"}]}}),
}


@pytest.fixture
def technique(db_session, athlete):
    db_technique = Technique(
        user_id=athlete.id,
        title="Kimura from closed guard",
        position="Closed Guard",
        mux_upload_id="up-1",
        mux_asset_id="asset-1",
        mux_playback_id="pb-1",
    )
    db_session.add(db_technique)
    db_session.commit()
    db_session.refresh(db_technique)
    return db_technique


class TestMuxClient:

    def test_returns_data_field(self):
        client = make_client(READY_UPLOAD)
        assert client.get_upload("up-1")["asset_id"] == "asset-1"

    def test_playback_lookup(self):
        client = make_client({
            ("GET", "/video/v1/playback-ids/pb-9"): (200, {"data": {"id": "pb-9", "object": {"type": "asset", "id": "asset-9"}}}),
        })
        assert client.get_asset_id_for_playback("pb-9") == "asset-9"

    def test_playback_lookup_without_asset(self):
        client = make_client({
            ("GET", "/video/v1/playback-ids/pb-9"): (200, {"data": {"id": "pb-9"}}),
        })
        with pytest.raises(UpstreamError):
            client.get_asset_id_for_playback("pb-9")

    def test_not_found(self):
        with pytest.raises(NotFoundError):
            make_client({}).get_asset("missing")

    def test_server_error(self):
        client = make_client({("DELETE", "/video/v1/assets/asset-1"): (500, {"error": "boom"})})
        with pytest.raises(UpstreamError):
            client.delete_asset("asset-1")

    def test_connection_error(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)
        client = video_service.MuxClient("id", "secret", transport=httpx.MockTransport(handler))
        with pytest.raises(UpstreamError):
            client.get_upload("up-1")


class TestSaveMetadata:

    def test_creates_technique_from_upload(self, db_session, athlete):
        request = video_schemas.SaveMetadataRequest(
            upload_id="up-1", title="Armbar from mount", position="Mount", thumbnail_time=3.5, user_id=athlete.id
        )

        technique = video_service.save_technique_metadata(db_session, make_client(READY_UPLOAD), request, athlete.id)

        assert technique.id is not None
        assert technique.user_id == athlete.id
        assert technique.mux_asset_id == "asset-1"
        assert technique.mux_playback_id == "pb-1"
        assert technique.thumbnail_time == 3.5

    def test_upload_still_processing(self, db_session, athlete):
        routes = {("GET", "/video/v1/uploads/up-2"): (200, {"data": {"id": "up-2", "status": "waiting"}})}
        request = video_schemas.SaveMetadataRequest(upload_id="up-2", title="Triangle")

        with pytest.raises(ConflictError):
            video_service.save_technique_metadata(db_session, make_client(routes), request, athlete.id)
        assert db_session.query(Technique).count() == 0

    def test_user_id_must_be_caller(self, db_session, athlete, other_athlete):
        calls = []
        request = video_schemas.SaveMetadataRequest(upload_id="up-1", title="Triangle", user_id=other_athlete.id)

        with pytest.raises(ForbiddenError):
            video_service.save_technique_metadata(db_session, make_client(READY_UPLOAD, calls), request, athlete.id)
        assert calls == []


class TestDeleteAsset:

    def test_deletes_asset_and_technique(self, db_session, technique, athlete):
        calls = []
        client = make_client({("DELETE", "/video/v1/assets/asset-1"): (204, None)}, calls)
        request = video_schemas.DeleteAssetRequest(mux_playback_id="pb-1", technique_id=technique.id)

        assert video_service.delete_technique_asset(db_session, client, request, athlete.id) is True
        assert calls == [("DELETE", "/video/v1/assets/asset-1")]
        assert db_session.query(Technique).count() == 0

    def test_resolves_asset_from_playback_id(self, db_session, technique, athlete):
        technique.mux_asset_id = None
        db_session.commit()
        calls = []
        client = make_client({
            ("GET", "/video/v1/playback-ids/pb-1"): (200, {"data": {"id": "pb-1", "object": {"type": "asset", "id": "asset-1"}}}),
            ("DELETE", "/video/v1/assets/asset-1"): (204, None),
        }, calls)
        request = video_schemas.DeleteAssetRequest(mux_playback_id="pb-1", technique_id=technique.id)

        video_service.delete_technique_asset(db_session, client, request, athlete.id)

        assert calls == [("GET", "/video/v1/playback-ids/pb-1"), ("DELETE", "/video/v1/assets/asset-1")]

    def test_asset_already_gone(self, db_session, technique, athlete):
        request = video_schemas.DeleteAssetRequest(mux_playback_id="pb-1", technique_id=technique.id)
        video_service.delete_technique_asset(db_session, make_client({}), request, athlete.id)
        assert db_session.query(Technique).count() == 0

    def test_mux_failure_keeps_technique(self, db_session, technique, athlete):
        client = make_client({("DELETE", "/video/v1/assets/asset-1"): (503, {"error": "unavailable"})})
        request = video_schemas.DeleteAssetRequest(mux_playback_id="pb-1", technique_id=technique.id)

        with pytest.raises(UpstreamError):
            video_service.delete_technique_asset(db_session, client, request, athlete.id)
        assert db_session.query(Technique).count() == 1

    def test_owner_only(self, db_session, technique, other_athlete):
        request = video_schemas.DeleteAssetRequest(mux_playback_id="pb-1", technique_id=technique.id)
        with pytest.raises(ForbiddenError):
            video_service.delete_technique_asset(db_session, make_client({}), request, other_athlete.id)

    def test_playback_id_must_match(self, db_session, technique, athlete):
        request = video_schemas.DeleteAssetRequest(mux_playback_id="pb-other", technique_id=technique.id)
        with pytest.raises(BadRequestError):
            video_service.delete_technique_asset(db_session, make_client({}), request, athlete.id)


class TestUpdateTechnique:

    def test_updates_by_playback_id(self, db_session, technique, athlete):
        request = video_schemas.TechniqueUpdateRequest.model_validate({
            "playbackId": "pb-1",
            "title": "Kimura, high elbow",
            "position": "Closed Guard",
            "description": "Break posture first",
            "thumbnailTime": 12,
            "thumbnailUrl": "https://image.mux.com/pb-1/thumbnail.jpg?time=12",
            "userId": athlete.id,
        })

        updated = video_service.update_technique(db_session, request, athlete.id)

        assert updated.id == technique.id
        assert updated.title == "Kimura, high elbow"
        assert updated.thumbnail_time == 12
        assert updated.thumbnail_url.endswith("time=12")

    def test_other_users_technique_not_found(self, db_session, technique, other_athlete):
        request = video_schemas.TechniqueUpdateRequest(playback_id="pb-1", title="Mine")
        with pytest.raises(NotFoundError):
            video_service.update_technique(db_session, request, other_athlete.id)
