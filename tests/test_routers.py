"""
API tests for the guide endpoints
"""
import json

from fastapi.testclient import TestClient

from guide_service.config import settings
from guide_service.main import app
from guide_service.schemas import GuideDocument
from guide_service.services.guide_fetch_service import GuideSourceError


class TestServiceEndpoints:
    """Tests for GET / and GET /health."""

    def test_root(self, client: TestClient):
        response = client.get("/")

        assert response.status_code == 200
        data = response.json()
        assert data["service"] == "Guide Service"
        assert data["next_scheduled_refresh"] is not None
        assert "guide" in data["endpoints"]

    def test_health_without_document(self, client: TestClient):
        response = client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ok"
        assert data["scheduler_running"] is True
        assert data["refreshing"] is False
        assert data["guide"]["loaded"] is False


class TestGuideEndpoint:
    """Tests for GET /guide."""

    def test_unavailable_before_first_load(self, client: TestClient):
        response = client.get("/guide")

        assert response.status_code == 503
        data = response.json()
        assert data["status"] == "error"
        assert data["error"]["code"] == "GUIDE_UNAVAILABLE"

    def test_returns_layout(self, client: TestClient, guide_document: GuideDocument):
        app.state.guide_state.complete_refresh(guide_document, "test")

        response = client.get("/guide")

        assert response.status_code == 200
        data = response.json()
        assert data["axis"] == ["00:00", "00:30", "01:00"]
        assert data["column_count"] == 3
        assert data["slot_interval_minutes"] == 30
        assert data["fetched_at"] is not None

        news = data["rows"][0]["programs"]
        assert [(p["grid_column_start"], p["normalized_duration"]) for p in news] == [(-1, 1), (1, 2)]
        assert news[1]["truncated_right"] is True
        assert data["rows"][1]["programs"][0]["rating"] == "PG"

    def test_stored_document_is_not_annotated(self, client: TestClient, guide_document: GuideDocument):
        app.state.guide_state.complete_refresh(guide_document, "test")

        client.get("/guide")

        stored = app.state.guide_state.document
        assert stored.rows[0].programs[0].grid_column_start is None


class TestLayoutEndpoint:
    """Tests for POST /guide/layout."""

    def test_lays_out_posted_document(self, client: TestClient, raw_document: dict):
        response = client.post("/guide/layout", json=raw_document)

        assert response.status_code == 200
        data = response.json()
        assert data["axis"] == ["00:00", "00:30", "01:00"]
        assert data["rows"][1]["programs"][0]["grid_column_start"] == 0
        assert data["rows"][1]["programs"][0]["normalized_duration"] == 3
        assert data["fetched_at"] is None

    def test_zero_length_program(self, client: TestClient):
        payload = {
            "start_time": 0,
            "end_time": 1_800_000,
            "rows": [{
                "channel": {"id": 1, "name": "One"},
                "programs": [{"id": 1, "name": "Blip", "start_time": 600_000, "end_time": 600_000}],
            }],
        }

        response = client.post("/guide/layout", json=payload)

        assert response.status_code == 200
        program = response.json()["rows"][0]["programs"][0]
        assert program["grid_column_start"] == 0
        assert program["normalized_duration"] == 1

    def test_validation_error(self, client: TestClient):
        response = client.post("/guide/layout", json={"rows": []})

        assert response.status_code == 422
        locations = [error["loc"] for error in response.json()["detail"]]
        assert ["body", "start_time"] in locations
        assert ["body", "end_time"] in locations


class TestRefreshEndpoint:
    """Tests for POST /refresh."""

    def test_refresh_loads_document(self, client: TestClient, guide_document: GuideDocument, monkeypatch):
        monkeypatch.setattr(settings, "guide_source", "http://upstream.test/guide")

        async def fetch(source: str) -> GuideDocument:
            return guide_document

        app.state.guide_fetcher = fetch

        response = client.post("/refresh")

        assert response.status_code == 200
        assert response.json()["status"] == "success"
        assert client.get("/guide").status_code == 200
        assert client.get("/health").json()["guide"]["loaded"] is True

    def test_refresh_failure(self, client: TestClient, monkeypatch):
        monkeypatch.setattr(settings, "guide_source", "http://upstream.test/guide")

        async def fetch(source: str) -> GuideDocument:
            raise GuideSourceError(source, "Guide source returned HTTP 500")

        app.state.guide_fetcher = fetch

        response = client.post("/refresh")

        assert response.status_code == 502
        assert "HTTP 500" in response.json()["detail"]

        unavailable = client.get("/guide")
        assert unavailable.status_code == 503
        assert "HTTP 500" in unavailable.json()["error"]["context"]["error"]

    def test_refresh_without_source(self, client: TestClient, monkeypatch):
        monkeypatch.setattr(settings, "guide_source", None)

        response = client.post("/refresh")

        assert response.status_code == 502
        assert response.json()["detail"] == "GUIDE_SOURCE not configured"


class TestUnusualProgramsEndpoint:
    """Odd program records are laid out instead of rejecting the document."""

    def test_layout_keeps_every_program(self, client: TestClient, odd_program_document: dict):
        response = client.post(
            "/guide/layout",
            content=json.dumps(odd_program_document),
            headers={"content-type": "application/json"},
        )

        assert response.status_code == 200
        programs = response.json()["rows"][0]["programs"]
        assert [(p["id"], p["grid_column_start"], p["normalized_duration"]) for p in programs] == [
            ("s1", 0, 1),
            ("s2", 1, 2),
            ("s3", None, 1),
        ]
        assert programs[1]["start_time"] == 1_800_000.5
        assert programs[2]["start_time"] is None
        assert programs[2]["end_time"] is None

    def test_refreshed_document_with_odd_program_is_served(
        self, client: TestClient, odd_program_document: dict, monkeypatch
    ):
        monkeypatch.setattr(settings, "guide_source", "http://upstream.test/guide")

        async def fetch(source: str) -> GuideDocument:
            return GuideDocument.model_validate(odd_program_document)

        app.state.guide_fetcher = fetch

        assert client.post("/refresh").status_code == 200

        response = client.get("/guide")
        assert response.status_code == 200
        assert len(response.json()["rows"][0]["programs"]) == 3


class TestStartup:
    """Tests for the application lifespan."""

    def test_initial_load_from_file_source(self, tmp_path, raw_document: dict, monkeypatch):
        path = tmp_path / "guide.json"
        path.write_text(json.dumps(raw_document), encoding="utf-8")
        monkeypatch.setattr(settings, "guide_source", str(path))
        monkeypatch.setattr(settings, "guide_refresh_on_startup", True)

        with TestClient(app) as test_client:
            response = test_client.get("/guide")

        assert response.status_code == 200
        assert response.json()["axis"] == ["00:00", "00:30", "01:00"]

    def test_failed_initial_load_keeps_service_up(self, tmp_path, monkeypatch):
        monkeypatch.setattr(settings, "guide_source", str(tmp_path / "missing.json"))
        monkeypatch.setattr(settings, "guide_refresh_on_startup", True)

        with TestClient(app) as test_client:
            health = test_client.get("/health").json()
            guide = test_client.get("/guide")

        assert health["guide"]["loaded"] is False
        assert "Cannot read guide file" in health["guide"]["error"]
        assert guide.status_code == 503
