"""
Shared pytest fixtures for guide service tests
"""
import pytest
from fastapi.testclient import TestClient

from guide_service.main import app
from guide_service.schemas import GuideDocument


HALF_HOUR_MS = 30 * 60 * 1000


@pytest.fixture
def raw_document() -> dict:
    """Guide payload as served upstream: a 90 minute axis starting at the epoch."""
    return {
        "start_time": 0,
        "end_time": 3 * HALF_HOUR_MS,
        "rows": [
            {
                "channel": {"id": 1, "number": 2, "name": "News", "description": "All news"},
                "programs": [
                    {
                        "id": "n1",
                        "name": "Early Edition",
                        "description": None,
                        "start_time": -900_000,
                        "end_time": 900_000,
                        "duration": 30,
                    },
                    {
                        "id": "n2",
                        "name": "Midday",
                        "description": "Headlines",
                        "start_time": 1_800_000,
                        "end_time": 4_500_000,
                        "duration": 45,
                        "truncated_right": True,
                    },
                ],
            },
            {
                "channel": {"id": 7, "number": 7, "name": "Movies", "description": None},
                "programs": [
                    {
                        "id": "m1",
                        "name": "Feature",
                        "start_time": 0,
                        "end_time": 3 * HALF_HOUR_MS,
                        "duration": 90,
                        "rating": "PG",
                    },
                ],
            },
        ],
    }


@pytest.fixture
def guide_document(raw_document) -> GuideDocument:
    return GuideDocument.model_validate(raw_document)


@pytest.fixture
def client():
    """Test client with lifespan events (scheduler, app state) running."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def odd_program_document() -> dict:
    """One channel where a single program carries unusual values next to a normal one."""
    return {
        "start_time": 0,
        "end_time": 2 * HALF_HOUR_MS,
        "rows": [
            {
                "channel": {"id": 3, "name": "Sports"},
                "programs": [
                    {"id": "s1", "name": "Warmup", "start_time": 0, "end_time": HALF_HOUR_MS},
                    {"id": "s2", "name": None, "start_time": 1_800_000.5, "end_time": 4_500_000.5},
                    {"id": "s3", "name": "Overtime", "start_time": float("nan"), "end_time": float("inf")},
                ],
            },
        ],
    }
