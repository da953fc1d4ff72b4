from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from src.routers.profile import router as profile_router, get_profile_engine
from src.services.storage import SubmissionStore, get_submission_store
from services.profile_scoring.engine import ProfileEngine
from services.profile_scoring.models import IncompleteAssessmentError

CATALOG_PATH = Path(__file__).resolve().parents[2] / "assets" / "profile_catalog.yml"

# Create a FastAPI app instance and include the router for testing
app = FastAPI()
app.include_router(profile_router, prefix="/api/v1")

client = TestClient(app)

ENGINE = ProfileEngine(config_path=str(CATALOG_PATH))

VALID_ANSWERS = {
    "q1": "strongly-agree",
    "q2": "agree",
    "q3": "strongly-disagree",
    "q5": "neutral",
}


@pytest.fixture(autouse=True)
def no_redis(monkeypatch):
    """Runs every request without a Redis server: the cache reports itself unavailable."""
    monkeypatch.setattr("src.cache.connection.get_redis", AsyncMock(return_value=None))

@pytest.fixture
def store():
    store = SubmissionStore()
    app.dependency_overrides[get_profile_engine] = lambda: ENGINE
    app.dependency_overrides[get_submission_store] = lambda: store
    yield store
    app.dependency_overrides.clear()


def submit(answers=VALID_ANSWERS):
    return client.post("/api/v1/quiz/submissions", json={"email": "Lead@Example.com", "answers": answers})


# --- Test Cases ---

def test_submit_valid_answers(store):
    """Test valid submission → 201 Created with catalog-derived scores"""
    response = submit()
    assert response.status_code == 201
    body = response.json()
    assert body["component_scores"] == {
        "self-identity": 5,
        "self-esteem": 4,
        "self-confidence": 1,
        "self-assertiveness": 3,
    }
    assert body["top_components"] == ["self-identity", "self-esteem", "self-assertiveness"]
    assert body["submission_id"] in store._submissions

def test_submit_invalid_option(store):
    """Test unknown option → 400 Bad Request"""
    response = submit({"q1": "sometimes"})
    assert response.status_code == 400
    assert "Invalid option 'sometimes' for question 'q1'" in response.json()["detail"]

def test_submit_incomplete_assessment(store):
    """Test incomplete assessment → 422 Unprocessable Entity"""
    mock_engine = MagicMock(spec=ProfileEngine)
    mock_engine.submit.side_effect = IncompleteAssessmentError("Missing answers for required questions: ['q2']")
    app.dependency_overrides[get_profile_engine] = lambda: mock_engine

    response = submit({"q1": "agree"})
    assert response.status_code == 422
    assert "Missing answers for required questions" in response.json()["detail"]
    mock_engine.submit.assert_called_once_with({"q1": "agree"}, email="Lead@Example.com")

def test_submit_unexpected_error(store):
    """Test unexpected engine failure → 500 Internal Server Error"""
    mock_engine = MagicMock(spec=ProfileEngine)
    mock_engine.submit.side_effect = Exception("A critical engine failure occurred")
    app.dependency_overrides[get_profile_engine] = lambda: mock_engine

    response = submit()
    assert response.status_code == 500
    assert response.json()["detail"] == "Internal Server Error"

def test_submit_rejects_malformed_body(store):
    response = client.post("/api/v1/quiz/submissions", json={"answers": VALID_ANSWERS})
    assert response.status_code == 422


def test_results_for_stored_submission(store):
    submission_id = submit().json()["submission_id"]
    response = client.get(f"/api/v1/quiz/submissions/{submission_id}/results")
    assert response.status_code == 200
    body = response.json()
    assert [c["key"] for c in body["positive"]] == ["self-identity", "self-esteem"]
    assert body["negative"]["key"] == "self-confidence"
    assert body["challenge"]["score"] == 1
    assert body["challenge"]["max_score"] == 5

def test_results_unknown_submission(store):
    response = client.get("/api/v1/quiz/submissions/missing/results")
    assert response.status_code == 404
    assert "missing" in response.json()["detail"]

def test_chart_for_stored_submission(store):
    submission_id = submit().json()["submission_id"]
    response = client.get(f"/api/v1/quiz/submissions/{submission_id}/chart", params={"radius": 100})
    assert response.status_code == 200
    points = response.json()["points"]
    assert len(points) == 8
    assert [p["dot_type"] for p in points].count("high") == 2
    assert [p["dot_type"] for p in points].count("low") == 1
    assert points[0]["key"] == "self-identity"
    assert points[0]["dot_type"] == "high"

def test_chart_unknown_submission(store):
    response = client.get("/api/v1/quiz/submissions/missing/chart")
    assert response.status_code == 404

def test_chart_rejects_non_positive_radius(store):
    response = client.get("/api/v1/quiz/submissions/anything/chart", params={"radius": 0})
    assert response.status_code == 422


def test_results_from_supplied_scores_do_not_touch_store():
    mock_store = MagicMock(spec=SubmissionStore)
    app.dependency_overrides[get_profile_engine] = lambda: ENGINE
    app.dependency_overrides[get_submission_store] = lambda: mock_store

    response = client.post("/api/v1/quiz/results", json={"component_scores": {"self_agency": 2, "self_esteem": 7}})
    app.dependency_overrides.clear()

    assert response.status_code == 200
    body = response.json()
    assert [c["key"] for c in body["positive"]] == ["self-esteem"]
    assert body["negative"]["key"] == "self-agency"
    mock_store.get_component_scores.assert_not_called()

def test_results_from_empty_scores():
    app.dependency_overrides[get_profile_engine] = lambda: ENGINE
    response = client.post("/api/v1/quiz/results", json={"component_scores": {}})
    app.dependency_overrides.clear()

    assert response.status_code == 200
    assert response.json()["positive"] == []
    assert response.json()["negative"] is None
