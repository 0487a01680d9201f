"""
Tests for the HTTP surface.

Endpoints are thin wrappers, so these only check routing, request
validation and that the engine's output reaches the response body.
"""

import pytest
from fastapi.testclient import TestClient

from app.core.config import settings
from app.main import app

PREFIX = settings.API_PREFIX


@pytest.fixture
def client():
    return TestClient(app)


class TestService:

    def test_root(self, client):
        response = client.get("/")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_health(self, client):
        body = client.get("/health").json()
        assert body["version"] == settings.VERSION


class TestScoring:

    def test_mind(self, client):
        payload = {
            "state": {
                "stress": 8,
                "mood": 5,
                "focus_quality": "scattered",
                "cognitive_scores": {"reaction_time": 370},
            },
            "baseline": {"reaction_time": 250},
        }
        response = client.post(f"{PREFIX}/scoring/mind", json=payload)
        assert response.status_code == 200
        body = response.json()
        assert body["score"] == 36
        assert body["recommended_protocol"] == "box_breathing"

    def test_mind_rejects_out_of_range_stress(self, client):
        response = client.post(f"{PREFIX}/scoring/mind", json={"state": {"stress": 12, "mood": 5}})
        assert response.status_code == 422

    def test_sleep(self, client):
        payload = {
            "state": {"duration": 4, "efficiency": 60, "hrv": 70, "wake_time": "06:30"},
            "baseline": {"hrv_baseline": 100, "sleep_need": 8},
        }
        body = client.post(f"{PREFIX}/scoring/sleep", json=payload).json()
        assert body["is_acute_overload"] is True
        assert body["recommended_bedtime"] == "22:30"


class TestJournal:

    def test_analyze(self, client):
        body = client.post(f"{PREFIX}/journal/analyze", json={"text": "I can't when everyone always fails"}).json()
        assert body["risk_signals"]["catastrophizing"] == 6
        assert body["psychological_flexibility"]["acceptance_level"] == 3

    def test_empty_text(self, client):
        body = client.post(f"{PREFIX}/journal/analyze", json={}).json()
        assert body["sentiment"] == "Neutral"
        assert body["analysis_confidence"] == 0


class TestAnalytics:

    def test_weights(self, client):
        body = client.post(f"{PREFIX}/analytics/weights", json={"clinical": {"conditions": ["t1d"]}}).json()
        assert max(body, key=body.get) == "fuel"
        assert sum(body.values()) == pytest.approx(1.0)

    def test_protocols(self, client):
        payload = {"state": {"stress": 5}, "context": {"time_until_event": 10}}
        body = client.post(f"{PREFIX}/analytics/protocols", json=payload).json()
        assert body["available"] == ["box_breathing", "super_ventilation", "visualization"]
        assert body["triggered_rules"] == ["imminent_event"]

    def test_state_vector(self, client):
        payload = {"inputs": {"stress_slider": 8}}
        body = client.post(f"{PREFIX}/analytics/state-vector", json=payload).json()
        assert body["state_vector"]["autonomic_balance"] == pytest.approx(-4.8)
        assert body["readiness"] == 58

    def test_trajectory(self, client):
        history = [
            {"score": 250 + 10 * i, "timestamp": f"2026-03-0{i + 1}T08:00:00Z"}
            for i in range(5)
        ]
        body = client.post(f"{PREFIX}/analytics/trajectory",
                           json={"metric": "reaction_time", "history": history}).json()
        assert body["trend"]["direction"] == "rising"
        assert [s["grade"] for s in body["scores_7d"]][0] == "B"

    def test_advice(self, client):
        payload = {
            "mind": {"stress": 1, "mood": 5, "cognitive_scores": {"memory_span": 4}},
            "context": {"time_until_event": 10},
        }
        response = client.post(f"{PREFIX}/analytics/advice", json=payload)
        assert response.status_code == 200
        body = response.json()
        assert body["withheld_protocol"] == "nsdr_lite"
        assert body["recommended_protocol"] is None

    def test_trajectory_mixed_timezones(self, client):
        history = [
            {"score": 250, "timestamp": "2026-02-27T08:00:00"},
            {"score": 260, "timestamp": "2026-02-28T08:00:00Z"},
        ]
        response = client.post(f"{PREFIX}/analytics/trajectory",
                               json={"metric": "reaction_time", "history": history})
        assert response.status_code == 200
        assert [s["score"] for s in response.json()["scores_7d"]] == [250, 260]
