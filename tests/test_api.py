import pytest
from fastapi.testclient import TestClient

# Import the FastAPI app
from workout_engine import main
from workout_engine.catalog import CatalogProvider
from workout_engine.config import Settings
from workout_engine.generator import ProgramGenerator

client = TestClient(main.app)


def make_request(**overrides):
    base = {
        "training_experience": "beginner",
        "training_focus": "general_fitness",
        "weekly_availability": 3,
        "available_equipment": ["bodyweight", "dumbbells"],
        "disliked_exercises": [],
        "preferred_duration_minutes": 60,
    }
    base.update(overrides)
    return base


def test_health():
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


def test_generate_program_basic_structure():
    payload = make_request()
    resp = client.post("/generate-program", params={"on": "2026-10-19"}, json=payload)
    assert resp.status_code == 200, resp.text
    data = resp.json()

    assert data["archetype"] == "full_body"
    assert data["week"] == "2026-W43"
    assert isinstance(data["sessions"], list)
    assert len(data["sessions"]) == payload["weekly_availability"]

    day0 = data["sessions"][0]
    assert {"name", "exercises", "estimated_duration", "session_type"} <= set(day0.keys())
    assert day0["exercises"]
    ex0 = day0["exercises"][0]
    assert {"exercise_id", "exercise_name", "sets", "reps", "rest_seconds", "priority"} <= set(ex0.keys())


def test_generate_program_is_stable_within_a_week():
    payload = make_request(weekly_availability=5)
    a = client.post("/generate-program", params={"on": "2026-10-19"}, json=payload).json()
    b = client.post("/generate-program", params={"on": "2026-10-23"}, json=payload).json()
    assert a == b


def test_out_of_range_availability_is_clamped():
    resp = client.post("/generate-program", json=make_request(weekly_availability=9))
    assert resp.status_code == 200, resp.text
    assert len(resp.json()["sessions"]) == 7

    resp = client.post("/generate-program", json=make_request(weekly_availability=0))
    assert resp.status_code == 200, resp.text
    assert len(resp.json()["sessions"]) == 1


@pytest.mark.parametrize("field", ["weekly_availability", "preferred_duration_minutes"])
@pytest.mark.parametrize("value", [None, [3], {"days": 3}, "three"])
def test_non_integer_counts_are_rejected(field, value):
    resp = client.post("/generate-program", json=make_request(**{field: value}))
    assert resp.status_code == 422


def test_numeric_strings_are_clamped():
    resp = client.post("/generate-program", json=make_request(weekly_availability="9"))
    assert resp.status_code == 200, resp.text
    assert len(resp.json()["sessions"]) == 7


def test_validation_error_for_unknown_focus():
    resp = client.post("/generate-program", json=make_request(training_focus="powerlifting"))
    assert resp.status_code == 422


def test_todays_session():
    resp = client.post("/todays-session", params={"on": "2026-10-18"}, json=make_request())
    assert resp.status_code == 200, resp.text
    assert resp.json()["name"] == "Full Body 1"


def test_exercise_alternative():
    body = {"exercise_id": "barbell-bench-press", "parameters": make_request(available_equipment=["dumbbells"])}
    resp = client.post("/exercise-alternative", json=body)
    assert resp.status_code == 200, resp.text
    assert resp.json()["alternative"]["id"] == "dumbbell-bench-press"

    body["exercise_id"] = "not-an-exercise"
    resp = client.post("/exercise-alternative", json=body)
    assert resp.status_code == 200
    assert resp.json()["alternative"] is None


def test_catalog_unavailable_returns_503(monkeypatch, tmp_path):
    broken = ProgramGenerator(CatalogProvider(Settings(catalog_paths=[str(tmp_path / "missing.csv")])))
    monkeypatch.setattr(main, "generator", broken)
    resp = client.post("/generate-program", json=make_request())
    assert resp.status_code == 503
    assert "not found" in resp.json()["detail"]


def test_run_serves_app_with_configured_address(monkeypatch):
    calls = []
    monkeypatch.setattr(main.uvicorn, "run", lambda app, **kwargs: calls.append((app, kwargs)))
    monkeypatch.setattr(main, "settings", Settings(host="127.0.0.1", port=8123, log_level="DEBUG"))
    main.run()
    assert calls == [(main.app, {"host": "127.0.0.1", "port": 8123, "log_level": "debug"})]


def test_settings_read_host_and_port(monkeypatch):
    monkeypatch.setenv("HOST", "127.0.0.1")
    monkeypatch.setenv("PORT", "9000")
    s = Settings.from_env()
    assert (s.host, s.port) == ("127.0.0.1", 9000)
