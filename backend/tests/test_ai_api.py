from sqlalchemy.orm import Session

from app.core.errors import CredentialError, ProviderError
from app.models.coaching_prompt import CoachingPrompt


def _seed(engine, **overrides):
    values = {
        "coaching_id": "coach-1",
        "context_prompt": "You are a calm career coach.",
        "api_key": "sk-test",
        "model": "gpt-4o-mini",
        "api_provider": "openai",
    }
    values.update(overrides)
    with Session(engine) as session:
        session.add(CoachingPrompt(**values))
        session.commit()


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


def test_prompt_round_trip_and_history(client, engine, scripted_provider):
    _seed(engine)
    scripted_provider.reply = "Try a mock interview."

    response = client.post(
        "/ai/prompt",
        json={"prompt": "How do I prepare?", "userId": "u1", "coachingId": "coach-1"},
    )

    assert response.status_code == 200
    assert response.json() == {"aiResponse": "Try a mock interview."}

    history = client.get("/ai/history", params={"userId": "u1", "coachingId": "coach-1"})
    assert history.json() == {
        "history": [
            {"role": "user", "message": "How do I prepare?"},
            {"role": "model", "message": "Try a mock interview."},
        ]
    }


def test_prompt_error_statuses(client, engine, scripted_provider):
    missing = client.post("/ai/prompt", json={"prompt": "hi", "userId": "u1"})
    assert missing.status_code == 400
    assert "error" in missing.json()

    unknown = client.post(
        "/ai/prompt", json={"prompt": "hi", "userId": "u1", "coachingId": "nope"}
    )
    assert unknown.status_code == 404

    _seed(engine)
    scripted_provider.reply = None
    empty = client.post(
        "/ai/prompt", json={"prompt": "hi", "userId": "u1", "coachingId": "coach-1"}
    )
    assert empty.status_code == 500
    assert "error" in empty.json()


def test_history_requires_user_id(client):
    assert client.get("/ai/history").status_code == 400


def test_delete_last_reports_incomplete_undo(client, engine, scripted_provider):
    _seed(engine)
    client.post("/ai/prompt", json={"prompt": "Q", "userId": "u1", "coachingId": "coach-1"})

    first = client.post("/ai/history/delete_last", json={"userId": "u1", "coachingId": "coach-1"})
    assert first.status_code == 200
    assert first.json()["deleted"] == 2

    second = client.post("/ai/history/delete_last", json={"userId": "u1", "coachingId": "coach-1"})
    assert second.status_code == 404
    assert second.json()["deleted"] == 0

    assert client.post("/ai/history/delete_last", json={"userId": "u1"}).status_code == 400


def test_coach_settings_read_and_update(client, engine):
    _seed(engine)

    current = client.get("/ai/coach/settings/coach-1")
    assert current.status_code == 200
    assert current.json()["model"] == "gpt-4o-mini"

    updated = client.post(
        "/ai/coach/settings",
        json={
            "coachingId": "coach-1",
            "contextPrompt": "You are a strict coach.",
            "apiKey": "sk-new",
            "model": "gpt-4o",
        },
    )
    assert updated.status_code == 200

    body = client.get("/ai/coach/settings/coach-1").json()
    assert body["context_prompt"] == "You are a strict coach."
    assert body["api_key"] == "sk-new"
    assert body["model"] == "gpt-4o"
    assert body["api_provider"] == "openai"

    incomplete = client.post("/ai/coach/settings", json={"coachingId": "coach-1", "model": "x"})
    assert incomplete.status_code == 400

    assert client.get("/ai/coach/settings/missing").status_code == 404
    unknown = client.post(
        "/ai/coach/settings",
        json={"coachingId": "missing", "contextPrompt": "p", "apiKey": "k", "model": "m"},
    )
    assert unknown.status_code == 404


def test_models_endpoint(client, monkeypatch):
    monkeypatch.setattr(
        "app.api.routes.ai.list_models", lambda api_key, provider: ["gpt-4o", "gpt-4o-mini"]
    )
    ok = client.get("/ai/models", params={"apiKey": "sk-test", "provider": "openai"})
    assert ok.json() == {"models": ["gpt-4o", "gpt-4o-mini"]}

    def rejected(api_key, provider):
        raise CredentialError(provider, 401, "invalid key")

    monkeypatch.setattr("app.api.routes.ai.list_models", rejected)
    denied = client.get("/ai/models", params={"apiKey": "bad", "provider": "openai"})
    assert denied.status_code == 401


def test_models_endpoint_validates_query(client):
    assert client.get("/ai/models", params={"provider": "openai"}).status_code == 400
    assert client.get("/ai/models", params={"apiKey": "k"}).status_code == 400
    assert client.get("/ai/models", params={"apiKey": "k", "provider": "nope"}).status_code == 400


def test_provider_failure_is_502_and_keeps_the_user_turn(client, engine, scripted_provider):
    _seed(engine)
    scripted_provider.error = ProviderError("openai", 503, "overloaded")

    response = client.post(
        "/ai/prompt", json={"prompt": "hi", "userId": "u1", "coachingId": "coach-1"}
    )

    assert response.status_code == 502
    assert "overloaded" in response.json()["error"]
    assert len(scripted_provider.requests) == 1
    history = client.get("/ai/history", params={"userId": "u1", "coachingId": "coach-1"})
    assert history.json() == {"history": [{"role": "user", "message": "hi"}]}


def test_invalid_provider_in_settings_is_reported_as_error(client, engine):
    _seed(engine)

    response = client.post(
        "/ai/coach/settings",
        json={
            "coachingId": "coach-1",
            "contextPrompt": "p",
            "apiKey": "k",
            "model": "m",
            "apiProvider": "mistral",
        },
    )

    assert response.status_code == 400
    assert "apiProvider" in response.json()["error"]
    assert client.get("/ai/coach/settings/coach-1").json()["api_provider"] == "openai"
