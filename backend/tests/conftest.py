from __future__ import annotations

from typing import Any

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from app.coach import factory
from app.coach.adapter import ProviderAdapter, ProviderId
from app.db.base import Base
from app.db.session import get_db
from app.main import create_app
from app.models.coaching_prompt import CoachingPrompt


class ScriptedProvider:
    """Stands in for a provider: records requests and replays a canned reply."""

    def __init__(self) -> None:
        self.reply: Any = "Keep going, you are doing well."
        self.error: Exception | None = None
        self.requests: list[dict[str, Any]] = []

    def build_request(self, config, history, prompt, base_url=None):
        return {
            "config": config,
            "history": list(history),
            "prompt": prompt,
            "base_url": base_url,
        }

    def invoke(self, request):
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return self.reply

    def extract_text(self, response):
        return response or None

    def adapter_for(self, provider: ProviderId) -> ProviderAdapter:
        return ProviderAdapter(
            provider=provider,
            build_request=self.build_request,
            invoke=self.invoke,
            extract_text=self.extract_text,
        )


@pytest.fixture()
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        future=True,
    )
    Base.metadata.create_all(engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(engine)
        engine.dispose()


@pytest.fixture()
def db_session(engine):
    with Session(engine) as session:
        yield session
        session.rollback()


@pytest.fixture()
def add_coaching(db_session: Session):
    def _add(
        coaching_id: str = "coach-1",
        *,
        context_prompt: str | None = "You are a calm career coach.",
        api_key: str = "sk-test",
        model: str = "gemini-1.5-flash",
        api_provider: str | None = "gemini",
    ) -> CoachingPrompt:
        row = CoachingPrompt(
            coaching_id=coaching_id,
            context_prompt=context_prompt,
            api_key=api_key,
            model=model,
            api_provider=api_provider,
        )
        db_session.add(row)
        db_session.commit()
        return row

    return _add


@pytest.fixture()
def scripted_provider(monkeypatch: pytest.MonkeyPatch) -> ScriptedProvider:
    provider = ScriptedProvider()
    for provider_id in ProviderId:
        monkeypatch.setitem(factory.ADAPTERS, provider_id, provider.adapter_for(provider_id))
    return provider


@pytest.fixture()
def client(engine):
    app = create_app()
    TestingSession = sessionmaker(bind=engine, autocommit=False, autoflush=False)

    def _get_test_db():
        db = TestingSession()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = _get_test_db
    with TestClient(app) as test_client:
        yield test_client
