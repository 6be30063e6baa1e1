"""Model listing against each provider's catalog endpoint."""

from __future__ import annotations

import logging
from typing import Any, Callable

import httpx

from app.coach.adapter import ProviderId
from app.core.config import Settings, get_settings
from app.core.errors import CredentialError, ProviderUnavailableError, ValidationError

logger = logging.getLogger(__name__)

GENERATE_CONTENT = "generateContent"


def _get(
    client: httpx.Client,
    provider: ProviderId,
    url: str,
    **kwargs: Any,
) -> dict[str, Any]:
    try:
        response = client.get(url, **kwargs)
    except httpx.HTTPError as exc:
        raise ProviderUnavailableError(provider.value, None, str(exc)) from exc

    if response.is_client_error:
        raise CredentialError(provider.value, response.status_code, response.text)
    if not response.is_success:
        raise ProviderUnavailableError(provider.value, response.status_code, response.text)

    try:
        data = response.json()
    except ValueError as exc:
        raise ProviderUnavailableError(
            provider.value, response.status_code, "invalid JSON in model listing"
        ) from exc
    if not isinstance(data, dict):
        raise ProviderUnavailableError(
            provider.value, response.status_code, "model listing is not a JSON object"
        )
    return data


def _fetch_gemini(client: httpx.Client, api_key: str, settings: Settings) -> list[str]:
    data = _get(
        client,
        ProviderId.GEMINI,
        f"{settings.gemini_api_base.rstrip('/')}/models",
        params={"key": api_key},
    )
    return [
        model["name"]
        for model in data.get("models") or []
        if GENERATE_CONTENT in (model.get("supportedGenerationMethods") or [])
    ]


def _fetch_bearer_listing(provider: ProviderId, base_url: str, client: httpx.Client, api_key: str) -> list[str]:
    data = _get(
        client,
        provider,
        f"{base_url.rstrip('/')}/models",
        headers={"Authorization": f"Bearer {api_key}"},
    )
    return [model["id"] for model in data.get("data") or []]


def _fetch_openai(client: httpx.Client, api_key: str, settings: Settings) -> list[str]:
    return _fetch_bearer_listing(ProviderId.OPENAI, settings.openai_base_url, client, api_key)


def _fetch_deepseek(client: httpx.Client, api_key: str, settings: Settings) -> list[str]:
    return _fetch_bearer_listing(ProviderId.DEEPSEEK, settings.deepseek_base_url, client, api_key)


FETCHERS: dict[ProviderId, Callable[[httpx.Client, str, Settings], list[str]]] = {
    ProviderId.GEMINI: _fetch_gemini,
    ProviderId.OPENAI: _fetch_openai,
    ProviderId.DEEPSEEK: _fetch_deepseek,
}


def list_models(
    api_key: str | None,
    provider: str | None,
    client: httpx.Client | None = None,
) -> list[str]:
    """Return the model ids the provider offers for this key.

    Gemini results are narrowed to models that support ``generateContent``;
    OpenAI and DeepSeek listings are returned as is. Unlike chat requests,
    an unknown provider is rejected here instead of falling back to Gemini.
    """
    if not api_key:
        raise ValidationError("API key is missing.")
    if not provider:
        raise ValidationError("Provider is missing.")
    try:
        provider_id = ProviderId(provider)
    except ValueError:
        raise ValidationError(f"Unknown provider '{provider}'.") from None

    settings = get_settings()
    owns_client = client is None
    if client is None:
        client = httpx.Client(timeout=settings.provider_timeout)
    try:
        models = FETCHERS[provider_id](client, api_key, settings)
    except (KeyError, TypeError, AttributeError) as exc:
        raise ProviderUnavailableError(
            provider_id.value, None, f"unexpected model listing format: {exc!r}"
        ) from exc
    finally:
        if owns_client:
            client.close()
    logger.info("Listed %d models for %s", len(models), provider_id.value)
    return models
