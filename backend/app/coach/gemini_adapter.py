from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Sequence

import httpx
from google import genai
from google.genai import errors as genai_errors
from google.genai import types as genai_types

from app.coach.adapter import (
    CoachingConfig,
    ConversationTurn,
    ProviderAdapter,
    ProviderId,
)
from app.core.errors import ProviderError

logger = logging.getLogger(__name__)


@dataclass
class GeminiChatRequest:
    api_key: str
    model: str
    system_instruction: str | None
    history: list[dict[str, Any]] = field(default_factory=list)
    prompt: str = ""


def build_history(history: Sequence[ConversationTurn]) -> list[dict[str, Any]]:
    # Gemini uses the stored vocabulary (user/model) as is.
    return [{"role": turn.role, "parts": [{"text": turn.message}]} for turn in history]


def build_request(
    config: CoachingConfig,
    history: Sequence[ConversationTurn],
    prompt: str,
    base_url: str | None = None,
) -> GeminiChatRequest:
    if base_url:
        logger.debug("Ignoring base URL override for Gemini request")
    return GeminiChatRequest(
        api_key=config.credential,
        model=config.model_id,
        system_instruction=config.system_prompt or None,
        history=build_history(history),
        prompt=prompt,
    )


def http_options() -> genai_types.HttpOptions:
    # A single attempt: failed calls are reported, never retried.
    return genai_types.HttpOptions(
        retry_options=genai_types.HttpRetryOptions(attempts=1)
    )


def invoke(request: GeminiChatRequest) -> Any:
    client = genai.Client(api_key=request.api_key, http_options=http_options())
    chat = client.chats.create(
        model=request.model,
        config=genai_types.GenerateContentConfig(
            system_instruction=request.system_instruction
        ),
        history=request.history,
    )
    try:
        return chat.send_message(request.prompt)
    except genai_errors.APIError as exc:
        raise ProviderError(ProviderId.GEMINI.value, exc.code, exc.message or str(exc)) from exc
    except httpx.HTTPError as exc:
        raise ProviderError(ProviderId.GEMINI.value, None, str(exc)) from exc


def extract_text(response: Any) -> str | None:
    # ``text`` is None when the candidate has no text parts, e.g. a blocked answer.
    if response is None:
        return None
    return getattr(response, "text", None) or None


ADAPTER = ProviderAdapter(
    provider=ProviderId.GEMINI,
    build_request=build_request,
    invoke=invoke,
    extract_text=extract_text,
)
