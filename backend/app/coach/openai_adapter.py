from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Sequence

from openai import APIStatusError, OpenAI, OpenAIError

from app.coach.adapter import (
    ROLE_USER,
    CoachingConfig,
    ConversationTurn,
    ProviderAdapter,
    ProviderId,
)
from app.core.config import get_settings
from app.core.errors import ProviderError

logger = logging.getLogger(__name__)


@dataclass
class ChatCompletionRequest:
    provider: ProviderId
    api_key: str
    base_url: str
    model: str
    messages: list[dict[str, str]] = field(default_factory=list)
    temperature: float = 0.7


def to_chat_role(role: str) -> str:
    """Stored ``model`` turns are ``assistant`` turns for chat-completion APIs."""
    return "user" if role == ROLE_USER else "assistant"


def build_messages(
    system_prompt: str | None,
    history: Sequence[ConversationTurn],
    prompt: str,
) -> list[dict[str, str]]:
    messages: list[dict[str, str]] = []
    if system_prompt:
        messages.append({"role": "system", "content": system_prompt})
    for turn in history:
        messages.append({"role": to_chat_role(turn.role), "content": turn.message})
    messages.append({"role": "user", "content": prompt})
    return messages


def build_chat_request(
    provider: ProviderId,
    default_base_url: str,
    config: CoachingConfig,
    history: Sequence[ConversationTurn],
    prompt: str,
    base_url: str | None = None,
) -> ChatCompletionRequest:
    settings = get_settings()
    return ChatCompletionRequest(
        provider=provider,
        api_key=config.credential,
        base_url=base_url or default_base_url,
        model=config.model_id,
        messages=build_messages(config.system_prompt, history, prompt),
        temperature=settings.chat_temperature,
    )


def build_request(
    config: CoachingConfig,
    history: Sequence[ConversationTurn],
    prompt: str,
    base_url: str | None = None,
) -> ChatCompletionRequest:
    return build_chat_request(
        ProviderId.OPENAI,
        get_settings().openai_base_url,
        config,
        history,
        prompt,
        base_url=base_url,
    )


def invoke(request: ChatCompletionRequest) -> Any:
    logger.debug(
        "Sending %d messages to %s model %s",
        len(request.messages),
        request.provider.value,
        request.model,
    )
    # max_retries=0: a failed call is reported once, never re-sent.
    with OpenAI(api_key=request.api_key, base_url=request.base_url, max_retries=0) as client:
        try:
            return client.chat.completions.create(
                model=request.model,
                messages=request.messages,
                temperature=request.temperature,
            )
        except APIStatusError as exc:
            raise ProviderError(request.provider.value, exc.status_code, exc.response.text) from exc
        except OpenAIError as exc:
            raise ProviderError(request.provider.value, None, str(exc)) from exc


def extract_text(completion: Any) -> str | None:
    choices = getattr(completion, "choices", None) or []
    if not choices:
        return None
    message = getattr(choices[0], "message", None)
    return getattr(message, "content", None) or None


ADAPTER = ProviderAdapter(
    provider=ProviderId.OPENAI,
    build_request=build_request,
    invoke=invoke,
    extract_text=extract_text,
)
