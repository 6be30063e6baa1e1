"""DeepSeek speaks the OpenAI chat-completions protocol on its own host."""

from __future__ import annotations

from typing import Sequence

from app.coach import openai_adapter
from app.coach.adapter import CoachingConfig, ConversationTurn, ProviderAdapter, ProviderId
from app.core.config import get_settings


def build_request(
    config: CoachingConfig,
    history: Sequence[ConversationTurn],
    prompt: str,
    base_url: str | None = None,
) -> openai_adapter.ChatCompletionRequest:
    return openai_adapter.build_chat_request(
        ProviderId.DEEPSEEK,
        get_settings().deepseek_base_url,
        config,
        history,
        prompt,
        base_url=base_url,
    )


ADAPTER = ProviderAdapter(
    provider=ProviderId.DEEPSEEK,
    build_request=build_request,
    invoke=openai_adapter.invoke,
    extract_text=openai_adapter.extract_text,
)
