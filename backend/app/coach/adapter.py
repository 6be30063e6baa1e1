"""Normalized conversation types shared by every provider adapter.

Adapters are a closed set keyed by :class:`ProviderId`. Each one is a plain
triple of functions rather than a class hierarchy:

``build_request(config, history, prompt, base_url=None)``
    Pure. Turns the stored configuration, the conversation view and the new
    prompt into a provider-native request object.
``invoke(request)``
    Performs the external call and returns the raw provider response. Raises
    ``ProviderError`` for transport and non-2xx failures.
``extract_text(response)``
    Pure. Returns the reply text, or ``None`` when the response carries none.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, NamedTuple, Sequence

ROLE_USER = "user"
ROLE_MODEL = "model"


class ProviderId(str, Enum):
    GEMINI = "gemini"
    OPENAI = "openai"
    DEEPSEEK = "deepseek"

    @classmethod
    def resolve(cls, value: str | None) -> "ProviderId":
        """Map a stored provider id to an adapter; unknown or empty means Gemini."""
        try:
            return cls(value)
        except ValueError:
            return cls.GEMINI


class ConversationTurn(NamedTuple):
    role: str
    message: str


@dataclass(frozen=True)
class CoachingConfig:
    coaching_id: str
    system_prompt: str | None
    credential: str
    model_id: str
    provider_id: str | None = None


class ProviderAdapter(NamedTuple):
    provider: ProviderId
    build_request: Callable[..., Any]
    invoke: Callable[[Any], Any]
    extract_text: Callable[[Any], str | None]

    def complete(
        self,
        config: CoachingConfig,
        history: Sequence[ConversationTurn],
        prompt: str,
        base_url: str | None = None,
    ) -> str | None:
        request = self.build_request(config, history, prompt, base_url=base_url)
        return self.extract_text(self.invoke(request))
