from app.coach import deepseek_adapter, gemini_adapter, openai_adapter
from app.coach.adapter import ProviderAdapter, ProviderId

ADAPTERS: dict[ProviderId, ProviderAdapter] = {
    ProviderId.GEMINI: gemini_adapter.ADAPTER,
    ProviderId.OPENAI: openai_adapter.ADAPTER,
    ProviderId.DEEPSEEK: deepseek_adapter.ADAPTER,
}


def get_provider_adapter(provider_id: str | None) -> ProviderAdapter:
    return ADAPTERS[ProviderId.resolve(provider_id)]
