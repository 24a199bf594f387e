from __future__ import annotations

from .anthropic_adapter import AnthropicChatAdapter
from .interface import ChatAdapter
from .openai_adapter import OPENROUTER_BASE_URL, OpenAIChatAdapter


def get_adapter(
    provider: str,
    model: str,
    api_key: str,
    *,
    base_url: str | None = None,
    timeout: float = 120.0,
) -> ChatAdapter:
    """Factory that returns an adapter for the requested provider/model."""
    if provider == "openrouter":
        return OpenAIChatAdapter(
            model,
            api_key,
            base_url=base_url or OPENROUTER_BASE_URL,
            timeout=timeout,
            provider_label="OpenRouter",
        )
    if provider == "openai":
        return OpenAIChatAdapter(model.split("/", 1)[-1], api_key, base_url=base_url, timeout=timeout)
    if provider == "anthropic":
        return AnthropicChatAdapter(model, api_key, timeout=timeout)
    raise ValueError("provider must be 'openrouter', 'openai' or 'anthropic'")
