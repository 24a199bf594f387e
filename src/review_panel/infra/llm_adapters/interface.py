from __future__ import annotations

from typing import Protocol, runtime_checkable

from .types import LLMResponse


@runtime_checkable
class ChatAdapter(Protocol):
    """Minimal interface for a single system + user prompt completion."""

    def run(
        self,
        system_prompt: str,
        user_prompt: str,
        *,
        max_output_tokens: int = 8000,
    ) -> LLMResponse:
        """Run one completion and return normalized text + token usage.

        Implementations raise ConfigError / QuotaError / UpstreamError.
        """
        raise NotImplementedError
