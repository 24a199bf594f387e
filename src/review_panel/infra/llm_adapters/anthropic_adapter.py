from __future__ import annotations

import anthropic

from ...core.domain.exceptions import UpstreamError
from .errors import translate_status_error
from .types import LLMResponse, TokenUsage


class AnthropicChatAdapter:
    """Anthropic Messages API adapter (Claude Haiku, Sonnet, Opus).

    Catalog ids carry a vendor prefix (``anthropic/claude-sonnet-4.5``); the
    prefix is dropped and dots become dashes to form the native model name.
    """

    def __init__(self, model: str, api_key: str, *, timeout: float = 120.0) -> None:
        self.model = self.native_model_name(model)
        self._client = anthropic.Anthropic(api_key=api_key, timeout=timeout)

    @staticmethod
    def native_model_name(model: str) -> str:
        return model.split("/", 1)[-1].replace(".", "-")

    def run(
        self,
        system_prompt: str,
        user_prompt: str,
        *,
        max_output_tokens: int = 8000,
    ) -> LLMResponse:
        try:
            message = self._client.messages.create(
                model=self.model,
                max_tokens=max_output_tokens,
                system=system_prompt,
                messages=[{"role": "user", "content": user_prompt}],
            )
        except anthropic.APIStatusError as e:
            raise translate_status_error("anthropic", e.status_code, str(e)) from e
        except anthropic.APIError as e:
            raise UpstreamError(f"anthropic request failed: {e}") from e

        # message.content is a list of content blocks; we only join text blocks
        texts = [block.text for block in message.content if getattr(block, "type", None) == "text"]

        u = message.usage
        iu = u.input_tokens if u is not None else None
        ou = u.output_tokens if u is not None else None
        tt = (iu or 0) + (ou or 0) if (iu is not None or ou is not None) else None
        usage = TokenUsage(input_tokens=iu, output_tokens=ou, total_tokens=tt)
        return LLMResponse(text="".join(texts), usage=usage)
