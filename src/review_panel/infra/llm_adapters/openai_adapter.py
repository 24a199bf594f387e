from __future__ import annotations

import openai
from openai import OpenAI

from ...core.domain.exceptions import UpstreamError
from .errors import translate_status_error
from .types import LLMResponse, TokenUsage


OPENROUTER_BASE_URL = "https://openrouter.ai/api/v1"


class OpenAIChatAdapter:
    """OpenAI-compatible Chat Completions adapter (OpenAI, OpenRouter).

    - Sends the system prompt as a ``system`` message
    - ``base_url`` selects the endpoint; OpenRouter model ids look like ``vendor/model``
    """

    def __init__(
        self,
        model: str,
        api_key: str,
        *,
        base_url: str | None = None,
        timeout: float = 120.0,
        provider_label: str = "openai",
    ) -> None:
        self.model = model
        self._provider_label = provider_label
        self._client = OpenAI(api_key=api_key, base_url=base_url, timeout=timeout)

    def run(
        self,
        system_prompt: str,
        user_prompt: str,
        *,
        max_output_tokens: int = 8000,
    ) -> LLMResponse:
        try:
            response = self._client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_prompt},
                ],
                max_tokens=max_output_tokens,
            )
        except openai.APIStatusError as e:
            raise translate_status_error(self._provider_label, e.status_code, str(e)) from e
        except openai.APIError as e:
            raise UpstreamError(f"{self._provider_label} request failed: {e}") from e

        text = ""
        if response.choices:
            text = response.choices[0].message.content or ""

        usage = None
        u = response.usage
        if u is not None:
            usage = TokenUsage(
                input_tokens=u.prompt_tokens,
                output_tokens=u.completion_tokens,
                total_tokens=u.total_tokens,
            )
        return LLMResponse(text=text, usage=usage)
