from __future__ import annotations

from .llm_adapters import get_adapter
from ..core.domain.exceptions import ConfigError
from ..core.ports import LoggerPort


class LLM:
    """LLMPort implementation backed by a provider adapter.

    One adapter is built per call because the model is chosen per request.
    """

    def __init__(
        self,
        *,
        provider: str,
        api_key: str | None,
        base_url: str | None = None,
        max_output_tokens: int = 8000,
        timeout: float = 120.0,
        logger: LoggerPort,
    ) -> None:
        self._provider = provider
        self._api_key = api_key or ""
        self._base_url = base_url
        self._max_output_tokens = max_output_tokens
        self._timeout = timeout
        self._logger = logger

    @property
    def has_credentials(self) -> bool:
        return bool(self._api_key.strip())

    def complete(self, *, system_prompt: str, user_prompt: str, model: str) -> str:
        if not self.has_credentials:
            raise ConfigError("AI service configuration error. Please check your API key.")

        self._logger.info(
            "llm_input",
            provider=self._provider,
            model=model,
            system_prompt_len=len(system_prompt),
            prompt_len=len(user_prompt),
        )

        adapter = get_adapter(
            self._provider,
            model,
            self._api_key,
            base_url=self._base_url,
            timeout=self._timeout,
        )
        resp = adapter.run(system_prompt, user_prompt, max_output_tokens=self._max_output_tokens)
        text = resp.text

        usage = resp.usage
        if usage is not None:
            self._logger.info(
                "llm_usage",
                provider=self._provider,
                model=model,
                input_tokens=usage.input_tokens,
                output_tokens=usage.output_tokens,
                total_tokens=usage.total_tokens,
            )

        self._logger.info(
            "llm_output",
            provider=self._provider,
            model=model,
            raw_text_len=len(text),
        )
        return text
