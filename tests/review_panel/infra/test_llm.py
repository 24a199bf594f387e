import pytest

from review_panel.core.domain.exceptions import ConfigError
from review_panel.infra import llm as llm_module
from review_panel.infra.llm import LLM
from review_panel.infra.llm_adapters import LLMResponse, TokenUsage
from tests.review_panel.fakes import FakeLogger


class DummyAdapter:
    def __init__(self):
        self.calls = []

    def run(self, system_prompt, user_prompt, *, max_output_tokens=8000):
        self.calls.append((system_prompt, user_prompt, max_output_tokens))
        return LLMResponse(text='{"ok": true}', usage=TokenUsage(input_tokens=10, output_tokens=5, total_tokens=15))


def test_complete_builds_adapter_per_model_and_logs(monkeypatch):
    adapter = DummyAdapter()
    built = []

    def fake_get_adapter(provider, model, api_key, *, base_url=None, timeout=120.0):
        built.append((provider, model, api_key, base_url, timeout))
        return adapter

    monkeypatch.setattr(llm_module, "get_adapter", fake_get_adapter)
    logger = FakeLogger()
    llm = LLM(provider="openrouter", api_key="sk-test", max_output_tokens=123, timeout=9.0, logger=logger)

    text = llm.complete(system_prompt="sys", user_prompt="user", model="google/gemini-2.5-flash")

    assert text == '{"ok": true}'
    assert built == [("openrouter", "google/gemini-2.5-flash", "sk-test", None, 9.0)]
    assert adapter.calls == [("sys", "user", 123)]
    assert logger.find("llm_usage")["total_tokens"] == 15
    assert logger.find("llm_output")["raw_text_len"] == len(text)
    assert "prompt" not in logger.find("llm_input")


@pytest.mark.parametrize("api_key", [None, "", "   "])
def test_missing_key_is_config_error(api_key):
    llm = LLM(provider="openrouter", api_key=api_key, logger=FakeLogger())
    assert llm.has_credentials is False
    with pytest.raises(ConfigError):
        llm.complete(system_prompt="s", user_prompt="u", model="m")
