import types

import httpx
import openai
import pytest

from review_panel.core.domain.exceptions import QuotaError, UpstreamError
from review_panel.infra.llm_adapters import OpenAIChatAdapter


class DummyCompletions:
    def __init__(self, error=None):
        self.error = error
        self.kwargs = None

    def create(self, **kwargs):
        self.kwargs = kwargs
        if self.error is not None:
            raise self.error
        message = types.SimpleNamespace(content="ok-openai")
        return types.SimpleNamespace(
            choices=[types.SimpleNamespace(message=message)],
            usage=types.SimpleNamespace(prompt_tokens=11, completion_tokens=7, total_tokens=18),
        )


class DummyOpenAI:
    instances = []

    def __init__(self, *, api_key, base_url=None, timeout=None):
        self.api_key = api_key
        self.base_url = base_url
        self.timeout = timeout
        self.completions = DummyCompletions()
        self.chat = types.SimpleNamespace(completions=self.completions)
        DummyOpenAI.instances.append(self)


@pytest.fixture(autouse=True)
def mock_openai(monkeypatch):
    import review_panel.infra.llm_adapters.openai_adapter as mod

    DummyOpenAI.instances = []
    monkeypatch.setattr(mod, "OpenAI", DummyOpenAI)
    yield


def _status_error(status, message):
    request = httpx.Request("POST", "https://openrouter.ai/api/v1/chat/completions")
    response = httpx.Response(status, request=request)
    return openai.APIStatusError(message, response=response, body=None)


def test_openai_adapter_sends_system_and_user_messages():
    adapter = OpenAIChatAdapter("anthropic/claude-haiku-4.5", "sk-test", base_url="https://openrouter.ai/api/v1")
    resp = adapter.run("sys", "user", max_output_tokens=321)

    client = DummyOpenAI.instances[0]
    assert client.base_url == "https://openrouter.ai/api/v1"
    assert client.completions.kwargs == {
        "model": "anthropic/claude-haiku-4.5",
        "messages": [
            {"role": "system", "content": "sys"},
            {"role": "user", "content": "user"},
        ],
        "max_tokens": 321,
    }
    assert resp.text == "ok-openai"
    assert resp.usage.total_tokens == 18


def test_payment_required_is_quota_error():
    adapter = OpenAIChatAdapter("m", "sk-test")
    DummyOpenAI.instances[0].completions.error = _status_error(402, "Payment required")
    with pytest.raises(QuotaError):
        adapter.run("sys", "user")


def test_server_error_is_upstream_error():
    adapter = OpenAIChatAdapter("m", "sk-test")
    DummyOpenAI.instances[0].completions.error = _status_error(502, "Bad gateway")
    with pytest.raises(UpstreamError):
        adapter.run("sys", "user")
