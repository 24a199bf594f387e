"""Tests for the in-process facade functions."""
import pytest

from review_panel.app import main as main_module
from review_panel.app.main import judges_catalog, review
from review_panel.core.domain.exceptions import ValidationError
from tests.review_panel.fakes import FakeLLM, FakeSource, container_factory, make_config


def test_review_returns_response_shape(tmp_path, monkeypatch):
    llm = FakeLLM()
    monkeypatch.setattr(main_module, "Container", container_factory(FakeSource(), llm))

    result = review(
        "https://github.com/o/r",
        judges=["documentation", "security"],
        config=make_config(tmp_path),
    )

    assert [j["id"] for j in result["judges"]] == ["documentation", "security"]
    assert result["metadata"]["type"] == "repo"
    assert result["_cache"]["hit"] is False
    assert len(llm.calls) == 1


def test_review_rejects_invalid_url(tmp_path, monkeypatch):
    monkeypatch.setattr(main_module, "Container", container_factory(FakeSource(), FakeLLM()))
    with pytest.raises(ValidationError):
        review("https://example.com/x", config=make_config(tmp_path))


def test_judges_catalog(tmp_path):
    data = judges_catalog(config=make_config(tmp_path))
    assert data["defaultModel"] == "anthropic/claude-haiku-4.5"
    assert [p for p in data["presets"]] == ["quick", "standard", "comprehensive"]
