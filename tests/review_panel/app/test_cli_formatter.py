from review_panel.app.cli_formatter import format_catalog, format_review
from review_panel.core.domain.judges import catalog
from review_panel.core.domain.models import ReviewOutcome
from review_panel.core.domain.review import ReviewResult
from tests.review_panel.fakes import review_payload


def _outcome(cached=False):
    data = review_payload({"security": 90, "testing": 70}, overall_score=80)
    data["overall"]["grade"] = "B"
    data["judges"][0]["findings"][0]["suggestion"] = "Keep it up"
    data["metadata"] = {
        "reviewedAt": "2025-01-01T00:00:00+00:00",
        "url": "https://github.com/o/r/pull/1",
        "type": "pr",
        "judgesUsed": ["security", "testing"],
        "modelUsed": "anthropic/claude-haiku-4.5",
        "reviewDuration": "3.2s",
    }
    return ReviewOutcome(review=ReviewResult.model_validate(data), cached=cached, commit_hash="a" * 40)


def test_format_review():
    text = format_review(_outcome())
    assert "URL: https://github.com/o/r/pull/1" in text
    assert "Type: PR | Model: anthropic/claude-haiku-4.5 | Duration: 3.2s | Cache: miss" in text
    assert "OVERALL: 80/100 (B) - Solid work" in text
    assert "[~] Minor nit (src/app.py:1)" in text
    assert "-> Keep it up" in text
    assert "1. [LOW] Docs" in text


def test_format_review_cache_hit():
    assert "Cache: hit" in format_review(_outcome(cached=True))


def test_format_catalog_marks_default_model():
    text = format_catalog(catalog())
    assert "Judges (8):" in text
    assert "quick          security, code-quality, testing" in text
    assert "* anthropic/claude-haiku-4.5" in text
    assert "  google/gemini-2.5-pro" in text
