import pytest

from review_panel.core.domain.exceptions import ValidationError
from review_panel.core.domain.judges import PANEL_PRESETS
from review_panel.core.usecases.review import ReviewUseCase


class FakeService:
    def __init__(self):
        self.calls = []

    def get_review(self, ref, *, judges=None, model=None):
        self.calls.append((ref, judges, model))
        return "outcome"


def _uc():
    service = FakeService()
    return ReviewUseCase(service=service, default_model="anthropic/claude-haiku-4.5"), service


@pytest.mark.parametrize("url", [None, "", "   "])
def test_missing_url(url):
    uc, service = _uc()
    with pytest.raises(ValidationError) as exc:
        uc.execute(url=url)
    assert exc.value.code == "MISSING_URL"
    assert service.calls == []


def test_invalid_url():
    uc, _ = _uc()
    with pytest.raises(ValidationError) as exc:
        uc.execute(url="https://gitlab.com/o/r")
    assert exc.value.code == "INVALID_URL"
    assert "valid GitHub repository or pull request URL" in exc.value.message


def test_resolves_panel_and_model():
    uc, service = _uc()
    assert uc.execute(url="github.com/o/r/pull/3", preset="quick") == "outcome"
    ref, judges, model = service.calls[0]
    assert ref.identifier == 3
    assert judges == list(PANEL_PRESETS["quick"])
    assert model == "anthropic/claude-haiku-4.5"


def test_invalid_model_rejected_before_review():
    uc, service = _uc()
    with pytest.raises(ValidationError) as exc:
        uc.execute(url="github.com/o/r", model="nope")
    assert exc.value.code == "INVALID_MODEL"
    assert service.calls == []
