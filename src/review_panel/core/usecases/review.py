from __future__ import annotations

from typing import Sequence

from ..domain.exceptions import ValidationError
from ..domain.judges import resolve_judges, resolve_model
from ..domain.models import ReviewOutcome
from ..domain.url import classify_url
from ..services import ReviewService


class ReviewUseCase:
    """Use case for reviewing a GitHub URL.

    Validates the request (URL, judge panel, model), classifies the URL and
    delegates to ReviewService.
    """

    def __init__(self, *, service: ReviewService, default_model: str) -> None:
        self._service = service
        self._default_model = default_model

    def execute(
        self,
        *,
        url: str | None,
        judges: Sequence[str] | None = None,
        preset: str | None = None,
        model: str | None = None,
    ) -> ReviewOutcome:
        """Execute a review.

        Args:
            url: GitHub PR/repository/commit/branch URL
            judges: Explicit judge ids (take precedence over ``preset``)
            preset: quick | standard | comprehensive | custom
            model: Model id from the catalog

        Returns:
            ReviewOutcome with cache information
        """
        if not url or not isinstance(url, str) or not url.strip():
            raise ValidationError("GitHub URL is required", code="MISSING_URL")

        ref = classify_url(url)
        if not ref.is_valid:
            raise ValidationError(
                "Invalid GitHub URL. Please provide a valid GitHub repository or pull request URL.",
                code="INVALID_URL",
            )

        panel = resolve_judges(judges, preset)
        model_id = resolve_model(model, self._default_model)

        return self._service.get_review(ref, judges=panel, model=model_id)
