from __future__ import annotations

from typing import Sequence

from ..domain.exceptions import ValidationError
from ..domain.judges import DEFAULT_MODEL, PANEL_PRESETS
from ..domain.models import ParsedReference, ReviewOutcome
from ..ports import LoggerPort, ReviewCachePort
from .content_fetcher import ContentFetcher
from .judge_orchestrator import JudgeOrchestrator


class ReviewService:
    """Orchestrates fingerprinting, caching, content fetching and judging.

    Per request: fetch fingerprint -> cache lookup -> on miss fetch content,
    run the judges and store the result. The fingerprint is always fetched
    before the cache is consulted so a review computed against an older commit
    is never served. Nothing is retried; collaborator errors propagate as-is.
    """

    def __init__(
        self,
        *,
        content_fetcher: ContentFetcher,
        orchestrator: JudgeOrchestrator,
        cache: ReviewCachePort,
        logger: LoggerPort,
        default_model: str = DEFAULT_MODEL,
    ) -> None:
        self._content_fetcher = content_fetcher
        self._orchestrator = orchestrator
        self._cache = cache
        self._logger = logger
        self._default_model = default_model

    def get_review(
        self,
        ref: ParsedReference,
        *,
        judges: Sequence[str] | None = None,
        model: str | None = None,
    ) -> ReviewOutcome:
        """Return a review for ``ref``, from cache when still valid.

        Args:
            ref: Classified GitHub reference
            judges: Judge ids in the order they should appear (defaults to the full panel)
            model: Model id (defaults to the configured default model)

        Raises:
            ValidationError: ``ref`` is INVALID
            ReviewError: any collaborator failure, unchanged
        """
        if not ref.is_valid:
            raise ValidationError("Invalid GitHub URL", code="INVALID_URL")

        judges = list(judges) if judges else list(PANEL_PRESETS["comprehensive"])
        model = model or self._default_model
        url = ref.normalized_url

        # 1) Current fingerprint
        commit_hash = self._content_fetcher.fetch_fingerprint(ref)
        self._logger.info("fingerprint_fetched", url=url, commit=commit_hash[:7])

        # 2) Cache
        cached = self._cache.get(url, commit_hash)
        if cached is not None:
            cached_judges = set(cached.review.metadata.judges_used)
            if all(j in cached_judges for j in judges):
                self._logger.info("review_cache_served", url=url, commit=commit_hash[:7])
                return ReviewOutcome(
                    review=cached.review,
                    cached=True,
                    commit_hash=cached.commit_hash,
                    cached_at=cached.cached_at,
                    expires_at=cached.expires_at,
                )
            self._logger.info(
                "review_cache_incomplete",
                url=url,
                cached_judges=sorted(cached_judges),
                requested_judges=judges,
            )

        # 3) Content + judges
        content = self._content_fetcher.fetch_content(ref)
        review = self._orchestrator.generate_review(
            review_type=content.review_type,
            content=content.content,
            metadata=content.metadata,
            url=url,
            judges=judges,
            model=model,
        )

        # 4) Store
        self._cache.set(url, commit_hash, review)
        self._logger.info(
            "review_generated",
            url=url,
            commit=commit_hash[:7],
            score=review.overall.score,
            grade=review.overall.grade,
            duration=review.metadata.review_duration,
        )

        return ReviewOutcome(review=review, cached=False, commit_hash=commit_hash)
