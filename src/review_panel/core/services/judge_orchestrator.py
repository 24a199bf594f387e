from __future__ import annotations

import json
import time
from datetime import datetime, timezone
from typing import Any, Callable, Mapping, Sequence

from pydantic import ValidationError as SchemaError

from ..domain.exceptions import ConfigError, ParseError
from ..domain.judges import JUDGES
from ..domain.models import ReviewType
from ..domain.prompt import build_system_prompt, build_user_prompt
from ..domain.review import (
    Finding,
    FullReport,
    JudgeReview,
    LLMReviewPayload,
    OverallScore,
    ReviewMetadata,
    ReviewResult,
)
from ..domain.scoring import calculate_grade, clamp_score, weighted_overall_score
from ..ports import LLMPort, LoggerPort
from .json_extractor import JsonExtractor


def placeholder_review(judge_id: str) -> JudgeReview:
    """Stand-in for a judge the model skipped."""
    info = JUDGES[judge_id]
    return JudgeReview(
        id=judge_id,
        name=info.name,
        icon=info.icon,
        score=50,
        verdict="Acceptable",
        findings=[
            Finding(
                severity="info",
                title="Analysis Incomplete",
                message="This judge could not complete analysis for this submission.",
            )
        ],
    )


class JudgeOrchestrator:
    """Runs the judge panel through a single LLM call and validates the answer.

    The model is asked for every selected judge at once; its free-form answer is
    reduced to JSON, validated against the review schema and then made internally
    consistent (requested judges only, requested order, overall score and grade
    derived from the judge scores).
    """

    def __init__(
        self,
        *,
        llm: LLMPort,
        json_extractor: JsonExtractor,
        logger: LoggerPort,
        preview_chars: int = 500,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._llm = llm
        self._json_extractor = json_extractor
        self._logger = logger
        self._preview_chars = preview_chars
        self._clock = clock

    def generate_review(
        self,
        *,
        review_type: ReviewType,
        content: str,
        metadata: Mapping[str, Any],
        url: str,
        judges: Sequence[str],
        model: str,
    ) -> ReviewResult:
        """Generate a multi-judge review.

        Raises:
            ConfigError: no LLM credentials configured (or rejected by the provider)
            QuotaError: provider credits exhausted
            ParseError: the model output is not a valid review
            UpstreamError: other LLM transport failures
        """
        if not self._llm.has_credentials:
            raise ConfigError("AI service configuration error: LLM API key is not configured")

        started = self._clock()
        self._logger.info("judges_started", url=url, judges=list(judges), model=model)

        raw_text = self._llm.complete(
            system_prompt=build_system_prompt(),
            user_prompt=build_user_prompt(
                review_type=review_type,
                content=content,
                metadata=metadata,
                judges=judges,
            ),
            model=model,
        )
        self._logger.info("judges_responded", url=url, raw_text_len=len(raw_text))

        payload = self.parse_response(raw_text)
        judge_reviews = self._reconcile_judges(payload.judges, judges)
        overall = self._reconcile_overall(payload, judge_reviews)

        duration = self._clock() - started
        return ReviewResult(
            overall=overall,
            judges=judge_reviews,
            full_report=self._normalize_report(payload.full_report),
            metadata=ReviewMetadata(
                reviewed_at=datetime.now(timezone.utc).isoformat(),
                url=url,
                type=review_type,
                judges_used=list(judges),
                model_used=model,
                review_duration=f"{duration:.1f}s",
            ),
        )

    def parse_response(self, raw_text: str) -> LLMReviewPayload:
        """Extract and validate the model's JSON answer.

        Raises:
            ParseError: extraction, JSON decoding or schema validation failed
        """
        extracted = self._json_extractor.extract(raw_text)
        preview = extracted[: self._preview_chars]

        try:
            data = json.loads(extracted)
        except json.JSONDecodeError as e:
            self._logger.error("review_parse_error", reason="json_decode", detail=str(e), preview=preview)
            raise ParseError(preview=preview) from e

        try:
            return LLMReviewPayload.model_validate(data)
        except SchemaError as e:
            issues = [
                {"loc": ".".join(str(p) for p in err["loc"]), "msg": err["msg"]}
                for err in e.errors()[:10]
            ]
            self._logger.error("review_parse_error", reason="schema", issues=issues, preview=preview)
            raise ParseError(preview=preview) from e

    def _reconcile_judges(self, returned: Sequence[JudgeReview], requested: Sequence[str]) -> list[JudgeReview]:
        by_id: dict[str, JudgeReview] = {}
        for review in returned:
            by_id.setdefault(review.id, review)

        missing = [j for j in requested if j not in by_id]
        if missing:
            self._logger.warning("judges_missing", judges=missing)

        extra = [j for j in by_id if j not in requested]
        if extra:
            self._logger.warning("judges_unrequested", judges=extra)

        return [by_id[j] if j in by_id else placeholder_review(j) for j in requested]

    def _reconcile_overall(self, payload: LLMReviewPayload, judges: Sequence[JudgeReview]) -> OverallScore:
        weights = {j.id: JUDGES[j.id].weight for j in judges if j.id in JUDGES}
        computed = weighted_overall_score(judges, weights)
        overall = payload.overall

        if overall.score != computed:
            self._logger.info("overall_score_corrected", stated=overall.score, computed=computed)

        return overall.model_copy(update={"score": computed, "grade": calculate_grade(computed)})

    @staticmethod
    def _normalize_report(report: FullReport | None) -> FullReport | None:
        if report is None:
            return None
        breakdown = [
            entry.model_copy(update={"score": clamp_score(entry.score)})
            for entry in report.file_breakdown
        ]
        return report.model_copy(update={"file_breakdown": breakdown})
