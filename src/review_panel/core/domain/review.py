"""Review result schema.

These models double as the strict decoder for model output: anything the LLM
returns is validated against ``LLMReviewPayload`` before it becomes a
``ReviewResult``. Field names are snake_case in Python and camelCase on the wire.
"""

from __future__ import annotations

import math
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


Severity = Literal["critical", "warning", "info"]
Verdict = Literal["Excellent", "Good", "Acceptable", "Needs Improvement", "Critical Issues"]


class _Schema(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def _round_score(value: object) -> object:
    # Models occasionally answer 82.5; scores are whole numbers.
    if isinstance(value, float):
        if not math.isfinite(value):
            raise ValueError("score must be finite")
        return int(value + 0.5)
    return value


class Finding(_Schema):
    severity: Severity
    title: str
    message: str
    suggestion: str | None = None
    location: str | None = None


class JudgeReview(_Schema):
    id: str
    name: str
    icon: str
    score: int = Field(ge=0, le=100)
    verdict: Verdict
    findings: list[Finding] = Field(min_length=1, max_length=10)

    @field_validator("score", mode="before")
    @classmethod
    def round_score(cls, value: object) -> object:
        return _round_score(value)


class OverallScore(_Schema):
    score: int = Field(ge=0, le=100)
    grade: str
    verdict: str
    summary: str

    @field_validator("score", mode="before")
    @classmethod
    def round_score(cls, value: object) -> object:
        return _round_score(value)


class FileBreakdownEntry(_Schema):
    file: str
    score: int
    summary: str
    issues: list[str] = Field(default_factory=list)

    @field_validator("score", mode="before")
    @classmethod
    def round_score(cls, value: object) -> object:
        return _round_score(value)


class Recommendation(_Schema):
    priority: Literal["high", "medium", "low"]
    title: str
    description: str


class CodeSnippet(_Schema):
    title: str
    file: str | None = None
    code: str
    explanation: str


class FullReport(_Schema):
    summary: str | None = None
    file_breakdown: list[FileBreakdownEntry] = Field(default_factory=list)
    recommendations: list[Recommendation] = Field(default_factory=list)
    code_snippets: list[CodeSnippet] = Field(default_factory=list)


class ReviewMetadata(_Schema):
    reviewed_at: str
    url: str
    type: Literal["pr", "repo"]
    judges_used: list[str]
    model_used: str | None = None
    review_duration: str | None = None


class ReviewResult(_Schema):
    overall: OverallScore
    judges: list[JudgeReview]
    full_report: FullReport | None = None
    metadata: ReviewMetadata

    def to_response(self) -> dict[str, object]:
        return self.model_dump(by_alias=True, exclude_none=True)


class LLMReviewPayload(_Schema):
    """Shape the judge panel is asked to produce."""

    overall: OverallScore
    judges: list[JudgeReview] = Field(min_length=1)
    full_report: FullReport | None = None
