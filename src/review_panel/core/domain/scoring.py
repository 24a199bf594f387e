from __future__ import annotations

from typing import Mapping, Sequence

from .review import JudgeReview


GRADE_BANDS: tuple[tuple[int, str], ...] = (
    (95, "A+"),
    (90, "A"),
    (85, "B+"),
    (80, "B"),
    (75, "C+"),
    (70, "C"),
    (60, "D"),
)


def calculate_grade(score: float) -> str:
    """Map an overall score to a letter grade (inclusive lower bounds)."""
    for lower, grade in GRADE_BANDS:
        if score >= lower:
            return grade
    return "F"


def clamp_score(value: float, low: int = 0, high: int = 100) -> int:
    return int(min(max(value, low), high))


def weighted_overall_score(judges: Sequence[JudgeReview], weights: Mapping[str, float] | None = None) -> int:
    """Weighted mean of judge scores, rounded half up.

    Judges without a weight count as 1.0. An empty panel scores 0.
    """
    weights = weights or {}
    total_weight = 0.0
    total = 0.0
    for judge in judges:
        w = weights.get(judge.id, 1.0)
        total += judge.score * w
        total_weight += w
    if total_weight <= 0:
        return 0
    return clamp_score(int(total / total_weight + 0.5))
