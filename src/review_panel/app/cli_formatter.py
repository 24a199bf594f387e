"""CLI output formatting utilities for human-readable display."""

from __future__ import annotations

from ..core.domain.models import ReviewOutcome


SEVERITY_MARKS = {"critical": "[!]", "warning": "[~]", "info": "[i]"}


def format_review(outcome: ReviewOutcome) -> str:
    """Format a review for human-readable CLI output."""
    review = outcome.review
    overall = review.overall

    lines = []
    lines.append("=" * 80)
    lines.append("CODE REVIEW")
    lines.append("=" * 80)

    lines.append(f"\nURL: {review.metadata.url}")
    parts = [f"Type: {review.metadata.type.upper()}"]
    if review.metadata.model_used:
        parts.append(f"Model: {review.metadata.model_used}")
    if review.metadata.review_duration:
        parts.append(f"Duration: {review.metadata.review_duration}")
    parts.append("Cache: hit" if outcome.cached else "Cache: miss")
    lines.append(" | ".join(parts))

    lines.append("\n" + "-" * 80)
    lines.append(f"OVERALL: {overall.score}/100 ({overall.grade}) - {overall.verdict}")
    lines.append("-" * 80)
    lines.append(overall.summary)

    for judge in review.judges:
        lines.append(f"\n{judge.icon} {judge.name}: {judge.score}/100 ({judge.verdict})")
        for finding in judge.findings:
            mark = SEVERITY_MARKS.get(finding.severity, "-")
            location = f" ({finding.location})" if finding.location else ""
            lines.append(f"  {mark} {finding.title}{location}")
            lines.append(f"      {finding.message}")
            if finding.suggestion:
                lines.append(f"      -> {finding.suggestion}")

    report = review.full_report
    if report is not None and report.recommendations:
        lines.append("\n" + "-" * 80)
        lines.append("RECOMMENDATIONS")
        lines.append("-" * 80)
        for i, rec in enumerate(report.recommendations, 1):
            lines.append(f"  {i}. [{rec.priority.upper()}] {rec.title}")
            lines.append(f"     {rec.description}")

    lines.append("\n" + "=" * 80)

    return "\n".join(lines)


def format_catalog(catalog: dict[str, object]) -> str:
    """Format the judge/preset/model catalog as tables."""
    lines = []

    judges = catalog.get("judges") or []
    lines.append(f"Judges ({len(judges)}):")
    lines.append("")
    for judge in judges:
        lines.append(f"  {judge['icon']} {judge['id']:<14} {judge['name']}")

    lines.append("")
    lines.append("Presets:")
    presets = catalog.get("presets") or {}
    for name, ids in presets.items():
        lines.append(f"  {name:<14} {', '.join(ids)}")

    lines.append("")
    lines.append("Models:")
    default_model = catalog.get("defaultModel")
    lines.append("-" * 80)
    lines.append(f"  {'ID':<36} {'Provider':<12} {'Cost':<8} {'Speed':<8}")
    lines.append("-" * 80)
    for model in catalog.get("models") or []:
        marker = "*" if model["id"] == default_model else " "
        lines.append(
            f"{marker} {model['id']:<36} {model['provider']:<12} {model['costTier']:<8} {model['speed']:<8}"
        )
    lines.append("-" * 80)
    lines.append("* default model")

    return "\n".join(lines)
