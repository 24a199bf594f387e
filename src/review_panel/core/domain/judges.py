"""Judge, preset and model catalog."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

from .exceptions import ValidationError


@dataclass(frozen=True)
class JudgeInfo:
    id: str
    name: str
    icon: str
    description: str
    focus_areas: tuple[str, ...]
    critical_triggers: tuple[str, ...]
    weight: float = 1.0

    def to_dict(self) -> dict[str, object]:
        return {
            "id": self.id,
            "name": self.name,
            "icon": self.icon,
            "description": self.description,
            "focusAreas": list(self.focus_areas),
        }


@dataclass(frozen=True)
class ModelInfo:
    id: str
    name: str
    provider: str
    description: str
    cost_tier: str
    speed: str
    context_window: str

    def to_dict(self) -> dict[str, object]:
        return {
            "id": self.id,
            "name": self.name,
            "provider": self.provider,
            "description": self.description,
            "costTier": self.cost_tier,
            "speed": self.speed,
            "contextWindow": self.context_window,
        }


JUDGES: dict[str, JudgeInfo] = {
    j.id: j
    for j in (
        JudgeInfo(
            id="security",
            name="Security Expert",
            icon="🔒",
            description="Analyzes code for vulnerabilities and security best practices",
            focus_areas=("OWASP Top 10", "Authentication", "Authorization", "Input Validation",
                         "Secrets Management", "SQL Injection", "XSS", "CSRF"),
            critical_triggers=("hardcoded secrets or API keys", "SQL/command injection",
                               "missing authentication on sensitive endpoints"),
        ),
        JudgeInfo(
            id="performance",
            name="Performance Engineer",
            icon="⚡",
            description="Evaluates code efficiency and optimization opportunities",
            focus_areas=("Time Complexity", "Space Complexity", "Caching", "Database Queries",
                         "Memory Leaks", "Bundle Size", "Lazy Loading"),
            critical_triggers=("N+1 queries", "unbounded memory growth", "blocking I/O on hot paths"),
        ),
        JudgeInfo(
            id="architecture",
            name="Architecture Reviewer",
            icon="🏗️",
            description="Reviews system design and structural patterns",
            focus_areas=("Design Patterns", "SOLID Principles", "Separation of Concerns", "Modularity",
                         "Scalability", "Dependency Management"),
            critical_triggers=("circular dependencies", "god objects", "business logic in the view layer"),
        ),
        JudgeInfo(
            id="code-quality",
            name="Code Quality Analyst",
            icon="✨",
            description="Assesses code readability and maintainability",
            focus_areas=("Naming Conventions", "Code Duplication", "Complexity", "Readability",
                         "DRY Principle", "Clean Code"),
            critical_triggers=("large duplicated blocks", "functions over 100 lines", "swallowed errors"),
        ),
        JudgeInfo(
            id="testing",
            name="Testing Specialist",
            icon="🧪",
            description="Evaluates test coverage and quality",
            focus_areas=("Unit Tests", "Integration Tests", "E2E Tests", "Test Coverage", "Edge Cases",
                         "Mocking", "TDD"),
            critical_triggers=("no tests for new logic", "tests that cannot fail", "untested error paths"),
        ),
        JudgeInfo(
            id="devops",
            name="DevOps Engineer",
            icon="🚀",
            description="Reviews deployment and infrastructure readiness",
            focus_areas=("CI/CD", "Docker", "Environment Config", "Logging", "Monitoring",
                         "Error Handling", "Health Checks"),
            critical_triggers=("secrets committed to config", "no CI pipeline", "missing health checks"),
        ),
        JudgeInfo(
            id="documentation",
            name="Documentation Auditor",
            icon="📚",
            description="Assesses documentation completeness and quality",
            focus_areas=("README", "API Docs", "Code Comments", "Examples", "Changelog",
                         "Contributing Guide"),
            critical_triggers=("no README", "undocumented public API", "setup steps that do not work"),
        ),
        JudgeInfo(
            id="dx",
            name="Developer Experience",
            icon="🎯",
            description="Evaluates developer experience and API design",
            focus_areas=("API Design", "Error Messages", "Type Safety", "SDK Usability", "Onboarding",
                         "Debugging Experience"),
            critical_triggers=("opaque error messages", "breaking API changes without notice",
                               "untyped public interfaces"),
        ),
    )
}

JUDGE_ORDER: tuple[str, ...] = tuple(JUDGES)

PANEL_PRESETS: dict[str, tuple[str, ...]] = {
    "quick": ("security", "code-quality", "testing"),
    "standard": ("security", "performance", "architecture", "testing", "documentation"),
    "comprehensive": JUDGE_ORDER,
}

PRESET_NAMES = ("quick", "standard", "comprehensive", "custom")


MODELS: dict[str, ModelInfo] = {
    m.id: m
    for m in (
        ModelInfo("anthropic/claude-haiku-4.5", "Claude Haiku 4.5", "Anthropic",
                  "Latest Haiku - fast & smart (Recommended)", "$", "Fast", "200K"),
        ModelInfo("google/gemini-2.5-flash", "Gemini 2.5 Flash", "Google",
                  "Ultra budget with 1M context window", "$", "Very Fast", "1M"),
        ModelInfo("anthropic/claude-3.5-haiku", "Claude 3.5 Haiku", "Anthropic",
                  "Previous gen - slightly cheaper", "$", "Fast", "200K"),
        ModelInfo("openai/gpt-5.1", "GPT-5.1", "OpenAI",
                  "OpenAI latest - adaptive reasoning", "$", "Fast", "128K"),
        ModelInfo("anthropic/claude-sonnet-4.5", "Claude Sonnet 4.5", "Anthropic",
                  "Balanced quality and cost", "$$", "Medium", "200K"),
        ModelInfo("google/gemini-2.5-pro", "Gemini 2.5 Pro", "Google",
                  "Google flagship with 1M context", "$", "Medium", "1M"),
        ModelInfo("anthropic/claude-opus-4.5", "Claude Opus 4.5", "Anthropic",
                  "Most capable - deep analysis", "$$$", "Slow", "200K"),
    )
}

DEFAULT_MODEL = "anthropic/claude-haiku-4.5"


def resolve_judges(judges: Iterable[str] | None = None, preset: str | None = None) -> list[str]:
    """Turn a request's judge list / preset into an ordered, de-duplicated judge list.

    Explicit judges win over a preset; with neither the comprehensive panel is used.

    Raises:
        ValidationError: unknown judge ids, unknown preset, or "custom" without judges
    """
    requested = list(judges or [])
    if requested:
        unknown = [j for j in requested if j not in JUDGES]
        if unknown:
            raise ValidationError(f"Unknown judges: {', '.join(unknown)}", code="INVALID_JUDGES")
        return list(dict.fromkeys(requested))

    if preset is None:
        return list(PANEL_PRESETS["comprehensive"])
    if preset == "custom":
        raise ValidationError("Custom panel requires at least one judge", code="INVALID_JUDGES")
    if preset not in PANEL_PRESETS:
        raise ValidationError(f"Unknown preset: {preset}", code="INVALID_REQUEST")
    return list(PANEL_PRESETS[preset])


def resolve_model(model: str | None, default: str = DEFAULT_MODEL) -> str:
    if model is None or model == "":
        return default
    if model not in MODELS:
        raise ValidationError(f"Unsupported model: {model}", code="INVALID_MODEL")
    return model


def catalog(default_model: str = DEFAULT_MODEL) -> dict[str, object]:
    """Static catalog served by ``GET /review``."""
    return {
        "judges": [JUDGES[j].to_dict() for j in JUDGE_ORDER],
        "presets": {name: list(ids) for name, ids in PANEL_PRESETS.items()},
        "models": [m.to_dict() for m in MODELS.values()],
        "defaultModel": default_model,
    }
