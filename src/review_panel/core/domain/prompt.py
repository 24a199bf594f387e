from __future__ import annotations

from typing import Any, Mapping, Sequence

from .judges import JUDGES, JUDGE_ORDER


def build_system_prompt() -> str:
    """Build the system prompt describing every judge persona and the output rules."""
    personas = []
    for judge_id in JUDGE_ORDER:
        judge = JUDGES[judge_id]
        personas.append(
            f"## {judge.icon} {judge.name} (id: \"{judge.id}\")\n"
            f"{judge.description}.\n"
            f"Focus: {', '.join(judge.focus_areas)}.\n"
            f"Flag as critical: {'; '.join(judge.critical_triggers)}.\n"
        )

    return (
        "You are a panel of expert code reviewers evaluating GitHub pull requests and repositories.\n"
        "Each panel member is an independent judge with a distinct specialty. Only the judges listed\n"
        "in the request take part in a review.\n\n"
        "# Judges\n\n"
        + "\n".join(personas)
        + "\n# Scoring\n"
        "- 90-100: Excellent, production ready\n"
        "- 75-89: Good, minor issues\n"
        "- 60-74: Acceptable, notable issues\n"
        "- 40-59: Needs Improvement\n"
        "- 0-39: Critical Issues\n"
        "Each judge's verdict is one of: \"Excellent\", \"Good\", \"Acceptable\", "
        "\"Needs Improvement\", \"Critical Issues\".\n"
        "Findings must be specific to the submitted code; cite file paths and lines in \"location\" "
        "when possible.\n\n"
        "CRITICAL: Respond with ONLY valid JSON. No explanations, no preamble, no markdown outside the "
        "JSON object.\n"
    )


def _metadata_block(review_type: str, metadata: Mapping[str, Any]) -> str:
    if review_type == "pr":
        return (
            "PR Metadata:\n"
            f"- Author: {metadata.get('author', 'unknown')}\n"
            f"- Files Changed: {metadata.get('filesChanged', 0)}\n"
            f"- Additions: {metadata.get('additions', 0)}, Deletions: {metadata.get('deletions', 0)}\n"
            f"- Commits: {metadata.get('commits', 0)}\n"
            f"- Is Draft: {bool(metadata.get('isDraft', False))}\n"
        )
    return (
        "Repository Metadata:\n"
        f"- Name: {metadata.get('name', '')}\n"
        f"- Language: {metadata.get('language') or 'Not specified'}\n"
        f"- Stars: {metadata.get('stars', 0)}\n"
        f"- Has Tests: {'Yes' if metadata.get('hasTests') else 'No or not detected'}\n"
    )


OUTPUT_SCHEMA = (
    "RESPOND WITH ONLY THIS JSON STRUCTURE (no other text):\n"
    "{\n"
    "  \"overall\": {\n"
    "    \"score\": <number 0-100, average of the judge scores>,\n"
    "    \"grade\": \"A+\" | \"A\" | \"B+\" | \"B\" | \"C+\" | \"C\" | \"D\" | \"F\",\n"
    "    \"verdict\": <one short sentence>,\n"
    "    \"summary\": <2-3 sentence summary>\n"
    "  },\n"
    "  \"judges\": [  // exactly one entry per selected judge, in the order listed above\n"
    "    {\n"
    "      \"id\": <judge id>,\n"
    "      \"name\": <judge name>,\n"
    "      \"icon\": <judge icon>,\n"
    "      \"score\": <number 0-100>,\n"
    "      \"verdict\": \"Excellent\" | \"Good\" | \"Acceptable\" | \"Needs Improvement\" | \"Critical Issues\",\n"
    "      \"findings\": [  // 2-5 findings\n"
    "        {\n"
    "          \"severity\": \"critical\" | \"warning\" | \"info\",\n"
    "          \"title\": <short title>,\n"
    "          \"message\": <what and why>,\n"
    "          \"suggestion\"?: <how to fix>,\n"
    "          \"location\"?: <file:line>\n"
    "        }\n"
    "      ]\n"
    "    }\n"
    "  ],\n"
    "  \"fullReport\": {\n"
    "    \"summary\": <overall assessment paragraph>,\n"
    "    \"fileBreakdown\": [  // 3-8 entries\n"
    "      { \"file\": <path>, \"score\": <number 0-100>, \"summary\": <string>, \"issues\": [<string>] }\n"
    "    ],\n"
    "    \"recommendations\": [  // 3-6 entries\n"
    "      { \"priority\": \"high\" | \"medium\" | \"low\", \"title\": <string>, \"description\": <string> }\n"
    "    ],\n"
    "    \"codeSnippets\": [  // 1-3 entries\n"
    "      { \"title\": <string>, \"file\"?: <path>, \"code\": <suggested code>, \"explanation\": <string> }\n"
    "    ]\n"
    "  }\n"
    "}\n"
)


def build_user_prompt(
    *,
    review_type: str,
    content: str,
    metadata: Mapping[str, Any],
    judges: Sequence[str],
) -> str:
    """Build the per-request prompt with the selected judges, metadata, content and schema."""
    judge_lines = "\n".join(
        f"- {JUDGES[j].icon} {JUDGES[j].name} (id: \"{j}\")" for j in judges
    )
    subject = "pull request" if review_type == "pr" else "repository"

    return (
        f"Review this {subject} submission with the following judges ({len(judges)}):\n"
        f"{judge_lines}\n\n"
        f"{_metadata_block(review_type, metadata)}\n"
        f"--- CONTENT ---\n{content}\n--- END CONTENT ---\n\n"
        f"{OUTPUT_SCHEMA}"
    )
