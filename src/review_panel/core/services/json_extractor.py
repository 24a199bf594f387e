from __future__ import annotations

import re


_FENCED_BLOCK = re.compile(r"```(?:json)?\s*([\s\S]*?)```")


def looks_like_json(text: str) -> bool:
    return text.startswith("{") and text.endswith("}")


class JsonExtractor:
    """Domain service for extracting a JSON object from LLM responses.

    Models do not reliably answer with bare JSON, so strategies are tried from
    strictest to loosest:

    1. the whole (trimmed) response is an object
    2. the first fenced code block (optionally tagged ``json``) is an object
    3. everything from the first ``{`` to the last ``}``
    4. the response unchanged, left for validation to reject
    """

    def extract(self, text: str) -> str:
        """Extract a JSON object candidate from text.

        Args:
            text: Raw model output

        Returns:
            The extracted candidate; it is not parsed here
        """
        trimmed = text.strip()

        if looks_like_json(trimmed):
            return trimmed

        match = _FENCED_BLOCK.search(trimmed)
        if match and match.group(1):
            block = match.group(1).strip()
            if looks_like_json(block):
                return block

        start = trimmed.find("{")
        end = trimmed.rfind("}")
        if start != -1 and end > start:
            return trimmed[start:end + 1]

        return text
