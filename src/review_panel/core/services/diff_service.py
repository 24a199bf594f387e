from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Sequence

from ..domain.models import FileChange


NON_CODE_PATTERN = re.compile(r"(package-lock|yarn\.lock|pnpm-lock|\.min\.|\.map|dist/|build/)")
TRUNCATION_MARKER = "\n\n... (additional files truncated to save tokens) ...\n"
PARTIAL_MARKER = "\n\n... (truncated) ...\n"
EMPTY_DIFF = "No file changes available."


@dataclass
class DiffResult:
    """Result of diff rendering with metadata."""
    text: str
    files_total: int
    files_included: int
    was_truncated: bool


def is_code_file(filename: str) -> bool:
    return NON_CODE_PATTERN.search(filename) is None


class DiffService:
    """Domain service for turning pull request files into a bounded diff text.

    Real code comes first, generated files (lockfiles, minified bundles, source maps,
    build output) last; rendering stops once ``max_bytes`` is exhausted.
    """

    def __init__(self, *, max_bytes: int) -> None:
        self._max_bytes = max_bytes

    @staticmethod
    def render_file(change: FileChange) -> str:
        patch = change.patch or "(Binary or too large to display)"
        return (
            f"\n\n## File: {change.filename}\n"
            f"Status: {change.status} (+{change.additions} -{change.deletions})\n"
            f"\n```diff\n{patch}\n```\n"
        )

    def build(self, files: Sequence[FileChange]) -> DiffResult:
        """Render files in priority order until the byte budget runs out.

        Args:
            files: Pull request file entries in API order

        Returns:
            DiffResult with the rendered text
        """
        # sorted() is stable, so API order is kept inside each group
        ordered = sorted(files, key=lambda f: 0 if is_code_file(f.filename) else 1)

        chunks: list[str] = []
        size = 0
        included = 0
        truncated = False

        for change in ordered:
            if size >= self._max_bytes:
                chunks.append(TRUNCATION_MARKER)
                truncated = True
                break

            rendered = self.render_file(change)
            if size + len(rendered) <= self._max_bytes:
                chunks.append(rendered)
                size += len(rendered)
                included += 1
                continue

            chunks.append(rendered[: self._max_bytes - size])
            chunks.append(PARTIAL_MARKER)
            included += 1
            truncated = True
            break

        text = "".join(chunks)
        return DiffResult(
            text=text or EMPTY_DIFF,
            files_total=len(files),
            files_included=included,
            was_truncated=truncated,
        )
