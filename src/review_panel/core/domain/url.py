from __future__ import annotations

import re
from urllib.parse import urlsplit

from .models import ParsedReference, ReferenceKind


_SCHEME_PREFIX = re.compile(r"^(https?://)?(www\.)?", re.IGNORECASE)
_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def _invalid(raw: str, owner: str = "", repo: str = "") -> ParsedReference:
    return ParsedReference(kind=ReferenceKind.INVALID, owner=owner, repo=repo, normalized_url=raw)


def _strip_git_suffix(repo: str) -> str:
    return repo[:-4] if repo.endswith(".git") else repo


def _parse_pr_number(segment: str) -> int | None:
    """Parse the leading integer of a path segment ("12abc" -> 12)."""
    match = _LEADING_INT.match(segment)
    if match is None:
        return None
    return int(match.group(1))


def classify_url(raw: str) -> ParsedReference:
    """Classify a user supplied GitHub URL.

    Accepts URLs with or without scheme and ``www.``; query strings and fragments
    are ignored. Never raises: anything unparseable yields an INVALID reference.
    Valid references carry a canonical ``normalized_url`` rebuilt from their parts,
    so every spelling of one resource shares a cache line.

    Examples:
        github.com/vercel/next.js/pull/71742   -> PR 71742
        https://github.com/owner/repo.git      -> REPO owner/repo
        https://github.com/o/r/tree/feat/auth  -> BRANCH "feat/auth"
    """
    if not isinstance(raw, str):
        return _invalid("")

    normalized = _SCHEME_PREFIX.sub("https://", raw.strip(), count=1)

    try:
        parts = urlsplit(normalized)
        hostname = parts.hostname
    except ValueError:
        return _invalid(raw)

    if hostname != "github.com":
        return _invalid(raw)

    segments = [s for s in parts.path.split("/") if s]
    if len(segments) < 2:
        return _invalid(raw)

    owner, repo, *rest = segments
    repo = _strip_git_suffix(repo)
    base = f"https://github.com/{owner}/{repo}"

    if len(rest) >= 2 and rest[0] == "pull":
        number = _parse_pr_number(rest[1])
        if number is None:
            # Owner and repo are kept so callers can still report what was asked for.
            return _invalid(raw, owner=owner, repo=repo)
        return ParsedReference(
            kind=ReferenceKind.PR,
            owner=owner,
            repo=repo,
            identifier=number,
            normalized_url=f"{base}/pull/{number}",
        )

    if len(rest) >= 2 and rest[0] == "commit":
        return ParsedReference(
            kind=ReferenceKind.COMMIT,
            owner=owner,
            repo=repo,
            identifier=rest[1],
            normalized_url=f"{base}/commit/{rest[1]}",
        )

    if len(rest) >= 2 and rest[0] == "tree":
        branch = "/".join(rest[1:])
        return ParsedReference(
            kind=ReferenceKind.BRANCH,
            owner=owner,
            repo=repo,
            identifier=branch,
            normalized_url=f"{base}/tree/{branch}",
        )

    # Bare repository URLs and anything we do not recognise (issues, blob, a
    # dangling "pull/") are reviewed as the repository itself.
    return ParsedReference(
        kind=ReferenceKind.REPO,
        owner=owner,
        repo=repo,
        normalized_url=base,
    )
