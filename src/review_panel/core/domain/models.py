from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Literal

from .review import ReviewResult


ReviewType = Literal["pr", "repo"]


class ReferenceKind(str, Enum):
    PR = "pr"
    REPO = "repo"
    COMMIT = "commit"
    BRANCH = "branch"
    INVALID = "invalid"


@dataclass(frozen=True)
class ParsedReference:
    """A GitHub URL classified into the resource it points at.

    ``identifier`` is the PR number for PR references, the SHA for commits,
    the branch path for branches and None otherwise.
    """
    kind: ReferenceKind
    owner: str
    repo: str
    normalized_url: str
    identifier: int | str | None = None

    @property
    def is_valid(self) -> bool:
        return self.kind is not ReferenceKind.INVALID

    @property
    def slug(self) -> str:
        """Returns owner/repo format."""
        return f"{self.owner}/{self.repo}"


@dataclass(frozen=True)
class PullRequestInfo:
    number: int
    title: str
    author: str
    additions: int
    deletions: int
    changed_files: int
    commits: int
    body: str | None
    is_draft: bool


@dataclass(frozen=True)
class RepositoryInfo:
    name: str
    owner: str
    description: str | None
    language: str | None
    stars: int
    has_tests: bool
    readme_content: str | None


@dataclass(frozen=True)
class FileChange:
    """One file entry of a pull request diff."""
    filename: str
    status: str
    additions: int
    deletions: int
    patch: str | None = None


@dataclass
class ReviewContent:
    """Text and metadata handed to the judge panel."""
    review_type: ReviewType
    content: str
    metadata: dict[str, Any] = field(default_factory=dict)


@dataclass
class CacheEntry:
    review: ReviewResult
    commit_hash: str
    normalized_url: str
    cached_at: datetime
    expires_at: datetime


@dataclass
class ReviewOutcome:
    """Result of one pass through the review service."""
    review: ReviewResult
    cached: bool
    commit_hash: str
    cached_at: datetime | None = None
    expires_at: datetime | None = None

    def cache_info(self) -> dict[str, Any]:
        info: dict[str, Any] = {"hit": self.cached, "commitHash": self.commit_hash[:7]}
        if self.cached_at is not None:
            info["cachedAt"] = self.cached_at.isoformat()
        if self.expires_at is not None:
            info["expiresAt"] = self.expires_at.isoformat()
        return info
