from __future__ import annotations

from typing import Any, Protocol

from .domain.models import CacheEntry, FileChange, PullRequestInfo, RepositoryInfo
from .domain.review import ReviewResult


class ContentSourcePort(Protocol):
    """Port for fetching review-able content and commit fingerprints from GitHub.

    Implementations raise typed ``ReviewError`` subclasses:
    - NotFoundError when the owner/repo/PR/ref does not exist
    - ForbiddenError when the repository is private or access is denied
    - EmptyRepositoryError when the repository has no commits
    - ConfigError when the configured token is rejected
    - UpstreamError for any other transport failure
    """

    def fetch_pull_request(self, owner: str, repo: str, number: int) -> PullRequestInfo:
        ...

    def fetch_repository(self, owner: str, repo: str) -> RepositoryInfo:
        ...

    def fetch_pull_request_files(self, owner: str, repo: str, number: int) -> list[FileChange]:
        ...

    def fetch_pr_head_sha(self, owner: str, repo: str, number: int) -> str:
        """Return the head commit SHA of a pull request."""
        ...

    def fetch_default_branch_sha(self, owner: str, repo: str) -> str:
        """Return the HEAD SHA of the repository's default branch."""
        ...

    def fetch_commit_sha(self, owner: str, repo: str, sha: str) -> str:
        """Resolve a (possibly short) commit SHA to the full SHA."""
        ...

    def fetch_branch_sha(self, owner: str, repo: str, branch: str) -> str:
        """Return the SHA a branch ref points at."""
        ...


class LLMPort(Protocol):
    """Port for LLM inference."""

    @property
    def has_credentials(self) -> bool:
        ...

    def complete(self, *, system_prompt: str, user_prompt: str, model: str) -> str:
        """Return the raw text the model produced.

        Raises:
            ConfigError: credentials missing or rejected
            QuotaError: provider credits exhausted
            UpstreamError: any other transport failure
        """
        ...


class ReviewCachePort(Protocol):
    """Port for the fingerprint-validated review cache."""

    def get(self, url: str, current_fingerprint: str) -> CacheEntry | None:
        ...

    def set(self, url: str, fingerprint: str, review: ReviewResult) -> CacheEntry:
        ...

    def invalidate(self, url: str) -> bool:
        ...


class LoggerPort(Protocol):
    """Port for structured logging.

    Extra keyword arguments are attached to the record as structured fields.
    """

    def debug(self, message: str, **kwargs: Any) -> None:
        ...

    def info(self, message: str, **kwargs: Any) -> None:
        ...

    def warning(self, message: str, **kwargs: Any) -> None:
        ...

    def error(self, message: str, exc_info: bool = False, **kwargs: Any) -> None:
        ...

    def exception(self, message: str, **kwargs: Any) -> None:
        ...
