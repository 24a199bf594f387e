"""Domain exceptions for review_panel.

Every failure that can reach a caller is a ``ReviewError`` subclass carrying a
stable machine-readable ``code`` and the HTTP status the API boundary answers with.
Collaborator adapters (GitHub, LLM) raise these directly so the service never has
to inspect exception messages.
"""

from __future__ import annotations


class ReviewError(Exception):
    """Base class for all typed review failures."""

    http_status: int = 500
    default_code: str = "INTERNAL_ERROR"

    def __init__(self, message: str, code: str | None = None) -> None:
        self.message = message
        self.code = code or self.default_code
        super().__init__(message)

    def to_payload(self) -> dict[str, str]:
        return {"error": self.message, "code": self.code}


class ValidationError(ReviewError):
    """Bad input shape (missing URL, unknown judge, unsupported model, ...)."""

    http_status = 400
    default_code = "INVALID_REQUEST"


class EmptyRepositoryError(ValidationError):
    """The referenced repository has no commits to review."""

    default_code = "EMPTY_REPOSITORY"


class NotFoundError(ReviewError):
    http_status = 404
    default_code = "GITHUB_NOT_FOUND"


class ForbiddenError(ReviewError):
    """Repository is private or access was denied upstream."""

    http_status = 403
    default_code = "GITHUB_FORBIDDEN"


class RateLimitedError(ReviewError):
    http_status = 429
    default_code = "RATE_LIMITED"

    def __init__(self, message: str, *, retry_after: int, code: str | None = None) -> None:
        self.retry_after = retry_after
        super().__init__(message, code)


class ConfigError(ReviewError):
    """Missing or rejected credentials for a collaborator."""

    http_status = 500
    default_code = "AI_CONFIG_ERROR"


class QuotaError(ReviewError):
    """LLM provider credits are exhausted."""

    http_status = 503
    default_code = "AI_CREDITS_EXHAUSTED"


class ParseError(ReviewError):
    """Model output could not be coerced into a review."""

    http_status = 500
    default_code = "AI_PARSE_ERROR"

    def __init__(self, message: str = "Invalid review response format", *, preview: str = "", code: str | None = None) -> None:
        self.preview = preview
        super().__init__(message, code)


class UpstreamError(ReviewError):
    """Any other transport failure from GitHub or the LLM provider."""

    http_status = 500
    default_code = "UPSTREAM_ERROR"


class UnknownError(ReviewError):
    http_status = 500
    default_code = "INTERNAL_ERROR"
