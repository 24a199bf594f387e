from __future__ import annotations

from ...core.domain.exceptions import ConfigError, QuotaError, ReviewError, UpstreamError


_QUOTA_MARKERS = ("credits", "afford", "quota", "insufficient")


def translate_status_error(provider: str, status: int | None, message: str) -> ReviewError:
    """Map a provider HTTP failure onto the review error taxonomy."""
    lowered = message.lower()
    if status in (401, 403) or "api key" in lowered:
        return ConfigError(
            f"AI service configuration error. Please check your {provider} API key."
        )
    if status == 402 or any(marker in lowered for marker in _QUOTA_MARKERS):
        return QuotaError(f"Insufficient API credits on the {provider} account.")
    return UpstreamError(f"{provider} request failed ({status or 'no status'}): {message[:200]}")
