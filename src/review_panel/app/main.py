from __future__ import annotations

from typing import Sequence

from .config import AppConfig
from .container import Container


def _create_container(config: AppConfig | None = None) -> Container:
    """Create and initialize a container.

    Args:
        config: Optional config. If None, loads from environment variables.

    Returns:
        Initialized container instance
    """
    container = Container()

    if config is None:
        config = AppConfig()

    container.config.from_pydantic(config)
    container.init_resources()

    return container


def review(
    url: str,
    *,
    judges: Sequence[str] | None = None,
    preset: str | None = None,
    model: str | None = None,
    config: AppConfig | None = None,
) -> dict[str, object]:
    """Review a GitHub pull request or repository.

    Args:
        url: GitHub PR/repository/commit/branch URL
        judges: Explicit judge ids (take precedence over ``preset``)
        preset: quick | standard | comprehensive | custom
        model: Model id from the catalog (default from config)
        config: Optional config for testing. If None, loads from env vars.

    Returns:
        The review in its HTTP response shape, including ``_cache``

    Raises:
        ReviewError: on invalid input or collaborator failure
    """
    container = _create_container(config)
    try:
        outcome = container.review_uc().execute(url=url, judges=judges, preset=preset, model=model)
    finally:
        container.shutdown_resources()

    result = outcome.review.to_response()
    result["_cache"] = outcome.cache_info()
    return result


def judges_catalog(config: AppConfig | None = None) -> dict[str, object]:
    """Return the judge, preset and model catalog."""
    container = _create_container(config)
    try:
        return container.catalog_uc().execute()
    finally:
        container.shutdown_resources()
