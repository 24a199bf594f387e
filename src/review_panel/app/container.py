from __future__ import annotations

from dependency_injector import containers, providers

from .config import AppConfig
from ..core.services import ContentFetcher, DiffService, JsonExtractor, JudgeOrchestrator, ReviewService
from ..core.usecases.catalog import CatalogUseCase
from ..core.usecases.review import ReviewUseCase
from ..infra.github import GitHubClient
from ..infra.llm import LLM
from ..infra.logging import ServiceLogger
from ..infra.rate_limiter import RateLimiter
from ..infra.review_cache import ReviewCache


class Container(containers.DeclarativeContainer):
    """DI container with Pydantic BaseSettings support."""

    config = providers.Configuration(pydantic_settings=[AppConfig()])

    # Logger (Resource: manages lifecycle with init/shutdown)
    logger = providers.Resource(
        ServiceLogger,
        logs_dir=config.directories.logs_dir,
        logger_name=config.logging.logger_name,
        console_output=config.logging.console_output,
        json_console=config.logging.json_console,
        file_output=config.logging.file_output,
        level=config.logging.level,
    )

    # Process-wide state: one cache and one limiter per container
    review_cache = providers.Singleton(
        ReviewCache,
        logger=logger,
        ttl_seconds=config.cache.ttl_seconds,
    )

    rate_limiter = providers.Singleton(
        RateLimiter,
        logger=logger,
        window_seconds=config.rate_limit.window_seconds,
        max_requests=config.rate_limit.max_requests,
        sweep_interval_seconds=config.rate_limit.sweep_interval_seconds,
    )

    # Adapters
    github = providers.Singleton(
        GitHubClient,
        logger=logger,
        token=config.github.token,
        api_url=config.github.api_url,
        timeout=config.github.timeout_seconds,
    )

    llm = providers.Singleton(
        LLM,
        provider=config.llm.provider_name,
        api_key=config.llm.api_key,
        base_url=config.llm.base_url,
        max_output_tokens=config.llm.max_output_tokens,
        timeout=config.llm.timeout_seconds,
        logger=logger,
    )

    # Domain services
    diff_service = providers.Singleton(
        DiffService,
        max_bytes=config.review.diff_max_bytes,
    )

    json_extractor = providers.Singleton(JsonExtractor)

    content_fetcher = providers.Singleton(
        ContentFetcher,
        source=github,
        diff_service=diff_service,
        logger=logger,
    )

    judge_orchestrator = providers.Singleton(
        JudgeOrchestrator,
        llm=llm,
        json_extractor=json_extractor,
        logger=logger,
        preview_chars=config.review.preview_chars,
    )

    review_service = providers.Singleton(
        ReviewService,
        content_fetcher=content_fetcher,
        orchestrator=judge_orchestrator,
        cache=review_cache,
        logger=logger,
        default_model=config.llm.default_model,
    )

    # Use cases
    review_uc = providers.Factory(
        ReviewUseCase,
        service=review_service,
        default_model=config.llm.default_model,
    )

    catalog_uc = providers.Factory(
        CatalogUseCase,
        default_model=config.llm.default_model,
    )
