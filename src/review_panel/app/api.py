"""HTTP interface: ``POST /review``, ``GET /review`` and ``GET /health``."""

from __future__ import annotations

import time
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict
from pydantic import ValidationError as SchemaError
from starlette.concurrency import run_in_threadpool

from .. import __version__
from .container import Container
from ..core.domain.exceptions import RateLimitedError, ReviewError, UnknownError, ValidationError
from ..core.ports import LoggerPort
from ..infra.rate_limiter import RateLimiter, RateLimitResult


NO_CACHE_HEADERS = {"Cache-Control": "no-cache, no-store, must-revalidate"}


class ReviewRequest(BaseModel):
    """Body of ``POST /review``; unknown keys are ignored."""

    model_config = ConfigDict(extra="ignore")

    url: str | None = None
    judges: list[str] | None = None
    preset: str | None = None
    model: str | None = None


def client_identifier(request: Request) -> str:
    """First X-Forwarded-For hop, else X-Real-IP, else ``"unknown"``."""
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        first = forwarded.split(",")[0].strip()
        if first:
            return first
    real_ip = request.headers.get("x-real-ip")
    if real_ip and real_ip.strip():
        return real_ip.strip()
    return "unknown"


def _error_response(error: ReviewError, rate: RateLimitResult | None = None) -> JSONResponse:
    headers = rate.headers() if rate is not None else {}
    if isinstance(error, RateLimitedError):
        headers["Retry-After"] = str(error.retry_after)
    return JSONResponse(error.to_payload(), status_code=error.http_status, headers=headers)


async def _parse_body(request: Request) -> ReviewRequest:
    try:
        payload = await request.json()
    except ValueError as e:
        raise ValidationError("Request body must be valid JSON", code="INVALID_REQUEST") from e
    try:
        return ReviewRequest.model_validate(payload)
    except SchemaError as e:
        raise ValidationError("Invalid request body", code="INVALID_REQUEST") from e


def create_app(container: Container | None = None) -> FastAPI:
    """Build the FastAPI application around an initialized container."""
    if container is None:
        container = Container()
        container.init_resources()

    limiter: RateLimiter = container.rate_limiter()
    logger: LoggerPort = container.logger()
    started = time.monotonic()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        limiter.start_sweeper()
        logger.info("server_started", version=__version__)
        try:
            yield
        finally:
            limiter.stop()
            logger.info("server_stopped")

    app = FastAPI(title="review-panel", version=__version__, lifespan=lifespan)

    @app.post("/review")
    async def post_review(request: Request) -> JSONResponse:
        identifier = client_identifier(request)
        rate = limiter.check(identifier)
        if not rate.allowed:
            error = RateLimitedError(
                "Rate limit exceeded. Please try again later.",
                retry_after=rate.retry_after(limiter.now()),
            )
            return _error_response(error, rate)

        url: str | None = None
        try:
            body = await _parse_body(request)
            url = body.url
            outcome = await run_in_threadpool(
                container.review_uc().execute,
                url=body.url,
                judges=body.judges,
                preset=body.preset,
                model=body.model,
            )
        except ReviewError as e:
            logger.warning("review_failed", url=url, code=e.code, status=e.http_status, detail=e.message)
            return _error_response(e, rate)
        except Exception:
            logger.exception("review_failed_unexpectedly", url=url)
            return _error_response(UnknownError("An unexpected error occurred"), rate)

        content = outcome.review.to_response()
        content["_cache"] = outcome.cache_info()
        return JSONResponse(content, headers=rate.headers())

    @app.get("/review")
    def get_catalog() -> JSONResponse:
        return JSONResponse(container.catalog_uc().execute())

    @app.get("/health")
    def health() -> JSONResponse:
        return JSONResponse(
            {
                "status": "ok",
                "timestamp": datetime.now(timezone.utc).isoformat(),
                "version": __version__,
                "uptime": round(time.monotonic() - started, 3),
            },
            headers=NO_CACHE_HEADERS,
        )

    return app
