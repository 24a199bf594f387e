from __future__ import annotations

import json

import typer
import uvicorn
from dotenv import load_dotenv

from .api import create_app
from .config import AppConfig
from .container import Container
from .cli_formatter import format_catalog, format_review
from ..core.domain.exceptions import ReviewError

load_dotenv()

app = typer.Typer(add_completion=False, no_args_is_help=True)


def _build_container(config: AppConfig) -> Container:
    container = Container()
    container.config.from_pydantic(config)
    container.init_resources()
    return container


@app.command()
def serve(
    host: str | None = typer.Option(None, "--host", help="Bind address (default from config)"),
    port: int | None = typer.Option(None, "--port", "-p", help="Port (default from config)"),
    log_level: str | None = typer.Option(None, "--log-level", help="Log level", case_sensitive=False),
):
    """Run the review HTTP API."""
    config = AppConfig()
    if log_level:
        config = config.model_copy(
            update={"logging": config.logging.model_copy(update={"level": log_level.upper()})}
        )

    bind_host = host or config.server.host
    bind_port = port or config.server.port

    container = _build_container(config)
    typer.echo(f"Serving on http://{bind_host}:{bind_port}")
    try:
        uvicorn.run(
            create_app(container),
            host=bind_host,
            port=bind_port,
            log_level=config.logging.level.lower(),
        )
    finally:
        container.shutdown_resources()


@app.command()
def review(
    url: str = typer.Argument(..., help="GitHub PR or repository URL"),
    judge: list[str] | None = typer.Option(None, "--judge", "-j", help="Judge id (repeatable)"),
    preset: str | None = typer.Option(None, "--preset", help="quick | standard | comprehensive | custom"),
    model: str | None = typer.Option(None, "--model", help="Model id (see `judges`)"),
    json_output: bool = typer.Option(False, "--json", help="Output result as JSON"),
):
    """Review a single GitHub pull request or repository."""
    config = AppConfig()
    container = _build_container(config)

    if not json_output:
        typer.echo(f"Reviewing: {url}")
    try:
        outcome = container.review_uc().execute(url=url, judges=judge or None, preset=preset, model=model)
    except ReviewError as e:
        typer.echo(f"Error: {e.message} ({e.code})", err=True)
        raise typer.Exit(code=1)
    finally:
        container.shutdown_resources()

    if json_output:
        result = outcome.review.to_response()
        result["_cache"] = outcome.cache_info()
        typer.echo(json.dumps(result, ensure_ascii=False, indent=2))
    else:
        typer.echo(format_review(outcome))


@app.command()
def judges(
    json_output: bool = typer.Option(False, "--json", help="Output catalog as JSON"),
):
    """List judges, presets and models."""
    container = _build_container(AppConfig())
    try:
        catalog = container.catalog_uc().execute()
    finally:
        container.shutdown_resources()

    if json_output:
        typer.echo(json.dumps(catalog, ensure_ascii=False, indent=2))
    else:
        typer.echo(format_catalog(catalog))


def main() -> None:
    app()


if __name__ == "__main__":
    main()
