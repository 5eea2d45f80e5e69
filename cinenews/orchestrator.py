import asyncio
import logging
import sys

import click
import orjson
from rich import box
from rich.console import Console
from rich.table import Table

from .config import Settings, get_settings, validate_config
from .ingest.articles import NewsArticle
from .logging import get_logger, setup_logging
from .pipeline import NewsAggregationPipeline, create_pipeline
from .utils import truncate_text

logger = get_logger(__name__)
console = Console()


def display_articles(articles: list[NewsArticle], title: str) -> None:
    """Print articles as a table."""
    if not articles:
        console.print(f"[yellow]No {title.lower()} right now.[/yellow]")
        return

    table = Table(
        title=title,
        box=box.ROUNDED,
        show_header=True,
        header_style="bold cyan"
    )
    table.add_column("Published", style="dim", no_wrap=True)
    table.add_column("Source")
    table.add_column("Title", overflow="fold")
    table.add_column("URL", style="dim", overflow="fold")

    for article in articles:
        table.add_row(
            article.published_at,
            article.source_name,
            truncate_text(article.title, 90),
            article.url,
        )

    console.print(table)


def emit(articles: list[NewsArticle], title: str, output_json: bool) -> None:
    if output_json:
        payload = orjson.dumps([a.to_dict() for a in articles], option=orjson.OPT_INDENT_2)
        click.echo(payload.decode())
    else:
        display_articles(articles, title)


def configure(settings: Settings, mock: bool, seed: int | None, log_level: str, verbose: bool) -> None:
    """Apply CLI overrides to settings and logging."""
    actual_log_level = "INFO" if verbose else log_level
    setup_logging(log_level=actual_log_level, json_logging=False)

    if not verbose:
        logging.getLogger("aiohttp").setLevel(logging.ERROR)

    if mock:
        settings.mock = True
    if seed is not None:
        settings.random_seed = seed


@click.group(invoke_without_command=True)
@click.option("--mock", is_flag=True, help="Use built-in sample articles")
@click.option("--seed", type=int, help="Seed the selection shuffle for repeatable output")
@click.option("--log-level", default="ERROR", help="Log level")
@click.option("--verbose", is_flag=True, help="Show pipeline progress logs")
@click.option(
    "--validate-config",
    "validate_config_flag",
    is_flag=True,
    help="Validate configuration and exit",
)
@click.pass_context
def cli(ctx, mock, seed, log_level, verbose, validate_config_flag):
    """Entertainment news - relevant actor and movie headlines."""
    settings = get_settings()
    configure(settings, mock, seed, log_level, verbose)

    if validate_config_flag:
        if validate_config(settings):
            click.echo("✅ Configuration is valid")
            sys.exit(0)
        click.echo("❌ Configuration validation failed", err=True)
        sys.exit(1)

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())
        return

    if not validate_config(settings):
        click.echo("❌ Configuration validation failed. Use --validate-config for details.", err=True)
        sys.exit(1)

    ctx.obj = create_pipeline(settings)


def _run(pipeline: NewsAggregationPipeline, coro_name: str, limit: int) -> list[NewsArticle]:
    return asyncio.run(getattr(pipeline, coro_name)(limit))


@cli.command()
@click.option("--limit", type=click.IntRange(min=1), help="Number of articles")
@click.option("--json", "output_json", is_flag=True, help="Output as JSON")
@click.pass_obj
def actors(pipeline: NewsAggregationPipeline, limit, output_json):
    """Actor and celebrity news."""
    articles = _run(pipeline, "get_actor_news", limit or pipeline.settings.default_actor_limit)
    emit(articles, "Actor News", output_json)


@cli.command()
@click.option("--limit", type=click.IntRange(min=1), help="Number of articles")
@click.option("--json", "output_json", is_flag=True, help="Output as JSON")
@click.pass_obj
def movies(pipeline: NewsAggregationPipeline, limit, output_json):
    """Film industry news."""
    articles = _run(pipeline, "get_movie_news", limit or pipeline.settings.default_movie_limit)
    emit(articles, "Movie News", output_json)


@cli.command()
@click.option("--limit", type=click.IntRange(min=1), help="Number of articles")
@click.option("--json", "output_json", is_flag=True, help="Output as JSON")
@click.pass_obj
def breaking(pipeline: NewsAggregationPipeline, limit, output_json):
    """Latest actor and movie news combined."""
    articles = _run(pipeline, "get_breaking_news", limit or pipeline.settings.default_breaking_limit)
    emit(articles, "Breaking News", output_json)


if __name__ == "__main__":
    cli()
