#!/usr/bin/env python3
"""Search funnel check: how many articles survive each pipeline stage."""

import asyncio
import sys
import time
from collections import Counter
from dataclasses import asdict, dataclass, field

import click
import orjson
from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from .config import get_settings
from .logging import get_logger
from .pipeline import NewsAggregationPipeline, create_pipeline, normalize_batch
from .processing.filters import passes_threshold
from .processing.keywords import Category

logger = get_logger(__name__)
console = Console()


@dataclass
class FunnelReport:
    """Stage counts for one category search."""
    category: str
    status: str = "ok"
    response_time: float = 0.0
    raw: int = 0
    eligible: int = 0
    blacklisted: int = 0
    relevant: int = 0
    top_score: int | None = None
    blacklist_hits: dict[str, int] = field(default_factory=dict)
    error: str | None = None


async def check_category(pipeline: NewsAggregationPipeline, category: Category) -> FunnelReport:
    """Run one category search and score it without selecting."""
    report = FunnelReport(category=category.value)
    start_time = time.time()

    try:
        raw_articles = await pipeline.search_client.search(
            pipeline.query_for(category), pipeline.settings.page_size
        )
    except Exception as e:
        report.status = "failed"
        report.error = str(e)
        report.response_time = time.time() - start_time
        logger.warning("News search check failed", category=category.value, error=str(e))
        return report

    report.response_time = time.time() - start_time
    report.raw = len(raw_articles)

    eligible = normalize_batch(raw_articles)
    report.eligible = len(eligible)

    hits: Counter[str] = Counter()
    scores = []
    for article in eligible:
        details = pipeline.scorer.score_with_details(article, category)
        if details.blacklisted_by is not None:
            hits[details.blacklisted_by] += 1
        scores.append(details.score)

    report.blacklisted = sum(hits.values())
    report.relevant = sum(1 for score in scores if passes_threshold(score))
    report.top_score = max(scores) if scores else None
    report.blacklist_hits = dict(hits.most_common(5))
    if report.relevant == 0:
        report.status = "empty"
    return report


async def check_all_categories(pipeline: NewsAggregationPipeline) -> list[FunnelReport]:
    return list(await asyncio.gather(
        *(check_category(pipeline, category) for category in Category)
    ))


def display_funnel(reports: list[FunnelReport]) -> None:
    """Display funnel reports in a formatted table."""
    failed = sum(1 for r in reports if r.status == "failed")
    summary_text = (
        f"[green]Relevant: {sum(r.relevant for r in reports)}[/green] | "
        f"[yellow]Blacklisted: {sum(r.blacklisted for r in reports)}[/yellow] | "
        f"[red]Failed searches: {failed}[/red]"
    )
    console.print(Panel(summary_text, title="[bold]News Search Funnel[/bold]", border_style="cyan"))

    table = Table(box=box.ROUNDED, show_header=True, header_style="bold cyan")
    table.add_column("Category", style="dim")
    table.add_column("Status", justify="center")
    table.add_column("Time", justify="right")
    table.add_column("Raw", justify="right")
    table.add_column("Eligible", justify="right")
    table.add_column("Blacklisted", justify="right")
    table.add_column("Relevant", justify="right")
    table.add_column("Top Score", justify="right")
    table.add_column("Top Blacklist Hits", overflow="fold")

    for report in reports:
        status_color = {'ok': 'green', 'empty': 'yellow', 'failed': 'red'}.get(report.status, 'white')
        hits = ", ".join(f"{kw} ({n})" for kw, n in report.blacklist_hits.items()) or "-"
        table.add_row(
            report.category,
            f"[{status_color}]{report.status.upper()}[/{status_color}]",
            f"{report.response_time:.2f}s",
            str(report.raw),
            str(report.eligible),
            str(report.blacklisted),
            str(report.relevant),
            "-" if report.top_score is None else str(report.top_score),
            report.error or hits,
        )

    console.print(table)


@click.command()
@click.option('--mock', is_flag=True, help='Use built-in sample articles')
@click.option('--json', 'output_json', is_flag=True, help='Output as JSON')
def main(mock: bool, output_json: bool):
    """Check how each category search fares through the relevance funnel."""
    settings = get_settings()
    if mock:
        settings.mock = True

    try:
        reports = asyncio.run(check_all_categories(create_pipeline(settings)))
    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted by user[/yellow]")
        sys.exit(1)

    if output_json:
        click.echo(orjson.dumps([asdict(r) for r in reports], option=orjson.OPT_INDENT_2).decode())
    else:
        display_funnel(reports)

    if any(r.status == "failed" for r in reports):
        sys.exit(1)


if __name__ == "__main__":
    main()
