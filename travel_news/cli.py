#!/usr/bin/env python3
"""
CLI interface for travel-news.

This module provides the main command-line interface using Click framework,
supporting headline scans, single and batch article extraction, and web
server mode.
"""

import os
import sys
import json
from typing import Optional
import click
from rich.console import Console
from rich.markup import escape
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from . import __version__
from .config import Config
from .extractors.extractor_factory import ExtractorFactory
from .extractors.url_validator import URLValidator
from .models import ExtractionResult
from .scraper.news_scraper import NewsScraper, PARALLEL
from .utils import extract_domain, setup_logging, truncate_text

console = Console()


def validate_url(ctx, param, value):
    """Validate URL parameter."""
    if not value:
        return value

    normalized_url, error_message = URLValidator().validate_url(value)
    if error_message:
        raise click.BadParameter(f"Invalid URL: {error_message}")
    return normalized_url


def _print_result(result: ExtractionResult, show_content: bool) -> None:
    status = "[green]✅ success[/green]" if result.success else "[yellow]⚠️ low confidence[/yellow]"
    console.print(f"[blue]Status:[/blue] {status}")
    console.print(f"[blue]Title:[/blue] {escape(result.title or 'Unknown')}")
    console.print(f"[blue]Extractor:[/blue] {result.extractor_used} ({result.strategy or 'n/a'})")
    console.print(f"[blue]Word count:[/blue] {result.word_count:,}")
    console.print(f"[blue]Quality score:[/blue] {result.quality_score}/100")
    if result.error_message:
        console.print(f"[red]Error:[/red] {escape(result.error_message)}")
    if result.excerpt:
        console.print(f"\n[blue]Excerpt:[/blue] {escape(result.excerpt)}")
    if show_content and result.full_content:
        console.print()
        console.print(result.full_content, markup=False, highlight=False)


@click.group(help="Collect the latest travel headlines and extract article content")
@click.version_option(version=__version__, prog_name="travel-news")
@click.option('--config', '-c', 'config_file',
              type=click.Path(exists=True, readable=True, dir_okay=False),
              help="Path to custom configuration file")
@click.option('-v', '--verbose', is_flag=True,
              help="Enable verbose (debug) logging")
@click.pass_context
def main(ctx, config_file: Optional[str], verbose: bool):
    """Main CLI entry point."""
    ctx.ensure_object(dict)
    setup_logging(verbose)

    # Load configuration
    ctx.obj['config'] = Config(config_file)
    ctx.obj['verbose'] = verbose


@main.command("scan")
@click.option("-n", "--max-articles", type=click.IntRange(1, 100),
              help="Maximum number of headlines to return")
@click.option("--parallel", is_flag=True,
              help="Fetch sources concurrently instead of one after another")
@click.option("--json", "as_json", is_flag=True,
              help="Print the raw JSON report")
@click.pass_context
def scan_cmd(ctx, max_articles: Optional[int], parallel: bool, as_json: bool):
    """Scan the configured sources for the latest travel headlines."""

    config = ctx.obj['config']
    scraper = NewsScraper(config)

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
        transient=True,
        disable=as_json
    ) as progress:
        progress.add_task("Scanning sources...", total=None)
        report = scraper.scan(max_articles, PARALLEL if parallel else None)

    if as_json:
        click.echo(json.dumps(report.to_dict(), indent=2))
        return

    table = Table(title="Latest travel news")
    table.add_column("#", style="dim", justify="right")
    table.add_column("Title", style="cyan")
    table.add_column("Source", style="blue")
    table.add_column("Fresh", justify="right")
    table.add_column("URL", style="dim")

    for index, article in enumerate(report.articles, 1):
        table.add_row(
            str(index),
            truncate_text(article.title, 70),
            article.source,
            str(article.freshness_score),
            truncate_text(article.url, 60)
        )

    console.print(table)
    console.print(
        f"[blue]{len(report.articles)} headlines from "
        f"{report.successful_sources}/{report.sources_checked} sources[/blue]"
    )

    for result in report.source_results:
        if not result.success:
            console.print(f"[red]❌ {escape(result.source)}:[/red] {escape(result.error or '')}")


@main.command("extract")
@click.argument("url", callback=validate_url)
@click.option("-e", "--extractor", type=click.Choice(['heuristic', 'readability']),
              help="Extractor to try first")
@click.option("--html-file", type=click.File('r', encoding='utf-8'),
              help="Extract from a saved HTML file instead of downloading URL")
@click.option("--show-content", is_flag=True,
              help="Print the full extracted text")
@click.option("--json", "as_json", is_flag=True,
              help="Print the result as JSON")
@click.pass_context
def extract_cmd(ctx, url: str, extractor: Optional[str], html_file,
                show_content: bool, as_json: bool):
    """Extract the main content of a single article."""

    factory = ExtractorFactory(ctx.obj['config'])

    if html_file is not None:
        result = factory.extract_html(html_file.read(), url, extractor)
    else:
        with console.status("Extracting article content..."):
            result = factory.extract(url, extractor)

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
    else:
        _print_result(result, show_content)

    if not result.full_content:
        sys.exit(1)


@main.command("batch")
@click.argument("urls_file", type=click.File('r'))
@click.option("--continue-on-error", is_flag=True,
              help="Continue processing other URLs if one fails")
@click.pass_context
def batch_cmd(ctx, urls_file, continue_on_error: bool):
    """Extract several articles listed in a file, one URL per line."""

    validator = URLValidator()

    # Read URLs from file
    urls = []
    for line_num, line in enumerate(urls_file, 1):
        line = line.strip()
        if not line or line.startswith('#'):
            continue

        normalized_url, error_message = validator.validate_url(line)
        if error_message:
            console.print(f"[yellow]Warning:[/yellow] Invalid URL at line {line_num}: {error_message}")
            if not continue_on_error:
                sys.exit(1)
            continue
        urls.append((line_num, normalized_url))

    if not urls:
        console.print("[red]No valid URLs found in file[/red]")
        sys.exit(1)

    factory = ExtractorFactory(ctx.obj['config'])
    results = []

    with Progress(console=console) as progress:
        main_task = progress.add_task("Extracting articles...", total=len(urls))

        for line_num, url in urls:
            progress.update(main_task, description=f"Processing line {line_num}...")
            result = factory.extract(url)
            results.append((line_num, url, result))
            progress.advance(main_task)

            if not result.full_content and not continue_on_error:
                console.print(f"[red]Stopping due to error at line {line_num}[/red]")
                break

    table = Table(title="Extraction results")
    table.add_column("Line", style="cyan")
    table.add_column("Site", style="blue")
    table.add_column("Title")
    table.add_column("Words", justify="right")
    table.add_column("Score", justify="right")
    table.add_column("OK")

    for line_num, url, result in results:
        table.add_row(
            str(line_num),
            extract_domain(url),
            truncate_text(result.title or result.error_message or "", 50),
            str(result.word_count),
            str(result.quality_score),
            "✅" if result.success else "❌"
        )

    console.print(table)

    successes = sum(1 for _, _, result in results if result.success)
    console.print(f"\n[green]✅ Successfully extracted: {successes}/{len(urls)} URLs[/green]")


@main.command("sources")
@click.pass_context
def sources_cmd(ctx):
    """List the configured news sources."""

    config = ctx.obj['config']
    sources = config.get_sources(include_disabled=True)

    if not sources:
        console.print("[yellow]No sources configured[/yellow]")
        return

    table = Table(title="News sources")
    table.add_column("Name", style="cyan")
    table.add_column("URL", style="blue")
    table.add_column("Selectors", style="dim")
    table.add_column("Enabled")

    for source in sources:
        table.add_row(
            source.name,
            source.url,
            ", ".join(source.selectors),
            "yes" if source.enabled else "no"
        )

    console.print(table)

    if config.loaded_from:
        console.print(f"[dim]Configuration: {config.loaded_from}[/dim]")


@main.command("serve")
@click.option("-p", "--port", type=int,
              help="Port to run the web server on [default: $PORT or server.port]")
@click.option("--host",
              help="Host to bind the web server to [default: server.host]")
@click.pass_context
def serve_cmd(ctx, port: Optional[int], host: Optional[str]):
    """Start the HTTP API."""

    import uvicorn
    from .web_ui.server import create_app

    config = ctx.obj['config']
    host = host or config.get('server.host', '0.0.0.0')
    port = port or int(os.environ.get('PORT') or config.get('server.port', 3000))

    console.print(f"[blue]Starting travel-news API on[/blue] http://{host}:{port}")
    console.print("[blue]Press Ctrl+C to stop[/blue]")

    # Create the FastAPI app with configuration
    app = create_app(config)

    log_level = "debug" if ctx.obj['verbose'] else "info"

    try:
        uvicorn.run(app, host=host, port=port, log_level=log_level)
    except KeyboardInterrupt:
        console.print("\n[yellow]Server stopped by user[/yellow]")


if __name__ == "__main__":
    main()
