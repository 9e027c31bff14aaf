"""hanitv CLI - browse the hanime.tv catalog from your terminal."""

import asyncio
import logging
from typing import Optional

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from hanitv import __version__
from hanitv.api import to_json
from hanitv.config import get_config, load_file_config, save_config
from hanitv.models import DetailRecord, EpisodeRef, SearchResult, StreamResolution
from hanitv.providers import get_provider
from hanitv.providers.base import Provider

console = Console()


# ===== PROVIDER HELPERS =====

def get_provider_instance() -> Provider:
    """Get the hanime provider."""
    return get_provider("hanime")


def setup_logging(verbose: bool) -> None:
    """Route hanitv log records through rich on stderr."""
    logger = logging.getLogger("hanitv")
    logger.handlers.clear()
    logger.addHandler(RichHandler(console=Console(stderr=True), show_path=False))
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)


# ===== DISPLAY HELPERS =====

def display_results_table(items: list[SearchResult], title: str = "Results"):
    """Display a table of search results."""
    table = Table(title=title, show_header=True, header_style="bold magenta")
    table.add_column("#", style="dim", width=4)
    table.add_column("Title", style="cyan")
    table.add_column("URL", style="green")

    for i, item in enumerate(items, 1):
        table.add_row(str(i), escape(item.title or "(No title)"), escape(item.href))

    console.print(table)


def display_details(details: DetailRecord):
    """Display content details."""
    console.print(Panel(
        f"[dim]{escape(details.description)}[/]",
        title=f"[bold cyan]{escape(details.aliases or '(No title)')}[/]",
        subtitle=f"[yellow]{details.airdate}[/]"
    ))


def display_episodes(episodes: list[EpisodeRef]):
    """Display an episode list."""
    table = Table(title=f"Episodes ({len(episodes)})", show_header=True)
    table.add_column("E", style="green", width=3)
    table.add_column("URL", style="cyan")

    for ep in episodes:
        table.add_row(str(ep.number), escape(ep.href))

    console.print(table)


def display_stream(resolution: StreamResolution):
    """Display a resolved stream and its subtitles."""
    console.print(f"[bold]Stream:[/] [cyan]{escape(resolution.stream)}[/]")
    for sub in resolution.subtitles or []:
        console.print(f"  [green]•[/] {escape(sub.name)} [dim]({escape(sub.lang)})[/] {escape(sub.url or '')}")


def emit_json(value) -> None:
    """Print the serialized contract, unstyled."""
    click.echo(to_json(value))


# ===== ASYNC RUNNERS =====

def run_async(coro):
    """Run an async function."""
    return asyncio.run(coro)


def use_json(json_flag: bool) -> bool:
    return json_flag or get_config().output == "json"


# ===== CLI COMMANDS =====

@click.group(invoke_without_command=True)
@click.option("--version", "-v", is_flag=True, help="Show version")
@click.option("--verbose", is_flag=True, help="Show debug logging")
@click.pass_context
def main(ctx, version, verbose):
    """hanitv CLI - Browse the hanime.tv catalog from your terminal."""
    setup_logging(verbose)

    if version:
        console.print(f"hanitv v{__version__}")
        return

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


@main.command()
@click.argument("keyword")
@click.option("--json", "as_json", is_flag=True, help="Print raw JSON")
def search(keyword: str, as_json: bool):
    """Search for videos."""
    prov = get_provider_instance()
    results = run_async(prov.search(keyword))

    if use_json(as_json):
        emit_json(results)
        return

    if not results:
        console.print("[yellow]No results found[/]")
        return

    display_results_table(results, title=f"Results for '{keyword}'")


@main.command()
@click.argument("url")
@click.option("--json", "as_json", is_flag=True, help="Print raw JSON")
def details(url: str, as_json: bool):
    """Show details for a video URL."""
    prov = get_provider_instance()
    records = run_async(prov.fetch_details(url))

    if use_json(as_json):
        emit_json(records)
        return

    for record in records:
        display_details(record)


@main.command()
@click.argument("url")
@click.option("--json", "as_json", is_flag=True, help="Print raw JSON")
def episodes(url: str, as_json: bool):
    """List episodes for a video URL."""
    prov = get_provider_instance()
    eps = run_async(prov.fetch_episodes(url))

    if use_json(as_json):
        emit_json(eps)
        return

    if not eps:
        console.print("[red]Invalid video URL[/]")
        return

    display_episodes(eps)


@main.command()
@click.argument("url")
@click.option("--json", "as_json", is_flag=True, help="Print raw JSON")
def stream(url: str, as_json: bool):
    """Resolve the stream URL for a video URL."""
    prov = get_provider_instance()
    resolution = run_async(prov.fetch_stream(url))

    if use_json(as_json):
        emit_json(resolution)
        return

    if not resolution.stream:
        console.print("[red]Failed to get stream[/]")
        return

    display_stream(resolution)


@main.command()
@click.option("--show", is_flag=True, help="Show current configuration")
@click.option("--base-url", help="Set site base URL")
@click.option("--api-url", help="Set API base URL")
@click.option("--timeout", type=float, help="Set request timeout in seconds")
@click.option("--output", type=click.Choice(["table", "json"]), help="Set default output format")
def config(show: bool, base_url: Optional[str], api_url: Optional[str], timeout: Optional[float], output: Optional[str]):
    """View or edit configuration."""
    config = get_config()

    if show or not (base_url or api_url or timeout is not None or output):
        table = Table(title="Configuration")
        table.add_column("Setting", style="cyan")
        table.add_column("Value", style="green")

        table.add_row("Base URL", config.base_url)
        table.add_row("API URL", config.api_url)
        table.add_row("Timeout", "(httpx default)" if config.timeout is None else f"{config.timeout}s")
        table.add_row("Output", config.output)

        console.print(table)
        return

    # Edit the on-disk values so HANITV_* overrides are not persisted
    config = load_file_config()

    if base_url:
        config.base_url = base_url.rstrip("/")
    if api_url:
        config.api_url = api_url.rstrip("/")
    if timeout is not None:
        config.timeout = timeout
    if output:
        config.output = output

    save_config(config)
    console.print("[green]✓ Configuration saved[/]")


if __name__ == "__main__":
    main()
