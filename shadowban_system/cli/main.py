"""Command-line shadow-ban risk checks using Typer and Rich."""

import asyncio
import sys
from typing import List, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from shadowban_system import __version__
from shadowban_system.config.logging import get_logger
from shadowban_system.config.platforms import PLATFORM_NAMES
from shadowban_system.config.settings import settings
from shadowban_system.data_management.schemas import Synthesis, TagCheckResult
from shadowban_system.errors import ShadowBanError
from shadowban_system.orchestration import RiskCoordinator
from shadowban_system.platforms import supported_platforms

app = typer.Typer(
    help="Shadow-ban risk checks for posts, accounts and hashtags",
    add_completion=False,
)

console = Console()

logger = get_logger("cli")

VERDICT_STYLES = {
    "CLEAR": "green",
    "LIKELY CLEAR": "green",
    "UNCERTAIN": "yellow",
    "LIKELY RESTRICTED": "red",
    "RESTRICTED": "bold red",
}

TAG_STYLES = {"AVOID": "red", "CAUTION": "yellow", "WATCH": "cyan", "SAFE": "green"}

PRIORITY_STYLES = {
    "critical": "bold red",
    "high": "red",
    "medium": "yellow",
    "low": "cyan",
    "info": "dim",
}

PlatformOption = typer.Option(None, "--platform", "-p", help="Platform id or alias (x, ig, fb, yt)")
JsonOption = typer.Option(False, "--json", help="Print the raw result as JSON")


def _fail(error: Exception) -> None:
    console.print(f"[red]✗[/red] Error: {error}")
    logger.warning(f"CLI check rejected: {error}")
    raise typer.Exit(1)


def render_synthesis(synthesis: Synthesis) -> None:
    style = VERDICT_STYLES.get(synthesis.verdict.value, "white")
    platform = PLATFORM_NAMES.get(synthesis.platform or "", synthesis.platform or "-")
    console.print(Panel(
        f"[{style}]{synthesis.verdict.value}[/{style}]\n"
        f"{synthesis.verdict_description}\n\n"
        f"Probability: [bold]{synthesis.probability}%[/bold]   "
        f"Confidence: [bold]{synthesis.confidence}%[/bold]   "
        f"Agreement: {synthesis.agent_agreement.value}",
        title=f"Shadow-ban risk ({platform}, {synthesis.kind})",
        border_style=style,
    ))

    table = Table(title="Factors", show_header=True, header_style="bold magenta")
    table.add_column("#", style="dim", width=3)
    table.add_column("Agent", style="cyan")
    table.add_column("Status")
    table.add_column("Score", justify="right")
    table.add_column("Weight", justify="right")
    table.add_column("Confidence", justify="right")
    table.add_column("Note", style="yellow")
    for result in synthesis.agent_results:
        table.add_row(
            str(result.factor),
            result.agent_name,
            result.status.value,
            f"{result.raw_score:.0f}",
            f"{result.weight:g}",
            f"{result.confidence:.0f}",
            result.message or "",
        )
    console.print(table)

    if synthesis.primary_issues:
        console.print("\n[bold]Primary issues[/bold]")
        for issue in synthesis.primary_issues:
            console.print(f"  [red]•[/red] {escape(issue)}")

    console.print("\n[bold]Recommendations[/bold]")
    for rec in synthesis.recommendations:
        style = PRIORITY_STYLES[rec.priority.value]
        console.print(f"  [{style}]{rec.priority.value.upper()}[/{style}] {escape(rec.action)}")


def render_tags(result: TagCheckResult) -> None:
    table = Table(title=f"Tag check ({result.platform})", show_header=True, header_style="bold magenta")
    table.add_column("Tag", style="cyan")
    table.add_column("Verdict")
    table.add_column("Category")
    table.add_column("Notes", style="dim")
    for tag in result.tags:
        style = TAG_STYLES[tag.verdict.value]
        table.add_row(
            tag.tag,
            f"[{style}]{tag.verdict.value}[/{style}]",
            tag.category or "",
            tag.notes or "",
        )
    console.print(table)
    console.print(f"Risk score: [bold]{result.risk_score}[/bold]")


def _emit(synthesis: Synthesis, as_json: bool) -> None:
    if as_json:
        typer.echo(synthesis.model_dump_json(indent=2))
    else:
        render_synthesis(synthesis)


@app.command()
def text(
    content: str = typer.Argument(..., help="Post text to check"),
    platform: Optional[str] = PlatformOption,
    link: Optional[List[str]] = typer.Option(None, "--link", "-l", help="Attached link (repeatable)"),
    as_json: bool = JsonOption,
) -> None:
    """Check post text before publishing."""
    logger.info("Text check requested", platform=platform)
    try:
        synthesis = asyncio.run(RiskCoordinator().check_text(content, platform=platform, urls=link or ()))
    except ShadowBanError as e:
        _fail(e)
    _emit(synthesis, as_json)


@app.command()
def url(
    target: str = typer.Argument(..., help="Post or profile URL"),
    content: Optional[str] = typer.Option(None, "--text", "-t", help="Post text, if known"),
    as_json: bool = JsonOption,
) -> None:
    """Check a post or profile by URL."""
    logger.info("URL check requested", url=target)
    try:
        synthesis = asyncio.run(RiskCoordinator().check_url(target, text=content))
    except ShadowBanError as e:
        _fail(e)
    _emit(synthesis, as_json)


@app.command()
def account(
    username: str = typer.Argument(..., help="Account handle, with or without @ / u/"),
    platform: Optional[str] = PlatformOption,
    as_json: bool = JsonOption,
) -> None:
    """Check an account by handle."""
    logger.info("Account check requested", platform=platform)
    try:
        synthesis = asyncio.run(RiskCoordinator().check_account(username, platform=platform))
    except ShadowBanError as e:
        _fail(e)
    _emit(synthesis, as_json)


@app.command()
def tags(
    values: List[str] = typer.Argument(..., help="Hashtags or $cashtags"),
    platform: Optional[str] = PlatformOption,
    as_json: bool = JsonOption,
) -> None:
    """Quick verdict for hashtags and cashtags."""
    try:
        result = RiskCoordinator().check_tags(values, platform=platform)
    except ShadowBanError as e:
        _fail(e)
    if as_json:
        typer.echo(result.model_dump_json(indent=2))
    else:
        render_tags(result)


@app.command()
def stats() -> None:
    """Show signal database statistics."""
    coordinator = RiskCoordinator()
    table = Table(title="Signal databases", show_header=True, header_style="bold magenta")
    table.add_column("Database", style="cyan")
    table.add_column("Entries", justify="right")
    for tier in ("banned", "restricted", "monitored", "safe"):
        table.add_column(tier.capitalize(), justify="right")
    for name, db_stats in coordinator.context.catalog.get_stats().items():
        table.add_row(
            name,
            str(db_stats.total),
            *(str(db_stats.by_tier.get(tier, 0)) for tier in ("banned", "restricted", "monitored", "safe")),
        )
    console.print(table)


@app.command()
def status() -> None:
    """
    Display system status and configuration.

    Shows registered agents, platforms and logging settings.
    """
    logger.info("Displaying system status")
    coordinator = RiskCoordinator()
    registry_stats = coordinator.registry.get_statistics()

    table = Table(title="Shadow-ban System Status", show_header=True, header_style="bold magenta")
    table.add_column("Component", style="cyan", width=20)
    table.add_column("Status", style="green", width=15)
    table.add_column("Details", style="yellow")

    python_version = f"Python {sys.version_info.major}.{sys.version_info.minor}.{sys.version_info.micro}"
    table.add_row("Environment", "✓ Ready", python_version)

    agents_ok = coordinator.registry.has_all_factors()
    table.add_row(
        "Agents",
        "✓ All factors" if agents_ok else "⚠ Incomplete",
        f"{registry_stats['total_agents']} agents, total weight {registry_stats['total_weight']:g}",
    )
    table.add_row("Platforms", "✓ Loaded", ", ".join(supported_platforms()))
    table.add_row(
        "History",
        "✓ Persistent" if settings.history_persistence_path else "✓ In memory",
        f"{settings.max_history_items} records per entity",
    )
    table.add_row("Timeout", "✓ Active", f"{settings.agent_timeout_seconds:g}s per agent")
    table.add_row("Logging", "✓ Active", f"Level: {settings.log_level}, Format: {settings.log_format}")

    console.print(table)


@app.command()
def version() -> None:
    """Display version information."""
    console.print("[bold]Shadow-ban Risk System[/bold]")
    console.print(f"Version: {__version__}")


if __name__ == "__main__":
    app()
