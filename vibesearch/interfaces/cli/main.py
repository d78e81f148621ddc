"""
CLI Main - Typer-based command-line interface.

Usage:
    vibesearch search "cozy coffee" --notes "trip: sf jun 1-3"
    vibesearch enhance "quiet place to work" --notes "trip: nyc"
    vibesearch serve
"""

from __future__ import annotations

import asyncio

import typer
from rich.console import Console
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from vibesearch import __version__

app = typer.Typer(
    name="vibesearch",
    help="VibeSearch - Semantic place ranking for vibe queries",
    add_completion=False,
)
console = Console()


@app.command()
def search(
    query: str = typer.Argument(..., help="Vibe query, e.g. 'cozy coffee'"),
    notes: str = typer.Option("", "--notes", "-n", help="Surrounding note text"),
    location: str = typer.Option("", "--location", "-l", help="Location hint"),
) -> None:
    """Rank nearby places against a vibe query."""
    asyncio.run(_search_async(query, notes, location))


async def _search_async(query: str, notes: str, location: str) -> None:
    """Async search implementation."""
    from vibesearch.config import VibeSearchError, configure_logging, get_settings
    from vibesearch.interfaces.api.deps import build_orchestrator

    settings = get_settings()
    configure_logging(settings.log_level)
    orchestrator = build_orchestrator(settings)

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
    ) as progress:
        task = progress.add_task("Loading embedding model...", total=None)

        try:
            await orchestrator.initialize_model()
            progress.update(task, description="Searching...")
            outcome = await orchestrator.run(query, notes=notes, location=location)
        except VibeSearchError as e:
            console.print(f"[red]Error:[/red] {e.message}")
            raise typer.Exit(1)
        finally:
            await orchestrator.place_search.close()

    console.print(f"\n[yellow]Query:[/yellow] {outcome.query}")
    if outcome.contextual_query:
        console.print(f"[dim]Contextual: {outcome.contextual_query}[/dim]")
    if outcome.used_fallback:
        console.print("[dim]No contextual matches; used the literal query[/dim]")
    console.print()

    if not outcome.results:
        console.print("[yellow]No places found[/yellow]")
        return

    table = Table(title="Ranked Places")
    table.add_column("#", style="dim")
    table.add_column("Name", style="cyan")
    table.add_column("Address")
    table.add_column("Rating", justify="right")
    table.add_column("Score", style="green", justify="right")

    for i, place in enumerate(outcome.results, 1):
        table.add_row(
            str(i),
            place.name,
            place.formatted_address,
            f"{place.rating:.1f}" if place.rating is not None else "-",
            f"{place.similarity_score:.3f}" if place.similarity_score is not None else "-",
        )

    console.print(table)

    best = outcome.best_match
    if best is not None:
        console.print(
            Panel(
                f"[bold]{best.name}[/bold]\n{best.description}\n{best.formatted_address}",
                title="Best Match",
            )
        )


@app.command()
def enhance(
    query: str = typer.Argument(..., help="Vibe query"),
    notes: str = typer.Option("", "--notes", "-n", help="Surrounding note text"),
    location: str | None = typer.Option(None, "--location", "-l", help="User location"),
) -> None:
    """Show how a query is expanded before search."""
    from vibesearch.domains.keywords import QueryEnhancer

    breakdown = QueryEnhancer().breakdown(query, notes=notes, user_location=location)

    table = Table(title="Query Breakdown")
    table.add_column("Stage", style="cyan")
    table.add_column("Output", style="green")

    table.add_row("Ambiance terms", breakdown.ambiance_terms)
    table.add_row("Location context", breakdown.location_context or "-")
    table.add_row("Note keywords", ", ".join(breakdown.keywords) or "-")
    table.add_row("Contextual query", breakdown.contextual_query)
    table.add_row("Place location", breakdown.place_query.location or "-")
    table.add_row("Place category", breakdown.place_query.category or "-")
    table.add_row("Place term", breakdown.place_query.search_term)

    console.print(table)


@app.command()
def serve(
    host: str | None = typer.Option(None, "--host", "-h", help="Host to bind"),
    port: int | None = typer.Option(None, "--port", "-p", help="Port to bind"),
    reload: bool = typer.Option(False, "--reload", "-r", help="Enable auto-reload"),
) -> None:
    """Start the API server."""
    import uvicorn

    from vibesearch.config import get_settings

    settings = get_settings()
    host = host or settings.api_host
    port = port or settings.api_port

    console.print(f"[green]Starting VibeSearch API on {host}:{port}[/green]")
    uvicorn.run(
        "vibesearch.interfaces.api.main:app",
        host=host,
        port=port,
        reload=reload,
    )


@app.command()
def version() -> None:
    """Show version information."""
    console.print(f"[bold]VibeSearch[/bold] version {__version__}")


def main() -> None:
    """CLI entry point."""
    app()


if __name__ == "__main__":
    main()
