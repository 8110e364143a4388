"""
Command-line interface for GitGrade.
"""

import asyncio
import json

import typer
from rich.console import Console
from rich.table import Table

from gitgrade.config import set_model, set_request_timeout, set_verify_ssl
from gitgrade.dimensions import DIMENSION_SPECS
from gitgrade.errors import GitGradeError
from gitgrade.fetcher import ContentFetcher
from gitgrade.http_client import close_http_client
from gitgrade.models import AnalysisResult, Badge, ContentSnapshot, Priority
from gitgrade.pipeline import analyze_repository_sync
from gitgrade.repository import parse_repository_url

# --- Typer App ---
app = typer.Typer(help="Grade a public repository and get an improvement roadmap.")
console = Console()

BADGE_STYLES = {
    Badge.GOLD: "bold yellow",
    Badge.SILVER: "bold white",
    Badge.BRONZE: "bold dark_orange3",
}

PRIORITY_STYLES = {
    Priority.HIGH: "red",
    Priority.MEDIUM: "yellow",
    Priority.LOW: "green",
}

# --- Helper Functions ---


def _score_color(score: int) -> str:
    if score < 50:
        return "red"
    if score < 80:
        return "yellow"
    return "green"


def display_result(result: AnalysisResult, verbose: bool = False) -> None:
    """Display an analysis result as a score card, summary and roadmap."""
    verdict = result.score
    color = _score_color(verdict.numerical_score)
    badge_style = BADGE_STYLES[verdict.badge]

    console.print(f"\n📦 [bold cyan]{result.repo_url}[/bold cyan]")
    console.print(
        f"   Score: [{color}]{verdict.numerical_score}/100[/{color}]  "
        f"Level: [bold]{verdict.skill_level.value}[/bold]  "
        f"Badge: [{badge_style}]{verdict.badge.value}[/{badge_style}]"
    )

    if verbose:
        dimensions_table = Table(show_header=True, header_style="bold magenta")
        dimensions_table.add_column("Dimension", style="cyan", no_wrap=True)
        dimensions_table.add_column("Score", justify="center")
        for spec in DIMENSION_SPECS:
            value = getattr(result.analysis, spec.field)
            value_color = _score_color(value)
            dimensions_table.add_row(
                spec.label, f"[{value_color}]{value}[/{value_color}]"
            )
        console.print(dimensions_table)

    console.print("\n[bold cyan]Summary[/bold cyan]")
    console.print(f"   {result.summary}")

    roadmap_table = Table(
        title="Improvement Roadmap", show_header=True, header_style="bold magenta"
    )
    roadmap_table.add_column("#", justify="right", style="dim")
    roadmap_table.add_column("Step", justify="left")
    roadmap_table.add_column("Priority", justify="center")
    roadmap_table.add_column("Effort", justify="left", style="cyan")
    for index, step in enumerate(result.roadmap, start=1):
        style = PRIORITY_STYLES[step.priority]
        roadmap_table.add_row(
            str(index),
            step.step,
            f"[{style}]{step.priority.value}[/{style}]",
            step.effort_estimate,
        )
    console.print(roadmap_table)


def display_snapshot(repo: str, snapshot: ContentSnapshot) -> None:
    """Display what was gathered for a repository."""
    table = Table(title=f"Content snapshot: {repo}", show_header=True, header_style="bold magenta")
    table.add_column("Artifact", style="cyan", no_wrap=True)
    table.add_column("Status", justify="left")

    def _status(present: bool, detail: str) -> str:
        return f"[green]{detail}[/green]" if present else "[yellow]unavailable[/yellow]"

    table.add_row(
        "README",
        _status(
            snapshot.readme is not None,
            f"{len(snapshot.readme or '')} characters",
        ),
    )
    table.add_row(
        "Manifest",
        _status(snapshot.manifest is not None, snapshot.manifest_path or ""),
    )
    table.add_row(
        "File tree",
        _status(
            snapshot.file_tree is not None,
            f"{len(snapshot.file_tree or ())} files",
        ),
    )
    console.print(table)


def _apply_options(insecure: bool, timeout: float | None, model: str | None) -> None:
    set_verify_ssl(not insecure)
    if timeout is not None:
        try:
            set_request_timeout(timeout)
        except ValueError as e:
            console.print(f"[red]Error: {e}[/red]")
            raise typer.Exit(code=1) from e
    if model:
        set_model(model)


@app.command()
def analyze(
    repo_url: str = typer.Argument(
        ...,
        help="Repository URL, e.g. https://github.com/owner/repo.",
    ),
    output_json: bool = typer.Option(
        False,
        "--json",
        help="Print the result as JSON instead of tables.",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Display the score of every dimension.",
    ),
    insecure: bool = typer.Option(
        False,
        "--insecure",
        help="Disable SSL certificate verification for HTTPS requests.",
    ),
    timeout: float | None = typer.Option(
        None,
        "--timeout",
        help="Timeout in seconds for each external call (default: 30).",
    ),
    model: str | None = typer.Option(
        None,
        "--model",
        help="Generation model name (default: gpt-4o-mini).",
    ),
):
    """Grade a repository and print its score, summary and roadmap."""
    _apply_options(insecure, timeout, model)

    try:
        result = analyze_repository_sync(repo_url)
    except GitGradeError as e:
        console.print(f"[red]Analysis failed ({e.kind.value}): {e}[/red]")
        raise typer.Exit(code=1) from e

    if output_json:
        typer.echo(json.dumps(result.to_dict(), indent=2, ensure_ascii=False))
    else:
        display_result(result, verbose=verbose)


@app.command()
def snapshot(
    repo_url: str = typer.Argument(
        ...,
        help="Repository URL, e.g. https://github.com/owner/repo.",
    ),
    insecure: bool = typer.Option(
        False,
        "--insecure",
        help="Disable SSL certificate verification for HTTPS requests.",
    ),
    timeout: float | None = typer.Option(
        None,
        "--timeout",
        help="Timeout in seconds for each external call (default: 30).",
    ),
):
    """Show the repository content that analysis would be based on."""
    _apply_options(insecure, timeout, None)

    async def _fetch() -> ContentSnapshot:
        try:
            return await ContentFetcher().fetch(ref)
        finally:
            await close_http_client()

    try:
        ref = parse_repository_url(repo_url)
        content = asyncio.run(_fetch())
    except GitGradeError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(code=1) from e

    display_snapshot(str(ref), content)


if __name__ == "__main__":
    app()
