"""
jobmatch Command Line Interface

Runs the matching engine against MongoDB, or against a JSON fixture
file with ``--data``, and renders the results as tables.
"""

import json
from pathlib import Path
from typing import Optional

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from jobmatch.core.exceptions import MatchingError
from jobmatch.core.matching import MatchingEngine, create_matching_engine
from jobmatch.data.models import (
    AdvancedMatchFilters,
    AdvancedMatchOptions,
    JobMatch,
    RecommendationPreferences,
)
from jobmatch.utils.constants import JobType, SortMode, WorkMode

app = typer.Typer(
    name="jobmatch",
    help="Candidate-job matching engine CLI",
    add_completion=False,
)
console = Console()

DATA_OPTION = typer.Option(
    None,
    "--data",
    "-d",
    help="JSON file with 'profiles' and 'jobs' to use instead of MongoDB",
)


@app.callback()
def main() -> None:
    """Configure logging before any command runs."""
    from jobmatch.utils.logger import setup_logging

    setup_logging()


def _score_style(score: int) -> str:
    if score >= 90:
        return "green"
    elif score >= 70:
        return "cyan"
    elif score >= 50:
        return "yellow"
    return "red"


def _build_engine(data: Optional[Path]) -> MatchingEngine:
    """Create an engine over the fixture file or the configured database."""
    if data is not None:
        from jobmatch.data.repositories import load_memory_stores

        try:
            profile_store, job_store = load_memory_stores(data)
        except FileNotFoundError as e:
            console.print(f"[red]Error: {e}[/red]")
            raise typer.Exit(1)
        except (json.JSONDecodeError, ValidationError) as e:
            console.print(f"[red]Error: Invalid data file {data}[/red]")
            console.print(f"[dim]{escape(str(e))}[/dim]")
            raise typer.Exit(1)
        return create_matching_engine(profile_store, job_store)

    from jobmatch.data.database import get_database_manager

    if not get_database_manager().check_connection():
        console.print("[red]Error: Could not connect to MongoDB.[/red]")
        console.print("[dim]Check the DB_* settings or pass --data with a JSON file.[/dim]")
        raise typer.Exit(1)
    return create_matching_engine()


def _print_job_matches(title: str, matches: list[JobMatch], show_reasons: bool) -> None:
    if not matches:
        console.print("[yellow]No matching jobs found.[/yellow]")
        return

    table = Table(title=f"{title} ({len(matches)})")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Job ID", style="dim")
    table.add_column("Title", style="cyan")
    table.add_column("Organization")
    table.add_column("Type")
    table.add_column("Mode")
    table.add_column("Score", justify="right")

    for rank, match in enumerate(matches, start=1):
        style = _score_style(match.score)
        table.add_row(
            str(rank),
            match.job_id,
            match.title,
            match.organization,
            match.type,
            match.work_mode,
            f"[{style}]{match.score}[/{style}]",
        )

    console.print(table)

    if show_reasons:
        for match in matches:
            console.print(f"\n[bold]{match.title}[/bold] ({match.score})")
            for reason in match.reasons:
                console.print(f"  • {reason}")


@app.command()
def version():
    """Show application version."""
    from jobmatch import __app_name__, __version__

    console.print(f"[bold blue]{__app_name__}[/bold blue] version [green]{__version__}[/green]")


@app.command()
def info():
    """Show configuration."""
    from jobmatch.utils.config import get_settings

    settings = get_settings()

    table = Table(title="jobmatch Configuration")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="green")

    table.add_row("Environment", settings.environment)
    table.add_row("Debug Mode", str(settings.debug))
    table.add_row("Database Host", settings.database.host)
    table.add_row("Database Name", settings.database.name)
    table.add_row("Profiles Collection", settings.database.profiles_collection)
    table.add_row("Jobs Collection", settings.database.jobs_collection)
    table.add_row("Min Match Score", str(settings.matching.min_match_score))
    table.add_row("Max Recommendations", str(settings.matching.max_recommendations))
    table.add_row("Log Level", settings.logging.level)

    console.print(table)


@app.command()
def init_db():
    """Create the indexes used by the matching queries."""
    from jobmatch.data.database import get_database_manager

    console.print("[yellow]Initializing database indexes...[/yellow]")

    db_manager = get_database_manager()
    if not db_manager.check_connection():
        console.print("[red]Error: Could not connect to MongoDB.[/red]")
        raise typer.Exit(1)

    db_manager.ensure_indexes()
    console.print("[green]Indexes created successfully![/green]")


@app.command()
def recommend(
    profile_id: str = typer.Argument(..., help="Candidate profile ID"),
    job_type: Optional[list[JobType]] = typer.Option(None, "--job-type", "-t", help="Preferred job type (repeatable)"),
    work_mode: Optional[list[WorkMode]] = typer.Option(None, "--work-mode", "-w", help="Preferred work mode (repeatable)"),
    min_score: Optional[int] = typer.Option(None, "--min-score", help="Minimum match score"),
    max_results: Optional[int] = typer.Option(None, "--max-results", "-n", help="Maximum recommendations"),
    reasons: bool = typer.Option(False, "--reasons", "-r", help="Show match reasons"),
    data: Optional[Path] = DATA_OPTION,
):
    """Recommend open jobs for a candidate."""
    engine = _build_engine(data)
    preferences = RecommendationPreferences(
        job_types=job_type or [],
        work_modes=work_mode or [],
        min_score=min_score,
        max_results=max_results,
    )

    try:
        matches = engine.recommend_jobs_for_user(profile_id, preferences)
    except MatchingError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    _print_job_matches("Recommended Jobs", matches, reasons)


@app.command()
def matching_jobs(
    profile_id: str = typer.Argument(..., help="Candidate profile ID"),
    limit: Optional[int] = typer.Option(None, "--limit", "-l", help="Maximum number of jobs"),
    reasons: bool = typer.Option(False, "--reasons", "-r", help="Show match reasons"),
    data: Optional[Path] = DATA_OPTION,
):
    """List every active job with a non-zero score for a candidate."""
    engine = _build_engine(data)

    try:
        matches = engine.find_matching_jobs_for_user(profile_id, limit)
    except MatchingError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    _print_job_matches("Matching Jobs", matches, reasons)


@app.command()
def match_users(
    job_id: str = typer.Argument(..., help="Job listing ID"),
    max_results: Optional[int] = typer.Option(None, "--max-results", "-n", help="Maximum candidates"),
    data: Optional[Path] = DATA_OPTION,
):
    """Rank the candidates who qualify for a job."""
    engine = _build_engine(data)

    try:
        matches = engine.match_users_for_job(job_id, max_results)
    except MatchingError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    if not matches:
        console.print("[yellow]No qualifying candidates found.[/yellow]")
        raise typer.Exit(0)

    table = Table(title=f"Qualifying Candidates ({len(matches)})")
    table.add_column("#", justify="right", style="dim")
    table.add_column("User ID", style="dim")
    table.add_column("Name", style="cyan")
    table.add_column("Qualification")
    table.add_column("Stream")
    table.add_column("Year", justify="right")
    table.add_column("CGPA", justify="right")
    table.add_column("Score", justify="right")

    for rank, match in enumerate(matches, start=1):
        style = _score_style(match.score)
        summary = match.profile
        table.add_row(
            str(rank),
            match.user_id,
            match.name or "-",
            summary.qualification,
            summary.stream,
            str(summary.graduation_year or "-"),
            f"{summary.gpa:g}" if summary.gpa is not None else "-",
            f"[{style}]{match.score}[/{style}]",
        )

    console.print(table)


@app.command()
def advanced(
    profile_id: str = typer.Argument(..., help="Candidate profile ID"),
    job_type: Optional[list[JobType]] = typer.Option(None, "--job-type", "-t", help="Job type filter (repeatable)"),
    work_mode: Optional[list[WorkMode]] = typer.Option(None, "--work-mode", "-w", help="Work mode filter (repeatable)"),
    qualification: Optional[list[str]] = typer.Option(None, "--qualification", "-q", help="Qualification filter (repeatable)"),
    stream: Optional[list[str]] = typer.Option(None, "--stream", "-s", help="Stream filter (repeatable)"),
    min_salary: Optional[float] = typer.Option(None, "--min-salary", help="Minimum numeric salary"),
    max_salary: Optional[float] = typer.Option(None, "--max-salary", help="Maximum numeric salary"),
    sort_by: SortMode = typer.Option(SortMode.RELEVANCE, "--sort-by", help="Result ordering"),
    limit: Optional[int] = typer.Option(None, "--limit", "-l", help="Page size"),
    offset: int = typer.Option(0, "--offset", help="Page offset"),
    data: Optional[Path] = DATA_OPTION,
):
    """Filtered job matching with bonus scoring and sort modes."""
    engine = _build_engine(data)
    filters = AdvancedMatchFilters(
        job_types=job_type or [],
        work_modes=work_mode or [],
        qualifications=qualification or [],
        streams=stream or [],
        min_salary=min_salary,
        max_salary=max_salary,
    )
    options = AdvancedMatchOptions(limit=limit, offset=offset, sort_by=sort_by)

    try:
        matches = engine.advanced_match(profile_id, filters, options)
    except MatchingError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    if not matches:
        console.print("[yellow]No matching jobs found.[/yellow]")
        raise typer.Exit(0)

    table = Table(title=f"Advanced Matches ({len(matches)}, sorted by {sort_by.value})")
    table.add_column("Job ID", style="dim")
    table.add_column("Title", style="cyan")
    table.add_column("Organization")
    table.add_column("Pay")
    table.add_column("Base", justify="right")
    table.add_column("Advanced", justify="right")
    table.add_column("Highlights")

    for match in matches:
        style = _score_style(match.advanced_match_score)
        table.add_row(
            match.job_id,
            match.title,
            match.organization,
            match.salary or match.stipend or "-",
            str(match.base_match_score),
            f"[{style}]{match.advanced_match_score}[/{style}]",
            ", ".join(reason.type for reason in match.match_reasons) or "-",
        )

    console.print(table)


@app.command()
def stats(
    data: Optional[Path] = DATA_OPTION,
):
    """Show profile population statistics."""
    engine = _build_engine(data)
    statistics = engine.matching_statistics()

    console.print("[bold cyan]Matching Statistics[/bold cyan]")
    console.print(f"[dim]{'─' * 50}[/dim]")

    table = Table(title="Counts")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right", style="green")

    table.add_row("Profiles", str(statistics.total_users))
    table.add_row("Active Jobs", str(statistics.total_jobs))
    table.add_row("Average Match Score", f"{statistics.average_match_score:g}")
    table.add_row("Efficiency", statistics.matching_efficiency)

    console.print(table)

    if statistics.top_qualifications:
        console.print("\n[bold]Top Qualifications:[/bold]")
        for entry in statistics.top_qualifications:
            console.print(f"  {entry.value}: {entry.count}")

    if statistics.top_streams:
        console.print("\n[bold]Top Streams:[/bold]")
        for entry in statistics.top_streams:
            console.print(f"  {entry.value}: {entry.count}")


if __name__ == "__main__":
    app()
