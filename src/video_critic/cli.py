"""Command-line interface using Typer."""

import asyncio
import time
from pathlib import Path
from uuid import UUID

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from video_critic import __version__
from video_critic.domain.errors import VideoCriticError
from video_critic.logging import bind_submission, setup_logging

# Setup logging
setup_logging()

app = typer.Typer(
    name="video-critic",
    help="Video Critic - audience-specific AI video critiques",
    add_completion=False,
)

console = Console()

TERMINAL_STATUSES = ("completed", "failed")


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"Video Critic v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        None,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
) -> None:
    """Video Critic - score edit quality, pacing and retention risk."""
    pass


def _no_dispatch(submission_id: UUID) -> None:
    return None


def _orchestrator(inline: bool):
    from video_critic.services.orchestrator import AnalysisOrchestrator

    if inline:
        return AnalysisOrchestrator(dispatcher=_no_dispatch)
    return AnalysisOrchestrator()


def _submit(orchestrator, coro, inline: bool) -> UUID:
    """Run a submission, and the pipeline too when running inline."""

    async def _go() -> UUID:
        try:
            submission_id = await coro
            if inline:
                console.print("[dim]Running analysis in-process...[/dim]")
                with bind_submission(submission_id):
                    await orchestrator.run(submission_id)
            return submission_id
        finally:
            await orchestrator.close()

    try:
        return asyncio.run(_go())
    except VideoCriticError as e:
        console.print(f"[bold red]Error: {e.message}[/bold red]")
        raise typer.Exit(code=1)


def _wait_for(submission_id: UUID, timeout: int) -> None:
    from video_critic.db.session import get_session_context
    from video_critic.services import store

    deadline = time.monotonic() + timeout
    with console.status("Waiting for analysis..."):
        while time.monotonic() < deadline:
            with get_session_context() as session:
                submission = store.get_submission(session, submission_id)
                if submission is not None and submission.status in TERMINAL_STATUSES:
                    return
            time.sleep(2)
    console.print("[yellow]Timed out waiting; the analysis is still running.[/yellow]")


@app.command()
def analyze(
    url: str = typer.Argument(..., help="YouTube video URL"),
    audience: str = typer.Option(..., "--audience", "-a", help="Target audience segment"),
    wait: bool = typer.Option(False, "--wait", "-w", help="Wait for completion"),
    inline: bool = typer.Option(
        False, "--inline", help="Run the pipeline in this process instead of a worker"
    ),
    timeout: int = typer.Option(300, "--timeout", help="Seconds to wait with --wait"),
) -> None:
    """Submit a YouTube video for analysis."""
    orchestrator = _orchestrator(inline)
    submission_id = _submit(orchestrator, orchestrator.submit_youtube(url, audience), inline)
    console.print(f"[green]Analysis started: {submission_id}[/green]")

    if wait and not inline:
        _wait_for(submission_id, timeout)
    if wait or inline:
        _show_submission(submission_id)


@app.command()
def upload(
    path: Path = typer.Argument(..., exists=True, dir_okay=False, help="Video file"),
    audience: str = typer.Option(..., "--audience", "-a", help="Target audience segment"),
    inline: bool = typer.Option(
        False, "--inline", help="Run the pipeline in this process instead of a worker"
    ),
) -> None:
    """Submit a local video file for analysis."""
    orchestrator = _orchestrator(inline)
    submission_id = _submit(
        orchestrator,
        orchestrator.submit_upload(path.name, path.read_bytes(), audience),
        inline,
    )
    console.print(f"[green]Upload successful, analysis started: {submission_id}[/green]")
    if inline:
        _show_submission(submission_id)


def _show_submission(submission_id: UUID) -> bool:
    """Display a submission and its critique. False if it does not exist."""
    from video_critic.db.session import get_session_context
    from video_critic.services import store

    with get_session_context() as session:
        submission = store.get_submission(session, submission_id)
        if submission is None:
            return False

        console.print(f"\n[bold]{submission.title or 'Untitled'}[/bold]")
        console.print(f"[cyan]Source:[/cyan] {submission.youtube_url or submission.file_name}")
        console.print(f"[cyan]Audience:[/cyan] {submission.target_audience}")
        console.print(f"[cyan]Status:[/cyan] {submission.status}")
        if submission.error_message:
            console.print(f"[red]Error:[/red] {submission.error_message}")

        if submission.critique is None:
            return True
        result = store.critique_from_model(submission.critique)

    table = Table(title="Scores")
    table.add_column("Metric", style="cyan")
    table.add_column("Score", style="green")
    table.add_row("Overall", str(result.overall_score))
    table.add_row("Edit quality", str(result.edit_quality_score))
    table.add_row("Pacing", str(result.pacing_score))
    table.add_row("Retention", str(result.retention_score))
    console.print(table)

    console.print(Panel(result.overall_feedback, title="Feedback", border_style="cyan"))

    if result.risk_zones:
        zones = Table(title="Risk Zones")
        zones.add_column("From", style="dim")
        zones.add_column("To", style="dim")
        zones.add_column("Severity")
        zones.add_column("Issue")
        for zone in result.risk_zones:
            zones.add_row(
                f"{zone.timestamp:.0f}s",
                f"{zone.end_timestamp:.0f}s",
                str(zone.severity),
                zone.issue,
            )
        console.print(zones)

    if result.benchmark is not None:
        console.print(
            f"[cyan]Benchmark:[/cyan] {result.benchmark.performance_vs_benchmark}"
            f" ({result.benchmark.sample_size} videos)"
        )
        for insight in result.benchmark.insights:
            console.print(f"  - {insight}")

    for i, recommendation in enumerate(result.recommendations, 1):
        console.print(f"[dim]{i}.[/dim] {recommendation}")
    return True


@app.command()
def status(
    submission_id: str = typer.Argument(..., help="Submission ID"),
) -> None:
    """Show the status and critique of a submission."""
    try:
        parsed = UUID(submission_id)
    except ValueError:
        console.print(f"[bold red]Invalid submission ID: {submission_id}[/bold red]")
        raise typer.Exit(code=1)

    if not _show_submission(parsed):
        console.print(f"[bold red]Submission not found: {submission_id}[/bold red]")
        raise typer.Exit(code=1)


@app.command()
def audiences() -> None:
    """List the target audience profiles."""
    from video_critic.services.critique import AUDIENCE_PROFILES

    for audience, profile in AUDIENCE_PROFILES.items():
        console.print(Panel.fit(
            f"[bold]{profile.name}[/bold]\n\n"
            f"{profile.characteristics}\n\n"
            f"[cyan]Preferences:[/cyan] {profile.preferences}\n"
            f"[cyan]Retention Keys:[/cyan] {profile.retention_keys}",
            title=str(audience),
            border_style="cyan",
        ))
        console.print()


@app.command()
def health() -> None:
    """Check the health of all services."""
    import httpx

    from video_critic.config import settings

    url = f"http://{settings.api_host}:{settings.api_port}/health/ready"

    try:
        response = httpx.get(url, timeout=10)
        data = response.json()

        table = Table(title="Service Health")
        table.add_column("Component", style="cyan")
        table.add_column("Status")

        table.add_row("Database", "✓" if data.get("database") else "✗")
        table.add_row("Redis", "✓" if data.get("redis") else "✗")

        for component, configured in (data.get("credentials") or {}).items():
            table.add_row(f"{component} key", "✓" if configured else "✗")

        console.print(table)

        if data.get("ready"):
            console.print("[bold green]All services healthy![/bold green]")
        else:
            console.print("[bold yellow]Some services unhealthy[/bold yellow]")
            raise typer.Exit(code=1)

    except httpx.RequestError as e:
        console.print(f"[bold red]Cannot connect to API: {e}[/bold red]")
        console.print("[dim]Is the API server running?[/dim]")
        raise typer.Exit(code=1)


@app.command()
def worker() -> None:
    """Start a Celery worker (for development)."""
    console.print("[bold blue]Starting Celery worker...[/bold blue]")

    import subprocess
    import sys

    subprocess.run(
        [
            sys.executable, "-m", "celery", "-A", "video_critic.worker", "worker",
            "-Q", "analysis,default", "--loglevel=info",
        ],
        check=True,
    )


@app.command()
def serve() -> None:
    """Start the API server."""
    import uvicorn

    from video_critic.config import settings

    uvicorn.run(
        "video_critic.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_reload,
    )


if __name__ == "__main__":
    app()
