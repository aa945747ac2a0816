"""
Resume Insight Command Line Interface

Provides CLI commands for database setup, offline parsing of resume files,
and running or inspecting extractions stored in MongoDB.
"""

import hashlib
import json
import mimetypes
import shutil
import uuid
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from resume_insight.utils.constants import ParserStrategy

app = typer.Typer(
    name="resume-insight",
    help="Resume extraction pipeline CLI",
    add_completion=False,
)
console = Console()


def _print_profile(profile) -> None:
    """Render an extracted profile as rich tables."""
    table = Table(title="Extracted Profile", show_header=False)
    table.add_column("Field", style="cyan")
    table.add_column("Value", style="green")

    identity = profile.identity
    table.add_row("Name", identity.full_name or "-")
    table.add_row("Email", identity.email or "-")
    table.add_row("Phone", identity.phone or "-")
    table.add_row("Location", profile.location or "-")
    table.add_row("LinkedIn", profile.links.linkedin or "-")
    table.add_row("GitHub", profile.links.github or "-")
    table.add_row("Portfolio", profile.links.portfolio or "-")
    table.add_row("Experience", f"{profile.metadata.total_experience_years} years")
    table.add_row("Current Role", profile.metadata.current_role or "-")
    if identity.summary:
        table.add_row("Summary", identity.summary[:200])
    console.print(table)

    if profile.skills.categories:
        skills = Table(title="Skills")
        skills.add_column("Category", style="cyan")
        skills.add_column("Skills")
        for category, items in profile.skills.categories.items():
            skills.add_row(category, ", ".join(items))
        console.print(skills)

    if profile.experience:
        experience = Table(title="Experience")
        experience.add_column("Position", style="cyan")
        experience.add_column("Company")
        experience.add_column("Duration", style="dim")
        for entry in profile.experience:
            experience.add_row(entry.position, entry.company, entry.duration)
        console.print(experience)

    if profile.education:
        education = Table(title="Education")
        education.add_column("Degree", style="cyan")
        education.add_column("Institution")
        education.add_column("Year", style="dim")
        for entry in profile.education:
            education.add_row(entry.degree, entry.institution or "-", entry.year or "-")
        console.print(education)

    if profile.projects:
        console.print(f"\n[bold]Projects:[/bold] {', '.join(p.name for p in profile.projects)}")
    if profile.certifications:
        console.print(f"[bold]Certifications:[/bold] {len(profile.certifications)}")
    if profile.achievements:
        console.print(f"[bold]Achievements:[/bold] {len(profile.achievements)}")


def _print_snapshot(snapshot) -> None:
    colors = {"completed": "green", "failed": "red", "processing": "yellow", "pending": "dim"}
    status = snapshot.status.value if hasattr(snapshot.status, "value") else snapshot.status
    console.print(
        f"Resume [cyan]{snapshot.resume_id}[/cyan]: "
        f"[{colors.get(status, 'white')}]{status}[/{colors.get(status, 'white')}]"
    )
    if snapshot.error_message:
        console.print(f"  [red]{snapshot.error_message}[/red]")
    if snapshot.extracted_at:
        console.print(f"  [dim]Extracted at {snapshot.extracted_at:%Y-%m-%d %H:%M:%S}[/dim]")
    if snapshot.profile is not None:
        _print_profile(snapshot.profile)


@app.command()
def version():
    """Show application version."""
    from resume_insight import __version__, __app_name__

    console.print(f"[bold blue]{__app_name__}[/bold blue] version [green]{__version__}[/green]")


@app.command()
def info():
    """Show system information and configuration."""
    from resume_insight.utils.config import get_settings

    settings = get_settings()

    table = Table(title="Resume Insight Configuration")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="green")

    table.add_row("Environment", settings.environment)
    table.add_row("Debug Mode", str(settings.debug))
    table.add_row("Database Host", settings.database.host)
    table.add_row("Database Name", settings.database.name)
    table.add_row("Default Strategy", settings.extraction.default_strategy)
    table.add_row("Worker Threads", str(settings.extraction.max_workers))
    table.add_row("Upload Directory", str(settings.extraction.upload_dir))
    table.add_row("Profile Enhancement", settings.extraction.enhancement_mode if settings.extraction.enhance_profile else "off")
    table.add_row("LLM Model", settings.llm.model)
    table.add_row("LLM Configured", str(settings.llm.is_configured))
    table.add_row("Log Level", settings.logging.level)

    console.print(table)


@app.command()
def init_db():
    """Initialize the database with required collections and indexes."""
    from resume_insight.data.database import get_database_manager

    console.print("[yellow]Initializing database...[/yellow]")

    try:
        db_manager = get_database_manager()

        console.print("  Checking database connection...")
        if not db_manager.check_connection():
            console.print("[red]Error: Could not connect to MongoDB.[/red]")
            console.print("[dim]Make sure MongoDB is running and connection settings are correct.[/dim]")
            raise typer.Exit(1)

        console.print("  [green]✓[/green] Connected to MongoDB")

        console.print("  Creating indexes...")
        db_manager.ensure_indexes()
        console.print("  [green]✓[/green] Indexes created")

        console.print("\n[green]Database initialized successfully![/green]")

    except typer.Exit:
        raise
    except Exception as e:
        console.print(f"[red]Error initializing database: {e}[/red]")
        raise typer.Exit(1)


@app.command()
def parse(
    path: Path = typer.Argument(..., help="Path to a resume file"),
    strategy: ParserStrategy = typer.Option(ParserStrategy.HEURISTIC, "--strategy", "-s", help="Parser strategy"),
    as_json: bool = typer.Option(False, "--json", help="Print the profile as JSON"),
):
    """Parse a local resume file without touching the database."""
    from resume_insight.core.exceptions import ExtractionError
    from resume_insight.ml.nlp import ExtractorFactory, get_heuristic_parser, get_llm_parser

    if not path.is_file():
        console.print(f"[red]Error: File does not exist: {path}[/red]")
        raise typer.Exit(1)

    result = ExtractorFactory.extract(path)
    if not result.success:
        console.print(f"[red]Error: {result.error_message}[/red]")
        raise typer.Exit(1)

    parser = get_llm_parser() if strategy == ParserStrategy.LLM else get_heuristic_parser()
    try:
        profile = parser.parse(result.text)
    except ExtractionError as e:
        console.print(f"[red]{e.error_type}: {e.message}[/red]")
        raise typer.Exit(1)

    if as_json:
        data = profile.model_dump(mode="json", exclude={"raw_text", "raw_llm_response"})
        console.print_json(json.dumps(data))
    else:
        _print_profile(profile)


@app.command()
def upload(
    path: Path = typer.Argument(..., help="Path to a resume file"),
    user_id: Optional[str] = typer.Option(None, "--user", "-u", help="Owner user ID"),
    strategy: Optional[ParserStrategy] = typer.Option(None, "--strategy", "-s", help="Parser strategy"),
):
    """Store a resume file, create its record and run the extraction."""
    from resume_insight.core.exceptions import ExtractionError
    from resume_insight.core.extraction import get_orchestrator
    from resume_insight.data.models import FileMetadata, Resume
    from resume_insight.data.repositories import get_resume_repository
    from resume_insight.utils.config import get_settings
    from resume_insight.utils.constants import SUPPORTED_RESUME_FORMATS

    if not path.is_file():
        console.print(f"[red]Error: File does not exist: {path}[/red]")
        raise typer.Exit(1)
    if path.suffix.lower() not in SUPPORTED_RESUME_FORMATS:
        console.print(f"[red]Error: Unsupported file format: {path.suffix}[/red]")
        console.print(f"[dim]Supported formats: {', '.join(SUPPORTED_RESUME_FORMATS)}[/dim]")
        raise typer.Exit(1)

    settings = get_settings().extraction
    content = path.read_bytes()
    if len(content) > settings.max_file_size_bytes:
        console.print(f"[red]Error: File too large ({len(content)} bytes)[/red]")
        raise typer.Exit(1)

    storage_name = f"{uuid.uuid4().hex}{path.suffix.lower()}"
    settings.upload_dir.mkdir(parents=True, exist_ok=True)
    shutil.copyfile(path, settings.upload_dir / storage_name)

    resume = get_resume_repository().create(
        Resume(
            user_id=user_id,
            file=FileMetadata(
                original_filename=path.name,
                storage_path=storage_name,
                mime_type=mimetypes.guess_type(path.name)[0] or "application/octet-stream",
                file_size_bytes=len(content),
                file_hash=hashlib.sha256(content).hexdigest(),
            ),
        )
    )
    console.print(f"Created resume [cyan]{resume.id}[/cyan]")

    orchestrator = get_orchestrator()
    try:
        future = orchestrator.reprocess(resume.id, strategy or settings.default_strategy)
        _print_snapshot(future.result())
    except ExtractionError as e:
        console.print(f"[red]{e.error_type}: {e.message}[/red]")
        raise typer.Exit(1)
    finally:
        orchestrator.shutdown(wait=True)


@app.command()
def extract(
    resume_id: str = typer.Argument(..., help="Resume ID"),
    strategy: Optional[ParserStrategy] = typer.Option(None, "--strategy", "-s", help="Parser strategy"),
):
    """Run (or re-run) extraction for a stored resume and wait for the result."""
    from resume_insight.core.exceptions import ExtractionError
    from resume_insight.core.extraction import get_orchestrator

    orchestrator = get_orchestrator()
    try:
        if strategy is None:
            future = orchestrator.start_extraction(resume_id)
        else:
            future = orchestrator.reprocess(resume_id, strategy)
        console.print(f"[yellow]Extracting resume {resume_id}...[/yellow]")
        _print_snapshot(future.result())
    except ExtractionError as e:
        console.print(f"[red]{e.error_type}: {e.message}[/red]")
        raise typer.Exit(1)
    finally:
        orchestrator.shutdown(wait=True)


@app.command()
def status(
    resume_id: str = typer.Argument(..., help="Resume ID"),
):
    """Show the extraction status of a stored resume."""
    from resume_insight.core.exceptions import ExtractionError
    from resume_insight.core.extraction import get_orchestrator

    try:
        _print_snapshot(get_orchestrator().get_extraction(resume_id))
    except ExtractionError as e:
        console.print(f"[red]{e.error_type}: {e.message}[/red]")
        raise typer.Exit(1)


@app.command()
def search(
    skills: Optional[list[str]] = typer.Option(None, "--skill", "-k", help="Required skill (repeatable)"),
    min_experience: Optional[float] = typer.Option(None, "--min-years", help="Minimum years of experience"),
    max_experience: Optional[float] = typer.Option(None, "--max-years", help="Maximum years of experience"),
    location: Optional[str] = typer.Option(None, "--location", "-l", help="Location substring"),
    limit: int = typer.Option(20, "--limit", "-n", help="Maximum number of results"),
):
    """Search completed resumes by skills, experience and location."""
    from resume_insight.data.repositories import get_resume_repository

    results = get_resume_repository().search(
        skills=skills,
        min_experience=min_experience,
        max_experience=max_experience,
        location=location,
        limit=limit,
    )
    if not results:
        console.print("[yellow]No matching resumes.[/yellow]")
        raise typer.Exit(0)

    table = Table(title=f"Resumes ({len(results)})")
    table.add_column("ID", style="dim")
    table.add_column("Name", style="cyan")
    table.add_column("Years", justify="right")
    table.add_column("Location")
    table.add_column("Skills")
    for resume in results:
        table.add_row(
            str(resume.id),
            resume.extracted_data.identity.full_name or "-",
            f"{resume.experience_years:.1f}",
            resume.location or "-",
            ", ".join(resume.skills[:8]),
        )
    console.print(table)


if __name__ == "__main__":
    app()
