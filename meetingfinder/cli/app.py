"""
Main CLI application using Typer.
"""

from pathlib import Path
from typing import List, Optional, Annotated

import pendulum
import typer
from rich.console import Console
from rich.table import Table

from ..config import AppConfig, get_default_config_path
from ..domain.exceptions import MeetingFinderError
from ..adapters.calendar_file import CalendarFileSource
from ..logging_config import setup_logging
from ..services.meeting_finder import MeetingFinderService

app = typer.Typer(
    name="meetingfinder",
    help="Find free meeting times within a day from a calendar export",
    add_completion=False
)

console = Console()


def _parse_day(day_option: Optional[str]):
    """Parse the --date option, defaulting to today."""
    if not day_option:
        return pendulum.today().date()

    try:
        return pendulum.from_format(day_option, "YYYY-MM-DD").date()
    except ValueError as e:
        console.print(f"[red]Fehler beim Parsen des Datums: {e}[/red]")
        raise typer.Exit(1)


@app.command()
def find(
    attendees: Annotated[List[str], typer.Argument(help="Pflicht-Teilnehmer (Namen oder E-Mail-Adressen)")],
    optional: Annotated[Optional[List[str]], typer.Option("--optional", "-o", help="Optionale Teilnehmer (mehrfach verwendbar)")] = None,
    day: Annotated[Optional[str], typer.Option("--date", help="Tag (YYYY-MM-DD), Standard: heute")] = None,
    duration: Annotated[Optional[int], typer.Option("--duration", "-d", help="Meeting duration in minutes")] = None,
    config_file: Annotated[Optional[Path], typer.Option("--config", "-c", help="Path to config file. Defaults to ./config.yaml")] = None,
    calendar_file: Annotated[Optional[Path], typer.Option("--calendar", help="Kalender-Datei (überschreibt die Config)")] = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Debug-Ausgaben anzeigen")] = False,
):
    """
    Find free meeting times on a single day.

    Examples:

        meetingfinder find alice bob

        meetingfinder find alice --optional bob --duration 60 --date 2024-11-25

        meetingfinder find alice@example.com --calendar ./calendar.json
    """
    try:
        config_path = config_file or get_default_config_path()
        config = AppConfig.load_from_yaml(config_path)
        setup_logging("DEBUG" if verbose else config.log_level)

        target_day = _parse_day(day)
        min_duration = duration if duration is not None else config.defaults.duration_minutes

        mandatory_emails = config.resolve_attendees(attendees)
        optional_emails = [
            email for email in config.resolve_attendees(optional or [])
            if email not in mandatory_emails
        ]

        console.print("[bold cyan]📊 Zusammenfassung:[/bold cyan]")
        console.print(f"   Teilnehmer: {', '.join(mandatory_emails)}")
        if optional_emails:
            console.print(f"   Optional: {', '.join(optional_emails)}")
        console.print(f"   Tag: {target_day.strftime('%d.%m.%Y')}")
        console.print(f"   Mindestdauer: {min_duration} Minuten")
        console.print()

        source = CalendarFileSource(calendar_file or config.calendar_file, config=config)
        service = MeetingFinderService(event_source=source)

        slots = service.find_times(
            day=target_day,
            attendees=mandatory_emails,
            optional_attendees=optional_emails,
            duration_minutes=min_duration,
        )

        if not slots:
            console.print(
                "[yellow]⚠ Keine verfügbaren Zeitslots gefunden.[/yellow]\n"
                "Versuchen Sie eine kürzere Mindestdauer oder einen anderen Tag."
            )
        else:
            console.print(f"[bold green]✓ {len(slots)} verfügbare Zeitslot(s) gefunden:[/bold green]\n")

            for slot in slots:
                console.print(f"  {slot.format_display()}")

        console.print()

    except FileNotFoundError as e:
        console.print(f"[bold red]Fehler:[/bold red] {e}")
        raise typer.Exit(1)

    except (MeetingFinderError, ValueError) as e:
        console.print(f"[bold red]Fehler:[/bold red] {e}")
        raise typer.Exit(1)


@app.command()
def list_colleagues(
    config_file: Optional[Path] = typer.Option(
        None,
        "--config", "-c",
        help="Path to config file"
    )
):
    """
    List all configured colleagues.
    """
    try:
        config_path = config_file or get_default_config_path()
        config = AppConfig.load_from_yaml(config_path)

        if not config.colleagues:
            console.print("[yellow]Keine Kollegen in der Config-Datei definiert.[/yellow]")
            return

        table = Table(
            title="Konfigurierte Kollegen",
            show_header=True,
            header_style="bold cyan"
        )
        table.add_column("Name (Alias)", style="bold yellow")
        table.add_column("E-Mail", style="dim")
        table.add_column("Kalender-ID", style="dim")

        for colleague in config.colleagues:
            table.add_row(
                colleague.name,
                colleague.email,
                colleague.calendar_id or "-"
            )

        console.print()
        console.print(table)
        console.print()

    except (FileNotFoundError, ValueError) as e:
        console.print(f"[bold red]Fehler:[/bold red] {e}")
        raise typer.Exit(1)


@app.command()
def version():
    """
    Show version information.
    """
    from .. import __version__
    console.print(f"\n[bold cyan]meetingfinder[/bold cyan] version [bold]{__version__}[/bold]\n")


if __name__ == "__main__":
    app()
