"""
Main CLI application using Typer.
"""

import json
import logging
import os
from pathlib import Path
from typing import Annotated, NoReturn, Optional

import pendulum
import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table
from rich.panel import Panel

from ..adapters.mock_calendly_client import MockCalendlyClient
from ..config import API_TOKEN_ENV_VAR, AppConfig, get_default_config_path
from ..domain.clock import Clock, FixedClock, SystemClock, current_time
from ..domain.exceptions import SlotBrokerError
from ..services.booking_service import BookingService
from ..services.function_calls import FunctionCallHandler

app = typer.Typer(
    name="slotbroker",
    help="Check Calendly availability the way the voice assistant does",
    add_completion=False
)

console = Console()

ConfigOption = Annotated[Optional[Path], typer.Option("--config", "-c", help="Path to config file. Defaults to ./config.yaml")]
MockOption = Annotated[bool, typer.Option("--mock", help="Use generated data instead of the Calendly API.")]
NowOption = Annotated[Optional[str], typer.Option("--now", help="Pretend the current time is this ISO-8601 instant.")]
VerboseOption = Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging.")]


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _load_config(config_file: Optional[Path]) -> AppConfig:
    """
    Load the YAML config. Without a file, defaults are used and the token
    comes from the environment.
    """
    config_path = config_file or get_default_config_path()
    if config_path.exists() or config_file is not None:
        return AppConfig.load_from_yaml(config_path)

    return AppConfig(api_token=os.environ.get(API_TOKEN_ENV_VAR, ""))


def _build_clock(config: AppConfig, now: Optional[str]) -> Clock:
    if not now:
        return SystemClock(config.timezone)

    try:
        instant = pendulum.parse(now, tz=config.timezone)
    except ValueError as e:
        console.print(f"[red]Could not parse --now value '{now}': {e}[/red]")
        raise typer.Exit(1)

    if not isinstance(instant, pendulum.DateTime):
        console.print(f"[red]Could not parse --now value '{now}': not a date and time[/red]")
        raise typer.Exit(1)

    return FixedClock(instant, timezone=config.timezone)


def _build(config_file: Optional[Path], mock: bool, now: Optional[str], verbose: bool) -> tuple[BookingService, Clock]:
    _configure_logging(verbose)
    config = _load_config(config_file)
    clock = _build_clock(config, now)
    client = MockCalendlyClient() if mock else config.build_client()

    if mock:
        console.print("[yellow]⚠  MOCK MODE: using generated availability[/yellow]\n")

    return config.build_service(client=client, clock=clock), clock


def _fail(error: Exception) -> NoReturn:
    console.print(f"[bold red]Error:[/bold red] {error}")
    raise typer.Exit(1)


@app.command()
def availability(
    event_type: Annotated[str, typer.Argument(help="Event type URI")],
    week_offset: Annotated[int, typer.Option("--week-offset", "-w", help="0 = current week, 1 = next week, ...")] = 0,
    config_file: ConfigOption = None,
    mock: MockOption = False,
    now: NowOption = None,
    verbose: VerboseOption = False,
):
    """
    Show which days of a week have morning or afternoon openings.

    Examples:

        slotbroker availability https://api.calendly.com/event_types/ABC
        slotbroker availability MOCK-30 --mock --week-offset 1
    """
    try:
        service, _ = _build(config_file, mock, now, verbose)
        overview = service.check_availability(event_type_id=event_type, week_offset=week_offset)
    except (SlotBrokerError, FileNotFoundError, ValueError) as e:
        _fail(e)

    readable = overview.date_range.readable()
    console.print(f"[bold cyan]🗓️  {readable['start']} – {readable['end']}[/bold cyan]\n")

    if not overview.summary:
        console.print("[yellow]⚠ No open times in that week.[/yellow]\n")
        return

    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("Day", style="bold yellow")
    table.add_column("Date", style="dim")
    table.add_column("Morning")
    table.add_column("Afternoon")

    for day_name, entry in overview.summary.items():
        row = entry.to_dict()
        table.add_row(day_name, row["date"], row["morning"], row["afternoon"])

    console.print(table)
    console.print()


@app.command()
def times(
    event_type: Annotated[str, typer.Argument(help="Event type URI")],
    date: Annotated[str, typer.Argument(help="Day to check (YYYY-MM-DD)")],
    period: Annotated[Optional[str], typer.Option("--period", "-p", help="morning or afternoon (default: afternoon)")] = None,
    config_file: ConfigOption = None,
    mock: MockOption = False,
    now: NowOption = None,
    verbose: VerboseOption = False,
):
    """
    List bookable start times on one day.
    """
    try:
        service, _ = _build(config_file, mock, now, verbose)
        slots = service.check_times(date=date, event_type_id=event_type, period=period)
    except (SlotBrokerError, FileNotFoundError, ValueError) as e:
        _fail(e)

    if not slots:
        console.print("[yellow]⚠ No open times for that day and period.[/yellow]\n")
        return

    console.print(f"[bold green]✓ {len(slots)} open time(s):[/bold green]\n")
    for slot in slots:
        console.print(f"  {slot.time}  [dim]{slot.scheduling_url}[/dim]")
    console.print()


@app.command()
def event_types(
    config_file: ConfigOption = None,
    mock: MockOption = False,
    verbose: VerboseOption = False,
):
    """
    List the bookable event types.
    """
    try:
        service, _ = _build(config_file, mock, None, verbose)
        listing = service.list_event_types()
    except (SlotBrokerError, FileNotFoundError, ValueError) as e:
        _fail(e)

    if not listing:
        console.print("[yellow]No event types found.[/yellow]")
        return

    table = Table(
        title="Event types",
        show_header=True,
        header_style="bold cyan"
    )
    table.add_column("Name", style="bold yellow")
    table.add_column("Minutes", justify="right")
    table.add_column("URI", style="dim")

    for event_type in listing:
        table.add_row(event_type.name, str(event_type.duration_minutes), event_type.id)

    console.print()
    console.print(table)
    console.print()


@app.command()
def call(
    name: Annotated[str, typer.Argument(help="Function name, e.g. checkAvailability")],
    parameters: Annotated[str, typer.Argument(help="Parameters as a JSON object")] = "{}",
    config_file: ConfigOption = None,
    mock: MockOption = False,
    now: NowOption = None,
    verbose: VerboseOption = False,
):
    """
    Run a voice-agent function call and print the JSON response.

    Example:

        slotbroker call checkTimes '{"date": "2024-05-15", "eventTypeUrl": "MOCK-30", "period": "morning"}' --mock
    """
    try:
        params = json.loads(parameters)
    except json.JSONDecodeError as e:
        _fail(ValueError(f"Parameters are not valid JSON: {e}"))

    try:
        service, clock = _build(config_file, mock, now, verbose)
    except (SlotBrokerError, FileNotFoundError, ValueError) as e:
        _fail(e)

    result = FunctionCallHandler(service, clock).handle(name, params)
    console.print_json(json.dumps(result))

    if not result.get("success"):
        raise typer.Exit(1)


@app.command("now")
def show_now(
    config_file: ConfigOption = None,
    now: NowOption = None,
):
    """
    Show the current time as the voice agent receives it.
    """
    try:
        config = _load_config(config_file)
    except (FileNotFoundError, ValueError) as e:
        _fail(e)

    snapshot = current_time(_build_clock(config, now))
    console.print(f"\n[bold]{snapshot.readable}[/bold] ({snapshot.timezone})")
    console.print(f"[dim]{snapshot.timestamp}[/dim]\n")


@app.command()
def test_connection(
    config_file: ConfigOption = None,
    verbose: VerboseOption = False,
):
    """
    Test the Calendly API token.
    """
    _configure_logging(verbose)
    try:
        config = _load_config(config_file)
        user_info = config.build_client().test_connection()
    except (SlotBrokerError, FileNotFoundError, ValueError) as e:
        console.print(f"\n[bold red]✗ Error:[/bold red] {e}\n")
        raise typer.Exit(1)

    console.print(Panel.fit(
        f"[bold green]✓ Connection successful![/bold green]\n\n"
        f"[bold]User:[/bold] {user_info.get('name', 'N/A')}\n"
        f"[bold]Email:[/bold] {user_info.get('email', 'N/A')}",
        title="✓ Connection test"
    ))
    console.print()


@app.command()
def version():
    """
    Show version information.
    """
    from .. import __version__
    console.print(f"\n[bold cyan]slotbroker[/bold cyan] version [bold]{__version__}[/bold]\n")


if __name__ == "__main__":
    app()
