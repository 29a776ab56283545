# TIMETRACK/timetrack_app.py
import logging
from datetime import datetime, timezone
from functools import wraps
from pathlib import Path
from typing import Optional

import dateparser
import typer
from rich.console import Console
from rich.markup import escape

from ttcli.config import Settings
from ttcli.TIMETRACK.errors import InvalidTime, TrackerError
from ttcli.TIMETRACK.export import export_timeclock
from ttcli.TIMETRACK.running_log import list_running_entries, start_entry, stop_entry

logger = logging.getLogger(__name__)

err_console = Console(stderr=True)
timetrack_app = typer.Typer()


def utc_now() -> datetime:
    return datetime.now(timezone.utc).replace(microsecond=0)


def parse_time_arg(time_str: Optional[str]) -> datetime:
    """
    Resolve a ``--at`` value to a UTC timestamp, defaulting to now.
    ISO timestamps are tried first, then natural language ("10 minutes ago").
    Times without an offset are taken as local time.
    """
    if not time_str:
        return utc_now()
    try:
        parsed = datetime.fromisoformat(time_str)
    except ValueError:
        parsed = dateparser.parse(time_str)
        if parsed is None:
            raise InvalidTime(time_str)
    if parsed.tzinfo is None:
        parsed = parsed.astimezone()
    return parsed.astimezone(timezone.utc).replace(microsecond=0)


def get_duration_str(duration) -> str:
    total_seconds = int(duration.total_seconds())
    hours = total_seconds // 3600
    minutes = (total_seconds % 3600) // 60
    seconds = total_seconds % 60
    return f"{hours:02}:{minutes:02}:{seconds:02}"


def fail_loudly(command):
    """Turn tracker and I/O errors into a red message and exit code 1."""

    @wraps(command)
    def wrapper(*args, **kwargs):
        try:
            return command(*args, **kwargs)
        except (TrackerError, OSError) as exc:
            logger.debug("%s failed", command.__name__, exc_info=True)
            if isinstance(exc, OSError) and exc.filename:
                message = f"{exc.strerror}: {exc.filename}"
            else:
                message = str(exc)
            err_console.print(f"[bold red]Error:[/bold red] {escape(message)}", soft_wrap=True)
            raise typer.Exit(code=1)

    return wrapper


# --- Commands ---

@timetrack_app.command("export")
@fail_loudly
def export(ctx: typer.Context,
           output: Path = typer.Option(..., "--output", "-o", help="Timeclock file to write. Must not exist yet.")):
    """
    Export every completed entry in timeclock format.
    """
    settings: Settings = ctx.obj
    count = export_timeclock(settings.entries_file, output)
    err_console.print(f"Exported {count} entries to '[bold cyan]{escape(str(output))}[/bold cyan]'.", soft_wrap=True)


@timetrack_app.command("running")
@fail_loudly
def running(ctx: typer.Context):
    """
    Print all running entries, oldest first.
    """
    settings: Settings = ctx.obj
    for entry in list_running_entries(settings.running_file):
        typer.echo(entry.display())


@timetrack_app.command("start")
@fail_loudly
def start(ctx: typer.Context,
          account: str = typer.Argument(..., help="The account (task or project) to track."),
          at: Optional[str] = typer.Option(None, "--at", "-a", help="Specify start time (e.g., '5 minutes ago', '2023-01-01 10:00')."),
          description: Optional[str] = typer.Option(None, "--description", "-d", help="Optional note stored with the entry.")):
    """
    Start tracking time for an account.
    """
    settings: Settings = ctx.obj
    running_entry = start_entry(settings.running_file, account, parse_time_arg(at), description)
    err_console.print(f"Started '[bold cyan]{escape(running_entry.account)}[/bold cyan]'.", soft_wrap=True)


@timetrack_app.command("stop")
@fail_loudly
def stop(ctx: typer.Context,
         account: Optional[str] = typer.Argument(None, help="Account to stop. Required when more than one entry is running."),
         at: Optional[str] = typer.Option(None, "--at", "-a", help="Specify stop time.")):
    """
    Stop tracking time and record the completed entry.
    """
    settings: Settings = ctx.obj
    entry = stop_entry(settings.running_file, settings.entries_file, account, parse_time_arg(at))
    err_console.print(
        f"Stopped '[bold cyan]{escape(entry.account)}[/bold cyan]' after {get_duration_str(entry.duration)}.",
        soft_wrap=True,
    )
