import logging
from pathlib import Path
from typing import Optional

import typer

from ttcli.config import DEFAULT_LOG_LEVEL, configure_logging, resolve_settings
from ttcli.TIMETRACK.timetrack_app import timetrack_app

logger = logging.getLogger(__name__)

app = typer.Typer(help="tt: track time spent on accounts in plain-text files.", no_args_is_help=True)
app.add_typer(timetrack_app)


@app.callback()
def main_callback(
    ctx: typer.Context,
    file: Path = typer.Option(..., "--file", "-f", envvar="TIMETRACKER_FILE", help="File with completed entries."),
    running_file: Optional[Path] = typer.Option(None, "--running-file", envvar="TIMETRACKER_RUNNING_FILE",
                                                help="File with running entries. Defaults to ~/.tt_running."),
    log_level: str = typer.Option(DEFAULT_LOG_LEVEL, "--log-level", envvar="TIMETRACKER_LOG",
                                  help="Logging level (DEBUG, INFO, WARNING, ERROR)."),
):
    try:
        configure_logging(log_level)
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="--log-level")

    ctx.obj = resolve_settings(file, running_file, log_level)
    logger.debug("%s", ctx.obj)


def main():
    app()


if __name__ == "__main__":
    main()
