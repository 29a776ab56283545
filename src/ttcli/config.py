# config.py
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from rich.console import Console
from rich.logging import RichHandler

RUNNING_FILE_NAME = ".tt_running"
DEFAULT_LOG_LEVEL = "WARNING"


@dataclass(frozen=True)
class Settings:
    """Paths and options resolved once at startup and handed to every command."""

    entries_file: Path
    running_file: Path
    log_level: str = DEFAULT_LOG_LEVEL


def default_running_file(environ: Optional[Mapping[str, str]] = None) -> Path:
    """``$HOME/.tt_running``, or ``./.tt_running`` when HOME is not set."""
    environ = os.environ if environ is None else environ
    return Path(environ.get("HOME", ".")) / RUNNING_FILE_NAME


def resolve_settings(entries_file: Path,
                     running_file: Optional[Path] = None,
                     log_level: str = DEFAULT_LOG_LEVEL,
                     environ: Optional[Mapping[str, str]] = None) -> Settings:
    return Settings(
        entries_file=Path(entries_file),
        running_file=Path(running_file) if running_file else default_running_file(environ),
        log_level=log_level.upper(),
    )


def configure_logging(level: str = DEFAULT_LOG_LEVEL) -> None:
    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        raise ValueError(f"unknown log level: {level}")

    handler = RichHandler(console=Console(stderr=True), show_path=False)
    logging.basicConfig(
        level=numeric_level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[handler],
        force=True,
    )
