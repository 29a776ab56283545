# TIMETRACK/running_log.py
import logging
import os
import shutil
import tempfile
from datetime import datetime
from pathlib import Path
from typing import Callable, Iterator, List, Optional, Tuple, TypeVar

from ttcli.TIMETRACK.errors import (
    AccountNotFound, AmbiguousStop, DuplicateRunningEntry, EncodingError,
    InvalidAccount, InvalidDescription, NoRunningEntries, ParseError,
    StopBeforeStart
)
from ttcli.TIMETRACK.model import Entry, RunningEntry

logger = logging.getLogger(__name__)

T = TypeVar("T")


# --- Reading ---
def _parse_lines(path: Path, parse: Callable[[str], T]) -> Iterator[T]:
    with open(path, "rb") as f:
        for lineno, raw in enumerate(f, start=1):
            try:
                line = raw.decode("utf-8")
            except UnicodeDecodeError as exc:
                raise EncodingError(f"line is not valid UTF-8 ({exc.reason})").at(path, lineno) from exc
            if not line.strip("\r\n"):
                logger.warning("Skipping blank line %s:%d", path, lineno)
                continue
            try:
                yield parse(line)
            except ParseError as exc:
                raise exc.at(path, lineno)


def load_running_entries(path: Path, missing_ok: bool = False) -> List[RunningEntry]:
    """
    Read every running entry from ``path`` in file order.
    Aborts on the first malformed line. A missing file is an error
    unless ``missing_ok`` is set, in which case nothing is running.
    """
    path = Path(path)
    if missing_ok and not path.exists():
        logger.debug("Running file %s does not exist yet", path)
        return []
    entries = list(_parse_lines(path, RunningEntry.parse))
    logger.debug("Loaded %d running entries from %s", len(entries), path)
    return entries


def load_entries(path: Path) -> List[Entry]:
    path = Path(path)
    entries = list(_parse_lines(path, Entry.parse))
    logger.debug("Loaded %d entries from %s", len(entries), path)
    return entries


def list_running_entries(path: Path) -> List[RunningEntry]:
    return load_running_entries(path)


# --- Writing ---
def append_line(path: Path, line: str) -> None:
    with open(path, "a", encoding="utf-8") as f:
        f.write(line + "\n")


def write_running_entries(path: Path, entries: List[RunningEntry]) -> None:
    """
    Replace the running file with ``entries``.
    The content goes to a temporary file next to the target which is then
    renamed over it, so the file is either the old or the new version.
    """
    path = Path(path)
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            for entry in entries:
                f.write(entry.serialize() + "\n")
        if path.exists():
            shutil.copymode(path, tmp_name)
        os.replace(tmp_name, path)
    except BaseException:
        if os.path.exists(tmp_name):
            os.remove(tmp_name)
        raise
    logger.debug("Rewrote %s with %d running entries", path, len(entries))


# --- Start ---
def validate_account(account: str) -> str:
    if not account or not account.strip():
        raise InvalidAccount("account must not be empty")
    if any(ch in account for ch in "\t\r\n"):
        raise InvalidAccount(f"account must not contain tabs or line breaks: {account!r}")
    return account


def validate_description(description: Optional[str]) -> Optional[str]:
    if description is not None and any(ch in description for ch in "\r\n"):
        raise InvalidDescription(f"description must not contain line breaks: {description!r}")
    return description


def check_can_start(entries: List[RunningEntry], account: str) -> None:
    if any(entry.account == account for entry in entries):
        raise DuplicateRunningEntry(account)


def start_entry(path: Path, account: str, now: datetime,
                description: Optional[str] = None) -> RunningEntry:
    """Begin tracking ``account`` at ``now`` by appending to the running file."""
    validate_account(account)
    validate_description(description)
    check_can_start(load_running_entries(path, missing_ok=True), account)

    running_entry = RunningEntry(start=now, account=account, description=description)
    append_line(path, running_entry.serialize())
    logger.debug("Started %r", running_entry)
    return running_entry


# --- Stop ---
def stop_running_entry(entries: List[RunningEntry], account: Optional[str],
                       now: datetime) -> Tuple[Entry, List[RunningEntry]]:
    """
    Pick the entry to stop and complete it at ``now``.

    With an account the first entry for that account is picked; without one
    there must be exactly one running entry. Returns the completed entry and
    the remaining running entries in their original order.
    """
    if not entries:
        raise NoRunningEntries()

    if account is not None:
        position = next((i for i, entry in enumerate(entries) if entry.account == account), None)
        if position is None:
            raise AccountNotFound(account)
    else:
        if len(entries) != 1:
            raise AmbiguousStop(len(entries))
        position = 0

    running_entry = entries[position]
    if now < running_entry.start:
        raise StopBeforeStart(running_entry.account, running_entry.start, now)

    remaining = entries[:position] + entries[position + 1:]
    return running_entry.complete(now), remaining


def stop_entry(running_path: Path, entries_path: Path, account: Optional[str],
               now: datetime) -> Entry:
    """Stop a running entry, log it to the main file and rewrite the running file."""
    entries = load_running_entries(running_path)
    entry, remaining = stop_running_entry(entries, account, now)

    append_line(entries_path, entry.serialize())
    write_running_entries(running_path, remaining)
    logger.debug("Stopped %r, %d still running", entry, len(remaining))
    return entry
