# TIMETRACK/model.py
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional, Tuple

from ttcli.TIMETRACK.errors import DateParseError, MissingStart, MissingStop

TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%SZ"
TIMECLOCK_FORMAT = "%Y-%m-%d %H:%M:%S%z"
DESCRIPTION_SEPARATOR = "\t"


def format_timestamp(value: datetime) -> str:
    """RFC 3339 in UTC, truncated to whole seconds, with a literal ``Z``."""
    return value.astimezone(timezone.utc).strftime(TIMESTAMP_FORMAT)


def parse_timestamp(token: str) -> datetime:
    try:
        value = datetime.fromisoformat(token)
    except ValueError as exc:
        raise DateParseError(f"invalid date '{token}': {exc}") from exc
    if value.tzinfo is None:
        raise DateParseError(f"invalid date '{token}': missing UTC offset")
    return value.astimezone(timezone.utc)


def _split_description(text: str) -> Tuple[str, Optional[str]]:
    account, sep, description = text.partition(DESCRIPTION_SEPARATOR)
    return account, (description if sep else None)


def _join_description(account: str, description: Optional[str]) -> str:
    if description is None:
        return account
    return f"{account}{DESCRIPTION_SEPARATOR}{description}"


@dataclass(frozen=True)
class Entry:
    """A completed interval, one line of the main entries file."""

    start: datetime
    stop: datetime
    account: str
    description: Optional[str] = None

    def serialize(self) -> str:
        return (
            f"{format_timestamp(self.start)} {format_timestamp(self.stop)} "
            f"{_join_description(self.account, self.description)}"
        )

    def __str__(self):
        return self.serialize()

    @classmethod
    def parse(cls, text: str) -> "Entry":
        """Parse ``<start> <stop> <account>``; the account may contain spaces."""
        line = text.rstrip("\r\n")
        start, sep, remainder = line.partition(" ")
        if not sep:
            raise MissingStart()
        stop, sep, rest = remainder.partition(" ")
        if not sep:
            raise MissingStop()
        account, description = _split_description(rest)
        return cls(
            start=parse_timestamp(start),
            stop=parse_timestamp(stop),
            account=account,
            description=description,
        )

    @property
    def duration(self):
        return self.stop - self.start

    def format_as_timeclock(self) -> str:
        """Two-line check-in/check-out block for ledger's timeclock format."""
        check_in = f"i {self.start.astimezone(timezone.utc).strftime(TIMECLOCK_FORMAT)} {self.account}"
        if self.description:
            check_in += f"  {self.description}"
        check_out = f"o {self.stop.astimezone(timezone.utc).strftime(TIMECLOCK_FORMAT)}"
        return f"{check_in}\n{check_out}"


@dataclass(frozen=True)
class RunningEntry:
    """An interval that has been started but not stopped yet."""

    start: datetime
    account: str
    description: Optional[str] = None

    def serialize(self) -> str:
        return f"{format_timestamp(self.start)} {_join_description(self.account, self.description)}"

    def __str__(self):
        return self.serialize()

    def display(self) -> str:
        return f"{format_timestamp(self.start)} {self.account}"

    @classmethod
    def parse(cls, text: str) -> "RunningEntry":
        line = text.rstrip("\r\n")
        start, sep, rest = line.partition(" ")
        if not sep:
            raise MissingStart()
        account, description = _split_description(rest)
        return cls(start=parse_timestamp(start), account=account, description=description)

    def complete(self, stop: datetime) -> Entry:
        return Entry(start=self.start, stop=stop, account=self.account, description=self.description)
