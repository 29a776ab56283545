# TIMETRACK/errors.py
from typing import Optional


class TrackerError(Exception):
    """Base class for every error reported to the user by tt."""


# --- Parse Errors ---
class ParseError(TrackerError):
    message = "could not parse line"

    def __init__(self, detail: Optional[str] = None):
        super().__init__(detail or self.message)
        self.detail = detail
        self.location: Optional[str] = None

    def at(self, path, lineno: int) -> "ParseError":
        """Attach the file and line the error was found on."""
        self.location = f"{path}:{lineno}"
        return self

    def __str__(self):
        text = self.detail or self.message
        if self.location:
            return f"{self.location}: {text}"
        return text


class MissingStart(ParseError):
    message = "missing start date"


class MissingStop(ParseError):
    message = "missing stop date"


class DateParseError(ParseError):
    message = "invalid date"


class EncodingError(ParseError):
    message = "line is not valid UTF-8"


# --- Command Errors ---
class DuplicateRunningEntry(TrackerError):
    def __init__(self, account: str):
        super().__init__(f'there is already a running entry for the account "{account}"')
        self.account = account


class NoRunningEntries(TrackerError):
    def __init__(self):
        super().__init__("no running entries")


class AccountNotFound(TrackerError):
    def __init__(self, account: str):
        super().__init__(f'no running entries for the account "{account}" were found')
        self.account = account


class AmbiguousStop(TrackerError):
    def __init__(self, count: int):
        super().__init__(
            f"account must be specified when there is more than one running entry ({count} running)"
        )
        self.count = count


class StopBeforeStart(TrackerError):
    def __init__(self, account: str, start, stop):
        super().__init__(
            f'stop time {stop:%Y-%m-%dT%H:%M:%SZ} is before the start of "{account}" '
            f"({start:%Y-%m-%dT%H:%M:%SZ})"
        )
        self.account = account


class InvalidAccount(TrackerError):
    pass


class InvalidDescription(TrackerError):
    pass


class InvalidTime(TrackerError):
    def __init__(self, value: str):
        super().__init__(f"could not parse time: '{value}'")
        self.value = value


class OutputAlreadyExists(TrackerError):
    def __init__(self, path):
        super().__init__(f"there is already a file at the output path: {path}")
        self.path = path
