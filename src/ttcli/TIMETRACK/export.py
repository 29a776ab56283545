# TIMETRACK/export.py
import logging
from pathlib import Path

from ttcli.TIMETRACK.errors import OutputAlreadyExists
from ttcli.TIMETRACK.running_log import load_entries

logger = logging.getLogger(__name__)


def export_timeclock(entries_path: Path, output_path: Path) -> int:
    """
    Convert every entry of the main file into timeclock check-in/check-out
    blocks and write them to ``output_path``, which must not exist yet.
    Returns the number of exported entries.
    """
    output_path = Path(output_path)
    if output_path.exists():
        raise OutputAlreadyExists(output_path)

    entries = load_entries(entries_path)
    timeclock = "\n".join(entry.format_as_timeclock() for entry in entries)

    try:
        with open(output_path, "x", encoding="utf-8") as f:
            f.write(timeclock)
    except FileExistsError:
        raise OutputAlreadyExists(output_path) from None

    logger.debug("Exported %d entries from %s to %s", len(entries), entries_path, output_path)
    return len(entries)
