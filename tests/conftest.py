from datetime import datetime

import pytest


def ts(value: str) -> datetime:
    """Aware UTC datetime from an RFC 3339 string."""
    return datetime.fromisoformat(value)


@pytest.fixture
def entries_file(tmp_path):
    return tmp_path / "entries.txt"


@pytest.fixture
def running_file(tmp_path):
    return tmp_path / ".tt_running"
