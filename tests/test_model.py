from datetime import datetime, timedelta, timezone

import pytest

from ttcli.TIMETRACK.errors import DateParseError, MissingStart, MissingStop
from ttcli.TIMETRACK.model import Entry, RunningEntry, format_timestamp, parse_timestamp

from conftest import ts


def make_entry(**overrides):
    fields = dict(
        start=ts("2021-07-03T10:00:00Z"),
        stop=ts("2021-07-03T13:00:00Z"),
        account="Time Tracker",
    )
    fields.update(overrides)
    return Entry(**fields)


class TestTimestamps:

    def test_format_truncates_to_seconds(self):
        value = datetime(2021, 7, 3, 10, 0, 0, 987654, tzinfo=timezone.utc)
        assert format_timestamp(value) == "2021-07-03T10:00:00Z"

    def test_format_converts_offsets_to_utc(self):
        value = datetime(2021, 7, 3, 12, 0, tzinfo=timezone(timedelta(hours=2)))
        assert format_timestamp(value) == "2021-07-03T10:00:00Z"

    def test_parse_normalizes_to_utc(self):
        value = parse_timestamp("2021-07-03T12:00:00+02:00")
        assert value == ts("2021-07-03T10:00:00Z")
        assert value.tzinfo == timezone.utc

    def test_parse_rejects_missing_offset(self):
        with pytest.raises(DateParseError):
            parse_timestamp("2021-07-03T10:00:00")

    def test_parse_rejects_garbage(self):
        with pytest.raises(DateParseError):
            parse_timestamp("yesterday")


class TestEntry:

    def test_serialize(self):
        assert make_entry().serialize() == "2021-07-03T10:00:00Z 2021-07-03T13:00:00Z Time Tracker"
        assert str(make_entry()) == make_entry().serialize()

    def test_parse(self):
        entry = Entry.parse("2021-07-03T10:00:00Z 2021-07-03T13:00:00Z Time Tracker")
        assert entry == make_entry()
        assert entry.description is None

    def test_parse_strips_line_ending(self):
        assert Entry.parse("2021-07-03T10:00:00Z 2021-07-03T13:00:00Z Time Tracker\n") == make_entry()

    def test_round_trip(self):
        entry = make_entry(account="a b  c")
        assert Entry.parse(entry.serialize()) == entry

    def test_round_trip_with_description(self):
        entry = make_entry(description="fixed the parser")
        line = entry.serialize()
        assert line == "2021-07-03T10:00:00Z 2021-07-03T13:00:00Z Time Tracker\tfixed the parser"
        assert Entry.parse(line) == entry

    def test_parse_missing_start(self):
        with pytest.raises(MissingStart):
            Entry.parse("2021-07-03T10:00:00Z")

    def test_parse_missing_stop(self):
        with pytest.raises(MissingStop):
            Entry.parse("2021-07-03T10:00:00Z 2021-07-03T13:00:00Z")

    def test_parse_bad_date(self):
        with pytest.raises(DateParseError):
            Entry.parse("2021-07-03T10:00:00Z not-a-date work")

    def test_legacy_hyphen_format_is_rejected(self):
        with pytest.raises(MissingStop):
            Entry.parse("2021-07-03T10:00:00Z-2021-07-03T13:00:00Z work")
        with pytest.raises(DateParseError):
            Entry.parse("2021-07-03T10:00:00Z-2021-07-03T13:00:00Z Time Tracker")

    def test_format_as_timeclock(self):
        assert make_entry().format_as_timeclock() == (
            "i 2021-07-03 10:00:00+0000 Time Tracker\no 2021-07-03 13:00:00+0000"
        )

    def test_format_as_timeclock_with_description(self):
        timeclock = make_entry(description="review").format_as_timeclock()
        assert timeclock.splitlines()[0] == "i 2021-07-03 10:00:00+0000 Time Tracker  review"

    def test_duration(self):
        assert make_entry().duration == timedelta(hours=3)


class TestRunningEntry:

    def test_serialize(self):
        entry = RunningEntry(start=ts("2021-07-03T10:00:00Z"), account="Time Tracker")
        assert entry.serialize() == "2021-07-03T10:00:00Z Time Tracker"

    def test_parse(self):
        assert RunningEntry.parse("2021-07-03T10:00:00Z Time Tracker") == RunningEntry(
            start=ts("2021-07-03T10:00:00Z"), account="Time Tracker"
        )

    def test_round_trip_with_description(self):
        entry = RunningEntry(start=ts("2021-07-03T10:00:00Z"), account="work", description="notes")
        assert RunningEntry.parse(entry.serialize()) == entry

    def test_display_hides_description(self):
        entry = RunningEntry(start=ts("2021-07-03T10:00:00Z"), account="work", description="notes")
        assert entry.display() == "2021-07-03T10:00:00Z work"

    def test_parse_missing_start(self):
        with pytest.raises(MissingStart):
            RunningEntry.parse("2021-07-03T10:00:00Z")

    def test_parse_bad_date(self):
        with pytest.raises(DateParseError):
            RunningEntry.parse("10:00 work")

    def test_complete(self):
        running = RunningEntry(start=ts("2021-07-03T10:00:00Z"), account="work", description="d")
        assert running.complete(ts("2021-07-03T11:00:00Z")) == Entry(
            start=ts("2021-07-03T10:00:00Z"),
            stop=ts("2021-07-03T11:00:00Z"),
            account="work",
            description="d",
        )
