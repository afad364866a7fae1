"""Tests for reading and ordering the raw CSV export."""

import pytest

from hand_tracker.errors import MalformedInputError
from hand_tracker.log_reader import is_noise, read_log_records, should_reverse
from hand_tracker.models import LogRecord


def _csv(rows, header="order,at,entry"):
    return "\n".join([header] + rows) + "\n"


def _records(*entries):
    return [LogRecord(sequence=None, timestamp="", entry=e) for e in entries]


class TestReadLogRecords:

    def test_sorted_numerically_not_lexically(self):
        text = _csv(["10,t10,ten", "9,t9,nine", "100,t100,hundred"])
        records = read_log_records(text)
        assert [r.entry for r in records] == ["nine", "ten", "hundred"]
        assert [r.sequence for r in records] == [9, 10, 100]

    def test_timestamp_passes_through(self):
        records = read_log_records(_csv(["1,2024-03-01T20:00:00.000Z,hello"]))
        assert records[0].timestamp == "2024-03-01T20:00:00.000Z"

    def test_missing_entry_column_is_fatal(self):
        with pytest.raises(MalformedInputError):
            read_log_records(_csv(["1,t,hello"], header="order,at,message"))

    def test_empty_text(self):
        assert read_log_records("") == []
        assert read_log_records("   \n") == []

    def test_header_only(self):
        assert read_log_records("entry,at,order\n") == []

    def test_byte_order_mark(self):
        records = read_log_records("\ufeff" + _csv(["1,t,hello"]))
        assert [r.entry for r in records] == ["hello"]

    def test_noise_and_blank_entries_dropped(self):
        text = _csv([
            '1,t,"The admin approved the player ""Carl @ c3"" participation."',
            "2,t,WARNING: the game will be paused",
            "3,t,IMPORTANT: blinds are going up",
            "4,t,* system message",
            "5,t,",
            "6,t,kept",
        ])
        assert [r.entry for r in read_log_records(text)] == ["kept"]

    def test_row_with_extra_fields_is_dropped(self):
        text = _csv(["1,t,first", "2,t,stray,extra", "3,t,third"])
        assert [r.entry for r in read_log_records(text)] == ["first", "third"]

    def test_short_row_without_entry_is_dropped(self):
        text = _csv(["1,t,first", "2"], header="order,entry,at")
        records = read_log_records(text)
        assert [r.entry for r in records] == ["t"]

    def test_custom_column_names(self):
        text = _csv(["2,t,second", "1,t,first"], header="seq,when,line")
        records = read_log_records(text, entry_col="line", order_col="seq", at_col="when")
        assert [r.entry for r in records] == ["first", "second"]
        assert records[0].timestamp == "t"

    def test_without_order_column_reverse_export_is_flipped(self, make_log):
        lines = ["-- starting hand #1 (id: a) --", "x", "-- ending hand #1 --"]
        records = read_log_records(make_log(lines, newest_first=True, with_order=False))
        assert [r.entry for r in records] == lines
        assert records[0].sequence is None

    def test_without_order_column_forward_export_kept(self, make_log):
        lines = ["-- starting hand #1 (id: a) --", "x", "-- ending hand #1 --"]
        records = read_log_records(make_log(lines, newest_first=False, with_order=False))
        assert [r.entry for r in records] == lines


class TestHelpers:

    def test_is_noise(self):
        assert is_noise("")
        assert is_noise("The admin updated the game")
        assert not is_noise('"Bob @ b2" checks')

    def test_should_reverse_single_hand(self):
        assert should_reverse(_records("-- ending hand #2 --", "-- starting hand #2 (id: x) --"))
        assert not should_reverse(_records("-- starting hand #1 (id: x) --", "-- ending hand #1 --"))

    def test_should_reverse_counts_hand_numbers(self):
        forward = _records(
            "-- starting hand #7 (id: a) --", "-- ending hand #7 --",
            "-- starting hand #8 (id: b) --", "-- ending hand #8 --",
        )
        assert not should_reverse(forward)
        assert should_reverse(list(reversed(forward)))

    def test_should_reverse_without_markers(self):
        assert not should_reverse(_records("hello", "world"))
