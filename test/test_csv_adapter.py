from datetime import datetime, timezone
import io
import pytest

from pitlights.adapters import CsvAdapter
from pitlights.adapters.csvadapter import parse_integer, parse_timestamp
from pitlights.errors import MalformedRecord
from pitlights.events import DriverUpdate, TimestampedUpdate

HEADER = "timestamp,led_position,driver_number"

class TestCsvAdapter:
    def collect(self, lines, skip_malformed=False):
        adapter = CsvAdapter("unused", skip_malformed)
        updates = list()
        adapter.on_message(updates.append)
        count = adapter.feed(lines)
        assert count == len(updates)
        return (adapter, updates)

    def test_parse_line(self):
        update = CsvAdapter("unused").parse_line(" 2023-05-10T14:03:21Z , 5 , 10 ")
        assert update == TimestampedUpdate(datetime(2023, 5, 10, 14, 3, 21, tzinfo=timezone.utc), DriverUpdate(10, 5))

    def test_skips_header(self):
        (_, updates) = self.collect(["2023-01-01T00:00:00Z,1,2", "2023-01-01T00:00:00Z,3,4"])
        assert updates == [TimestampedUpdate(datetime(2023, 1, 1, tzinfo=timezone.utc), DriverUpdate(4, 3))]

    def test_header_only(self):
        (_, updates) = self.collect([HEADER])
        assert updates == []

    def test_skips_blank_lines(self):
        (_, updates) = self.collect([HEADER + "\n", "2023-01-01T00:00:00Z,1,2\r\n", "\n", "   \n"])
        assert len(updates) == 1

    def test_extra_columns_ignored(self):
        (_, updates) = self.collect([HEADER, "2023-01-01T00:00:00Z,1,2,VER"])
        assert updates[0].update == DriverUpdate(2, 1)

    @pytest.mark.parametrize("line", [
        "2023-01-01T00:00:00Z,1",
        "2023-01-01T00:00:00Z,one,2",
        "2023-01-01T00:00:00Z,1,-2",
        "2023-01-01T00:00:00Z,1,4294967296",
        "2023-01-01 00:00:00,1,2",
        "2023-01-01,1,2",
        "2023-01-01T00:00:00+05:75,1,2",
        "9999-12-31T23:00:00-05:00,1,2",
        "0001-01-01T00:00:00+05:00,1,2",
        "not a time,1,2",
    ])
    def test_malformed_is_fatal(self, line):
        with pytest.raises(MalformedRecord) as e:
            self.collect([HEADER, "2023-01-01T00:00:00Z,1,2", line])
        assert e.value.line_number == 3
        assert e.value.line == line

    def test_skip_malformed(self):
        (adapter, updates) = self.collect([HEADER, "garbage", "2023-01-01T00:00:00Z,1,2"], skip_malformed=True)
        assert len(updates) == 1
        assert adapter.skipped == 1

    def test_sub_microsecond_instants_stay_apart(self):
        (_, updates) = self.collect([HEADER, "2023-01-01T00:00:00.0000001Z,5,10", "2023-01-01T00:00:00.0000002Z,6,10"])
        assert [u.nanosecond for u in updates] == [100, 200]
        assert updates[0].instant != updates[1].instant

    def test_invalid_utf8_is_fatal(self):
        with pytest.raises(MalformedRecord) as e:
            self.collect([HEADER.encode(), b"2023-01-01T00:00:00Z,1,2\n", b"2023-01-01T00:00:00Z,\xff,2\n"])
        assert e.value.line_number == 3
        assert "invalid UTF-8" in e.value.reason

    def test_invalid_utf8_skipped(self):
        (adapter, updates) = self.collect([HEADER.encode(), b"\xff\xfe,1,2\n", b"2023-01-01T00:00:00Z,1,2\r\n"], skip_malformed=True)
        assert updates == [TimestampedUpdate(datetime(2023, 1, 1, tzinfo=timezone.utc), DriverUpdate(2, 1))]
        assert adapter.skipped == 1

    def test_run_reads_stdin(self, monkeypatch):
        monkeypatch.setattr("sys.stdin", io.StringIO(HEADER + "\n2023-01-01T00:00:00Z,1,2\n2023-01-01T00:00:01Z,2,2\n"))
        adapter = CsvAdapter("-")
        updates = list()
        adapter.on_message(updates.append)
        assert adapter.run() == 2
        assert updates[1].update == DriverUpdate(2, 2)

    def test_run_reads_file(self, tmp_path):
        path = tmp_path / "track.csv"
        path.write_text(HEADER + "\n2023-01-01T00:00:00Z,1,2\n2023-01-01T00:00:01Z,2,2\n")
        adapter = CsvAdapter(str(path))
        assert adapter.run() == 2

    def test_run_missing_file(self, tmp_path):
        with pytest.raises(OSError):
            CsvAdapter(str(tmp_path / "missing.csv")).run()

class TestParsing:
    def test_offset_normalized_to_utc(self):
        assert parse_timestamp("2023-05-10T14:03:21+02:00") == (datetime(2023, 5, 10, 12, 3, 21, tzinfo=timezone.utc), 0)
        assert parse_timestamp("2023-05-10T14:03:21-01:30") == (datetime(2023, 5, 10, 15, 33, 21, tzinfo=timezone.utc), 0)

    def test_lowercase_and_space_separator(self):
        expected = (datetime(2023, 5, 10, 14, 3, 21, tzinfo=timezone.utc), 0)
        assert parse_timestamp("2023-05-10t14:03:21z") == expected
        assert parse_timestamp("2023-05-10 14:03:21Z") == expected

    def test_fraction(self):
        (ts, ns) = parse_timestamp("2023-05-10T14:03:21.5Z")
        assert (ts.microsecond, ns) == (500000, 0)
        (ts, ns) = parse_timestamp("2023-05-10T14:03:21.123456789Z")
        assert (ts.microsecond, ns) == (123456, 789)
        # past nanoseconds is truncated
        (ts, ns) = parse_timestamp("2023-05-10T14:03:21.0000000019Z")
        assert (ts.microsecond, ns) == (0, 1)

    @pytest.mark.parametrize("value", [
        "2023-13-01T00:00:00Z",
        "2023-05-10T14:03:21",
        "20230510T140321Z",
        "2023-05-10T14:03:21+05:60",
        "9999-12-31T23:00:00-05:00",
        "0001-01-01T00:00:00+05:00",
        "",
    ])
    def test_bad_timestamp(self, value):
        with pytest.raises(ValueError):
            parse_timestamp(value)

    def test_extreme_timestamps_with_utc_offset(self):
        assert parse_timestamp("9999-12-31T23:00:00Z")[0].year == 9999
        assert parse_timestamp("0001-01-01T00:00:00-05:00")[0].hour == 5

    def test_integers(self):
        assert parse_integer("0") == 0
        assert parse_integer("+7") == 7
        assert parse_integer("4294967295") == 4294967295
        for value in ["", "1.5", "1_000", "-1", "0x10"]:
            with pytest.raises(ValueError):
                parse_integer(value)
