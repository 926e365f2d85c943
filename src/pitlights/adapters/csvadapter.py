import logging
import re
import sys
from datetime import datetime, timedelta, timezone
from typing import Iterable, List, Tuple

from pitlights.adapters.abstract import LightsAdapter
from pitlights.errors import MalformedRecord
from pitlights.events import DriverUpdate, TimestampedUpdate

# RFC3339 date-time; the offset is mandatory
TIMESTAMP_PATTERN = re.compile(
    r"(\d{4})-(\d{2})-(\d{2})[Tt ](\d{2}):(\d{2}):(\d{2})(?:\.(\d+))?(?:([Zz])|([+-])(\d{2}):([0-5]\d))",
    re.ASCII)
INTEGER_PATTERN = re.compile(r"\+?[0-9]+", re.ASCII)
MAX_INTEGER = 2 ** 32 - 1

def parse_timestamp(value: str) -> Tuple[datetime, int]:
    """
    Parses an RFC3339 timestamp into an aware UTC datetime plus the nanoseconds below its microsecond.
    Raises ValueError if it doesn't match or can't be represented.
    """
    match = TIMESTAMP_PATTERN.fullmatch(value)
    if match is None:
        raise ValueError(f"not an RFC3339 timestamp: {value!r}")

    (year, month, day, hour, minute, second, fraction, zulu, sign, offset_h, offset_m) = match.groups()
    if zulu is not None:
        tz = timezone.utc
    else:
        offset = timedelta(hours=int(offset_h), minutes=int(offset_m))
        tz = timezone(-offset if sign == "-" else offset)

    # datetime only goes down to microseconds, the rest is kept separately
    digits = (fraction or "0")[:9].ljust(9, "0")
    microsecond = int(digits[:6])
    nanosecond = int(digits[6:])
    try:
        ts = datetime(int(year), int(month), int(day), int(hour), int(minute), int(second), microsecond, tzinfo=tz)
        return (ts.astimezone(timezone.utc), nanosecond)
    except OverflowError as e:
        raise ValueError(f"timestamp out of range: {value!r}") from e

def parse_integer(value: str) -> int:
    if INTEGER_PATTERN.fullmatch(value) is None:
        raise ValueError(f"not a non-negative integer: {value!r}")

    result = int(value)
    if result > MAX_INTEGER:
        raise ValueError(f"integer out of range: {value!r}")
    return result

class CsvAdapter(LightsAdapter):
    """
    Reads a telemetry export with a header row followed by `timestamp, led_position, driver_number` rows.
    Any row that can't be parsed aborts the run, unless skip_malformed is set.
    """

    def __init__(self, filename: str, skip_malformed: bool = False):
        super().__init__()
        self.filename = filename
        self.skip_malformed = skip_malformed
        self.skipped = 0
        self._log = logging.getLogger(__name__)

    def run(self) -> int:
        self._log.info("Reading %s", self.filename)
        if self.filename == "-":
            # raw bytes where available, so bad UTF-8 is reported per line
            return self.feed(getattr(sys.stdin, "buffer", sys.stdin))

        with open(self.filename, "rb") as in_file:
            self._log.debug("Opened %s", self.filename)
            return self.feed(in_file)

    def feed(self, lines: Iterable[str | bytes]) -> int:
        """Parses every line after the header and fires an update for each. Byte lines must be UTF-8."""
        count = 0
        for (index, line) in enumerate(lines):
            if index == 0:
                continue # header

            try:
                if isinstance(line, bytes):
                    line = self.decode_line(line, index + 1)

                line = line.rstrip("\r\n")
                if len(line.strip()) == 0:
                    continue

                update = self.parse_line(line, index + 1)
            except MalformedRecord as e:
                if not self.skip_malformed:
                    raise
                self._log.warning("Skipping %s", e)
                self.skipped += 1
                continue

            self._message(update)
            count += 1

        self._log.info("Parsed %d updates from %s", count, self.filename)
        return count

    def decode_line(self, line: bytes, line_number: int) -> str:
        try:
            return line.decode("utf-8")
        except UnicodeDecodeError as e:
            raise MalformedRecord(line_number, line.decode("utf-8", "replace").rstrip("\r\n"), f"invalid UTF-8: {e}") from e

    def parse_line(self, line: str, line_number: int = 0) -> TimestampedUpdate:
        fields: List[str] = [x.strip() for x in line.split(",")]
        if len(fields) < 3:
            raise MalformedRecord(line_number, line, f"expected 3 fields, got {len(fields)}")

        try:
            (timestamp, nanosecond) = parse_timestamp(fields[0])
        except ValueError as e:
            raise MalformedRecord(line_number, line, f"bad timestamp: {e}") from e

        try:
            led_position = parse_integer(fields[1])
        except ValueError as e:
            raise MalformedRecord(line_number, line, f"bad led position: {e}") from e

        try:
            driver_number = parse_integer(fields[2])
        except ValueError as e:
            raise MalformedRecord(line_number, line, f"bad driver number: {e}") from e

        return TimestampedUpdate(timestamp, DriverUpdate(driver_number, led_position), nanosecond)
