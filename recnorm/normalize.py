"""
Per-record normalization rules.

The Normalizer rewrites a Record in place, rule by rule, and raises on the
first rule that cannot be applied. Fields rewritten before the failing rule
stay rewritten, so a record that raised must be dropped, never written.
"""

from __future__ import annotations

import re
from datetime import datetime, timedelta, tzinfo
from typing import Optional

from dateutil import tz

from .errors import DurationParseError, StartupError, TimestampParseError
from .models import Record
from .rules import SOURCE_TZ, TARGET_TZ, ZIP_PAD, ZIP_WIDTH

# M/D/YY h:mm:ss AM|PM
_TIMESTAMP_RE = re.compile(
    r"(\d{1,2})/(\d{1,2})/(\d{2}) (\d{1,2}):(\d{2}):(\d{2}) (AM|PM)",
    re.ASCII,
)

# hours:minutes:seconds.milliseconds, no range checks, trailing text ignored
_DURATION_RE = re.compile(
    r"\s*([+-]?\d+):\s*([+-]?\d+):\s*([+-]?\d+)\.\s*([+-]?\d+)",
    re.ASCII,
)


def load_zone(name: str) -> tzinfo:
    zone = tz.gettz(name)
    if zone is None:
        raise StartupError(f"unable to load time zone {name!r}")
    return zone


def parse_timestamp(value: str, zone: tzinfo) -> datetime:
    """Parse `value` as wall-clock time in `zone`."""
    m = _TIMESTAMP_RE.fullmatch(value)
    if m is None:
        raise TimestampParseError(f"cannot parse {value!r} as M/D/YY h:mm:ss AM/PM")

    month, day, year, hour, minute, second = (int(g) for g in m.groups()[:6])
    if hour > 12:
        raise TimestampParseError(f"hour out of range in {value!r}")
    hour %= 12
    if m.group(7) == "PM":
        hour += 12
    # same pivot as strptime's %y
    year += 1900 if year >= 69 else 2000

    try:
        parsed = datetime(year, month, day, hour, minute, second, tzinfo=zone)
    except ValueError as exc:
        raise TimestampParseError(f"{exc} in {value!r}") from exc

    # wall times skipped by a DST jump move forward by the size of the gap
    return tz.resolve_imaginary(parsed)


def format_timestamp(value: datetime) -> str:
    """RFC3339 with seconds precision."""
    rendered = value.isoformat(timespec="seconds")
    if rendered.endswith("+00:00"):
        rendered = rendered[:-6] + "Z"
    return rendered


def parse_duration(value: str, column: str) -> timedelta:
    m = _DURATION_RE.match(value)
    if m is None:
        raise DurationParseError(f"bad format for {column}: {value!r}")
    try:
        hours, minutes, seconds, millis = (int(g) for g in m.groups())
        return timedelta(hours=hours, minutes=minutes, seconds=seconds, milliseconds=millis)
    except (OverflowError, ValueError) as exc:
        raise DurationParseError(f"{column} out of range: {value!r}") from exc


def format_seconds(value: timedelta) -> str:
    return "%f" % value.total_seconds()


def pad_zip(value: str) -> str:
    return value.rjust(ZIP_WIDTH, ZIP_PAD)


class Normalizer:
    """
    Applies the fixed rule sequence to one Record at a time.

    Zones are passed in rather than looked up per call; use
    `from_zone_names` to load them by name and fail early if they are missing.
    """

    def __init__(self, source_tz: tzinfo, target_tz: tzinfo):
        self.source_tz = source_tz
        self.target_tz = target_tz

    @classmethod
    def from_zone_names(cls, source: Optional[str] = None, target: Optional[str] = None) -> "Normalizer":
        return cls(load_zone(source or SOURCE_TZ), load_zone(target or TARGET_TZ))

    def normalize(self, rec: Record) -> None:
        parsed = parse_timestamp(rec.timestamp, self.source_tz)
        rec.timestamp = format_timestamp(parsed.astimezone(self.target_tz))

        foo = parse_duration(rec.foo_duration, "FooDuration")
        rec.foo_duration = format_seconds(foo)
        bar = parse_duration(rec.bar_duration, "BarDuration")
        rec.bar_duration = format_seconds(bar)
        rec.total_duration = format_seconds(foo + bar)

        rec.zip = pad_zip(rec.zip)
        rec.full_name = rec.full_name.upper()
