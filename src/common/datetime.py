"""Datetime utilities."""

import re
from datetime import datetime, timedelta, timezone

from dateutil.parser import parse as parse_date

DISPLAY_FORMAT = "%B %d, %Y"

# Timezone abbreviations for RFC1123 dates with a named zone
TZINFOS = {
    "EST": timezone(timedelta(hours=-5)),
    "EDT": timezone(timedelta(hours=-4)),
    "CST": timezone(timedelta(hours=-6)),
    "CDT": timezone(timedelta(hours=-5)),
    "MST": timezone(timedelta(hours=-7)),
    "MDT": timezone(timedelta(hours=-6)),
    "PST": timezone(timedelta(hours=-8)),
    "PDT": timezone(timedelta(hours=-7)),
    "GMT": timezone.utc,
    "UTC": timezone.utc,
    "UT": timezone.utc,
    "Z": timezone.utc,
    "BST": timezone(timedelta(hours=1)),
}

_RFC3339 = re.compile(
    r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}(?:Z|[+-]\d{2}:\d{2})$"
)
_RFC3339_FRACTION = re.compile(
    r"^(\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2})\.(\d+)(Z|[+-]\d{2}:\d{2})$"
)
_RFC1123Z = re.compile(
    r"^[A-Z][a-z]{2}, \d{1,2} [A-Z][a-z]{2} \d{4} \d{2}:\d{2}:\d{2} [+-]\d{4}$"
)
_RFC1123 = re.compile(
    r"^[A-Z][a-z]{2}, \d{1,2} [A-Z][a-z]{2} \d{4} \d{2}:\d{2}:\d{2} ([A-Z]+)$"
)


class TimestampParseError(ValueError):
    """Raised when a timestamp matches none of the supported grammars."""


def _parse_rfc3339(value: str) -> datetime | None:
    if not _RFC3339.match(value):
        return None
    return datetime.strptime(value, "%Y-%m-%dT%H:%M:%S%z")


def _parse_rfc3339_fraction(value: str) -> datetime | None:
    match = _RFC3339_FRACTION.match(value)
    if not match:
        return None
    # strptime only takes microseconds
    base, fraction, zone = match.groups()
    return datetime.strptime(f"{base}.{fraction[:6]:0<6}{zone}", "%Y-%m-%dT%H:%M:%S.%f%z")


def _parse_rfc1123z(value: str) -> datetime | None:
    if not _RFC1123Z.match(value):
        return None
    return datetime.strptime(value, "%a, %d %b %Y %H:%M:%S %z")


def _resolve_tzinfo(name: str | None, offset: int | None) -> timezone:
    if name in TZINFOS:
        return TZINFOS[name]
    if offset:
        return timezone(timedelta(seconds=offset))
    # Unknown abbreviations are read as UTC
    return timezone.utc


def _parse_rfc1123(value: str) -> datetime | None:
    if not _RFC1123.match(value):
        return None
    return parse_date(value, tzinfos=_resolve_tzinfo)


_GRAMMARS = (
    _parse_rfc3339,
    _parse_rfc3339_fraction,
    _parse_rfc1123z,
    _parse_rfc1123,
)


def parse_timestamp(raw: str | None) -> datetime:
    """Parse a feed timestamp into an aware datetime.

    Grammars are tried in order: RFC3339, RFC3339 with fractional seconds,
    RFC1123 with a numeric zone and RFC1123 with a named zone. The first
    grammar that matches wins.

    Raises:
        TimestampParseError: If the value is empty or matches no grammar.
    """
    value = (raw or "").strip()
    if not value:
        raise TimestampParseError("unable to parse time: empty value")

    for grammar in _GRAMMARS:
        try:
            parsed = grammar(value)
        except ValueError:
            continue
        if parsed is not None:
            return parsed

    raise TimestampParseError(f"unable to parse time: {raw}")


def format_display(dt: datetime) -> str:
    """Render a datetime as e.g. 'July 26, 2024' in its own offset."""
    return f"{dt:%B} {dt.day}, {dt.year}"


def parse_display(value: str) -> datetime:
    """Parse a string produced by format_display back into a datetime."""
    return datetime.strptime(value, DISPLAY_FORMAT)


def now_local(offset_hours: int = 8) -> datetime:
    """Current time at a fixed UTC offset, ignoring the host timezone."""
    return datetime.now(timezone(timedelta(hours=offset_hours)))


def format_log_timestamp(dt: datetime) -> str:
    """Render the error log timestamp, e.g. 'Fri Jul 26 09:05:2024'."""
    return f"{dt:%a %b} {dt.day} {dt:%H:%M}:{dt.year}"

