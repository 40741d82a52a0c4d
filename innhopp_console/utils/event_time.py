"""Event-local date/time codec.

Stored timestamps carry no timezone: they are the wall-clock time at the
event's location. Every helper here pins to UTC fields (or to naive fields)
so the stored digits and the displayed digits are always identical, whatever
timezone the host happens to run in.

None of the helpers raise on malformed input. Parsers return ``None`` and
string helpers return ``""``.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime, timezone

__all__ = [
    "DateParts",
    "TimeOfDay",
    "parse_local",
    "to_utc_anchored_date",
    "to_naive_date",
    "serialize_from_naive_date",
    "FORMAT_OPTIONS",
    "format_local",
    "format_local_date",
    "to_date_input",
    "to_datetime_input",
    "datetime_input_from_date",
    "picker_display",
    "from_datetime_input",
    "from_date_input",
    "time_parts",
    "date_key",
    "split_schedule",
]

_TZ_SUFFIX_PATTERN = re.compile(r"([+-]\d{2}:?\d{2}|Z)\Z", re.IGNORECASE | re.ASCII)
_DATE_TIME_PATTERN = re.compile(
    r"(\d{4})-(\d{2})-(\d{2})(?:[ T](\d{2}):(\d{2})(?::(\d{2})(?:\.\d+)?)?)?", re.ASCII
)
_DATE_PREFIX_PATTERN = re.compile(r"^(\d{4})-(\d{2})-(\d{2})", re.ASCII)
_TIME_SCAN_PATTERN = re.compile(r"(?:T|\s)(\d{2}):(\d{2})", re.ASCII)
_SCHEDULE_PATTERN = re.compile(r"^(\d{4}-\d{2}-\d{2})[T ](\d{2}:\d{2})", re.ASCII)

_MONTHS = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)
_WEEKDAYS = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")

_DATE_STYLES = {
    "short": {"year": "2-digit", "month": "numeric", "day": "numeric"},
    "medium": {"year": "numeric", "month": "short", "day": "numeric"},
    "long": {"year": "numeric", "month": "long", "day": "numeric"},
    "full": {"weekday": "long", "year": "numeric", "month": "long", "day": "numeric"},
}
_TIME_STYLES = {
    "short": {"hour": "2-digit", "minute": "2-digit"},
    "medium": {"hour": "2-digit", "minute": "2-digit", "second": "2-digit"},
}
_NUMERIC_STYLES = ("numeric", "2-digit")
_FIELD_OPTIONS = ("weekday", "year", "month", "day", "hour", "minute", "second")
FORMAT_OPTIONS = frozenset(("date_style", "time_style", "hour12") + _FIELD_OPTIONS)


@dataclass(frozen=True, slots=True)
class DateParts:
    """The six numeric components of a naive event timestamp."""

    year: int
    month: int
    day: int
    hour: int = 0
    minute: int = 0
    second: int = 0


@dataclass(frozen=True, slots=True)
class TimeOfDay:
    hour: int
    minute: int


def _pad(value: int) -> str:
    return f"{value:02d}"


def parse_local(raw: str | None) -> DateParts | None:
    """Split ``raw`` into its date/time digits.

    A trailing ``Z`` or numeric UTC offset is dropped, never applied. Missing
    time components default to zero.
    """

    if not raw or not isinstance(raw, str):
        return None
    trimmed = _TZ_SUFFIX_PATTERN.sub("", raw.strip())
    if not trimmed:
        return None
    match = _DATE_TIME_PATTERN.fullmatch(trimmed)
    if not match:
        return None
    year, month, day, hour, minute, second = (
        int(group) if group is not None else 0 for group in match.groups()
    )
    return DateParts(year, month, day, hour, minute, second)


def _build(parts: DateParts, tzinfo: timezone | None) -> datetime | None:
    try:
        return datetime(
            parts.year,
            parts.month,
            parts.day,
            parts.hour,
            parts.minute,
            parts.second,
            tzinfo=tzinfo,
        )
    except ValueError:
        return None


def to_utc_anchored_date(raw: str | None) -> datetime | None:
    """Return an aware UTC datetime whose fields equal the stored digits."""

    parts = parse_local(raw)
    if parts is None:
        return None
    return _build(parts, timezone.utc)


def to_naive_date(raw: str | None) -> datetime | None:
    """Return a naive datetime for widgets that work in host-local time."""

    parts = parse_local(raw)
    if parts is None:
        return None
    return _build(parts, None)


def _iso_z(value: datetime) -> str:
    return value.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def serialize_from_naive_date(value: datetime) -> str:
    """Encode a picker value as a UTC-anchored ISO string.

    The wall-clock fields the picker shows are kept digit for digit. Aware
    values are first brought into host-local time, which is what a local
    picker would have displayed for them.
    """

    if value.tzinfo is not None:
        value = value.astimezone().replace(tzinfo=None)
    anchored = value.replace(microsecond=0, tzinfo=timezone.utc)
    return _iso_z(anchored)


def _numeric(value: int, style: str) -> str | None:
    if style == "numeric":
        return str(value)
    if style == "2-digit":
        return _pad(value % 100)
    return None


def _render_date(value: datetime, options: dict) -> str | None:
    weekday = options.get("weekday")
    year = options.get("year")
    month = options.get("month")
    day = options.get("day")
    if not any((weekday, year, month, day)):
        return ""

    if weekday is not None and weekday not in ("short", "long"):
        return None
    weekday_text = ""
    if weekday:
        name = _WEEKDAYS[value.weekday()]
        weekday_text = name if weekday == "long" else name[:3]

    year_text = _numeric(value.year, year) if year else ""
    day_text = _numeric(value.day, day) if day else ""
    if year_text is None or day_text is None:
        return None

    if month in ("short", "long"):
        name = _MONTHS[value.month - 1]
        month_text = name if month == "long" else name[:3]
        text = " ".join(part for part in (month_text, day_text) if part)
        if year_text:
            text = f"{text}, {year_text}" if text else year_text
    else:
        month_text = _numeric(value.month, month) if month else ""
        if month_text is None:
            return None
        text = "/".join(part for part in (month_text, day_text, year_text) if part)

    if weekday_text:
        text = f"{weekday_text}, {text}" if text else weekday_text
    return text


def _render_time(value: datetime, options: dict) -> str | None:
    hour = options.get("hour")
    minute = options.get("minute")
    second = options.get("second")
    if not any((hour, minute, second)):
        return ""
    for style in (hour, minute, second):
        if style is not None and style not in _NUMERIC_STYLES:
            return None

    hour12 = bool(options.get("hour12", False))
    hour_value = value.hour
    if hour12:
        hour_value = value.hour % 12 or 12

    pieces: list[str] = []
    if hour:
        pieces.append(_numeric(hour_value, hour) or "")
    if minute:
        pieces.append(_pad(value.minute) if pieces else _numeric(value.minute, minute) or "")
    if second:
        pieces.append(_pad(value.second) if pieces else _numeric(value.second, second) or "")

    text = ":".join(pieces)
    if hour12 and hour:
        text = f"{text} {'AM' if value.hour < 12 else 'PM'}"
    return text


def format_local(raw: str | None, /, **options: object) -> str:
    """Format ``raw`` with Intl-style options, pinned to the stored digits.

    Supported options are ``date_style``, ``time_style``, ``weekday``,
    ``year``, ``month``, ``day``, ``hour``, ``minute``, ``second`` and
    ``hour12``; any other keyword yields ``""``. Without options a numeric
    ``M/D/YYYY`` date is produced.
    """

    value = to_utc_anchored_date(raw)
    if value is None:
        return ""

    if not FORMAT_OPTIONS.issuperset(options):
        return ""

    resolved = dict(options)
    date_style = resolved.pop("date_style", None)
    time_style = resolved.pop("time_style", None)
    if date_style is not None:
        if not isinstance(date_style, str) or date_style not in _DATE_STYLES:
            return ""
        resolved.update(_DATE_STYLES[date_style])
    if time_style is not None:
        if not isinstance(time_style, str) or time_style not in _TIME_STYLES:
            return ""
        resolved.update(_TIME_STYLES[time_style])

    if not any(resolved.get(key) for key in _FIELD_OPTIONS):
        resolved.update({"year": "numeric", "month": "numeric", "day": "numeric"})

    date_text = _render_date(value, resolved)
    time_text = _render_time(value, resolved)
    if date_text is None or time_text is None:
        return ""
    return ", ".join(part for part in (date_text, time_text) if part)


def format_local_date(raw: str | None) -> str:
    return format_local(raw, date_style="medium")


def to_date_input(raw: str | None) -> str:
    """Return the ``YYYY-MM-DD`` value for a date input field."""

    value = to_utc_anchored_date(raw)
    if value is None:
        return ""
    return f"{value.year:04d}-{_pad(value.month)}-{_pad(value.day)}"


def to_datetime_input(raw: str | None) -> str:
    """Return the ``YYYY-MM-DDTHH:MM`` value for a datetime-local input."""

    value = to_utc_anchored_date(raw)
    if value is None:
        return ""
    return datetime_input_from_date(value)


def datetime_input_from_date(value: datetime) -> str:
    """Render the UTC fields of ``value`` as ``YYYY-MM-DDTHH:MM``."""

    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc)
    return (
        f"{value.year:04d}-{_pad(value.month)}-{_pad(value.day)}"
        f"T{_pad(value.hour)}:{_pad(value.minute)}"
    )


def picker_display(value: datetime) -> str:
    """Render the wall-clock fields of a picker value as ``YYYY-MM-DD HH:MM``."""

    if value.tzinfo is not None:
        value = value.astimezone().replace(tzinfo=None)
    return (
        f"{value.year:04d}-{_pad(value.month)}-{_pad(value.day)}"
        f" {_pad(value.hour)}:{_pad(value.minute)}"
    )


def from_datetime_input(raw: str | None) -> str:
    value = to_utc_anchored_date(raw)
    return _iso_z(value) if value is not None else ""


def from_date_input(raw: str | None) -> str:
    """Expand a date-only input to a midnight timestamp."""

    return from_datetime_input(f"{raw}T00:00" if raw else "")


def time_parts(raw: str | None) -> TimeOfDay | None:
    """Return the hour and minute of ``raw``.

    When the value does not parse as a whole, the first ``HH:MM`` preceded
    by ``T`` or whitespace is used instead.
    """

    value = to_utc_anchored_date(raw)
    if value is not None:
        return TimeOfDay(value.hour, value.minute)
    if not raw or not isinstance(raw, str):
        return None
    match = _TIME_SCAN_PATTERN.search(raw)
    if not match:
        return None
    return TimeOfDay(int(match.group(1)), int(match.group(2)))


def date_key(raw: str | None) -> str:
    """Return the ``YYYY-MM-DD`` calendar key used to group by day."""

    if not raw or not isinstance(raw, str):
        return ""
    match = _DATE_PREFIX_PATTERN.match(raw)
    if match:
        return "-".join(match.groups())
    return to_date_input(raw)


def split_schedule(raw: str | None) -> tuple[str, str]:
    """Split a scheduled timestamp into ``(date, time)`` display strings.

    Date-only values get an empty time. Values that do not look like an
    event timestamp at all are passed through as the date.
    """

    if not raw:
        return "", ""
    match = _SCHEDULE_PATTERN.match(raw)
    if match:
        return match.group(1), match.group(2)
    key = date_key(raw)
    if key:
        return key, ""
    return raw, ""
