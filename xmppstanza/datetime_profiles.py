"""Dates and times as profiled for XMPP (XEP-0082)."""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone


class InvalidDateInputError(ValueError):
    """Raised when a string is in none of the supported date formats."""

    def __init__(self, message: str = "could not parse date. Input might not be in a supported format"):
        super().__init__(message)


class InvalidDateOutputError(ValueError):
    """Raised when a date cannot be formatted as requested."""

    def __init__(self, message: str = "could not format date as desired"):
        super().__init__(message)


_RFC3339 = re.compile(
    r"(\d{4})-(\d{2})-(\d{2})T(\d{2}):(\d{2}):(\d{2})(?:\.(\d+))?(Z|([+-])(\d{2}):(\d{2}))\Z", re.ASCII
)
_DATE = re.compile(r"(\d{4})-(\d{2})-(\d{2})\Z", re.ASCII)
_TIME = re.compile(r"(\d{2}):(\d{2}):(\d{2})(?:\.(\d+))?\+00:00\Z", re.ASCII)


def _split_fraction(fraction: str | None) -> tuple[int, int]:
    """Return (microseconds, remaining nanoseconds) for a fraction of a second."""
    return divmod(int(fraction[:9].ljust(9, "0")), 1000) if fraction else (0, 0)


@dataclass(frozen=True)
class JabberDate:
    """A point in time, kept with nanosecond precision."""

    value: datetime
    extra_nanoseconds: int = 0

    def __post_init__(self) -> None:
        if not 0 <= self.extra_nanoseconds < 1000:
            raise ValueError("extra_nanoseconds must be between 0 and 999")

    @classmethod
    def from_string(cls, text: str) -> JabberDate:
        """Parse a date-time, a date or a UTC time."""
        try:
            if m := _RFC3339.match(text):
                zone = timezone.utc
                if m[9]:
                    if int(m[11]) >= 60:
                        raise ValueError("offset minutes out of range")
                    sign = -1 if m[9] == "-" else 1
                    zone = timezone(sign * timedelta(hours=int(m[10]), minutes=int(m[11])))
                micro, extra = _split_fraction(m[7])
                return cls(datetime(*map(int, m.groups()[:6]), micro, tzinfo=zone), extra)
            if m := _DATE.match(text):
                return cls(datetime(*map(int, m.groups()), tzinfo=timezone.utc))
            if m := _TIME.match(text):
                micro, extra = _split_fraction(m[4])
                return cls(datetime(1, 1, 1, *map(int, m.groups()[:3]), micro, tzinfo=timezone.utc), extra)
        except ValueError as exc:
            raise InvalidDateInputError() from exc
        raise InvalidDateInputError()

    def date_to_string(self) -> str:
        """Format as YYYY-MM-DD."""
        return f"{self.value.year:04d}-{self.value.month:02d}-{self.value.day:02d}"

    def date_time_to_string(self, nanos: bool) -> str:
        """Format as an RFC 3339 date-time, with fractional seconds if nanos."""
        v = self.value
        fraction = ""
        total_nanos = v.microsecond * 1000 + self.extra_nanoseconds
        if nanos and total_nanos:
            fraction = f".{total_nanos:09d}".rstrip("0")
        offset = v.utcoffset()
        zone = "Z"
        if offset:
            seconds = int(offset.total_seconds())
            sign = "+" if seconds >= 0 else "-"
            seconds = abs(seconds)
            zone = f"{sign}{seconds // 3600:02d}:{seconds % 3600 // 60:02d}"
        return f"{self.date_to_string()}T{v.hour:02d}:{v.minute:02d}:{v.second:02d}{fraction}{zone}"

    def time_to_string(self, nanos: bool) -> str:
        """Format the time-of-day part of the RFC 3339 representation."""
        parts = self.date_time_to_string(nanos).split("T")
        if len(parts) != 2:
            raise InvalidDateOutputError()
        return parts[1]