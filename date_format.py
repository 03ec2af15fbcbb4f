#!/usr/bin/env python3
"""Date parsing and display helpers for event timestamps."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Union

NOT_AVAILABLE = "N/A"

# Fixed English labels; curses startup may switch the process locale.
_MONTH_ABBR = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)


@dataclass(frozen=True)
class ValidDate:
    value: datetime
    has_time: bool = True


@dataclass(frozen=True)
class InvalidDate:
    reason: str = ""


ParsedDate = Union[ValidDate, InvalidDate]


def _parse_text(text: str) -> ParsedDate:
    candidate = text.strip()
    if not candidate:
        return InvalidDate("empty")

    # Accept ISO-8601 like YYYY-MM-DD[THH:MM[:SS[.fff]]][Z|+HH:MM]
    if candidate.endswith(("Z", "z")):
        candidate = candidate[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(candidate)
    except ValueError:
        pass
    else:
        return ValidDate(parsed, has_time=len(candidate) > 10)

    # Longer fractions than fromisoformat accepts on older interpreters
    if "." in candidate:
        head, _, tail = candidate.partition(".")
        digits = "".join(ch for ch in tail if ch.isdigit())
        offset = tail[len(digits):]
        try:
            return ValidDate(datetime.fromisoformat(f"{head}.{digits[:6]}{offset}"))
        except ValueError:
            pass
    return InvalidDate(f"unrecognised date '{text}'")


def _parse_parts(parts: Union[list, tuple]) -> ParsedDate:
    # Jackson writes LocalDateTime as [year, month, day, hour, minute, second, nanos]
    if not 3 <= len(parts) <= 7:
        return InvalidDate("unexpected date array length")
    if not all(isinstance(p, int) and not isinstance(p, bool) for p in parts):
        return InvalidDate("date array must hold integers")
    fields = list(parts)
    if len(fields) == 7:
        fields[6] = fields[6] // 1000
    try:
        return ValidDate(datetime(*fields), has_time=len(fields) > 3)
    except (ValueError, OverflowError) as exc:
        return InvalidDate(str(exc))


def parse_event_date(raw: object) -> ParsedDate:
    """Classify any raw date value; never raises."""
    if raw is None:
        return InvalidDate("missing")
    if isinstance(raw, datetime):
        return ValidDate(raw)
    if isinstance(raw, date):
        return ValidDate(datetime(raw.year, raw.month, raw.day), has_time=False)
    if isinstance(raw, str):
        return _parse_text(raw)
    if isinstance(raw, (list, tuple)):
        return _parse_parts(raw)
    return InvalidDate(f"unsupported type {type(raw).__name__}")


def _format_valid(parsed: ValidDate, include_time: bool) -> str:
    dt = parsed.value
    if dt.tzinfo is not None:
        dt = dt.astimezone()
    text = f"{_MONTH_ABBR[dt.month - 1]} {dt.day}, {dt.year}"
    if include_time and parsed.has_time:
        hour = dt.hour % 12 or 12
        meridiem = "AM" if dt.hour < 12 else "PM"
        text = f"{text}, {hour:02d}:{dt.minute:02d} {meridiem}"
    return text


def format_date(raw: object, include_time: bool = False) -> str:
    parsed = parse_event_date(raw)
    if isinstance(parsed, InvalidDate):
        return NOT_AVAILABLE
    return _format_valid(parsed, include_time)


__all__ = [
    "NOT_AVAILABLE",
    "ValidDate",
    "InvalidDate",
    "ParsedDate",
    "parse_event_date",
    "format_date",
]
