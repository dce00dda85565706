"""Small text helpers shared by the output renderers."""

from __future__ import annotations

from datetime import datetime, timedelta

_TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


def truncate(text: str, max_len: int) -> str:
    """Cut text to max_len characters, ending with an ellipsis when cut."""
    if len(text) <= max_len:
        return text
    return text[: max_len - 3] + "..."


def _with_fraction(value: int, digits: int, unit: str) -> str:
    whole, fraction = divmod(value, 10**digits)
    fraction_text = str(fraction).rjust(digits, "0").rstrip("0")
    return f"{whole}.{fraction_text}{unit}" if fraction_text else f"{whole}{unit}"


def format_duration(seconds: float | timedelta) -> str:
    """Render a duration compactly, e.g. 1.5s, 2m0s, 1h0m0s or 250µs."""
    if isinstance(seconds, timedelta):
        seconds = seconds.total_seconds()
    nanos = round(seconds * 1_000_000_000)
    sign = "-" if nanos < 0 else ""
    nanos = abs(nanos)
    if nanos == 0:
        return "0s"
    if nanos < 1_000:
        return f"{sign}{nanos}ns"
    if nanos < 1_000_000:
        return sign + _with_fraction(nanos, 3, "µs")
    if nanos < 1_000_000_000:
        return sign + _with_fraction(nanos, 6, "ms")
    whole_seconds, fraction = divmod(nanos, 1_000_000_000)
    text = _with_fraction((whole_seconds % 60) * 1_000_000_000 + fraction, 9, "s")
    if whole_seconds >= 60:
        text = f"{whole_seconds // 60 % 60}m{text}"
    if whole_seconds >= 3600:
        text = f"{whole_seconds // 3600}h{text}"
    return sign + text


def format_timestamp(moment: datetime) -> str:
    """Render a moment as YYYY-MM-DD HH:MM:SS in its own time zone."""
    return moment.strftime(_TIMESTAMP_FORMAT)