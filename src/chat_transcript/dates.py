"""Calendar-date and clock formatting helpers.

All formatting is done with fixed English names so output does not depend
on the process locale.  Every function that derives a calendar date takes
an optional ``tz``; ``None`` means the system local zone.  The grouper and
the date separator both go through :func:`local_date`, so they always
agree on where midnight falls.
"""

from __future__ import annotations

from datetime import date, datetime, timezone, tzinfo

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

_MINUTE = 60
_HOUR = 60 * _MINUTE
_DAY = 24 * _HOUR


def current_time(tz: tzinfo | None = None) -> datetime:
    """Return the wall clock as an aware datetime in *tz* (or local time)."""
    return datetime.now(timezone.utc).astimezone(tz)


def to_local(moment: datetime, tz: tzinfo | None = None) -> datetime:
    """Convert *moment* to *tz* (or the system local zone)."""
    return moment.astimezone(tz)


def local_date(moment: datetime, tz: tzinfo | None = None) -> date:
    """Return the calendar date of *moment* in *tz*."""
    return to_local(moment, tz).date()


def date_key(moment: datetime, tz: tzinfo | None = None) -> str:
    """Return the ``YYYY-MM-DD`` key of *moment*'s local calendar date."""
    return local_date(moment, tz).isoformat()


def format_long_date(day: date) -> str:
    """``January 5, 2024``."""
    return f"{_MONTHS[day.month - 1]} {day.day}, {day.year}"


def format_abbrev_date(day: date) -> str:
    """``Jan 5, 2024``."""
    return f"{_MONTHS[day.month - 1][:3]} {day.day}, {day.year}"


def format_short_date(day: date) -> str:
    """``01/05/2024``."""
    return f"{day.month:02d}/{day.day:02d}/{day.year}"


def format_weekday_date(day: date) -> str:
    """``Friday, January 5, 2024``."""
    return f"{_WEEKDAYS[day.weekday()]}, {format_long_date(day)}"


def format_time(moment: datetime, seconds: bool = False) -> str:
    """12-hour clock time: ``3:04 PM`` or ``3:04:05 PM``."""
    hour = moment.hour % 12 or 12
    suffix = "AM" if moment.hour < 12 else "PM"
    if seconds:
        return f"{hour}:{moment.minute:02d}:{moment.second:02d} {suffix}"
    return f"{hour}:{moment.minute:02d} {suffix}"


def format_relative(moment: datetime, now: datetime) -> str:
    """Coarse relative time: ``just now``, ``5 minutes ago``, ``2 days from now``."""
    # Naive values are read as system local time.
    diff = (now.astimezone() - moment.astimezone()).total_seconds()
    distance = abs(diff)
    suffix = "ago" if diff > 0 else "from now"
    if distance < _MINUTE:
        return "just now"
    if distance < _HOUR:
        return f"{int(distance // _MINUTE)} minutes {suffix}"
    if distance < _DAY:
        return f"{int(distance // _HOUR)} hours {suffix}"
    return f"{int(distance // _DAY)} days {suffix}"


def format_timestamp_style(
    unix_seconds: int,
    style: str,
    now: datetime,
    tz: tzinfo | None = None,
) -> str:
    """Render timestamp markup ``<t:unix:style>`` as text.

    Args:
        unix_seconds: Seconds since the Unix epoch.
        style: One of ``t T d D f F R``; anything else renders like ``f``.
        now: Reference time for the relative (``R``) style.
        tz: Display zone.

    Raises:
        OverflowError, ValueError, OSError: If *unix_seconds* is outside
            the range :class:`datetime` can represent.
    """
    moment = datetime.fromtimestamp(unix_seconds, tz=timezone.utc).astimezone(tz)
    day = moment.date()
    if style == "t":
        return format_time(moment)
    if style == "T":
        return format_time(moment, seconds=True)
    if style == "d":
        return format_short_date(day)
    if style == "D":
        return format_long_date(day)
    if style == "F":
        return f"{format_weekday_date(day)} {format_time(moment)}"
    if style == "R":
        return format_relative(moment, now)
    return f"{format_long_date(day)} {format_time(moment)}"
