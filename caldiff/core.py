import logging
from collections.abc import Callable
from datetime import date, datetime, time, timedelta, timezone, tzinfo
from typing import Any
from zoneinfo import ZoneInfo

from dateutil.relativedelta import relativedelta

from caldiff.duration import Duration

logger = logging.getLogger(__name__)

Instant = datetime | date | int | float
Zone = str | tzinfo | None
Clock = Callable[[], Instant]


def coerce_instant(value: Any, name: str = "instant") -> datetime:
    """Convert an instant to a timezone-aware datetime.

    Accepts:
    - datetime: Must be timezone-aware, passed through as-is
    - int/float: Unix timestamp in seconds
    - date: Midnight UTC of that day

    Raises:
        TypeError: If value is an unsupported type or naive datetime
    """
    if isinstance(value, datetime):
        if value.tzinfo is None or value.utcoffset() is None:
            raise TypeError(
                f"{name} must be a timezone-aware datetime.\n"
                f"Got naive datetime: {value!r}\n"
                f"Hint: Add timezone info:\n"
                f"  from zoneinfo import ZoneInfo\n"
                f"  dt = datetime(..., tzinfo=ZoneInfo('UTC'))  "
                f"# or 'US/Pacific', etc.\n"
                f"  # Or use timezone.utc for UTC:\n"
                f"  dt = datetime(..., tzinfo=timezone.utc)"
            )
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return datetime.fromtimestamp(value, tz=timezone.utc)
    if isinstance(value, date):
        return datetime.combine(value, time.min, tzinfo=timezone.utc)
    raise TypeError(
        f"{name} must be datetime, date, int, or float.\n"
        f"Got {type(value).__name__!r}: {value!r}\n"
        f"Examples:\n"
        f"  between(1577836800, 1681540215)  # int (Unix seconds)\n"
        f"  between(datetime(2020,1,1,tzinfo=timezone.utc), end)  "
        f"# timezone-aware datetime\n"
        f"  between(date(2020,1,1), date(2023,4,15))  # date objects"
    )


def coerce_zone(tz: Any) -> tzinfo:
    """Resolve a zone argument: None means UTC, strings are IANA names."""
    if tz is None:
        return timezone.utc
    if isinstance(tz, str):
        return ZoneInfo(tz)
    if isinstance(tz, tzinfo):
        return tz
    raise TypeError(
        f"tz must be an IANA zone name, a tzinfo, or None.\n"
        f"Got {type(tz).__name__!r}: {tz!r}\n"
        f"Examples: tz='America/New_York', tz=timezone(timedelta(hours=2))"
    )


def add_date(dt: datetime, years: int = 0, months: int = 0, days: int = 0) -> datetime:
    """Add calendar units to the wall-clock fields of ``dt`` in its own zone.

    Overflowing days roll into the next month instead of clamping to the
    month end: Feb 29 + 1 year is Mar 1, Jan 31 + 1 month is Mar 3 (or
    Mar 2 in a leap year). Time of day and fold are kept, except that a
    wall time skipped by a DST jump takes the offset from after the jump.

    Raises:
        ValueError, OverflowError: If the result falls outside the datetime range
    """
    # Step from the 1st so relativedelta never clamps the day
    first = dt.replace(tzinfo=None, day=1) + relativedelta(years=years, months=months)
    wall = first + timedelta(days=dt.day - 1 + days)
    stepped = wall.replace(tzinfo=dt.tzinfo, fold=dt.fold)
    if dt.tzinfo is not None and (
        _utc(stepped).astimezone(dt.tzinfo).replace(tzinfo=None) != wall
    ):
        # Nonexistent wall time; fold=1 reads it with the post-transition offset
        return stepped.replace(fold=1)
    return stepped


def _utc(dt: datetime) -> datetime:
    # Same-tzinfo datetimes compare by wall clock, so order on UTC instead
    return dt.astimezone(timezone.utc)


def _greatest(fits: Callable[[int], bool], estimate: int) -> int:
    """Largest count for which ``fits`` holds, walking from an estimate.

    ``fits`` must be monotone and true for 0.
    """
    count = max(estimate, 0)
    while count > 0 and not fits(count):
        count -= 1
    while fits(count + 1):
        count += 1
    return count


def between(start: Instant, end: Instant, tz: Zone = None) -> Duration:
    """
    Calendar-accurate duration between two instants.

    Both instants are viewed in ``tz`` (UTC when None), put in chronological
    order, then whole years, months and days are stepped greedily from the
    earlier one without passing the later one. The remainder is reported in
    hours (not wrapped at 24), minutes and seconds.

    Args:
        start: Timezone-aware datetime, date, or Unix seconds
        end: Timezone-aware datetime, date, or Unix seconds
        tz: IANA timezone name or tzinfo deciding where day boundaries fall

    Returns:
        Non-negative Duration; swapping start and end gives the same result

    Raises:
        TypeError: If an instant is naive or of an unsupported type,
            or tz is not a str, tzinfo, or None

    Examples:
        >>> from datetime import datetime, timezone
        >>> from caldiff import between
        >>>
        >>> str(between(
        ...     datetime(2020, 1, 1, tzinfo=timezone.utc),
        ...     datetime(2023, 4, 15, 6, 30, 15, tzinfo=timezone.utc),
        ... ))
        '3y 3m 14d 6h 30m 15s'
        >>>
        >>> # Feb 29 + 1 year rolls to Mar 1, past Feb 28
        >>> between(
        ...     datetime(2020, 2, 29, tzinfo=timezone.utc),
        ...     datetime(2021, 2, 28, tzinfo=timezone.utc),
        ... ).months
        11
    """
    zone = coerce_zone(tz)
    start_dt = coerce_instant(start, "start").astimezone(zone)
    end_dt = coerce_instant(end, "end").astimezone(zone)

    if _utc(start_dt) > _utc(end_dt):
        logger.debug("start %s is after end %s, swapping", start_dt, end_dt)
        start_dt, end_dt = end_dt, start_dt

    end_utc = _utc(end_dt)

    def reaches(years: int, months: int, days: int) -> bool:
        try:
            stepped = _utc(add_date(start_dt, years, months, days))
        except (ValueError, OverflowError):
            # Past datetime.max, so necessarily past end
            return False
        return stepped <= end_utc

    years = _greatest(
        lambda n: reaches(n, 0, 0),
        end_dt.year - start_dt.year,
    )
    anchor = add_date(start_dt, years)
    months = _greatest(
        lambda n: reaches(years, n, 0),
        (end_dt.year - anchor.year) * 12 + end_dt.month - anchor.month,
    )
    anchor = add_date(start_dt, years, months)
    days = _greatest(
        lambda n: reaches(years, months, n),
        (end_dt.date() - anchor.date()).days,
    )

    partial = end_utc - _utc(add_date(start_dt, years, months, days))

    return Duration(
        years=years,
        months=months,
        days=days,
        hours=partial // timedelta(hours=1),
        minutes=partial // timedelta(minutes=1) % 60,
        seconds=partial // timedelta(seconds=1) % 60,
    )


def utc_now() -> datetime:
    """Default clock for ``since``."""
    return datetime.now(timezone.utc)


def since(start: Instant, tz: Zone = None, *, clock: Clock | None = None) -> Duration:
    """
    Calendar-accurate duration from ``start`` to the current time.

    Args:
        start: Timezone-aware datetime, date, or Unix seconds
        tz: IANA timezone name or tzinfo (UTC when None)
        clock: Zero-argument callable returning "now" as any accepted
            instant. Defaults to the system clock in UTC.

    Example:
        >>> from datetime import datetime, timezone
        >>> from caldiff import since
        >>>
        >>> fixed = lambda: datetime(2025, 1, 3, 1, tzinfo=timezone.utc)
        >>> str(since(datetime(2025, 1, 1, tzinfo=timezone.utc), clock=fixed))
        '2d 1h'
    """
    now = (clock or utc_now)()
    return between(start, now, tz)
