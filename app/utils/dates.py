"""
Date coercion, calendar arithmetic and the date helpers built on them.

- parse_datetime: turn str/number/date/datetime into an aware local datetime.
- to_datetime: same, with falsy values meaning "now".
- set_fields: replace wall-clock year/month/day with calendar rollover
  (February 31 becomes March 2 or 3, day 0 is the last day of the previous month).
- subtract_months, sub_date, last_day_of_month: arithmetic + Intl-style formatting.
- to_sql_date: fixed YYYY-MM-DD serialization from local fields.

"Local" always means Settings.SERVER_TZ.
"""

from datetime import date, datetime, timedelta
from typing import Any, Mapping, Optional, Union
import pytz
from config.settings import Settings
from .intl import LocaleLike, format_datetime_intl

DEFAULT_LOCALE = 'en-EN'

DateLike = Union[None, str, int, float, date, datetime]


def _localize(wall: datetime) -> datetime:
    """Attach the server timezone to a naive wall-clock datetime."""
    tz = Settings.SERVER_TZ
    # pytz-style timezone (has .localize) vs zoneinfo (no .localize)
    if hasattr(tz, "localize"):
        try:
            return tz.localize(wall, is_dst=None)
        except pytz.AmbiguousTimeError:
            # Repeated hour at the end of DST: the earlier, daylight offset
            return tz.localize(wall, is_dst=True)
        except pytz.NonExistentTimeError:
            # Skipped hour at the start of DST: move forward
            return tz.normalize(tz.localize(wall, is_dst=False))
    # zoneinfo picks the earlier offset (fold=0) on its own
    return wall.replace(tzinfo=tz)


def parse_datetime(value: DateLike) -> datetime:
    """
    Coerce a date-like value into an aware datetime in server timezone.

    - Naive datetimes and dates are local wall time.
    - Aware datetimes are converted to server timezone.
    - Numbers are epoch milliseconds, 0 included.
    - Strings are ISO-8601; a 'Z' suffix is read as UTC and a
      date-only string is local midnight.

    Raises:
        ValueError: None, an empty or non ISO-8601 string, or an out of range value
        TypeError: The value has an unsupported type
    """
    tz = Settings.SERVER_TZ
    if value is None:
        raise ValueError("Invalid date: None")

    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, date):
        dt = datetime(value.year, value.month, value.day)
    elif isinstance(value, (int, float)):
        return datetime.fromtimestamp(value / 1000, tz=tz)
    elif isinstance(value, str):
        # Normalize 'Z' (Zulu/UTC) suffix to '+00:00' for fromisoformat compatibility
        s = value.strip()
        if s.endswith("Z"):
            s = s[:-1] + "+00:00"
        dt = datetime.fromisoformat(s)
    else:
        raise TypeError(f"Cannot interpret {type(value).__name__} as a date")

    if dt.tzinfo is None:
        return _localize(dt)
    return dt.astimezone(tz)


def to_datetime(value: DateLike = None) -> datetime:
    """Like parse_datetime, but falsy values (None, '', 0) mean "now"."""
    if not value:
        return datetime.now(Settings.SERVER_TZ)
    return parse_datetime(value)


def set_fields(
    value: datetime,
    year: Optional[int] = None,
    month: Optional[int] = None,
    day: Optional[int] = None,
) -> datetime:
    """
    Replace wall-clock calendar fields, rolling over out-of-range values.

    Month is one-based and may be zero or negative (previous years) or
    above 12 (following years). Day is applied as an offset from the first
    of the resulting month, so day 0 is the last day of the previous month
    and day 31 of a 30-day month is the 1st of the next. Time of day is kept.

    Example:
        >>> set_fields(datetime(2024, 3, 31), month=2).date()
        datetime.date(2024, 3, 2)
    """
    wall = value.replace(tzinfo=None)
    y = wall.year if year is None else year
    m = wall.month if month is None else month
    d = wall.day if day is None else day

    y, m0 = divmod(y * 12 + m - 1, 12)
    rolled = wall.replace(year=y, month=m0 + 1, day=1) + timedelta(days=d - 1)
    return _localize(rolled)


def add_days(value: datetime, days: int) -> datetime:
    return set_fields(value, day=value.day + days)


def add_months(value: datetime, months: int) -> datetime:
    return set_fields(value, month=value.month + months)


def add_years(value: datetime, years: int) -> datetime:
    return set_fields(value, year=value.year + years)


def subtract_months(
    date: DateLike = None,
    locale: LocaleLike = DEFAULT_LOCALE,
    sub_months: int = 1,
    use_first_day: bool = False,
    options: Optional[Mapping[str, Any]] = None,
) -> str:
    """
    Subtract a number of months from a date and format the result.

    The day of month is kept, so a day that does not exist in the target
    month rolls into the next one (March 31 minus one month is March 2 in
    a leap year). With use_first_day the result is moved to the 1st after
    the subtraction.

    Args:
        date: Date to start from (default: now)
        locale: Locale used for formatting
        sub_months: Number of months to subtract
        use_first_day: Move to the first day of the resulting month
        options: Intl.DateTimeFormat options

    Returns:
        Formatted date string
    """
    dt = to_datetime(date)
    dt = add_months(dt, -sub_months)
    if use_first_day:
        dt = set_fields(dt, day=1)
    return format_datetime_intl(dt, locale, options)


def sub_date(
    date: DateLike = None,
    locale: LocaleLike = DEFAULT_LOCALE,
    days: int = 0,
    months: int = 0,
    years: int = 0,
    options: Optional[Mapping[str, Any]] = None,
) -> str:
    """
    Subtract days, then months, then years from a date and format the result.

    Steps run one after another on the same value, each only when its
    count is non-zero, so rollover from an earlier step feeds the next:
    2024-03-31 minus one month and one year is 2023-03-02, not 2023-02-28.
    """
    dt = to_datetime(date)

    if days:
        dt = add_days(dt, -days)

    if months:
        dt = add_months(dt, -months)

    if years:
        dt = add_years(dt, -years)

    return format_datetime_intl(dt, locale, options)


def last_day_of_month(
    date: DateLike,
    locale: LocaleLike = DEFAULT_LOCALE,
    options: Optional[Mapping[str, Any]] = None,
) -> str:
    """
    Format local midnight of the last day of the date's month.

    The date is required: None or an empty string raises ValueError.
    """
    d = parse_datetime(date)
    midnight = d.replace(tzinfo=None, hour=0, minute=0, second=0, microsecond=0)
    return format_datetime_intl(set_fields(midnight, month=d.month + 1, day=0), locale, options)


def to_sql_date(date: DateLike) -> str:
    """
    Serialize a date as YYYY-MM-DD using local calendar fields.

    Example:
      to_sql_date("2024-01-05") -> "2024-01-05"
      to_sql_date(0)            -> "1970-01-01" (with UTC as local time)
    """
    d = parse_datetime(date)
    return f"{d.year}-{d.month:02d}-{d.day:02d}"
