import re
import datetime as dt
from typing import Union

from . import InvalidDateError

DateLike = Union[dt.date, dt.datetime, str]

_DMY = re.compile(r"(\d{1,2})-(\d{1,2})-(\d{4})")


def parse_date(s: str) -> dt.date:
    """
    Parse a DD-MM-YYYY string as exchanged by the holiday and vacation feeds.

    Rules:
        1. Exactly three numeric components separated by "-".
        2. Day first, then month, then a 4-digit year.
        3. The triple must be a real Gregorian date (no 31-04-2024, no 29-02-2023).

    Parameters
    ----------
    s: str
        The date string to parse.

    Returns
    -------
    dt.date
        The parsed date.
    """
    if not isinstance(s, str):
        raise InvalidDateError(f"Expected a DD-MM-YYYY string, got {type(s).__name__}.")
    s = s.strip()
    if not s:
        raise InvalidDateError("Empty date string.")

    m = _DMY.fullmatch(s)
    if m is None:
        raise InvalidDateError(f"Invalid date string: {s!r}. Expected DD-MM-YYYY (e.g. '31-01-2025').")

    d, mo, y = (int(p) for p in m.groups())
    try:
        return dt.date(y, mo, d)
    except ValueError as e:
        raise InvalidDateError(f"Invalid calendar date parsed from {s!r}: (y={y}, m={mo}, d={d}).") from e


def format_date(d: dt.date) -> str:
    """Render a date in the DD-MM-YYYY exchange format."""
    return f"{d.day:02d}-{d.month:02d}-{d.year:04d}"


def to_date(x: DateLike) -> dt.date:
    """
    Convert a date-like input to datetime.date.

    Supported input types :
        - datetime.date and datetime.datetime (time part ignored)
        - str in DD-MM-YYYY format

    Parameters
    ----------
    x: DateLike
        The input date to convert.

    Returns
    -------
    dt.date
        The corresponding date.
    """
    if isinstance(x, dt.datetime):
        return x.date()
    if isinstance(x, dt.date):
        return x
    if isinstance(x, str):
        return parse_date(x)
    raise InvalidDateError(f"Unsupported date type: {type(x)}")


def end_of_day(year: int, month: int, day: int) -> dt.datetime:
    """Last representable millisecond of the given day, 23:59:59.999 local time."""
    return dt.datetime(year, month, day, 23, 59, 59, 999000)
