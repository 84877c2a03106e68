"""
Year grid engine.

Builds the 12-month layout of a year, applies holiday/weekend overrides to it, projects
vacation records onto day states and resolves dates to their cells.

Every function here works on an in-memory list of CalendarMonth owned by the caller.
The mandated order on any input change is:

    reset overrides -> rebuild the grid if the year changed -> apply overrides

YearCalendar runs that order for you.
"""

from __future__ import annotations

import logging
import math
import datetime as dt
from typing import Any, Iterable, Iterator, List, Mapping, Optional, Union

from .models import (
    CalendarDay, CalendarMonth, DayIdentity, DayType, Holiday, HolidayType, LegendItem, VacationDate,
)
from .mapping import DAYS_IN_WEEK, MONTHS_IN_YEAR, DEFAULT_LOCALE, _locale
from .date_universe import YearUniverse
from .utils import DateLike, end_of_day, to_date
from .aggregate import active_days, format_active_days, year_active_days
from .styles import legend

logger = logging.getLogger(__name__)

HolidayLike = Union[Holiday, Mapping[str, Any]]
VacationDateLike = Union[VacationDate, Mapping[str, Any]]


# =========================
# GridBuilder
# =========================
def build_year(year: int, locale: str = DEFAULT_LOCALE) -> Optional[List[CalendarMonth]]:
    """
    Generate the 12 months of `year`.

    Parameters
    ----------
    year: int
        Target calendar year. A falsy year (None, 0) or one outside
        datetime.MINYEAR..datetime.MAXYEAR makes this a no-op.
    locale: str, default "ru"
        Locale used for the month titles.

    Returns
    -------
    Optional[List[CalendarMonth]]
        The fresh grid, or None when `year` is unusable so the caller keeps its current grid.
    """
    if not year:
        logger.debug("No year given, grid left unchanged")
        return None
    if not dt.MINYEAR <= year <= dt.MAXYEAR:
        logger.debug("Year %s out of range, grid left unchanged", year)
        return None

    titles = _locale(locale)["months"]
    universe = YearUniverse(year)
    months: List[CalendarMonth] = []
    for i in range(MONTHS_IN_YEAR):
        empty_days = universe.first_weekday(i)
        last_date = universe.length(i)
        weeks = math.ceil((empty_days + last_date) / DAYS_IN_WEEK)

        identities = [DayIdentity(0) for _ in range(empty_days)]
        identities.extend(DayIdentity(k, end_of_day(year, i + 1, k)) for k in range(1, last_date + 1))
        months.append(CalendarMonth(titles[i], tuple(identities), weeks, empty_days))

    logger.debug("Built year grid for %s (%s days)", year, len(universe))
    return months


# =========================
# DayLookup
# =========================
def resolve(months: List[CalendarMonth], month_index: int, day_of_month: int) -> CalendarDay:
    """
    Cell of day `day_of_month` (1-based) in month `month_index` (0-based).

    The day must belong to the month of the built year; out-of-range input is not checked.
    """
    month = months[month_index]
    return month.day(month.empty_days + day_of_month - 1)


def resolve_date(months: List[CalendarMonth], day: DateLike) -> CalendarDay:
    """Cell of a date (datetime.date or DD-MM-YYYY string). The year is not checked."""
    d = to_date(day)
    return resolve(months, d.month - 1, d.day)


def iter_days(months: Iterable[CalendarMonth]) -> Iterator[CalendarDay]:
    for month in months:
        yield from month.days


# =========================
# OverrideApplier
# =========================
def _as_holiday(record: HolidayLike) -> Holiday:
    return record if isinstance(record, Holiday) else Holiday.from_dict(record)


def _as_vacation_date(record: VacationDateLike) -> VacationDate:
    return record if isinstance(record, VacationDate) else VacationDate.from_dict(record)


def reset_holidays(months: Iterable[CalendarMonth]) -> None:
    """Clear every holiday and weekend flag of the grid."""
    for day in iter_days(months):
        day.holiday = day.weekend = False


def apply_holidays(months: List[CalendarMonth], holidays: Iterable[HolidayLike], year: int) -> None:
    """
    Mark holiday and weekend-type days on the grid of `year`.

    Records of other years are skipped. A "holiday" record sets holiday and clears weekend,
    a "weekend" record does the opposite, so the two flags are never both set. When several
    records hit the same date, the last one wins.

    Parameters
    ----------
    months: List[CalendarMonth]
        The grid built for `year`. Mutated in place.
    holidays: Iterable[HolidayLike]
        Holiday records, or mappings with "date" (DD-MM-YYYY) and "type" keys.
    year: int
        Year of the grid.
    """
    records = [_as_holiday(r) for r in holidays]
    applied = skipped = 0
    for holiday in records:
        d = holiday.day
        if d.year != year:
            skipped += 1
            continue
        day = resolve(months, d.month - 1, d.day)
        if holiday.type == HolidayType.HOLIDAY:
            day.holiday = True
            day.weekend = False
        else:
            day.weekend = True
            day.holiday = False
        applied += 1
    logger.debug("Applied %s holiday overrides to %s, skipped %s from other years", applied, year, skipped)


# =========================
# Vacation projection
# =========================
def reset_states(months: Iterable[CalendarMonth]) -> None:
    """Set every day state of the grid back to DayType.NONE."""
    for day in iter_days(months):
        day.state = DayType.NONE


def apply_vacation_dates(months: List[CalendarMonth], vacation_dates: Iterable[VacationDateLike], year: int) -> None:
    """
    Copy each in-year vacation record's type onto its day's state, matched by name
    (VacationDateType.PLANNED -> DayType.PLANNED, ...). Last record wins.
    """
    records = [_as_vacation_date(r) for r in vacation_dates]
    applied = skipped = 0
    for vacation in records:
        d = vacation.day
        if d.year != year:
            skipped += 1
            continue
        resolve(months, d.month - 1, d.day).state = DayType[vacation.type.name]
        applied += 1
    logger.debug("Projected %s vacation dates onto %s, skipped %s from other years", applied, year, skipped)


# =========================
# YearCalendar (owner of one grid)
# =========================
class YearCalendar:
    """
    Owns the grid of one year together with its holiday and vacation inputs.

    Usage:
        cal = YearCalendar(2024, [{"date": "01-01-2024", "type": "holiday"}])
        cal.day("01-01-2024").holiday           # True
        cal.set_vacation_dates([{"date": "15-07-2024", "type": "Planned"}])
        cal.format_active_days(6)               # "1 день"
    """

    def __init__(
        self,
        year: Optional[int] = None,
        holidays: Iterable[HolidayLike] = (),
        *,
        locale: str = DEFAULT_LOCALE,
        vacation_dates: Iterable[VacationDateLike] = (),
    ):
        _locale(locale)
        self.locale = locale
        self.year: Optional[int] = None
        self.months: List[CalendarMonth] = []
        self.holidays: List[Holiday] = [_as_holiday(h) for h in holidays]
        self.vacation_dates: List[VacationDate] = [_as_vacation_date(v) for v in vacation_dates]
        self.set_year(year)

    # ---------- inputs
    def set_year(self, year: Optional[int]) -> None:
        """
        Switch to `year`, rebuilding the grid only when the year actually changes.

        An unusable year (falsy or outside 1..9999) leaves the grid and its overrides as-is.
        """
        if not year:
            logger.debug("Ignoring empty year, keeping grid for %s", self.year)
            return
        if year == self.year:
            reset_holidays(self.months)
            apply_holidays(self.months, self.holidays, self.year)
            return
        months = build_year(year, self.locale)
        if months is None:
            logger.debug("Ignoring year %r, keeping grid for %s", year, self.year)
            return
        reset_holidays(self.months)
        self.months = months
        self.year = year
        apply_vacation_dates(self.months, self.vacation_dates, self.year)
        apply_holidays(self.months, self.holidays, self.year)

    def set_holidays(self, holidays: Iterable[HolidayLike]) -> None:
        """Replace the holiday list. Records are validated before the grid is touched."""
        self.holidays = [_as_holiday(h) for h in holidays]
        reset_holidays(self.months)
        if self.year:
            apply_holidays(self.months, self.holidays, self.year)

    def set_vacation_dates(self, vacation_dates: Iterable[VacationDateLike]) -> None:
        self.vacation_dates = [_as_vacation_date(v) for v in vacation_dates]
        reset_states(self.months)
        if self.year:
            apply_vacation_dates(self.months, self.vacation_dates, self.year)

    # ---------- access
    def __len__(self) -> int:
        return len(self.months)

    def __iter__(self) -> Iterator[CalendarMonth]:
        return iter(self.months)

    def __getitem__(self, month_index: int) -> CalendarMonth:
        return self.months[month_index]

    def day(self, day: DateLike) -> CalendarDay:
        return resolve_date(self.months, day)

    def active_days(self, month_index: int) -> int:
        return active_days(self.months[month_index])

    def format_active_days(self, month_index: int) -> str:
        return format_active_days(self.months[month_index], self.locale)

    def total_active_days(self) -> int:
        return year_active_days(self.months)

    def legend(self) -> List[LegendItem]:
        return legend(self.locale)

    def __repr__(self) -> str:
        return (
            f"YearCalendar(year={self.year}, locale={self.locale!r}, "
            f"holidays={len(self.holidays)}, vacation_dates={len(self.vacation_dates)})"
        )
