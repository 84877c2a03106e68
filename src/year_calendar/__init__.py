"""
year_calendar

Year calendar grid and day-state engine:
  - builds the 12-month layout of a year (placeholder cells aligning day 1 to its weekday)
  - applies holiday / weekend-type overrides from a holiday feed
  - carries a per-day vacation state, projected from a vacation-date feed
  - counts "active" days per month and labels the count with the right plural form

Install:
  pip install year-calendar            # core
  pip install year-calendar[country]   # public holidays through workalendar

Notes:
  - All exchanged date strings are DD-MM-YYYY.
  - The engine is in-memory only: no network access, no persistence.
"""

from __future__ import annotations


# =========================
# Errors
# =========================
class CalendarError(Exception):
    pass


class InvalidDateError(CalendarError, ValueError):
    pass


class UnknownLocaleError(CalendarError, KeyError):
    pass


class UnknownTypeError(CalendarError, ValueError):
    pass


class MissingDependencyError(CalendarError):
    pass


from .models import (  # noqa: E402
    CalendarDay,
    CalendarMonth,
    DayIdentity,
    DayStatus,
    DayType,
    Holiday,
    HolidayType,
    LegendItem,
    Period,
    VacationDate,
    VacationDateType,
)
from .date_universe import YearUniverse, days_in_month, is_leap_year  # noqa: E402
from .aggregate import active_days, decl_of_num, format_active_days, year_active_days  # noqa: E402
from .styles import day_classes, day_style, legend  # noqa: E402
from .grid import (  # noqa: E402
    YearCalendar,
    apply_holidays,
    apply_vacation_dates,
    build_year,
    reset_holidays,
    reset_states,
    resolve,
    resolve_date,
)
from .providers import (  # noqa: E402
    AbstractHolidayProvider,
    AbstractVacationProvider,
    CountryHolidayProvider,
    JsonHolidayProvider,
    JsonVacationProvider,
    StaticHolidayProvider,
    StaticVacationProvider,
)

__all__ = [
    "CalendarError",
    "InvalidDateError",
    "UnknownLocaleError",
    "UnknownTypeError",
    "MissingDependencyError",
    "CalendarDay",
    "CalendarMonth",
    "DayIdentity",
    "DayStatus",
    "DayType",
    "Holiday",
    "HolidayType",
    "LegendItem",
    "Period",
    "VacationDate",
    "VacationDateType",
    "YearUniverse",
    "days_in_month",
    "is_leap_year",
    "active_days",
    "decl_of_num",
    "format_active_days",
    "year_active_days",
    "day_classes",
    "day_style",
    "legend",
    "YearCalendar",
    "apply_holidays",
    "apply_vacation_dates",
    "build_year",
    "reset_holidays",
    "reset_states",
    "resolve",
    "resolve_date",
    "AbstractHolidayProvider",
    "AbstractVacationProvider",
    "CountryHolidayProvider",
    "JsonHolidayProvider",
    "JsonVacationProvider",
    "StaticHolidayProvider",
    "StaticVacationProvider",
]
