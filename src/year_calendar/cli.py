"""
CLI to print a year calendar grid with holidays, weekend-type days and vacation states.
"""

from __future__ import annotations

import logging
import sys
from datetime import datetime
from typing import List, Optional

import click

from . import CalendarError, YearCalendar
from .aggregate import format_active_days, format_quantity
from .mapping import DATE_FORMAT, LOCALES, DEFAULT_LOCALE, _locale
from .models import CalendarDay, CalendarMonth, DayType, Holiday, HolidayType
from .providers import CountryHolidayProvider, JsonHolidayProvider, JsonVacationProvider
from .utils import format_date

WIDTH = 28


def render_day(day: CalendarDay) -> str:
    """
    Four-character cell of one day.

    Holidays are bracketed, weekend-type days are parenthesised and days carrying
    a vacation state get a trailing star.
    """
    if day.is_placeholder:
        return '    '
    if day.holiday:
        return f'[{day.value:2}]'
    if day.weekend:
        return f'({day.value:2})'
    if day.state != DayType.NONE:
        return f' {day.value:2}*'
    return f' {day.value:2} '


def render_month(month: CalendarMonth, locale: str, year: Optional[int] = None) -> str:
    """
    Render a single month calendar.

    Args:
        month: Month of a built grid
        locale: Locale for the weekday header and the active-days label
        year: Year appended to the title when given

    Returns:
        String representation of the month
    """
    table = _locale(locale)
    title = month.name if year is None else f'{month.name} {year}'
    lines = [f'{title:^{WIDTH}}'.rstrip()]
    lines.append(''.join(f' {wd} ' for wd in table['weekdays']).rstrip())

    days = month.days
    for week in range(month.weeks):
        row = days[week * 7:(week + 1) * 7]
        lines.append(''.join(render_day(d) for d in row).rstrip())

    lines.append(format_active_days(month, locale))
    return '\n'.join(lines)


def concat_months(month_strings: List[str], width: int = WIDTH) -> str:
    """
    Concatenate multiple month strings horizontally.

    Args:
        month_strings: List of month string representations
        width: Width of each month column

    Returns:
        Horizontally concatenated months
    """
    as_lines = [s.splitlines() for s in month_strings]
    max_lines = max(len(lines) for lines in as_lines)

    for lines in as_lines:
        missing_lines = max_lines - len(lines)
        if missing_lines:
            lines[-1:-1] = [''] * missing_lines

    rows = []
    for row_parts in zip(*as_lines):
        rows.append('   '.join(part.ljust(width) for part in row_parts))

    return '\n'.join(row.rstrip() for row in rows)


def render_year(calendar: YearCalendar) -> str:
    """
    Render a full year calendar (3 months per row).

    Args:
        calendar: Calendar holding the built grid

    Returns:
        String representation of the full year
    """
    blocks = []
    for row in range(4):
        blocks.append(concat_months([
            render_month(calendar[row * 3 + col], calendar.locale) for col in range(3)
        ]))

    output = [f'{calendar.year:^88}'.rstrip()]
    output.append('\n\n'.join(blocks))
    output.append('')
    output.append(format_quantity(calendar.total_active_days(), calendar.locale))
    return '\n'.join(output)


@click.command()
@click.argument('year', type=click.IntRange(1, 9999), required=False)
@click.argument('month', type=click.IntRange(1, 12), required=False)
@click.option('-H', '--holidays', 'holidays_file', type=click.Path(exists=True, dir_okay=False),
              help='JSON file with holiday records [{"date": "DD-MM-YYYY", "type": "holiday"|"weekend"}]')
@click.option('-V', '--vacations', 'vacations_file', type=click.Path(exists=True, dir_okay=False),
              help='JSON file with vacation records [{"date": "DD-MM-YYYY", "type": 0..4}]')
@click.option('-e', '--employee', default='', help='Employee id when the vacation file is keyed by employee')
@click.option('-c', '--country', help='Country ISO code for public holidays (needs workalendar)')
@click.option('--add-holiday', multiple=True, type=click.DateTime(formats=[DATE_FORMAT]),
              help='Add custom holiday (format: DD-MM-YYYY)')
@click.option('--add-weekend', multiple=True, type=click.DateTime(formats=[DATE_FORMAT]),
              help='Add custom weekend-type day (format: DD-MM-YYYY)')
@click.option('-l', '--locale', type=click.Choice(sorted(LOCALES)), default=DEFAULT_LOCALE,
              help='Language of month names and labels')
@click.option('-v', '--verbose', is_flag=True, help='Log debug information to stderr')
def main(year: Optional[int], month: Optional[int], holidays_file: Optional[str],
         vacations_file: Optional[str], employee: str, country: Optional[str],
         add_holiday: tuple, add_weekend: tuple, locale: str, verbose: bool):
    """
    Display a year calendar with holidays and vacation days.

    Holidays are shown in brackets [like this], weekend-type days in
    parentheses (like this) and vacation days with a trailing star.
    Each month ends with its number of active vacation days.

    Examples:

        # Show 2024 with holidays from a file
        ycal -H holidays.json 2024

        # Show July 2024 with vacations, in English
        ycal -H holidays.json -V vacations.json -l en 2024 7

        # Russian public holidays plus a company day off
        ycal -c RU --add-holiday 30-12-2024 2024
    """
    if verbose:
        logging.basicConfig(level=logging.DEBUG, stream=sys.stderr)

    if year is None:
        year = datetime.now().year

    try:
        holidays: List[Holiday] = []
        if country:
            holidays.extend(CountryHolidayProvider(country).get_holidays(year))
        if holidays_file:
            holidays.extend(JsonHolidayProvider(holidays_file).get_holidays(year))
        holidays.extend(Holiday(format_date(d), HolidayType.HOLIDAY) for d in add_holiday)
        holidays.extend(Holiday(format_date(d), HolidayType.WEEKEND) for d in add_weekend)

        vacation_dates = []
        if vacations_file:
            vacation_dates = JsonVacationProvider(vacations_file).get_vacation_dates(employee, year)

        calendar = YearCalendar(year, holidays, locale=locale, vacation_dates=vacation_dates)

        if month is not None:
            output = render_month(calendar[month - 1], locale, year=year)
        else:
            output = render_year(calendar)

        click.echo(output)

    except (CalendarError, OSError) as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


if __name__ == '__main__':
    main()
