from typing import Iterable, Sequence

from .models import CalendarMonth, CalendarDay, DayType
from .mapping import DEFAULT_LOCALE, _locale


def is_active(day: CalendarDay) -> bool:
    """A day counts as active when it carries a state, is not a holiday and is not a recall."""
    return day.state != DayType.NONE and not day.holiday and day.state != DayType.RECALL


def active_days(month: CalendarMonth) -> int:
    """
    Count the active days of a month.

    Placeholder cells never carry a state, so they are never counted.

    Parameters
    ----------
    month: CalendarMonth
        The month to aggregate.

    Returns
    -------
    int
        Number of days with a non-None, non-Recall state that are not holidays.
    """
    return sum(1 for day in month.days if is_active(day))


def year_active_days(months: Iterable[CalendarMonth]) -> int:
    return sum(active_days(m) for m in months)


def decl_of_num(number: int, titles: Sequence[str]) -> str:
    """
    Pick the word form agreeing with `number` out of (one, few, many).

    Three-way Slavic plural rule: 11..19 in the last two digits always take "many",
    otherwise a last digit of 2..4 takes "few", a last digit of 1 takes "one",
    and everything else takes "many".

    Parameters
    ----------
    number: int
        The quantity to agree with. The sign is ignored.
    titles: Sequence[str]
        The (one, few, many) forms.

    Returns
    -------
    str
        The agreeing form.
    """
    hundreds = abs(number) % 100
    tens = hundreds % 10
    if 10 < hundreds < 20:
        return titles[2]
    if 1 < tens < 5:
        return titles[1]
    if tens == 1:
        return titles[0]
    return titles[2]


def _decl_english(number: int, titles: Sequence[str]) -> str:
    return titles[0] if abs(number) == 1 else titles[2]


PLURAL_RULES = {
    "slavic": decl_of_num,
    "english": _decl_english,
}


def format_quantity(number: int, locale: str = DEFAULT_LOCALE) -> str:
    table = _locale(locale)
    rule = PLURAL_RULES[table["plural"]]
    return f"{number} {rule(number, table['day_forms'])}"


def format_active_days(month: CalendarMonth, locale: str = DEFAULT_LOCALE) -> str:
    """Render "<count> <unit>" for the active days of `month`, e.g. "21 день"."""
    return format_quantity(active_days(month), locale)
