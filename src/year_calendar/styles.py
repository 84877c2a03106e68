from typing import Dict, List

from .models import CalendarDay, DayType, LegendItem
from .mapping import (
    STYLE_TOKENS, HOLIDAY_TOKEN, DISABLED_TOKEN, HIGHLIGHTED_TOKEN, DEFAULT_LOCALE, _locale,
)


def state_style(state: DayType) -> str:
    return STYLE_TOKENS[DayType(state).name]


def day_style(day: CalendarDay) -> str:
    """State token of a day, "" when the day carries no state."""
    return state_style(day.state)


def day_classes(day: CalendarDay) -> Dict[str, bool]:
    """
    Full token surface of a day, ready to be handed to a renderer.

    The state token (if any) is always present and True. The holiday token covers both
    official holidays and weekend-type days.

    Parameters
    ----------
    day: CalendarDay
        The day to classify.

    Returns
    -------
    Dict[str, bool]
        Token -> enabled flag.
    """
    classes: Dict[str, bool] = {}
    token = day_style(day)
    if token:
        classes[token] = True
    classes[HOLIDAY_TOKEN] = bool(day.holiday or day.weekend)
    classes[DISABLED_TOKEN] = bool(day.disabled)
    classes[HIGHLIGHTED_TOKEN] = bool(day.highlighted)
    return classes


def legend(locale: str = DEFAULT_LOCALE) -> List[LegendItem]:
    """One localized legend entry per day state, in DayType order, None excluded."""
    labels = _locale(locale)["legend"]
    return [
        LegendItem(text=labels[t.name], style=state_style(t))
        for t in DayType
        if t != DayType.NONE
    ]
