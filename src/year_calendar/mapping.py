from typing import Dict, Any

DATE_FORMAT = "%d-%m-%Y"

DAYS_IN_WEEK = 7
MONTHS_IN_YEAR = 12

# DayType name -> style token, total over DayType.
STYLE_TOKENS = {
    "NONE": "",
    "HOLIDAY": "active-holiday",
    "PLANNED": "planned",
    "SCHEDULE_USED": "schedule-used",
    "OFF_SCHEDULE_USED": "off-schedule-used",
    "RECALL": "recall",
}

HOLIDAY_TOKEN = "holiday"
DISABLED_TOKEN = "disabled"
HIGHLIGHTED_TOKEN = "highlighted"

LOCALES: Dict[str, Dict[str, Any]] = {
    "ru": {
        "months": (
            "Январь", "Февраль", "Март", "Апрель", "Май", "Июнь",
            "Июль", "Август", "Сентябрь", "Октябрь", "Ноябрь", "Декабрь",
        ),
        "weekdays": ("Пн", "Вт", "Ср", "Чт", "Пт", "Сб", "Вс"),
        # one / few / many
        "day_forms": ("день", "дня", "дней"),
        "plural": "slavic",
        "legend": {
            "PLANNED": "Запланированный отпуск",
            "SCHEDULE_USED": "Использованный отпуск по графику",
            "OFF_SCHEDULE_USED": "Использованный отпуск вне графика",
            "RECALL": "Отзыв из отпуска",
            "HOLIDAY": "Праздничный день в отпуске",
        },
    },
    "en": {
        "months": (
            "January", "February", "March", "April", "May", "June",
            "July", "August", "September", "October", "November", "December",
        ),
        "weekdays": ("Mo", "Tu", "We", "Th", "Fr", "Sa", "Su"),
        "day_forms": ("day", "days", "days"),
        "plural": "english",
        "legend": {
            "PLANNED": "Planned vacation",
            "SCHEDULE_USED": "Scheduled vacation used",
            "OFF_SCHEDULE_USED": "Off-schedule vacation used",
            "RECALL": "Recalled from vacation",
            "HOLIDAY": "Holiday during vacation",
        },
    },
}

DEFAULT_LOCALE = "ru"


def _locale(code: str) -> Dict[str, Any]:
    """
    Small helper to fetch a locale table and raise a calendar error on unknown codes.

    Parameters
    ----------
    code: str
        The locale code, a key of the LOCALES dictionary (case-insensitive).

    Returns
    -------
    Dict[str, Any]
        The locale table.
    """
    from . import UnknownLocaleError

    key = (code or "").strip().lower()
    try:
        return LOCALES[key]
    except KeyError:
        raise UnknownLocaleError(f"Unknown locale: {code!r}. Available: {', '.join(sorted(LOCALES))}") from None
