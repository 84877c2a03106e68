from __future__ import annotations

import re
import datetime as dt
from enum import Enum, IntEnum
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Tuple

from . import CalendarError, UnknownTypeError
from .utils import parse_date


# =========================
# Enumerations
# =========================
class DayType(IntEnum):
    """Vacation / day-kind classification of one calendar cell."""
    NONE = 0
    HOLIDAY = 1
    PLANNED = 2
    SCHEDULE_USED = 3
    OFF_SCHEDULE_USED = 4
    RECALL = 5


class HolidayType(str, Enum):
    HOLIDAY = "holiday"
    WEEKEND = "weekend"


class VacationDateType(IntEnum):
    PLANNED = 0
    SCHEDULE_USED = 1
    OFF_SCHEDULE_USED = 2
    RECALL = 3
    HOLIDAY = 4


def _coerce_enum(enum_cls, value: Any):
    """
    Accept an enum member, its value, or its (case-insensitive) name.

    Raises UnknownTypeError for anything else.
    """
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError:
        pass
    if isinstance(value, str):
        key = re.sub(r"(?<=[a-z])(?=[A-Z])", "_", value.strip()).upper().replace("-", "_")
        if key in enum_cls.__members__:
            return enum_cls[key]
        try:
            return enum_cls(value.strip().lower())
        except ValueError:
            pass
    raise UnknownTypeError(f"Unknown {enum_cls.__name__}: {value!r}")


# =========================
# Feed records
# =========================
@dataclass(frozen=True)
class Holiday:
    """
    Official non-working day record as supplied by the holiday feed.

    Attributes
    ----------
    date: str
        The day in DD-MM-YYYY format.
    type: HolidayType
        "holiday" for a public holiday, "weekend" for a non-working weekend-type day.
    """
    date: str
    type: HolidayType = HolidayType.HOLIDAY

    def __post_init__(self):
        parse_date(self.date)
        object.__setattr__(self, "type", _coerce_enum(HolidayType, self.type))

    @property
    def day(self) -> dt.date:
        return parse_date(self.date)

    @classmethod
    def from_dict(cls, record: Dict[str, Any]) -> "Holiday":
        try:
            return cls(date=record["date"], type=record.get("type", HolidayType.HOLIDAY))
        except (KeyError, TypeError, AttributeError) as e:
            raise CalendarError(f"Invalid holiday record: {record!r}") from e


@dataclass(frozen=True)
class VacationDate:
    """Vacation record as supplied by the vacation-date feed. The DD-MM-YYYY date is validated on construction."""
    date: str
    type: VacationDateType

    def __post_init__(self):
        parse_date(self.date)
        object.__setattr__(self, "type", _coerce_enum(VacationDateType, self.type))

    @property
    def day(self) -> dt.date:
        return parse_date(self.date)

    @classmethod
    def from_dict(cls, record: Dict[str, Any]) -> "VacationDate":
        try:
            return cls(date=record["date"], type=record["type"])
        except (KeyError, TypeError, AttributeError) as e:
            raise CalendarError(f"Invalid vacation record: {record!r}") from e


@dataclass(frozen=True)
class Period:
    """Inclusive date range exchanged as two DD-MM-YYYY strings."""
    start: str
    end: str

    def days(self) -> Iterator[dt.date]:
        cur = parse_date(self.start)
        last = parse_date(self.end)
        while cur <= last:
            yield cur
            cur += dt.timedelta(days=1)


# =========================
# Grid cells
# =========================
@dataclass(frozen=True)
class DayIdentity:
    """
    Immutable part of a calendar cell.

    `value` is the day of month (1..31), or 0 for a leading placeholder cell.
    `date` is the end-of-day instant of a real day and None for placeholders.
    """
    value: int
    date: Optional[dt.datetime] = None

    @property
    def is_placeholder(self) -> bool:
        return self.value == 0


@dataclass
class DayStatus:
    """Mutable part of a calendar cell, owned by its month."""
    state: DayType = DayType.NONE
    holiday: bool = False
    weekend: bool = False
    disabled: bool = False
    highlighted: bool = False


class _StatusField:
    """Descriptor forwarding an attribute of CalendarDay to its DayStatus record."""

    def __set_name__(self, owner, name):
        self.name = name

    def __get__(self, instance, owner=None):
        if instance is None:
            return self
        return getattr(instance.status, self.name)

    def __set__(self, instance, value):
        setattr(instance.status, self.name, value)


class CalendarDay:
    """
    View of one grid cell: an immutable DayIdentity plus the DayStatus record stored
    by the owning month at the same position.

    Reading or writing `state`, `holiday`, `weekend`, `disabled` or `highlighted`
    goes straight to the status record, so two views of the same position always agree.
    """
    __slots__ = ("identity", "status")

    state = _StatusField()
    holiday = _StatusField()
    weekend = _StatusField()
    disabled = _StatusField()
    highlighted = _StatusField()

    def __init__(self, identity: DayIdentity, status: Optional[DayStatus] = None):
        self.identity = identity
        self.status = status if status is not None else DayStatus()

    @property
    def value(self) -> int:
        return self.identity.value

    @property
    def date(self) -> Optional[dt.datetime]:
        return self.identity.date

    @property
    def is_placeholder(self) -> bool:
        return self.identity.is_placeholder

    def __eq__(self, other) -> bool:
        if not isinstance(other, CalendarDay):
            return NotImplemented
        return self.identity == other.identity and self.status == other.status

    def __repr__(self) -> str:
        return (
            f"CalendarDay(value={self.value}, state={self.state.name}, "
            f"holiday={self.holiday}, weekend={self.weekend})"
        )


@dataclass(frozen=True)
class LegendItem:
    text: str
    style: str


@dataclass
class CalendarMonth:
    """
    One month of the year grid.

    Attributes
    ----------
    name: str
        Localized month title.
    identities: Tuple[DayIdentity, ...]
        `empty_days` placeholders followed by the real days of the month.
    weeks: int
        Number of grid rows, ceil((empty_days + days in month) / 7).
    empty_days: int
        Placeholder cells before day 1, equal to the zero-based ISO weekday of day 1.
    statuses: List[DayStatus]
        One mutable status record per identity, same order.
    """
    name: str
    identities: Tuple[DayIdentity, ...]
    weeks: int
    empty_days: int
    statuses: List[DayStatus] = field(default_factory=list)

    def __post_init__(self):
        if not self.statuses:
            self.statuses = [DayStatus() for _ in self.identities]

    def __len__(self) -> int:
        return len(self.identities)

    def day(self, index: int) -> CalendarDay:
        """Cell at position `index` of the grid row-major layout (placeholders included)."""
        return CalendarDay(self.identities[index], self.statuses[index])

    @property
    def days(self) -> List[CalendarDay]:
        return [CalendarDay(i, s) for i, s in zip(self.identities, self.statuses)]

    @property
    def days_in_month(self) -> int:
        return len(self.identities) - self.empty_days

    @property
    def active_days(self) -> int:
        from .aggregate import active_days
        return active_days(self)
