import json
import logging
import datetime as dt
from pathlib import Path
from typing import Any, Iterable, List, Mapping, Union
from dataclasses import dataclass, field
from abc import ABC, abstractmethod

from . import CalendarError, MissingDependencyError
from .models import Holiday, HolidayType, VacationDate
from .utils import format_date

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def _read_json(path: PathLike) -> Any:
    with open(path, encoding="utf-8") as f:
        try:
            return json.load(f)
        except json.JSONDecodeError as e:
            raise CalendarError(f"Invalid JSON in {path}: {e}") from e


def _check_records(data: Any, path: PathLike) -> List[dict]:
    if not isinstance(data, list):
        raise CalendarError(f"Expected a JSON list of records in {path}, got {type(data).__name__}.")
    return data


def _load_records(path: PathLike) -> List[dict]:
    """Read a JSON list of {"date": ..., "type": ...} objects."""
    return _check_records(_read_json(path), path)


class AbstractHolidayProvider(ABC):
    """
    Abstract source of the holiday feed for a given year.
    """
    @abstractmethod
    def get_holidays(self, year: int) -> List[Holiday]:
        """
        Return the holiday and weekend-type records of `year`.

        Parameters
        ----------
        year: int
            The requested year.
        """
        pass


class AbstractVacationProvider(ABC):
    """
    Abstract source of the vacation-date feed for one employee and year.
    """
    @abstractmethod
    def get_vacation_dates(self, employee_id: str, year: int) -> List[VacationDate]:
        pass


@dataclass(frozen=True)
class StaticHolidayProvider(AbstractHolidayProvider):
    """
    In-memory holiday feed. Records are filtered by year on request.

    Attributes
    ----------
    holidays: tuple of Holiday
        All known records, any year.
    """
    holidays: Iterable[Holiday] = ()

    def __post_init__(self):
        records = tuple(h if isinstance(h, Holiday) else Holiday.from_dict(h) for h in self.holidays)
        object.__setattr__(self, "holidays", records)

    def get_holidays(self, year: int) -> List[Holiday]:
        return [h for h in self.holidays if h.day.year == year]


@dataclass(frozen=True)
class StaticVacationProvider(AbstractVacationProvider):
    """In-memory vacation feed keyed by employee id. Records are validated up front."""
    vacation_dates: Mapping[str, Iterable[VacationDate]] = field(default_factory=dict, hash=False)

    def __post_init__(self):
        records = {
            str(k): tuple(v if isinstance(v, VacationDate) else VacationDate.from_dict(v) for v in vs)
            for k, vs in self.vacation_dates.items()
        }
        object.__setattr__(self, "vacation_dates", records)

    def get_vacation_dates(self, employee_id: str, year: int) -> List[VacationDate]:
        return [v for v in self.vacation_dates.get(str(employee_id), ()) if v.day.year == year]


@dataclass(frozen=True)
class JsonHolidayProvider(AbstractHolidayProvider):
    """
    Holiday feed read from a JSON file holding a list of {"date": "DD-MM-YYYY", "type": "holiday"|"weekend"}.
    """
    path: PathLike

    def get_holidays(self, year: int) -> List[Holiday]:
        records = [Holiday.from_dict(r) for r in _load_records(self.path)]
        out = [h for h in records if h.day.year == year]
        logger.debug("Loaded %s holidays for %s from %s", len(out), year, self.path)
        return out


@dataclass(frozen=True)
class JsonVacationProvider(AbstractVacationProvider):
    """
    Vacation feed read from a JSON file.

    The file holds either a list of records (one employee) or an object mapping employee ids
    to lists of records.
    """
    path: PathLike

    def get_vacation_dates(self, employee_id: str, year: int) -> List[VacationDate]:
        data = _read_json(self.path)
        if isinstance(data, dict):
            data = data.get(employee_id, [])
        records = [VacationDate.from_dict(r) for r in _check_records(data, self.path)]
        return [v for v in records if v.day.year == year]


@dataclass(frozen=True)
class CountryHolidayProvider(AbstractHolidayProvider):
    """
    Holiday feed built from public holidays of a country in the workalendar package.

    Specific documentation : https://pypi.org/project/workalendar/

    Attributes
    ----------
    country_code: str
        ISO code of the country, e.g. "RU", "FR", "US".
    """
    country_code: str

    def get_holidays(self, year: int) -> List[Holiday]:
        """
        Return every public holiday of `year` as a "holiday" record.

        Parameters
        ----------
        year: int
            The requested year.
        """
        try:
            from workalendar.registry import registry
        except Exception as e:
            raise MissingDependencyError(
                "workalendar is required for country holidays. "
                "Install extra: pip install year-calendar[country]"
            ) from e

        code = self.country_code.strip().upper()
        cal = registry.get(code)
        if cal is None:
            raise CalendarError(f"Unknown workalendar country code '{code}'.")

        days = sorted({d for d, _label in cal().holidays(year) if isinstance(d, dt.date)})
        return [Holiday(date=format_date(d), type=HolidayType.HOLIDAY) for d in days]
