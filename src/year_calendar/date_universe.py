import numpy as np
from typing import Dict
from dataclasses import dataclass, field


def is_leap_year(year: int) -> bool:
    """Gregorian leap-year rule."""
    return year % 4 == 0 and (year % 100 != 0 or year % 400 == 0)


def days_in_month(year: int, month_index: int) -> int:
    """Number of days of month `month_index` (0 for January) in `year`."""
    first = np.datetime64(f"{year:04d}-01", "M") + np.timedelta64(month_index, "M")
    span = (first + np.timedelta64(1, "M")).astype("datetime64[D]") - first.astype("datetime64[D]")
    return int(span.astype("int64"))


@dataclass()
class YearUniverse:
    """
    Structure representing the static day table of one calendar year :
        1. Non-lazy fields (built at init):
            - First and last day of the year : np.datetime64
            - Contiguous days of the year : np.ndarray
        2. Lazy fields (built on demand and cached):
            - Zero-based ISO weekday (Monday=0, Sunday=6) : np.ndarray
            - Month index (0 to 11) : np.ndarray
            - Day of month (1 to 31) : np.ndarray
            - Offset of each month's first day in `days` : np.ndarray
            - Month lengths : np.ndarray

    This structure is immutable after construction, the grid builder only reads from it.
    """
    year: int

    days: np.ndarray = field(init=False)
    _cache: Dict[str, np.ndarray] = field(default_factory=dict, init=False, repr=False)

    def __post_init__(self) -> None:
        self.start64 = np.datetime64(f"{self.year:04d}-01-01", "D")
        self.end64 = np.datetime64(f"{self.year:04d}-12-31", "D")

        n_days = int((self.end64 - self.start64) / np.timedelta64(1, "D")) + 1
        self.days = self.start64 + np.arange(n_days, dtype="int64").astype("timedelta64[D]")

    def __len__(self) -> int:
        return int(self.days.shape[0])

    @property
    def weekday(self) -> np.ndarray:
        key = "weekday"
        if key not in self._cache:
            # 1970-01-01 was a Thursday
            days_int = self.days.astype("datetime64[D]").astype("int64")
            self._cache[key] = ((days_int + 3) % 7).astype("uint8")
        return self._cache[key]

    @property
    def month(self) -> np.ndarray:
        key = "month"
        if key not in self._cache:
            months = self.days.astype("datetime64[M]")
            m = (months - np.datetime64(f"{self.year:04d}-01", "M")).astype("int64")
            self._cache[key] = m.astype("uint8")
        return self._cache[key]

    @property
    def day(self) -> np.ndarray:
        key = "day"
        if key not in self._cache:
            d = (self.days - self.days.astype("datetime64[M]").astype("datetime64[D]")).astype("int64") + 1
            self._cache[key] = d.astype("uint8")
        return self._cache[key]

    @property
    def month_start(self) -> np.ndarray:
        key = "month_start"
        if key not in self._cache:
            self._cache[key] = np.flatnonzero(self.day == 1).astype("int64")
        return self._cache[key]

    @property
    def month_length(self) -> np.ndarray:
        key = "month_length"
        if key not in self._cache:
            self._cache[key] = np.bincount(self.month, minlength=12).astype("int64")
        return self._cache[key]

    def first_weekday(self, month_index: int) -> int:
        """Zero-based ISO weekday of day 1 of the month."""
        return int(self.weekday[self.month_start[month_index]])

    def length(self, month_index: int) -> int:
        return int(self.month_length[month_index])
