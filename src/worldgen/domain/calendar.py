"""Date literals used by weather periods and seasons."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Self

from worldgen.domain.wrappers import ScalarWrapper
from worldgen.errors import ScalarParseError

# No leap years; index 0 is January.
DAYS_IN_MONTH = (31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)

_DAY_MONTH = re.compile(r"([0-9]+)\.([0-9]+)")
_SEASON_DATE = re.compile(r"([0-9]+)\.([0-9]+)\.([0-9]+)")


@dataclass(frozen=True, order=True)
class DayMonth(ScalarWrapper):
    """Zero-indexed day of the month (0-30) and month of the year (0-11).

    Written as ``day.month``; ``0.0`` is the first of January and ``30.11``
    the last of December.  Day and month are compared month first.
    """

    month: int
    day: int

    def __post_init__(self) -> None:
        for part in (self.day, self.month):
            if not isinstance(part, int) or isinstance(part, bool):
                raise ScalarParseError("DayMonth", (self.day, self.month), "expected integers")
        if not 0 <= self.day <= 30:
            raise ScalarParseError("DayMonth", self.format(), "day must be within 0-30")
        if not 0 <= self.month <= 11:
            raise ScalarParseError("DayMonth", self.format(), "month must be within 0-11")

    @classmethod
    def of(cls, day: int, month: int) -> Self:
        return cls(month=month, day=day)

    @classmethod
    def parse(cls, text: str) -> Self:
        match = _DAY_MONTH.fullmatch(text) if isinstance(text, str) else None
        if match is None:
            raise ScalarParseError(cls.__name__, text)
        return cls.of(int(match.group(1)), int(match.group(2)))

    def format(self) -> str:
        return f"{self.day}.{self.month}"


@dataclass(frozen=True, order=True)
class SeasonDate(ScalarWrapper):
    """A calendar date written as ``year.month.day`` with a one-based month."""

    year: int
    month: int
    day: int

    def __post_init__(self) -> None:
        for part in (self.year, self.month, self.day):
            if not isinstance(part, int) or isinstance(part, bool):
                raise ScalarParseError("SeasonDate", (self.year, self.month, self.day))
        if not 1 <= self.month <= 12:
            raise ScalarParseError("SeasonDate", self.format(), "month must be within 1-12")
        if not 1 <= self.day <= DAYS_IN_MONTH[self.month - 1]:
            raise ScalarParseError("SeasonDate", self.format(), "day out of range for month")

    @classmethod
    def parse(cls, text: str) -> Self:
        match = _SEASON_DATE.fullmatch(text) if isinstance(text, str) else None
        if match is None:
            raise ScalarParseError(cls.__name__, text)
        year, month, day = (int(group) for group in match.groups())
        return cls(year, month, day)

    def format(self) -> str:
        return f"{self.year:02d}.{self.month:02d}.{self.day:02d}"
