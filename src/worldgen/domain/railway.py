"""Railways (`map/railways.txt`): ``<level> <count> <province> ...`` per line."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from worldgen.domain.wrappers import ProvinceId, RailLevel
from worldgen.errors import InvalidRailwayError
from worldgen.loaders.lines import iter_line_records, parse_prefixed_count_line


@dataclass(frozen=True, slots=True)
class Railway:
    """A railway running through ``provinces`` in order."""

    level: RailLevel
    length: int
    provinces: tuple[ProvinceId, ...]

    @classmethod
    def parse(cls, line: str) -> Railway:
        level, length, provinces = parse_prefixed_count_line(
            line, RailLevel, ProvinceId, InvalidRailwayError
        )
        return cls(level, length, provinces)


@dataclass(frozen=True, slots=True)
class Railways:
    railways: tuple[Railway, ...]

    def __len__(self) -> int:
        return len(self.railways)

    @classmethod
    def from_file(cls, path: Path) -> Railways:
        return cls(tuple(iter_line_records(path, Railway.parse)))
