"""Strategic regions (`map/strategicregions/<id>-StrategicRegion.txt`)."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType

from worldgen.domain.calendar import DayMonth
from worldgen.domain.wrappers import (
    ProvinceId,
    SnowLevel,
    StrategicRegionId,
    StrategicRegionName,
    Temperature,
    Weight,
)
from worldgen.errors import (
    InvalidStrategicRegionError,
    InvalidStrategicRegionNameError,
    MapFileNotFoundError,
    MapIOError,
    ScalarParseError,
    StrategicRegionFileNameError,
)
from worldgen.loaders.clause import duplicated, load_clause_file

logger = logging.getLogger(__name__)

FILE_SUFFIX = "StrategicRegion.txt"


@dataclass(frozen=True, slots=True)
class Period:
    """Weather odds for one or more stretches of the year.

    ``between`` holds start/end pairs of zero-indexed ``day.month`` dates.
    """

    between: tuple[DayMonth, ...]
    temperature: tuple[Temperature, Temperature]
    no_phenomenon: Weight
    rain_light: Weight
    rain_heavy: Weight
    snow: Weight
    blizzard: Weight
    arctic_water: Weight
    mud: Weight
    sandstorm: Weight
    min_snow_level: SnowLevel
    temperature_day_night: tuple[Temperature, Temperature] | None = None

    def __post_init__(self) -> None:
        if not self.between or len(self.between) % 2:
            raise ValueError("between must hold one or more start/end pairs")

    def ranges(self) -> list[tuple[DayMonth, DayMonth]]:
        return list(zip(self.between[::2], self.between[1::2]))


@dataclass(frozen=True, slots=True)
class Weather:
    period: tuple[Period, ...] = duplicated()


@dataclass(frozen=True, slots=True)
class StrategicRegion:
    id: StrategicRegionId
    name: StrategicRegionName
    provinces: tuple[ProvinceId, ...]
    weather: Weather


@dataclass(frozen=True, slots=True)
class StrategicRegionFile:
    strategic_region: StrategicRegion


def file_name_id(file_name: str) -> StrategicRegionId:
    """Return the id encoded in ``<id>-StrategicRegion.txt``.

    A name that yields an id but does not follow the pattern is only logged.
    """

    parts = file_name.split("-")
    if len(parts) < 2:
        raise StrategicRegionFileNameError(f"{file_name}: expected '<id>-{FILE_SUFFIX}'")
    try:
        file_id = StrategicRegionId.parse(parts[0])
    except ScalarParseError as exc:
        raise StrategicRegionFileNameError(f"{file_name}: {exc}") from exc
    if file_id.value < 1 or parts[1] != FILE_SUFFIX:
        logger.warning("Strategic region file %s does not match '<id>-%s'", file_name, FILE_SUFFIX)
    return file_id


def load_strategic_region(path: Path) -> StrategicRegion:
    """Load and check one strategic region file."""

    file_id = file_name_id(path.name)
    region = load_clause_file(path, StrategicRegionFile).strategic_region
    if region.id.value == 0:
        raise InvalidStrategicRegionError(f"{path}: strategic region id 0 is reserved")
    if not region.name.value:
        raise InvalidStrategicRegionNameError(f"{path}: strategic region {region.id} has no name")
    if region.id != file_id:
        raise StrategicRegionFileNameError(
            f"{path}: declares strategic region {region.id} but the file name says {file_id}"
        )
    return region


@dataclass(frozen=True, slots=True)
class StrategicRegions:
    strategic_regions: MappingProxyType[StrategicRegionId, StrategicRegion]

    def __len__(self) -> int:
        return len(self.strategic_regions)

    def get(self, region_id: StrategicRegionId) -> StrategicRegion | None:
        return self.strategic_regions.get(region_id)

    @classmethod
    def from_dir(cls, path: Path) -> StrategicRegions:
        """Load every region file in ``path``; one bad file fails the whole directory."""

        if not path.is_dir():
            raise MapFileNotFoundError(path, f"Strategic region directory not found: {path}")
        try:
            files = sorted(entry for entry in path.iterdir() if entry.is_file())
        except OSError as exc:
            raise MapIOError(path) from exc
        regions: dict[StrategicRegionId, StrategicRegion] = {}
        for file in files:
            region = load_strategic_region(file)
            regions[region.id] = region
        logger.info("Loaded %d strategic regions from %s", len(regions), path)
        return cls(MappingProxyType(regions))
