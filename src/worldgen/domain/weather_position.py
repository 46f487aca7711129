"""Weather effect anchors (`map/weatherpositions.txt`)."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from worldgen.domain.enums import WeatherType
from worldgen.domain.wrappers import StrategicRegionId
from worldgen.loaders.delimited import load_records


@dataclass(frozen=True, slots=True)
class WeatherPosition:
    """Where the weather of a strategic region is drawn."""

    id: StrategicRegionId
    x: float
    y: float
    z: float
    weather_type: WeatherType


@dataclass(frozen=True, slots=True)
class WeatherPositions:
    positions: tuple[WeatherPosition, ...]

    def __len__(self) -> int:
        return len(self.positions)

    @classmethod
    def from_file(cls, path: Path, *, encoding: str = "latin-1") -> WeatherPositions:
        """Malformed rows are logged and skipped."""

        return cls(
            tuple(
                load_records(
                    path, WeatherPosition, has_headers=False, strict=False, encoding=encoding
                )
            )
        )
