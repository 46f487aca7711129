"""City meshes drawn over urban areas (`map/cities.txt`)."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from worldgen.domain.wrappers import ColorIndex, Distance, MeshId, PixelDensity, PixelStep
from worldgen.loaders.clause import duplicated, load_clause_file


@dataclass(frozen=True, slots=True)
class BuildingMesh:
    """Meshes used at ``distance`` pixels or more from the edge of the urban area."""

    distance: Distance
    mesh: tuple[MeshId, ...]


@dataclass(frozen=True, slots=True)
class CityGroup:
    color_index: ColorIndex
    density: PixelDensity
    building: tuple[BuildingMesh, ...] = duplicated()


@dataclass(frozen=True, slots=True)
class Cities:
    types_source: Path
    pixel_step_x: PixelStep
    pixel_step_y: PixelStep
    city_group: tuple[CityGroup, ...] = duplicated()

    @classmethod
    def from_file(cls, path: Path) -> Cities:
        return load_clause_file(path, cls)
