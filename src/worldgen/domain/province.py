"""Province definitions (`definition.csv`) and the terrain catalog."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from worldgen.domain.enums import ProvinceType
from worldgen.domain.wrappers import (
    Blue,
    Coastal,
    Color,
    ContinentIndex,
    Green,
    ProvinceId,
    Red,
    Terrain,
)
from worldgen.errors import DuplicateTerrainTypeError, InvalidTerrainFileError
from worldgen.loaders.delimited import load_records
from worldgen.loaders.keyfile import load_key_file

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Definition:
    """One province: its id, bitmap color and basic properties.

    Sea provinces use continent 0; land provinces index the continent list
    starting at 1.
    """

    id: ProvinceId
    r: Red
    g: Green
    b: Blue
    province_type: ProvinceType
    coastal: Coastal
    terrain: Terrain
    continent: ContinentIndex

    @property
    def color(self) -> Color:
        return Color(self.r, self.g, self.b)


@dataclass(frozen=True, slots=True)
class Definitions:
    """Every province definition, in file order, plus the declared terrain set."""

    definitions: tuple[Definition, ...]
    terrain: frozenset[Terrain]

    def __len__(self) -> int:
        return len(self.definitions)

    def by_id(self) -> dict[ProvinceId, Definition]:
        return {definition.id: definition for definition in self.definitions}

    def by_color(self) -> dict[Color, Definition]:
        return {definition.color: definition for definition in self.definitions}

    @classmethod
    def from_files(
        cls, definitions_path: Path, terrain_path: Path, *, encoding: str = "latin-1"
    ) -> Definitions:
        terrain = load_terrain(terrain_path)
        definitions = load_definitions(definitions_path, encoding=encoding)
        for definition in definitions:
            if definition.terrain not in terrain:
                logger.warning(
                    "Province %s uses undeclared terrain %r", definition.id, definition.terrain.value
                )
        return cls(tuple(definitions), terrain)


def load_definitions(path: Path, *, encoding: str = "latin-1") -> list[Definition]:
    """Read `definition.csv`; any malformed row fails the load."""

    return load_records(path, Definition, has_headers=False, strict=True, encoding=encoding)


def load_terrain(path: Path) -> frozenset[Terrain]:
    """Read the terrain categories declared in `common/terrain/00_terrain.txt`."""

    return load_key_file(
        path,
        Terrain,
        invalid_error=InvalidTerrainFileError,
        duplicate_error=DuplicateTerrainTypeError,
    )
