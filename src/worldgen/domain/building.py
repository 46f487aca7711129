"""Building placements (`map/buildings.txt`) and the building type catalog."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from worldgen.domain.wrappers import BuildingId, ProvinceId, StateId
from worldgen.errors import DuplicateBuildingTypeError, InvalidBuildingsFileError
from worldgen.loaders.delimited import load_records
from worldgen.loaders.keyfile import load_key_file

logger = logging.getLogger(__name__)

# Placed on the map but never declared in `common/buildings`.
IMPLICIT_BUILDING_TYPES = frozenset({BuildingId("floating_harbor")})


@dataclass(frozen=True, slots=True)
class StateBuilding:
    """Where the model of a building sits inside a state.

    ``adjacent_sea_province`` is only meaningful for naval buildings; 0 means
    none.
    """

    state_id: StateId
    building_id: BuildingId
    x: float
    y: float
    z: float
    rotation: float
    adjacent_sea_province: ProvinceId = ProvinceId(0)


@dataclass(frozen=True, slots=True)
class Buildings:
    types: frozenset[BuildingId]
    buildings: tuple[StateBuilding, ...]

    def __len__(self) -> int:
        return len(self.buildings)

    @classmethod
    def from_files(
        cls, types_path: Path, buildings_path: Path, *, encoding: str = "latin-1"
    ) -> Buildings:
        """Load the type catalog and every placement that refers to a known type.

        Placements of undeclared types are logged and dropped, as are rows
        that do not decode.
        """

        types = load_building_types(types_path)
        placements = load_records(
            buildings_path, StateBuilding, has_headers=False, strict=False, encoding=encoding
        )
        kept = []
        for placement in placements:
            if placement.building_id not in types:
                logger.warning(
                    "%s: building type %r is not declared in %s",
                    buildings_path,
                    placement.building_id.value,
                    types_path,
                )
                continue
            kept.append(placement)
        return cls(types, tuple(kept))


def load_building_types(path: Path) -> frozenset[BuildingId]:
    declared = load_key_file(
        path,
        BuildingId,
        invalid_error=InvalidBuildingsFileError,
        duplicate_error=DuplicateBuildingTypeError,
    )
    return declared | IMPLICIT_BUILDING_TYPES
