"""Assemble a complete :class:`WorldMap` from a map directory.

Loading is fail-fast: the first sub-load that raises aborts the whole map
and is reported as :class:`~worldgen.errors.MapLoadError` naming the stage.
Checks the game documents but does not enforce (unique province ids and
colors, sea crossings with a blocking province) are run afterwards and only
logged.
"""

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import TypeVar

from worldgen.config import Settings, get_settings
from worldgen.domain.adjacency import Adjacencies, AdjacencyRules
from worldgen.domain.building import Buildings
from worldgen.domain.city import Cities
from worldgen.domain.color import Colors
from worldgen.domain.continent import Continents
from worldgen.domain.default_map import MapManifest
from worldgen.domain.enums import AdjacencyType
from worldgen.domain.province import Definitions
from worldgen.domain.railway import Railways
from worldgen.domain.raster import RgbGrid
from worldgen.domain.season import Seasons
from worldgen.domain.state import States
from worldgen.domain.state_map import Airports, RocketSites
from worldgen.domain.strategic_region import StrategicRegions
from worldgen.domain.supply_node import SupplyNodes
from worldgen.domain.unit_stack import UnitStacks
from worldgen.domain.weather_position import WeatherPositions
from worldgen.errors import MapError, MapLoadError
from worldgen.interfaces.raster import IRasterLoader
from worldgen.loaders.raster import PillowRasterLoader

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class WorldMap:
    """Everything the map directory describes, built once and never modified."""

    manifest: MapManifest
    definitions: Definitions
    continents: Continents
    adjacency_rules: AdjacencyRules
    adjacencies: Adjacencies
    seasons: Seasons
    strategic_regions: StrategicRegions
    supply_nodes: SupplyNodes
    railways: Railways
    airports: Airports
    rocket_sites: RocketSites
    buildings: Buildings
    states: States
    cities: Cities
    colors: Colors
    unit_stacks: UnitStacks
    weather_positions: WeatherPositions
    provinces_image: RgbGrid
    terrain_image: RgbGrid
    rivers_image: RgbGrid
    heightmap_image: RgbGrid
    trees_image: RgbGrid

    @property
    def width(self) -> int:
        return self.provinces_image.width

    @property
    def height(self) -> int:
        return self.provinces_image.height

    def summary(self) -> dict[str, int]:
        """Catalog sizes, for reporting."""

        return {
            "provinces": len(self.definitions),
            "continents": len(self.continents),
            "adjacency_rules": len(self.adjacency_rules),
            "adjacencies": len(self.adjacencies),
            "strategic_regions": len(self.strategic_regions),
            "supply_nodes": len(self.supply_nodes),
            "railways": len(self.railways),
            "airports": len(self.airports),
            "rocket_sites": len(self.rocket_sites),
            "buildings": len(self.buildings),
            "states": len(self.states),
            "city_groups": len(self.cities.city_group),
            "colors": len(self.colors),
            "unit_stacks": len(self.unit_stacks),
            "weather_positions": len(self.weather_positions),
        }


def _stage(name: str, load: Callable[..., T], *args: object, **kwargs: object) -> T:
    logger.debug("Loading %s", name)
    try:
        return load(*args, **kwargs)
    except MapError as exc:
        raise MapLoadError(name, exc) from exc


def load_map(
    root: Path,
    *,
    settings: Settings | None = None,
    raster_loader: IRasterLoader | None = None,
) -> WorldMap:
    """Load and cross-check the map under ``root`` (the game or mod directory)."""

    settings = settings or get_settings()
    raster_loader = raster_loader or PillowRasterLoader()
    root = Path(root)

    manifest = _stage("manifest", MapManifest.load, settings.locate(root, settings.manifest_path))
    assets = _stage("manifest paths", manifest.asset_paths)

    definitions = _stage(
        "definitions",
        Definitions.from_files,
        assets["definitions"],
        settings.locate(root, settings.terrain_types_path),
        encoding=settings.csv_encoding,
    )
    continents = _stage("continents", Continents.from_file, assets["continent"])
    adjacency_rules = _stage("adjacency rules", AdjacencyRules.from_file, assets["adjacency_rules"])
    adjacencies = _stage(
        "adjacencies", Adjacencies.from_file, assets["adjacencies"], encoding=settings.csv_encoding
    )
    seasons = _stage("seasons", Seasons.from_file, assets["seasons"])

    strategic_regions = _stage(
        "strategic regions",
        StrategicRegions.from_dir,
        settings.locate(root, settings.strategic_regions_dir),
    )
    supply_nodes = _stage(
        "supply nodes", SupplyNodes.from_file, settings.locate(root, settings.supply_nodes_path)
    )
    railways = _stage("railways", Railways.from_file, settings.locate(root, settings.railways_path))
    airports = _stage("airports", Airports.from_file, settings.locate(root, settings.airports_path))
    rocket_sites = _stage(
        "rocket sites", RocketSites.from_file, settings.locate(root, settings.rocket_sites_path)
    )
    buildings = _stage(
        "buildings",
        Buildings.from_files,
        settings.locate(root, settings.building_types_path),
        settings.locate(root, settings.buildings_path),
        encoding=settings.csv_encoding,
    )
    states = _stage("states", States.from_dir, settings.locate(root, settings.states_dir))
    cities = _stage("cities", Cities.from_file, settings.locate(root, settings.cities_path))
    colors = _stage("colors", Colors.from_file, settings.locate(root, settings.colors_path))
    unit_stacks = _stage(
        "unit stacks",
        UnitStacks.from_file,
        settings.locate(root, settings.unit_stacks_path),
        encoding=settings.csv_encoding,
    )
    weather_positions = _stage(
        "weather positions",
        WeatherPositions.from_file,
        settings.locate(root, settings.weather_positions_path),
        encoding=settings.csv_encoding,
    )

    rasters = manifest.raster_paths()
    world = WorldMap(
        manifest=manifest,
        definitions=definitions,
        continents=continents,
        adjacency_rules=adjacency_rules,
        adjacencies=adjacencies,
        seasons=seasons,
        strategic_regions=strategic_regions,
        supply_nodes=supply_nodes,
        railways=railways,
        airports=airports,
        rocket_sites=rocket_sites,
        buildings=buildings,
        states=states,
        cities=cities,
        colors=colors,
        unit_stacks=unit_stacks,
        weather_positions=weather_positions,
        provinces_image=_stage("provinces bitmap", raster_loader, rasters["provinces"]),
        terrain_image=_stage("terrain bitmap", raster_loader, rasters["terrain"]),
        rivers_image=_stage("rivers bitmap", raster_loader, rasters["rivers"]),
        heightmap_image=_stage("heightmap bitmap", raster_loader, rasters["heightmap"]),
        trees_image=_stage("trees bitmap", raster_loader, rasters["tree_definition"]),
    )

    audit_definitions(definitions)
    audit_adjacencies(adjacencies)
    logger.info("Loaded map from %s: %s", root, world.summary())
    return world


def audit_definitions(definitions: Definitions) -> list[str]:
    """Log province ids and colors used by more than one definition."""

    problems: list[str] = []
    ids = Counter(definition.id for definition in definitions.definitions)
    for province, count in sorted(ids.items()):
        if count > 1:
            problems.append(f"province id {province} is defined {count} times")
    colors = Counter(definition.color for definition in definitions.definitions)
    for color, count in sorted(colors.items()):
        if count > 1:
            problems.append(f"color ({color.format()}) is shared by {count} provinces")
    for problem in problems:
        logger.warning("Definitions: %s", problem)
    return problems


def audit_adjacencies(adjacencies: Adjacencies) -> list[str]:
    """Log sea crossings that name no blocking province."""

    problems = [
        f"sea adjacency {adjacency.from_province} -> {adjacency.to_province} has no through province"
        for adjacency in adjacencies.adjacencies
        if adjacency.adjacency_type is AdjacencyType.SEA and adjacency.through is None
    ]
    for problem in problems:
        logger.warning("Adjacencies: %s", problem)
    return problems
