"""Configuration for the map loader."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Where to find each map file, relative to the game (or mod) root.

    The manifest names most files itself; these cover the rest.
    """

    model_config = SettingsConfigDict(
        env_prefix="WORLDGEN_", env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    manifest_path: Path = Field(default=Path("map/default.map"), description="Map manifest")
    strategic_regions_dir: Path = Field(
        default=Path("map/strategicregions"), description="Directory of strategic region files"
    )
    states_dir: Path = Field(default=Path("history/states"), description="Directory of state files")
    supply_nodes_path: Path = Field(default=Path("map/supply_nodes.txt"))
    railways_path: Path = Field(default=Path("map/railways.txt"))
    airports_path: Path = Field(default=Path("map/airports.txt"))
    rocket_sites_path: Path = Field(default=Path("map/rocketsites.txt"))
    buildings_path: Path = Field(default=Path("map/buildings.txt"))
    building_types_path: Path = Field(
        default=Path("common/buildings/00_buildings.txt"),
        description="File whose first block declares the building types",
    )
    terrain_types_path: Path = Field(
        default=Path("common/terrain/00_terrain.txt"),
        description="File whose first block declares the terrain categories",
    )
    unit_stacks_path: Path = Field(default=Path("map/unitstacks.txt"))
    weather_positions_path: Path = Field(default=Path("map/weatherpositions.txt"))
    cities_path: Path = Field(default=Path("map/cities.txt"))
    colors_path: Path = Field(default=Path("map/colors.txt"))
    csv_encoding: str = Field(
        default="latin-1", description="Text encoding of the semicolon separated files"
    )
    log_level: str = Field(default="INFO", description="Logging level used by the CLI")

    def locate(self, root: Path, relative: Path) -> Path:
        """Resolve a configured path against the map root."""

        return relative if relative.is_absolute() else root / relative


@lru_cache
def get_settings() -> Settings:
    """Return a cached Settings instance."""

    return Settings()
