"""The map manifest (`map/default.map`).

The manifest names the bitmaps and text files that make up the map.  Every
path in it is relative to the directory holding the manifest.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from worldgen.errors import MapFileNotFoundError
from worldgen.loaders.clause import load_clause_file

RASTER_KEYS = ("provinces", "terrain", "rivers", "heightmap", "tree_definition")


@dataclass(frozen=True, slots=True)
class DefaultMap:
    """Decoded contents of `default.map`.

    ``tree`` lists the palette indices of `trees.bmp` that actually get trees.
    """

    definitions: Path
    provinces: Path
    positions: Path
    terrain: Path
    rivers: Path
    heightmap: Path
    tree_definition: Path
    continent: Path
    adjacency_rules: Path
    adjacencies: Path
    ambient_object: Path
    seasons: Path
    tree: tuple[int, ...]
    climate: Path | None = None

    def relative_paths(self) -> dict[str, Path]:
        """Every path the manifest names, keyed by manifest key."""

        paths = {
            "definitions": self.definitions,
            "provinces": self.provinces,
            "positions": self.positions,
            "terrain": self.terrain,
            "rivers": self.rivers,
            "heightmap": self.heightmap,
            "tree_definition": self.tree_definition,
            "continent": self.continent,
            "adjacency_rules": self.adjacency_rules,
            "adjacencies": self.adjacencies,
            "ambient_object": self.ambient_object,
            "seasons": self.seasons,
        }
        if self.climate is not None:
            paths["climate"] = self.climate
        return paths


@dataclass(frozen=True, slots=True)
class MapManifest:
    """A decoded manifest together with the file it came from."""

    path: Path
    default_map: DefaultMap

    @classmethod
    def load(cls, path: Path) -> MapManifest:
        return cls(path, load_clause_file(path, DefaultMap))

    def resolve(self, relative: Path) -> Path:
        """Join ``relative`` onto the manifest's directory.

        The manifest path needs both a parent and a file name; otherwise the
        manifest itself is reported as missing.
        """

        if self.path.name in ("", ".", "..") or self.path.parent == self.path:
            raise MapFileNotFoundError(self.path)
        return self.path.parent / relative

    def asset_paths(self) -> dict[str, Path]:
        return {key: self.resolve(rel) for key, rel in self.default_map.relative_paths().items()}

    def raster_paths(self) -> dict[str, Path]:
        assets = self.asset_paths()
        return {key: assets[key] for key in RASTER_KEYS}
