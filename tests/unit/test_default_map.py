"""Tests for the map manifest."""

from __future__ import annotations

from pathlib import Path

import pytest

from worldgen.domain.default_map import RASTER_KEYS, DefaultMap, MapManifest
from worldgen.errors import ClauseDecodeError, MapFileNotFoundError
from worldgen.loaders.clause import loads


@pytest.fixture
def manifest(data_dir) -> MapManifest:
    return MapManifest.load(data_dir / "map" / "default.map")


def test_reads_every_key(manifest):
    default_map = manifest.default_map
    assert default_map.definitions == Path("definition.csv")
    assert default_map.tree_definition == Path("trees.bmp")
    assert default_map.climate == Path("weatherpositions.txt")
    assert default_map.tree == (3, 4, 7, 10)


def test_paths_resolve_next_to_the_manifest(manifest, data_dir):
    assets = manifest.asset_paths()
    assert assets["definitions"] == data_dir / "map" / "definition.csv"
    assert assets["adjacency_rules"] == data_dir / "map" / "adjacency_rules.txt"
    assert set(manifest.raster_paths()) == set(RASTER_KEYS)
    assert manifest.raster_paths()["tree_definition"] == data_dir / "map" / "trees.bmp"


def test_climate_is_optional(data_dir):
    text = (data_dir / "map" / "default.map").read_text()
    default_map = loads(text.replace('climate = "weatherpositions.txt"', ""), DefaultMap)
    assert default_map.climate is None
    assert "climate" not in default_map.relative_paths()


def test_missing_key(data_dir):
    text = (data_dir / "map" / "default.map").read_text()
    with pytest.raises(ClauseDecodeError, match="heightmap"):
        loads(text.replace('heightmap = "heightmap.bmp"', ""), DefaultMap)


@pytest.mark.parametrize("path", [Path("/"), Path(".."), Path(".")])
def test_manifest_path_needs_a_parent_and_a_name(manifest, path):
    unrooted = MapManifest(path, manifest.default_map)
    with pytest.raises(MapFileNotFoundError):
        unrooted.resolve(Path("definition.csv"))


def test_missing_manifest(tmp_path):
    with pytest.raises(MapFileNotFoundError):
        MapManifest.load(tmp_path / "map" / "default.map")
