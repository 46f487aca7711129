"""Tests for province definitions and the terrain catalog."""

from __future__ import annotations

import logging

import pytest

from worldgen.domain.enums import ProvinceType
from worldgen.domain.province import Definition, Definitions, load_definitions, load_terrain
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
from worldgen.errors import (
    DuplicateTerrainTypeError,
    InvalidTerrainFileError,
    RecordDecodeError,
)

TERRAIN_TYPES = ("unknown", "ocean", "lakes", "forest", "hills", "plains", "urban")


def _definition_rows(count: int) -> str:
    terrains = ("hills", "plains", "forest")
    lines = []
    for index in range(count):
        r, g, b = index % 256, (index // 256) % 256, (index // 65536) % 256
        kind = "sea" if index % 7 == 3 else "land"
        continent = 0 if kind == "sea" else 1 + index % 3
        lines.append(f"{index};{r};{g};{b};{kind};false;{terrains[index % 3]};{continent}")
    return "\n".join(lines) + "\n"


def test_first_row_of_the_sample(data_dir):
    definitions = load_definitions(data_dir / "map" / "definition.csv")
    assert definitions[0] == Definition(
        id=ProvinceId(0),
        r=Red(0),
        g=Green(0),
        b=Blue(0),
        province_type=ProvinceType.LAND,
        coastal=Coastal(False),
        terrain=Terrain("hills"),
        continent=ContinentIndex(2),
    )
    assert definitions[2].province_type is ProvinceType.SEA
    assert definitions[1].color == Color.from_rgb(10, 20, 30)


def test_large_definition_file_keeps_every_row(tmp_path):
    path = tmp_path / "definition.csv"
    path.write_text(_definition_rows(17007), encoding="latin-1")
    definitions = load_definitions(path)
    assert len(definitions) == 17007
    assert definitions[16999].id == ProvinceId(16999)


def test_single_row_decodes_every_column(tmp_path):
    path = tmp_path / "definition.csv"
    path.write_text("0;0;0;0;land;false;hills;2\n")
    (definition,) = load_definitions(path)
    assert definition.id == ProvinceId(0)
    assert definition.color.as_tuple() == (0, 0, 0)
    assert definition.province_type is ProvinceType.LAND
    assert definition.coastal == Coastal(False)
    assert definition.terrain == Terrain("hills")
    assert definition.continent == ContinentIndex(2)


@pytest.mark.parametrize(
    "row",
    [
        "1;256;0;0;land;false;hills;1",
        "1;0;0;0;swamp;false;hills;1",
        "1;0;0;0;land;maybe;hills;1",
        "one;0;0;0;land;false;hills;1",
    ],
)
def test_definitions_are_strict(tmp_path, row):
    path = tmp_path / "definition.csv"
    path.write_text(f"0;0;0;0;land;false;hills;2\n{row}\n")
    with pytest.raises(RecordDecodeError):
        load_definitions(path)


def test_terrain_catalog(data_dir):
    terrain = load_terrain(data_dir / "common" / "terrain" / "00_terrain.txt")
    assert terrain == frozenset(Terrain(name) for name in TERRAIN_TYPES)


def test_terrain_catalog_rejects_duplicates(tmp_path):
    path = tmp_path / "00_terrain.txt"
    path.write_text("categories = { hills = { } plains = { } hills = { } }\n")
    with pytest.raises(DuplicateTerrainTypeError):
        load_terrain(path)


@pytest.mark.parametrize("text", ["", "# nothing here\n", "categories = hills\n"])
def test_terrain_catalog_needs_a_leading_block(tmp_path, text):
    path = tmp_path / "00_terrain.txt"
    path.write_text(text)
    with pytest.raises(InvalidTerrainFileError):
        load_terrain(path)


def test_undeclared_terrain_is_kept_and_logged(tmp_path, caplog):
    definitions_path = tmp_path / "definition.csv"
    definitions_path.write_text("1;1;1;1;land;false;hills;1\n2;2;2;2;land;false;swampland;1\n")
    terrain_path = tmp_path / "00_terrain.txt"
    terrain_path.write_text("categories = { hills = { } }\n")

    with caplog.at_level(logging.WARNING, logger="worldgen.domain.province"):
        definitions = Definitions.from_files(definitions_path, terrain_path)

    assert len(definitions) == 2
    assert "swampland" in caplog.text
    assert definitions.by_id()[ProvinceId(2)].terrain == Terrain("swampland")


def test_lookup_by_id_and_color(data_dir):
    definitions = Definitions.from_files(
        data_dir / "map" / "definition.csv", data_dir / "common" / "terrain" / "00_terrain.txt"
    )
    by_color = definitions.by_color()
    assert len(by_color) == len(definitions)
    assert by_color[Color.from_rgb(10, 20, 30)].id == ProvinceId(1)
    assert by_color[Color.from_rgb(40, 50, 60)] == definitions.by_id()[ProvinceId(2)]
    assert Color.from_rgb(1, 2, 3) not in by_color
