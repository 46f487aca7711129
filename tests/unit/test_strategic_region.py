"""Tests for strategic region files and their weather periods."""

from __future__ import annotations

import logging

import pytest

from worldgen.domain.calendar import DayMonth
from worldgen.domain.strategic_region import (
    StrategicRegionFile,
    StrategicRegions,
    file_name_id,
    load_strategic_region,
)
from worldgen.domain.wrappers import ProvinceId, StrategicRegionId, StrategicRegionName, Temperature
from worldgen.errors import (
    ClauseDecodeError,
    InvalidStrategicRegionError,
    InvalidStrategicRegionNameError,
    MapFileNotFoundError,
    ScalarParseError,
    StrategicRegionFileNameError,
)
from worldgen.loaders.clause import loads
from worldgen.loaders.clause_writer import dumps

PERIOD = """
        period = {{
            between = {{ {between} }}
            temperature = {{ -1.0 12.0 }}
            no_phenomenon = 0.5
            rain_light = 0.25
            rain_heavy = 0.25
            snow = 0.0
            blizzard = 0.0
            arctic_water = 0.0
            mud = 0.0
            sandstorm = 0.0
            min_snow_level = 0.0
        }}
"""


def _region_text(region_id: int, name: str = "STRATEGICREGION_X", between: str = "0.0 30.11") -> str:
    return (
        "strategic_region = {\n"
        f"    id = {region_id}\n"
        f'    name = "{name}"\n'
        "    provinces = { 1 2 }\n"
        "    weather = {" + PERIOD.format(between=between) + "    }\n"
        "}\n"
    )


def _write_region(directory, file_name: str, text: str):
    directory.mkdir(exist_ok=True)
    path = directory / file_name
    path.write_text(text)
    return path


class TestSample:
    """The bundled sample directory."""

    def test_loads_every_region(self, data_dir) -> None:
        """Both files load and are keyed by id."""
        regions = StrategicRegions.from_dir(data_dir / "map" / "strategicregions")
        assert len(regions) == 2
        first = regions.get(StrategicRegionId(1))
        assert first.name == StrategicRegionName("STRATEGICREGION_1")
        assert first.provinces == (ProvinceId(1), ProvinceId(4), ProvinceId(6))
        assert regions.get(StrategicRegionId(2)).provinces == (ProvinceId(2), ProvinceId(5))

    def test_periods(self, data_dir) -> None:
        """Periods keep their order and optional day/night temperatures."""
        region = load_strategic_region(data_dir / "map" / "strategicregions" / "1-StrategicRegion.txt")
        first, second = region.weather.period
        assert first.ranges() == [(DayMonth.of(0, 0), DayMonth.of(30, 0))]
        assert first.temperature == (Temperature(-5.0), Temperature(8.0))
        assert first.temperature_day_night is None
        assert second.ranges() == [
            (DayMonth.of(0, 1), DayMonth.of(30, 1)),
            (DayMonth.of(0, 11), DayMonth.of(30, 11)),
        ]
        assert second.temperature_day_night == (Temperature(2.0), Temperature(-4.0))


class TestFileNames:
    """``<id>-StrategicRegion.txt``"""

    def test_reads_the_id(self) -> None:
        """The part before the dash is the id."""
        assert file_name_id("42-StrategicRegion.txt") == StrategicRegionId(42)

    @pytest.mark.parametrize("name", ["StrategicRegion.txt", "abc-StrategicRegion.txt"])
    def test_unusable_names_are_errors(self, name: str) -> None:
        """No dash, or no integer before it, cannot be loaded."""
        with pytest.raises(StrategicRegionFileNameError):
            file_name_id(name)

    def test_odd_suffix_is_only_logged(self, caplog) -> None:
        """A usable id with a different suffix still loads."""
        with caplog.at_level(logging.WARNING, logger="worldgen.domain.strategic_region"):
            assert file_name_id("3-Region.txt") == StrategicRegionId(3)
        assert "3-Region.txt" in caplog.text


class TestValidation:
    """Per-file checks."""

    def test_id_must_match_the_file_name(self, tmp_path) -> None:
        """A mismatch fails the whole directory."""
        directory = tmp_path / "strategicregions"
        _write_region(directory, "1-StrategicRegion.txt", _region_text(1))
        _write_region(directory, "42-StrategicRegion.txt", _region_text(7))
        with pytest.raises(StrategicRegionFileNameError, match="42"):
            StrategicRegions.from_dir(directory)

    @pytest.mark.parametrize("file_name", ["0-StrategicRegion.txt", "9-StrategicRegion.txt"])
    def test_id_zero_is_reserved(self, tmp_path, file_name: str) -> None:
        """Region 0 is rejected whatever the file name says."""
        path = _write_region(tmp_path / "regions", file_name, _region_text(0))
        with pytest.raises(InvalidStrategicRegionError):
            load_strategic_region(path)

    def test_empty_name(self, tmp_path) -> None:
        """Every region needs a name."""
        path = _write_region(tmp_path / "regions", "5-StrategicRegion.txt", _region_text(5, name=""))
        with pytest.raises(InvalidStrategicRegionNameError):
            load_strategic_region(path)

    @pytest.mark.parametrize("between", ["", "0.0", "0.0 30.0 0.1"])
    def test_between_needs_pairs(self, tmp_path, between: str) -> None:
        """An empty or odd-length ``between`` fails the decode."""
        path = _write_region(
            tmp_path / "regions", "5-StrategicRegion.txt", _region_text(5, between=between)
        )
        with pytest.raises(ClauseDecodeError):
            load_strategic_region(path)

    def test_dates_are_bounded(self, tmp_path) -> None:
        """Day 31 does not exist in the zero-indexed calendar."""
        path = _write_region(
            tmp_path / "regions", "5-StrategicRegion.txt", _region_text(5, between="0.0 31.0")
        )
        with pytest.raises(ClauseDecodeError):
            load_strategic_region(path)

    def test_missing_directory(self, tmp_path) -> None:
        with pytest.raises(MapFileNotFoundError):
            StrategicRegions.from_dir(tmp_path / "absent")


def test_day_month_literals():
    assert DayMonth.parse("30.11") == DayMonth.of(30, 11)
    assert DayMonth.of(30, 0) < DayMonth.of(0, 1)
    assert DayMonth.of(5, 3).format() == "5.3"
    with pytest.raises(ScalarParseError):
        DayMonth.parse("0.12")


def test_region_round_trip(data_dir):
    path = data_dir / "map" / "strategicregions" / "1-StrategicRegion.txt"
    region_file = StrategicRegionFile(load_strategic_region(path))
    assert loads(dumps(region_file), StrategicRegionFile) == region_file
