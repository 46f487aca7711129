"""Enumerations used by the map catalogs."""

from __future__ import annotations

from enum import StrEnum


class ProvinceType(StrEnum):
    """Kind of a province as written in `definition.csv`."""

    LAND = "land"
    SEA = "sea"
    LAKE = "lake"


class AdjacencyType(StrEnum):
    """Kind of an explicit adjacency between two provinces."""

    IMPASSABLE = "impassable"
    SEA = "sea"
    RIVER = "river"
    LARGE_RIVER = "large_river"


class WeatherType(StrEnum):
    """Size of the weather effect drawn at a weather position."""

    BIG = "big"
    SMALL = "small"
