"""Seasonal color grading (`map/seasons.txt`)."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from worldgen.domain.calendar import SeasonDate
from worldgen.domain.wrappers import Hsv
from worldgen.loaders.clause import load_clause_file


@dataclass(frozen=True, slots=True)
class Season:
    """Color adjustments applied to the north, center and south of the map."""

    start_date: SeasonDate
    end_date: SeasonDate
    hsv_north: Hsv
    colorbalance_north: Hsv
    hsv_center: Hsv
    colorbalance_center: Hsv
    hsv_south: Hsv
    colorbalance_south: Hsv


@dataclass(frozen=True, slots=True)
class TreeSeason:
    start_date: SeasonDate
    end_date: SeasonDate


@dataclass(frozen=True, slots=True)
class Seasons:
    winter: Season
    spring: Season
    summer: Season
    autumn: Season
    tree_winter: TreeSeason
    tree_winter2: TreeSeason
    tree_spring: TreeSeason
    tree_spring2: TreeSeason
    tree_summer: TreeSeason
    tree_summer2: TreeSeason
    tree_autumn: TreeSeason
    tree_autumn2: TreeSeason

    @classmethod
    def from_file(cls, path: Path) -> Seasons:
        return load_clause_file(path, cls)
