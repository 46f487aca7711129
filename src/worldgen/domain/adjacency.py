"""Explicit province adjacencies (`adjacencies.csv`) and adjacency rules."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Annotated, Any

from pydantic import BeforeValidator

from worldgen.domain.enums import AdjacencyType
from worldgen.domain.wrappers import AdjacencyRuleName, Icon, ProvinceId, XCoord, YCoord
from worldgen.loaders.clause import duplicated, load_clause_file
from worldgen.loaders.delimited import column, load_records

logger = logging.getLogger(__name__)

UNSET = "-1"
TERMINATOR = ProvinceId(-1)


def _unset_to_none(value: Any) -> Any:
    """Map the `-1` / empty-cell markers onto ``None``."""

    if isinstance(value, str) and value.strip() in ("", UNSET):
        return None
    if isinstance(value, int) and not isinstance(value, bool) and value == -1:
        return None
    return value


Unset = BeforeValidator(_unset_to_none)


@dataclass(frozen=True, slots=True)
class Adjacency:
    """A connection between two provinces that the bitmap alone does not express.

    ``through`` names the province whose control blocks the crossing.  The
    coordinate overrides move the drawn crossing; ``None`` keeps the default.
    """

    from_province: ProvinceId = column("From")
    to_province: ProvinceId = column("To")
    adjacency_type: Annotated[AdjacencyType | None, Unset] = column("Type", default=None)
    through: Annotated[ProvinceId | None, Unset] = column("Through", default=None)
    start_x: Annotated[XCoord | None, Unset] = column("StartX", default=None)
    start_y: Annotated[YCoord | None, Unset] = column("StartY", default=None)
    stop_x: Annotated[XCoord | None, Unset] = column("StopX", default=None)
    stop_y: Annotated[YCoord | None, Unset] = column("StopY", default=None)
    adjacency_rule_name: Annotated[AdjacencyRuleName | None, Unset] = column(
        "AdjacencyRuleName", "rule_name", default=None
    )
    comment: str | None = column("Comment", default=None)


@dataclass(frozen=True, slots=True)
class Adjacencies:
    adjacencies: tuple[Adjacency, ...]

    def __len__(self) -> int:
        return len(self.adjacencies)

    @classmethod
    def from_file(cls, path: Path, *, encoding: str = "latin-1") -> Adjacencies:
        return cls(tuple(load_adjacencies(path, encoding=encoding)))


def load_adjacencies(path: Path, *, encoding: str = "latin-1") -> list[Adjacency]:
    """Read `adjacencies.csv`.

    The file ends with a `-1;-1;...` terminator row, which is dropped.  Every
    other row is kept as written.
    """

    rows = load_records(path, Adjacency, has_headers=True, strict=True, encoding=encoding)
    return [row for row in rows if not _is_terminator(row)]


def _is_terminator(row: Adjacency) -> bool:
    return row.from_province == TERMINATOR and row.to_province == TERMINATOR


# --- rules ------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class AdjacencyLogic:
    """Which unit kinds may cross, for one relation to the controller."""

    army: bool
    navy: bool
    submarine: bool
    trade: bool


@dataclass(frozen=True, slots=True)
class IsDisabled:
    tooltip: str


@dataclass(frozen=True, slots=True)
class AdjacencyRule:
    """Access rules for a strait or canal, keyed by name."""

    name: AdjacencyRuleName
    contested: AdjacencyLogic
    enemy: AdjacencyLogic
    friend: AdjacencyLogic
    neutral: AdjacencyLogic
    required_provinces: tuple[ProvinceId, ...]
    icon: Icon
    offset: tuple[int, int, int]
    is_disabled: IsDisabled | None = None


@dataclass(frozen=True, slots=True)
class AdjacencyRulesFile:
    adjacency_rule: tuple[AdjacencyRule, ...] = duplicated()


@dataclass(frozen=True, slots=True)
class AdjacencyRules:
    adjacency_rules: MappingProxyType[AdjacencyRuleName, AdjacencyRule]

    def __len__(self) -> int:
        return len(self.adjacency_rules)

    def get(self, name: AdjacencyRuleName) -> AdjacencyRule | None:
        return self.adjacency_rules.get(name)

    @classmethod
    def from_file(cls, path: Path) -> AdjacencyRules:
        """Read `adjacency_rules.txt`; a repeated name replaces the earlier rule."""

        rules: dict[AdjacencyRuleName, AdjacencyRule] = {}
        for rule in load_clause_file(path, AdjacencyRulesFile).adjacency_rule:
            if rule.name in rules:
                logger.warning("%s: adjacency rule %r redefined", path, rule.name.value)
            rules[rule.name] = rule
        return cls(MappingProxyType(rules))
