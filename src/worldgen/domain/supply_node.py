"""Supply nodes (`map/supply_nodes.txt`): ``1 <province>`` per line."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from worldgen.domain.wrappers import ProvinceId
from worldgen.errors import InvalidSupplyNodeError
from worldgen.loaders.lines import iter_line_records, parse_sentinel_pair_line

# Every line starts with this literal; the game assigns it no other meaning.
LINE_MARKER = "1"


def parse_supply_node(line: str) -> ProvinceId:
    return parse_sentinel_pair_line(line, LINE_MARKER, ProvinceId, InvalidSupplyNodeError)


@dataclass(frozen=True, slots=True)
class SupplyNodes:
    """Provinces holding a supply node; repeated lines collapse."""

    nodes: frozenset[ProvinceId]

    def __len__(self) -> int:
        return len(self.nodes)

    def __contains__(self, province: object) -> bool:
        return province in self.nodes

    @classmethod
    def from_file(cls, path: Path) -> SupplyNodes:
        return cls(frozenset(iter_line_records(path, parse_supply_node)))
