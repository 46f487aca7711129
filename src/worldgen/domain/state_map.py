"""Per-state province lists: airports and rocket sites.

Both files hold one ``<state> = { <province> ... }`` entry per line.  When a
state appears twice the later line wins.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType

from worldgen.domain.wrappers import ProvinceId, StateId
from worldgen.errors import StateMapLineError
from worldgen.loaders.lines import iter_line_records, parse_id_array_line

logger = logging.getLogger(__name__)


def parse_state_line(line: str) -> tuple[StateId, tuple[ProvinceId, ...]]:
    return parse_id_array_line(line, StateId, ProvinceId, StateMapLineError)


def load_state_map(path: Path) -> MappingProxyType[StateId, tuple[ProvinceId, ...]]:
    entries: dict[StateId, tuple[ProvinceId, ...]] = {}
    for state, provinces in iter_line_records(path, parse_state_line):
        if state in entries:
            logger.debug("%s: state %s listed again, keeping the later line", path, state)
        entries[state] = provinces
    return MappingProxyType(entries)


@dataclass(frozen=True, slots=True)
class Airports:
    airports: MappingProxyType[StateId, tuple[ProvinceId, ...]]

    def __len__(self) -> int:
        return len(self.airports)

    @classmethod
    def from_file(cls, path: Path) -> Airports:
        return cls(load_state_map(path))


@dataclass(frozen=True, slots=True)
class RocketSites:
    rocket_sites: MappingProxyType[StateId, tuple[ProvinceId, ...]]

    def __len__(self) -> int:
        return len(self.rocket_sites)

    @classmethod
    def from_file(cls, path: Path) -> RocketSites:
        return cls(load_state_map(path))
