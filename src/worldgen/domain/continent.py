"""Continent names (`map/continent.txt`)."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from worldgen.domain.wrappers import Continent, ContinentIndex
from worldgen.loaders.clause import load_clause_file


@dataclass(frozen=True, slots=True)
class Continents:
    """Continents in file order; province definitions refer to them by 1-based index."""

    continents: tuple[Continent, ...]

    def __len__(self) -> int:
        return len(self.continents)

    def name_of(self, index: ContinentIndex) -> Continent | None:
        """Return the continent for ``index``; 0 (sea) and unknown indices give ``None``."""

        if 1 <= index.value <= len(self.continents):
            return self.continents[index.value - 1]
        return None

    @classmethod
    def from_file(cls, path: Path) -> Continents:
        return load_clause_file(path, cls)
