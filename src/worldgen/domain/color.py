"""Map color palette (`map/colors.txt`)."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from worldgen.domain.wrappers import Color
from worldgen.loaders.clause import duplicated, load_clause_file


@dataclass(frozen=True, slots=True)
class Colors:
    color: tuple[Color, ...] = duplicated()

    def __len__(self) -> int:
        return len(self.color)

    @classmethod
    def from_file(cls, path: Path) -> Colors:
        return load_clause_file(path, cls)
