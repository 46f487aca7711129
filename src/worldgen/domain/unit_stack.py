"""Unit model placements (`map/unitstacks.txt`)."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from worldgen.domain.wrappers import ModelIndex, ProvinceId
from worldgen.loaders.delimited import load_records


@dataclass(frozen=True, slots=True)
class UnitStack:
    province_id: ProvinceId
    model_index: ModelIndex
    x: float
    y: float
    z: float
    rotation: float
    scale: float


@dataclass(frozen=True, slots=True)
class UnitStacks:
    stacks: tuple[UnitStack, ...]

    def __len__(self) -> int:
        return len(self.stacks)

    @classmethod
    def from_file(cls, path: Path, *, encoding: str = "latin-1") -> UnitStacks:
        """Malformed rows are logged and skipped."""

        return cls(
            tuple(load_records(path, UnitStack, has_headers=False, strict=False, encoding=encoding))
        )
