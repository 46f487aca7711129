"""States (`history/states/*.txt`)."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType

from worldgen.domain.wrappers import (
    BuildingsMaxLevelFactor,
    CountryTag,
    LocalSupplies,
    Manpower,
    ProvinceId,
    StateCategoryName,
    StateId,
    StateName,
    VictoryPoints,
)
from worldgen.errors import DuplicateStateError, MapFileNotFoundError, MapIOError
from worldgen.loaders.clause import duplicated, load_clause_file

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class StateHistory:
    owner: CountryTag
    controller: CountryTag | None = None
    victory_points: tuple[tuple[ProvinceId, VictoryPoints], ...] = duplicated()


@dataclass(frozen=True, slots=True)
class State:
    """A state and its starting setup.

    ``manpower`` and ``state_category`` keep every entry the file lists; the
    game only reads the last one, see :attr:`current_manpower` and
    :attr:`current_category`.
    """

    id: StateId
    name: StateName
    provinces: frozenset[ProvinceId]
    manpower: tuple[Manpower, ...] = duplicated()
    state_category: tuple[StateCategoryName, ...] = duplicated()
    history: StateHistory | None = None
    local_supplies: LocalSupplies | None = None
    impassable: bool | None = None
    buildings_max_level_factor: BuildingsMaxLevelFactor | None = None

    @property
    def current_manpower(self) -> Manpower | None:
        return self.manpower[-1] if self.manpower else None

    @property
    def current_category(self) -> StateCategoryName | None:
        return self.state_category[-1] if self.state_category else None


@dataclass(frozen=True, slots=True)
class StateFile:
    state: State


@dataclass(frozen=True, slots=True)
class States:
    states: MappingProxyType[StateId, State]

    def __len__(self) -> int:
        return len(self.states)

    def get(self, state_id: StateId) -> State | None:
        return self.states.get(state_id)

    @classmethod
    def from_dir(cls, path: Path) -> States:
        """Load every state file in ``path``; two files may not share a state id."""

        if not path.is_dir():
            raise MapFileNotFoundError(path, f"State directory not found: {path}")
        try:
            files = sorted(entry for entry in path.iterdir() if entry.is_file())
        except OSError as exc:
            raise MapIOError(path) from exc
        states: dict[StateId, State] = {}
        origins: dict[StateId, Path] = {}
        for file in files:
            state = load_clause_file(file, StateFile).state
            if state.id in states:
                raise DuplicateStateError(
                    f"state {state.id} is declared in both {origins[state.id]} and {file}"
                )
            states[state.id] = state
            origins[state.id] = file
        logger.info("Loaded %d states from %s", len(states), path)
        return cls(MappingProxyType(states))
