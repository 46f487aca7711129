"""Type catalogs declared as the keys of a file's first block.

``common/buildings/00_buildings.txt`` and ``common/terrain/00_terrain.txt``
both open with a single top-level block (``buildings = { ... }``,
``categories = { ... }``) whose keys name the known types.  Only the keys
are read; the definitions behind them belong to other parts of the game.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TypeVar

from worldgen.domain.wrappers import ScalarWrapper
from worldgen.errors import MapValidationError
from worldgen.loaders.clause import ClauseBlock, parse_clause
from worldgen.loaders.text import read_legacy_text

logger = logging.getLogger(__name__)

K = TypeVar("K", bound=ScalarWrapper)


def load_key_file(
    path: Path,
    key_type: type[K],
    *,
    invalid_error: type[MapValidationError],
    duplicate_error: type[MapValidationError],
) -> frozenset[K]:
    """Return the keys of the first top-level block in ``path``.

    Raises ``invalid_error`` when the file has no leading block and
    ``duplicate_error`` when a key is declared twice.
    """

    block = parse_clause(read_legacy_text(path), path)
    entries = block.entries
    if not entries or not isinstance(entries[0].value, ClauseBlock):
        raise invalid_error(f"{path}: expected a leading '<name> = {{ ... }}' block")
    container = entries[0].value
    keys: set[K] = set()
    for entry in container.entries:
        key = key_type.parse(entry.key)
        if key in keys:
            raise duplicate_error(f"{path}: {key} declared twice")
        keys.add(key)
    logger.debug("%s: %d types declared in %r", path, len(keys), entries[0].key)
    return frozenset(keys)
