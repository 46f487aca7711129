"""Line oriented grammars: one record per non-blank line.

Three shapes are in use:

* id-array-per-line, ``<key> = { <id> <id> ... }`` (airports, rocket sites)
* prefixed-count-list, ``<level> <count> <id> ...`` (railways)
* sentinel-pair, ``1 <id>`` (supply nodes)

Each parser takes the error class to raise so callers keep their own
error names.  A bad line always aborts the whole file.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from pathlib import Path
from typing import TypeVar

from worldgen.domain.wrappers import ScalarWrapper
from worldgen.errors import MapFormatError, MapValidationError
from worldgen.loaders.clause import ClauseBlock, Scalar, parse_clause
from worldgen.loaders.text import iter_content_lines, read_legacy_text

K = TypeVar("K", bound=ScalarWrapper)
V = TypeVar("V", bound=ScalarWrapper)
T = TypeVar("T")


def parse_id_array_line(
    line: str, key_type: type[K], item_type: type[V], error: type[MapValidationError]
) -> tuple[K, tuple[V, ...]]:
    """Parse ``<key> = { <item> ... }`` through the clause parser."""

    try:
        block = parse_clause(line)
    except MapFormatError as exc:
        raise error(f"{line.strip()!r}: {exc}") from exc
    entries = block.entries
    if len(block.items) != 1 or len(entries) != 1 or entries[0].op != "=":
        raise error(f"{line.strip()!r}: expected '<id> = {{ <id> ... }}'")
    entry = entries[0]
    if not isinstance(entry.value, ClauseBlock) or not entry.value.is_array():
        raise error(f"{line.strip()!r}: expected a list of ids")
    try:
        key = key_type.parse(entry.key)
        items = []
        for value in entry.value.values:
            if not isinstance(value, Scalar):
                raise error(f"{line.strip()!r}: nested blocks are not ids")
            items.append(item_type.parse(value.text))
    except MapFormatError as exc:
        raise error(f"{line.strip()!r}: {exc}") from exc
    return key, tuple(items)


def parse_prefixed_count_line(
    line: str, prefix_type: type[K], item_type: type[V], error: type[MapValidationError]
) -> tuple[K, int, tuple[V, ...]]:
    """Parse ``<prefix> <count> <item> ...``.

    Item tokens that do not parse are skipped; the line is only valid when
    ``count`` equals the number of items that did parse.
    """

    tokens = line.split()
    if len(tokens) < 2:
        raise error(f"{line.strip()!r}: expected '<level> <count> <id> ...'")
    try:
        prefix = prefix_type.parse(tokens[0])
    except MapFormatError as exc:
        raise error(f"{line.strip()!r}: {exc}") from exc
    if not (tokens[1].isascii() and tokens[1].isdigit()):
        raise error(f"{line.strip()!r}: invalid count {tokens[1]!r}")
    count = int(tokens[1])
    items = []
    for token in tokens[2:]:
        try:
            items.append(item_type.parse(token))
        except MapFormatError:
            continue
    if count != len(items):
        raise error(f"{line.strip()!r}: declares {count} ids but lists {len(items)}")
    return prefix, count, tuple(items)


def parse_sentinel_pair_line(
    line: str, sentinel: str, item_type: type[V], error: type[MapValidationError]
) -> V:
    """Parse ``<sentinel> <item>``; anything else is an error."""

    tokens = line.split()
    if len(tokens) != 2 or tokens[0] != sentinel:
        raise error(f"{line.strip()!r}: expected '{sentinel} <id>'")
    try:
        return item_type.parse(tokens[1])
    except MapFormatError as exc:
        raise error(f"{line.strip()!r}: {exc}") from exc


def iter_line_records(path: Path, parse_line: Callable[[str], T]) -> Iterator[T]:
    """Apply ``parse_line`` to every line of ``path`` that is not blank or a comment.

    Errors are re-raised with the file name and line number prepended.
    """

    for number, line in iter_content_lines(read_legacy_text(path)):
        try:
            yield parse_line(line)
        except MapValidationError as exc:
            raise type(exc)(f"{path}:{number}: {exc}") from exc
