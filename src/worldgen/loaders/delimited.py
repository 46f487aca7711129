"""Semicolon separated record files (`definition.csv`, `adjacencies.csv`, ...).

Rows are read with pandas as plain strings and decoded into a frozen
dataclass through pydantic.  Each dataclass field is one column.  Files
without a header map columns to fields by position; files with a header
map them by name, where a field may list the header spellings it accepts
through :func:`column`.

A strict load fails on the first bad row.  A loose load logs the bad row
and keeps going.
"""

from __future__ import annotations

import csv
import dataclasses
import io
import logging
from collections.abc import Sequence
from functools import lru_cache
from pathlib import Path
from typing import Any, TypeVar

import pandas as pd
from pydantic import TypeAdapter, ValidationError

from worldgen.errors import RecordDecodeError
from worldgen.loaders.text import UTF8_BOM, read_bytes

logger = logging.getLogger(__name__)

R = TypeVar("R")

SEPARATOR = ";"
ALIASES = "aliases"


def column(*aliases: str, **kwargs: Any) -> Any:
    """Declare a record field that accepts the given header spellings."""

    return dataclasses.field(metadata={ALIASES: aliases}, **kwargs)


@lru_cache(maxsize=None)
def _adapter(record_type: type) -> TypeAdapter[Any]:
    return TypeAdapter(record_type)


def _record_fields(record_type: type) -> list[dataclasses.Field[Any]]:
    return [fld for fld in dataclasses.fields(record_type) if fld.init]


def _has_default(fld: dataclasses.Field[Any]) -> bool:
    return fld.default is not dataclasses.MISSING or fld.default_factory is not dataclasses.MISSING


def _decode_text(path: Path, encoding: str) -> str:
    data = read_bytes(path)
    if data.startswith(UTF8_BOM):
        data = data[len(UTF8_BOM) :]
    try:
        return data.decode(encoding)
    except UnicodeDecodeError as exc:
        raise RecordDecodeError(path, None, f"not valid {encoding} text: {exc.reason}") from exc


def _summarize(exc: ValidationError) -> str:
    first = exc.errors()[0]
    location = ".".join(str(part) for part in first["loc"])
    return f"{location}: {first['msg']}" if location else first["msg"]


def _header_mapping(
    path: Path, record_type: type, header: Sequence[str]
) -> dict[int, dataclasses.Field[Any]]:
    by_name: dict[str, dataclasses.Field[Any]] = {}
    for fld in _record_fields(record_type):
        for name in (fld.name, *fld.metadata.get(ALIASES, ())):
            by_name[name.strip().lower()] = fld
    mapping: dict[int, dataclasses.Field[Any]] = {}
    for index, name in enumerate(header):
        fld = by_name.get(str(name).strip().lower())
        if fld is None:
            logger.debug("%s: ignoring unknown column %r", path, name)
            continue
        mapping[index] = fld
    return mapping


def _positional_mapping(
    record_type: type, columns: Sequence[str] | None
) -> dict[int, dataclasses.Field[Any]]:
    fields = _record_fields(record_type)
    if columns is None:
        return dict(enumerate(fields))
    by_name = {fld.name: fld for fld in fields}
    unknown = [name for name in columns if name not in by_name]
    if unknown:
        raise ValueError(f"{record_type.__name__} has no fields named {unknown}")
    return {index: by_name[name] for index, name in enumerate(columns)}


def _widest_line(text: str) -> int:
    return max((line.count(SEPARATOR) + 1 for line in text.splitlines() if line.strip()), default=0)


def load_records(
    path: Path,
    record_type: type[R],
    *,
    has_headers: bool,
    strict: bool,
    columns: Sequence[str] | None = None,
    encoding: str = "latin-1",
) -> list[R]:
    """Decode every row of a semicolon separated file into ``record_type``.

    ``columns`` overrides the field order used for headerless files.  Empty
    cells fall back to the field default when the field has one.  Short rows
    are padded; a row with non-empty cells past the last mapped column is
    malformed.
    """

    text = _decode_text(path, encoding)
    skipped: list[list[str]] = []

    def _skip_line(fields: list[str]) -> None:
        skipped.append(fields)
        logger.warning("%s: skipping malformed line %r", path, SEPARATOR.join(fields))

    # Headerless files get explicit column names wide enough for every line,
    # otherwise pandas sizes the frame from the first line alone.
    width = 0
    names: list[int] | None = None
    if not has_headers:
        mapping = _positional_mapping(record_type, columns)
        width = max(mapping, default=-1) + 1
        names = list(range(max(width, _widest_line(text))))

    try:
        frame = pd.read_csv(
            io.StringIO(text),
            sep=SEPARATOR,
            header=0 if has_headers else None,
            names=names,
            dtype=str,
            keep_default_na=False,
            na_filter=False,
            skip_blank_lines=True,
            quoting=csv.QUOTE_NONE,
            engine="python",
            on_bad_lines="error" if strict else _skip_line,
        )
    except pd.errors.EmptyDataError:
        return []
    except pd.errors.ParserError as exc:
        raise RecordDecodeError(path, None, str(exc)) from exc

    if has_headers:
        mapping = _header_mapping(path, record_type, list(frame.columns))

    adapter = _adapter(record_type)
    records: list[R] = []
    for row_number, row in enumerate(frame.itertuples(index=False, name=None), start=1):
        if not has_headers and any(isinstance(cell, str) and cell.strip() for cell in row[width:]):
            if strict:
                raise RecordDecodeError(path, row_number, f"expected at most {width} fields")
            _skip_line([cell for cell in row if isinstance(cell, str)])
            continue
        raw: dict[str, Any] = {}
        for index, fld in mapping.items():
            cell = row[index] if index < len(row) else None
            if not isinstance(cell, str):
                continue
            cell = cell.strip()
            if cell == "" and _has_default(fld):
                continue
            raw[fld.name] = cell
        try:
            records.append(adapter.validate_python(raw))
        except ValidationError as exc:
            if strict:
                raise RecordDecodeError(path, row_number, _summarize(exc)) from exc
            logger.warning("%s: skipping row %d: %s", path, row_number, _summarize(exc))

    if skipped:
        logger.info("%s: skipped %d malformed lines", path, len(skipped))
    return records
