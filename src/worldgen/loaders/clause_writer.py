"""Render dataclasses back into clause text.

Only what reading needs to round-trip is supported; the loaders never write
map files themselves.
"""

from __future__ import annotations

import dataclasses
import re
from collections.abc import Mapping
from enum import Enum
from pathlib import PurePath
from typing import Any

from worldgen.domain.wrappers import ScalarWrapper
from worldgen.loaders.clause import DUPLICATED

_BARE_RE = re.compile(r"[^\s{}=<>!?\"#]+")
_INDENT = "\t"


def _quote(text: str) -> str:
    escaped = text.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def format_scalar(value: Any) -> str:
    """Render a single scalar the way the game files spell it."""

    if isinstance(value, ScalarWrapper):
        text = value.format()
        if isinstance(getattr(value, "value", None), str):
            return text if _BARE_RE.fullmatch(text) else _quote(text)
        return text
    if isinstance(value, bool):
        return "yes" if value else "no"
    if isinstance(value, Enum):
        return str(value.value)
    if isinstance(value, float):
        return repr(value)
    if isinstance(value, int):
        return str(value)
    if isinstance(value, PurePath):
        return _quote(value.as_posix())
    if isinstance(value, str):
        return _quote(value)
    raise TypeError(f"cannot write {type(value).__name__} as a clause scalar")


def _is_record(value: Any) -> bool:
    return dataclasses.is_dataclass(value) and not isinstance(value, ScalarWrapper)


def _render_value(value: Any, depth: int) -> str:
    if _is_record(value):
        return _render_block(_record_lines(value, depth + 1), depth)
    if isinstance(value, ScalarWrapper) and value.clause_shape == "array":
        return f"{{ {value.format()} }}"
    if isinstance(value, Mapping):
        lines = [
            f"{_INDENT * (depth + 1)}{format_scalar(key)} = {_render_value(item, depth + 1)}"
            for key, item in value.items()
        ]
        return _render_block(lines, depth)
    if isinstance(value, (list, tuple, set, frozenset)):
        items = sorted(value) if isinstance(value, (set, frozenset)) else value
        rendered = " ".join(_render_value(item, depth) for item in items)
        return f"{{ {rendered} }}" if rendered else "{ }"
    return format_scalar(value)


def _render_block(lines: list[str], depth: int) -> str:
    if not lines:
        return "{ }"
    return "{\n" + "\n".join(lines) + "\n" + _INDENT * depth + "}"


def _record_lines(record: Any, depth: int) -> list[str]:
    lines: list[str] = []
    prefix = _INDENT * depth
    for fld in dataclasses.fields(record):
        value = getattr(record, fld.name)
        if value is None:
            continue
        if fld.metadata.get(DUPLICATED):
            lines.extend(f"{prefix}{fld.name} = {_render_value(item, depth)}" for item in value)
        else:
            lines.append(f"{prefix}{fld.name} = {_render_value(value, depth)}")
    return lines


def dumps(record: Any) -> str:
    """Render a dataclass as a clause file body."""

    if not _is_record(record):
        raise TypeError(f"expected a dataclass instance, got {type(record).__name__}")
    return "\n".join(_record_lines(record, 0)) + "\n"
