"""Clause-object files: `key = value` blocks as written by the game.

The format is a loose key/value language::

    # comment
    strategic_region = {
        id = 1
        name = "STRATEGICREGION_1"
        provinces = { 1 2 3 }
        weather = {
            period = { between = { 0.0 30.0 } ... }
            period = { ... }
        }
    }

Reading happens in three steps.  :func:`tokenize` splits the text,
:func:`parse_clause` builds a :class:`ClauseBlock` tree and
:func:`decode_clause` maps that tree onto a frozen dataclass.  The decoder
walks the dataclass fields; a field created with :func:`duplicated` collects
every occurrence of its key, while any other key may appear at most once.
The resulting raw structure is validated by pydantic.
"""

from __future__ import annotations

import dataclasses
import logging
import re
import types
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from typing import Annotated, Any, TypeVar, Union, get_args, get_origin, get_type_hints

from pydantic import TypeAdapter, ValidationError

from worldgen.domain.wrappers import ScalarWrapper
from worldgen.errors import ClauseDecodeError, ClauseSyntaxError
from worldgen.loaders.text import read_legacy_text

logger = logging.getLogger(__name__)

T = TypeVar("T")

_TOKEN_RE = re.compile(
    r"""
      (?P<space>[ \t\r\f\v]+)
    | (?P<newline>\n)
    | (?P<comment>\#[^\n]*)
    | (?P<lbrace>\{)
    | (?P<rbrace>\})
    | (?P<op><=|>=|!=|\?=|=|<|>)
    | (?P<quoted>"(?:[^"\\]|\\.)*")
    | (?P<unterminated>")
    | (?P<bare>[^\s{}=<>!?"\#]+)
    """,
    re.VERBOSE | re.DOTALL,
)
_ESCAPE_RE = re.compile(r"\\(.)", re.DOTALL)

DUPLICATED = "duplicated"


def duplicated() -> Any:
    """Declare a dataclass field whose key may repeat.

    Every occurrence is collected, in file order, into a tuple.  A file that
    never mentions the key yields an empty tuple.
    """

    return field(default_factory=tuple, metadata={DUPLICATED: True})


# --- tokens -----------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Token:
    kind: str
    text: str
    line: int
    quoted: bool = False


def tokenize(text: str, source: Path | None = None) -> list[Token]:
    """Split clause text into tokens; whitespace and comments are dropped."""

    tokens: list[Token] = []
    line = 1
    pos = 0
    while pos < len(text):
        match = _TOKEN_RE.match(text, pos)
        if match is None:
            raise ClauseSyntaxError(f"unexpected character {text[pos]!r}", line, source)
        kind = match.lastgroup
        value = match.group()
        if kind == "unterminated":
            raise ClauseSyntaxError("unterminated string", line, source)
        if kind == "lbrace":
            tokens.append(Token("lbrace", value, line))
        elif kind == "rbrace":
            tokens.append(Token("rbrace", value, line))
        elif kind == "op":
            tokens.append(Token("op", value, line))
        elif kind == "quoted":
            tokens.append(Token("scalar", _ESCAPE_RE.sub(r"\1", value[1:-1]), line, quoted=True))
        elif kind == "bare":
            tokens.append(Token("scalar", value, line))
        line += value.count("\n")
        pos = match.end()
    return tokens


# --- tree -------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Scalar:
    """A single token value."""

    text: str
    quoted: bool = False
    line: int = field(default=0, compare=False)


@dataclass(frozen=True, slots=True)
class ClauseEntry:
    """A `key <op> value` entry."""

    key: str
    op: str
    value: Scalar | ClauseBlock
    line: int = field(default=0, compare=False)


@dataclass(frozen=True, slots=True)
class ClauseBlock:
    """A `{ ... }` block holding entries and bare values in file order.

    ``tag`` is set for tagged values such as ``rgb { 1 2 3 }``.
    """

    items: tuple[ClauseEntry | Scalar | ClauseBlock, ...] = ()
    tag: str | None = None
    line: int = field(default=0, compare=False)

    @property
    def entries(self) -> list[ClauseEntry]:
        return [item for item in self.items if isinstance(item, ClauseEntry)]

    @property
    def values(self) -> list[Scalar | ClauseBlock]:
        return [item for item in self.items if not isinstance(item, ClauseEntry)]

    def get_all(self, key: str) -> list[Scalar | ClauseBlock]:
        return [entry.value for entry in self.entries if entry.key == key]

    def is_array(self) -> bool:
        return not self.entries


class _Parser:
    def __init__(self, tokens: list[Token], source: Path | None) -> None:
        self.tokens = tokens
        self.source = source
        self.pos = 0

    def peek(self) -> Token | None:
        return self.tokens[self.pos] if self.pos < len(self.tokens) else None

    def take(self) -> Token:
        token = self.tokens[self.pos]
        self.pos += 1
        return token

    def error(self, message: str, line: int | None) -> ClauseSyntaxError:
        return ClauseSyntaxError(message, line, self.source)

    def parse_items(self, opener: Token | None) -> tuple[ClauseEntry | Scalar | ClauseBlock, ...]:
        items: list[ClauseEntry | Scalar | ClauseBlock] = []
        while True:
            token = self.peek()
            if token is None:
                if opener is not None:
                    raise self.error("unclosed '{'", opener.line)
                return tuple(items)
            if token.kind == "rbrace":
                self.take()
                if opener is None:
                    raise self.error("unexpected '}'", token.line)
                return tuple(items)
            if token.kind == "lbrace":
                items.append(self.parse_block(self.take()))
                continue
            if token.kind == "op":
                raise self.error(f"dangling operator {token.text!r}", token.line)
            scalar = self.take()
            following = self.peek()
            if following is not None and following.kind == "op":
                op = self.take()
                items.append(ClauseEntry(scalar.text, op.text, self.parse_value(op), scalar.line))
            else:
                items.append(self.scalar_or_tagged(scalar))

    def parse_value(self, op: Token) -> Scalar | ClauseBlock:
        token = self.peek()
        if token is None or token.kind in ("rbrace", "op"):
            raise self.error(f"dangling operator {op.text!r}", op.line)
        if token.kind == "lbrace":
            return self.parse_block(self.take())
        return self.scalar_or_tagged(self.take())

    def scalar_or_tagged(self, scalar: Token) -> Scalar | ClauseBlock:
        following = self.peek()
        if following is not None and following.kind == "lbrace" and not scalar.quoted:
            return self.parse_block(self.take(), tag=scalar.text)
        return Scalar(scalar.text, scalar.quoted, scalar.line)

    def parse_block(self, opener: Token, tag: str | None = None) -> ClauseBlock:
        return ClauseBlock(self.parse_items(opener), tag=tag, line=opener.line)


def parse_clause(text: str, source: Path | None = None) -> ClauseBlock:
    """Parse clause text into its top-level block."""

    return ClauseBlock(_Parser(tokenize(text, source), source).parse_items(None))


# --- decoding ---------------------------------------------------------------------


@lru_cache(maxsize=None)
def _adapter(target: Any) -> TypeAdapter[Any]:
    return TypeAdapter(target)


@lru_cache(maxsize=None)
def _field_hints(cls: type) -> dict[str, Any]:
    return get_type_hints(cls, include_extras=True)


def _strip(tp: Any) -> Any:
    """Drop ``Annotated`` metadata and ``| None`` from a field type."""

    while True:
        origin = get_origin(tp)
        if origin is Annotated:
            tp = get_args(tp)[0]
        elif origin in (Union, types.UnionType):
            members = [arg for arg in get_args(tp) if arg is not type(None)]
            if len(members) != 1:
                return tp
            tp = members[0]
        else:
            return tp


def _is_record(tp: Any) -> bool:
    return (
        isinstance(tp, type)
        and dataclasses.is_dataclass(tp)
        and not issubclass(tp, ScalarWrapper)
    )


def _is_sequence(tp: Any) -> bool:
    origin = get_origin(tp)
    if origin is None:
        return False
    return origin in (list, tuple, set, frozenset) or (
        isinstance(origin, type)
        and issubclass(origin, Sequence)
        and not issubclass(origin, (str, bytes))
    )


def _is_mapping(tp: Any) -> bool:
    origin = get_origin(tp)
    return isinstance(origin, type) and issubclass(origin, Mapping)


def _item_types(tp: Any, count: int) -> list[Any]:
    args = get_args(tp)
    if get_origin(tp) is tuple and args and (len(args) != 2 or args[1] is not Ellipsis):
        return list(args)
    item = args[0] if args else Any
    return [item] * count


def element_type(tp: Any) -> Any:
    """Return the element type of a ``duplicated()`` field annotation."""

    tp = _strip(tp)
    args = get_args(tp)
    return args[0] if args else Any


def _describe(value: Scalar | ClauseBlock) -> str:
    if isinstance(value, Scalar):
        return f"scalar {value.text!r}"
    return "block"


class _Decoder:
    def __init__(self, source: Path | None) -> None:
        self.source = source

    def error(self, message: str, line: int | None = None) -> ClauseDecodeError:
        where = ""
        if self.source is not None:
            where = f"{self.source}:"
        if line:
            where = f"{where}{line}:"
        return ClauseDecodeError(f"{where} {message}" if where else message)

    def to_raw(self, value: Scalar | ClauseBlock, tp: Any, where: str) -> Any:
        tp = _strip(tp)
        if _is_record(tp):
            if not isinstance(value, ClauseBlock):
                raise self.error(f"{where}: expected a block, got {_describe(value)}", value.line)
            return self.record_to_raw(value, tp, where)
        if isinstance(tp, type) and issubclass(tp, ScalarWrapper) and tp.clause_shape == "array":
            if not isinstance(value, ClauseBlock) or not value.is_array():
                raise self.error(f"{where}: expected a value list", value.line)
            return [self.to_raw(item, str, where) for item in value.values]
        if _is_sequence(tp):
            if not isinstance(value, ClauseBlock) or not value.is_array():
                raise self.error(f"{where}: expected a value list, got {_describe(value)}", value.line)
            items = value.values
            item_types = _item_types(tp, len(items))
            if len(item_types) != len(items):
                raise self.error(
                    f"{where}: expected {len(item_types)} values, got {len(items)}", value.line
                )
            return [self.to_raw(item, item_tp, where) for item, item_tp in zip(items, item_types)]
        if _is_mapping(tp):
            if not isinstance(value, ClauseBlock) or value.values:
                raise self.error(f"{where}: expected a keyed block", value.line)
            _, value_tp = get_args(tp) or (Any, Any)
            raw: dict[str, Any] = {}
            for entry in value.entries:
                if entry.key in raw:
                    raise self.error(f"{where}: duplicate key {entry.key!r}", entry.line)
                raw[entry.key] = self.to_raw(entry.value, value_tp, f"{where}.{entry.key}")
            return raw
        if isinstance(value, ClauseBlock):
            raise self.error(f"{where}: expected a scalar, got a block", value.line)
        return value.text

    def record_to_raw(self, block: ClauseBlock, cls: type, where: str) -> dict[str, Any]:
        if block.values:
            stray = block.values[0]
            raise self.error(f"{where}: unexpected bare {_describe(stray)}", stray.line)
        grouped: dict[str, list[ClauseEntry]] = {}
        for entry in block.entries:
            grouped.setdefault(entry.key, []).append(entry)

        hints = _field_hints(cls)
        raw: dict[str, Any] = {}
        known: set[str] = set()
        for fld in dataclasses.fields(cls):
            if not fld.init:
                continue
            known.add(fld.name)
            occurrences = grouped.get(fld.name, [])
            path = f"{where}.{fld.name}"
            for entry in occurrences:
                if entry.op != "=":
                    raise self.error(f"{path}: unsupported operator {entry.op!r}", entry.line)
            if fld.metadata.get(DUPLICATED):
                item_tp = element_type(hints[fld.name])
                raw[fld.name] = [self.to_raw(entry.value, item_tp, path) for entry in occurrences]
            elif len(occurrences) > 1:
                raise self.error(f"{path}: duplicate key", occurrences[1].line)
            elif occurrences:
                raw[fld.name] = self.to_raw(occurrences[0].value, hints[fld.name], path)

        for key in grouped.keys() - known:
            logger.debug("Ignoring unknown key %r in %s", key, where)
        return raw


def decode_clause(block: ClauseBlock, target: type[T], source: Path | None = None) -> T:
    """Decode a parsed block into an instance of the dataclass ``target``."""

    decoder = _Decoder(source)
    raw = decoder.to_raw(block, target, target.__name__)
    try:
        return _adapter(target).validate_python(raw)
    except ValidationError as exc:
        raise decoder.error(f"invalid {target.__name__}: {exc}") from exc


def loads(text: str, target: type[T], source: Path | None = None) -> T:
    return decode_clause(parse_clause(text, source), target, source)


def load_clause_file(path: Path, target: type[T]) -> T:
    """Read, parse and decode a clause file."""

    return loads(read_legacy_text(path), target, path)
