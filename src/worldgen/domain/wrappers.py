"""Strongly typed scalar wrappers used across the map model.

Every identifier and measured quantity in the map files gets its own type.
Two wrappers never compare equal, and pydantic never converts one into the
other, even when both sit on top of the same primitive::

    >>> ProvinceId(5) == StateId(5)
    False

Each wrapper can be built three ways:

* ``Wrapper.parse(text)`` from a token read out of a file,
* pydantic structured decode (``TypeAdapter(Wrapper).validate_python(raw)``),
  which accepts the token text, the bare primitive, or an instance,
* the constructor, which only accepts the exact primitive.

``format()`` renders the value back to the literal the files use.
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, ClassVar, Self

from pydantic import GetCoreSchemaHandler
from pydantic_core import core_schema

from worldgen.errors import ScalarParseError

_SIGNED_INT = re.compile(r"[+-]?[0-9]+")
_UNSIGNED_INT = re.compile(r"\+?[0-9]+")


class ScalarWrapper(ABC):
    """Shared parse/decode plumbing for every wrapper type."""

    # "scalar" values are single tokens, "array" values are `{ a b c }` blocks.
    clause_shape: ClassVar[str] = "scalar"

    @classmethod
    @abstractmethod
    def parse(cls, text: str) -> Self:
        """Decode a single token."""

    @classmethod
    def from_primitive(cls, raw: Any) -> Self:
        raise ScalarParseError(cls.__name__, raw, f"unsupported input type {type(raw).__name__}")

    @abstractmethod
    def format(self) -> str:
        """Render the value the way the game files write it."""

    def __str__(self) -> str:
        return self.format()

    @classmethod
    def coerce(cls, raw: Any) -> Self:
        """Decode ``raw`` into this wrapper without crossing wrapper types."""

        if type(raw) is cls:
            return raw
        if isinstance(raw, ScalarWrapper):
            raise ScalarParseError(
                cls.__name__, raw, f"refusing implicit conversion from {type(raw).__name__}"
            )
        if isinstance(raw, str):
            return cls.parse(raw)
        return cls.from_primitive(raw)

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        return core_schema.no_info_plain_validator_function(
            cls.coerce,
            serialization=core_schema.plain_serializer_function_ser_schema(
                lambda value: value.format()
            ),
        )


def _check_text(cls: type, text: Any) -> str:
    if not isinstance(text, str):
        raise ScalarParseError(cls.__name__, text, "expected text")
    return text


# --- integers -------------------------------------------------------------------


@dataclass(frozen=True, order=True)
class IntWrapper(ScalarWrapper):
    """Wrapper over an integer with optional inclusive bounds."""

    value: int

    minimum: ClassVar[int | None] = None
    maximum: ClassVar[int | None] = None

    def __post_init__(self) -> None:
        name = type(self).__name__
        if not isinstance(self.value, int) or isinstance(self.value, bool):
            raise ScalarParseError(name, self.value, "expected an integer")
        if self.minimum is not None and self.value < self.minimum:
            raise ScalarParseError(name, self.value, f"must be >= {self.minimum}")
        if self.maximum is not None and self.value > self.maximum:
            raise ScalarParseError(name, self.value, f"must be <= {self.maximum}")

    @classmethod
    def parse(cls, text: str) -> Self:
        text = _check_text(cls, text)
        pattern = _UNSIGNED_INT if cls.minimum is not None and cls.minimum >= 0 else _SIGNED_INT
        if pattern.fullmatch(text) is None:
            raise ScalarParseError(cls.__name__, text)
        return cls(int(text))

    @classmethod
    def from_primitive(cls, raw: Any) -> Self:
        if isinstance(raw, int) and not isinstance(raw, bool):
            return cls(raw)
        return super().from_primitive(raw)

    def format(self) -> str:
        return str(self.value)

    def __int__(self) -> int:
        return self.value


class ProvinceId(IntWrapper):
    """The id of a province."""


class StateId(IntWrapper):
    """The id of a state."""


class StrategicRegionId(IntWrapper):
    """The id of a strategic region."""


class ContinentIndex(IntWrapper):
    """1-based index into the continent list; sea provinces use 0."""


class XCoord(IntWrapper):
    """An x coordinate on the map."""


class YCoord(IntWrapper):
    """A y coordinate on the map."""


class RailLevel(IntWrapper):
    """The level of a railway; the game uses 1 through 5."""

    minimum = 0


class _ColorComponent(IntWrapper):
    minimum = 0
    maximum = 255


class Red(_ColorComponent):
    """A red color component."""


class Green(_ColorComponent):
    """A green color component."""


class Blue(_ColorComponent):
    """A blue color component."""


class ModelIndex(IntWrapper):
    """Index of a unit stack model."""


class ColorIndex(IntWrapper):
    """Color index in a bitmap palette."""

    minimum = 0


class PixelStep(IntWrapper):
    """Sampling step over the cities bitmap."""

    minimum = 0


class Manpower(IntWrapper):
    """Starting manpower of a state."""


class VictoryPoints(IntWrapper):
    """Victory points held by a province."""


# --- floats -----------------------------------------------------------------------


@dataclass(frozen=True, order=True)
class FloatWrapper(ScalarWrapper):
    """Wrapper over a float."""

    value: float

    def __post_init__(self) -> None:
        if not isinstance(self.value, float):
            raise ScalarParseError(type(self).__name__, self.value, "expected a float")

    @classmethod
    def parse(cls, text: str) -> Self:
        text = _check_text(cls, text)
        if not text or text != text.strip() or "_" in text:
            raise ScalarParseError(cls.__name__, text)
        try:
            return cls(float(text))
        except ValueError as exc:
            raise ScalarParseError(cls.__name__, text) from exc

    @classmethod
    def from_primitive(cls, raw: Any) -> Self:
        if isinstance(raw, bool):
            return super().from_primitive(raw)
        if isinstance(raw, (int, float)):
            return cls(float(raw))
        return super().from_primitive(raw)

    def format(self) -> str:
        return repr(self.value)

    def __float__(self) -> float:
        return self.value


class Temperature(FloatWrapper):
    """A temperature in degrees Celsius."""


class Weight(FloatWrapper):
    """Relative likelihood of a weather phenomenon."""


class SnowLevel(FloatWrapper):
    """Minimum snow level of a weather period."""


class LocalSupplies(FloatWrapper):
    """Base supply of a state."""


class BuildingsMaxLevelFactor(FloatWrapper):
    """Multiplier on the shared building slots of a state."""


class PixelDensity(FloatWrapper):
    """City density in fractions of pixels; negative is less dense."""


class Distance(FloatWrapper):
    """Distance to the edge of an urban area, in map pixels."""


# --- strings ----------------------------------------------------------------------


@dataclass(frozen=True, order=True)
class StrWrapper(ScalarWrapper):
    """Wrapper over a string."""

    value: str

    def __post_init__(self) -> None:
        if not isinstance(self.value, str):
            raise ScalarParseError(type(self).__name__, self.value, "expected a string")

    @classmethod
    def parse(cls, text: str) -> Self:
        return cls(_check_text(cls, text))

    def format(self) -> str:
        return self.value


class Terrain(StrWrapper):
    """A terrain category from `common/terrain`."""


class Continent(StrWrapper):
    """A continent name."""


class AdjacencyRuleName(StrWrapper):
    """The name of an adjacency rule."""


class BuildingId(StrWrapper):
    """A building type name from `common/buildings`."""


class StrategicRegionName(StrWrapper):
    """The logical name of a strategic region."""


class StateName(StrWrapper):
    """The localisation key of a state."""


class StateCategoryName(StrWrapper):
    """A state category from `common/state_category`."""


class CountryTag(StrWrapper):
    """A three letter country tag."""


class MeshId(StrWrapper):
    """The id of a city mesh entity."""


# --- booleans ---------------------------------------------------------------------

_TRUE_LITERALS = frozenset({"true", "yes"})
_FALSE_LITERALS = frozenset({"false", "no"})


@dataclass(frozen=True)
class BoolWrapper(ScalarWrapper):
    """Wrapper over a boolean written as true/false or yes/no."""

    value: bool

    def __post_init__(self) -> None:
        if not isinstance(self.value, bool):
            raise ScalarParseError(type(self).__name__, self.value, "expected a boolean")

    @classmethod
    def parse(cls, text: str) -> Self:
        text = _check_text(cls, text)
        if text in _TRUE_LITERALS:
            return cls(True)
        if text in _FALSE_LITERALS:
            return cls(False)
        raise ScalarParseError(cls.__name__, text)

    @classmethod
    def from_primitive(cls, raw: Any) -> Self:
        if isinstance(raw, bool):
            return cls(raw)
        return super().from_primitive(raw)

    def format(self) -> str:
        return "true" if self.value else "false"

    def __bool__(self) -> bool:
        return self.value


class Coastal(BoolWrapper):
    """Whether a province is coastal."""


# --- composites -------------------------------------------------------------------


@dataclass(frozen=True, order=True)
class Icon(ScalarWrapper):
    """The province on which to show an adjacency crossing icon."""

    province: ProvinceId

    def __post_init__(self) -> None:
        if type(self.province) is not ProvinceId:
            raise ScalarParseError("Icon", self.province, "expected a ProvinceId")

    @classmethod
    def parse(cls, text: str) -> Self:
        return cls(ProvinceId.parse(text))

    @classmethod
    def from_primitive(cls, raw: Any) -> Self:
        return cls(ProvinceId.from_primitive(raw))

    def format(self) -> str:
        return self.province.format()


def _items(cls: type, raw: Any, size: int) -> Sequence[Any]:
    if isinstance(raw, (str, bytes)) or not isinstance(raw, Sequence):
        raise ScalarParseError(cls.__name__, raw, f"expected {size} values")
    if len(raw) != size:
        raise ScalarParseError(cls.__name__, raw, f"expected {size} values, got {len(raw)}")
    return raw


@dataclass(frozen=True, order=True)
class Color(ScalarWrapper):
    """An RGB color, written as `{ r g b }`."""

    r: Red
    g: Green
    b: Blue

    clause_shape: ClassVar[str] = "array"

    @classmethod
    def parse(cls, text: str) -> Self:
        return cls.from_primitive(_check_text(cls, text).split())

    @classmethod
    def from_primitive(cls, raw: Any) -> Self:
        r, g, b = _items(cls, raw, 3)
        return cls(Red.coerce(r), Green.coerce(g), Blue.coerce(b))

    @classmethod
    def from_rgb(cls, r: int, g: int, b: int) -> Self:
        return cls(Red(r), Green(g), Blue(b))

    def as_tuple(self) -> tuple[int, int, int]:
        return (self.r.value, self.g.value, self.b.value)

    def format(self) -> str:
        return " ".join(part.format() for part in (self.r, self.g, self.b))


@dataclass(frozen=True)
class Hsv(ScalarWrapper):
    """An HSV (or color balance) triple, written as `{ h s v }`."""

    h: float
    s: float
    v: float

    clause_shape: ClassVar[str] = "array"

    @classmethod
    def parse(cls, text: str) -> Self:
        return cls.from_primitive(_check_text(cls, text).split())

    @classmethod
    def from_primitive(cls, raw: Any) -> Self:
        parts = []
        for item in _items(cls, raw, 3):
            if isinstance(item, str):
                parts.append(_HsvComponent.parse(item).value)
            elif isinstance(item, (int, float)) and not isinstance(item, bool):
                parts.append(float(item))
            else:
                raise ScalarParseError(cls.__name__, raw)
        return cls(*parts)

    def format(self) -> str:
        return " ".join(repr(part) for part in (self.h, self.s, self.v))


class _HsvComponent(FloatWrapper):
    pass
