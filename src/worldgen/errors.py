"""Exception hierarchy shared by every map loader."""

from __future__ import annotations

from pathlib import Path


class MapError(Exception):
    """Base class for every failure raised while loading a map."""


# --- I/O --------------------------------------------------------------------


class MapIOError(MapError):
    """Raised when a map file is missing or unreadable."""

    def __init__(self, path: Path | str, message: str | None = None) -> None:
        self.path = Path(path)
        super().__init__(message or f"Unable to read map file: {self.path}")


class MapFileNotFoundError(MapIOError):
    """Raised when a map file or directory does not exist."""

    def __init__(self, path: Path | str, message: str | None = None) -> None:
        super().__init__(path, message or f"Map file not found: {path}")


# --- format -----------------------------------------------------------------


class MapFormatError(MapError):
    """Raised when a scalar, clause or CSV token is malformed."""


class ScalarParseError(MapFormatError, ValueError):
    """Raised when text is not a valid literal for a scalar wrapper."""

    def __init__(self, type_name: str, text: object, reason: str | None = None) -> None:
        self.type_name = type_name
        self.text = text
        detail = f": {reason}" if reason else ""
        super().__init__(f"invalid {type_name} literal {text!r}{detail}")


class ClauseSyntaxError(MapFormatError):
    """Raised when clause text cannot be tokenized or parsed."""

    def __init__(self, message: str, line: int | None = None, source: Path | None = None) -> None:
        self.line = line
        self.source = source
        where = ""
        if source is not None:
            where = f"{source}:"
        if line is not None:
            where = f"{where}{line}:"
        super().__init__(f"{where} {message}" if where else message)


class RecordDecodeError(MapFormatError):
    """Raised when a delimited row cannot be decoded into its record type."""

    def __init__(self, path: Path, row: int | None, message: str) -> None:
        self.path = path
        self.row = row
        where = f"{path}: row {row}" if row is not None else str(path)
        super().__init__(f"{where}: {message}")


# --- structure --------------------------------------------------------------


class MapDecodeError(MapError):
    """Raised when well-formed input has the wrong shape for its target."""


class ClauseDecodeError(MapDecodeError):
    """Raised when a parsed clause block does not fit the target type."""


# --- domain validation ------------------------------------------------------


class MapValidationError(MapError):
    """Raised when decoded data breaks a domain rule."""


class InvalidStrategicRegionError(MapValidationError):
    """Raised when a strategic region declares the reserved id 0."""


class InvalidStrategicRegionNameError(MapValidationError):
    """Raised when a strategic region has an empty name."""


class StrategicRegionFileNameError(MapValidationError):
    """Raised when a strategic region file name does not match its id."""


class InvalidSupplyNodeError(MapValidationError):
    """Raised for a supply node line that is not `1 <province>`."""


class InvalidRailwayError(MapValidationError):
    """Raised for a railway line whose declared length is wrong."""


class StateMapLineError(MapValidationError):
    """Raised for an airports/rocket sites line that is not `<state> = { ... }`."""


class InvalidBuildingsFileError(MapValidationError):
    """Raised when the building types file has no type block."""


class DuplicateBuildingTypeError(MapValidationError):
    """Raised when a building type is declared twice."""


class InvalidTerrainFileError(MapValidationError):
    """Raised when the terrain file has no category block."""


class DuplicateTerrainTypeError(MapValidationError):
    """Raised when a terrain category is declared twice."""


class DuplicateStateError(MapValidationError):
    """Raised when two state files declare the same state id."""


# --- assembly ---------------------------------------------------------------


class MapLoadError(MapError):
    """Raised by the assembler; names the sub-load that failed."""

    def __init__(self, stage: str, cause: MapError) -> None:
        self.stage = stage
        super().__init__(f"failed to load {stage}: {cause}")
