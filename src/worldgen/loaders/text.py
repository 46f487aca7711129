"""Reading helpers shared by the text loaders."""

from __future__ import annotations

import logging
from pathlib import Path

from worldgen.errors import MapFileNotFoundError, MapIOError

logger = logging.getLogger(__name__)

UTF8_BOM = b"\xef\xbb\xbf"


def read_bytes(path: Path) -> bytes:
    """Return the raw contents of ``path`` or raise a map I/O error."""

    try:
        return path.read_bytes()
    except FileNotFoundError as exc:
        raise MapFileNotFoundError(path) from exc
    except IsADirectoryError as exc:
        raise MapIOError(path, f"Expected a file but found a directory: {path}") from exc
    except OSError as exc:
        raise MapIOError(path, f"Unable to read map file {path}: {exc.strerror or exc}") from exc


def decode_legacy(data: bytes) -> str:
    """Decode single-byte game text.

    The game files are Windows-1252 in practice; every byte maps 1:1 onto the
    code point of the same value so nothing is ever rejected.  A leading
    UTF-8 byte order mark is discarded.
    """

    if data.startswith(UTF8_BOM):
        data = data[len(UTF8_BOM) :]
    return data.decode("latin-1")


def read_legacy_text(path: Path) -> str:
    logger.debug("Reading %s", path)
    return decode_legacy(read_bytes(path))


def iter_content_lines(text: str):
    """Yield ``(line_number, line)`` for every line with content.

    Lines that are blank once a `#` comment is cut off are skipped.  The
    yielded line is untouched, comment included.
    """

    for number, line in enumerate(text.splitlines(), start=1):
        if line.split("#", 1)[0].strip():
            yield number, line
