"""Pytest configuration to ensure the `src` package layout is importable.

This adds the `src/` directory to `sys.path` so tests can import the
`worldgen` package (e.g., `from worldgen.map import load_map`) without
requiring an editable install in CI.  It also exposes the sample map that
lives under `tests/data/`.
"""

import shutil
import sys
from pathlib import Path

import pytest

SRC_PATH = Path(__file__).resolve().parents[1] / "src"
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))

DATA_PATH = Path(__file__).resolve().parent / "data"


@pytest.fixture
def data_dir() -> Path:
    """Read-only sample map root."""

    return DATA_PATH


@pytest.fixture
def map_root(tmp_path: Path) -> Path:
    """A writable copy of the sample map root."""

    root = tmp_path / "game"
    shutil.copytree(DATA_PATH, root)
    return root
