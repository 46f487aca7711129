"""Integration tests for the command line entrypoint."""

from __future__ import annotations

import numpy as np
import pytest
from PIL import Image

from worldgen.config import get_settings
from worldgen.main import build_parser, main

BITMAPS = ("provinces.bmp", "terrain.bmp", "rivers.bmp", "heightmap.bmp", "trees.bmp")


@pytest.fixture(autouse=True)
def _fresh_settings(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def _write_bitmaps(map_dir) -> None:
    pixels = np.zeros((3, 5, 3), dtype=np.uint8)
    pixels[:, :, 0] = 10
    for name in BITMAPS:
        Image.fromarray(pixels).save(map_dir / name)


def test_parser_defaults(tmp_path):
    args = build_parser().parse_args([str(tmp_path)])
    assert args.root == tmp_path
    assert args.log_level is None


def test_reports_the_loaded_map(map_root, capsys):
    _write_bitmaps(map_root / "map")
    assert main([str(map_root), "--log-level", "WARNING"]) == 0
    out = capsys.readouterr().out
    assert f"Map 5x3 loaded from {map_root}" in out
    assert "provinces" in out
    assert "weather_positions" in out


def test_reports_errors(tmp_path, capsys):
    assert main([str(tmp_path / "nowhere"), "--log-level", "ERROR"]) == 1
    err = capsys.readouterr().err
    assert err.startswith("error: failed to load manifest")
