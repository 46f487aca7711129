"""Tests for configuration loading."""

from __future__ import annotations

from pathlib import Path

from worldgen.config import Settings, get_settings


def test_defaults_follow_the_game_layout():
    settings = Settings(_env_file=None)
    assert settings.manifest_path == Path("map/default.map")
    assert settings.states_dir == Path("history/states")
    assert settings.csv_encoding == "latin-1"
    assert settings.log_level == "INFO"


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("WORLDGEN_STATES_DIR", "mod/history/states")
    monkeypatch.setenv("WORLDGEN_CSV_ENCODING", "utf-8")
    settings = Settings(_env_file=None)
    assert settings.states_dir == Path("mod/history/states")
    assert settings.csv_encoding == "utf-8"


def test_env_file(tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text("WORLDGEN_LOG_LEVEL=DEBUG\nUNRELATED=1\n")
    settings = Settings(_env_file=env_file)
    assert settings.log_level == "DEBUG"


def test_locate(tmp_path):
    settings = Settings(_env_file=None)
    assert settings.locate(tmp_path, settings.railways_path) == tmp_path / "map" / "railways.txt"
    absolute = tmp_path / "elsewhere" / "railways.txt"
    assert settings.locate(tmp_path, absolute) == absolute


def test_get_settings_is_cached():
    get_settings.cache_clear()
    assert get_settings() is get_settings()
    get_settings.cache_clear()
