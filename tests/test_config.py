"""Tests for configuration loading."""

import json
import os

import pytest

from filesorter import config as config_module
from filesorter.config import (
    DEFAULT_CONFIG,
    ensure_directories,
    get_config,
    get_sorted_dir,
    get_unsorted_dir,
    load_config,
)
from filesorter.exceptions import ConfigError


def write_config(tmp_path, data):
    path = tmp_path / "config.json"
    path.write_text(json.dumps(data), encoding="utf-8")
    return str(path)


def test_defaults_when_default_file_missing(tmp_path, monkeypatch):
    monkeypatch.setattr(config_module, "DEFAULT_CONFIG_PATH", str(tmp_path / "absent.json"))

    assert load_config() == DEFAULT_CONFIG


def test_shipped_config_matches_defaults():
    assert load_config(config_module.DEFAULT_CONFIG_PATH) == DEFAULT_CONFIG


def test_file_values_override_defaults(tmp_path):
    path = write_config(tmp_path, {"sorted_dir": "/srv/sorted", "debug": False})

    config = load_config(path)

    assert config["sorted_dir"] == "/srv/sorted"
    assert config["debug"] is False
    assert config["unsorted_dir"] == DEFAULT_CONFIG["unsorted_dir"]
    assert get_config() is config


def test_explicit_missing_file(tmp_path):
    with pytest.raises(ConfigError, match="not found"):
        load_config(str(tmp_path / "missing.json"))


def test_invalid_json(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("{not json", encoding="utf-8")

    with pytest.raises(ConfigError, match="Invalid JSON"):
        load_config(str(path))


@pytest.mark.parametrize("data", [
    ["not", "an", "object"],
    {"log_target": "syslog"},
    {"debug": "yes"},
    {"ready_timeout_ms": 0},
    {"ready_poll_interval_ms": -5},
    {"log_max_bytes": True},
    {"log_backup_count": -1},
    {"unsorted_dir": ""},
])
def test_invalid_values(tmp_path, data):
    with pytest.raises(ConfigError):
        load_config(write_config(tmp_path, data))


def test_file_target_without_name_uses_default(tmp_path):
    config = load_config(write_config(tmp_path, {"log_target": "file", "log_file": None}))

    assert config["log_file"] == "Sorting.log"


def test_relative_dirs_resolve_against_cwd(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    config = dict(DEFAULT_CONFIG)

    assert get_unsorted_dir(config) == os.path.join(str(tmp_path), "FilesToSort")
    assert get_sorted_dir(config) == os.path.join(str(tmp_path), "SortedFiles")


def test_ensure_directories_creates_sorted_root(tmp_path):
    config = dict(DEFAULT_CONFIG, sorted_dir=str(tmp_path / "a" / "b"))

    sorted_dir = ensure_directories(config)

    assert os.path.isdir(sorted_dir)
    assert ensure_directories(config) == sorted_dir


def test_config_dir_is_next_to_package():
    package_dir = os.path.dirname(os.path.abspath(config_module.__file__))

    assert config_module.BASE_DIR == os.path.dirname(package_dir)
    assert config_module.CONFIG_DIR == os.path.join(config_module.BASE_DIR, "config")
