#!/usr/bin/env python3
import json
from pathlib import Path
import pytest

import conftemplate.core.config as cfg


# --- Helpers --- #

def _write_json(path: Path, payload) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(payload), encoding="utf-8")


@pytest.fixture
def isolated(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """No global config, empty working directory, no env overrides."""
    monkeypatch.setattr(cfg, "GLOBAL_CONFIG_PATH", tmp_path / "no/such/config.json", raising=False)
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("CONFTEMPLATE_ALIGN", raising=False)
    monkeypatch.delenv("CONFTEMPLATE_LOG_LEVEL", raising=False)
    return tmp_path


# --- load_config: defaults only --- #

def test_load_config_defaults_only(isolated):
    result = cfg.load_config()
    assert result == cfg.DEFAULT_CONFIG


def test_load_config_returns_a_copy_of_defaults(isolated, monkeypatch):
    monkeypatch.setenv("CONFTEMPLATE_LOG_LEVEL", "DEBUG")
    cfg.load_config()
    assert cfg.DEFAULT_CONFIG["logging"]["level"] == "INFO"


# --- Precedence: global < project < env --- #

def test_load_config_global_and_project_precedence(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    global_cfg = tmp_path / ".config/conftemplate/config.json"
    project_dir = tmp_path / "proj"

    _write_json(global_cfg, {
        "logging": {"level": "DEBUG"},
        "align": "document",
        "extra": 1,
    })
    _write_json(project_dir / cfg.PROJECT_CONFIG_NAME, {
        "logging": {"level": "WARNING"},
        "use_defaults": False,
    })

    monkeypatch.setattr(cfg, "GLOBAL_CONFIG_PATH", global_cfg, raising=False)
    monkeypatch.chdir(project_dir)
    monkeypatch.delenv("CONFTEMPLATE_ALIGN", raising=False)
    monkeypatch.delenv("CONFTEMPLATE_LOG_LEVEL", raising=False)

    result = cfg.load_config()

    # Project overrides global
    assert result["logging"]["level"] == "WARNING"
    assert result["use_defaults"] is False
    # Values only in global propagate through
    assert result["align"] == "document"
    assert result["extra"] == 1


# --- Env overrides --- #

def test_load_config_env_overrides(isolated, monkeypatch: pytest.MonkeyPatch):
    _write_json(isolated / cfg.PROJECT_CONFIG_NAME, {"align": "block"})
    monkeypatch.setenv("CONFTEMPLATE_ALIGN", " Document ")
    monkeypatch.setenv("CONFTEMPLATE_LOG_LEVEL", "ERROR")

    result = cfg.load_config()

    assert result["align"] == "document"
    assert result["logging"]["level"] == "ERROR"


def test_load_config_invalid_project_json_raises(isolated):
    (isolated / cfg.PROJECT_CONFIG_NAME).write_text("{not json", encoding="utf-8")
    with pytest.raises(ValueError, match="Invalid JSON in"):
        cfg.load_config()


# --- log_level --- #

@pytest.mark.parametrize("config,expected", [
    ({"logging": {"level": "debug"}}, "DEBUG"),
    ({"logging": {}}, "INFO"),
    ({"logging": None}, "INFO"),
    ({}, "INFO"),
])
def test_log_level(config, expected):
    assert cfg.log_level(config) == expected
