#!/usr/bin/env python3
"""
conftemplate configuration loader.
"""

import copy
import os
from pathlib import Path
from typing import Any, Dict, Final

from conftemplate.core.utils import merge_dicts, load_json_file

# --- Defaults & locations --- #

DEFAULT_CONFIG: Final[Dict[str, Any]] = {
    "align": "block",
    "use_defaults": True,
    "logging": {"level": "INFO"},
}

GLOBAL_CONFIG_PATH: Final[Path] = Path.home() / ".config" / "conftemplate" / "config.json"

PROJECT_CONFIG_NAME: Final[str] = "conftemplate.json"


# --- Public API --- #

def load_config() -> Dict[str, Any]:
    """
    Load conftemplate configuration with layered precedence.

    Order:
        1. Built-in defaults
        2. Global config (~/.config/conftemplate/config.json)
        3. Project config (./conftemplate.json)
        4. Environment overrides:
           - CONFTEMPLATE_ALIGN
           - CONFTEMPLATE_LOG_LEVEL

    Returns:
        A merged configuration dictionary.
    """
    # 1) start with defaults
    config = copy.deepcopy(DEFAULT_CONFIG)

    # 2) global config
    config = merge_dicts(config, load_json_file(GLOBAL_CONFIG_PATH))

    # 3) project config
    config = merge_dicts(config, load_json_file(Path.cwd() / PROJECT_CONFIG_NAME))

    # 4) environment overrides
    align_env = os.getenv("CONFTEMPLATE_ALIGN")
    if align_env:
        config["align"] = align_env.strip().lower()

    log_level_env = os.getenv("CONFTEMPLATE_LOG_LEVEL")
    if log_level_env:
        config.setdefault("logging", {})["level"] = log_level_env

    return config


def log_level(config: Dict[str, Any]) -> str:
    """Upper-cased logging level name from `config` (falls back to the default)."""
    level = (config.get("logging") or {}).get("level") or DEFAULT_CONFIG["logging"]["level"]
    return str(level).strip().upper()
