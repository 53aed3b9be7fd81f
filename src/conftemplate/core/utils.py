#!/usr/bin/env python3
"""
Purpose:
    Provides common utility functions for conftemplate: dictionary merge,
    JSON file loading and resolving 'module:attribute' import paths.
"""

import importlib
import json
from pathlib import Path
from typing import Any, Dict

from conftemplate.core.constants import DEFAULT_TEXT_ENCODING


# --- Generic Utilities --- #

def merge_dicts(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """
    Recursively merge two dictionaries (values from 'override' take precedence).
    Non-dict values are overwritten; dict values are merged depth-first.
    """
    result = dict(base)
    for k, v in override.items():
        if isinstance(v, dict) and isinstance(result.get(k), dict):
            result[k] = merge_dicts(result[k], v)
        else:
            result[k] = v
    return result


# --- File I/O Helpers --- #

def load_json_file(path: Path) -> Dict[str, Any]:
    """
    Load a JSON object from 'path'. Returns an empty dict if the file is missing.

    Raises:
        ValueError: if the file exists but contains invalid JSON or a non-object.
    """
    if not path.exists():
        return {}
    try:
        with path.open("r", encoding=DEFAULT_TEXT_ENCODING) as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ValueError(
            f"Invalid JSON in {str(path)!r}: {e.msg} (line {e.lineno}, col {e.colno})"
        ) from e
    if not isinstance(data, dict):
        raise ValueError(f"Expected a JSON object in {str(path)!r}, got {type(data).__name__}")
    return data


# --- Import Helpers --- #

def import_object(target: str) -> Any:
    """
    Resolve a 'package.module:Attr' (or 'package.module:Outer.Inner') path.

    Raises:
        ValueError: if the path is malformed, the module cannot be imported,
                    or the attribute does not exist.
    """
    module_name, sep, attr_path = target.partition(":")
    if not sep or not module_name.strip() or not attr_path.strip():
        raise ValueError(f"Expected 'module:attribute', got {target!r}")
    try:
        obj = importlib.import_module(module_name.strip())
    except ImportError as e:
        raise ValueError(f"Cannot import module {module_name!r}: {e}") from e
    for part in attr_path.strip().split("."):
        try:
            obj = getattr(obj, part)
        except AttributeError as e:
            raise ValueError(f"{module_name!r} has no attribute {attr_path!r}") from e
    return obj
