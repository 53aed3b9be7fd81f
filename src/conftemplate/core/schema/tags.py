#!/usr/bin/env python3
"""
Purpose:
    Resolves the emitted YAML key of a field from its naming tags, using an
    ordered list of tag sources evaluated first-match-wins.
"""

from __future__ import annotations

from typing import Mapping, Optional, Sequence

from conftemplate.core.constants import IGNORE_SENTINEL, TAG_OPTION_SEPARATOR, TAG_PRIORITY


# --- Public API --- #

def resolve_name(
    declared_name: str,
    tags: Optional[Mapping[str, str]] = None,
    *,
    priority: Sequence[str] = TAG_PRIORITY,
) -> str | None:
    """
    Return the key a field is emitted under, or None if it is ignored.

    Each tag in `priority` is consulted in order; the first one carrying a
    non-empty name wins, otherwise `declared_name` is used. A winning value of
    "-" marks the field as ignored.

    Examples
    --------
    >>> resolve_name("Field", {"yaml": "yaml_tag", "mapstructure": "ms_tag"})
    'yaml_tag'
    >>> resolve_name("Port", {"mapstructure": "port,omitempty"})
    'port'
    >>> resolve_name("Hidden", {"yaml": "-"}) is None
    True
    """
    tags = tags or {}
    for source in priority:
        name = tag_name(tags.get(source))
        if name:
            return None if is_ignored(name) else name
    return declared_name


def tag_name(raw: str | None) -> str | None:
    """Strip tag options (everything after the first comma) and surrounding whitespace."""
    if raw is None:
        return None
    name = str(raw).split(TAG_OPTION_SEPARATOR, 1)[0].strip()
    return name or None


def is_ignored(name: str | None) -> bool:
    """True if `name` is the ignore sentinel."""
    return name == IGNORE_SENTINEL
