#!/usr/bin/env python3
"""
Core constants used across conftemplate.

- Layout: indentation width and the comment marker.
- Tags: naming-tag precedence and the ignore sentinel.
- Placeholders: values emitted when a field declares no default.
- File handling: default text encoding.
"""

from typing import Final

# --- Layout --- #

# Spaces per nesting level
INDENT_WIDTH: Final[int] = 2

# Prefix of every trailing comment
COMMENT_MARKER: Final[str] = "# "


# --- Tags --- #

# Naming tags, highest precedence first; the declared field name is the fallback
TAG_PRIORITY: Final[tuple[str, ...]] = ("yaml", "mapstructure")

# Tag value that drops a field from the template
IGNORE_SENTINEL: Final[str] = "-"

# Separator between a tag's name and its options (e.g. "name,omitempty")
TAG_OPTION_SEPARATOR: Final[str] = ","


# --- Placeholders --- #

# Scalar value when no default is declared
NULL_PLACEHOLDER: Final[str] = "null"

# Sole element of a scalar sequence without a default
SEQUENCE_PLACEHOLDER: Final[str] = "example"

# Separator for multi-element sequence defaults
SEQUENCE_DEFAULT_SEPARATOR: Final[str] = ","

# Static example entry rendered under every mapping field
MAP_EXAMPLE_ENTRY: Final[str] = "key: value"
MAP_EXAMPLE_COMMENT: Final[str] = "Map example"


# --- File handling --- #

# Default text encoding
DEFAULT_TEXT_ENCODING: Final[str] = "utf-8"
