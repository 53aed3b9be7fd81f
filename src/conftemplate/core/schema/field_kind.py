#!/usr/bin/env python3
"""
Purpose:
    Defines the FieldKind and ValueType enumerations used by field
    descriptors, along with helpers for parsing and introspection.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, get_origin


class FieldKind(str, Enum):
    """
    Structural category of a schema field.

    - scalar   : single value rendered inline (`name: value`)
    - sequence : list of scalars or structs (`- value` rows)
    - mapping  : dict with keys unknown until runtime (static example entry)
    - struct   : nested object with named child fields
    - ignored  : dropped from the template entirely
    - invalid  : unrecognized kind (returned by `parse`)
    """

    SCALAR = "scalar"
    SEQUENCE = "sequence"
    MAPPING = "mapping"
    STRUCT = "struct"
    IGNORED = "ignored"
    INVALID = "invalid"

    # --- Parsing helpers --- #

    @classmethod
    def parse(cls, value: str | FieldKind | None) -> FieldKind:
        """
        Coerce arbitrary input to a `FieldKind`.

        - `FieldKind` instance → returned as-is
        - `None` or unknown strings → `FieldKind.INVALID`
        - strings are trimmed and lowercased before lookup

        Examples
        --------
        >>> FieldKind.parse(" Struct ")
        <FieldKind.STRUCT: 'struct'>
        >>> FieldKind.parse("tuple")
        <FieldKind.INVALID: 'invalid'>
        """
        if isinstance(value, FieldKind):
            return value
        if value is None:
            return cls.INVALID
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return cls.INVALID

    # --- Introspection helpers --- #

    def is_emitted(self) -> bool:
        """True unless the field is ignored; unknown kinds still render (as null)."""
        return self is not FieldKind.IGNORED

    def is_element_kind(self) -> bool:
        """True if the kind may describe sequence elements (scalar or struct)."""
        return self in {FieldKind.SCALAR, FieldKind.STRUCT}


class ValueType(str, Enum):
    """Underlying type of a scalar value; decides whether defaults are quoted."""

    STRING = "string"
    INTEGER = "integer"
    FLOAT = "float"
    BOOLEAN = "boolean"

    @classmethod
    def from_python_type(cls, t: type[Any]) -> ValueType | None:
        """
        Best-effort mapping from a Python type object to a `ValueType`.
        `bool` is checked before `int` since it subclasses it. Unknowns -> None.
        """
        if not isinstance(t, type) or get_origin(t) is not None:
            return None
        if issubclass(t, bool):
            return cls.BOOLEAN
        if issubclass(t, str):
            return cls.STRING
        if issubclass(t, int):
            return cls.INTEGER
        if issubclass(t, float):
            return cls.FLOAT
        return None

    def is_textual(self) -> bool:
        """True if values of this type are rendered double-quoted."""
        return self is ValueType.STRING
