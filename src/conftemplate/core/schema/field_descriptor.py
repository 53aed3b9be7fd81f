#!/usr/bin/env python3
"""
Purpose:
    Implements the FieldDescriptor model: one read-only node of the schema tree
    consumed by the YAML template generator. Handles normalization of kinds,
    defaults and help text, and enforces the structural invariants between
    kind, element kind and children.
"""
from __future__ import annotations

from enum import Enum
from typing import Any, Iterator, Mapping, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from conftemplate.core.constants import SEQUENCE_DEFAULT_SEPARATOR
from conftemplate.core.schema.field_kind import FieldKind, ValueType
from conftemplate.core.schema.tags import resolve_name


# --- Model --- #

class FieldDescriptor(BaseModel):
    """
    One field of a configuration schema.

    Common keys:
      - name, kind, value_type, default, help, depth
    Structure:
      - sequence: element_kind ('scalar' or 'struct'); struct elements keep
                  their fields in `children`
      - struct:   children (ordered; order is emission order)
      - mapping:  no children, a static example entry is rendered
      - ignored:  never rendered, name may be empty

    `depth` is informational only: the generator derives indentation from the
    tree walk, so a wrong value here never changes the rendered template.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str = Field(default="", description="Emitted YAML key (already tag-resolved).")
    kind: FieldKind = Field(default=FieldKind.SCALAR, description="Structural category.")
    element_kind: Optional[FieldKind] = Field(default=None, description="Element kind for sequences.")
    value_type: ValueType = Field(default=ValueType.STRING, description="Scalar type; drives quoting.")
    default: Optional[str] = Field(default=None, description="Raw default (comma-separated for sequences).")
    help: Optional[str] = Field(default=None, description="Trailing comment text.")
    children: Tuple[FieldDescriptor, ...] = Field(default=(), description="Nested fields in declaration order.")
    depth: int = Field(default=0, ge=0, description="Nesting level of the key line; informational only.")

    # --- Pre-parse: infer sequence element kind --- #
    @model_validator(mode="before")
    @classmethod
    def _infer_element_kind(cls, data: Any) -> Any:
        """A sequence declared without `element_kind` holds structs iff it has children."""
        if not isinstance(data, dict):
            return data
        if FieldKind.parse(data.get("kind")) != FieldKind.SEQUENCE or data.get("element_kind") is not None:
            return data
        element_kind = FieldKind.STRUCT if data.get("children") else FieldKind.SCALAR
        return {**data, "element_kind": element_kind}

    # --- Validators --- #

    @field_validator("kind", mode="before")
    @classmethod
    def _parse_kind(cls, v: Any) -> FieldKind:
        """Coerce incoming values to FieldKind (unknowns → INVALID)."""
        return FieldKind.parse(v)

    @field_validator("element_kind", mode="before")
    @classmethod
    def _parse_element_kind(cls, v: Any) -> FieldKind | None:
        return None if v is None else FieldKind.parse(v)

    @field_validator("name", mode="before")
    @classmethod
    def _normalize_name(cls, v: Any) -> str:
        return "" if v is None else str(v).strip()

    @field_validator("default", mode="before")
    @classmethod
    def _normalize_default(cls, v: Any) -> str | None:
        """Stringify defaults; an empty string means no default."""
        s = stringify_default(v)
        return s if s else None

    @field_validator("help", mode="before")
    @classmethod
    def _normalize_help(cls, v: Any) -> str | None:
        s = "" if v is None else " ".join(str(v).split())
        return s or None

    @model_validator(mode="after")
    def _post(self) -> "FieldDescriptor":
        """
        Final validation:
        - kind must be known
        - name is required unless the field is ignored
        - element_kind is set for sequences only, and is scalar or struct
        - children only on structs and sequences of structs
        """
        if self.kind == FieldKind.INVALID:
            raise ValueError("Unknown kind; valid kinds are: scalar, sequence, mapping, struct, ignored")
        if not self.name and self.kind != FieldKind.IGNORED:
            raise ValueError(f"A {self.kind.value} field requires a 'name'")

        self._validate_element_kind()
        self._validate_children()
        return self

    # --- Convenience constructors --- #

    @classmethod
    def scalar(cls, name: str, default: Any = None, help: str | None = None,
               value_type: ValueType | str = ValueType.STRING, depth: int = 0) -> "FieldDescriptor":
        return cls(name=name, kind=FieldKind.SCALAR, value_type=value_type,
                   default=default, help=help, depth=depth)

    @classmethod
    def sequence(cls, name: str, default: Any = None, help: str | None = None,
                 value_type: ValueType | str = ValueType.STRING, children: tuple = (),
                 depth: int = 0) -> "FieldDescriptor":
        """Sequence of scalars, or of structs when `children` is given."""
        element_kind = FieldKind.STRUCT if children else FieldKind.SCALAR
        return cls(name=name, kind=FieldKind.SEQUENCE, element_kind=element_kind,
                   value_type=value_type, default=default, help=help,
                   children=children, depth=depth)

    @classmethod
    def mapping(cls, name: str, help: str | None = None, depth: int = 0) -> "FieldDescriptor":
        return cls(name=name, kind=FieldKind.MAPPING, help=help, depth=depth)

    @classmethod
    def struct(cls, name: str = "", children: tuple = (), help: str | None = None,
               depth: int = 0) -> "FieldDescriptor":
        """Nested struct; an unnamed struct is only meaningful as the root."""
        return cls(name=name or "root", kind=FieldKind.STRUCT, children=children,
                   help=help, depth=depth)

    @classmethod
    def ignored(cls, name: str = "") -> "FieldDescriptor":
        return cls(name=name, kind=FieldKind.IGNORED)

    @classmethod
    def from_tags(cls, declared_name: str, tags: Optional[Mapping[str, str]] = None,
                  **fields: Any) -> "FieldDescriptor":
        """
        Build a descriptor whose name is resolved from naming tags.

        A field whose winning tag is the ignore sentinel becomes `ignored`
        regardless of the other keyword arguments.
        """
        name = resolve_name(declared_name, tags)
        if name is None:
            return cls.ignored(declared_name)
        return cls(name=name, **fields)

    # --- Accessors --- #

    @property
    def is_struct_sequence(self) -> bool:
        return self.kind == FieldKind.SEQUENCE and self.element_kind == FieldKind.STRUCT

    def emitted_children(self) -> Iterator["FieldDescriptor"]:
        """Children that produce output, in declaration order."""
        return (c for c in self.children if c.kind.is_emitted())

    def sequence_elements(self) -> list[str]:
        """Split a scalar sequence default into its trimmed, non-empty elements."""
        if not self.default:
            return []
        parts = (p.strip() for p in self.default.split(SEQUENCE_DEFAULT_SEPARATOR))
        return [p for p in parts if p]

    # --- Post Helpers --- #

    def _validate_element_kind(self) -> None:
        if self.kind != FieldKind.SEQUENCE:
            if self.element_kind is not None:
                raise ValueError(f"'element_kind' is only allowed on sequences, not {self.kind.value}")
            return
        if self.element_kind is None or not self.element_kind.is_element_kind():
            shown = None if self.element_kind is None else self.element_kind.value
            raise ValueError(
                f"Sequence elements must be 'scalar' or 'struct', got {shown!r}"
            )

    def _validate_children(self) -> None:
        if not self.children:
            return
        if self.kind == FieldKind.STRUCT or self.is_struct_sequence:
            return
        raise ValueError(f"A {self.kind.value} field cannot have 'children'")


# --- Helpers --- #

def stringify_default(value: Any) -> str:
    """
    Render a Python default as the raw default string a descriptor carries.

    - None -> ""
    - bool -> "true" / "false"
    - list/tuple/set -> comma-joined elements
    - enums -> their value
    - anything else -> str(value)
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple)):
        return SEQUENCE_DEFAULT_SEPARATOR.join(stringify_default(v) for v in value)
    if isinstance(value, (set, frozenset)):
        return SEQUENCE_DEFAULT_SEPARATOR.join(sorted(stringify_default(v) for v in value))
    if isinstance(value, Enum):
        return stringify_default(value.value)
    return str(value)


# --- Forward-Ref Resolution --- #
FieldDescriptor.model_rebuild()
