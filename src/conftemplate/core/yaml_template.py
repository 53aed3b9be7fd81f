#!/usr/bin/env python3
"""
Purpose:
    Generates commented YAML configuration templates from a FieldDescriptor
    tree, providing functions to render the template as a string or write it
    to disk. Lines are collected first and rendered second, since the comment
    column of a block depends on the width of every line in it.
"""

from __future__ import annotations

import json
import logging
import math
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional

from conftemplate.core.constants import (
    COMMENT_MARKER,
    DEFAULT_TEXT_ENCODING,
    INDENT_WIDTH,
    MAP_EXAMPLE_COMMENT,
    MAP_EXAMPLE_ENTRY,
    NULL_PLACEHOLDER,
    SEQUENCE_PLACEHOLDER,
)
from conftemplate.core.schema.field_descriptor import FieldDescriptor
from conftemplate.core.schema.field_kind import FieldKind, ValueType

logger = logging.getLogger(__name__)


class AlignMode(str, Enum):
    """
    How trailing comments are lined up.

    - block    : one comment column per sibling block (the fields of one struct)
    - document : one comment column for the whole template, measured over every line
    """

    BLOCK = "block"
    DOCUMENT = "document"

    @classmethod
    def parse(cls, value: str | AlignMode) -> AlignMode:
        if isinstance(value, AlignMode):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            valid = ", ".join(m.value for m in cls)
            raise ValueError(f"Unknown align mode {value!r}; valid modes are: {valid}") from None


# --- Public API --- #

def write_yaml_template(
    root: FieldDescriptor,
    path: Path,
    *,
    use_defaults: bool = True,
    align: str | AlignMode = AlignMode.BLOCK,
) -> None:
    """Render and write a YAML template for `root` to `path`."""
    path = Path(path)
    text = generate_yaml_template(root, use_defaults, align=align)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding=DEFAULT_TEXT_ENCODING)
    logger.debug("Wrote YAML template for %r to %s", root.name, path)


def generate_yaml_template(
    root: FieldDescriptor,
    use_defaults: bool = True,
    *,
    align: str | AlignMode = AlignMode.BLOCK,
) -> str:
    """
    Return a commented YAML template for the fields of the `root` struct.

    Declared defaults are always rendered; fields without one render `null`
    (scalars) or a placeholder element (sequences). `use_defaults` is reserved
    and does not currently change the output.

    The result ends with a single newline, or is empty when `root` has no
    emitted fields.
    """
    mode = AlignMode.parse(align)
    if not use_defaults:
        logger.debug("use_defaults=False is reserved; declared defaults are still rendered")

    builder = _TemplateBuilder()
    builder.add_fields(root, depth=0)
    return _render(builder.lines, mode)


# --- Line model --- #

@dataclass(frozen=True)
class _Line:
    """
    One template line before alignment.

    `block` groups sibling field lines that share a comment column; sequence
    element rows have no block and never carry a comment.
    """
    depth: int
    body: str
    comment: Optional[str] = None
    block: Optional[int] = None

    @property
    def text(self) -> str:
        return " " * (self.depth * INDENT_WIDTH) + self.body


class _TemplateBuilder:
    """Walks the descriptor tree once, collecting `_Line`s in emission order."""

    def __init__(self) -> None:
        self.lines: list[_Line] = []
        self._blocks = 0

    def add_fields(self, parent: FieldDescriptor, depth: int) -> None:
        """Emit the children of `parent` as one sibling block; ignored fields are skipped entirely."""
        block = self._new_block()
        for fd in parent.emitted_children():
            self._add_field(fd, depth, block)

    def _new_block(self) -> int:
        self._blocks += 1
        return self._blocks

    def _field_line(self, depth: int, body: str, comment: Optional[str], block: int) -> None:
        self.lines.append(_Line(depth, body, comment, block))

    def _element_line(self, depth: int, body: str) -> None:
        self.lines.append(_Line(depth, body))

    def _add_field(self, fd: FieldDescriptor, depth: int, block: int) -> None:
        if fd.kind == FieldKind.SCALAR:
            self._field_line(depth, f"{fd.name}: {_scalar_value(fd)}", fd.help, block)
        elif fd.kind == FieldKind.STRUCT:
            # Struct headers never carry a comment
            self._field_line(depth, f"{fd.name}:", None, block)
            self.add_fields(fd, depth + 1)
        elif fd.kind == FieldKind.SEQUENCE:
            self._field_line(depth, f"{fd.name}:", fd.help, block)
            self._add_sequence_body(fd, depth + 1)
        elif fd.kind == FieldKind.MAPPING:
            self._field_line(depth, f"{fd.name}:", fd.help, block)
            self._field_line(depth + 1, MAP_EXAMPLE_ENTRY, MAP_EXAMPLE_COMMENT, self._new_block())
        else:
            logger.warning("Field %r has unsupported kind %r; rendering as null", fd.name, fd.kind)
            self._field_line(depth, f"{fd.name}: {NULL_PLACEHOLDER}", fd.help, block)

    def _add_sequence_body(self, fd: FieldDescriptor, depth: int) -> None:
        """
        - of structs : a bare '-' row, then one representative element's fields
        - of scalars : one '- value' row per default element (unquoted),
                       or a single placeholder row
        """
        if fd.is_struct_sequence:
            self._element_line(depth, "-")
            self.add_fields(fd, depth + 1)
            return
        for element in fd.sequence_elements() or [SEQUENCE_PLACEHOLDER]:
            self._element_line(depth, f"- {element}")


# --- Internal Helpers --- #

def _scalar_value(fd: FieldDescriptor) -> str:
    """Default as written (double-quoted for strings), or `null` when absent."""
    if fd.default is None:
        return NULL_PLACEHOLDER
    if fd.value_type.is_textual():
        return json.dumps(fd.default, ensure_ascii=False)
    if fd.value_type is ValueType.FLOAT:
        return _float_literal(fd.default)
    return fd.default


def _float_literal(text: str) -> str:
    """
    Spell a float default so YAML 1.1 loaders read it back as a float.

    Exponent forms need a '.' in the mantissa (`1e-05` loads as a string),
    and infinities/NaN use the YAML spellings. Unparseable text is kept as is.

    >>> _float_literal("1e-5"), _float_literal("3"), _float_literal("-inf")
    ('1.0e-05', '3.0', '-.inf')
    """
    try:
        value = float(text)
    except ValueError:
        return text
    if math.isnan(value):
        return ".nan"
    if math.isinf(value):
        return ".inf" if value > 0 else "-.inf"
    literal = repr(value)
    mantissa, sep, exponent = literal.partition("e")
    if sep and "." not in mantissa:
        literal = f"{mantissa}.0e{exponent}"
    return literal


def _comment_columns(lines: list[_Line], mode: AlignMode) -> dict[Optional[int], int]:
    """
    Map each block to the column its comments start at (max line width + 1).

    In document mode every line, element rows included, shares the `None` key.
    """
    widths: dict[Optional[int], int] = {}
    for line in lines:
        if mode is AlignMode.DOCUMENT:
            key = None
        elif line.block is None:
            continue
        else:
            key = line.block
        widths[key] = max(widths.get(key, 0), len(line.text))
    return {key: width + 1 for key, width in widths.items()}


def _render(lines: list[_Line], mode: AlignMode) -> str:
    columns = _comment_columns(lines, mode)
    out: list[str] = []
    for line in lines:
        text = line.text
        if line.comment:
            key = None if mode is AlignMode.DOCUMENT else line.block
            text = text.ljust(columns[key]) + COMMENT_MARKER + line.comment
        out.append(text)
    return "\n".join(out) + "\n" if out else ""
