#!/usr/bin/env python3
"""
Purpose:
    Builds a FieldDescriptor tree from a Pydantic model class so that a
    configuration model can be turned into a YAML template directly.

Per-field metadata is read from the pydantic `Field(...)` declaration:
    - json_schema_extra["yaml"] / ["mapstructure"] : naming tags ("-" ignores)
    - alias                                        : fallback 'mapstructure' tag
    - json_schema_extra["help"] or description     : comment text
    - json_schema_extra["default"] or the default  : rendered default
    - exclude=True                                 : field is ignored
"""

from __future__ import annotations

import types
from collections.abc import Mapping, Sequence
from enum import Enum
from pathlib import PurePath
from typing import Annotated, Any, Dict, Literal, NamedTuple, Optional, Union, get_args, get_origin

from pydantic import BaseModel
from pydantic.fields import FieldInfo

from conftemplate.core.constants import TAG_PRIORITY
from conftemplate.core.schema.field_descriptor import FieldDescriptor
from conftemplate.core.schema.field_kind import FieldKind, ValueType


class _Shape(NamedTuple):
    """Classification of one annotation."""
    kind: FieldKind
    value_type: ValueType = ValueType.STRING
    element_kind: Optional[FieldKind] = None
    model: Optional[type[BaseModel]] = None


_SEQUENCE_ORIGINS = (list, tuple, set, frozenset, Sequence)
_MAPPING_ORIGINS = (dict, Mapping)


# --- Public API --- #

def describe_model(model_cls: type[BaseModel]) -> FieldDescriptor:
    """
    Return the root struct descriptor for `model_cls`.

    Raises:
        TypeError: if `model_cls` is not a pydantic model or a field's
                   annotation cannot be classified.
    """
    if not _is_model(model_cls):
        raise TypeError(f"Expected a pydantic model class, got {model_cls!r}")
    return FieldDescriptor.struct(
        model_cls.__name__,
        children=_describe_fields(model_cls, depth=0, active=frozenset({model_cls})),
    )


# --- Internals --- #

def _describe_fields(
    model_cls: type[BaseModel], depth: int, active: frozenset[type[BaseModel]]
) -> tuple[FieldDescriptor, ...]:
    """`active` holds the models already open on the current path."""
    return tuple(
        _describe_field(name, info, depth, owner=model_cls, active=active)
        for name, info in model_cls.model_fields.items()
    )


def _describe_field(
    name: str, info: FieldInfo, depth: int, owner: type[BaseModel], active: frozenset[type[BaseModel]]
) -> FieldDescriptor:
    if info.exclude is True:
        return FieldDescriptor.ignored(name)
    extra = _schema_extra(info)
    tags = _tags(info, extra)

    try:
        shape = _classify(info.annotation)
    except TypeError as e:
        raise TypeError(f"{owner.__name__}.{name}: {e}") from e
    if shape.model is not None and shape.model in active:
        raise TypeError(f"{owner.__name__}.{name}: Recursive model {shape.model.__name__} is not supported")
    nested = active | {shape.model} if shape.model is not None else active

    common: Dict[str, Any] = {
        "kind": shape.kind,
        "help": extra.get("help") or info.description,
        "depth": depth,
    }

    if shape.kind == FieldKind.STRUCT:
        common["children"] = _describe_fields(shape.model, depth + 1, nested)
    elif shape.kind == FieldKind.SEQUENCE:
        common["element_kind"] = shape.element_kind
        if shape.element_kind == FieldKind.STRUCT:
            # one '-' row sits between the key and the element's fields
            common["children"] = _describe_fields(shape.model, depth + 2, nested)
        else:
            common["value_type"] = shape.value_type
            common["default"] = _default(info, extra)
    elif shape.kind == FieldKind.SCALAR:
        common["value_type"] = shape.value_type
        common["default"] = _default(info, extra)

    return FieldDescriptor.from_tags(name, tags, **common)


def _schema_extra(info: FieldInfo) -> Dict[str, Any]:
    extra = info.json_schema_extra
    return dict(extra) if isinstance(extra, dict) else {}


def _tags(info: FieldInfo, extra: Dict[str, Any]) -> Dict[str, str]:
    tags: Dict[str, str] = {}
    if info.alias:
        tags["mapstructure"] = info.alias
    for source in TAG_PRIORITY:
        if extra.get(source) is not None:
            tags[source] = str(extra[source])
    return tags


def _default(info: FieldInfo, extra: Dict[str, Any]) -> Any:
    """Explicit 'default' in the schema extra wins over the model default."""
    if "default" in extra:
        return extra["default"]
    if info.is_required():
        return None
    return info.get_default(call_default_factory=True)


def _classify(annotation: Any) -> _Shape:
    """Map a type annotation onto a descriptor kind."""
    annotation = _unwrap(annotation)

    if _is_model(annotation):
        return _Shape(FieldKind.STRUCT, model=annotation)

    value_type = _scalar_type(annotation)
    if value_type is not None:
        return _Shape(FieldKind.SCALAR, value_type=value_type)

    origin = get_origin(annotation) or annotation
    if origin in _MAPPING_ORIGINS:
        return _Shape(FieldKind.MAPPING)
    if origin in _SEQUENCE_ORIGINS:
        return _classify_sequence(annotation)

    raise TypeError(f"Unsupported annotation {annotation!r}")


def _classify_sequence(annotation: Any) -> _Shape:
    args = [a for a in get_args(annotation) if a is not Ellipsis]
    element = _unwrap(args[0]) if args else str
    if _is_model(element):
        return _Shape(FieldKind.SEQUENCE, element_kind=FieldKind.STRUCT, model=element)
    value_type = _scalar_type(element)
    if value_type is None:
        raise TypeError(f"Sequence elements must be scalars or models, got {element!r}")
    return _Shape(FieldKind.SEQUENCE, value_type=value_type, element_kind=FieldKind.SCALAR)


def _unwrap(annotation: Any) -> Any:
    """Strip Annotated[...] and Optional[...] wrappers."""
    origin = get_origin(annotation)
    if origin is Annotated:
        return _unwrap(get_args(annotation)[0])
    if origin is Union or origin is types.UnionType:
        members = [a for a in get_args(annotation) if a is not type(None)]
        if len(members) != 1:
            raise TypeError(f"Unions of several types are not supported: {annotation!r}")
        return _unwrap(members[0])
    return annotation


def _scalar_type(annotation: Any) -> ValueType | None:
    if get_origin(annotation) is Literal:
        values = get_args(annotation)
        return ValueType.from_python_type(type(values[0])) if values else ValueType.STRING
    if _is_class(annotation) and issubclass(annotation, Enum):
        members = list(annotation)
        if members and not issubclass(annotation, str):
            return ValueType.from_python_type(type(members[0].value)) or ValueType.STRING
        return ValueType.STRING
    if _is_class(annotation) and issubclass(annotation, PurePath):
        return ValueType.STRING
    return ValueType.from_python_type(annotation)


def _is_class(annotation: Any) -> bool:
    """True for plain classes; parametrized generics such as list[int] are excluded."""
    return isinstance(annotation, type) and get_origin(annotation) is None


def _is_model(annotation: Any) -> bool:
    return _is_class(annotation) and issubclass(annotation, BaseModel)
