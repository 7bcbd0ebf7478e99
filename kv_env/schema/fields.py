"""Field descriptor tables built from dataclass annotations and ``env`` tags."""

from __future__ import annotations

import dataclasses
import enum
import inspect
import logging
import types
import typing
import weakref
from dataclasses import dataclass
from typing import Any


ENV_TAG = "env"

logger = logging.getLogger(__name__)


class FieldKind(enum.Enum):
    """Coercion category of a field, derived from its declared type."""

    STRING = "string"
    BOOL = "bool"
    INT = "int"
    POINTER = "pointer"
    SLICE = "slice"
    RECORD = "record"
    OTHER = "other"


@dataclass(frozen=True)
class TypeSpec:
    """Resolved shape of a declared type.

    ``elem`` is set for ``POINTER`` (the pointee) and ``SLICE`` (the element).
    """

    kind: FieldKind
    annotation: Any
    elem: TypeSpec | None = None


@dataclass(frozen=True)
class FieldDescriptor:
    """One entry of a record type's field table."""

    name: str
    key: str | None
    spec: TypeSpec
    accessible: bool
    settable: bool


def env_field(key: str, **kwargs: Any) -> Any:
    """Return a ``dataclasses.field`` bound to environment variable ``key``.

    Extra keyword arguments (``default``, ``default_factory``, ``repr`` ...)
    are passed through to :func:`dataclasses.field`. Existing ``metadata``
    entries are kept.
    """
    if not key:
        msg = "env key must not be empty"
        raise ValueError(msg)
    if "=" in key:
        msg = "env key must not contain '='"
        raise ValueError(msg)

    metadata = dict(kwargs.pop("metadata", None) or {})
    metadata[ENV_TAG] = key
    return dataclasses.field(metadata=metadata, **kwargs)


def is_record(value: Any) -> bool:
    """Return True for dataclass instances (not dataclass classes)."""
    return dataclasses.is_dataclass(value) and not isinstance(value, type)


def resolve_type(annotation: Any) -> TypeSpec:
    """Map a type annotation onto a :class:`TypeSpec`."""
    # bool subclasses int, so it must be matched first
    if annotation is bool:
        return TypeSpec(FieldKind.BOOL, annotation)
    if annotation is int:
        return TypeSpec(FieldKind.INT, annotation)
    if annotation is str:
        return TypeSpec(FieldKind.STRING, annotation)
    if isinstance(annotation, type) and dataclasses.is_dataclass(annotation):
        return TypeSpec(FieldKind.RECORD, annotation)

    origin = typing.get_origin(annotation)
    args = typing.get_args(annotation)
    if origin is typing.Union or origin is types.UnionType:
        members = [arg for arg in args if arg is not types.NoneType]
        if len(members) == 1 and len(args) == 2:  # noqa: PLR2004
            return TypeSpec(FieldKind.POINTER, annotation, resolve_type(members[0]))
        return TypeSpec(FieldKind.OTHER, annotation)
    if annotation is list or origin is list:
        elem = resolve_type(args[0]) if args else TypeSpec(FieldKind.OTHER, Any)
        return TypeSpec(FieldKind.SLICE, annotation, elem)

    return TypeSpec(FieldKind.OTHER, annotation)


def _resolve_field_annotation(record_type: type, field: dataclasses.Field[Any]) -> Any:
    annotation = field.type
    if not isinstance(annotation, str):
        return annotation

    # evaluate against the module and namespace of the class that declared the field
    for base in record_type.__mro__:
        try:
            declared = inspect.get_annotations(base)
        except NameError:
            continue
        if field.name not in declared:
            continue
        holder = type("_FieldHint", (), {"__annotations__": {field.name: annotation}, "__module__": base.__module__})
        try:
            return typing.get_type_hints(holder, localns=dict(vars(base)))[field.name]
        except NameError:
            logger.debug("cannot resolve annotation %r of %s.%s", annotation, record_type.__name__, field.name)
            return annotation
    return annotation


def _field_annotations(record_type: type) -> dict[str, Any]:
    try:
        return typing.get_type_hints(record_type)
    except NameError:
        return {field.name: _resolve_field_annotation(record_type, field) for field in dataclasses.fields(record_type)}


_TABLES: weakref.WeakKeyDictionary[type, tuple[FieldDescriptor, ...]] = weakref.WeakKeyDictionary()


def describe(record_type: type) -> tuple[FieldDescriptor, ...]:
    """Return the field table of a dataclass type, in declaration order.

    Tables are cached per type for as long as the type is alive. A field
    whose annotation cannot be resolved (a name only visible in a local
    scope or under ``TYPE_CHECKING``) gets kind ``OTHER``.
    """
    table = _TABLES.get(record_type)
    if table is not None:
        return table

    hints = _field_annotations(record_type)
    frozen = record_type.__dataclass_params__.frozen

    descriptors: list[FieldDescriptor] = []
    for field in dataclasses.fields(record_type):
        accessible = not field.name.startswith("_")
        descriptors.append(
            FieldDescriptor(
                name=field.name,
                key=field.metadata.get(ENV_TAG) or None,
                spec=resolve_type(hints[field.name]),
                accessible=accessible,
                settable=accessible and not frozen,
            )
        )
    table = tuple(descriptors)
    _TABLES[record_type] = table
    return table
