"""String coercion rules between key set values and typed field values."""

from __future__ import annotations

import re
from typing import Any

from kv_env.errors import UnsupportedTypeError
from kv_env.schema.fields import FieldKind, TypeSpec


_TRUE_LITERALS = frozenset({"1", "t", "true"})
_FALSE_LITERALS = frozenset({"0", "f", "false"})
_INT_LITERAL = re.compile(r"[+-]?[0-9]+")

SLICE_SEP = ","


def parse_bool(value: str) -> bool:
    """Parse ``1/0/t/f/true/false`` in any letter case."""
    lowered = value.lower()
    if lowered in _TRUE_LITERALS:
        return True
    if lowered in _FALSE_LITERALS:
        return False
    msg = f"invalid boolean literal: {value!r}"
    raise ValueError(msg)


def parse_int(value: str) -> int:
    """Parse a signed base-10 integer with no surrounding whitespace."""
    if not _INT_LITERAL.fullmatch(value):
        msg = f"invalid integer literal: {value!r}"
        raise ValueError(msg)
    return int(value)


def _unsupported(spec: TypeSpec) -> UnsupportedTypeError:
    msg = f"field is an unsupported type: {spec.annotation!r}"
    return UnsupportedTypeError(msg)


def _parse_slice(spec: TypeSpec, value: str) -> list[Any]:
    parts = value.split(SLICE_SEP)
    if not parts:
        raise _unsupported(spec)

    elem = spec.elem
    if elem is None:
        raise _unsupported(spec)
    if elem.kind is FieldKind.STRING:
        return parts
    if elem.kind is FieldKind.INT:
        items: list[Any] = []
        for part in parts:
            try:
                items.append(parse_int(part))
            except ValueError as error:
                raise _unsupported(spec) from error
        return items
    raise _unsupported(spec)


def coerce(spec: TypeSpec, value: str) -> Any:
    """Convert a key set string into a value of the kind described by ``spec``.

    Boolean and integer literal errors propagate as ``ValueError``; slice
    element errors and kinds without a rule raise ``UnsupportedTypeError``.
    """
    kind = spec.kind
    if kind is FieldKind.STRING:
        return value
    if kind is FieldKind.BOOL:
        return parse_bool(value)
    if kind is FieldKind.INT:
        return parse_int(value)
    if kind is FieldKind.POINTER and spec.elem is not None:
        return coerce(spec.elem, value)
    if kind is FieldKind.SLICE:
        return _parse_slice(spec, value)
    raise _unsupported(spec)


def _format_slice(spec: TypeSpec, value: list[Any] | None) -> str | None:
    elem = spec.elem
    if elem is None or elem.kind not in {FieldKind.STRING, FieldKind.INT}:
        return None

    items = value or []
    if elem.kind is FieldKind.STRING:
        if not all(isinstance(item, str) for item in items):
            raise _unsupported(spec)
        return SLICE_SEP.join(items)

    if not all(isinstance(item, int) and not isinstance(item, bool) for item in items):
        raise _unsupported(spec)
    return SLICE_SEP.join(str(item) for item in items)


def format_value(spec: TypeSpec, value: Any) -> str | None:
    """Render a field value as a key set string.

    Returns None when the field contributes nothing: a null pointer, or a
    slice whose element kind has no join rule.
    """
    kind = spec.kind
    if kind is FieldKind.POINTER:
        if value is None or spec.elem is None:
            return None
        return format_value(spec.elem, value)
    if kind is FieldKind.SLICE:
        return _format_slice(spec, value)
    if kind is FieldKind.BOOL:
        return "true" if value else "false"
    return str(value)
