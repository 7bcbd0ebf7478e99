"""Populate env-tagged dataclasses from a key set."""

from __future__ import annotations

import dataclasses
import logging
import os
from typing import TYPE_CHECKING, Any, TypeVar

from kv_env.errors import InvalidValueError, UnexportedFieldError
from kv_env.keyset import KeySet, environ_to_keyset
from kv_env.schema.coercion import coerce
from kv_env.schema.fields import FieldKind, describe, is_record


if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping, MutableMapping


_T = TypeVar("_T")

logger = logging.getLogger(__name__)


def _record_type_of(target: Any) -> type:
    if not is_record(target):
        msg = f"value must be a dataclass instance, got {type(target).__name__}"
        raise InvalidValueError(msg)
    return type(target)


def unmarshal(keyset: MutableMapping[str, str], target: Any) -> None:
    """Populate ``target`` from ``keyset``, consuming every matched key.

    Fields are visited in declaration order. Nested dataclass fields are
    populated first from the same key set, then the field's own ``env`` tag
    is handled. Keys that match a tagged field are deleted from ``keyset``,
    so on return it holds only what was left unused.

    The first failing field aborts the walk. Fields and keys handled before
    the failure stay assigned and consumed.

    Nested records are followed by value, so a record graph that refers
    back to itself recurses until ``RecursionError``.

    Raises
    ------
    InvalidValueError
        ``target`` is not a dataclass instance.
    UnexportedFieldError
        A tagged field is private or belongs to a frozen dataclass.
    UnsupportedTypeError
        A tagged field's type has no coercion rule, or a slice element
        fails to parse.
    ValueError
        A boolean or integer literal is malformed.
    """
    record_type = _record_type_of(target)

    for descriptor in describe(record_type):
        if descriptor.spec.kind is FieldKind.RECORD and descriptor.accessible:
            nested = getattr(target, descriptor.name)
            if is_record(nested):
                logger.debug("entering nested record %s.%s", record_type.__name__, descriptor.name)
                unmarshal(keyset, nested)

        key = descriptor.key
        if key is None:
            continue

        if not descriptor.settable:
            msg = f"field {record_type.__name__}.{descriptor.name} tagged {key!r} must be public and writable"
            raise UnexportedFieldError(msg)

        if key not in keyset:
            continue

        # a tag on a nested record names no value of its own
        if descriptor.spec.kind is FieldKind.RECORD:
            logger.debug("ignoring tag %r on nested record %s.%s", key, record_type.__name__, descriptor.name)
            continue

        setattr(target, descriptor.name, coerce(descriptor.spec, keyset[key]))
        del keyset[key]
        logger.debug("consumed %r into %s.%s", key, record_type.__name__, descriptor.name)


def decode(keyset: Mapping[str, str], record_type: type[_T]) -> tuple[_T, KeySet]:
    """Build ``record_type()`` from a copy of ``keyset``.

    Returns the populated record and the keys it did not consume. The
    caller's mapping is left untouched.
    """
    if not (isinstance(record_type, type) and dataclasses.is_dataclass(record_type)):
        msg = f"record_type must be a dataclass type, got {record_type!r}"
        raise InvalidValueError(msg)

    record = record_type()
    remainder: KeySet = dict(keyset)
    unmarshal(remainder, record)
    return record, remainder


def unmarshal_from_environ(target: Any, environ: Iterable[str] | None = None) -> KeySet:
    """Populate ``target`` from the process environment.

    ``environ`` is a sequence of ``KEY=VALUE`` strings; when omitted a
    snapshot of ``os.environ`` is used. The process environment itself is
    never modified. Returns the unconsumed remainder.
    """
    keyset = dict(os.environ) if environ is None else environ_to_keyset(environ)
    unmarshal(keyset, target)
    return keyset
