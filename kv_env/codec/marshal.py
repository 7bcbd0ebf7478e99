"""Render env-tagged dataclasses into a key set."""

from __future__ import annotations

import logging
from typing import Any

from kv_env.errors import InvalidValueError
from kv_env.keyset import KeySet, keyset_to_environ
from kv_env.schema.coercion import format_value
from kv_env.schema.fields import FieldKind, describe, is_record


logger = logging.getLogger(__name__)


def marshal(source: Any) -> KeySet:
    """Return a fresh key set holding every tagged field of ``source``.

    Nested dataclasses are rendered recursively and merged in declaration
    order, so a later field wins when two fields share a key. Untagged
    fields, null pointers and slices of element types other than ``str``
    and ``int`` contribute nothing. Other field types are rendered with
    ``str()``. ``source`` is never modified.

    A record graph that refers back to itself is not detected and recurses
    until ``RecursionError``.
    """
    if not is_record(source):
        msg = f"value must be a dataclass instance, got {type(source).__name__}"
        raise InvalidValueError(msg)

    record_type = type(source)
    keyset: KeySet = {}
    for descriptor in describe(record_type):
        kind = descriptor.spec.kind
        value = getattr(source, descriptor.name)

        if kind is FieldKind.RECORD:
            if descriptor.accessible and is_record(value):
                logger.debug("rendering nested record %s.%s", record_type.__name__, descriptor.name)
                keyset.update(marshal(value))
            continue

        if descriptor.key is None:
            continue

        formatted = format_value(descriptor.spec, value)
        if formatted is None:
            logger.debug("skipping %s.%s: nothing to render", record_type.__name__, descriptor.name)
            continue
        keyset[descriptor.key] = formatted

    return keyset


def marshal_to_environ(source: Any) -> list[str]:
    """Render ``source`` as ``KEY=VALUE`` strings."""
    return keyset_to_environ(marshal(source))
