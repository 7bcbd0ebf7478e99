"""Conversion between ``KEY=VALUE`` environ entries and key sets."""

from __future__ import annotations

from typing import TYPE_CHECKING

from kv_env.errors import InvalidEnvironError


if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping


KeySet = dict[str, str]


def environ_to_keyset(environ: Iterable[str]) -> KeySet:
    """Build a key set from ``KEY=VALUE`` strings, splitting on the first ``=``."""
    keyset: KeySet = {}
    for entry in environ:
        key, sep, value = entry.partition("=")
        if not sep:
            msg = f"environ entry must be of the form KEY=VALUE: {entry!r}"
            raise InvalidEnvironError(msg)
        keyset[key] = value
    return keyset


def keyset_to_environ(keyset: Mapping[str, str]) -> list[str]:
    """Render a key set as ``KEY=VALUE`` strings in mapping order."""
    return [f"{key}={value}" for key, value in keyset.items()]
