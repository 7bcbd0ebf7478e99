"""Field tables and coercion rules for env-tagged dataclasses."""

from .coercion import coerce, format_value, parse_bool, parse_int
from .fields import ENV_TAG, FieldDescriptor, FieldKind, TypeSpec, describe, env_field, is_record, resolve_type


__all__ = [
    "ENV_TAG",
    "FieldDescriptor",
    "FieldKind",
    "TypeSpec",
    "coerce",
    "describe",
    "env_field",
    "format_value",
    "is_record",
    "parse_bool",
    "parse_int",
    "resolve_type",
]
