"""Exception types raised by the marshal and unmarshal engines."""

from __future__ import annotations


class EnvError(Exception):
    """Base class for all kv-env errors."""


class InvalidValueError(EnvError, TypeError):
    """Raised when the target is not a dataclass instance."""


class UnexportedFieldError(EnvError, AttributeError):
    """Raised when a field tagged with ``env`` cannot be assigned."""


class UnsupportedTypeError(EnvError, TypeError):
    """Raised when a field tagged with ``env`` has no coercion rule."""


class InvalidEnvironError(EnvError, ValueError):
    """Raised when an environ entry is not of the form ``KEY=VALUE``."""
