"""kv-env - bind environment-variable key sets to typed dataclasses"""

import importlib.metadata
import logging

from .codec import decode, marshal, marshal_to_environ, unmarshal, unmarshal_from_environ
from .errors import EnvError, InvalidEnvironError, InvalidValueError, UnexportedFieldError, UnsupportedTypeError
from .keyset import KeySet, environ_to_keyset, keyset_to_environ
from .schema import ENV_TAG, env_field


try:
    __version__ = importlib.metadata.version("kv-env")
except importlib.metadata.PackageNotFoundError:  # pragma: no cover - running from a source checkout
    __version__ = "0.0.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())


__all__ = [
    "ENV_TAG",
    "EnvError",
    "InvalidEnvironError",
    "InvalidValueError",
    "KeySet",
    "UnexportedFieldError",
    "UnsupportedTypeError",
    "__version__",
    "decode",
    "env_field",
    "environ_to_keyset",
    "keyset_to_environ",
    "marshal",
    "marshal_to_environ",
    "unmarshal",
    "unmarshal_from_environ",
]
