"""Marshal and unmarshal engines."""

from .marshal import marshal, marshal_to_environ
from .unmarshal import decode, unmarshal, unmarshal_from_environ


__all__ = ["decode", "marshal", "marshal_to_environ", "unmarshal", "unmarshal_from_environ"]
