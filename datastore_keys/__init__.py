"""datastore-keys - hierarchical entity keys with binary and url-safe codecs"""

from ._version import version as __version__
from .errors import DatastoreKeyError, DecodingError, EncodingError, ParseError, ValidationError
from .keys import Ancestor, Id, Key, KeyBuilder, Name, PartialKey, PartialKeyBuilder


__all__ = [
    "Ancestor",
    "DatastoreKeyError",
    "DecodingError",
    "EncodingError",
    "Id",
    "Key",
    "KeyBuilder",
    "Name",
    "ParseError",
    "PartialKey",
    "PartialKeyBuilder",
    "ValidationError",
    "__version__",
]
