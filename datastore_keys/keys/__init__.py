"""Key data model: ancestors, partial keys, complete keys and builders."""

from .ancestor import INT64_MAX, INT64_MIN, Ancestor, Id, Identifier, Name, identifier_for
from .key import Key, KeyBuilder
from .partial import DEFAULT_NAMESPACE, PartialKey, PartialKeyBuilder


__all__ = [
    "DEFAULT_NAMESPACE",
    "INT64_MAX",
    "INT64_MIN",
    "Ancestor",
    "Id",
    "Identifier",
    "Key",
    "KeyBuilder",
    "Name",
    "PartialKey",
    "PartialKeyBuilder",
    "identifier_for",
]
