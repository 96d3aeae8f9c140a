"""Exception types raised while building, encoding and decoding keys."""

from __future__ import annotations


class DatastoreKeyError(Exception):
    """Base class for all key errors."""


class ValidationError(DatastoreKeyError, ValueError):
    """A key, ancestor or identifier violates a structural invariant."""


class ParseError(DatastoreKeyError, ValueError):
    """Wire bytes are not a well-formed key message."""


class DecodingError(DatastoreKeyError, ValueError):
    """Text is not a valid url-safe key encoding."""


class EncodingError(DatastoreKeyError, RuntimeError):
    """The url-safe transform failed on wire bytes.

    The transform is total over bytes, so this signals a broken environment
    rather than bad input and is not meant to be handled.
    """
