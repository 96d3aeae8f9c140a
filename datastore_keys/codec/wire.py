"""Binary wire form of a key: msgspec structs encoded as MessagePack."""

from __future__ import annotations

import logging
from typing import Annotated

import msgspec

from datastore_keys.errors import ParseError
from datastore_keys.keys.ancestor import INT64_MAX, INT64_MIN


logger = logging.getLogger(__name__)

Int64 = Annotated[int, msgspec.Meta(ge=INT64_MIN, le=INT64_MAX)]


class PathElement(
    msgspec.Struct,
    frozen=True,
    kw_only=True,
    omit_defaults=True,
    forbid_unknown_fields=True,
):
    """One path element on the wire; at most one of ``id``/``name`` is set."""

    kind: str
    id: Int64 | None = None
    name: str | None = None


class KeyMessage(
    msgspec.Struct,
    frozen=True,
    kw_only=True,
    omit_defaults=True,
    forbid_unknown_fields=True,
):
    """Key message exchanged with the remote store.

    ``partition`` holds the namespace; the empty string is the default
    namespace and is omitted from the encoded form.
    """

    dataset: str
    path: tuple[PathElement, ...]
    partition: str = ""


_ENCODER = msgspec.msgpack.Encoder()
_DECODER = msgspec.msgpack.Decoder(KeyMessage)


def encode_key_message(message: KeyMessage) -> bytes:
    """Encode a key message to wire bytes."""
    return _ENCODER.encode(message)


def decode_key_message(data: bytes) -> KeyMessage:
    """Decode wire bytes into a key message.

    Raises
    ------
    ParseError
        When ``data`` is not bytes or is not a well-formed key message.
    """
    if not isinstance(data, bytes | bytearray | memoryview):
        msg = f"wire data must be bytes, got {type(data).__name__}"
        raise ParseError(msg)
    try:
        return _DECODER.decode(data)
    except msgspec.DecodeError as error:
        logger.debug("rejected %d wire bytes: %s", len(data), error)
        msg = f"could not parse key: {error}"
        raise ParseError(msg) from error
