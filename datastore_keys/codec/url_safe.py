"""Reversible percent-escaping of wire bytes for use inside URLs."""

from __future__ import annotations

import logging
import re
from urllib.parse import quote_from_bytes, unquote_to_bytes

from datastore_keys.errors import DecodingError, EncodingError


logger = logging.getLogger(__name__)

_ESCAPED_TEXT = re.compile(r"(?:[A-Za-z0-9\-._~]|%[0-9A-Fa-f]{2})*")


def escape(data: bytes) -> str:
    """Percent-escape every byte outside the unreserved URL characters."""
    try:
        return quote_from_bytes(data, safe="")
    except (TypeError, ValueError) as error:
        msg = "unexpected encoding failure"
        raise EncodingError(msg) from error


def unescape(text: str) -> bytes:
    """Reverse :func:`escape`.

    Only unreserved characters and well-formed ``%XX`` escapes are accepted,
    anything else raises :class:`DecodingError`.
    """
    if not isinstance(text, str):
        msg = f"url-safe key must be a string, got {type(text).__name__}"
        raise DecodingError(msg)
    if not _ESCAPED_TEXT.fullmatch(text):
        logger.debug("rejected url-safe text of length %d", len(text))
        msg = f"not a valid url-safe key: {text!r}"
        raise DecodingError(msg)
    return unquote_to_bytes(text)
