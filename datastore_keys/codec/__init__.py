"""Wire and url-safe codecs for keys."""

from .url_safe import escape, unescape
from .wire import KeyMessage, PathElement, decode_key_message, encode_key_message


__all__ = ["KeyMessage", "PathElement", "decode_key_message", "encode_key_message", "escape", "unescape"]
