"""Interface for ``python -m datastore_keys``."""

from __future__ import annotations

import logging
from argparse import ArgumentParser
from typing import TYPE_CHECKING


if TYPE_CHECKING:
    from collections.abc import Sequence

from ._version import version
from .errors import DatastoreKeyError
from .keys import Key


__all__ = ["main"]


def main(args: Sequence[str] | None = None) -> None:
    """Argument parser for the CLI; decodes and prints url-safe keys."""
    parser = ArgumentParser(prog="datastore_keys")
    _ = parser.add_argument("-v", "--version", action="version", version=version)
    _ = parser.add_argument("--debug", action="store_true", help="log decoding details")
    _ = parser.add_argument("url_safe", nargs="*", help="url-safe encoded key")
    options = parser.parse_args(args)

    if options.debug:
        logging.basicConfig(level=logging.DEBUG)

    for url_safe in options.url_safe:
        try:
            key = Key.from_url_safe(url_safe)
        except DatastoreKeyError as error:
            parser.error(f"{url_safe}: {error}")
        print(key)  # noqa: T201


if __name__ == "__main__":
    main()
