"""Possibly-incomplete keys and their builder."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Self, overload

from datastore_keys.codec.wire import KeyMessage, PathElement, decode_key_message, encode_key_message
from datastore_keys.errors import ParseError, ValidationError

from .ancestor import Ancestor, Id, Identifier, Name, check_text, identifier_for


logger = logging.getLogger(__name__)

DEFAULT_NAMESPACE = ""


@dataclass(frozen=True, eq=False)
class PartialKey:
    """Dataset, namespace and a non-empty ancestor path.

    Only the leaf may lack an id or name. Instances are immutable; edit a copy
    through :meth:`builder`.
    """

    dataset: str
    namespace: str
    path: tuple[Ancestor, ...]

    def __post_init__(self) -> None:
        check_text(self.dataset, "dataset")
        check_text(self.namespace, "namespace", allow_empty=True)
        if isinstance(self.path, str | bytes) or not isinstance(self.path, Iterable):
            msg = f"path must be a sequence of Ancestor, got {type(self.path).__name__}"
            raise ValidationError(msg)
        object.__setattr__(self, "path", tuple(self.path))
        if not self.path:
            msg = "path must not be empty"
            raise ValidationError(msg)
        for position, ancestor in enumerate(self.path):
            if not isinstance(ancestor, Ancestor):
                msg = f"path element {position} is not an Ancestor: {ancestor!r}"
                raise ValidationError(msg)
        for ancestor in self.path[:-1]:
            if not ancestor.is_complete:
                msg = f"ancestor {ancestor.kind!r} is missing name or id"
                raise ValidationError(msg)

    @property
    def kind(self) -> str:
        return self.leaf.kind

    @property
    def ancestors(self) -> tuple[Ancestor, ...]:
        """Parent chain, i.e. every path element except the leaf."""
        return self.path[:-1]

    @property
    def leaf(self) -> Ancestor:
        return self.path[-1]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PartialKey):
            return NotImplemented
        return (self.dataset, self.namespace, self.path) == (other.dataset, other.namespace, other.path)

    def __hash__(self) -> int:
        return hash((self.dataset, self.namespace, self.path))

    def builder(self) -> PartialKeyBuilder:
        """Return a builder seeded with a copy of this key."""
        builder = PartialKeyBuilder(self.dataset, self.kind, namespace=self.namespace)
        builder._set_leaf_identifier(self.leaf.identifier)
        return builder.add_ancestors(self.ancestors)

    def to_message(self) -> KeyMessage:
        return KeyMessage(
            dataset=self.dataset,
            partition=self.namespace,
            path=tuple(
                PathElement(kind=ancestor.kind, id=ancestor.id, name=ancestor.name) for ancestor in self.path
            ),
        )

    def to_pb(self) -> bytes:
        """Encode this key to its binary wire form."""
        return encode_key_message(self.to_message())

    @classmethod
    def from_message(cls, message: KeyMessage) -> PartialKey:
        """Build a key from a decoded wire message.

        Raises
        ------
        ParseError
            When the message does not describe a valid path.
        """
        try:
            path = tuple(_ancestor_from_element(element) for element in message.path)
            return PartialKey(message.dataset, message.partition, path)
        except ValidationError as error:
            logger.debug("rejected key message for dataset %r: %s", message.dataset, error)
            msg = f"invalid key message: {error}"
            raise ParseError(msg) from error

    @classmethod
    def from_pb(cls, data: bytes) -> PartialKey:
        """Decode a key from its binary wire form.

        Leaf completeness is not checked here; see ``Key.from_pb``.
        """
        return cls.from_message(decode_key_message(data))

    def __str__(self) -> str:
        return f"{self.dataset}/{self.namespace}: " + "/".join(str(ancestor) for ancestor in self.path)


def _ancestor_from_element(element: PathElement) -> Ancestor:
    if element.id is not None and element.name is not None:
        msg = f"path element {element.kind!r} has both id and name"
        raise ValidationError(msg)
    if element.id is not None:
        return Ancestor(element.kind, Id(element.id))
    if element.name is not None:
        return Ancestor(element.kind, Name(element.name))
    return Ancestor(element.kind)


class PartialKeyBuilder:
    """Mutable, chainable accumulator producing :class:`PartialKey` instances.

    A builder belongs to a single construction flow and is not thread-safe.
    """

    def __init__(self, dataset: str, kind: str, *, namespace: str = DEFAULT_NAMESPACE) -> None:
        super().__init__()
        self._dataset = dataset
        self._namespace = namespace
        self._kind = kind
        self._ancestors: list[Ancestor] = []
        self._identifier: Identifier | None = None

    @classmethod
    def child_of(cls, parent: PartialKey, kind: str) -> Self:
        """Start a builder for a child of the complete key ``parent``."""
        return cls(parent.dataset, kind, namespace=parent.namespace)._add_parent(parent)

    def _add_parent(self, parent: PartialKey) -> Self:
        if not parent.leaf.is_complete:
            msg = "parent key is missing name or id"
            raise ValidationError(msg)
        return self.add_ancestors(parent.path)

    def _set_leaf_identifier(self, identifier: Identifier | None) -> None:
        self._identifier = identifier

    @overload
    def add_ancestor(self, kind: str, id_or_name: int | str, /) -> Self: ...

    @overload
    def add_ancestor(self, *ancestors: Ancestor) -> Self: ...

    def add_ancestor(self, *args: str | int | Ancestor) -> Self:
        """Append to the parent chain.

        Accepts either ``(kind, id_or_name)`` or any number of complete
        :class:`Ancestor` instances.
        """
        if len(args) == 2 and isinstance(args[0], str) and not isinstance(args[1], Ancestor):  # noqa: PLR2004
            kind, id_or_name = args
            self._ancestors.append(Ancestor(kind, identifier_for(id_or_name)))
            return self
        return self.add_ancestors(args)

    def add_ancestors(self, ancestors: Iterable[Ancestor]) -> Self:
        """Append complete ancestors to the parent chain, preserving order."""
        for ancestor in ancestors:
            if not isinstance(ancestor, Ancestor):
                msg = f"expected an Ancestor, got {type(ancestor).__name__}"
                raise ValidationError(msg)
            if not ancestor.is_complete:
                msg = f"ancestor {ancestor.kind!r} is missing name or id"
                raise ValidationError(msg)
            self._ancestors.append(ancestor)
        return self

    def kind(self, kind: str) -> Self:
        self._kind = kind
        return self

    def clear_path(self) -> Self:
        """Drop the parent chain and the leaf kind; dataset and namespace stay."""
        self._ancestors.clear()
        self._kind = ""
        return self

    def dataset(self, dataset: str) -> Self:
        self._dataset = dataset
        return self

    def namespace(self, namespace: str) -> Self:
        self._namespace = namespace
        return self

    def _build_path(self) -> tuple[Ancestor, ...]:
        if not self._dataset:
            msg = "dataset must not be empty"
            raise ValidationError(msg)
        if not self._kind:
            msg = "kind must not be empty"
            raise ValidationError(msg)
        return (*self._ancestors, Ancestor(self._kind, self._identifier))

    def build(self) -> PartialKey:
        return PartialKey(self._dataset, self._namespace, self._build_path())
