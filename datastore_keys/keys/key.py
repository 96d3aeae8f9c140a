"""Complete keys: a path whose leaf carries an id or a name."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Self, cast, override

from datastore_keys.codec.url_safe import escape, unescape
from datastore_keys.codec.wire import decode_key_message
from datastore_keys.errors import ValidationError

from .ancestor import Id, Name, identifier_for
from .partial import DEFAULT_NAMESPACE, PartialKey, PartialKeyBuilder


if TYPE_CHECKING:
    from datastore_keys.codec.wire import KeyMessage


@dataclass(frozen=True, eq=False)
class Key(PartialKey):
    """A key guaranteed to be complete, usable to reference a single entity.

    Instances are immutable; edit a copy through :meth:`builder`.
    """

    @override
    def __post_init__(self) -> None:
        super().__post_init__()
        if not self.leaf.is_complete:
            msg = "key is missing name or id"
            raise ValidationError(msg)

    @property
    def has_id(self) -> bool:
        return self.leaf.has_id

    @property
    def id(self) -> int | None:
        """The leaf id, or ``None`` when the key has a name instead."""
        return self.leaf.id

    @property
    def has_name(self) -> bool:
        return self.leaf.has_name

    @property
    def name(self) -> str | None:
        """The leaf name, or ``None`` when the key has an id instead."""
        return self.leaf.name

    @property
    def name_or_id(self) -> int | str:
        """The leaf id if set, otherwise its name."""
        leaf = self.leaf
        if leaf.id is not None:
            return leaf.id
        return cast("str", leaf.name)

    @override
    def builder(self) -> KeyBuilder:
        builder = KeyBuilder(self.dataset, self.kind, self.name_or_id, namespace=self.namespace)
        return builder.add_ancestors(self.ancestors)

    def to_url_safe(self) -> str:
        """Return the key in an encoded form that can be used as part of a URL."""
        return escape(self.to_pb())

    @classmethod
    def from_url_safe(cls, url_safe: str) -> Key:
        """Create a key from its url-safe encoded form.

        Raises
        ------
        DecodingError
            When ``url_safe`` is not valid escaped text.
        ParseError
            When the unescaped bytes are not a valid key message.
        ValidationError
            When the decoded key is incomplete.
        """
        return cls.from_pb(unescape(url_safe))

    @classmethod
    def from_incomplete_key(cls, key: PartialKey) -> Key:
        """Promote ``key`` to a :class:`Key` when its leaf has a name or an id.

        A :class:`Key` is returned unchanged.
        """
        if isinstance(key, Key):
            return key
        if isinstance(key.leaf.identifier, Id | Name):
            return Key(key.dataset, key.namespace, key.path)
        msg = "key is missing name or id"
        raise ValidationError(msg)

    @override
    @classmethod
    def from_message(cls, message: KeyMessage) -> Key:
        return cls.from_incomplete_key(PartialKey.from_message(message))

    @override
    @classmethod
    def from_pb(cls, data: bytes) -> Key:
        """Decode a complete key from its binary wire form."""
        return cls.from_message(decode_key_message(data))


class KeyBuilder(PartialKeyBuilder):
    """Builder whose leaf always carries either an id or a name."""

    def __init__(
        self,
        dataset: str,
        kind: str,
        id_or_name: int | str,
        *,
        namespace: str = DEFAULT_NAMESPACE,
    ) -> None:
        super().__init__(dataset, kind, namespace=namespace)
        self._set_leaf_identifier(identifier_for(id_or_name))

    @override
    @classmethod
    def child_of(cls, parent: PartialKey, kind: str, id_or_name: int | str) -> Self:  # type: ignore[override]
        return cls(parent.dataset, kind, id_or_name, namespace=parent.namespace)._add_parent(parent)

    def name(self, name: str) -> Self:
        """Set the leaf name, replacing any id."""
        self._set_leaf_identifier(Name(name))
        return self

    def id(self, value: int) -> Self:
        """Set the leaf id, replacing any name."""
        self._set_leaf_identifier(Id(value))
        return self

    @override
    def build(self) -> Key:
        return Key(self._dataset, self._namespace, self._build_path())
