"""Path segments: a kind plus an optional integer id or string name."""

from __future__ import annotations

from dataclasses import dataclass

from datastore_keys.errors import ValidationError


INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1


@dataclass(frozen=True, slots=True)
class Id:
    """Numeric identifier of an entity, a signed 64-bit integer."""

    value: int

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            msg = f"id must be an integer, got {type(self.value).__name__}"
            raise ValidationError(msg)
        if not INT64_MIN <= self.value <= INT64_MAX:
            msg = f"id out of int64 range: {self.value}"
            raise ValidationError(msg)


@dataclass(frozen=True, slots=True)
class Name:
    """String identifier of an entity."""

    value: str

    def __post_init__(self) -> None:
        check_text(self.value, "name")


Identifier = Id | Name


def check_text(value: object, field: str, *, allow_empty: bool = False) -> None:
    """Reject anything that is not a UTF-8 encodable string."""
    if not isinstance(value, str):
        msg = f"{field} must be a string, got {type(value).__name__}"
        raise ValidationError(msg)
    if not value and not allow_empty:
        msg = f"{field} must not be empty"
        raise ValidationError(msg)
    try:
        _ = value.encode("utf-8")
    except UnicodeEncodeError as error:
        msg = f"{field} is not valid UTF-8 text: {value!r}"
        raise ValidationError(msg) from error


def identifier_for(value: int | str) -> Identifier:
    """Wrap a raw ``int`` or ``str`` into the matching identifier."""
    if isinstance(value, bool):
        msg = "identifier must be an int or a str, got bool"
        raise ValidationError(msg)
    if isinstance(value, int):
        return Id(value)
    if isinstance(value, str):
        return Name(value)
    msg = f"identifier must be an int or a str, got {type(value).__name__}"
    raise ValidationError(msg)


@dataclass(frozen=True, slots=True)
class Ancestor:
    """One ``(kind, identifier)`` element of a key path.

    ``identifier`` is ``None`` only for the leaf of an incomplete key.
    """

    kind: str
    identifier: Identifier | None = None

    def __post_init__(self) -> None:
        check_text(self.kind, "kind")
        if self.identifier is not None and not isinstance(self.identifier, Id | Name):
            msg = f"identifier must be an Id or a Name, got {type(self.identifier).__name__}"
            raise ValidationError(msg)

    @classmethod
    def of(cls, kind: str, id_or_name: int | str) -> Ancestor:
        """Create a complete ancestor from a raw id or name."""
        return cls(kind, identifier_for(id_or_name))

    @property
    def has_id(self) -> bool:
        return isinstance(self.identifier, Id)

    @property
    def has_name(self) -> bool:
        return isinstance(self.identifier, Name)

    @property
    def is_complete(self) -> bool:
        return self.identifier is not None

    @property
    def id(self) -> int | None:
        if isinstance(self.identifier, Id):
            return self.identifier.value
        return None

    @property
    def name(self) -> str | None:
        if isinstance(self.identifier, Name):
            return self.identifier.value
        return None

    def __str__(self) -> str:
        if self.identifier is None:
            return self.kind
        return f"{self.kind}({self.identifier.value!r})"
