import pytest
from hypothesis import given

from datastore_keys.errors import DecodingError, ParseError, ValidationError
from datastore_keys.keys import Ancestor, Id, Key, KeyBuilder, PartialKey, PartialKeyBuilder
from tests.strategies import keys


def test_person_under_company(person_key: Key) -> None:
    assert person_key.dataset == "d1"
    assert person_key.path == (Ancestor.of("Company", "acme"), Ancestor.of("Person", 42))
    assert person_key.kind == "Person"
    assert person_key.ancestors == (Ancestor.of("Company", "acme"),)
    assert person_key.has_id
    assert person_key.id == 42
    assert not person_key.has_name
    assert person_key.name is None
    assert person_key.name_or_id == 42

    decoded = Key.from_pb(person_key.to_pb())
    assert decoded == person_key
    assert decoded.path == person_key.path
    assert Key.from_url_safe(person_key.to_url_safe()) == person_key


def test_name_key_accessors() -> None:
    key = KeyBuilder("d1", "Company", "acme").build()
    assert key.has_name
    assert not key.has_id
    assert key.name == "acme"
    assert key.id is None
    assert key.name_or_id == "acme"


def test_id_then_name_keeps_only_name() -> None:
    key = KeyBuilder("d1", "Person", 1).id(7).name("x").build()
    assert key.has_name
    assert not key.has_id
    assert key.name == "x"


def test_name_then_id_keeps_only_id() -> None:
    key = KeyBuilder("d1", "Person", "x").name("y").id(7).build()
    assert key.has_id
    assert not key.has_name
    assert key.id == 7


def test_key_builder_inherited_methods_return_key_builder() -> None:
    builder = KeyBuilder("d1", "Person", 1)
    assert builder.add_ancestor("Company", "acme") is builder
    assert builder.kind("Employee").dataset("d2").namespace("ns").clear_path() is builder
    assert isinstance(builder.kind("Person").build(), Key)


def test_clear_path_then_build_gives_single_element_path() -> None:
    builder = KeyBuilder("d1", "Person", 42).add_ancestor("Company", "acme").add_ancestor("Dept", 3)
    key = builder.clear_path().kind("Person").id(42).build()

    assert len(key.path) == 1
    assert key.path == (Ancestor.of("Person", 42),)


def test_key_builder_rejects_empty_kind() -> None:
    with pytest.raises(ValidationError, match="kind must not be empty"):
        _ = KeyBuilder("d1", "", 1).build()


def test_key_builder_rejects_invalid_identifiers() -> None:
    with pytest.raises(ValidationError, match="name must not be empty"):
        _ = KeyBuilder("d1", "Person", "")
    with pytest.raises(ValidationError, match="got bool"):
        _ = KeyBuilder("d1", "Person", False)
    with pytest.raises(ValidationError, match="id out of int64 range"):
        _ = KeyBuilder("d1", "Person", 1).id(2**63)


def test_key_builder_child_of() -> None:
    parent = KeyBuilder("d1", "Company", "acme", namespace="ns").build()
    child = KeyBuilder.child_of(parent, "Person", 42).build()

    assert child.namespace == "ns"
    assert child.ancestors == parent.path
    assert child.id == 42


def test_key_builder_seeded_from_key(person_key: Key) -> None:
    builder = person_key.builder()
    assert isinstance(builder, KeyBuilder)
    assert builder.build() == person_key

    renamed = builder.name("bob").build()
    assert renamed.name == "bob"
    assert renamed.ancestors == person_key.ancestors
    assert person_key.id == 42


def test_key_rejects_incomplete_leaf() -> None:
    with pytest.raises(ValidationError, match="key is missing name or id"):
        _ = Key("d1", "", (Ancestor("Person"),))


def test_from_incomplete_key_returns_same_key(person_key: Key) -> None:
    assert Key.from_incomplete_key(person_key) is person_key


def test_from_incomplete_key_promotes_complete_leaf() -> None:
    partial = PartialKey("d1", "ns", (Ancestor.of("Company", "acme"), Ancestor("Person", Id(5))))
    key = Key.from_incomplete_key(partial)

    assert isinstance(key, Key)
    assert key.path == partial.path
    assert key.namespace == "ns"
    assert key.id == 5


def test_from_incomplete_key_rejects_unset_leaf() -> None:
    partial = PartialKeyBuilder("d1", "Person").build()
    with pytest.raises(ValidationError, match="key is missing name or id"):
        _ = Key.from_incomplete_key(partial)


def test_from_pb_rejects_incomplete_key() -> None:
    data = PartialKeyBuilder("d1", "Person").build().to_pb()
    with pytest.raises(ValidationError, match="key is missing name or id"):
        _ = Key.from_pb(data)


def test_to_url_safe_uses_only_unreserved_characters(person_key: Key) -> None:
    url_safe = person_key.to_url_safe()
    allowed = set("ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789-._~%")
    assert set(url_safe) <= allowed


def test_from_url_safe_rejects_garbage() -> None:
    with pytest.raises((DecodingError, ParseError)):
        _ = Key.from_url_safe("not-valid-escaped-bytes")
    with pytest.raises(DecodingError, match="not a valid url-safe key"):
        _ = Key.from_url_safe("%zz")
    with pytest.raises(DecodingError, match="not a valid url-safe key"):
        _ = Key.from_url_safe("a b")
    with pytest.raises(ParseError):
        _ = Key.from_url_safe("")


@given(key=keys())
def test_codec_round_trips(key: Key) -> None:
    assert Key.from_url_safe(key.to_url_safe()) == key
    assert Key.from_pb(key.to_pb()) == key
    assert key.builder().build() == key


@given(key=keys())
def test_from_incomplete_key_is_idempotent(key: Key) -> None:
    partial = PartialKey(key.dataset, key.namespace, key.path)
    promoted = Key.from_incomplete_key(partial)

    assert promoted == key
    assert Key.from_incomplete_key(promoted) is promoted


def test_key_with_non_ascii_text_survives_both_codecs() -> None:
    key = KeyBuilder("d1", "Persön", "名前", namespace="ns☃").add_ancestor("Ça", "x").build()
    assert Key.from_url_safe(key.to_url_safe()) == key
    assert Key.from_pb(key.to_pb()) == key


def test_key_builder_rejects_surrogate_name() -> None:
    builder = KeyBuilder("d1", "Person", 1)
    with pytest.raises(ValidationError, match="name is not valid UTF-8 text"):
        _ = builder.name("\ud800")
    assert builder.build().id == 1


def test_key_builder_child_of_rejects_incomplete_parent() -> None:
    parent = PartialKeyBuilder("d1", "Company").build()
    with pytest.raises(ValidationError, match="parent key is missing name or id"):
        _ = KeyBuilder.child_of(parent, "Person", 42)
