import pytest

from datastore_keys.keys import Key, KeyBuilder


@pytest.fixture
def person_key() -> Key:
    return KeyBuilder("d1", "Person", 42).add_ancestor("Company", "acme").build()
