"""Minimal example building a key and sending it through both codecs."""

from datastore_keys import Key, KeyBuilder, PartialKeyBuilder


def main() -> None:
    """Build a parent, an incomplete child and a complete child, then round trip."""
    company = KeyBuilder("d1", "Company", "acme").build()
    pending = PartialKeyBuilder.child_of(company, "Person").build()
    print("incomplete:", pending)

    person = KeyBuilder.child_of(company, "Person", 42).build()
    url_safe = person.to_url_safe()
    print("key:", person)
    print("url-safe:", url_safe)
    print("decoded equal:", Key.from_url_safe(url_safe) == person)


if __name__ == "__main__":
    main()
