"""Tests for the in-memory contact store."""

from datetime import UTC, datetime, timedelta

from src.adapters.memory import InMemoryContactRepo, get_memory_repo, reset_memory_repo
from src.domain.entities import Contact


def test_save_and_get(contact_repo):
    contact = contact_repo.save(Contact(id="1", first="Sarah"))

    assert contact_repo.get_by_id("1") == contact
    assert contact_repo.get_by_id("2") is None


def test_save_overwrites(contact_repo):
    contact_repo.save(Contact(id="1", first="Sarah"))
    contact_repo.save(Contact(id="1", first="Sara"))

    assert contact_repo.get_by_id("1").first == "Sara"
    assert contact_repo.count() == 1


def test_delete(contact_repo):
    contact_repo.save(Contact(id="1"))

    contact_repo.delete("1")
    contact_repo.delete("1")

    assert contact_repo.get_by_id("1") is None


def test_search_substring_on_names(contact_repo):
    contact_repo.save(Contact(id="1", first="Sarah", last="Doe"))
    contact_repo.save(Contact(id="2", first="Jordan", last="Blake"))

    assert [c.id for c in contact_repo.search("doe")] == ["1"]
    assert [c.id for c in contact_repo.search("AR")] == ["1"]
    assert [c.id for c in contact_repo.search("ord")] == ["2"]
    assert contact_repo.search("zz") == []
    assert {c.id for c in contact_repo.search(None)} == {"1", "2"}


def test_search_case_sensitive():
    repo = InMemoryContactRepo([Contact(id="1", first="Sarah", last="Doe")], case_sensitive=True)

    assert repo.search("doe") == []
    assert [c.id for c in repo.search("Doe")] == ["1"]


def test_search_order():
    now = datetime.now(UTC)
    repo = InMemoryContactRepo(
        [
            Contact(id="unnamed", created_at=now - timedelta(hours=2)),
            Contact(id="zed", last="Zed", created_at=now),
            Contact(id="adams", last="adams", created_at=now),
        ]
    )

    assert [c.id for c in repo.search(None)] == ["adams", "zed", "unnamed"]


def test_singleton_reset():
    first = get_memory_repo()
    assert get_memory_repo() is first

    fresh = reset_memory_repo([Contact(id="s")])

    assert get_memory_repo() is fresh
    assert fresh.get_by_id("s") is not None
