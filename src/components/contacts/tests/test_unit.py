"""
Contacts component unit tests.

Tests for contact CRUD, favorites and search.
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest

from src.components.contacts import (
    ContactService,
    CreateContactInput,
    DeleteContactInput,
    GetContactInput,
    SearchContactsInput,
    SetFavoriteInput,
    UpdateContactInput,
    clean_updates,
    matches_query,
    normalize_query,
    run_create,
    run_delete,
    run_get,
    run_search,
    run_set_favorite,
    run_update,
    sort_contacts,
)
from src.domain.entities import Contact

# --- Mock Repository ---


class MockContactRepo:
    """In-memory contact repository for testing."""

    def __init__(self) -> None:
        self._contacts: dict[str, Contact] = {}

    def save(self, contact: Contact) -> Contact:
        self._contacts[contact.id] = contact
        return contact

    def get_by_id(self, contact_id: str) -> Contact | None:
        return self._contacts.get(contact_id)

    def search(self, query: str | None) -> list[Contact]:
        return sort_contacts(c for c in self._contacts.values() if matches_query(c, query))

    def delete(self, contact_id: str) -> None:
        self._contacts.pop(contact_id, None)


@pytest.fixture
def repo() -> MockContactRepo:
    return MockContactRepo()


@pytest.fixture
def service(repo: MockContactRepo) -> ContactService:
    return ContactService(repo=repo)


@pytest.fixture
def sarah(repo: MockContactRepo) -> Contact:
    return repo.save(Contact(id="1", first="Sarah", last="Doe"))


# --- Creation Tests ---


class TestCreateContact:
    """Test contact creation."""

    def test_create_empty_contact(self, service: ContactService) -> None:
        """New contacts start with every optional field unset."""
        result = run_create(CreateContactInput(), service)

        assert result.success is True
        assert result.contact is not None
        assert result.contact.first is None
        assert result.contact.last is None
        assert result.contact.twitter is None
        assert result.contact.avatar is None
        assert result.contact.notes is None
        assert result.contact.favorite is False
        assert result.errors == ()

    def test_create_then_get_round_trips(self, service: ContactService) -> None:
        """Fetching a just-created contact by its ID yields the empty record."""
        created = run_create(CreateContactInput(), service).contact
        assert created is not None

        fetched = run_get(GetContactInput(contact_id=created.id), service)

        assert fetched.success is True
        assert fetched.contact == created

    def test_create_assigns_unique_ids(self, service: ContactService) -> None:
        """Every contact gets its own identifier."""
        ids = {run_create(CreateContactInput(), service).contact.id for _ in range(20)}  # type: ignore[union-attr]
        assert len(ids) == 20

    def test_create_with_fields(self, service: ContactService) -> None:
        """Given fields are kept."""
        result = run_create(CreateContactInput(first="Ada", favorite=True), service)

        assert result.contact is not None
        assert result.contact.first == "Ada"
        assert result.contact.favorite is True


# --- Get Tests ---


class TestGetContact:
    """Test fetching contacts."""

    def test_get_missing_contact(self, service: ContactService) -> None:
        result = run_get(GetContactInput(contact_id="nope"), service)

        assert result.success is False
        assert result.contact is None
        assert result.errors[0].code == "contact_not_found"


# --- Update Tests ---


class TestUpdateContact:
    """Test contact updates."""

    def test_update_overwrites_listed_fields(self, service: ContactService, sarah: Contact) -> None:
        inp = UpdateContactInput(
            contact_id=sarah.id,
            updates={"first": "Sara", "last": "Doe-Smith", "twitter": "@sara", "notes": ""},
        )
        result = run_update(inp, service)

        assert result.success is True
        assert result.contact is not None
        assert result.contact.first == "Sara"
        assert result.contact.last == "Doe-Smith"
        assert result.contact.twitter == "@sara"
        # Empty string is stored as-is, distinct from unset
        assert result.contact.notes == ""
        assert result.contact.avatar is None

    def test_update_ignores_unknown_fields(self, service: ContactService, sarah: Contact) -> None:
        inp = UpdateContactInput(contact_id=sarah.id, updates={"id": "hijack", "Last": "X"})
        result = run_update(inp, service)

        assert result.success is True
        assert result.contact is not None
        assert result.contact.id == "1"
        assert result.contact.last == "Doe"

    def test_update_missing_contact(self, service: ContactService) -> None:
        result = run_update(UpdateContactInput(contact_id="missing", updates={"first": "X"}), service)

        assert result.success is False
        assert result.errors[0].code == "contact_not_found"

    def test_update_blank_id(self, service: ContactService) -> None:
        result = run_update(UpdateContactInput(contact_id="  ", updates={}), service)

        assert result.success is False
        assert result.errors[0].code == "contact_id_required"

    def test_update_keeps_created_at(self, service: ContactService, sarah: Contact) -> None:
        result = run_update(UpdateContactInput(contact_id=sarah.id, updates={"first": "S"}), service)

        assert result.contact is not None
        assert result.contact.created_at == sarah.created_at


# --- Favorite Tests ---


class TestSetFavorite:
    """Test favorite toggling."""

    def test_favorite_leaves_other_fields_unchanged(
        self, service: ContactService, repo: MockContactRepo
    ) -> None:
        original = repo.save(
            Contact(id="7", first="Mei", last="Chen", twitter="@mei", avatar="a.jpg", notes="n")
        )

        result = run_set_favorite(SetFavoriteInput(contact_id="7", favorite=True), service)

        assert result.success is True
        assert result.contact is not None
        assert result.contact.favorite is True
        assert result.contact.model_dump(exclude={"favorite"}) == original.model_dump(
            exclude={"favorite"}
        )

    def test_unfavorite(self, service: ContactService, repo: MockContactRepo) -> None:
        repo.save(Contact(id="8", favorite=True))

        result = run_set_favorite(SetFavoriteInput(contact_id="8", favorite=False), service)

        assert result.contact is not None
        assert result.contact.favorite is False

    def test_favorite_missing_contact(self, service: ContactService) -> None:
        result = run_set_favorite(SetFavoriteInput(contact_id="nope", favorite=True), service)

        assert result.success is False
        assert result.errors[0].code == "contact_not_found"


# --- Delete Tests ---


class TestDeleteContact:
    """Test contact deletion."""

    def test_delete_then_get_is_absent(self, service: ContactService, sarah: Contact) -> None:
        result = run_delete(DeleteContactInput(contact_id=sarah.id), service)

        assert result.success is True
        assert run_get(GetContactInput(contact_id=sarah.id), service).contact is None

    def test_delete_last_contact_empties_list(
        self, service: ContactService, sarah: Contact
    ) -> None:
        run_delete(DeleteContactInput(contact_id=sarah.id), service)

        assert run_search(SearchContactsInput(query=None), service).contacts == ()

    def test_delete_missing_contact(self, service: ContactService) -> None:
        result = run_delete(DeleteContactInput(contact_id="missing"), service)

        assert result.success is False
        assert result.errors[0].code == "contact_not_found"


# --- Search Tests ---


class TestSearchContacts:
    """Test search."""

    def test_search_matches_last_name_case_insensitively(
        self, service: ContactService, sarah: Contact
    ) -> None:
        result = run_search(SearchContactsInput(query="doe"), service)

        assert [c.id for c in result.contacts] == ["1"]
        assert result.total == 1
        assert result.query == "doe"

    def test_search_no_match(self, service: ContactService, sarah: Contact) -> None:
        assert run_search(SearchContactsInput(query="zz"), service).contacts == ()

    def test_search_none_returns_all(self, service: ContactService, repo: MockContactRepo) -> None:
        repo.save(Contact(id="1", first="Sarah", last="Doe"))
        repo.save(Contact(id="2"))

        result = run_search(SearchContactsInput(query=None), service)

        assert {c.id for c in result.contacts} == {"1", "2"}

    def test_blank_query_returns_all(self, service: ContactService, sarah: Contact) -> None:
        result = run_search(SearchContactsInput(query="   "), service)

        assert result.total == 1
        assert result.query is None

    def test_search_does_not_match_other_fields(
        self, service: ContactService, repo: MockContactRepo
    ) -> None:
        repo.save(Contact(id="3", first="Ann", twitter="@doe", notes="doe"))

        assert run_search(SearchContactsInput(query="doe"), service).contacts == ()


# --- Helper Tests ---


class TestHelpers:
    """Test pure helpers."""

    def test_normalize_query(self) -> None:
        assert normalize_query(None) is None
        assert normalize_query("") is None
        assert normalize_query(" ab ") == "ab"

    def test_matches_query_case_sensitive(self) -> None:
        contact = Contact(first="Sarah", last="Doe")

        assert matches_query(contact, "doe") is True
        assert matches_query(contact, "doe", case_sensitive=True) is False
        assert matches_query(contact, "Doe", case_sensitive=True) is True

    def test_sort_by_last_then_created(self) -> None:
        now = datetime.now(UTC)
        older = Contact(id="a", last="Zed", created_at=now - timedelta(days=1))
        newer = Contact(id="b", last="zed", created_at=now)
        unnamed = Contact(id="c", created_at=now - timedelta(days=5))
        adams = Contact(id="d", last="Adams", created_at=now)

        ordered = sort_contacts([unnamed, newer, adams, older])

        assert [c.id for c in ordered] == ["d", "a", "b", "c"]

    def test_clean_updates(self) -> None:
        cleaned = clean_updates({"first": "A", "notes": None, "favorite": 1, "bogus": "x"})

        assert cleaned == {"first": "A", "notes": None, "favorite": True}

    def test_clean_updates_string_favorite(self) -> None:
        assert clean_updates({"favorite": "false"}) == {"favorite": False}
        assert clean_updates({"favorite": ""}) == {"favorite": False}
        assert clean_updates({"favorite": "true"}) == {"favorite": True}

    def test_display_name(self) -> None:
        assert Contact(first="Sarah", last="Doe").display_name == "Sarah Doe"
        assert Contact(first="Sarah").display_name == "Sarah"
        assert Contact().display_name is None
        assert Contact(first="", last="").display_name is None
