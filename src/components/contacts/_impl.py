"""
ContactService - Contact management.

Handles creation, updates, favorites, deletion and search.

Functional Core - pure business logic.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from datetime import datetime
from typing import Any

from src.domain.entities import EDITABLE_FIELDS, Contact

from .models import ContactValidationError
from .ports import ContactRepoPort

logger = logging.getLogger(__name__)


# --- Search Helpers ---


def normalize_query(query: str | None) -> str | None:
    """Blank queries mean 'no filter'."""
    if query is None:
        return None
    query = query.strip()
    return query or None


def matches_query(contact: Contact, query: str | None, case_sensitive: bool = False) -> bool:
    """True if first or last name contains query as a substring."""
    query = normalize_query(query)
    if query is None:
        return True

    names = [contact.first or "", contact.last or ""]
    if not case_sensitive:
        query = query.casefold()
        names = [name.casefold() for name in names]
    return any(query in name for name in names)


def contact_sort_key(contact: Contact) -> tuple[bool, str, datetime]:
    """Order by last name (unset last), then by creation time."""
    last = (contact.last or "").casefold()
    return (last == "", last, contact.created_at)


def sort_contacts(contacts: Iterable[Contact]) -> list[Contact]:
    return sorted(contacts, key=contact_sort_key)


# --- Validation Functions ---


def _not_found(contact_id: str) -> ContactValidationError:
    return ContactValidationError(
        code="contact_not_found",
        message=f"No contact found for {contact_id}",
    )


def validate_contact_id(contact_id: str | None) -> list[ContactValidationError]:
    """Presence check on the identifier."""
    if not contact_id or not contact_id.strip():
        return [
            ContactValidationError(
                code="contact_id_required",
                message="Contact ID is required",
                field="contact_id",
            )
        ]
    return []


def clean_updates(updates: Mapping[str, Any]) -> dict[str, Any]:
    """
    Keep only the fields a contact may have overwritten.

    Editable text fields become str or None, favorite becomes a bool
    (a string favorite is true only when it is "true").
    Unknown keys are dropped.
    """
    cleaned: dict[str, Any] = {}
    for key in EDITABLE_FIELDS:
        if key in updates:
            value = updates[key]
            cleaned[key] = None if value is None else str(value)
    if "favorite" in updates:
        favorite = updates["favorite"]
        cleaned["favorite"] = favorite == "true" if isinstance(favorite, str) else bool(favorite)
    return cleaned


# --- Contact Service ---


class ContactService:
    """
    Contact service.

    Thin rules layer over a ContactRepoPort.
    """

    def __init__(self, repo: ContactRepoPort) -> None:
        """Initialize service."""
        self._repo = repo

    def search(self, query: str | None = None) -> list[Contact]:
        """Get contacts matching query, or all contacts."""
        return self._repo.search(normalize_query(query))

    def get_by_id(self, contact_id: str) -> Contact | None:
        """Get contact by ID."""
        contact = self._repo.get_by_id(contact_id)
        if contact is None:
            logger.debug("Contact %s not found", contact_id)
        return contact

    def create(self, **fields: Any) -> Contact:
        """Create a contact. With no fields, every optional field stays unset."""
        contact = Contact(**clean_updates(fields))
        saved = self._repo.save(contact)
        logger.info("Created contact %s", saved.id)
        return saved

    def update(
        self,
        contact_id: str,
        updates: Mapping[str, Any],
    ) -> tuple[Contact | None, list[ContactValidationError]]:
        """
        Merge updates into an existing contact.

        Returns:
            Tuple of (contact, errors). Contact is None if not found.
        """
        errors = validate_contact_id(contact_id)
        if errors:
            return None, errors

        contact = self._repo.get_by_id(contact_id)
        if contact is None:
            return None, [_not_found(contact_id)]

        cleaned = clean_updates(updates)
        updated = contact.model_copy(update=cleaned)
        saved = self._repo.save(updated)
        logger.info("Updated contact %s fields=%s", contact_id, sorted(cleaned))
        return saved, []

    def set_favorite(
        self,
        contact_id: str,
        favorite: bool,
    ) -> tuple[Contact | None, list[ContactValidationError]]:
        """Overwrite only the favorite flag."""
        return self.update(contact_id, {"favorite": favorite})

    def delete(self, contact_id: str) -> tuple[bool, list[ContactValidationError]]:
        """
        Delete a contact.

        Returns:
            Tuple of (success, errors).
        """
        errors = validate_contact_id(contact_id)
        if errors:
            return False, errors

        if self._repo.get_by_id(contact_id) is None:
            return False, [_not_found(contact_id)]

        self._repo.delete(contact_id)
        logger.info("Deleted contact %s", contact_id)
        return True, []
