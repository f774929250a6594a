"""
Contacts component - Data models.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from src.domain.entities import Contact

# --- Validation Errors ---


@dataclass(frozen=True)
class ContactValidationError:
    """Contact validation error."""

    code: str
    message: str
    field: str | None = None


# --- Input Models ---


@dataclass(frozen=True)
class SearchContactsInput:
    """Input for listing contacts, optionally filtered."""

    query: str | None = None


@dataclass(frozen=True)
class GetContactInput:
    """Input for getting a contact."""

    contact_id: str


@dataclass(frozen=True)
class CreateContactInput:
    """Input for creating a contact. Empty by default."""

    first: str | None = None
    last: str | None = None
    twitter: str | None = None
    avatar: str | None = None
    notes: str | None = None
    favorite: bool = False


@dataclass(frozen=True)
class UpdateContactInput:
    """Input for overwriting the given fields of a contact."""

    contact_id: str
    updates: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class SetFavoriteInput:
    """Input for toggling the favorite flag."""

    contact_id: str
    favorite: bool


@dataclass(frozen=True)
class DeleteContactInput:
    """Input for deleting a contact."""

    contact_id: str


# --- Output Models ---


@dataclass(frozen=True)
class ContactOperationOutput:
    """Output from a single-contact operation."""

    contact: Contact | None
    errors: tuple[ContactValidationError, ...]
    success: bool


@dataclass(frozen=True)
class ContactListOutput:
    """Output from search."""

    contacts: tuple[Contact, ...]
    total: int
    query: str | None = None
