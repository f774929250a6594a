"""
Contacts component - Contact CRUD and search.

Shell Layer - handles I/O and error conversion.
"""

from __future__ import annotations

from dataclasses import asdict

from ._impl import ContactService, normalize_query
from .models import (
    ContactListOutput,
    ContactOperationOutput,
    ContactValidationError,
    CreateContactInput,
    DeleteContactInput,
    GetContactInput,
    SearchContactsInput,
    SetFavoriteInput,
    UpdateContactInput,
)


def run_search(
    input_data: SearchContactsInput,
    service: ContactService,
) -> ContactListOutput:
    """List contacts matching the query (all contacts when blank)."""
    query = normalize_query(input_data.query)
    contacts = service.search(query)
    return ContactListOutput(
        contacts=tuple(contacts),
        total=len(contacts),
        query=query,
    )


def run_get(
    input_data: GetContactInput,
    service: ContactService,
) -> ContactOperationOutput:
    """Get a contact by ID."""
    contact = service.get_by_id(input_data.contact_id)

    if contact is None:
        return ContactOperationOutput(
            contact=None,
            errors=(
                ContactValidationError(
                    code="contact_not_found",
                    message=f"Contact with ID {input_data.contact_id} not found",
                ),
            ),
            success=False,
        )

    return ContactOperationOutput(
        contact=contact,
        errors=(),
        success=True,
    )


def run_create(
    input_data: CreateContactInput,
    service: ContactService,
) -> ContactOperationOutput:
    """Create a new contact."""
    # Unset optional fields stay unset; only favorite always carries a value
    fields = {key: value for key, value in asdict(input_data).items() if value is not None}
    contact = service.create(**fields)

    return ContactOperationOutput(
        contact=contact,
        errors=(),
        success=True,
    )


def run_update(
    input_data: UpdateContactInput,
    service: ContactService,
) -> ContactOperationOutput:
    """Overwrite the given fields of an existing contact."""
    contact, errors = service.update(input_data.contact_id, input_data.updates)

    return ContactOperationOutput(
        contact=contact,
        errors=tuple(errors),
        success=contact is not None,
    )


def run_set_favorite(
    input_data: SetFavoriteInput,
    service: ContactService,
) -> ContactOperationOutput:
    """Set the favorite flag, leaving every other field alone."""
    contact, errors = service.set_favorite(input_data.contact_id, input_data.favorite)

    return ContactOperationOutput(
        contact=contact,
        errors=tuple(errors),
        success=contact is not None,
    )


def run_delete(
    input_data: DeleteContactInput,
    service: ContactService,
) -> ContactOperationOutput:
    """Delete a contact."""
    success, errors = service.delete(input_data.contact_id)

    return ContactOperationOutput(
        contact=None,
        errors=tuple(errors),
        success=success,
    )
