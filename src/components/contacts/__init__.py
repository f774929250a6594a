"""
Contacts component - Contact records, search and favorites.
"""

from ._impl import (
    ContactService,
    clean_updates,
    contact_sort_key,
    matches_query,
    normalize_query,
    sort_contacts,
)
from .component import (
    run_create,
    run_delete,
    run_get,
    run_search,
    run_set_favorite,
    run_update,
)
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
from .ports import ContactRepoPort

__all__ = [
    # Entry points
    "run_search",
    "run_get",
    "run_create",
    "run_update",
    "run_set_favorite",
    "run_delete",
    # Input models
    "SearchContactsInput",
    "GetContactInput",
    "CreateContactInput",
    "UpdateContactInput",
    "SetFavoriteInput",
    "DeleteContactInput",
    # Output models
    "ContactOperationOutput",
    "ContactListOutput",
    "ContactValidationError",
    # Ports
    "ContactRepoPort",
    # Service and helpers
    "ContactService",
    "clean_updates",
    "contact_sort_key",
    "matches_query",
    "normalize_query",
    "sort_contacts",
]
