from fastapi import APIRouter, Depends, HTTPException

from src.api.deps import get_contact_service
from src.api.schemas import (
    ContactCreateRequest,
    ContactFavoriteRequest,
    ContactResponse,
    ContactUpdateRequest,
)
from src.components.contacts import (
    ContactService,
    CreateContactInput,
    DeleteContactInput,
    GetContactInput,
    SearchContactsInput,
    SetFavoriteInput,
    UpdateContactInput,
    run_create,
    run_delete,
    run_get,
    run_search,
    run_set_favorite,
    run_update,
)

router = APIRouter()


@router.get("", response_model=list[ContactResponse])
def list_contacts(
    q: str | None = None,
    service: ContactService = Depends(get_contact_service),
) -> list[ContactResponse]:
    """List contacts, filtered by first/last name substring when q is given."""
    result = run_search(SearchContactsInput(query=q), service)
    return list(result.contacts)  # type: ignore[arg-type]


@router.post("", response_model=ContactResponse, status_code=201)
def create_contact(
    req: ContactCreateRequest | None = None,
    service: ContactService = Depends(get_contact_service),
) -> ContactResponse:
    """Create a contact. An empty body creates an empty contact."""
    req = req or ContactCreateRequest()
    inp = CreateContactInput(**req.model_dump())
    result = run_create(inp, service)
    return result.contact  # type: ignore[return-value]


@router.get("/{contact_id}", response_model=ContactResponse)
def get_contact(
    contact_id: str,
    service: ContactService = Depends(get_contact_service),
) -> ContactResponse:
    """Get a specific contact."""
    result = run_get(GetContactInput(contact_id=contact_id), service)
    if not result.success or not result.contact:
        raise HTTPException(status_code=404, detail="Contact not found")
    return result.contact  # type: ignore[return-value]


@router.patch("/{contact_id}", response_model=ContactResponse)
def update_contact(
    contact_id: str,
    req: ContactUpdateRequest,
    service: ContactService = Depends(get_contact_service),
) -> ContactResponse:
    """Merge the sent fields into an existing contact."""
    updates = req.model_dump(exclude_unset=True)
    # favorite is never null on a record
    if updates.get("favorite", False) is None:
        del updates["favorite"]

    result = run_update(UpdateContactInput(contact_id=contact_id, updates=updates), service)
    if not result.success:
        raise HTTPException(status_code=404, detail="Contact not found")
    return result.contact  # type: ignore[return-value]


@router.put("/{contact_id}/favorite", response_model=ContactResponse)
def set_favorite(
    contact_id: str,
    req: ContactFavoriteRequest,
    service: ContactService = Depends(get_contact_service),
) -> ContactResponse:
    """Set only the favorite flag."""
    inp = SetFavoriteInput(contact_id=contact_id, favorite=req.favorite)
    result = run_set_favorite(inp, service)
    if not result.success:
        raise HTTPException(status_code=404, detail="Contact not found")
    return result.contact  # type: ignore[return-value]


@router.delete("/{contact_id}", status_code=204)
def delete_contact(
    contact_id: str,
    service: ContactService = Depends(get_contact_service),
) -> None:
    """Delete a contact."""
    result = run_delete(DeleteContactInput(contact_id=contact_id), service)
    if not result.success:
        raise HTTPException(status_code=404, detail="Contact not found")
