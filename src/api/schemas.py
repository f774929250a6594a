from datetime import datetime

from pydantic import BaseModel


# --- Contacts ---
class ContactBase(BaseModel):
    first: str | None = None
    last: str | None = None
    twitter: str | None = None
    avatar: str | None = None
    notes: str | None = None


class ContactCreateRequest(ContactBase):
    favorite: bool = False


class ContactUpdateRequest(ContactBase):
    favorite: bool | None = None


class ContactFavoriteRequest(BaseModel):
    favorite: bool


class ContactResponse(ContactBase):
    id: str
    favorite: bool
    created_at: datetime
