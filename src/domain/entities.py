import secrets
import string
from datetime import UTC, datetime

from pydantic import BaseModel, Field

CONTACT_ID_ALPHABET = string.digits + string.ascii_lowercase
CONTACT_ID_LENGTH = 7

# Fields a user may overwrite through the edit form or the API.
EDITABLE_FIELDS = ("first", "last", "twitter", "avatar", "notes")


def new_contact_id() -> str:
    return "".join(secrets.choice(CONTACT_ID_ALPHABET) for _ in range(CONTACT_ID_LENGTH))


def utcnow() -> datetime:
    return datetime.now(UTC)


# --- Contacts ---

class Contact(BaseModel):
    id: str = Field(default_factory=new_contact_id)
    first: str | None = None
    last: str | None = None
    twitter: str | None = None
    avatar: str | None = None
    notes: str | None = None
    favorite: bool = False
    created_at: datetime = Field(default_factory=utcnow)

    @property
    def display_name(self) -> str | None:
        """'First Last', or None when neither name is set."""
        if not (self.first or self.last):
            return None
        return f"{self.first or ''} {self.last or ''}".strip()
