# mycontacts/schemas/contact.py
import uuid

from pydantic import ConfigDict
from pydantic.alias_generators import to_camel
from sqlmodel import SQLModel


class ContactBase(SQLModel):
    """
    Wire format is camelCase (firstName, lastName, ownerId);
    snake_case names are accepted too.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ContactCreate(ContactBase):
    """
    Payload for creating a contact.

    Fields are optional here; presence, non-blank names and the phone rule
    are checked by ContactService so direct callers get the same errors.
    """

    first_name: str | None = None
    last_name: str | None = None
    phone: str | None = None


class ContactUpdate(ContactBase):
    """
    Partial update payload.

    Only these three fields exist, so `ownerId` / `id` in a request body
    are dropped on parse and can never be written.
    """

    first_name: str | None = None
    last_name: str | None = None
    phone: str | None = None


class ContactRead(ContactBase):
    """Read model for a single contact."""

    id: uuid.UUID
    owner_id: uuid.UUID
    first_name: str
    last_name: str
    phone: str
