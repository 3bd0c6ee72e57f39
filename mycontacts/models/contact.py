# mycontacts/models/contact.py
import uuid
from datetime import datetime, timezone

from sqlalchemy import UniqueConstraint
from sqlmodel import SQLModel, Field


class Contact(SQLModel, table=True):
    """
    Address book entry owned by exactly one user.
    One owner cannot have 2 contacts with the same phone.
    """

    __tablename__ = "contacts"
    __table_args__ = (
        UniqueConstraint("owner_id", "phone", name="uq_contacts_owner_phone"),
    )

    id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        primary_key=True,
        index=True,
    )

    owner_id: uuid.UUID = Field(
        foreign_key="users.id",
        index=True,
    )

    first_name: str = Field(max_length=100)
    last_name: str = Field(max_length=100)

    phone: str = Field(
        max_length=20,
        description="10-20 ASCII digits",
    )

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
    )
