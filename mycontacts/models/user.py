# mycontacts/models/user.py
import uuid
from datetime import datetime, timezone

from sqlmodel import SQLModel, Field


class User(SQLModel, table=True):
    """
    Registered account.

    Identity:
      - id: UUID assigned on creation

    Email is unique (case-sensitive, stored as given) and enforced by a
    unique index, not only by the service-level pre-check.

    `password_hash` never leaves the auth service: read schemas omit it
    and tokens only carry id + email.
    """

    __tablename__ = "users"

    id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        primary_key=True,
        index=True,
    )

    email: str = Field(
        unique=True,
        index=True,
        max_length=320,
    )

    password_hash: str = Field(
        description="bcrypt hash of the password",
    )

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Creation timestamp (UTC)",
    )
