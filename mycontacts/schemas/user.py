# mycontacts/schemas/user.py
import uuid
from datetime import datetime
from typing import Any

from pydantic import ConfigDict, model_validator
from pydantic.alias_generators import to_camel
from sqlmodel import SQLModel


class Credentials(SQLModel):
    """
    Payload for register / login.

    The email is kept exactly as sent (no case folding or normalization):
    accounts are matched on the stored form, case-sensitively.

    Both fields are optional at the schema level so that the auth service
    reports missing values as a 400 with a readable message.

    Older clients send `username` instead of `email`; any non-empty value is
    accepted (it need not look like an address) when `email` is absent.
    """

    model_config = ConfigDict(extra="ignore")

    email: str | None = None
    password: str | None = None

    @model_validator(mode="before")
    @classmethod
    def accept_username(cls, data: Any) -> Any:
        if isinstance(data, dict) and not data.get("email") and data.get("username"):
            data = {**data, "email": data["username"]}
        return data


class UserRead(SQLModel):
    """Response schema returned to clients. Never includes the password hash."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: uuid.UUID
    email: str
    created_at: datetime


class RegisterResponse(SQLModel):
    message: str
    user: UserRead


class TokenResponse(SQLModel):
    token: str


class MessageResponse(SQLModel):
    message: str
