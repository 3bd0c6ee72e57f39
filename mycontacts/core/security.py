# mycontacts/core/security.py
import uuid
from datetime import datetime, timedelta, timezone
from functools import lru_cache
from typing import Any

import bcrypt
from jose import jwt, JWTError
from pydantic import BaseModel, ConfigDict, ValidationError

from mycontacts.core.config import get_settings
from mycontacts.core.errors import InvalidTokenError

# bcrypt only looks at the first 72 bytes of the secret.
BCRYPT_MAX_BYTES = 72


class PasswordHasher:
    """
    One-way password hashing with bcrypt.

    The work factor is fixed per process (BCRYPT_ROUNDS, 10 by default).
    Plaintext is never stored or logged.
    """

    def __init__(self, rounds: int = 10):
        self._rounds = rounds
        # Hashed once up front so the unknown-email path only pays for a verify.
        self._dummy_hash = self.hash(uuid.uuid4().hex)

    def hash(self, password: str) -> str:
        """Return the bcrypt hash of `password` as a string."""
        salt = bcrypt.gensalt(rounds=self._rounds)
        hashed = bcrypt.hashpw(password.encode("utf-8"), salt)
        return hashed.decode("utf-8")

    def verify(self, password: str, password_hash: str) -> bool:
        """
        Check `password` against a stored bcrypt hash.

        Malformed hashes (or oversized secrets) verify as False.
        """
        try:
            return bcrypt.checkpw(
                password.encode("utf-8"),
                password_hash.encode("utf-8"),
            )
        except (ValueError, TypeError):
            return False

    def verify_dummy(self, password: str) -> bool:
        """
        Burn the same amount of work as a real verify.

        Used when the account does not exist, so response timing does not
        reveal which emails are registered. Always returns False.
        """
        self.verify(password, self._dummy_hash)
        return False


class Identity(BaseModel):
    """
    Identity claim carried by an access token.

    Only the user id and email are embedded; never the password hash.
    """

    model_config = ConfigDict(frozen=True)

    user_id: uuid.UUID
    email: str | None = None


class TokenService:
    """
    Issue and verify signed, time-limited access tokens (JWT).

    Verification is purely cryptographic: it never touches the database.
    """

    def __init__(self, secret: str, algorithm: str = "HS256", expires_minutes: int = 60):
        self._secret = secret
        self._algorithm = algorithm
        self._expires = timedelta(minutes=expires_minutes)

    def issue(self, identity: Identity, now: datetime | None = None) -> str:
        """
        Sign a token for `identity`, valid for the configured window.

        Claims:
          - sub  : user id (string UUID)
          - email: user email
          - iat / exp: issuance and expiry (UTC)
        """
        issued_at = now or datetime.now(timezone.utc)
        payload: dict[str, Any] = {
            "sub": str(identity.user_id),
            "email": identity.email,
            "iat": int(issued_at.timestamp()),
            "exp": int((issued_at + self._expires).timestamp()),
        }
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    def verify(self, token: str) -> Identity:
        """
        Decode and verify a token.

        Verification:
          - signature against the configured secret
          - expiration time (exp)
          - presence of a UUID `sub` claim

        Raises:
            InvalidTokenError: if the token is tampered, malformed or expired.
        """
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={"require_exp": True, "require_sub": True},
            )
        except JWTError:
            raise InvalidTokenError("Invalid token")

        try:
            return Identity(user_id=payload["sub"], email=payload.get("email"))
        except (KeyError, ValidationError):
            raise InvalidTokenError("Invalid token")


@lru_cache
def get_password_hasher() -> PasswordHasher:
    """One hasher per process, shared by every request."""
    return PasswordHasher(rounds=get_settings().BCRYPT_ROUNDS)


def get_token_service() -> TokenService:
    settings = get_settings()
    return TokenService(
        secret=settings.JWT_SECRET,
        algorithm=settings.JWT_ALG,
        expires_minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES,
    )
