# mycontacts/services/auth_service.py
import logging
from datetime import datetime, timezone

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session

from mycontacts.core.errors import (
    ConflictError,
    InvalidCredentialsError,
    InvalidInputError,
)
from mycontacts.core.security import (
    BCRYPT_MAX_BYTES,
    Identity,
    PasswordHasher,
    TokenService,
)
from mycontacts.models.user import User
from mycontacts.repositories.user_repo import UserRepository

logger = logging.getLogger(__name__)

CREDENTIALS_REQUIRED = "Email and password are required"
INVALID_CREDENTIALS = "Invalid credentials"


class AuthService:
    """
    Registration and login.

    Responsibilities:
      - enforce email uniqueness (pre-check + unique index)
      - hash passwords on registration, verify them on login
      - make "unknown email" and "wrong password" indistinguishable
      - hand token issuance to TokenService with a minimal claim
    """

    def __init__(
        self,
        repo: UserRepository,
        hasher: PasswordHasher,
        tokens: TokenService,
    ):
        self.repo = repo
        self.hasher = hasher
        self.tokens = tokens

    @staticmethod
    def _require_credentials(email: str | None, password: str | None) -> None:
        if not email or not password:
            raise InvalidInputError(CREDENTIALS_REQUIRED)

    def register(self, session: Session, email: str | None, password: str | None) -> User:
        """
        Create a new account.

        Rules:
          - email and password must be non-empty (400)
          - email must not be registered yet (409)
          - password is stored as a bcrypt hash only
        """
        self._require_credentials(email, password)

        if len(password.encode("utf-8")) > BCRYPT_MAX_BYTES:
            raise InvalidInputError(f"Password cannot exceed {BCRYPT_MAX_BYTES} bytes")

        if self.repo.get_by_email(session, email) is not None:
            raise ConflictError("Email already registered")

        user = User(
            email=email,
            password_hash=self.hasher.hash(password),
            created_at=datetime.now(timezone.utc),
        )
        try:
            user = self.repo.create(session, user)
        except IntegrityError:
            # Lost the race against a concurrent registration.
            session.rollback()
            raise ConflictError("Email already registered")

        logger.info(f"Registered user {user.id}")
        return user

    def authenticate(self, session: Session, email: str | None, password: str | None) -> User:
        """
        Check credentials and return the matching user.

        Unknown email and wrong password both raise InvalidCredentialsError
        with the same message.
        """
        self._require_credentials(email, password)

        user = self.repo.get_by_email(session, email)
        if user is None:
            self.hasher.verify_dummy(password)
            logger.info("Failed login attempt")
            raise InvalidCredentialsError(INVALID_CREDENTIALS)

        if not self.hasher.verify(password, user.password_hash):
            logger.info(f"Failed login attempt for user {user.id}")
            raise InvalidCredentialsError(INVALID_CREDENTIALS)

        return user

    def issue_token(self, user: User) -> str:
        """Sign an access token carrying only the user id and email."""
        return self.tokens.issue(Identity(user_id=user.id, email=user.email))

    def login(self, session: Session, email: str | None, password: str | None) -> str:
        """Authenticate and return a fresh access token."""
        user = self.authenticate(session, email, password)
        return self.issue_token(user)

    def logout(self, identity: Identity) -> None:
        """
        Acknowledge a logout.

        Tokens are stateless, so nothing is revoked; clients drop the token.
        """
        logger.info(f"User {identity.user_id} logged out")
