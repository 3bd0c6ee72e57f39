# mycontacts/routers/auth.py
from fastapi import APIRouter, Depends, status
from sqlmodel import Session

from mycontacts.core.auth import require_auth
from mycontacts.core.security import (
    Identity,
    PasswordHasher,
    TokenService,
    get_password_hasher,
    get_token_service,
)
from mycontacts.database import get_session
from mycontacts.repositories.user_repo import UserRepository
from mycontacts.schemas.user import (
    Credentials,
    MessageResponse,
    RegisterResponse,
    TokenResponse,
    UserRead,
)
from mycontacts.services.auth_service import AuthService

router = APIRouter(prefix="/auth", tags=["Auth"])

repo = UserRepository()


def get_auth_service(
    hasher: PasswordHasher = Depends(get_password_hasher),
    tokens: TokenService = Depends(get_token_service),
) -> AuthService:
    return AuthService(repo, hasher, tokens)


@router.post(
    "/register",
    response_model=RegisterResponse,
    status_code=status.HTTP_201_CREATED,
)
def register(
    payload: Credentials,
    session: Session = Depends(get_session),
    service: AuthService = Depends(get_auth_service),
):
    """
    Register a new account.

    - 400 if email or password is missing.
    - 409 if the email is already registered.
    """
    user = service.register(session, payload.email, payload.password)
    return RegisterResponse(message="User registered", user=UserRead.model_validate(user))


@router.post("/login", response_model=TokenResponse)
def login(
    payload: Credentials,
    session: Session = Depends(get_session),
    service: AuthService = Depends(get_auth_service),
):
    """
    Exchange email + password for a bearer token (valid for 1 hour).

    - 401 for unknown email or wrong password (same message for both).
    """
    return TokenResponse(token=service.login(session, payload.email, payload.password))


@router.post("/logout", response_model=MessageResponse)
def logout(
    identity: Identity = Depends(require_auth),
    service: AuthService = Depends(get_auth_service),
):
    """
    Acknowledge logout. Tokens are stateless; the client discards it.
    """
    service.logout(identity)
    return MessageResponse(message="Logged out")
