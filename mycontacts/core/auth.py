# mycontacts/core/auth.py
from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from mycontacts.core.errors import NoTokenError
from mycontacts.core.security import Identity, TokenService, get_token_service

# HTTP Bearer scheme:
# - auto_error=False => a missing/malformed Authorization header returns None
#   so we can answer with our own 401 body instead of FastAPI's default.
# - registered in OpenAPI as "bearerAuth" (JWT).
bearer_scheme = HTTPBearer(
    scheme_name="bearerAuth",
    bearerFormat="JWT",
    auto_error=False,
)


def require_auth(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    tokens: TokenService = Depends(get_token_service),
) -> Identity:
    """
    Enforce authentication on a route.

    Flow:
      1. No "Bearer <token>" pair in the Authorization header => 401 (NoToken).
      2. Verify JWT signature + expiry => 403 (InvalidToken) on failure.
      3. Attach the decoded identity to `request.state.identity`.

    Trust is purely cryptographic: no database lookup per request.

    Returns:
        The caller's Identity (user id + email).
    """
    # "Bearer a b" parses as credentials "a b": not a scheme + token pair.
    if credentials is None or not credentials.credentials or len(credentials.credentials.split()) != 1:
        raise NoTokenError("No token provided")

    identity = tokens.verify(credentials.credentials)
    request.state.identity = identity
    return identity
