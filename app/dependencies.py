"""Authentication dependencies for FastAPI routes."""

from dataclasses import dataclass

from fastapi import HTTPException, Request

from app.services.jwt import AuthError, get_jwt_service

AUTH_ERROR_DETAIL = "Invalid or expired token"


@dataclass(frozen=True)
class CurrentUser:
    """Authenticated request context."""

    user_id: int


def _unauthorized() -> HTTPException:
    return HTTPException(status_code=401, detail=AUTH_ERROR_DETAIL, headers={"WWW-Authenticate": "Bearer"})


def get_current_user(request: Request) -> CurrentUser:
    """Extract and validate user from the Bearer token. Raises 401 if missing or invalid."""
    auth_header = request.headers.get("Authorization")
    if not auth_header:
        raise _unauthorized()

    scheme, _, token = auth_header.partition(" ")
    token = token.strip()
    if scheme.lower() != "bearer" or not token:
        raise _unauthorized()

    try:
        user_id = get_jwt_service().verify(token)
    except AuthError:
        raise _unauthorized() from None

    return CurrentUser(user_id=user_id)
