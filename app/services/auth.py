"""Authentication service."""

import logging
from dataclasses import dataclass
from datetime import datetime

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.models.user import User
from app.services.password import hash_password, verify_password

logger = logging.getLogger("daylog")

EMAIL_TAKEN = "Email already registered"
BAD_CREDENTIALS = "Email or password incorrect"

_dummy_hash: str | None = None


def _get_dummy_hash() -> str:
    """Hash checked for unknown emails so both login failures cost one bcrypt round."""
    global _dummy_hash
    if _dummy_hash is None:
        _dummy_hash = hash_password("daylog-unknown-user")
    return _dummy_hash


@dataclass
class AuthResult:
    """Result of an authentication attempt."""

    success: bool
    error: str | None = None
    user: User | None = None


class AuthService:
    """Handles user registration and authentication."""

    def register(self, db: Session, email: str, password: str, user_name: str | None = None) -> AuthResult:
        """Register a new user. Returns AuthResult with success/error."""
        if db.query(User).filter(User.email == email).first():
            return AuthResult(success=False, error=EMAIL_TAKEN)

        user = User(
            email=email,
            password_hash=hash_password(password),
            user_name=user_name.strip() if user_name and user_name.strip() else None,
        )
        db.add(user)
        try:
            db.commit()
        except IntegrityError:
            # Lost a race with a concurrent signup for the same email
            db.rollback()
            return AuthResult(success=False, error=EMAIL_TAKEN)
        db.refresh(user)

        logger.info("Registered user id=%s", user.id)
        return AuthResult(success=True, user=user)

    def authenticate(self, db: Session, email: str, password: str) -> AuthResult:
        """Authenticate a user by email and password.

        Unknown email and wrong password produce the same error.
        """
        user = db.query(User).filter(User.email == email).first()
        if not user:
            verify_password(password, _get_dummy_hash())
            return AuthResult(success=False, error=BAD_CREDENTIALS)
        if not verify_password(password, user.password_hash):
            return AuthResult(success=False, error=BAD_CREDENTIALS)

        user.last_login_at = datetime.utcnow()
        db.commit()

        return AuthResult(success=True, user=user)


_auth_service: AuthService | None = None


def get_auth_service() -> AuthService:
    """Get singleton auth service instance."""
    global _auth_service
    if _auth_service is None:
        _auth_service = AuthService()
    return _auth_service
