"""Authentication API endpoints."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session

from app.database import get_db
from app.dependencies import CurrentUser, get_current_user
from app.rate_limit import limiter
from app.schemas.auth import LoginRequest, LoginResponse, SignupRequest, SignupResponse, UserEnvelope, UserResponse
from app.services.auth import get_auth_service
from app.services.jwt import get_jwt_service
from app.services.user import get_user_service

logger = logging.getLogger("daylog")

router = APIRouter(prefix="/api/auth", tags=["Authentication"])


@router.post("/signup", response_model=SignupResponse, status_code=201)
@limiter.limit("5/minute")
def signup(request: Request, body: SignupRequest, db: Session = Depends(get_db)) -> SignupResponse:
    """Register a new user account."""
    auth_service = get_auth_service()
    result = auth_service.register(db, body.email, body.password, body.user_name)

    if not result.success:
        raise HTTPException(status_code=409, detail=result.error)

    logger.info("User %s registered", result.user.id)  # type: ignore[union-attr]
    return SignupResponse(message="Signup complete", user_id=result.user.id)  # type: ignore[union-attr]


@router.post("/login", response_model=LoginResponse)
@limiter.limit("10/minute")
def login(request: Request, body: LoginRequest, db: Session = Depends(get_db)) -> LoginResponse:
    """Authenticate and receive a JWT token."""
    auth_service = get_auth_service()
    result = auth_service.authenticate(db, body.email, body.password)

    if not result.success:
        logger.info("Login rejected from %s", request.client.host if request.client else "unknown")
        raise HTTPException(status_code=401, detail=result.error)

    token = get_jwt_service().create_token(user_id=result.user.id)  # type: ignore[union-attr]
    profile = get_user_service().to_profile(db, result.user)  # type: ignore[arg-type]
    return LoginResponse(token=token, user=UserResponse(**profile))


@router.get("/me", response_model=UserEnvelope)
def me(user: CurrentUser = Depends(get_current_user), db: Session = Depends(get_db)) -> UserEnvelope:
    """Return the authenticated user's profile."""
    service = get_user_service()
    db_user = service.get_user(db, user.user_id)
    if not db_user:
        raise HTTPException(status_code=404, detail="User not found")
    return UserEnvelope(user=UserResponse(**service.to_profile(db, db_user)))
