"""User profile API endpoints."""

from fastapi import APIRouter, Depends, Form, HTTPException, UploadFile
from sqlalchemy.orm import Session

from app.database import get_db
from app.dependencies import CurrentUser, get_current_user
from app.routers.auth import me
from app.schemas.auth import ProfileResponse, UserEnvelope, UserResponse
from app.services.storage import store_image, validate_image_metadata
from app.services.user import get_user_service

router = APIRouter(prefix="/api/users", tags=["Users"])

router.add_api_route("/me", me, methods=["GET"], response_model=UserEnvelope)


@router.put("/profile", response_model=ProfileResponse)
async def update_profile(
    user_name: str | None = Form(None),
    avatar: UploadFile | None = None,
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> ProfileResponse:
    """Update display name and/or avatar image."""
    service = get_user_service()
    db_user = service.get_user(db, user.user_id)
    if not db_user:
        raise HTTPException(status_code=404, detail="User not found")

    if user_name and user_name.strip():
        service.update_user_name(db, db_user, user_name.strip())

    if avatar is not None and avatar.filename:
        error = validate_image_metadata(avatar.filename, avatar.content_type)
        if error:
            raise HTTPException(status_code=400, detail=error)
        try:
            image_url = await store_image(avatar, prefix="avatar-")
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e)) from None
        service.replace_avatar(db, user.user_id, image_url)

    return ProfileResponse(message="Profile updated", user=UserResponse(**service.to_profile(db, db_user)))
