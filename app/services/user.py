"""User profile and avatar service."""

import logging

from sqlalchemy.orm import Session

from app.models.user import User, UserAvatar
from app.services.storage import remove_image

logger = logging.getLogger("daylog")


class UserService:
    """Reads and updates the caller's own profile."""

    def get_user(self, db: Session, user_id: int) -> User | None:
        """Get a user by ID."""
        return db.query(User).filter(User.id == user_id).first()

    def get_avatar(self, db: Session, user_id: int) -> UserAvatar | None:
        """Get the avatar row for a user."""
        return db.query(UserAvatar).filter(UserAvatar.user_id == user_id).first()

    def to_profile(self, db: Session, user: User) -> dict:
        """Public view of a user joined with its avatar. Never includes the password hash."""
        avatar = self.get_avatar(db, user.id)
        return {
            "id": user.id,
            "user_name": user.user_name,
            "email": user.email,
            "avatar_url": avatar.image_url if avatar else None,
        }

    def update_user_name(self, db: Session, user: User, user_name: str) -> None:
        user.user_name = user_name
        db.commit()

    def replace_avatar(self, db: Session, user_id: int, image_url: str) -> None:
        """Upsert the avatar row, then remove the previous file.

        The two steps are not atomic: a crash in between leaves the old file orphaned.
        """
        avatar = self.get_avatar(db, user_id)
        old_image_url = avatar.image_url if avatar else None
        if avatar:
            avatar.image_url = image_url
        else:
            db.add(UserAvatar(user_id=user_id, image_url=image_url))
        db.commit()

        if old_image_url and old_image_url != image_url:
            remove_image(old_image_url)
        logger.info("Updated avatar for user id=%s", user_id)


_user_service: UserService | None = None


def get_user_service() -> UserService:
    """Get singleton user service instance."""
    global _user_service
    if _user_service is None:
        _user_service = UserService()
    return _user_service
