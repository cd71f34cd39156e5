"""Record model."""

from datetime import datetime

from sqlalchemy import Boolean, Column, Date, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from app.database import Base
from app.models.category import Category


class Record(Base):
    """A dated activity log entry. Soft-deleted via invalidation_flag."""

    __tablename__ = "records"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    category_id = Column(Integer, ForeignKey("categories.id", ondelete="SET NULL"), nullable=True, index=True)
    title = Column(String(256), nullable=False)
    description = Column(Text, nullable=False, default="")
    date_logged = Column(Date, nullable=False)
    image_url = Column(String(512), nullable=True)
    invalidation_flag = Column(Boolean, nullable=False, default=False)
    delete_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    category = relationship(Category, lazy="joined")
