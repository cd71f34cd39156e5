"""Record service for CRUD, soft delete, and statistics."""

from datetime import date, datetime, timedelta

from sqlalchemy import func
from sqlalchemy.orm import Session

from app.models.category import Category
from app.models.record import Record
from app.schemas.record import RecordCreate, RecordUpdate


class RecordService:
    """Handles record persistence. Invalidated records are invisible to every read."""

    def _visible(self, db: Session, user_id: int):
        return db.query(Record).filter(Record.user_id == user_id, Record.invalidation_flag.is_(False))

    def get_user_records(self, db: Session, user_id: int, category_id: int | None = None) -> list[Record]:
        """Get all live records for a user, newest first, optionally narrowed to one category."""
        query = self._visible(db, user_id)
        if category_id is not None:
            query = query.filter(Record.category_id == category_id)
        return query.order_by(Record.created_at.desc(), Record.id.desc()).all()

    def get_record(self, db: Session, record_id: int, user_id: int) -> Record | None:
        """Get a single live record by ID, scoped to user."""
        return self._visible(db, user_id).filter(Record.id == record_id).first()

    def owns_category(self, db: Session, category_id: int, user_id: int) -> bool:
        return (
            db.query(Category.id).filter(Category.id == category_id, Category.user_id == user_id).first()
            is not None
        )

    def create_record(self, db: Session, user_id: int, data: RecordCreate, image_url: str | None) -> Record:
        record = Record(
            user_id=user_id,
            title=data.title,
            description=data.description,
            date_logged=data.date_logged,
            category_id=data.category_id,
            image_url=image_url,
            invalidation_flag=False,
        )
        db.add(record)
        db.commit()
        db.refresh(record)
        return record

    def update_record(self, db: Session, record: Record, data: RecordUpdate, image_url: str | None = None) -> Record:
        """Apply the fields the client sent. A new image replaces the stored path; the old file is kept."""
        for field in data.model_fields_set:
            setattr(record, field, getattr(data, field))
        if image_url:
            record.image_url = image_url
        db.commit()
        db.refresh(record)
        return record

    def soft_delete_record(self, db: Session, record: Record) -> None:
        """Mark a record invalidated. The row and its image stay on disk."""
        record.invalidation_flag = True
        record.delete_at = datetime.utcnow()
        db.commit()

    def get_stats(self, db: Session, user_id: int, today: date | None = None) -> dict:
        """Aggregate counts over the user's live records."""
        today = today or date.today()
        month_start = today.replace(day=1)
        week_start = today - timedelta(days=7)

        base = self._visible(db, user_id)
        total = base.count()
        this_month = base.filter(Record.date_logged >= month_start).count()
        this_week = base.filter(Record.date_logged >= week_start).count()
        categories_count = db.query(func.count(Category.id)).filter(Category.user_id == user_id).scalar() or 0

        rows = (
            db.query(Record.category_id, Category.name, func.count(Record.id))
            .outerjoin(Category, Record.category_id == Category.id)
            .filter(Record.user_id == user_id, Record.invalidation_flag.is_(False))
            .group_by(Record.category_id, Category.name)
            .order_by(func.count(Record.id).desc())
            .all()
        )

        return {
            "total_records": total,
            "this_month": this_month,
            "this_week": this_week,
            "categories_count": categories_count,
            "by_category": [{"category_id": cid, "name": name, "count": count} for cid, name, count in rows],
        }


_record_service: RecordService | None = None


def get_record_service() -> RecordService:
    """Get singleton record service instance."""
    global _record_service
    if _record_service is None:
        _record_service = RecordService()
    return _record_service
