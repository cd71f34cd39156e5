"""Category service. Every query is scoped to the owning user."""

from sqlalchemy.orm import Session

from app.models.category import Category
from app.models.record import Record
from app.schemas.category import CategoryRequest


class CategoryService:
    """Handles category CRUD for a single owner."""

    def get_user_categories(self, db: Session, user_id: int) -> list[Category]:
        """Get all categories for a user, oldest first."""
        return (
            db.query(Category)
            .filter(Category.user_id == user_id)
            .order_by(Category.created_at.asc(), Category.id.asc())
            .all()
        )

    def get_category(self, db: Session, category_id: int, user_id: int) -> Category | None:
        """Get a single category by ID, scoped to user."""
        return db.query(Category).filter(Category.id == category_id, Category.user_id == user_id).first()

    def create_category(self, db: Session, user_id: int, data: CategoryRequest) -> Category:
        category = Category(user_id=user_id, name=data.name, icon=data.icon, color=data.color)
        db.add(category)
        db.commit()
        db.refresh(category)
        return category

    def update_category(self, db: Session, category: Category, data: CategoryRequest) -> Category:
        category.name = data.name
        category.icon = data.icon
        category.color = data.color
        db.commit()
        db.refresh(category)
        return category

    def delete_category(self, db: Session, category: Category) -> int:
        """Hard-delete a category and clear references to it. Returns the number of records detached."""
        detached = (
            db.query(Record)
            .filter(Record.category_id == category.id, Record.user_id == category.user_id)
            .update({Record.category_id: None}, synchronize_session="fetch")
        )
        db.delete(category)
        db.commit()
        return detached


_category_service: CategoryService | None = None


def get_category_service() -> CategoryService:
    """Get singleton category service instance."""
    global _category_service
    if _category_service is None:
        _category_service = CategoryService()
    return _category_service
