"""Category API endpoints."""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from app.database import get_db
from app.dependencies import CurrentUser, get_current_user
from app.schemas.category import CategoryEnvelope, CategoryListResponse, CategoryRequest, CategoryResponse
from app.services.category import get_category_service

router = APIRouter(prefix="/api/categories", tags=["Categories"])

NOT_FOUND = "Category not found"


@router.get("", response_model=CategoryListResponse)
def list_categories(
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> CategoryListResponse:
    """List the current user's categories."""
    service = get_category_service()
    categories = service.get_user_categories(db, user.user_id)
    return CategoryListResponse(categories=[CategoryResponse.model_validate(c) for c in categories])


@router.post("", response_model=CategoryEnvelope, status_code=201)
def create_category(
    body: CategoryRequest,
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> CategoryEnvelope:
    """Create a category."""
    service = get_category_service()
    category = service.create_category(db, user.user_id, body)
    return CategoryEnvelope(message="Category created", category=CategoryResponse.model_validate(category))


@router.put("/{category_id}", response_model=CategoryEnvelope)
def update_category(
    category_id: int,
    body: CategoryRequest,
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> CategoryEnvelope:
    """Rename or restyle a category."""
    service = get_category_service()
    category = service.get_category(db, category_id, user.user_id)
    if not category:
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    category = service.update_category(db, category, body)
    return CategoryEnvelope(message="Category updated", category=CategoryResponse.model_validate(category))


@router.delete("/{category_id}")
def delete_category(
    category_id: int,
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> dict:
    """Delete a category. Records that used it become uncategorized."""
    service = get_category_service()
    category = service.get_category(db, category_id, user.user_id)
    if not category:
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    service.delete_category(db, category)
    return {"message": "Category deleted"}
