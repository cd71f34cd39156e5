"""Record API endpoints."""

from datetime import date

from fastapi import APIRouter, Depends, Form, HTTPException, Request, UploadFile
from pydantic import ValidationError
from sqlalchemy.orm import Session

from app.database import get_db
from app.dependencies import CurrentUser, get_current_user
from app.schemas.record import (
    RecordCreate,
    RecordCreateResponse,
    RecordEnvelope,
    RecordResponse,
    RecordStatsResponse,
    RecordUpdate,
)
from app.services.record import get_record_service
from app.services.storage import store_image, validate_image_metadata

router = APIRouter(prefix="/api/records", tags=["Records"])

NOT_FOUND = "Record not found"
UPDATABLE_FIELDS = ("title", "description", "date_logged", "category_id")


def _validation_message(exc: ValidationError) -> str:
    error = exc.errors()[0]
    field = ".".join(str(part) for part in error["loc"])
    return f"{field}: {error['msg']}" if field else error["msg"]


async def _store_upload(image: UploadFile | None) -> str | None:
    """Validate and persist an optional image. Returns the relative path or None."""
    if image is None or not image.filename:
        return None
    error = validate_image_metadata(image.filename, image.content_type)
    if error:
        raise HTTPException(status_code=400, detail=error)
    try:
        return await store_image(image)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from None


@router.get("", response_model=list[RecordResponse])
def list_records(
    category_id: str | None = None,
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> list[RecordResponse]:
    """List the current user's records, optionally filtered by category."""
    if category_id is not None and category_id.strip():
        try:
            category_filter = int(category_id)
        except ValueError:
            raise HTTPException(status_code=400, detail="category_id must be an integer") from None
    else:
        category_filter = None

    service = get_record_service()
    records = service.get_user_records(db, user.user_id, category_id=category_filter)
    return [RecordResponse.model_validate(r) for r in records]


@router.get("/stats", response_model=RecordStatsResponse)
def record_stats(
    today: date | None = None,
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> RecordStatsResponse:
    """Aggregated counts for the insight view."""
    service = get_record_service()
    return RecordStatsResponse(**service.get_stats(db, user.user_id, today=today))


@router.get("/{record_id}", response_model=RecordResponse)
def get_record(
    record_id: int,
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> RecordResponse:
    """Get a single record by ID."""
    service = get_record_service()
    record = service.get_record(db, record_id, user.user_id)
    if not record:
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    return RecordResponse.model_validate(record)


@router.post("", response_model=RecordCreateResponse, status_code=201)
async def create_record(
    title: str | None = Form(None),
    description: str | None = Form(None),
    date_logged: str | None = Form(None),
    category_id: str | None = Form(None),
    image: UploadFile | None = None,
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> RecordCreateResponse:
    """Create a record. Only date_logged is required."""
    if not date_logged or not date_logged.strip():
        raise HTTPException(status_code=400, detail="date_logged is required")

    try:
        data = RecordCreate(title=title, description=description, date_logged=date_logged, category_id=category_id)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=_validation_message(e)) from None

    service = get_record_service()
    if data.category_id is not None and not service.owns_category(db, data.category_id, user.user_id):
        raise HTTPException(status_code=400, detail="Invalid category")

    image_url = await _store_upload(image)
    record = service.create_record(db, user.user_id, data, image_url)
    return RecordCreateResponse(message="Record created", record_id=record.id, image_url=record.image_url)


@router.put("/{record_id}", response_model=RecordEnvelope)
async def update_record(
    record_id: int,
    request: Request,
    image: UploadFile | None = None,
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> RecordEnvelope:
    """Update a record. Fields left out of the form keep their stored values."""
    service = get_record_service()
    record = service.get_record(db, record_id, user.user_id)
    if not record:
        raise HTTPException(status_code=404, detail=NOT_FOUND)

    # Read the raw form so an empty value still counts as present
    form = await request.form()
    fields = {name: form[name] for name in UPDATABLE_FIELDS if isinstance(form.get(name), str)}
    try:
        data = RecordUpdate(**fields)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=_validation_message(e)) from None

    if data.category_id is not None and not service.owns_category(db, data.category_id, user.user_id):
        raise HTTPException(status_code=400, detail="Invalid category")

    image_url = await _store_upload(image)
    record = service.update_record(db, record, data, image_url)
    return RecordEnvelope(message="Record updated", record=RecordResponse.model_validate(record))


@router.delete("/{record_id}")
def delete_record(
    record_id: int,
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> dict:
    """Soft-delete a record."""
    service = get_record_service()
    record = service.get_record(db, record_id, user.user_id)
    if not record:
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    service.soft_delete_record(db, record)
    return {"message": "Record deleted"}
