"""Pydantic schemas for record endpoints."""

from datetime import date, datetime

from pydantic import BaseModel, Field, field_validator

UNTITLED_RECORD = "Untitled record"


def _blank_to_none(value):
    if isinstance(value, str) and not value.strip():
        return None
    return value


class RecordCreate(BaseModel):
    """Validated record fields. date_logged is the only required one."""

    title: str = UNTITLED_RECORD
    description: str = ""
    date_logged: date
    category_id: int | None = None

    @field_validator("title", mode="before")
    @classmethod
    def default_title(cls, value):
        if value is None or (isinstance(value, str) and not value.strip()):
            return UNTITLED_RECORD
        return value

    @field_validator("description", mode="before")
    @classmethod
    def default_description(cls, value):
        return "" if value is None else value

    @field_validator("category_id", mode="before")
    @classmethod
    def empty_category(cls, value):
        return _blank_to_none(value)


class RecordUpdate(BaseModel):
    """Partial update. Only fields present in model_fields_set are applied."""

    title: str | None = None
    description: str | None = None
    date_logged: date | None = None
    category_id: int | None = None

    @field_validator("title", mode="before")
    @classmethod
    def default_title(cls, value):
        if value is None or (isinstance(value, str) and not value.strip()):
            return UNTITLED_RECORD
        return value

    @field_validator("date_logged", mode="before")
    @classmethod
    def date_not_blank(cls, value):
        if _blank_to_none(value) is None:
            raise ValueError("must not be empty")
        return value

    @field_validator("category_id", mode="before")
    @classmethod
    def empty_category(cls, value):
        return _blank_to_none(value)


class RecordCategory(BaseModel):
    id: int
    name: str
    icon: str
    color: str

    model_config = {"from_attributes": True}


class RecordResponse(BaseModel):
    id: int
    title: str
    description: str
    date_logged: date
    image_url: str | None
    category_id: int | None
    category: RecordCategory | None = None
    created_at: datetime

    model_config = {"from_attributes": True}


class RecordCreateResponse(BaseModel):
    message: str
    record_id: int = Field(alias="recordId")
    image_url: str | None = Field(alias="imageUrl")

    model_config = {"populate_by_name": True}


class RecordEnvelope(BaseModel):
    message: str
    record: RecordResponse


class CategoryCount(BaseModel):
    category_id: int | None
    name: str | None
    count: int


class RecordStatsResponse(BaseModel):
    total_records: int
    this_month: int
    this_week: int
    categories_count: int
    by_category: list[CategoryCount]
