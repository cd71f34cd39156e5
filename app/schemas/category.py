"""Pydantic schemas for category endpoints."""

from datetime import datetime
from typing import Annotated

from pydantic import BaseModel, StringConstraints, field_validator

CATEGORY_ICONS = frozenset(
    {
        "bookmark",
        "cafe",
        "film",
        "calendar",
        "airplane",
        "camera",
        "book",
        "musical-notes",
        "fitness",
        "car",
        "home",
        "gift",
        "heart",
        "star",
        "wine",
        "restaurant",
        "leaf",
        "game-controller",
        "color-palette",
        "paw",
    }
)


class CategoryRequest(BaseModel):
    name: Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=50)]
    icon: Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=50)]
    color: Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=20)]

    @field_validator("icon")
    @classmethod
    def icon_in_set(cls, value: str) -> str:
        if value not in CATEGORY_ICONS:
            raise ValueError(f"unknown icon '{value}'")
        return value


class CategoryResponse(BaseModel):
    id: int
    name: str
    icon: str
    color: str
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class CategoryListResponse(BaseModel):
    categories: list[CategoryResponse]


class CategoryEnvelope(BaseModel):
    message: str
    category: CategoryResponse
