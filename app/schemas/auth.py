"""Pydantic schemas for authentication and user endpoints."""

from pydantic import BaseModel, Field, field_validator


class LoginRequest(BaseModel):
    email: str = Field(min_length=1)
    password: str = Field(min_length=1)


class SignupRequest(BaseModel):
    email: str = Field(min_length=1, max_length=256)
    password: str = Field(min_length=1)
    user_name: str | None = Field(default=None, max_length=256)

    @field_validator("email")
    @classmethod
    def email_not_blank(cls, value: str) -> str:
        # Stored exactly as sent so login compares the same string
        if not value.strip():
            raise ValueError("must not be blank")
        return value

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, value: str) -> str:
        # bcrypt only looks at the first 72 bytes
        if len(value.encode("utf-8")) > 72:
            raise ValueError("must be at most 72 bytes")
        return value


class UserResponse(BaseModel):
    id: int
    user_name: str | None
    email: str
    avatar_url: str | None = None


class UserEnvelope(BaseModel):
    user: UserResponse


class SignupResponse(BaseModel):
    message: str
    user_id: int = Field(alias="userId")

    model_config = {"populate_by_name": True}


class LoginResponse(BaseModel):
    token: str
    user: UserResponse


class ProfileResponse(BaseModel):
    message: str
    user: UserResponse
