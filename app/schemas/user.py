from datetime import datetime

from pydantic import (
    BaseModel,
    Field,
    HttpUrl,
    field_serializer,
    field_validator,
    model_validator,
)

ALLOWED_GENDERS = ("male", "female", "other")
# Profile columns that may be changed but never cleared.
NON_NULLABLE_FIELDS = ("first_name", "last_name", "photo_url", "about", "skills")


def normalize_gender(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip().lower()
    if value not in ALLOWED_GENDERS:
        raise ValueError("Gender must be either male, female, or other.")
    return value


def check_about(value: str | None) -> str | None:
    if value and len(value) < 20:
        raise ValueError("About section should be at least 20 characters long.")
    return value


class ProfileFields(BaseModel):
    age: int | None = Field(default=None, ge=18)
    gender: str | None = None
    photo_url: HttpUrl | None = None
    about: str | None = None
    skills: list[str] | None = Field(default=None, min_length=1, max_length=5)

    @field_validator("gender")
    @classmethod
    def validate_gender(cls, value: str | None) -> str | None:
        return normalize_gender(value)

    @field_serializer("photo_url")
    def serialize_photo_url(self, value: HttpUrl | None) -> str | None:
        return None if value is None else str(value)

    @field_validator("about")
    @classmethod
    def validate_about(cls, value: str | None) -> str | None:
        return check_about(value)


class UserUpdate(ProfileFields):
    first_name: str | None = Field(default=None, min_length=3, max_length=50)
    last_name: str | None = Field(default=None, min_length=3, max_length=50)

    model_config = {"extra": "forbid"}

    @model_validator(mode="after")
    def reject_null_required_fields(self) -> "UserUpdate":
        cleared = sorted(
            field
            for field in NON_NULLABLE_FIELDS
            if field in self.model_fields_set and getattr(self, field) is None
        )
        if cleared:
            raise ValueError(f"These fields cannot be null: {', '.join(cleared)}.")
        return self


class UserPublic(BaseModel):
    id: int
    first_name: str
    last_name: str
    age: int | None
    gender: str | None
    about: str
    skills: list[str]
    photo_url: str

    model_config = {"from_attributes": True}


class UserRead(UserPublic):
    email: str
    is_active: bool
    created_at: datetime
    updated_at: datetime
