import re

from pydantic import BaseModel, EmailStr, Field, field_validator

from app.schemas.user import ProfileFields


def check_password_strength(password: str) -> str:
    if (
        len(password) < 8
        or not re.search(r"[a-z]", password)
        or not re.search(r"[A-Z]", password)
        or not re.search(r"\d", password)
        or not re.search(r"[^A-Za-z0-9]", password)
    ):
        raise ValueError(
            "Password must be at least 8 characters and contain lower-case, "
            "upper-case, digit and symbol characters."
        )
    return password


class SignupRequest(ProfileFields):
    first_name: str = Field(min_length=3, max_length=50)
    last_name: str = Field(min_length=3, max_length=50)
    email: EmailStr
    password: str

    model_config = {"extra": "forbid"}

    @field_validator("email")
    @classmethod
    def normalize_email(cls, value: str) -> str:
        return value.lower()

    @field_validator("password")
    @classmethod
    def validate_password(cls, value: str) -> str:
        return check_password_strength(value)


class LoginRequest(BaseModel):
    email: str
    password: str


class PasswordUpdate(BaseModel):
    old_password: str
    new_password: str

    @field_validator("new_password")
    @classmethod
    def validate_new_password(cls, value: str) -> str:
        return check_password_strength(value)


class AccessTokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
