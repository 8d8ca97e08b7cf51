"""
Auth Models

Registration, login, profile and password payloads.
"""

from pydantic import ConfigDict, Field
from pydantic.alias_generators import to_camel

from afyaconnect.models.common import ApiModel, SuccessResponse

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


class RegisterRequest(ApiModel):
    email: str = Field(..., max_length=320, pattern=EMAIL_PATTERN)
    password: str = Field(..., min_length=6, max_length=128)
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    country: str | None = Field(None, max_length=100)


class LoginRequest(ApiModel):
    email: str = Field(..., min_length=1, max_length=320)
    password: str = Field(..., min_length=1, max_length=128)


class UserProfile(ApiModel):
    id: int
    email: str
    first_name: str
    last_name: str
    country: str | None = None
    phone: str | None = None
    date_of_birth: str | None = None
    role: str = "patient"


class TokenResponse(ApiModel):
    success: bool = True
    token: str
    user: UserProfile


class ProfileUpdate(ApiModel):
    """Editable profile fields; blank optional values clear the stored value."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, str_strip_whitespace=True
    )

    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    phone: str | None = Field(None, max_length=40)
    date_of_birth: str | None = Field(None, max_length=20)
    country: str | None = Field(None, max_length=100)


class ProfileUpdated(SuccessResponse):
    user: UserProfile


class PasswordChange(ApiModel):
    current_password: str = Field(..., min_length=1, max_length=128)
    new_password: str = Field(..., min_length=6, max_length=128)
