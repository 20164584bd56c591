from datetime import datetime
from typing import Optional, List, Dict, Any

from pydantic import BaseModel, Field, field_validator, validate_email

MIN_PASSWORD_LENGTH = 6
# bcrypt only considers the first 72 bytes of a password
MAX_PASSWORD_BYTES = 72


def _require_text(value: Any, label: str) -> str:
    if value is None:
        raise ValueError(f"{label} is required")
    if not isinstance(value, str):
        raise ValueError(f"{label} must be a string")
    if not value.strip():
        raise ValueError(f"{label} is required")
    return value


def _normalize_email(value: Any) -> str:
    value = _require_text(value, "Email").strip().lower()
    try:
        validate_email(value)
    except ValueError:
        raise ValueError("Invalid email format")
    return value


def _validate_preferences(value: Any, required: bool) -> List[str]:
    if value is None:
        if required:
            raise ValueError("Preferences are required")
        return []
    if not isinstance(value, list):
        raise ValueError("Preferences must be an array")
    if not all(isinstance(item, str) for item in value):
        raise ValueError("Preferences must contain only strings")
    return value


class SignupRequest(BaseModel):
    name: Optional[str] = Field(None, validate_default=True, description="Display name")
    email: Optional[str] = Field(None, validate_default=True, description="Login email, stored lower-cased")
    password: Optional[str] = Field(None, validate_default=True, description="Plain-text password")
    preferences: Optional[List[str]] = Field(None, validate_default=True, description="News topic preferences")

    @field_validator("name", mode="before")
    @classmethod
    def validate_name(cls, value):
        return _require_text(value, "Name").strip()

    @field_validator("email", mode="before")
    @classmethod
    def validate_email_field(cls, value):
        return _normalize_email(value)

    @field_validator("password", mode="before")
    @classmethod
    def validate_password(cls, value):
        value = _require_text(value, "Password")
        if len(value) < MIN_PASSWORD_LENGTH:
            raise ValueError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")
        if len(value.encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise ValueError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")
        return value

    @field_validator("preferences", mode="before")
    @classmethod
    def validate_preferences(cls, value):
        return _validate_preferences(value, required=False)


class LoginRequest(BaseModel):
    email: Optional[str] = Field(None, validate_default=True)
    password: Optional[str] = Field(None, validate_default=True)

    @field_validator("email", mode="before")
    @classmethod
    def validate_email_field(cls, value):
        return _normalize_email(value)

    @field_validator("password", mode="before")
    @classmethod
    def validate_password(cls, value):
        return _require_text(value, "Password")


class PreferencesUpdateRequest(BaseModel):
    preferences: Optional[List[str]] = Field(None, validate_default=True)

    @field_validator("preferences", mode="before")
    @classmethod
    def validate_preferences(cls, value):
        return _validate_preferences(value, required=True)


class UserResponse(BaseModel):
    id: str
    name: str
    email: str
    preferences: List[str] = []
    created_at: Optional[datetime] = None


class SignupResponse(BaseModel):
    message: str
    user: UserResponse


class LoginResponse(BaseModel):
    message: str
    token: str


class PreferencesResponse(BaseModel):
    preferences: List[str]


class PreferencesUpdateResponse(BaseModel):
    message: str
    preferences: List[str]


class NewsResponse(BaseModel):
    news: List[Dict[str, Any]] = Field(default_factory=list, description="Articles as returned by the provider")


class ErrorResponse(BaseModel):
    error: str
