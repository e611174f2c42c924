"""User DTOs"""
from datetime import datetime
from typing import Optional
from email_validator import EmailNotValidError, validate_email
from pydantic import BaseModel, Field, field_validator
from ticketdesk.domain.entities.user import UserRole
from ticketdesk.infrastructure.security.passwords import MAX_PASSWORD_BYTES


def _check_email(value: Optional[str]) -> Optional[str]:
    # Validated only; the address is stored exactly as given since login matches it verbatim
    if value is None:
        return value
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError as e:
        raise ValueError(str(e)) from e
    return value


def _check_password(value: Optional[str]) -> Optional[str]:
    if value is not None and len(value.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise ValueError(f"Password must not exceed {MAX_PASSWORD_BYTES} bytes")
    return value


class UserCreateDTO(BaseModel):
    """DTO for creating a user"""
    name: str = Field(min_length=1)
    email: str
    password: str = Field(min_length=1)
    role: UserRole = UserRole.USER
    department_id: Optional[str] = None

    @field_validator("email")
    @classmethod
    def validate_email_address(cls, v):
        return _check_email(v)

    @field_validator("password")
    @classmethod
    def validate_password_length(cls, v):
        return _check_password(v)


class UserUpdateDTO(BaseModel):
    """DTO for updating a user.

    Only fields explicitly set are applied; ``department_id=None`` detaches
    the user from its department.
    """
    name: Optional[str] = Field(default=None, min_length=1)
    email: Optional[str] = None
    password: Optional[str] = Field(default=None, min_length=1)
    role: Optional[UserRole] = None
    department_id: Optional[str] = None

    @field_validator("email")
    @classmethod
    def validate_email_address(cls, v):
        return _check_email(v)

    @field_validator("password")
    @classmethod
    def validate_password_length(cls, v):
        return _check_password(v)


class UserResponseDTO(BaseModel):
    """DTO for user response"""
    id: str
    name: str
    email: str
    role: UserRole
    department_id: Optional[str] = None
    department_name: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
