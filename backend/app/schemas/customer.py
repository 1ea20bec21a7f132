from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, EmailStr, Field, field_validator

# bcrypt only reads the first 72 bytes of a password
PASSWORD_MAX_BYTES = 72


def _check_password_length(value: str | None) -> str | None:
    if value is not None and len(value.encode("utf-8")) > PASSWORD_MAX_BYTES:
        raise ValueError(f"password must be at most {PASSWORD_MAX_BYTES} bytes")
    return value


class CustomerCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    password: str | None = Field(default=None, min_length=8)
    phone: str | None = Field(default=None, max_length=50)
    address: str | None = Field(default=None, max_length=255)
    city: str | None = Field(default=None, max_length=100)
    zip: str | None = Field(default=None, max_length=20)

    @field_validator("password")
    @classmethod
    def check_password_length(cls, value: str | None) -> str | None:
        return _check_password_length(value)


class CustomerUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=255)
    email: EmailStr | None = None
    phone: str | None = Field(default=None, max_length=50)
    address: str | None = Field(default=None, max_length=255)
    city: str | None = Field(default=None, max_length=100)
    zip: str | None = Field(default=None, max_length=20)


class CustomerLogin(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)

    @field_validator("password")
    @classmethod
    def check_password_length(cls, value: str | None) -> str | None:
        return _check_password_length(value)


class CustomerResponse(BaseModel):
    id: UUID
    name: str
    email: str
    phone: str | None
    address: str | None
    city: str | None
    zip: str | None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class CustomerTokenResponse(BaseModel):
    customer_id: UUID
    token: str
    token_type: str = "bearer"
    expires_in: int
