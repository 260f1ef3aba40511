from pydantic import EmailStr, Field
from typing import Optional
from datetime import datetime

from .base_schema import CamelModel


class RegisterRequest(CamelModel):
    name: str = Field(min_length=1, max_length=100)
    email: EmailStr
    password: str = Field(min_length=6)
    # Checked by the auth service so an unknown role gets its own error
    role: Optional[str] = None


class LoginRequest(CamelModel):
    email: EmailStr
    password: str


class UserResponse(CamelModel):
    id: int
    name: str
    email: str
    role: str
    is_approved: bool
    created_at: Optional[datetime] = None


class UserMinimumResponse(CamelModel):
    id: int
    name: str
    email: str
