"""Pydantic schemas for User and Auth."""

from pydantic import BaseModel, EmailStr, Field
from datetime import datetime
from typing import Literal, Optional


class UserCreate(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    email: EmailStr
    password: str = Field(min_length=6)
    avatar: Optional[str] = Field(None, max_length=10)


class UserRead(BaseModel):
    id: int
    name: str
    email: str
    role: str
    avatar: Optional[str] = None
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class UserUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    email: Optional[EmailStr] = None
    avatar: Optional[str] = Field(None, max_length=10)


class PasswordChange(BaseModel):
    current_password: str = Field(alias="currentPassword")
    new_password: str = Field(alias="newPassword", min_length=6)

    model_config = {"populate_by_name": True}


class RoleUpdate(BaseModel):
    role: Literal["admin", "employee"]


class LoginRequest(BaseModel):
    email: str
    password: str


class TokenResponse(BaseModel):
    token: str
    token_type: str = "bearer"
    user: UserRead
