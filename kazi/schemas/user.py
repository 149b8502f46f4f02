from typing import Optional
from datetime import datetime
from pydantic import BaseModel, EmailStr, Field


class UserProfileFields(BaseModel):
    first_name: Optional[str] = Field(default=None, alias="firstName", max_length=100)
    last_name: Optional[str] = Field(default=None, alias="lastName", max_length=100)
    gender: Optional[str] = Field(default=None, max_length=50)

    class Config:
        from_attributes = True
        populate_by_name = True


class RegisterRequest(UserProfileFields):
    email: EmailStr
    password: str = ""


class LoginRequest(BaseModel):
    email: str
    password: str


class UserResponse(UserProfileFields):
    id: int = Field(alias="userID")
    email: str
    role: str
    created_at: datetime = Field(alias="createdAt")


class AuthResponse(BaseModel):
    token: str
    user: UserResponse


class ProfileUpdate(UserProfileFields):
    email: EmailStr


class ChangePasswordRequest(BaseModel):
    old_password: str = Field(alias="oldPassword")
    new_password: str = Field(alias="newPassword")

    class Config:
        populate_by_name = True


class AdminUserCreate(RegisterRequest):
    password: Optional[str] = None
    role: Optional[str] = Field(default=None, pattern="^(User|Admin)$")


class AdminUserUpdate(UserProfileFields):
    id: int = Field(alias="userID")
    email: EmailStr
    role: Optional[str] = Field(default=None, pattern="^(User|Admin)$")
    # Routed through the password reset flow, never stored as-is
    password: Optional[str] = None
