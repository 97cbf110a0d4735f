"""
StockPro - Auth & User Schemas
"""
from pydantic import BaseModel, EmailStr, Field
from typing import Optional

from stockpro.core.rbac import Role


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=6)


class LoginResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: dict


class UserCreate(BaseModel):
    name: str = Field(..., min_length=2, max_length=255)
    email: EmailStr
    password: str = Field(..., min_length=6)
    role: Role = Role.FUNCIONARIO


class UserUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=2, max_length=255)
    email: Optional[EmailStr] = None
    password: Optional[str] = Field(None, min_length=6)
    role: Optional[Role] = None
    active: Optional[bool] = None


class UserResponse(BaseModel):
    id: str
    name: str
    email: str
    role: Role
    active: bool
    last_login_at: Optional[str] = None
    created_at: Optional[str] = None

    class Config:
        from_attributes = True
