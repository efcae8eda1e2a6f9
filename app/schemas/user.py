from pydantic import EmailStr, Field
from app.schemas.base import CamelModel
from typing import Optional, Dict, Any
from datetime import datetime
from app.models.user import UserRole

class LoginRequest(CamelModel):
    email: EmailStr
    password: str = Field(..., min_length=1)

class RegisterRequest(CamelModel):
    email: EmailStr
    password: str = Field(..., min_length=6)
    name: str = Field(..., min_length=1)
    role: UserRole = UserRole.PARENT
    avatar: Optional[str] = None
    date_of_birth: Optional[str] = None
    parent_id: Optional[str] = None

class UserCreate(CamelModel):
    """Family member created by a parent"""
    email: EmailStr
    password: str = Field(..., min_length=6)
    name: str = Field(..., min_length=1)
    role: UserRole = UserRole.PARENT
    avatar: Optional[str] = None
    date_of_birth: Optional[str] = None

class UserUpdate(CamelModel):
    name: Optional[str] = Field(None, min_length=1)
    avatar: Optional[str] = None
    date_of_birth: Optional[str] = None
    preferences: Optional[Dict[str, Any]] = None

class UserSummary(CamelModel):
    id: str
    email: EmailStr
    name: str
    role: UserRole
    avatar: Optional[str] = None

    class Config:
        from_attributes = True

class User(UserSummary):
    date_of_birth: Optional[str] = None
    parent_id: Optional[str] = None
    preferences: Dict[str, Any] = {}
    is_active: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True

# Request bodies for the public auth endpoints are accepted loosely and
# validated by AuthService so malformed logins fail closed with a 401.
class LoginForm(CamelModel):
    email: Any = None
    password: Any = None

class RegisterForm(CamelModel):
    email: Any = None
    password: Any = None
    name: Any = None
    role: Any = "parent"
    avatar: Optional[str] = None
    date_of_birth: Optional[str] = None
