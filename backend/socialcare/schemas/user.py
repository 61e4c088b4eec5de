from typing import Optional
from pydantic import Field
from socialcare.schemas.base import CamelModel, UTCDateTime


class RegisterRequest(CamelModel):
    email: str = Field(min_length=3, max_length=254)
    password: str = Field(min_length=6)
    first_name: str = Field(min_length=1, max_length=100)
    last_name: str = Field(min_length=1, max_length=100)


class LoginRequest(CamelModel):
    email: str = Field(min_length=1)
    password: str = Field(min_length=1)


class UserResponse(CamelModel):
    id: int
    email: str
    first_name: str
    last_name: str
    role: str
    is_active: bool = True
    created_at: Optional[UTCDateTime] = None


class UserSummary(CamelModel):
    id: int
    first_name: str
    last_name: str
    role: str


class AuthResponse(CamelModel):
    token: str
    user: UserResponse


class ProfileUpdate(CamelModel):
    name: Optional[str] = None
    email: Optional[str] = None
    role: Optional[str] = None


class PasswordChange(CamelModel):
    current_password: Optional[str] = None
    new_password: Optional[str] = None
