"""
Pydantic schemas for users, login and token verification results
"""

from pydantic import BaseModel, Field, validator, EmailStr
from typing import Optional, Literal
from datetime import datetime


class UserPublic(BaseModel):
    """User projection that is safe to hand to callers (no password hash)"""

    id: str
    username: str
    email: EmailStr
    role: Literal["admin"] = "admin"
    created_at: datetime


class User(UserPublic):
    """Stored user record"""

    password_hash: str = Field(..., description="$scheme$rounds$salt$hash")

    def to_public(self) -> UserPublic:
        return UserPublic(**self.model_dump(exclude={"password_hash"}))


class UserCreate(BaseModel):
    """Schema for creating a user"""

    username: str = Field(..., min_length=1, max_length=100, description="Unique login name")
    email: EmailStr = Field(..., description="Unique email address")
    password: str = Field(..., min_length=1, description="Plaintext password, hashed before storage")
    role: Literal["admin"] = "admin"

    @validator('username')
    def validate_username(cls, v):
        """Usernames are matched exactly, so surrounding whitespace is rejected"""
        if v != v.strip():
            raise ValueError("Username cannot start or end with whitespace")
        return v


class LoginRequest(BaseModel):
    """Username or email plus password"""

    username: str = Field(..., min_length=1, description="Username or email")
    password: str = Field(..., min_length=1)


class AuthResult(BaseModel):
    """Outcome of login / create_user"""

    success: bool
    token: Optional[str] = None
    user: Optional[UserPublic] = None
    message: Optional[str] = None


class TokenClaims(BaseModel):
    """Decoded bearer token payload (wire names are camelCase)"""

    user_id: str = Field(..., alias="userId")
    username: str
    email: str
    role: str
    iat: int
    exp: int

    class Config:
        populate_by_name = True
        extra = "allow"


class VerifyResult(BaseModel):
    """Outcome of verify_token; never raised, always returned"""

    success: bool
    user: Optional[TokenClaims] = None
    reason: Optional[str] = None
