"""
Authentication module data models.

These models define the data structures used by the auth module
and exposed to other modules through the interface.
"""

from datetime import datetime
from pydantic import BaseModel, Field, field_validator

# bcrypt only looks at the first 72 bytes of a password
MAX_PASSWORD_BYTES = 72


class User(BaseModel):
    """
    Stored user record.

    Internal to the auth module and its repositories; routes expose
    UserPublic instead so the password hash never leaves the service.
    """

    id: int = Field(..., description="Numeric user ID")
    username: str = Field(..., description="Unique username")
    password_hash: str = Field(..., description="bcrypt hash of the password")
    created_at: datetime = Field(..., description="Account creation time")

    def to_public(self) -> "UserPublic":
        return UserPublic(id=self.id, username=self.username, created_at=self.created_at)


class UserPublic(BaseModel):
    """Outward representation of a user."""

    id: int = Field(..., description="Numeric user ID")
    username: str = Field(..., description="Unique username")
    created_at: datetime = Field(..., description="Account creation time")


class TokenClaims(BaseModel):
    """Decoded session token payload."""

    sub: str = Field(..., description="Subject (stringified user ID)")
    user_id: int = Field(..., description="User ID")
    username: str = Field(..., description="Username at issue time")
    iat: int = Field(..., description="Issued at timestamp")
    exp: int = Field(..., description="Expiration timestamp")


class RegisterRequest(BaseModel):
    """Request to create a new account."""

    username: str = Field(..., min_length=3, max_length=50)
    password: str = Field(..., min_length=6)

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, value: str) -> str:
        if len(value.encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise ValueError(f"password must be at most {MAX_PASSWORD_BYTES} bytes")
        return value


class LoginRequest(BaseModel):
    """Request to log in with username and password."""

    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class AuthResponse(BaseModel):
    """Response to a successful registration or login."""

    message: str
    user: UserPublic
    token: str


class MessageResponse(BaseModel):
    """Plain acknowledgement."""

    message: str
