"""
Shared data models used across modules.

These models are shared infrastructure, not business logic.
Module-specific models should stay in their respective module directories.
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field


class AuthenticatedUser(BaseModel):
    """
    Represents an authenticated user in the system.

    This model is populated from token claims and made available
    to route handlers via dependency injection. It never carries
    the password hash.
    """

    id: int = Field(..., description="User ID")
    username: str = Field(..., description="Username")
    issued_at: Optional[datetime] = Field(None, description="When the token was issued")
    expires_at: Optional[datetime] = Field(None, description="When the token expires")

    model_config = {
        "frozen": True,  # Make immutable for safety
        "extra": "ignore",  # Ignore extra fields from token claims
    }
