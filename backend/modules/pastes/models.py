"""
Pastes module data models.

These models define the core data structures for the Patbin paste system.
"""

from datetime import datetime, timedelta
from enum import Enum
from typing import Annotated, Literal, Optional, Union
from pydantic import BaseModel, Field, field_validator

from modules.auth.models import UserPublic


class OwnedBy(BaseModel):
    """Paste owned by a registered user."""

    kind: Literal["user"] = "user"
    user_id: int = Field(..., description="Owning user ID")

    model_config = {"frozen": True}


class Anonymous(BaseModel):
    """Paste created without an identity. No one can ever own it."""

    kind: Literal["anonymous"] = "anonymous"

    model_config = {"frozen": True}


Owner = Annotated[Union[OwnedBy, Anonymous], Field(discriminator="kind")]

ANONYMOUS = Anonymous()


class ExpiresIn(str, Enum):
    """Expiry selector accepted when creating a paste."""

    ONE_HOUR = "1h"
    ONE_DAY = "1d"
    ONE_WEEK = "1w"
    ONE_MONTH = "1m"
    NEVER = "never"

    @property
    def duration(self) -> Optional[timedelta]:
        """Lifetime for this selector, or None for no expiry."""
        return EXPIRY_DURATIONS[self]


EXPIRY_DURATIONS: dict[ExpiresIn, Optional[timedelta]] = {
    ExpiresIn.ONE_HOUR: timedelta(hours=1),
    ExpiresIn.ONE_DAY: timedelta(hours=24),
    ExpiresIn.ONE_WEEK: timedelta(days=7),
    ExpiresIn.ONE_MONTH: timedelta(days=30),
    ExpiresIn.NEVER: None,
}


class Paste(BaseModel):
    """A stored paste."""

    id: str = Field(..., description="Short opaque paste ID")
    title: Optional[str] = Field(None, description="Optional title")
    content: str = Field(..., description="Paste text")
    language: Optional[str] = Field(None, description="Language hint for display")
    is_public: bool = Field(default=True, description="Visible to everyone")
    views: int = Field(default=0, ge=0, description="Successful read count")
    expires_at: Optional[datetime] = Field(None, description="When the paste expires")
    burn_after_read: bool = Field(default=False, description="Destroy after first read")
    owner: Owner = Field(default=ANONYMOUS, description="Owning user or anonymous")
    created_at: datetime = Field(..., description="Creation time")
    updated_at: datetime = Field(..., description="Last update time")

    @property
    def owner_id(self) -> Optional[int]:
        """Owning user ID, or None for anonymous pastes."""
        if isinstance(self.owner, OwnedBy):
            return self.owner.user_id
        return None


class AuthoredPaste(Paste):
    """A paste with its author's public profile attached."""

    user: Optional[UserPublic] = Field(None, description="Author, null for anonymous pastes")


class PasteView(AuthoredPaste):
    """A paste as returned by the read endpoint, with display hints."""

    display_language: str = Field(..., description="Language to highlight with")
    line_count: int = Field(..., description="Number of lines in the content")


class CreatePasteRequest(BaseModel):
    """Request to create a new paste."""

    title: Optional[str] = Field(None, max_length=255)
    content: str = Field(..., min_length=1, description="Paste text (required)")
    language: Optional[str] = Field(None, max_length=50)
    is_public: bool = Field(default=True)
    expires_in: Optional[ExpiresIn] = Field(
        None,
        description="One of 1h, 1d, 1w, 1m, never",
    )
    burn_after_read: bool = Field(default=False)

    @field_validator("expires_in", mode="before")
    @classmethod
    def empty_means_never(cls, value):
        if value == "":
            return None
        return value


class UpdatePasteRequest(BaseModel):
    """
    Partial update of a paste.

    Empty strings count as "not provided", so a field cannot be
    cleared through an update.
    """

    title: Optional[str] = Field(None, max_length=255)
    content: Optional[str] = None
    language: Optional[str] = Field(None, max_length=50)
    is_public: Optional[bool] = None

    def changes(self) -> dict:
        """Fields that should overwrite the stored paste."""
        updates: dict = {}
        if self.title:
            updates["title"] = self.title
        if self.content:
            updates["content"] = self.content
        if self.language:
            updates["language"] = self.language
        if self.is_public is not None:
            updates["is_public"] = self.is_public
        return updates


class Dashboard(BaseModel):
    """The caller's pastes with visibility counts."""

    pastes: list[Paste]
    total_count: int
    public_count: int
    private_count: int
