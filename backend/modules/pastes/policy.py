"""
Access policy for pastes.

Pure decision functions with no side effects. The service layer decides
what to do with a denial; nothing here touches storage.

Read paths evaluate in a fixed order: expiry, then burn, then visibility.
Expiry and burn must win over a stale visibility grant.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional

from shared.models import AuthenticatedUser

from .models import OwnedBy, Paste


class DenyReason(str, Enum):
    PRIVATE = "private"
    NOT_AUTHENTICATED = "not authenticated"
    NOT_OWNER = "not owner"


@dataclass(frozen=True)
class AccessDecision:
    """Outcome of a policy check."""

    allowed: bool
    reason: Optional[DenyReason] = None

    def __bool__(self) -> bool:
        return self.allowed


ALLOW = AccessDecision(allowed=True)


def deny(reason: DenyReason) -> AccessDecision:
    return AccessDecision(allowed=False, reason=reason)


def is_owner(paste: Paste, requester: Optional[AuthenticatedUser]) -> bool:
    """True iff requester is authenticated and owns the paste."""
    if requester is None:
        return False
    return isinstance(paste.owner, OwnedBy) and paste.owner.user_id == requester.id


def can_read(paste: Paste, requester: Optional[AuthenticatedUser]) -> AccessDecision:
    if paste.is_public or is_owner(paste, requester):
        return ALLOW
    return deny(DenyReason.PRIVATE)


def can_mutate(paste: Paste, requester: Optional[AuthenticatedUser]) -> AccessDecision:
    """Only the owner may update or delete; anonymous pastes are never mutable."""
    if requester is None:
        return deny(DenyReason.NOT_AUTHENTICATED)
    if not is_owner(paste, requester):
        return deny(DenyReason.NOT_OWNER)
    return ALLOW


def is_expired(paste: Paste, now: datetime) -> bool:
    return paste.expires_at is not None and paste.expires_at <= now


def is_burned(paste: Paste) -> bool:
    return paste.burn_after_read and paste.views > 0
