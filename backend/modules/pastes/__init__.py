"""
Pastes module.

Handles the paste lifecycle: creation, reads with view counting,
expiry and burn-after-read, forks, and owner-only edits.

Public API:
- IPasteService, IPasteRepository: Interfaces
- Paste, AuthoredPaste, PasteView, CreatePasteRequest, UpdatePasteRequest: Models
- Paste exceptions: PasteNotFoundError, PastePrivateError, etc.
"""

from .interfaces import IPasteService, IPasteRepository
from .models import (
    Paste,
    AuthoredPaste,
    PasteView,
    Dashboard,
    CreatePasteRequest,
    UpdatePasteRequest,
    ExpiresIn,
    OwnedBy,
    Anonymous,
    ANONYMOUS,
)
from .exceptions import (
    PasteNotFoundError,
    PasteExpiredError,
    PasteBurnedError,
    PastePrivateError,
    PasteAccessDeniedError,
    PasteIdTakenError,
    ViewNotCountedError,
)

__all__ = [
    # Interfaces
    "IPasteService",
    "IPasteRepository",
    # Models
    "Paste",
    "AuthoredPaste",
    "PasteView",
    "Dashboard",
    "CreatePasteRequest",
    "UpdatePasteRequest",
    "ExpiresIn",
    "OwnedBy",
    "Anonymous",
    "ANONYMOUS",
    # Exceptions
    "PasteNotFoundError",
    "PasteExpiredError",
    "PasteBurnedError",
    "PastePrivateError",
    "PasteAccessDeniedError",
    "PasteIdTakenError",
    "ViewNotCountedError",
]
