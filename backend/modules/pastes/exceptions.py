"""
Pastes module exceptions.
"""

from shared.exceptions import AuthorizationError, ConflictError, NotFoundError, PersistenceError


class PasteNotFoundError(NotFoundError):
    """Raised when a paste does not exist."""

    def __init__(self, paste_id: str, message: str = "Paste not found", code: str = "PASTE_NOT_FOUND"):
        super().__init__(
            message,
            code=code,
            details={"paste_id": paste_id},
        )


class PasteExpiredError(PasteNotFoundError):
    """Raised when an access observes that a paste has expired."""

    def __init__(self, paste_id: str):
        super().__init__(paste_id, "Paste has expired", code="PASTE_EXPIRED")


class PasteBurnedError(PasteNotFoundError):
    """Raised when a burn-after-read paste has already been read."""

    def __init__(self, paste_id: str):
        super().__init__(paste_id, "Paste has been burned after reading", code="PASTE_BURNED")


class PastePrivateError(AuthorizationError):
    """Raised when a private paste is requested by someone other than its owner."""

    def __init__(self, paste_id: str, message: str = "This paste is private"):
        super().__init__(
            message,
            code="PASTE_PRIVATE",
            details={"paste_id": paste_id},
        )


class PasteAccessDeniedError(AuthorizationError):
    """Raised when a non-owner tries to change or delete a paste."""

    def __init__(self, paste_id: str, action: str):
        super().__init__(
            f"You can only {action} your own pastes",
            code="PASTE_ACCESS_DENIED",
            details={"paste_id": paste_id, "action": action},
        )


class PasteIdTakenError(ConflictError):
    """Raised by a store when a new paste's ID is already in use."""

    def __init__(self, paste_id: str):
        super().__init__(
            "Paste ID already in use",
            code="PASTE_ID_TAKEN",
            details={"paste_id": paste_id},
        )


class ViewNotCountedError(PersistenceError):
    """Raised when every attempt to count a view lost to a concurrent reader."""

    def __init__(self, paste_id: str, attempts: int):
        super().__init__("count paste view", f"lost {attempts} concurrent updates")
        self.details["paste_id"] = paste_id
        self.details["retryable"] = True
