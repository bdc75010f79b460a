from typing import Any


class AppError(Exception):
    """Base application error with consistent schema."""

    def __init__(
        self,
        message: str,
        code: str = "ERROR",
        details: dict[str, Any] | None = None,
    ):
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(message)


class ValidationError(AppError):
    """Malformed or missing command arguments; reported back with the usage line."""

    def __init__(self, usage: str):
        self.usage = usage
        super().__init__(
            f"Invalid command usage. Format: {usage}",
            code="VALIDATION_ERROR",
            details={"usage": usage},
        )


class StoreUnavailable(AppError):
    def __init__(self, message: str = "Ledger store unavailable"):
        super().__init__(message, code="STORE_UNAVAILABLE")


class DuplicateRecord(AppError):
    def __init__(self, message: str = "Record already exists", details: dict[str, Any] | None = None):
        super().__init__(message, code="CONFLICT", details=details)


class ProfileLookupError(AppError):
    def __init__(self, user_id: str, message: str = "User profile lookup failed"):
        super().__init__(message, code="PROFILE_LOOKUP_FAILED", details={"user_id": user_id})


def reply_for_error(exc: Exception):
    """Map a handler exception to the reply sent back to the channel."""
    from mxpbot.bot import replies

    if isinstance(exc, ValidationError):
        return replies.validation_error(exc.usage)
    message = exc.message if isinstance(exc, AppError) else str(exc)
    return replies.command_failure(message)
