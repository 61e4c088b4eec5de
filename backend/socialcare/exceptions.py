from typing import Optional


class SocialCareError(Exception):
    """Base for errors that map onto a JSON ``{"message": ...}`` response."""

    status_code = 500

    def __init__(self, message: str, errors: Optional[list] = None):
        self.message = message
        self.errors = errors
        super().__init__(message)


class ValidationFailed(SocialCareError):
    status_code = 400


class ConflictError(SocialCareError):
    """Duplicate unique key (case ID, email)."""
    status_code = 400


class AuthenticationError(SocialCareError):
    status_code = 401


class NotFoundError(SocialCareError):
    """Raised both when a record is absent and when the caller may not see it."""
    status_code = 404
