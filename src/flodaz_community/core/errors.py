"""Error taxonomy shared by services and the HTTP boundary.

Services raise these exceptions; the application converts them to JSON
responses in one place (see ``flodaz_community.api.errors``).
"""

from __future__ import annotations


class AppError(RuntimeError):
    """Base class for errors that map onto an HTTP response."""

    status_code: int = 500
    public_message: str = "Something went wrong!"

    def __init__(self, message: str | None = None, *, status_code: int | None = None) -> None:
        super().__init__(message or self.public_message)
        self.message = message or self.public_message
        if status_code is not None:
            self.status_code = status_code


class ValidationError(AppError):
    """Client input is missing or malformed."""

    status_code = 400
    public_message = "Invalid request"


class NotFoundError(AppError):
    """A referenced entity does not exist."""

    status_code = 404
    public_message = "Not found"


class StoreError(AppError):
    """The relational content store failed."""

    status_code = 500
    public_message = "Database operation failed"


class UploadError(AppError):
    """An upload violated a file constraint (400) or the media service failed (500)."""

    status_code = 400
    public_message = "Upload failed"


class UnknownError(AppError):
    """Catch-all for failures with no better classification.

    The application's last-resort handler wraps any uncaught exception in
    one of these before answering.
    """

    status_code = 500


class IdentityError(RuntimeError):
    """Raised by the identity client when the provider cannot be queried."""


class MediaError(RuntimeError):
    """Raised by the media client when the CDN rejects or fails an upload."""


__all__ = [
    "AppError",
    "IdentityError",
    "MediaError",
    "NotFoundError",
    "StoreError",
    "UnknownError",
    "UploadError",
    "ValidationError",
]
