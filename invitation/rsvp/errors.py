from typing import Any


class RsvpError(Exception):
    """Base exception for the RSVP submission pipeline."""


class RsvpValidationError(RsvpError):
    """Raised when a draft is rejected before any network call."""

    def __init__(self, field: str, message: str) -> None:
        self.field = field
        self.message = message
        super().__init__(message)


class RsvpTransportError(RsvpError):
    """Connection-level failure: the request never produced an HTTP response."""


class RequestCancelled(RsvpTransportError):
    """The request was aborted through its cancellation token."""

    def __init__(self, message: str = "Request cancelled") -> None:
        super().__init__(message)


class ApiError(RsvpError):
    """Non-2xx HTTP response."""

    def __init__(
        self,
        message: str,
        status: int,
        body: Any = None,
        content_type: str = "",
    ) -> None:
        self.message = message
        self.status = status
        self.body = body
        self.content_type = content_type
        super().__init__(message)

    @property
    def text_body(self) -> str | None:
        return self.body if isinstance(self.body, str) else None
