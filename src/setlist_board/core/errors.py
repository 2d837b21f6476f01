"""Error taxonomy for the posting core.

Services raise these; the transport layer maps ``status_code`` onto the HTTP
response. Nothing here is retried automatically.
"""

from __future__ import annotations


class BoardError(Exception):
    """Base exception for caller-visible failures in the posting core."""

    status_code: int = 400

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(BoardError):
    """Input is malformed: empty or oversized content, unknown enum values."""

    status_code = 400


class NotFoundError(BoardError):
    """A referenced post, parent, quoted post or flag does not exist."""

    status_code = 404


class ForbiddenError(BoardError):
    """The actor does not own the resource or lacks the moderator role."""

    status_code = 403


class InvalidStateError(BoardError):
    """The operation is illegal for the resource's current lifecycle state."""

    status_code = 400


class InvalidThreadDepthError(InvalidStateError):
    """Raised when replying to a post that is itself a reply."""
