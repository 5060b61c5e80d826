"""User-facing error state shared by the controllers."""

import enum
from dataclasses import dataclass

from reelcache.services.repository import NoConnectionError, RepositoryError


class ErrorKind(str, enum.Enum):
    """What the UI should offer after a failed read."""

    OFFLINE = "offline"  # No connection and nothing cached
    REQUEST_FAILED = "request_failed"  # Remote catalog error
    UNEXPECTED = "unexpected"


@dataclass(frozen=True)
class ControllerError:
    """A failed read, as presented to the user."""

    kind: ErrorKind
    message: str

    @classmethod
    def from_exception(cls, error: Exception) -> "ControllerError":
        if isinstance(error, NoConnectionError):
            return cls(ErrorKind.OFFLINE, str(error))
        if isinstance(error, RepositoryError):
            return cls(ErrorKind.REQUEST_FAILED, str(error))
        return cls(ErrorKind.UNEXPECTED, f"An unexpected error occurred: {error}")
