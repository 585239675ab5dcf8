"""Exception hierarchy for Photo Finder."""

from __future__ import annotations


class PhotoFinderException(Exception):
    """
    Base exception class for this application.
    """

    def __init__(self, *args: object):
        if args:
            super().__init__(*args)
        else:
            super().__init__("Unknown error")


class RemoteFetchError(PhotoFinderException):
    """
    Raised when a remote endpoint couldn't be reached, answered with a non-success
    HTTP status, or sent back a body that isn't valid JSON.

    `status` is `None` for transport-level failures.
    """

    def __init__(self, status: int | None = None, message: str | None = None):
        self.status: int | None = status
        if message is None:
            if status is None:
                message = "Remote endpoint unreachable"
            else:
                message = f"HTTP error! status: {status}"
        self.message: str = message
        super().__init__(message)


class RemoteApplicationError(PhotoFinderException):
    """
    Raised when the remote endpoint responded, but reported `success: false`.
    """

    def __init__(self, message: str):
        self.message: str = message
        super().__init__(message)


class NotFoundError(PhotoFinderException):
    """The requested photo code has no entry in the lookup table."""

    def __init__(self, code: str):
        self.code: str = code
        super().__init__(f"Photo not found: {code!r}")
