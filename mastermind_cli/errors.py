"""
Closed error taxonomy for remote calls.

Every failure SessionClient reports is one of these ApiError subclasses, so
the controller can decide per kind whether to keep playing or shut down.
"""

from typing import Optional

GAME_NOT_FOUND_MESSAGE = "Game not found"


class ApiError(Exception):
    """Base class for everything a remote call can fail with."""


class InvalidTarget(ApiError):
    def __init__(self, target: str, reason: str):
        self.target = target
        self.reason = reason
        super().__init__(f"Invalid request target {target!r}: {reason}")


class TransportFailure(ApiError):
    def __init__(self, cause: Exception):
        self.cause = cause
        super().__init__(f"Request failed: {cause}")


class EmptyResponse(ApiError):
    def __init__(self, status_code: int):
        self.status_code = status_code
        super().__init__(f"Empty response body (HTTP {status_code})")


class DecodeFailure(ApiError):
    def __init__(self, cause: Exception, status_code: Optional[int] = None):
        self.cause = cause
        self.status_code = status_code
        super().__init__(f"Could not decode response (HTTP {status_code}): {cause}")


class ApiRejection(ApiError):
    def __init__(self, status_code: int, message: str):
        self.status_code = status_code
        self.message = message
        super().__init__(f"API Error (HTTP {status_code}): {message}")


class UnexpectedStatus(ApiError):
    def __init__(self, status_code: int):
        self.status_code = status_code
        super().__init__(f"Unexpected status code: {status_code}")


def is_game_not_found(error: Exception) -> bool:
    """
    True when the server says it has no record of the session.

    The server has no stable error code for this, only the message text, so
    this is the one place that knows the wording. Resubmitting can never
    succeed after this, so the controller drops its session and stops.
    """
    if not isinstance(error, ApiRejection):
        return False
    return GAME_NOT_FOUND_MESSAGE.lower() in error.message.lower()
