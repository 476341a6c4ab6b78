# /whoiswho/errors.py
"""
Error types raised by adapters, aggregators and endpoints.

Each error carries the HTTP status it maps to and a stable code; the
exception handler in whoiswho.main renders them as {"error", "code"}.
"""
import logging
from enum import Enum
from typing import Optional

logger = logging.getLogger(__name__)


class ErrorCode(str, Enum):
    """Error codes returned in the JSON body."""
    INVALID_INPUT = "INVALID_INPUT"
    NOT_FOUND = "NOT_FOUND"
    UPSTREAM_ERROR = "UPSTREAM_ERROR"
    UNAUTHORIZED = "UNAUTHORIZED"
    FORBIDDEN = "FORBIDDEN"
    RATE_LIMITED = "RATE_LIMITED"
    CONFIG_ERROR = "CONFIG_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class WhoIsWhoError(Exception):
    """Base class for errors that terminate a request."""
    status_code = 500
    code = ErrorCode.INTERNAL_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self):
        return {"error": self.message, "code": self.code.value}


class InvalidInputError(WhoIsWhoError):
    status_code = 400
    code = ErrorCode.INVALID_INPUT


class NotFoundError(WhoIsWhoError):
    status_code = 404
    code = ErrorCode.NOT_FOUND


class UpstreamError(WhoIsWhoError):
    """A provider was unreachable or answered with a non-success status.

    The upstream status is passed through when there is one; network
    failures map to 502.
    """
    code = ErrorCode.UPSTREAM_ERROR

    def __init__(self, message: str, status_code: Optional[int] = None, provider: Optional[str] = None):
        super().__init__(message)
        self.status_code = status_code if status_code and status_code >= 400 else 502
        self.provider = provider


class UnauthorizedError(WhoIsWhoError):
    status_code = 401
    code = ErrorCode.UNAUTHORIZED


class ForbiddenError(WhoIsWhoError):
    status_code = 403
    code = ErrorCode.FORBIDDEN


class RateLimitedError(WhoIsWhoError):
    status_code = 429
    code = ErrorCode.RATE_LIMITED


class ConfigError(WhoIsWhoError):
    status_code = 500
    code = ErrorCode.CONFIG_ERROR


class InternalError(WhoIsWhoError):
    status_code = 500
    code = ErrorCode.INTERNAL_ERROR


def require_secret(value: Optional[str], name: str) -> str:
    """Return the secret or fail fast with a configuration error."""
    if not value:
        logger.error(f"{name} is not set in environment variables")
        raise ConfigError(f"Server configuration error: {name} is not set")
    return value
