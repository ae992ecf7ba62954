"""Exception types shared across the storefront."""

from starlette.status import HTTP_500_INTERNAL_SERVER_ERROR


class StorefrontError(Exception):
    """Base class for storefront errors."""


class APIError(StorefrontError):
    """Client-visible failure carrying a safe message and an HTTP status."""

    def __init__(self, status_code: int, message: str) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.message = message


class ConfigurationError(StorefrontError):
    """Raised when required configuration is missing at a boundary."""

    status_code = HTTP_500_INTERNAL_SERVER_ERROR
