"""
Centralised custom exceptions.
Having them in one place means consistent error messages across the entire app
and easy global changes (e.g., changing status codes or adding logging).

Every exception renders as {"error": detail, **extra} via the handler
registered in main.create_app().
"""
from typing import Optional

from fastapi import HTTPException, status


class APIException(HTTPException):
    """
    Base for all domain errors.
    `extra` holds additional top-level body fields (e.g. attemptsLeft).
    """
    def __init__(
        self,
        status_code: int,
        detail: str,
        extra: Optional[dict] = None,
        headers: Optional[dict] = None,
    ):
        super().__init__(status_code=status_code, detail=detail, headers=headers)
        self.extra = extra or {}


class ValidationException(APIException):
    def __init__(self, detail: str = "Invalid input data"):
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


class PayloadTooLargeException(APIException):
    def __init__(self):
        super().__init__(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail="Request payload too large",
        )


class InvalidCredentialsException(APIException):
    def __init__(self, attempts_left: int):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid username or password",
            extra={"attemptsLeft": attempts_left},
        )


class RateLimitException(APIException):
    def __init__(
        self,
        detail: str = "Too many requests. Please try again later.",
        retry_after: Optional[int] = None,
    ):
        headers = {"Retry-After": str(retry_after)} if retry_after is not None else None
        super().__init__(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail=detail,
            headers=headers,
        )


class ConflictException(APIException):
    def __init__(self, detail: str = "Resource already exists"):
        super().__init__(status_code=status.HTTP_409_CONFLICT, detail=detail)


class ConfigException(APIException):
    """Required environment configuration is missing. Never names the setting."""
    def __init__(self):
        super().__init__(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Server configuration error",
        )


class DatabaseUnavailableException(APIException):
    """The database did not answer within the configured timeout. Safe to retry."""
    def __init__(self):
        super().__init__(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Service temporarily unavailable. Please retry.",
        )


class UnknownException(APIException):
    def __init__(self):
        super().__init__(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error",
        )
