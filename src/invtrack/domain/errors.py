from __future__ import annotations


class AppError(Exception):
    """Base app error."""


class ValidationError(AppError):
    pass


class AuthError(AppError):
    pass


class AuthorizationError(AppError):
    pass


class NetworkError(AppError):
    pass


class RequestError(AppError):
    """Non-2xx response. `server_message` is the payload's `error` field, if any."""

    def __init__(self, message: str, status_code: int | None = None, server_message: str | None = None):
        super().__init__(message)
        self.status_code = status_code
        self.server_message = server_message


def error_message(exc: BaseException, fallback: str) -> str:
    """Text shown to the user: server-provided message when there is one."""
    if isinstance(exc, RequestError):
        return exc.server_message or fallback
    if isinstance(exc, (ValidationError, AuthError, AuthorizationError, NetworkError)):
        return str(exc) or fallback
    return fallback
