"""Error hierarchy for ally.

Error layers:
- AllyError: Base class for all ally errors
- AuthError: Closed set of failures raised by auth drivers

Callers can match exhaustively on the AuthError subclasses:
ConfigurationError, InvalidStateError, TokenExchangeError (and its
RedirectDeniedError refinement).
"""

from typing import Any


class AllyError(Exception):
    """Base class for all ally errors."""

    def __init__(self, message: str, code: str | None = None) -> None:
        self.message = message
        self.code = code or self.__class__.__name__
        super().__init__(message)


class AuthError(AllyError):
    """Base class for errors surfaced by auth drivers."""


class ConfigurationError(AuthError):
    """Driver configuration is missing required values."""

    def __init__(self, message: str) -> None:
        super().__init__(message, code="E_MISSING_CONFIG")


class InvalidStateError(AuthError):
    """The state returned by the provider does not match the one we issued."""

    def __init__(self, message: str = "Oauth state mis-match") -> None:
        super().__init__(message, code="E_OAUTH_STATE_MISMATCH")


class TokenExchangeError(AuthError):
    """The provider rejected a request or could not be reached.

    Attributes:
        status_code: HTTP status of the failed response, None when no
            response was received.
        error_detail: Parsed provider error body, if any.
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        error_detail: Any = None,
    ) -> None:
        super().__init__(message, code="E_OAUTH_TOKEN_EXCHANGE")
        self.status_code = status_code
        self.error_detail = error_detail


class RedirectDeniedError(TokenExchangeError):
    """The provider redirected back without an authorization code."""

    def __init__(self, message: str) -> None:
        super().__init__(message, status_code=None, error_detail=message)
