"""Auth domain models."""

from .value import AccessTokenResponse, NormalizedUser

__all__ = ["AccessTokenResponse", "NormalizedUser"]
