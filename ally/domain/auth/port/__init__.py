"""Auth domain ports."""

from .driver import AuthDriver
from .driver_registry import DriverRegistry
from .oauth2 import OAuth2Scheme, ProviderRequestError

__all__ = [
    "AuthDriver",
    "DriverRegistry",
    "OAuth2Scheme",
    "ProviderRequestError",
]
