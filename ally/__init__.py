"""ally - OAuth2 drivers for social login."""

__version__ = "0.1.0"
