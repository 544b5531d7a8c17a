"""Value objects for the auth domain."""

import logging
from dataclasses import dataclass, field
from typing import Any

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AccessTokenResponse:
    """Tokens returned by a provider's token endpoint."""

    access_token: str
    refresh_token: str | None = None
    raw: dict[str, Any] = field(default_factory=dict)  # Full token payload

    @property
    def expires_in(self) -> Any:
        """Raw expiry as sent by the provider (often a string)."""
        return self.raw.get("expires_in")

    @property
    def expires(self) -> int | None:
        """Token lifetime in seconds, or None if absent or not an integer."""
        value = self.expires_in
        if value is None or value == "":
            return None
        try:
            return int(value)
        except (TypeError, ValueError):
            logger.warning("Ignoring non-integer expires_in from provider: %r", value)
            return None


@dataclass(frozen=True)
class NormalizedUser:
    """Provider-independent view of an authenticated user."""

    id: str
    name: str | None
    email: str | None
    nickname: str | None
    country: str | None
    avatar_url: str | None
    access_token: str
    refresh_token: str | None
    expires: int | None
    original: dict[str, Any]  # Raw profile for provider-specific fields

    def __post_init__(self) -> None:
        if not self.access_token:
            raise ValueError("NormalizedUser requires a non-empty access_token")

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "nickname": self.nickname,
            "country": self.country,
            "avatar": self.avatar_url,
            "token": {
                "accessToken": self.access_token,
                "refreshToken": self.refresh_token,
                "expires": self.expires,
            },
            "original": self.original,
        }
