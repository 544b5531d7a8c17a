"""Custom Dishka scopes for ally."""

from dishka import BaseScope, new_scope


class Scope(BaseScope):  # type: ignore[misc]  # BaseScope is designed to be subclassed
    """ally dependency injection scopes.

    Hierarchy: APP -> REQUEST

    - APP: Application lifetime (config, HTTP client, driver registry)
    - REQUEST: One incoming authentication request in the host
    """

    APP = new_scope("APP")
    REQUEST = new_scope("REQUEST")
