"""Shared port base."""

from typing import Protocol


class Port(Protocol):
    """Marker base for all ports.

    Ports are implemented by adapters in infrastructure/.
    """
