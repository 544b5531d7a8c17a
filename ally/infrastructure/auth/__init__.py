from .di import AuthInfraProvider

__all__ = ["AuthInfraProvider"]
