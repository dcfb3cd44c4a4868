"""Exceptions."""


class ConfigurationError(RuntimeError):
    """The authenticator or its Flask integration is misconfigured."""


class InvalidArgument(ValueError):
    """An operation was called with an argument of the wrong shape."""
