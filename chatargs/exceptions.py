"""
Custom exceptions for chatargs, providing a structured error hierarchy.

Argument resolution itself never raises: misses resolve to None. These
exceptions cover the configuration surface around it.
"""


class ChatArgsError(Exception):
    """Base exception for all custom exceptions in this package."""

    pass


class ConfigurationError(ChatArgsError):
    """Raised for errors in configuration, like an unusable command prefix."""

    pass
