"""
errors.py

Exceptions raised while resolving and decoding a stake overrides source.
Every reload-attempt failure derives from ``OverridesError`` so the updater
can log and swallow them while letting anything else end the thread.
"""


class OverridesError(Exception):
    """Base class for failures of a single reload attempt."""


class ConfigurationError(OverridesError):
    """The locator is neither an existing path nor a usable URL."""


class ReadError(OverridesError):
    """The source could not be read."""


class TransportError(ReadError):
    """A remote fetch failed (connection, timeout, bad status)."""


class DecodeError(ReadError):
    """The document could not be decoded into stake overrides."""
