"""Unified exception hierarchy for g11n.

All library exceptions inherit from G11nException, enabling unified
error handling across modules.

Categories:
- ConfigurationException: Invalid message record declarations
- LocaleException: Locale registration, lookup and loading failures
"""

from __future__ import annotations


class G11nException(Exception):
    """Base exception for all g11n errors.

    Carries an optional error code and context dict for structured error data.
    Catch G11nException to handle all library errors, or catch specific
    subclasses for targeted handling.

    Args:
        message: Human-readable error description.
        code: Machine-readable error code (e.g. "UNKNOWN_LOCALE").
        context: Arbitrary key-value pairs for error context and debugging.
    """

    def __init__(
        self,
        message: str,
        code: str | None = None,
        context: dict | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.context: dict = context if context is not None else {}


class ConfigurationException(G11nException):
    """A message record is declared in a way the factory cannot wire."""


class MessageSignatureException(ConfigurationException):
    """A message function field does not declare exactly one result."""


class UnsupportedFieldException(ConfigurationException):
    """A record field is neither a string, a message function nor a record."""


class LocaleException(G11nException):
    """Locale registration, lookup and loading errors."""


class UnknownLocaleException(LocaleException):
    """The requested locale was never registered with the factory."""


class UnknownFormatException(LocaleException):
    """No loader is registered for the locale's file format."""


class LocaleLoadException(LocaleException):
    """A loader failed to read or parse a locale file."""
