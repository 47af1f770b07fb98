"""Exceptions raised by the formatters."""
from typing import Optional


class FormatterError(Exception):
    """Base class for formatter errors."""


class AddressFormattingError(FormatterError):
    """
    An address could not be rendered with the active layout template.

    The underlying failure is kept both as ``cause`` and as ``__cause__``.
    """

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.cause = cause
