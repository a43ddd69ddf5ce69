"""
HashBack Exceptions
===================
Exception classes raised inside the library.

The parser converts decoding failures into a NotValid result, so these
only cross the public boundary from the encoding helpers and the generator.
"""


class HashBackError(Exception):
    """Base exception for all HashBack errors."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class DecodeError(HashBackError):
    """Raised when a header cannot be base64 decoded."""
    pass


class EncodingError(HashBackError):
    """Raised when header text is not valid ASCII/UTF-8."""
    pass


class GeneratorConfigError(HashBackError):
    """Raised when the generator is missing a Host or Verify URL strategy."""
    pass
