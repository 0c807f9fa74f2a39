"""
Skip32 Exceptions

All errors raised by the library derive from Skip32Error, which is a
ValueError so callers that already guard cipher calls with ValueError keep
working.
"""


class Skip32Error(ValueError):
    """Base class for every error raised by skip32cipher."""


class InvalidKeyError(Skip32Error):
    """Key material is missing, empty or otherwise unusable."""


class InvalidKeyLengthError(InvalidKeyError):
    """Key material has the wrong byte or character count."""


class MalformedEncodingError(InvalidKeyError):
    """Key string is not valid in the encoding it claims to use."""


class UnsupportedKeyFormatError(InvalidKeyError):
    """The key format selector is not recognised."""


class NullInputError(Skip32Error):
    """No block buffer was supplied."""


class InsufficientLengthError(Skip32Error):
    """The block buffer is too short for a 4-byte block at the given offset."""


class ValueOutOfRangeError(Skip32Error):
    """An integer does not fit in the 32-bit block."""
