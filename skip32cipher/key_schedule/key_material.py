"""
Skip32 Key Material and Key Schedule

This module validates the 80-bit Skip32 key from its accepted input
formats and expands it into the per-round key bytes consumed by the
round function.
"""

import base64
import binascii
import enum
import logging
import secrets
from typing import Optional, Union

import numpy as np

from ..exceptions import (
    InvalidKeyError,
    InvalidKeyLengthError,
    MalformedEncodingError,
    UnsupportedKeyFormatError,
)

logger = logging.getLogger(__name__)

KEY_SIZE = 10  # bytes (80 bits)
NUM_ROUNDS = 24
ROUND_KEY_BYTES = 4

BytesLike = Union[bytes, bytearray, memoryview]


class KeyFormat(enum.Enum):
    """Encodings a Skip32 key may be supplied in."""
    RAW = 'raw'
    HEX = 'hex'
    BASE64 = 'base64'

    @classmethod
    def coerce(cls, key_format: Union['KeyFormat', str]) -> 'KeyFormat':
        """
        Resolve a format selector given either as a member or by name.

        Args:
            key_format: A KeyFormat member or its name ('raw', 'hex', 'base64')

        Returns:
            The matching KeyFormat member

        Raises:
            UnsupportedKeyFormatError: If the selector is not recognised
        """
        if isinstance(key_format, cls):
            return key_format
        if isinstance(key_format, str):
            try:
                return cls(key_format.strip().lower())
            except ValueError:
                pass
        raise UnsupportedKeyFormatError(f"Invalid key format: {key_format!r}")


class Skip32Key:
    """
    An immutable, validated 10-byte Skip32 key.

    Build one with from_bytes, from_hex, from_base64 or parse. The key
    bytes are never shown in repr().
    """

    __slots__ = ('_material',)

    def __init__(self, material: BytesLike):
        if material is None:
            raise InvalidKeyError("Key must not be None")
        if not isinstance(material, (bytes, bytearray, memoryview)):
            raise InvalidKeyError(
                f"Key must be a bytes-like object, not {type(material).__name__}")
        material = bytes(material)
        if len(material) != KEY_SIZE:
            raise InvalidKeyLengthError(f"Key must be {KEY_SIZE} bytes")
        object.__setattr__(self, '_material', material)

    def __setattr__(self, name, value):
        raise AttributeError("Skip32Key is immutable")

    def __delattr__(self, name):
        raise AttributeError("Skip32Key is immutable")

    @classmethod
    def from_bytes(cls, material: BytesLike) -> 'Skip32Key':
        return cls(material)

    @classmethod
    def from_hex(cls, key: str) -> 'Skip32Key':
        """
        Build a key from a 20-character hexadecimal string.

        Args:
            key: Two hex digits per byte, case-insensitive, no separators

        Returns:
            The validated key

        Raises:
            InvalidKeyError: If the string is None or empty
            InvalidKeyLengthError: If the string is not 20 characters
            MalformedEncodingError: If any character is not a hex digit
        """
        if not key:
            raise InvalidKeyError("Key must not be None or empty")
        if len(key) != KEY_SIZE * 2:
            raise InvalidKeyLengthError(
                f"Hexadecimal key strings must be {KEY_SIZE * 2} characters")
        try:
            material = binascii.unhexlify(key)
        except (binascii.Error, ValueError) as e:
            raise MalformedEncodingError(f"Key is not valid hexadecimal: {e}") from e
        return cls(material)

    @classmethod
    def from_base64(cls, key: str) -> 'Skip32Key':
        """
        Build a key from a standard-alphabet base64 string.

        Args:
            key: Base64 text that decodes to exactly 10 bytes

        Returns:
            The validated key

        Raises:
            InvalidKeyError: If the string is None or empty
            MalformedEncodingError: If the string is not valid base64
            InvalidKeyLengthError: If the decoded key is not 10 bytes
        """
        if not key:
            raise InvalidKeyError("Key must not be None or empty")
        try:
            material = base64.b64decode(key, validate=True)
        except (binascii.Error, ValueError) as e:
            raise MalformedEncodingError(f"Key is not valid base64: {e}") from e
        if len(material) != KEY_SIZE:
            raise InvalidKeyLengthError(f"Key must resolve to {KEY_SIZE} bytes")
        return cls(material)

    @classmethod
    def parse(cls, key: Union[str, BytesLike, None],
              key_format: Union[KeyFormat, str] = KeyFormat.HEX) -> 'Skip32Key':
        """
        Build a key from any supported format.

        Args:
            key: The key in the representation named by key_format
            key_format: KeyFormat member or name (default: hex)

        Returns:
            The validated key
        """
        key_format = KeyFormat.coerce(key_format)
        logger.debug("Parsing Skip32 key from %s input", key_format.value)
        if key_format is KeyFormat.RAW:
            return cls.from_bytes(key)
        if key_format is KeyFormat.HEX:
            return cls.from_hex(key)
        return cls.from_base64(key)

    def to_bytes(self) -> bytes:
        return self._material

    def hex(self) -> str:
        return self._material.hex()

    def base64(self) -> str:
        return base64.b64encode(self._material).decode('ascii')

    def __bytes__(self) -> bytes:
        return self._material

    def __len__(self) -> int:
        return KEY_SIZE

    def __eq__(self, other) -> bool:
        if isinstance(other, Skip32Key):
            return secrets.compare_digest(self._material, other._material)
        return NotImplemented

    def __hash__(self) -> int:
        return hash((Skip32Key, self._material))

    def __repr__(self) -> str:
        return "Skip32Key(<redacted>)"


def generate_key() -> Skip32Key:
    """
    Generate a cryptographically secure random Skip32 key.

    Returns:
        A new random key
    """
    return Skip32Key(secrets.token_bytes(KEY_SIZE))


def round_key_bytes(key: Skip32Key, k: int) -> np.ndarray:
    """
    Select the four key bytes used by the round function in round k.

    Byte j is key[(4k + j) mod 10]. Python's % is non-negative for a
    positive modulus, so any integer k selects a valid byte.

    Args:
        key: The cipher key
        k: Round index

    Returns:
        A uint8 array of four key bytes
    """
    material = np.frombuffer(key.to_bytes(), dtype=np.uint8)
    indices = [(ROUND_KEY_BYTES * k + j) % KEY_SIZE for j in range(ROUND_KEY_BYTES)]
    return material[indices]


def expand_key(key: Skip32Key, num_rounds: Optional[int] = None) -> np.ndarray:
    """
    Expand a key into the round key schedule.

    Args:
        key: The cipher key
        num_rounds: Number of rounds to schedule (default: 24)

    Returns:
        A read-only (num_rounds, 4) uint8 array whose row k holds the
        key bytes for round k
    """
    if num_rounds is None:
        num_rounds = NUM_ROUNDS

    material = np.frombuffer(key.to_bytes(), dtype=np.uint8)
    indices = (ROUND_KEY_BYTES * np.arange(num_rounds)[:, np.newaxis]
               + np.arange(ROUND_KEY_BYTES)) % KEY_SIZE
    schedule = material[indices]
    schedule.flags.writeable = False
    return schedule
