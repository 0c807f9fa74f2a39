"""
skip32cipher - Skip32 Block Cipher Library

This library implements Skip32, a 32-bit block cipher derived from
Skipjack, for turning sequential 32-bit integers into opaque,
reversible identifiers under an 80-bit key.

Key Features:
- Byte-for-byte compatible with skip32.c and its ports
- Block (4 byte) and signed/unsigned 32-bit integer interfaces
- Keys from raw bytes, hex or base64 strings, or the environment
- Argon2id password-based key derivation
- Thread-safe, read-only cipher instances

Skip32 is an obfuscation-grade cipher with a small key and block; it is
not a substitute for authenticated encryption.
"""

from .cipher_core import Skip32Cipher, decrypt_block, encrypt_block
from .exceptions import (
    InsufficientLengthError,
    InvalidKeyError,
    InvalidKeyLengthError,
    MalformedEncodingError,
    NullInputError,
    Skip32Error,
    UnsupportedKeyFormatError,
    ValueOutOfRangeError,
)
from .kdf_km import derive_key, generate_salt, load_key_from_env
from .key_schedule import KeyFormat, Skip32Key, generate_key

__version__ = '0.1.0'
__author__ = 'skip32cipher Team'

__all__ = [
    'Skip32Cipher', 'Skip32Key', 'KeyFormat',
    'encrypt_block', 'decrypt_block',
    'generate_key', 'derive_key', 'generate_salt', 'load_key_from_env',
    'Skip32Error', 'InvalidKeyError', 'InvalidKeyLengthError', 'MalformedEncodingError',
    'UnsupportedKeyFormatError', 'NullInputError', 'InsufficientLengthError',
    'ValueOutOfRangeError',
]
