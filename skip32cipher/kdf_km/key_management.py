"""
Key Derivation and Key Loading

This module derives Skip32 keys from passwords with Argon2id and loads
keys from the process environment.
"""

import os
import logging
import secrets
from typing import Optional, Union

import argon2
from argon2.low_level import Type

from ..exceptions import InvalidKeyError
from ..key_schedule.key_material import KEY_SIZE, KeyFormat, Skip32Key

logger = logging.getLogger(__name__)

# Default parameters for Argon2id
KDF_DEFAULT_PARAMS = {
    'time_cost': 4,       # Number of iterations
    'memory_cost': 65536, # 64 MB
    'parallelism': 4,     # Number of threads
    'hash_len': KEY_SIZE, # Output size in bytes
    'salt_len': 16        # Salt size in bytes
}

KEY_ENV_VAR = 'SKIP32_KEY'
KEY_FORMAT_ENV_VAR = 'SKIP32_KEY_FORMAT'


def generate_salt(length: int = KDF_DEFAULT_PARAMS['salt_len']) -> bytes:
    """
    Generate a cryptographically secure random salt.

    Args:
        length: Length of the salt in bytes

    Returns:
        Random salt as bytes
    """
    return secrets.token_bytes(length)


def derive_key(password: Union[str, bytes],
               salt: bytes,
               time_cost: int = KDF_DEFAULT_PARAMS['time_cost'],
               memory_cost: int = KDF_DEFAULT_PARAMS['memory_cost'],
               parallelism: int = KDF_DEFAULT_PARAMS['parallelism']) -> Skip32Key:
    """
    Derive a Skip32 key from a password using Argon2id.

    The same password, salt and parameters always give the same key.

    Args:
        password: Password to derive the key from
        salt: Salt value (at least 8 bytes)
        time_cost: Number of iterations
        memory_cost: Memory usage in KiB
        parallelism: Degree of parallelism

    Returns:
        The derived 10-byte key

    Raises:
        InvalidKeyError: If the password is None or empty
    """
    if not password:
        raise InvalidKeyError("Password must not be None or empty")
    if isinstance(password, str):
        password = password.encode('utf-8')

    derived = argon2.low_level.hash_secret_raw(
        secret=password,
        salt=salt,
        time_cost=time_cost,
        memory_cost=memory_cost,
        parallelism=parallelism,
        hash_len=KEY_SIZE,
        type=Type.ID  # Argon2id variant
    )

    return Skip32Key(derived)


def load_key_from_env(variable: str = KEY_ENV_VAR,
                      key_format: Optional[Union[KeyFormat, str]] = None) -> Skip32Key:
    """
    Load a Skip32 key from an environment variable.

    The format is taken from key_format if given, otherwise from the
    SKIP32_KEY_FORMAT variable, otherwise hex.

    Args:
        variable: Name of the variable holding the key string
        key_format: Format of the key string ('hex' or 'base64')

    Returns:
        The validated key

    Raises:
        InvalidKeyError: If the variable is unset or empty
        UnsupportedKeyFormatError: If the format is not recognised
    """
    value = os.environ.get(variable)
    if not value:
        raise InvalidKeyError(f"Key not found in environment variable {variable}")

    if key_format is None:
        key_format = os.environ.get(KEY_FORMAT_ENV_VAR, KeyFormat.HEX.value)
    key_format = KeyFormat.coerce(key_format)
    if key_format is KeyFormat.RAW:
        # Environment values are text; raw bytes cannot be carried
        raise InvalidKeyError("Environment keys must be hex or base64 encoded")

    logger.info("Loading Skip32 key from %s (%s)", variable, key_format.value)
    return Skip32Key.parse(value.strip(), key_format)
