"""
Block Cipher Implementation

This module provides the Skip32 block cipher: a 24-round Feistel network
over a 32-bit block, derived from Skipjack. It is meant for reversibly
obfuscating 32-bit integers such as database identifiers, not for
protecting data.

Adapted from the public domain skip32.c by Greg Rose (QUALCOMM Australia).
"""

import logging
from typing import Optional, Union

import numpy as np

from ..exceptions import InsufficientLengthError, NullInputError, ValueOutOfRangeError
from ..kdf_km.key_management import KEY_ENV_VAR, load_key_from_env
from ..key_schedule.key_material import (
    KEY_SIZE,
    NUM_ROUNDS,
    BytesLike,
    KeyFormat,
    Skip32Key,
    expand_key,
)
from ..sbox.ftable import F_TABLE

logger = logging.getLogger(__name__)

BLOCK_SIZE = 4  # bytes (32 bits)

INT32_MIN = -(1 << 31)
INT32_MAX = (1 << 31) - 1
UINT32_MAX = (1 << 32) - 1

# Half-blocks are always read and written big-endian
_HALF_BLOCK_DTYPE = np.dtype('>u2')


def round_function(round_key: np.ndarray, w: np.uint16) -> np.uint16:
    """
    Apply the G permutation to one 16-bit half-block.

    Four chained F-table lookups mix the half-block with the four key
    bytes of the current round. All intermediates are uint8.

    Args:
        round_key: The four key bytes for this round (see round_key_bytes)
        w: The half-block to transform

    Returns:
        The transformed half-block
    """
    w = np.uint16(w)
    g1 = np.uint8(w >> 8)
    g2 = np.uint8(w & 0xFF)

    g3 = F_TABLE[g2 ^ round_key[0]] ^ g1
    g4 = F_TABLE[g3 ^ round_key[1]] ^ g2
    g5 = F_TABLE[g4 ^ round_key[2]] ^ g3
    g6 = F_TABLE[g5 ^ round_key[3]] ^ g4

    return (np.uint16(g5) << np.uint16(8)) | np.uint16(g6)


def feistel(round_keys: np.ndarray, block: bytes, encrypt: bool) -> bytes:
    """
    Run the 24 Feistel rounds over a 4-byte block.

    Decryption is the same network with the round index running from 23
    down to 0. The halves are swapped on output.

    Args:
        round_keys: The (24, 4) schedule produced by expand_key
        block: Exactly 4 bytes
        encrypt: True to encrypt, False to decrypt

    Returns:
        The transformed 4-byte block
    """
    wl, wr = np.frombuffer(block, dtype=_HALF_BLOCK_DTYPE)

    if encrypt:
        k, kstep = 0, 1
    else:
        k, kstep = NUM_ROUNDS - 1, -1

    # 24 rounds, two per iteration
    for _ in range(NUM_ROUNDS // 2):
        wr ^= round_function(round_keys[k], wl) ^ np.uint16(k)
        k += kstep
        wl ^= round_function(round_keys[k], wr) ^ np.uint16(k)
        k += kstep

    return np.array([wr, wl], dtype=_HALF_BLOCK_DTYPE).tobytes()


def _block_at(block: Optional[BytesLike], offset: int) -> bytes:
    if block is None:
        raise NullInputError("Block must not be None")
    if not isinstance(block, (bytes, bytearray, memoryview)):
        raise TypeError(f"Block must be a bytes-like object, not {type(block).__name__}")
    if offset < 0 or offset + BLOCK_SIZE > len(block):
        raise InsufficientLengthError(
            f"Offset must be between 0 and len(block) - {BLOCK_SIZE}")
    return bytes(block[offset:offset + BLOCK_SIZE])


def _int_to_block(value: int, signed: bool) -> bytes:
    if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
        raise TypeError(f"Value must be an integer, not {type(value).__name__}")
    value = int(value)
    low, high = (INT32_MIN, INT32_MAX) if signed else (0, UINT32_MAX)
    if not low <= value <= high:
        raise ValueOutOfRangeError(f"Value must be between {low} and {high}")
    return value.to_bytes(BLOCK_SIZE, byteorder='big', signed=signed)


class Skip32Cipher:
    """
    Skip32 block cipher bound to a single 80-bit key.

    Instances hold only read-only state and may be shared between threads.
    """

    KEY_SIZE = KEY_SIZE
    BLOCK_SIZE = BLOCK_SIZE
    NUM_ROUNDS = NUM_ROUNDS

    def __init__(self, key: Union[Skip32Key, BytesLike]):
        """
        Initialize the cipher with a key.

        Args:
            key: A Skip32Key, or the raw 10 key bytes
        """
        if not isinstance(key, Skip32Key):
            key = Skip32Key.from_bytes(key)
        self.key = key
        self.round_keys = expand_key(key)
        logger.debug("Initialized Skip32 cipher (%d rounds)", self.NUM_ROUNDS)

    @classmethod
    def from_string(cls, key: str,
                    key_format: Union[KeyFormat, str] = KeyFormat.HEX) -> 'Skip32Cipher':
        """
        Create a cipher from a hex or base64 encoded key.

        Args:
            key: The encoded key
            key_format: KeyFormat member or name (default: hex)

        Returns:
            A cipher using the decoded key
        """
        return cls(Skip32Key.parse(key, key_format))

    @classmethod
    def from_env(cls, variable: str = KEY_ENV_VAR,
                 key_format: Optional[Union[KeyFormat, str]] = None) -> 'Skip32Cipher':
        """Create a cipher from a key held in an environment variable."""
        return cls(load_key_from_env(variable, key_format))

    def encrypt_block(self, block: BytesLike, offset: int = 0) -> bytes:
        """
        Encrypt the 4 bytes of block starting at offset.

        Args:
            block: Buffer holding the plaintext block
            offset: Index of the first byte to encrypt

        Returns:
            The 4-byte ciphertext block

        Raises:
            NullInputError: If block is None
            InsufficientLengthError: If fewer than 4 bytes follow offset
        """
        return feistel(self.round_keys, _block_at(block, offset), encrypt=True)

    def decrypt_block(self, block: BytesLike, offset: int = 0) -> bytes:
        """
        Decrypt the 4 bytes of block starting at offset.

        Args:
            block: Buffer holding the ciphertext block
            offset: Index of the first byte to decrypt

        Returns:
            The 4-byte plaintext block

        Raises:
            NullInputError: If block is None
            InsufficientLengthError: If fewer than 4 bytes follow offset
        """
        return feistel(self.round_keys, _block_at(block, offset), encrypt=False)

    def encrypt_int(self, value: int, signed: bool = True) -> int:
        """
        Encrypt a 32-bit integer.

        The integer is encoded big-endian before encryption so results do
        not depend on the host byte order.

        Args:
            value: The integer to encrypt
            signed: Treat value and result as signed (default) or unsigned

        Returns:
            The encrypted integer, in the same signedness as the input

        Raises:
            ValueOutOfRangeError: If value does not fit in 32 bits
        """
        result = self.encrypt_block(_int_to_block(value, signed))
        return int.from_bytes(result, byteorder='big', signed=signed)

    def decrypt_int(self, value: int, signed: bool = True) -> int:
        """
        Decrypt a 32-bit integer produced by encrypt_int.

        Args:
            value: The integer to decrypt
            signed: Treat value and result as signed (default) or unsigned

        Returns:
            The decrypted integer

        Raises:
            ValueOutOfRangeError: If value does not fit in 32 bits
        """
        result = self.decrypt_block(_int_to_block(value, signed))
        return int.from_bytes(result, byteorder='big', signed=signed)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.key!r})"


def encrypt_block(block: BytesLike, key: Union[Skip32Key, BytesLike]) -> bytes:
    """
    Convenience function to encrypt a single block.

    Args:
        block: The 4-byte plaintext block
        key: A Skip32Key or the raw 10 key bytes

    Returns:
        The encrypted ciphertext block
    """
    return Skip32Cipher(key).encrypt_block(block)


def decrypt_block(block: BytesLike, key: Union[Skip32Key, BytesLike]) -> bytes:
    """
    Convenience function to decrypt a single block.

    Args:
        block: The 4-byte ciphertext block
        key: A Skip32Key or the raw 10 key bytes

    Returns:
        The decrypted plaintext block
    """
    return Skip32Cipher(key).decrypt_block(block)


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)

    cipher = Skip32Cipher.from_string("1234567890abcdef0123", KeyFormat.HEX)
    count = 100000

    for value0 in range(count):
        value1 = cipher.encrypt_int(value0)
        value2 = cipher.decrypt_int(value1)

        if value0 % 10000 == 0:
            logger.info("%d -> %d -> %d", value0, value1, value2)

        # Encryption must be reversible and never the identity
        assert value0 == value2, f"Decrypt failed for {value0}"
        assert value0 != value1, f"Encrypt returned its input for {value0}"

    print(f"Skip32 self-test passed for {count} values!")
