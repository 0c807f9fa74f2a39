"""
Cipher Core Package

This package implements the Skip32 round function, the 24-round Feistel
network and the Skip32Cipher facade for blocks and 32-bit integers.
"""

from .block_cipher import (
    BLOCK_SIZE,
    Skip32Cipher,
    decrypt_block,
    encrypt_block,
    feistel,
    round_function,
)

__all__ = ['BLOCK_SIZE', 'Skip32Cipher', 'decrypt_block', 'encrypt_block', 'feistel', 'round_function']
