"""
Key Schedule Package

This package validates Skip32 key material and expands it into the
per-round key bytes used by the round function.
"""

from .key_material import (
    KEY_SIZE,
    KeyFormat,
    Skip32Key,
    expand_key,
    generate_key,
    round_key_bytes,
)

__all__ = ['KEY_SIZE', 'KeyFormat', 'Skip32Key', 'expand_key', 'generate_key', 'round_key_bytes']
