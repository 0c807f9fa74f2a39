"""
Substitution Table Package

This package holds the fixed F-table used by the Skip32 round function.
"""

from .ftable import F_TABLE, SBOX_SIZE, build_ftable

__all__ = ['F_TABLE', 'SBOX_SIZE', 'build_ftable']
