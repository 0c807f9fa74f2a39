"""
Key Derivation Function and Key Loading Package

This package derives Skip32 keys from passwords with Argon2id and loads
keys from the environment.
"""

from .key_management import derive_key, generate_salt, load_key_from_env, KDF_DEFAULT_PARAMS

__all__ = ['derive_key', 'generate_salt', 'load_key_from_env', 'KDF_DEFAULT_PARAMS']
