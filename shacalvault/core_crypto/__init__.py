# Core Cryptography Module
"""
Core cryptographic implementations including:
- SHACAL-2 block cipher (SHA-256 compression function as a cipher)
"""

from .shacal2 import SHACAL2, permute, inverse_permute, BLOCK_SIZE, KEY_SIZE

__all__ = [
    'SHACAL2',
    'permute',
    'inverse_permute',
    'BLOCK_SIZE',
    'KEY_SIZE',
]
