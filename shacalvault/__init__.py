# SHACAL Vault
"""
Password-based file encryption with SHACAL-2 in CBC mode.

Subpackages:
- core_crypto: SHACAL-2 block cipher
- files: key derivation, CBC engine, file framing, file hashing
"""

__version__ = "1.0.0"
