# File Encryption Module
"""
File encryption implementations including:
- PBKDF2-HMAC-SHA256 key derivation (10,000 iterations)
- SHACAL-2 in CBC mode with PKCS#7 padding
- salt || iv || ciphertext framing
- File hashing utility (SHA-1 by default)

Limitations:
- Whole file is held in memory
- No integrity protection (no MAC, no AEAD)
"""

# Lazy imports to avoid RuntimeWarning when running module directly
def __getattr__(name):
    """Lazy import to avoid circular import issues when running module directly."""
    if name in ('compute_file_hash', 'DEFAULT_ALGORITHM'):
        from . import file_hash
        return getattr(file_hash, name)
    from . import file_crypto
    return getattr(file_crypto, name)

__all__ = [
    'FileEncryptor',
    'FileHeader',
    'OperationResult',
    'encrypt_file',
    'decrypt_file',
    'encrypt_bytes',
    'decrypt_bytes',
    'cbc_encrypt',
    'cbc_decrypt',
    'derive_key',
    'get_file_info',
    'compute_file_hash',
    'PBKDF2_ITERATIONS',
    'HEADER_SIZE',
    'SALT_SIZE',
    'IV_SIZE',
    'KEY_SIZE',
]
