"""
File Encryption Module

Implements password-based file encryption with:
- PBKDF2-HMAC-SHA256 key derivation (10,000 iterations, 32-byte key)
- SHACAL-2 block cipher (256-bit block, 256-bit key) in CBC mode
- PKCS#7 padding to the 32-byte block
- Fresh random salt and IV for every encryption

The whole file is read into memory, transformed and written back in one
pass. There is no authentication tag: a wrong password and a corrupted file
both surface as a padding failure, and some corruptions decrypt to garbage
without any error at all.

File Format:
    [salt (16) | iv (32) | ciphertext (n * 32)]

There is no magic number or version field, so any file of the right shape
is accepted for decryption.
"""

import logging
import os
import secrets
import tempfile
from dataclasses import dataclass
from typing import Callable, Dict, Optional, Union

from cryptography.hazmat.backends import default_backend
from cryptography.hazmat.primitives import hashes, padding
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC

from .. import config
from ..core_crypto.shacal2 import SHACAL2, BLOCK_SIZE
from ..errors import (
    CoreError,
    EmptyCiphertextError,
    EmptyInputError,
    EmptyPasswordError,
    InputLengthError,
    IoError,
    PaddingError,
    TruncatedFileError,
)

logger = logging.getLogger(__name__)


# Constants
SALT_SIZE = 16              # 128-bit salt
IV_SIZE = BLOCK_SIZE        # IV is one cipher block
KEY_SIZE = 32               # 256-bit keys
HEADER_SIZE = SALT_SIZE + IV_SIZE  # Total: 48 bytes

# PBKDF2 configuration
PBKDF2_ITERATIONS = 10_000
PBKDF2_ALGORITHM = hashes.SHA256()

Password = Union[str, bytes]
RandomSource = Callable[[int], bytes]


@dataclass
class FileHeader:
    """Plaintext header stored in front of the ciphertext."""
    salt: bytes
    iv: bytes

    def to_bytes(self) -> bytes:
        """Serialize header to bytes."""
        return self.salt + self.iv

    @classmethod
    def from_bytes(cls, data: bytes) -> 'FileHeader':
        """
        Deserialize header from the start of an artifact.

        Raises:
            TruncatedFileError: If fewer than HEADER_SIZE bytes are given
        """
        if len(data) < HEADER_SIZE:
            raise TruncatedFileError(
                f"file is too small to decrypt: {len(data)} bytes, "
                f"header alone needs {HEADER_SIZE}"
            )
        return cls(salt=data[:SALT_SIZE], iv=data[SALT_SIZE:HEADER_SIZE])


@dataclass
class OperationResult:
    """Outcome of encrypt_file() / decrypt_file()."""
    success: bool
    message: str
    error: Optional[CoreError] = None
    input_size: int = 0
    output_size: int = 0

    def __bool__(self) -> bool:
        return self.success


def _encode_password(password: Password) -> bytes:
    # surrogateescape gives back the raw bytes of non-UTF-8 command line arguments
    if isinstance(password, str):
        return password.encode('utf-8', 'surrogateescape')
    return bytes(password)


def _resolve_iterations(iterations: Optional[int]) -> int:
    return iterations if iterations is not None else config.pbkdf2_iterations()


def _password_bytes(password: Password) -> bytes:
    password = _encode_password(password)
    if not password:
        raise EmptyPasswordError("password must not be empty")
    return password


def derive_key(password: Password, salt: bytes,
               iterations: Optional[int] = None) -> bytes:
    """
    Derive the cipher key from a password using PBKDF2.

    Deliberately slow: the cost grows linearly with `iterations`.

    Args:
        password: User password (str is encoded as UTF-8)
        salt: Random salt (16 bytes)
        iterations: Number of iterations (default from configuration, 10,000)

    Returns:
        32-byte derived key
    """
    kdf = PBKDF2HMAC(
        algorithm=PBKDF2_ALGORITHM,
        length=KEY_SIZE,
        salt=salt,
        iterations=_resolve_iterations(iterations),
        backend=default_backend()
    )
    return kdf.derive(_encode_password(password))


def _xor_block(left: bytes, right: bytes) -> bytes:
    value = int.from_bytes(left, 'big') ^ int.from_bytes(right, 'big')
    return value.to_bytes(BLOCK_SIZE, 'big')


def cbc_encrypt(plaintext: bytes, key: bytes, iv: bytes) -> bytes:
    """
    Encrypt a buffer with SHACAL-2 in CBC mode.

    PKCS#7 padding always adds between 1 and 32 bytes, so the output is
    ceil((len(plaintext) + 1) / 32) * 32 bytes long.

        C[0] = E(P[0] xor IV)
        C[i] = E(P[i] xor C[i-1])

    Args:
        plaintext: Data to encrypt (may be empty)
        key: 32-byte key
        iv: 32-byte initialization vector

    Returns:
        Ciphertext
    """
    if len(key) != KEY_SIZE:
        raise ValueError(f"key must be {KEY_SIZE} bytes")
    if len(iv) != IV_SIZE:
        raise ValueError(f"IV must be {IV_SIZE} bytes")

    padder = padding.PKCS7(BLOCK_SIZE * 8).padder()
    padded = padder.update(bytes(plaintext)) + padder.finalize()

    cipher = SHACAL2(key)
    out = bytearray()
    prev = bytes(iv)
    for i in range(0, len(padded), BLOCK_SIZE):
        block = cipher.encrypt_block(_xor_block(padded[i:i + BLOCK_SIZE], prev))
        out.extend(block)
        prev = block
    return bytes(out)


def cbc_decrypt(ciphertext: bytes, key: bytes, iv: bytes) -> bytes:
    """
    Decrypt a buffer produced by cbc_encrypt() and strip the padding.

        P[0] = D(C[0]) xor IV
        P[i] = D(C[i]) xor C[i-1]

    Raises:
        InputLengthError: If ciphertext is empty or not block aligned
        PaddingError: If the last block does not end in valid padding
    """
    if len(key) != KEY_SIZE:
        raise ValueError(f"key must be {KEY_SIZE} bytes")
    if len(iv) != IV_SIZE:
        raise ValueError(f"IV must be {IV_SIZE} bytes")
    if not ciphertext or len(ciphertext) % BLOCK_SIZE:
        raise InputLengthError(
            f"ciphertext length {len(ciphertext)} is not a positive "
            f"multiple of {BLOCK_SIZE}"
        )

    cipher = SHACAL2(key)
    out = bytearray()
    prev = bytes(iv)
    for i in range(0, len(ciphertext), BLOCK_SIZE):
        block = bytes(ciphertext[i:i + BLOCK_SIZE])
        out.extend(_xor_block(cipher.decrypt_block(block), prev))
        prev = block

    unpadder = padding.PKCS7(BLOCK_SIZE * 8).unpadder()
    try:
        return unpadder.update(bytes(out)) + unpadder.finalize()
    except ValueError as exc:
        raise PaddingError(
            "invalid padding: wrong password or corrupted file"
        ) from exc


def encrypt_bytes(plaintext: bytes, password: Password,
                  iterations: Optional[int] = None,
                  random_source: RandomSource = secrets.token_bytes) -> bytes:
    """
    Produce a complete encrypted artifact from an in-memory buffer.

    Args:
        plaintext: Data to encrypt
        password: Encryption password
        iterations: PBKDF2 iterations (default from configuration)
        random_source: Callable returning n secure random bytes

    Returns:
        header || ciphertext
    """
    password = _password_bytes(password)

    header = FileHeader(salt=random_source(SALT_SIZE), iv=random_source(IV_SIZE))
    if len(header.salt) != SALT_SIZE or len(header.iv) != IV_SIZE:
        raise ValueError("random source returned the wrong number of bytes")

    key = derive_key(password, header.salt, iterations)
    ciphertext = cbc_encrypt(plaintext, key, header.iv)
    logger.debug("encrypted %d bytes into %d ciphertext bytes",
                 len(plaintext), len(ciphertext))
    return header.to_bytes() + ciphertext


def decrypt_bytes(data: bytes, password: Password,
                  iterations: Optional[int] = None) -> bytes:
    """
    Recover the plaintext from an encrypted artifact.

    Raises:
        EmptyPasswordError: If the password is empty
        TruncatedFileError: If the artifact is shorter than the header
        EmptyCiphertextError: If nothing follows the header
        InputLengthError: If the ciphertext is not block aligned
        PaddingError: If the password is wrong or the data is corrupted
    """
    password = _password_bytes(password)

    header = FileHeader.from_bytes(data)
    ciphertext = data[HEADER_SIZE:]
    if not ciphertext:
        raise EmptyCiphertextError("file contains no data to decrypt")

    key = derive_key(password, header.salt, iterations)
    return cbc_decrypt(ciphertext, key, header.iv)


def _read_file(path: str) -> bytes:
    try:
        with open(path, 'rb') as f:
            return f.read()
    except OSError as exc:
        raise IoError(path, exc, action="read") from exc


def _write_file(path: str, data: bytes) -> None:
    """Write via a temporary file in the target directory, then rename over path."""
    directory = os.path.dirname(os.path.abspath(path))
    try:
        fd, tmp_path = tempfile.mkstemp(dir=directory, prefix='.shacalvault-')
    except OSError as exc:
        raise IoError(path, exc, action="write") from exc

    try:
        with os.fdopen(fd, 'wb') as f:
            f.write(data)
        os.replace(tmp_path, path)
    except OSError as exc:
        try:
            os.unlink(tmp_path)
        except FileNotFoundError:
            pass
        raise IoError(path, exc, action="write") from exc


class FileEncryptor:
    """
    Whole-file encryption with a password.

    Example:
        >>> encryptor = FileEncryptor("my_password")
        >>> encryptor.encrypt_file("document.pdf", "document.pdf.enc")
        >>> encryptor.decrypt_file("document.pdf.enc", "document_decrypted.pdf")
    """

    def __init__(self, password: Password, iterations: Optional[int] = None,
                 random_source: RandomSource = secrets.token_bytes):
        """
        Initialize with password.

        Args:
            password: Encryption password
            iterations: PBKDF2 iterations (default from configuration, 10,000)
            random_source: Source of salts and IVs; only tests replace it
        """
        self._password = password
        self._iterations = iterations
        self._random_source = random_source

    def encrypt_file(self, input_path: str, output_path: str) -> Dict[str, int]:
        """
        Encrypt a file.

        Args:
            input_path: Path to input file
            output_path: Path for encrypted output

        Returns:
            Dict with input and output sizes

        Raises:
            EmptyPasswordError: If the password is empty
            EmptyInputError: If the input file is empty
            IoError: If a file cannot be read or written
        """
        _password_bytes(self._password)
        plaintext = _read_file(input_path)
        if not plaintext:
            raise EmptyInputError(f"input file '{input_path}' is empty")

        artifact = encrypt_bytes(plaintext, self._password, self._iterations,
                                 self._random_source)
        _write_file(output_path, artifact)

        logger.info("encrypted %s (%d bytes) -> %s (%d bytes)",
                    input_path, len(plaintext), output_path, len(artifact))
        return {
            'input_size': len(plaintext),
            'output_size': len(artifact),
        }

    def decrypt_file(self, input_path: str, output_path: str) -> Dict[str, int]:
        """
        Decrypt a file.

        The output file is only created once decryption has succeeded.

        Args:
            input_path: Path to encrypted file
            output_path: Path for decrypted output

        Returns:
            Dict with input and output sizes

        Raises:
            CoreError: Any of the decrypt_bytes() errors, or IoError
        """
        _password_bytes(self._password)
        artifact = _read_file(input_path)
        plaintext = decrypt_bytes(artifact, self._password, self._iterations)
        _write_file(output_path, plaintext)

        logger.info("decrypted %s (%d bytes) -> %s (%d bytes)",
                    input_path, len(artifact), output_path, len(plaintext))
        return {
            'input_size': len(artifact),
            'output_size': len(plaintext),
        }


def encrypt_file(input_path: str, output_path: str,
                 password: Password, **kwargs) -> OperationResult:
    """Encrypt a file and report the outcome instead of raising."""
    try:
        sizes = FileEncryptor(password, **kwargs).encrypt_file(input_path, output_path)
    except CoreError as exc:
        logger.warning("encryption of %s failed: %s", input_path, exc)
        return OperationResult(False, f"Encryption failed: {exc}", error=exc)
    return OperationResult(
        True,
        f"File encrypted: {input_path} ({sizes['input_size']} bytes) -> "
        f"{output_path} ({sizes['output_size']} bytes)",
        **sizes
    )


def decrypt_file(input_path: str, output_path: str,
                 password: Password, **kwargs) -> OperationResult:
    """Decrypt a file and report the outcome instead of raising."""
    try:
        sizes = FileEncryptor(password, **kwargs).decrypt_file(input_path, output_path)
    except CoreError as exc:
        logger.warning("decryption of %s failed: %s", input_path, exc)
        return OperationResult(False, f"Decryption failed: {exc}", error=exc)
    return OperationResult(
        True,
        f"File decrypted: {input_path} ({sizes['input_size']} bytes) -> "
        f"{output_path} ({sizes['output_size']} bytes)",
        **sizes
    )


def get_file_info(encrypted_path: str) -> dict:
    """
    Get information about an encrypted file without decrypting.

    Args:
        encrypted_path: Path to encrypted file

    Returns:
        Dict with file metadata; 'valid' tells whether the size fits the format
    """
    data = _read_file(encrypted_path)
    ciphertext_size = max(len(data) - HEADER_SIZE, 0)
    info = {
        'valid': len(data) > HEADER_SIZE and ciphertext_size % BLOCK_SIZE == 0,
        'encrypted_size': os.path.getsize(encrypted_path),
        'ciphertext_size': ciphertext_size,
        'blocks': ciphertext_size // BLOCK_SIZE,
        'salt': None,
        'iv': None,
    }
    if len(data) >= HEADER_SIZE:
        header = FileHeader.from_bytes(data)
        info['salt'] = header.salt.hex()
        info['iv'] = header.iv.hex()
    return info
