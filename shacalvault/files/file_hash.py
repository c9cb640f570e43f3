"""
File hashing utility.

Hex digests of whole files, SHA-1 by default.
"""

import hashlib

from ..errors import IoError

DEFAULT_ALGORITHM = 'sha1'
DEFAULT_CHUNK_SIZE = 1024 * 1024  # 1 MB


def compute_file_hash(file_path: str, algorithm: str = DEFAULT_ALGORITHM,
                      chunk_size: int = DEFAULT_CHUNK_SIZE) -> str:
    """
    Compute the hash of a file (streaming).

    Args:
        file_path: Path to file
        algorithm: Any name accepted by hashlib.new()
        chunk_size: Read chunk size

    Returns:
        Lowercase hexadecimal digest

    Raises:
        ValueError: If the algorithm is unknown
        IoError: If the file cannot be read
    """
    try:
        digest = hashlib.new(algorithm)
    except ValueError as exc:
        raise ValueError(f"unsupported hash algorithm: {algorithm}") from exc

    try:
        with open(file_path, 'rb') as f:
            while chunk := f.read(chunk_size):
                digest.update(chunk)
    except OSError as exc:
        raise IoError(file_path, exc, action="read") from exc

    return digest.hexdigest()
