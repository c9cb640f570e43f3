"""
Error kinds raised by the encryption core.

Every failure derives from CoreError so callers can catch the whole family
at one boundary. Format and cryptographic failures are also ValueErrors;
I/O failures are also OSErrors.
"""

from typing import Optional


class CoreError(Exception):
    """Base class for all encryption core failures."""


class IoError(CoreError, OSError):
    """A file could not be opened, read or written."""

    def __init__(self, path: str, cause: Optional[BaseException] = None,
                 action: str = "access"):
        self.path = path
        self.cause = cause
        message = f"cannot {action} file '{path}'"
        if isinstance(cause, OSError) and cause.strerror:
            message += f": {cause.strerror}"
        elif cause is not None:
            message += f": {cause}"
        super().__init__(message)

    def __str__(self) -> str:
        return self.args[0]


class EmptyInputError(CoreError, ValueError):
    """The file to encrypt has no content."""


class EmptyPasswordError(CoreError, ValueError):
    """An empty password was supplied."""


class TruncatedFileError(CoreError, ValueError):
    """The artifact is too short to hold the salt and IV header."""


class EmptyCiphertextError(CoreError, ValueError):
    """The artifact holds a header but no ciphertext."""


class InputLengthError(CoreError, ValueError):
    """Ciphertext length is not a positive multiple of the block size."""


class PaddingError(CoreError, ValueError):
    """
    Padding check failed after decryption.

    Raised for a wrong password and for corrupted ciphertext alike: the
    format carries no authentication tag, so the two cannot be told apart.
    """


class ConfigError(CoreError, ValueError):
    """An environment setting has an unusable value."""
