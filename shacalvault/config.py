"""
Runtime settings read from the environment (and an optional .env file).

SHACALVAULT_LOG_LEVEL          logging level for the command line tool
SHACALVAULT_PBKDF2_ITERATIONS  PBKDF2 iteration count (files only decrypt
                               with the count they were written with)
SHACALVAULT_HASH_ALGORITHM     default algorithm of the hash command

The iteration count is kept as read and validated by pbkdf2_iterations()
when a key is derived, so a bad value is reported as a ConfigError by the
operation that needs it.
"""

import os

from dotenv import load_dotenv

from .errors import ConfigError

load_dotenv()

LOG_LEVEL = os.getenv("SHACALVAULT_LOG_LEVEL", "WARNING").upper()
PBKDF2_ITERATIONS = os.getenv("SHACALVAULT_PBKDF2_ITERATIONS", "10000")
HASH_ALGORITHM = os.getenv("SHACALVAULT_HASH_ALGORITHM", "sha1")


def pbkdf2_iterations() -> int:
    """Return the configured PBKDF2 iteration count as a positive integer."""
    value = PBKDF2_ITERATIONS
    try:
        count = int(value)
    except (TypeError, ValueError):
        count = 0
    if count < 1:
        raise ConfigError(
            f"SHACALVAULT_PBKDF2_ITERATIONS must be a positive integer, got {value!r}"
        )
    return count
