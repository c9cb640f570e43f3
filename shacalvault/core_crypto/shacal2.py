"""
SHACAL-2 Block Cipher (From Scratch)

SHACAL-2 is the SHA-256 compression function used as a block cipher: the
512-bit message block becomes the key and the 256-bit chaining value becomes
the data block. Dropping the final feed-forward addition makes every round
invertible, which gives the decryption direction.

Components:
- Key schedule: zero-pads the key to 16 words and expands it to 64 words
  with the SHA-256 message schedule
- Encryption: 64 rounds of the SHA-256 step function
- Decryption: the same 64 rounds undone in reverse order

Block size is 256 bits (32 bytes). Keys of 128 to 512 bits are accepted in
32-bit steps; the file format always uses 256-bit keys.
"""

from typing import List


BLOCK_SIZE = 32
KEY_SIZE = 32
MIN_KEY_SIZE = 16
MAX_KEY_SIZE = 64
ROUNDS = 64

# Round constants: first 32 bits of fractional parts of cube roots of first 64 primes
K = [
    0x428a2f98, 0x71374491, 0xb5c0fbcf, 0xe9b5dba5,
    0x3956c25b, 0x59f111f1, 0x923f82a4, 0xab1c5ed5,
    0xd807aa98, 0x12835b01, 0x243185be, 0x550c7dc3,
    0x72be5d74, 0x80deb1fe, 0x9bdc06a7, 0xc19bf174,
    0xe49b69c1, 0xefbe4786, 0x0fc19dc6, 0x240ca1cc,
    0x2de92c6f, 0x4a7484aa, 0x5cb0a9dc, 0x76f988da,
    0x983e5152, 0xa831c66d, 0xb00327c8, 0xbf597fc7,
    0xc6e00bf3, 0xd5a79147, 0x06ca6351, 0x14292967,
    0x27b70a85, 0x2e1b2138, 0x4d2c6dfc, 0x53380d13,
    0x650a7354, 0x766a0abb, 0x81c2c92e, 0x92722c85,
    0xa2bfe8a1, 0xa81a664b, 0xc24b8b70, 0xc76c51a3,
    0xd192e819, 0xd6990624, 0xf40e3585, 0x106aa070,
    0x19a4c116, 0x1e376c08, 0x2748774c, 0x34b0bcb5,
    0x391c0cb3, 0x4ed8aa4a, 0x5b9cca4f, 0x682e6ff3,
    0x748f82ee, 0x78a5636f, 0x84c87814, 0x8cc70208,
    0x90befffa, 0xa4506ceb, 0xbef9a3f7, 0xc67178f2
]

# Mask for 32-bit arithmetic
MASK_32 = 0xFFFFFFFF


def _right_rotate(value: int, amount: int) -> int:
    """Right rotate a 32-bit integer by the specified amount."""
    return ((value >> amount) | (value << (32 - amount))) & MASK_32


def _ch(x: int, y: int, z: int) -> int:
    """Choice function: if x then y else z (bitwise)."""
    return (x & y) ^ (~x & z & MASK_32)


def _maj(x: int, y: int, z: int) -> int:
    """Majority function: majority vote of bits."""
    return (x & y) ^ (x & z) ^ (y & z)


def _sigma0(x: int) -> int:
    """Lowercase sigma 0: used in the key schedule."""
    return _right_rotate(x, 7) ^ _right_rotate(x, 18) ^ (x >> 3)


def _sigma1(x: int) -> int:
    """Lowercase sigma 1: used in the key schedule."""
    return _right_rotate(x, 17) ^ _right_rotate(x, 19) ^ (x >> 10)


def _big_sigma0(x: int) -> int:
    """Uppercase Sigma 0: used in every round."""
    return _right_rotate(x, 2) ^ _right_rotate(x, 13) ^ _right_rotate(x, 22)


def _big_sigma1(x: int) -> int:
    """Uppercase Sigma 1: used in every round."""
    return _right_rotate(x, 6) ^ _right_rotate(x, 11) ^ _right_rotate(x, 25)


def _bytes_to_words(data: bytes) -> List[int]:
    """Convert bytes into 32-bit words (big-endian)."""
    return [int.from_bytes(data[i:i + 4], byteorder='big')
            for i in range(0, len(data), 4)]


def _words_to_bytes(words: List[int]) -> bytes:
    """Convert 32-bit words back into bytes (big-endian)."""
    return b''.join(word.to_bytes(4, byteorder='big') for word in words)


def expand_key(key: bytes) -> List[int]:
    """
    Build the 64 round keys for a SHACAL-2 key.

    The key is read as big-endian words and zero-padded to 16 words, then
    expanded with the SHA-256 message schedule:
        W[i] = σ1(W[i-2]) + W[i-7] + σ0(W[i-15]) + W[i-16]
    The round constant is folded in, so round i uses K[i] + W[i].

    Args:
        key: 16 to 64 bytes, a multiple of 4

    Returns:
        List of 64 32-bit round keys

    Raises:
        ValueError: If the key length is not supported
    """
    if not isinstance(key, (bytes, bytearray)):
        raise TypeError("key must be bytes")
    if not MIN_KEY_SIZE <= len(key) <= MAX_KEY_SIZE or len(key) % 4:
        raise ValueError(
            f"SHACAL-2 key must be {MIN_KEY_SIZE}-{MAX_KEY_SIZE} bytes "
            f"in 4-byte steps, got {len(key)} bytes"
        )

    w = _bytes_to_words(bytes(key))
    w.extend([0] * (16 - len(w)))
    for i in range(16, ROUNDS):
        s0 = _sigma0(w[i - 15])
        s1 = _sigma1(w[i - 2])
        w.append((w[i - 16] + s0 + w[i - 7] + s1) & MASK_32)

    return [(K[i] + w[i]) & MASK_32 for i in range(ROUNDS)]


class SHACAL2:
    """
    SHACAL-2 block cipher with a fixed key.

    Round keys are computed once in the constructor, so one instance can
    process any number of blocks.

    Example:
        >>> cipher = SHACAL2(bytes(32))
        >>> block = bytes(range(32))
        >>> cipher.decrypt_block(cipher.encrypt_block(block)) == block
        True
    """

    block_size = BLOCK_SIZE

    def __init__(self, key: bytes):
        """
        Initialize the cipher.

        Args:
            key: Cipher key (32 bytes for the file format)
        """
        self._round_keys = expand_key(key)

    @staticmethod
    def _check_block(block: bytes) -> None:
        if len(block) != BLOCK_SIZE:
            raise ValueError(f"block must be {BLOCK_SIZE} bytes, got {len(block)}")

    def encrypt_words(self, state: List[int]) -> List[int]:
        """Apply the forward permutation to eight 32-bit words."""
        a, b, c, d, e, f, g, h = state

        for rk in self._round_keys:
            t1 = (h + _big_sigma1(e) + _ch(e, f, g) + rk) & MASK_32
            t2 = (_big_sigma0(a) + _maj(a, b, c)) & MASK_32

            h = g
            g = f
            f = e
            e = (d + t1) & MASK_32
            d = c
            c = b
            b = a
            a = (t1 + t2) & MASK_32

        return [a, b, c, d, e, f, g, h]

    def decrypt_words(self, state: List[int]) -> List[int]:
        """
        Apply the inverse permutation to eight 32-bit words.

        Each round shifted b..d and f..h down by one position and produced
        new a and e from t1 and t2. Walking the rounds backwards, the old
        a, b, c, e, f, g are read straight from the shifted words, t2 only
        depends on those, and t1, d, h follow by subtraction.
        """
        a, b, c, d, e, f, g, h = state

        for rk in reversed(self._round_keys):
            prev_a, prev_b, prev_c = b, c, d
            prev_e, prev_f, prev_g = f, g, h

            t2 = (_big_sigma0(prev_a) + _maj(prev_a, prev_b, prev_c)) & MASK_32
            t1 = (a - t2) & MASK_32
            prev_d = (e - t1) & MASK_32
            prev_h = (t1 - _big_sigma1(prev_e) - _ch(prev_e, prev_f, prev_g) - rk) & MASK_32

            a, b, c, d = prev_a, prev_b, prev_c, prev_d
            e, f, g, h = prev_e, prev_f, prev_g, prev_h

        return [a, b, c, d, e, f, g, h]

    def encrypt_block(self, block: bytes) -> bytes:
        """Encrypt one 32-byte block."""
        self._check_block(block)
        return _words_to_bytes(self.encrypt_words(_bytes_to_words(block)))

    def decrypt_block(self, block: bytes) -> bytes:
        """Decrypt one 32-byte block."""
        self._check_block(block)
        return _words_to_bytes(self.decrypt_words(_bytes_to_words(block)))


def permute(block: bytes, key: bytes) -> bytes:
    """
    Forward SHACAL-2 permutation of a single block.

    Args:
        block: 32-byte input block
        key: Cipher key

    Returns:
        32-byte output block
    """
    return SHACAL2(key).encrypt_block(block)


def inverse_permute(block: bytes, key: bytes) -> bytes:
    """Inverse of permute() for the same key."""
    return SHACAL2(key).decrypt_block(block)
