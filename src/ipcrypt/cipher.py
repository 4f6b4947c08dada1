# Standard library
from typing import Tuple

# Cipher internals
from .errors import InvalidBlockLength, InvalidKeyLength
from .permutation import permute, permute_inverse


BLOCK_SIZE = 4
KEY_SIZE = 16


def _as_bytes(value, size: int, error: type) -> bytes:
    """Convert `value` to immutable bytes of exactly `size` length, or raise `error`."""
    # bytes(n) is n zero bytes, not a conversion
    if isinstance(value, int):
        raise error(f"Expected {size} bytes, got int")
    try:
        data = bytes(value)
    except (TypeError, ValueError) as e:
        raise error(f"Expected {size} bytes, got {type(value).__name__}: {e}") from e
    if len(data) != size:
        raise error(f"Expected {size} bytes, got {len(data)}")
    return data


def as_block(value) -> bytes:
    """Validate a 4-byte block (or XOR difference) and return it as bytes.

    Raises:
        InvalidBlockLength: If the value is not exactly 4 bytes.
    """
    return _as_bytes(value, BLOCK_SIZE, InvalidBlockLength)


def xor_bytes(block: bytes, chunk: bytes) -> bytes:
    """XOR two equal-length byte strings."""
    return bytes(x ^ y for x, y in zip(block, chunk))


def split_key(key) -> Tuple[bytes, bytes, bytes, bytes]:
    """Split a 16-byte key into its four 4-byte whitening chunks.

    Args:
        key: 16 bytes (bytes, bytearray, memoryview or a sequence of ints).

    Returns:
        tuple[bytes, bytes, bytes, bytes]: Key bytes 0-3, 4-7, 8-11 and 12-15.

    Raises:
        InvalidKeyLength: If the key is not exactly 16 bytes.
    """
    key = _as_bytes(key, KEY_SIZE, InvalidKeyLength)
    return key[0:4], key[4:8], key[8:12], key[12:16]


def encrypt(block, key) -> bytes:
    """Encrypt one 4-byte block (an IPv4 address in network order).

    Args:
        block: The 4-byte plaintext.
        key: The 16-byte key.

    Returns:
        bytes: The 4-byte ciphertext.

    Raises:
        InvalidBlockLength: If the block is not exactly 4 bytes.
        InvalidKeyLength: If the key is not exactly 16 bytes.
    """
    state = as_block(block)
    k0, k1, k2, k3 = split_key(key)

    state = xor_bytes(state, k0)
    state = permute(state)
    state = xor_bytes(state, k1)
    state = permute(state)
    state = xor_bytes(state, k2)
    state = permute(state)
    state = xor_bytes(state, k3)

    return state


def decrypt(block, key) -> bytes:
    """Decrypt one 4-byte block produced by `encrypt` under the same key.

    Args:
        block: The 4-byte ciphertext.
        key: The 16-byte key.

    Returns:
        bytes: The 4-byte plaintext.

    Raises:
        InvalidBlockLength: If the block is not exactly 4 bytes.
        InvalidKeyLength: If the key is not exactly 16 bytes.
    """
    state = as_block(block)
    k0, k1, k2, k3 = split_key(key)

    state = xor_bytes(state, k3)
    state = permute_inverse(state)
    state = xor_bytes(state, k2)
    state = permute_inverse(state)
    state = xor_bytes(state, k1)
    state = permute_inverse(state)
    state = xor_bytes(state, k0)

    return state
