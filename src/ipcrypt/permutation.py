"""Keyless ARX permutation over a 4-byte state.

Every operation works on single bytes: additions wrap modulo 256 and
rotations never cross a byte boundary.
"""

BYTE_MASK = 0xFF


def rotl8(x: int, r: int) -> int:
    """Rotate a byte left by `r` bits (0-7)."""
    return ((x << r) | (x >> (8 - r))) & BYTE_MASK


def rotr8(x: int, r: int) -> int:
    """Rotate a byte right by `r` bits (0-7)."""
    return ((x >> r) | (x << (8 - r))) & BYTE_MASK


def permute(state: bytes) -> bytes:
    """Apply one forward mixing step.

    Args:
        state (bytes): The 4-byte working state.

    Returns:
        bytes: The mixed 4-byte state.
    """
    a, b, c, d = state

    a = (a + b) & BYTE_MASK
    c = (c + d) & BYTE_MASK
    b = rotl8(b, 2)
    d = rotl8(d, 5)
    b ^= a
    d ^= c
    a = rotl8(a, 4)
    a = (a + d) & BYTE_MASK
    c = (c + b) & BYTE_MASK
    b = rotl8(b, 3)
    d = rotl8(d, 7)
    b ^= c
    d ^= a
    c = rotl8(c, 4)

    return bytes((a, b, c, d))


def permute_inverse(state: bytes) -> bytes:
    """Undo one forward mixing step.

    Walks the forward steps backwards: subtraction replaces addition and
    right rotation replaces left rotation. The XOR operands are always the
    values already restored at that point.

    Args:
        state (bytes): The 4-byte state produced by `permute`.

    Returns:
        bytes: The 4-byte state that was fed to `permute`.
    """
    a, b, c, d = state

    c = rotr8(c, 4)
    b ^= c
    d ^= a
    b = rotr8(b, 3)
    d = rotr8(d, 7)
    a = (a - d) & BYTE_MASK
    c = (c - b) & BYTE_MASK
    a = rotr8(a, 4)
    b ^= a
    d ^= c
    b = rotr8(b, 2)
    d = rotr8(d, 5)
    a = (a - b) & BYTE_MASK
    c = (c - d) & BYTE_MASK

    return bytes((a, b, c, d))
