"""Format-preserving encryption of IPv4 addresses with 16-byte keys.

The ciphertext of a 4-byte address is again a 4-byte address, so encrypted
values can be stored and displayed wherever the plaintext was.
"""
from .cipher import BLOCK_SIZE, KEY_SIZE, as_block, decrypt, encrypt, split_key, xor_bytes
from .errors import CipherInputError, InvalidBlockLength, InvalidKeyLength
from .permutation import permute, permute_inverse

__all__ = [
    "BLOCK_SIZE",
    "KEY_SIZE",
    "encrypt",
    "decrypt",
    "split_key",
    "as_block",
    "xor_bytes",
    "permute",
    "permute_inverse",
    "CipherInputError",
    "InvalidBlockLength",
    "InvalidKeyLength",
]
