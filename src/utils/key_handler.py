# Standard library
import binascii
import secrets

# Cipher
from ipcrypt import KEY_SIZE, InvalidKeyLength

# Configuration
from config import crypto_config
from config.logging_config import logger


def load_key(value) -> bytes:
    """Load a 16-byte key from raw bytes, hex text or 16 raw characters.

    Args:
        value (bytes | bytearray | memoryview | str): The key material.
            Strings are tried as 32 hex digits (an optional "0x" prefix and
            surrounding whitespace are ignored), then as 16 UTF-8 bytes.

    Returns:
        bytes: The 16-byte key.

    Raises:
        InvalidKeyLength: If the value cannot be read as exactly 16 bytes.
    """
    if isinstance(value, (bytes, bytearray, memoryview)):
        key = bytes(value)
    elif isinstance(value, str):
        key = _key_from_text(value)
    else:
        raise InvalidKeyLength(f"Unsupported key type: {type(value).__name__}")

    if len(key) != KEY_SIZE:
        raise InvalidKeyLength(f"Key must be {KEY_SIZE} bytes, got {len(key)}")
    return key


def _key_from_text(text: str) -> bytes:
    """Decode hex text when it is exactly 32 hex digits, else take the raw UTF-8 bytes."""
    stripped = text.strip()
    if stripped[:2].lower() == "0x":
        stripped = stripped[2:]
    if len(stripped) == KEY_SIZE * 2:
        try:
            return binascii.unhexlify(stripped)
        except (binascii.Error, ValueError):
            logger.debug("[key_handler] 32-character key is not hex, using raw bytes")
    return text.encode("utf-8")


def key_from_env() -> bytes:
    """Load the key configured through IPCRYPT_KEY.

    Returns:
        bytes: The 16-byte key.

    Raises:
        ValueError: If IPCRYPT_KEY is unset or empty.
        InvalidKeyLength: If IPCRYPT_KEY does not hold a 16-byte key.
    """
    if not crypto_config.IPCRYPT_KEY:
        raise ValueError("IPCRYPT_KEY not found in environment variables")
    return load_key(crypto_config.IPCRYPT_KEY)


def generate_key() -> bytes:
    """Return a fresh random 16-byte key."""
    return secrets.token_bytes(KEY_SIZE)


def key_to_hex(key) -> str:
    """Render a key as 32 lowercase hex digits."""
    return load_key(key).hex()
