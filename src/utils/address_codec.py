# Standard library
import ipaddress

# Cipher
import ipcrypt

# Utility Handlers
from utils.key_handler import key_from_env, load_key


MAX_ADDR_INT = 2**32 - 1


def _resolve_key(key) -> bytes:
    """Use the given key, or the one configured through IPCRYPT_KEY when it is None."""
    if key is None:
        return key_from_env()
    return load_key(key)


def ip_to_block(ip_addr: str) -> bytes:
    """Convert a dotted-decimal IPv4 address into its 4-byte network-order block.

    Args:
        ip_addr (str): The address, e.g. "192.168.0.1".

    Returns:
        bytes: The packed address.

    Raises:
        ValueError: If the string is not a valid IPv4 address.
    """
    return ipaddress.IPv4Address(ip_addr.strip()).packed


def block_to_ip(block) -> str:
    """Format a 4-byte block as a dotted-decimal IPv4 address."""
    return str(ipaddress.IPv4Address(bytes(block)))


def int_to_block(value: int) -> bytes:
    """Convert a 32-bit integer into a big-endian 4-byte block.

    Raises:
        ValueError: If the value is outside 0..2**32-1.
    """
    if not 0 <= value <= MAX_ADDR_INT:
        raise ValueError(f"{value} is not a 32-bit unsigned integer")
    return value.to_bytes(4, "big")


def block_to_int(block) -> int:
    """Read a 4-byte block as a big-endian 32-bit integer."""
    return int.from_bytes(bytes(block), "big")


def encrypt_ip(ip_addr: str, key=None) -> str:
    """Encrypt an IPv4 address; the result is again an IPv4 address.

    Args:
        ip_addr (str): The plaintext IPv4 address (e.g., "192.168.0.1").
        key (optional): 16-byte key, hex text or 16 raw characters.
            Defaults to IPCRYPT_KEY.

    Returns:
        str: The encrypted IPv4 address.
    """
    return block_to_ip(ipcrypt.encrypt(ip_to_block(ip_addr), _resolve_key(key)))


def decrypt_ip(encrypted_ip: str, key=None) -> str:
    """Decrypt an address produced by `encrypt_ip` back to plaintext.

    Args:
        encrypted_ip (str): The encrypted IPv4 address.
        key (optional): The key used to encrypt. Defaults to IPCRYPT_KEY.

    Returns:
        str: The original plaintext IPv4 address.
    """
    return block_to_ip(ipcrypt.decrypt(ip_to_block(encrypted_ip), _resolve_key(key)))


def encrypt_int(value: int, key=None) -> int:
    """Encrypt an address held as a 32-bit integer."""
    return block_to_int(ipcrypt.encrypt(int_to_block(value), _resolve_key(key)))


def decrypt_int(value: int, key=None) -> int:
    """Decrypt an address held as a 32-bit integer."""
    return block_to_int(ipcrypt.decrypt(int_to_block(value), _resolve_key(key)))


def encrypt_address(addr: ipaddress.IPv4Address, key=None) -> ipaddress.IPv4Address:
    """Encrypt an `ipaddress.IPv4Address`."""
    return ipaddress.IPv4Address(ipcrypt.encrypt(addr.packed, _resolve_key(key)))


def decrypt_address(addr: ipaddress.IPv4Address, key=None) -> ipaddress.IPv4Address:
    """Decrypt an `ipaddress.IPv4Address`."""
    return ipaddress.IPv4Address(ipcrypt.decrypt(addr.packed, _resolve_key(key)))
