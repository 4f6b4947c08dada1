# Standard library
import os
import re
import tempfile
from typing import Iterable, Iterator, Tuple

# Cipher
import ipcrypt

# Utility Handlers
from utils.address_codec import block_to_ip, ip_to_block
from utils.key_handler import load_key

# Configuration
from config.logging_config import logger


# Undecodable bytes in logs are carried through unchanged
FILE_ENCODING = "utf-8"
FILE_ERRORS = "surrogateescape"

_OCTET = r"(?:25[0-5]|2[0-4]\d|1\d\d|[1-9]?\d)"

# Four octets not glued to further digits or dotted parts, e.g. version strings
IPV4_PATTERN = re.compile(rf"(?<![\d.]){_OCTET}(?:\.{_OCTET}){{3}}(?!\d|\.\d)")


def _transform_line(line: str, key: bytes, decrypt: bool) -> Tuple[str, int]:
    """Rewrite every address in `line`, returning the new line and the replacement count."""
    operation = ipcrypt.decrypt if decrypt else ipcrypt.encrypt

    def replace(match: re.Match) -> str:
        return block_to_ip(operation(ip_to_block(match.group(0)), key))

    return IPV4_PATTERN.subn(replace, line)


def anonymize_line(line: str, key, decrypt: bool = False) -> str:
    """Replace every IPv4 address in a line of text with its encryption.

    Args:
        line (str): Any text, typically a log line.
        key: 16-byte key, hex text or 16 raw characters.
        decrypt (bool, optional): Reverse a previous anonymization instead.

    Returns:
        str: The line with each address substituted; other text is untouched.
    """
    new_line, _ = _transform_line(line, load_key(key), decrypt)
    return new_line


def anonymize_lines(lines: Iterable[str], key, decrypt: bool = False) -> Iterator[str]:
    """Lazily anonymize an iterable of lines (see `anonymize_line`)."""
    key = load_key(key)
    for line in lines:
        new_line, _ = _transform_line(line, key, decrypt)
        yield new_line


def anonymize_file(src_path: str, dst_path: str, key, decrypt: bool = False) -> int:
    """Anonymize a text file line by line into `dst_path`.

    Args:
        src_path (str): File to read.
        dst_path (str): File to write; replaced only once the whole input is
            processed, so it may be the same file as `src_path`.
        key: 16-byte key, hex text or 16 raw characters.
        decrypt (bool, optional): Reverse a previous anonymization instead.

    Returns:
        int: Number of addresses replaced.

    Raises:
        OSError: If either file cannot be read or written; the error is logged
            first and `dst_path` is left untouched.
    """
    key = load_key(key)
    replaced = 0
    dst_dir = os.path.dirname(os.path.abspath(dst_path))
    tmp_path = None
    try:
        fd, tmp_path = tempfile.mkstemp(dir=dst_dir, prefix=".ipcrypt-", suffix=".tmp")
        with os.fdopen(fd, "w", encoding=FILE_ENCODING, errors=FILE_ERRORS, newline="") as dst, \
                open(src_path, "r", encoding=FILE_ENCODING, errors=FILE_ERRORS, newline="") as src:
            for line in src:
                new_line, count = _transform_line(line, key, decrypt)
                replaced += count
                dst.write(new_line)
        os.replace(tmp_path, dst_path)
    except (OSError, UnicodeError) as e:
        logger.error(f"[anonymize_handler] Failed to anonymize '{src_path}' into '{dst_path}': {e}")
        if tmp_path is not None and os.path.exists(tmp_path):
            os.remove(tmp_path)
        raise

    logger.info(f"[anonymize_handler] Replaced {replaced} addresses from {src_path}")
    return replaced
