# Standard library
import random

# Cipher
import ipcrypt
from ipcrypt import BLOCK_SIZE, as_block, xor_bytes

# Utility Handlers
from utils.key_handler import load_key

# Configuration
from config import crypto_config
from config.logging_config import logger


# Input/output XOR differences with a known key-independent correlation
DEFAULT_DELTA_IN = bytes((0x0A, 0x02, 0x00, 0x00))
DEFAULT_DELTA_OUT = bytes((0x60, 0x70, 0x4D, 0x0C))


class DifferentialResult:
    """
    Outcome of a differential measurement.

    Attributes:
        hits (int): Pairs where E(s) == E(s ^ delta_in) ^ delta_out.
        total (int): Pairs tried.
    """

    __slots__ = ("hits", "total")

    def __init__(self, hits: int, total: int) -> None:
        self.hits: int = hits
        self.total: int = total

    @property
    def ratio(self) -> float:
        return self.hits / self.total if self.total else 0.0

    def __repr__(self) -> str:
        return f"<DifferentialResult hits={self.hits} total={self.total} ratio={self.ratio}>"


def measure_differential(
    key,
    delta_in: bytes = DEFAULT_DELTA_IN,
    delta_out: bytes = DEFAULT_DELTA_OUT,
    samples: int = None,
    seed: int = None,
) -> DifferentialResult:
    """Estimate how often an input XOR difference turns into a given output difference.

    Draws `samples` random blocks s and counts how often
    encrypt(s) == encrypt(s ^ delta_in) ^ delta_out. For an ideal 32-bit
    permutation the ratio is about 2**-32; a much higher ratio exposes
    structure that survives every key.

    Args:
        key: 16-byte key, hex text or 16 raw characters.
        delta_in (bytes, optional): 4-byte input difference.
        delta_out (bytes, optional): 4-byte output difference.
        samples (int, optional): Pairs to try. Defaults to IPCRYPT_DIFF_SAMPLES.
        seed (int, optional): Seed for a reproducible run.

    Returns:
        DifferentialResult: The hit count and number of pairs tried.

    Raises:
        ValueError: If `samples` is not positive.
        InvalidBlockLength: If a difference is not 4 bytes.
    """
    if samples is None:
        samples = crypto_config.IPCRYPT_DIFF_SAMPLES
    if samples <= 0:
        raise ValueError(f"samples must be positive, got {samples}")

    delta_in = as_block(delta_in)
    delta_out = as_block(delta_out)

    key = load_key(key)
    rng = random.Random(seed)
    hits = 0

    for _ in range(samples):
        s = rng.getrandbits(32).to_bytes(BLOCK_SIZE, "big")
        c1 = ipcrypt.encrypt(s, key)
        c2 = ipcrypt.encrypt(xor_bytes(s, delta_in), key)
        if c1 == xor_bytes(c2, delta_out):
            hits += 1

    result = DifferentialResult(hits, samples)
    logger.info(f"[differential_handler] {result.hits}/{result.total} hits (ratio {result.ratio})")
    return result
