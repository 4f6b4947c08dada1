class CipherInputError(ValueError):
    """Base class for inputs the cipher refuses to operate on."""


class InvalidKeyLength(CipherInputError):
    """Raised when a key is not exactly 16 bytes."""


class InvalidBlockLength(CipherInputError):
    """Raised when a block is not exactly 4 bytes."""
