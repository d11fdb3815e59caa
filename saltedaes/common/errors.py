# saltedaes/common/errors.py


class SaltedAESError(Exception):
    """Base class for every failure raised by the file-format engine."""
    pass


class InputNotFound(SaltedAESError):
    """Input file does not exist (nothing was opened or written)."""
    pass


class BadDecrypt(SaltedAESError):
    """Padding check failed at end of stream, or the ciphertext is malformed."""

    def __init__(self, message: str = "Bad decrypt (is the supplied passphrase correct?)"):
        super().__init__(message)


class MissingHeader(SaltedAESError):
    """Input is too short to carry a salt, or lacks the magic when it is required."""
    pass


class IOFailure(SaltedAESError):
    """Underlying read/write failure on the input or output stream."""
    pass


class InvalidPadding(SaltedAESError):
    """Final decrypted block does not end in valid PKCS#7 padding."""
    pass


class UnknownImplementation(SaltedAESError):
    """Requested block cipher implementation is not registered."""
    pass
