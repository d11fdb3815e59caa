# saltedaes/common/format.py

from typing import BinaryIO

from saltedaes.common.errors import MissingHeader

# --- Format constants (legacy OpenSSL "salted" layout) ---
MAGIC = b"Salted__"
SALT_SIZE = 8
HEADER_SIZE = len(MAGIC) + SALT_SIZE
BLOCK_SIZE = 16  # AES block, bytes
KEY_SIZE = 16    # AES-128
ITERATIONS = 10000


class SaltedHeader:
    """File preamble: 8-byte magic followed by the 8-byte KDF salt."""

    def __init__(self, salt: bytes, has_magic: bool = True):
        if len(salt) != SALT_SIZE:
            raise ValueError(f"Salt must be {SALT_SIZE} bytes.")
        self.salt = salt
        self.has_magic = has_magic

    def to_bytes(self) -> bytes:
        return MAGIC + self.salt

    def __repr__(self):
        return f"SaltedHeader(salt={self.salt.hex()}, has_magic={self.has_magic})"


def read_exact(source: BinaryIO, size: int) -> bytes:
    """Reads until `size` bytes are collected or the source hits EOF."""
    data = source.read(size)
    if len(data) == size or not data:
        return data
    parts = [data]
    remaining = size - len(data)
    while remaining:
        chunk = source.read(remaining)
        if not chunk:
            break
        parts.append(chunk)
        remaining -= len(chunk)
    return b"".join(parts)


def read_header(source: BinaryIO, require_magic: bool = False) -> SaltedHeader:
    """
    Consumes the header from `source`.

    When the first 8 bytes are not the magic they are taken as the salt
    themselves, matching legacy files written without a marker. Pass
    `require_magic=True` to reject such input instead.
    """
    first = read_exact(source, len(MAGIC))
    if len(first) != len(MAGIC):
        raise MissingHeader(f"Input is {len(first)} bytes, too short to hold a salt.")

    if first != MAGIC:
        if require_magic:
            raise MissingHeader("Input does not start with the 'Salted__' marker.")
        return SaltedHeader(first, has_magic=False)

    salt = read_exact(source, SALT_SIZE)
    if len(salt) != SALT_SIZE:
        raise MissingHeader("Salted header is truncated (salt is missing).")
    return SaltedHeader(salt)
