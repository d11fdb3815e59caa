# saltedaes/crypto/aes.py

from typing import Any, Dict, Protocol

from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes
from cryptography.hazmat.backends import default_backend

from saltedaes.common.errors import UnknownImplementation
from saltedaes.common.format import BLOCK_SIZE, KEY_SIZE
from saltedaes.crypto.aes_pure import PythonAES

DEFAULT_IMPLEMENTATION = "openssl"


class BlockCipher(Protocol):
    """
    Single-block AES-128 capability the codec is written against.

    `expand` runs once per operation; the schedule it returns is opaque to
    callers and is handed back on every block call.
    """
    name: str

    def expand(self, key: bytes) -> Any: ...

    def encrypt_block(self, block: bytes, schedule: Any) -> bytes: ...

    def decrypt_block(self, block: bytes, schedule: Any) -> bytes: ...


class _OpenSSLSchedule:
    """Keeps one ECB encryptor and decryptor context alive for the whole operation."""

    def __init__(self, key: bytes):
        cipher = Cipher(algorithms.AES(key), modes.ECB(), backend=default_backend())
        self.encryptor = cipher.encryptor()
        self.decryptor = cipher.decryptor()


class OpenSSLAES:
    """AES-128-ECB through the `cryptography` (OpenSSL) backend."""
    name = "openssl"

    def expand(self, key: bytes) -> _OpenSSLSchedule:
        if len(key) != KEY_SIZE:
            raise ValueError(f"AES key must be {KEY_SIZE} bytes.")
        return _OpenSSLSchedule(key)

    def encrypt_block(self, block: bytes, schedule: _OpenSSLSchedule) -> bytes:
        _check_block(block)
        return schedule.encryptor.update(block)

    def decrypt_block(self, block: bytes, schedule: _OpenSSLSchedule) -> bytes:
        _check_block(block)
        return schedule.decryptor.update(block)


def _check_block(block: bytes):
    if len(block) != BLOCK_SIZE:
        raise ValueError(f"AES block must be {BLOCK_SIZE} bytes, got {len(block)}.")


IMPLEMENTATIONS: Dict[str, BlockCipher] = {
    OpenSSLAES.name: OpenSSLAES(),
    PythonAES.name: PythonAES(),
}


def get_aes(name: str = DEFAULT_IMPLEMENTATION) -> BlockCipher:
    """Looks up a registered implementation by name."""
    try:
        return IMPLEMENTATIONS[name]
    except KeyError:
        choices = ", ".join(sorted(IMPLEMENTATIONS))
        raise UnknownImplementation(f"Unknown AES implementation '{name}' (choose from: {choices}).") from None
