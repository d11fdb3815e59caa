# saltedaes/crypto/kdf.py

from typing import Optional, Union

from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC
from cryptography.hazmat.backends import default_backend

from saltedaes.common.format import ITERATIONS, KEY_SIZE


def derive_key(passphrase: Union[str, bytes], salt: bytes, iterations: int = ITERATIONS,
               algorithm: Optional[hashes.HashAlgorithm] = None, length: int = KEY_SIZE) -> bytes:
    """
    Stretches the passphrase into a `length`-byte key.
    K = PBKDF2-HMAC-SHA256(passphrase, salt, 10000)[:16] for this format.
    """
    if not salt:
        raise ValueError("Salt must not be empty.")
    if isinstance(passphrase, str):
        # argv bytes that are not UTF-8 arrive as lone surrogates
        passphrase = passphrase.encode('utf-8', 'surrogateescape')

    kdf = PBKDF2HMAC(
        algorithm=algorithm if algorithm is not None else hashes.SHA256(),
        length=length,
        salt=salt,
        iterations=iterations,
        backend=default_backend(),
    )
    return kdf.derive(passphrase)
