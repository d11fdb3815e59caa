import io

import pytest

from saltedaes.common.format import MAGIC
from saltedaes.crypto.aes import get_aes
from saltedaes.crypto.kdf import derive_key

FIXED_SALT = bytes.fromhex("0102030405060708")
PASSPHRASE = "test"


def craft_ciphertext(plain_blocks, passphrase=PASSPHRASE, salt=FIXED_SALT, magic=True) -> bytes:
    """Encrypts raw 16-byte blocks with no padding applied, so the last block can carry anything."""
    aes = get_aes("openssl")
    schedule = aes.expand(derive_key(passphrase, salt))
    body = b"".join(aes.encrypt_block(block, schedule) for block in plain_blocks)
    return (MAGIC if magic else b"") + salt + body


class NonSeekable(io.BytesIO):
    """In-memory sink that reports itself as a pipe."""

    def seekable(self):
        return False


class Trickle(io.BytesIO):
    """Source that never returns more than a few bytes per read."""

    def read(self, size=-1):
        if size is not None and size > 3:
            size = 3
        return super().read(size)


class BrokenSink(io.BytesIO):
    def write(self, data):
        raise OSError("No space left on device")


@pytest.fixture
def bad_padding_file(tmp_path):
    """A salted file whose final block decrypts to a last byte of 0."""
    path = tmp_path / "bad.enc"
    path.write_bytes(craft_ciphertext([b"A" * 16, b"B" * 15 + b"\x00"]))
    return path
