# saltedaes/crypto/pkcs7.py

from typing import Tuple

from cryptography.hazmat.primitives import padding

from saltedaes.common.errors import InvalidPadding
from saltedaes.common.format import BLOCK_SIZE

BLOCK_BITS = BLOCK_SIZE * 8


def pad_block(block: bytes) -> Tuple[bytes, bool]:
    """
    Returns (16-byte block, is_final).

    A full block passes through untouched since more input may follow. A
    shorter tail (including an empty one) is the end of the stream and gets
    1..16 bytes of PKCS#7 padding.
    """
    if len(block) == BLOCK_SIZE:
        return block, False
    if len(block) > BLOCK_SIZE:
        raise ValueError(f"Block is {len(block)} bytes, expected at most {BLOCK_SIZE}.")

    padder = padding.PKCS7(BLOCK_BITS).padder()
    return padder.update(block) + padder.finalize(), True


def unpad_length(last_block: bytes) -> int:
    """Validates the padding of the last decrypted block and returns its length."""
    if len(last_block) != BLOCK_SIZE:
        raise InvalidPadding(f"Final block is {len(last_block)} bytes, expected {BLOCK_SIZE}.")

    unpadder = padding.PKCS7(BLOCK_BITS).unpadder()
    try:
        data = unpadder.update(last_block) + unpadder.finalize()
    except ValueError as e:
        raise InvalidPadding(f"Invalid padding (last byte {last_block[-1]}).") from e
    return BLOCK_SIZE - len(data)
