# saltedaes/common/utils.py

import secrets
import time

from saltedaes.common.format import SALT_SIZE


def generate_salt(size: int = SALT_SIZE) -> bytes:
    """Returns `size` bytes from the OS CSPRNG."""
    return secrets.token_bytes(size)

def to_hex(data: bytes) -> str:
    """Lowercase hex string, used for salts in console output."""
    return data.hex()

def now_ms() -> int:
    """Returns current time in milliseconds for operation timing."""
    return int(time.time() * 1000)
