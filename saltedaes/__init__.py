# saltedaes/__init__.py

from saltedaes.codec import CodecResult, decrypt_file, decrypt_stream, encrypt_file, encrypt_stream
from saltedaes.common.errors import (
    BadDecrypt,
    InputNotFound,
    InvalidPadding,
    IOFailure,
    MissingHeader,
    SaltedAESError,
    UnknownImplementation,
)
from saltedaes.common.format import MAGIC, SaltedHeader
from saltedaes.crypto.aes import DEFAULT_IMPLEMENTATION, IMPLEMENTATIONS, get_aes
from saltedaes.crypto.kdf import derive_key

__version__ = "1.0.0"
