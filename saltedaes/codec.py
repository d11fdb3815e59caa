# saltedaes/codec.py

import os
from typing import BinaryIO, Optional, Union

from saltedaes.common.errors import BadDecrypt, IOFailure, InputNotFound, InvalidPadding
from saltedaes.common.format import BLOCK_SIZE, HEADER_SIZE, ITERATIONS, SaltedHeader, read_exact, read_header
from saltedaes.common.utils import generate_salt
from saltedaes.crypto.aes import BlockCipher, get_aes
from saltedaes.crypto.kdf import derive_key
from saltedaes.crypto.pkcs7 import pad_block, unpad_length

Passphrase = Union[str, bytes]
PathLike = Union[str, os.PathLike]


class CodecResult:
    """Summary of one successful encrypt/decrypt call."""

    def __init__(self, operation: str, implementation: str, salt: bytes, bytes_read: int, bytes_written: int):
        self.operation = operation
        self.implementation = implementation
        self.salt = salt
        self.bytes_read = bytes_read
        self.bytes_written = bytes_written

    def __repr__(self):
        return (f"CodecResult(operation={self.operation!r}, implementation={self.implementation!r}, "
                f"salt={self.salt.hex()}, bytes_read={self.bytes_read}, bytes_written={self.bytes_written})")


def _prepare(passphrase: Passphrase, salt: bytes, aes: BlockCipher, iterations: int):
    """Derives the key and expands it once for the whole operation."""
    key = derive_key(passphrase, salt, iterations)
    return aes.expand(key)


def encrypt_stream(source: BinaryIO, sink: BinaryIO, passphrase: Passphrase, aes: Optional[BlockCipher] = None,
                   salt: Optional[bytes] = None, iterations: int = ITERATIONS) -> CodecResult:
    """
    Writes `Salted__` + salt, then the source as AES-128-ECB blocks.
    The last block always carries 1..16 bytes of PKCS#7 padding.
    """
    aes = aes or get_aes()
    header = SaltedHeader(salt if salt is not None else generate_salt())
    schedule = _prepare(passphrase, header.salt, aes, iterations)

    bytes_read = 0
    try:
        sink.write(header.to_bytes())
        bytes_written = HEADER_SIZE

        while True:
            block = read_exact(source, BLOCK_SIZE)
            bytes_read += len(block)
            block, final = pad_block(block)
            sink.write(aes.encrypt_block(block, schedule))
            bytes_written += BLOCK_SIZE
            if final:
                break
    except OSError as e:
        raise IOFailure(f"I/O error during encryption: {e}") from e

    return CodecResult("encryption", aes.name, header.salt, bytes_read, bytes_written)


def decrypt_stream(source: BinaryIO, sink: BinaryIO, passphrase: Passphrase, aes: Optional[BlockCipher] = None,
                   require_magic: bool = False, iterations: int = ITERATIONS,
                   header: Optional[SaltedHeader] = None) -> CodecResult:
    """
    Reverses `encrypt_stream`.

    Seekable sinks get every block written straight away and are truncated
    by the padding length at the end. Other sinks hold back one block until
    the next one shows it is not the last. On BadDecrypt a seekable sink is
    left un-truncated. Pass `header` when it was already read from `source`.
    """
    aes = aes or get_aes()
    try:
        if header is None:
            header = read_header(source, require_magic)
        schedule = _prepare(passphrase, header.salt, aes, iterations)

        if sink.seekable():
            bytes_read, bytes_written = _decrypt_truncating(source, sink, aes, schedule)
        else:
            bytes_read, bytes_written = _decrypt_lookahead(source, sink, aes, schedule)
    except OSError as e:
        raise IOFailure(f"I/O error during decryption: {e}") from e

    header_size = HEADER_SIZE if header.has_magic else len(header.salt)
    return CodecResult("decryption", aes.name, header.salt, header_size + bytes_read, bytes_written)


def _next_ciphertext_block(source: BinaryIO) -> bytes:
    block = read_exact(source, BLOCK_SIZE)
    if block and len(block) != BLOCK_SIZE:
        raise BadDecrypt(f"Ciphertext ends with a partial {len(block)}-byte block.")
    return block


def _padding_length(last_block: Optional[bytes]) -> int:
    if last_block is None:
        raise BadDecrypt("No ciphertext blocks follow the header.")
    try:
        return unpad_length(last_block)
    except InvalidPadding as e:
        raise BadDecrypt() from e


def _decrypt_truncating(source: BinaryIO, sink: BinaryIO, aes: BlockCipher, schedule):
    start = sink.tell()
    bytes_read = 0
    last_block = None

    while True:
        block = _next_ciphertext_block(source)
        if not block:
            break
        bytes_read += BLOCK_SIZE
        last_block = aes.decrypt_block(block, schedule)
        sink.write(last_block)

    n = _padding_length(last_block)
    end = sink.tell() - n
    sink.truncate(end)
    sink.seek(end)
    return bytes_read, end - start


def _decrypt_lookahead(source: BinaryIO, sink: BinaryIO, aes: BlockCipher, schedule):
    bytes_read = 0
    bytes_written = 0
    pending = None

    while True:
        block = _next_ciphertext_block(source)
        if not block:
            break
        bytes_read += BLOCK_SIZE
        if pending is not None:
            sink.write(pending)
            bytes_written += BLOCK_SIZE
        pending = aes.decrypt_block(block, schedule)

    n = _padding_length(pending)
    tail = pending[:BLOCK_SIZE - n]
    sink.write(tail)
    return bytes_read, bytes_written + len(tail)


def _check_input(input_path: PathLike):
    if not os.path.isfile(input_path):
        raise InputNotFound(f"Input file '{input_path}' doesn't exist.")


def encrypt_file(input_path: PathLike, output_path: PathLike, passphrase: Passphrase,
                 use: Optional[str] = None, salt: Optional[bytes] = None, iterations: int = ITERATIONS) -> CodecResult:
    """Encrypts `input_path` into `output_path` (created or overwritten)."""
    _check_input(input_path)
    aes = get_aes(use) if use else get_aes()
    try:
        with open(input_path, "rb") as fin, open(output_path, "wb") as fout:
            return encrypt_stream(fin, fout, passphrase, aes, salt=salt, iterations=iterations)
    except OSError as e:
        raise IOFailure(f"Cannot open files for encryption: {e}") from e


def decrypt_file(input_path: PathLike, output_path: PathLike, passphrase: Passphrase,
                 use: Optional[str] = None, require_magic: bool = False, iterations: int = ITERATIONS) -> CodecResult:
    """
    Decrypts `input_path` into `output_path`.

    The header is read before the output is opened, so a MissingHeader leaves
    an existing output untouched. The output is opened read/write so it can
    be truncated.
    """
    _check_input(input_path)
    aes = get_aes(use) if use else get_aes()
    try:
        with open(input_path, "rb") as fin:
            header = read_header(fin, require_magic)
            with open(output_path, "w+b") as fout:
                return decrypt_stream(fin, fout, passphrase, aes, iterations=iterations, header=header)
    except OSError as e:
        raise IOFailure(f"Cannot open files for decryption: {e}") from e
