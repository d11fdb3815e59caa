import pytest
from cryptography.hazmat.primitives import hashes

from saltedaes.crypto.kdf import derive_key


def test_known_answer_pbkdf2_sha256():
    # RFC 7914 section 11, first 16 bytes
    assert derive_key("passwd", b"salt", iterations=1).hex() == "55ac046e56e3089fec1691c22544b605"


def test_default_parameters_give_16_byte_key():
    key = derive_key("test", b"\x00" * 8)
    assert len(key) == 16


def test_deterministic():
    assert derive_key("pass", b"saltsalt") == derive_key("pass", b"saltsalt")


def test_str_and_utf8_bytes_agree():
    assert derive_key("pässword", b"saltsalt") == derive_key("pässword".encode("utf-8"), b"saltsalt")


def test_salt_and_iterations_change_key():
    base = derive_key("pass", b"saltsalt")
    assert derive_key("pass", b"saltsalu") != base
    assert derive_key("pass", b"saltsalt", iterations=9999) != base


def test_other_hash_algorithm():
    assert derive_key("pass", b"saltsalt", algorithm=hashes.SHA1()) != derive_key("pass", b"saltsalt")


def test_empty_salt_rejected():
    with pytest.raises(ValueError):
        derive_key("pass", b"")


def test_undecodable_argv_bytes_reach_pbkdf2():
    # os.fsdecode(b"\xff") on a UTF-8 locale
    assert derive_key("\udcff", b"saltsalt") == derive_key(b"\xff", b"saltsalt")
