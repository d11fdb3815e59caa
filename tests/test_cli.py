import pytest

from saltedaes.cli import build_parser, main


def test_encrypt_then_decrypt(tmp_path, capsys):
    src = tmp_path / "note.txt"
    enc = tmp_path / "note.enc"
    out = tmp_path / "note.out"
    src.write_bytes(b"meet at noon")

    assert main(["-i", str(src), "-o", str(enc), "-p", "secret"]) == 0
    captured = capsys.readouterr()
    assert "Performing encryption using the openssl implementation of the AES-128-ECB algorithm." in captured.out
    assert "The selected operation was performed in" in captured.out

    assert main(["-i", str(enc), "-o", str(out), "-p", "secret", "-d", "-u", "python"]) == 0
    captured = capsys.readouterr()
    assert "Performing decryption using the python implementation" in captured.out
    assert out.read_bytes() == b"meet at noon"


def test_missing_input(tmp_path, capsys):
    out = tmp_path / "out"
    assert main(["-i", str(tmp_path / "ghost"), "-o", str(out), "-p", "x"]) == 1
    assert "Input file doesn't exist, exiting." in capsys.readouterr().err
    assert not out.exists()


def test_bad_decrypt(tmp_path, capsys, bad_padding_file):
    assert main(["-i", str(bad_padding_file), "-o", str(tmp_path / "out"), "-p", "test", "--decrypt"]) == 1
    assert "Bad decrypt (is the supplied passphrase correct?)" in capsys.readouterr().err


def test_require_magic(tmp_path, capsys):
    legacy = tmp_path / "legacy.bin"
    legacy.write_bytes(b"12345678" + b"\x00" * 16)
    argv = ["-i", str(legacy), "-o", str(tmp_path / "out"), "-p", "x", "-d", "--require-magic"]
    assert main(argv) == 1
    assert "Not a salted file" in capsys.readouterr().err


def test_required_flags_and_choices():
    parser = build_parser()
    with pytest.raises(SystemExit):
        parser.parse_args(["-i", "a", "-o", "b"])
    with pytest.raises(SystemExit):
        parser.parse_args(["-i", "a", "-o", "b", "-p", "c", "-u", "asm"])

    args = parser.parse_args(["-i", "a", "-o", "b", "-p", "c"])
    assert (args.decrypt, args.use, args.require_magic) == (False, "openssl", False)


def test_passphrase_from_undecodable_argv(tmp_path):
    src = tmp_path / "note.txt"
    enc = tmp_path / "note.enc"
    out = tmp_path / "note.out"
    src.write_bytes(b"latin-1 secret")

    # what sys.argv holds for the raw byte 0xff on a UTF-8 locale
    passphrase = "caf\udce9\udcff"
    assert main(["-i", str(src), "-o", str(enc), "-p", passphrase]) == 0
    assert main(["-i", str(enc), "-o", str(out), "-p", passphrase, "-d"]) == 0
    assert out.read_bytes() == b"latin-1 secret"
