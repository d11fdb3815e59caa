# saltedaes/cli.py

import argparse
import sys

from saltedaes.codec import decrypt_file, encrypt_file
from saltedaes.common.errors import BadDecrypt, InputNotFound, IOFailure, MissingHeader, SaltedAESError
from saltedaes.common.utils import now_ms, to_hex
from saltedaes.crypto.aes import DEFAULT_IMPLEMENTATION, IMPLEMENTATIONS

TAG = "[SALTEDAES]"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="saltedaes",
        description="Encrypts (default) or decrypts a file using Advanced Encryption Standard (AES-128-ECB)."
    )
    parser.add_argument('-i', '--input', required=True, help='The path to the file that is to be encrypted/decrypted.')
    parser.add_argument('-o', '--output', required=True, help='The target name of the output file after encryption/decryption.')
    parser.add_argument('-p', '--passphrase', required=True, help='The passphrase to derive the key from.')
    parser.add_argument('-d', '--decrypt', action='store_true', help='Decrypt the input data.')
    parser.add_argument('-u', '--use', choices=sorted(IMPLEMENTATIONS), default=DEFAULT_IMPLEMENTATION,
                        help=f'Choose which implementation to use ({DEFAULT_IMPLEMENTATION} by default).')
    parser.add_argument('--require-magic', action='store_true',
                        help="When decrypting, reject input that does not start with 'Salted__'.")
    return parser


def _fail(message: str) -> int:
    print(f"{TAG} ❌ {message}", file=sys.stderr)
    return 1


def run(args: argparse.Namespace) -> int:
    """Runs one operation and maps engine errors to messages and an exit code."""
    operation = "decryption" if args.decrypt else "encryption"
    print(f"{TAG} Performing {operation} using the {args.use} implementation of the AES-128-ECB algorithm.")

    started = now_ms()
    try:
        if args.decrypt:
            result = decrypt_file(args.input, args.output, args.passphrase, use=args.use,
                                  require_magic=args.require_magic)
        else:
            result = encrypt_file(args.input, args.output, args.passphrase, use=args.use)
    except InputNotFound:
        return _fail("Input file doesn't exist, exiting.")
    except BadDecrypt:
        return _fail("Bad decrypt (is the supplied passphrase correct?)")
    except MissingHeader as e:
        return _fail(f"Not a salted file: {e}")
    except IOFailure as e:
        return _fail(f"I/O failure: {e}")
    except SaltedAESError as e:
        return _fail(str(e))

    elapsed = now_ms() - started
    print(f"{TAG} ✅ Wrote {result.bytes_written} bytes to {args.output} (salt {to_hex(result.salt)}).")
    print(f"{TAG} The selected operation was performed in {elapsed} ms.")
    return 0


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    return run(args)


if __name__ == '__main__':
    sys.exit(main())
