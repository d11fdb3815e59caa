# scripts/bench_aes.py

import argparse
import io
import os
import time

from saltedaes.codec import decrypt_stream, encrypt_stream
from saltedaes.crypto.aes import IMPLEMENTATIONS


def bench_implementation(name: str, payload: bytes, passphrase: str = "bench") -> tuple[float, float]:
    """Times one encrypt + decrypt round trip; returns (encrypt_s, decrypt_s)."""
    aes = IMPLEMENTATIONS[name]

    ciphertext = io.BytesIO()
    start = time.perf_counter()
    encrypt_stream(io.BytesIO(payload), ciphertext, passphrase, aes)
    encrypt_s = time.perf_counter() - start

    ciphertext.seek(0)
    plaintext = io.BytesIO()
    start = time.perf_counter()
    decrypt_stream(ciphertext, plaintext, passphrase, aes)
    decrypt_s = time.perf_counter() - start

    if plaintext.getvalue() != payload:
        raise RuntimeError(f"{name}: round trip mismatch")
    return encrypt_s, decrypt_s


def run_benchmark(size: int, names=None) -> dict:
    """Benchmarks every (or the named) registered implementation over `size` random bytes."""
    payload = os.urandom(size)
    results = {}
    for name in names or sorted(IMPLEMENTATIONS):
        print(f"[*] Benchmarking '{name}' over {size} bytes...")
        results[name] = bench_implementation(name, payload)
    return results


if __name__ == '__main__':
    parser = argparse.ArgumentParser(description="Compare the registered AES-128 block cipher implementations.")
    parser.add_argument("--size", type=int, default=64 * 1024, help="Payload size in bytes.")
    parser.add_argument("--use", action="append", choices=sorted(IMPLEMENTATIONS), help="Limit to these implementations.")
    args = parser.parse_args()

    results = run_benchmark(args.size, args.use)
    print(f"\n{'implementation':<16}{'encrypt ms':>12}{'decrypt ms':>12}")
    for name, (enc, dec) in results.items():
        print(f"{name:<16}{enc * 1000:>12.1f}{dec * 1000:>12.1f}")
    print("\n[SUCCESS] Benchmark complete.")
