import importlib.util
from pathlib import Path

SCRIPT = Path(__file__).resolve().parent.parent / "scripts" / "bench_aes.py"


def _load_script():
    spec = importlib.util.spec_from_file_location("bench_aes", SCRIPT)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def test_benchmark_covers_every_implementation(capsys):
    bench = _load_script()
    results = bench.run_benchmark(64)
    assert set(results) == {"openssl", "python"}
    for encrypt_s, decrypt_s in results.values():
        assert encrypt_s >= 0 and decrypt_s >= 0
    assert "[*] Benchmarking 'python' over 64 bytes..." in capsys.readouterr().out


def test_benchmark_single_implementation():
    bench = _load_script()
    assert list(bench.run_benchmark(16, ["python"])) == ["python"]
