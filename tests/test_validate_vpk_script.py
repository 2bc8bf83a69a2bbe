import subprocess
import sys
from pathlib import Path

SCRIPT = Path(__file__).resolve().parents[1] / "validate_vpk.py"


def _run(*args):
    return subprocess.run(
        [sys.executable, str(SCRIPT), *map(str, args)],
        capture_output=True,
        text=True,
    )


def test_validate_vpk(tmp_path, vpk_bytes):
    out = tmp_path / "test_dir.vpk"
    out.write_bytes(vpk_bytes([("txt", "models/props", "chair", 128, 64)]))

    result = _run(out, "--list")
    assert result.returncode == 0, result.stdout + result.stderr
    assert "entries: 1" in result.stdout
    assert "models/props/chair.txt offset=128 size=64 archive=-1" in result.stdout
    assert "Validation succeeded" in result.stdout


def test_validate_vpk_corrupt(tmp_path, vpk_bytes):
    out = tmp_path / "corrupt_dir.vpk"
    out.write_bytes(vpk_bytes([("txt", "models/props", "chair", 128, 64)], terminator=0))

    result = _run(out)
    assert result.returncode == 1
    assert "Failed to parse" in result.stdout
    assert "Validation succeeded" not in result.stdout


def test_validate_vpk_not_a_vpk(tmp_path):
    out = tmp_path / "notes.txt"
    out.write_bytes(b"hello world, not an archive")

    result = _run(out)
    assert result.returncode == 2
    assert "Failed to parse" in result.stdout
