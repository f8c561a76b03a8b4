"""
Tests for the batch command line entry point.
"""

from pathlib import Path

import cv2
import numpy as np
import pytest

import main


def _write_noise_jpeg(path: Path, height: int, width: int) -> None:
    img = np.random.default_rng(5).integers(0, 256, (height, width, 3), dtype=np.uint8)
    assert cv2.imwrite(str(path), img, [int(cv2.IMWRITE_JPEG_QUALITY), 100]), "cv2 failed to write test JPEG"


def test_optimizes_and_copies_into_output_dir(tmp_path: Path):
    big = tmp_path / "big.jpg"
    small = tmp_path / "small.jpg"
    _write_noise_jpeg(big, 300, 450)
    _write_noise_jpeg(small, 8, 8)
    out = tmp_path / "out"

    budget_mb = (big.stat().st_size // 2) / (1024 * 1024)
    rc = main.main([
        str(big),
        str(small),
        "--output-dir", str(out),
        "--max-size-mb", f"{budget_mb:.6f}",
        "--max-width", "200",
        "--format", "webp",
        "--workers", "2",
    ])

    assert rc == 0
    written = sorted(p.name for p in out.iterdir())
    assert "small.jpg" in written
    optimized = [name for name in written if name.startswith("big_optimized_")]
    assert len(optimized) == 1
    assert optimized[0].endswith(".webp")
    assert (out / "small.jpg").read_bytes() == small.read_bytes()


def test_missing_input_returns_error(tmp_path: Path):
    rc = main.main([str(tmp_path / "missing.jpg"), "--output-dir", str(tmp_path / "out")])
    assert rc == 1


def test_invalid_quality_is_an_argument_error(tmp_path: Path):
    img = tmp_path / "a.jpg"
    _write_noise_jpeg(img, 8, 8)

    with pytest.raises(SystemExit) as exc_info:
        main.main([str(img), "--quality", "2.5"])

    assert exc_info.value.code == 2


def test_same_named_inputs_do_not_overwrite_each_other(tmp_path: Path):
    first_dir = tmp_path / "ceremony"
    second_dir = tmp_path / "reception"
    first_dir.mkdir()
    second_dir.mkdir()
    first = first_dir / "photo.jpg"
    second = second_dir / "photo.jpg"
    _write_noise_jpeg(first, 8, 8)
    second.write_bytes(first.read_bytes() + b"\x00")
    out = tmp_path / "out"

    rc = main.main([str(first), str(second), "--output-dir", str(out)])

    assert rc == 0
    assert sorted(p.name for p in out.iterdir()) == ["photo.jpg", "photo_1.jpg"]
    assert (out / "photo.jpg").read_bytes() == first.read_bytes()
    assert (out / "photo_1.jpg").read_bytes() == second.read_bytes()


def test_unique_output_name_skips_taken_suffixes():
    used = {"photo.jpg", "photo_1.jpg"}

    assert main.unique_output_name("photo.jpg", used) == "photo_2.jpg"
    assert main.unique_output_name("other.png", used) == "other.png"
    assert {"photo_2.jpg", "other.png"} <= used
