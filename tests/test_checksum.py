"""Tests for checksum helpers."""

import hashlib
import io

import pytest

from common.checksum import (
    IncrementalChecksumCalculator,
    compute_checksum,
    compute_file_checksum,
    compute_stream_checksum,
    verify_checksum,
)

EMPTY_SHA256 = "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855"


def test_compute_checksum_known_values():
    assert compute_checksum(b"") == EMPTY_SHA256
    assert compute_checksum(b"abc") == hashlib.sha256(b"abc").hexdigest()


def test_compute_checksum_is_lowercase_hex():
    digest = compute_checksum(b"chunk data")

    assert len(digest) == 64
    assert digest == digest.lower()
    int(digest, 16)


def test_verify_checksum_accepts_uppercase_expected():
    digest = compute_checksum(b"payload")

    assert verify_checksum(b"payload", digest)
    assert verify_checksum(b"payload", digest.upper())
    assert not verify_checksum(b"other", digest)


def test_stream_checksum_matches_whole_buffer():
    data = bytes(range(256)) * 1000
    stream = io.BytesIO(data)

    assert compute_stream_checksum(stream, read_size=777) == compute_checksum(data)


def test_stream_checksum_starts_at_current_position():
    stream = io.BytesIO(b"headerbody")
    stream.read(6)

    assert compute_stream_checksum(stream) == compute_checksum(b"body")


def test_file_checksum(tmp_path):
    path = tmp_path / "data.bin"
    path.write_bytes(b"x" * 200_000)

    assert compute_file_checksum(path) == compute_checksum(b"x" * 200_000)


def test_file_checksum_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        compute_file_checksum(tmp_path / "missing.bin")


class TestIncrementalChecksumCalculator:
    def test_incremental_matches_single_pass(self):
        calculator = IncrementalChecksumCalculator()
        calculator.update(b"hello ")
        calculator.update(b"world")

        assert calculator.finalize() == compute_checksum(b"hello world")

    def test_update_after_finalize_fails(self):
        calculator = IncrementalChecksumCalculator()
        calculator.finalize()

        with pytest.raises(ValueError):
            calculator.update(b"late")

    def test_reset(self):
        calculator = IncrementalChecksumCalculator()
        calculator.update(b"discarded")
        calculator.finalize()
        calculator.reset()
        calculator.update(b"kept")

        assert calculator.finalize() == compute_checksum(b"kept")
