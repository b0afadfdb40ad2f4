"""Tests for the canonical content hasher."""
from __future__ import annotations

import hashlib

import pytest

from data_accounting.merkle.hasher import Hasher
from data_accounting.results import ErrorKind, Failure, Success


class TestDigest:
    def test_deterministic(self):
        """Hashing "hello" twice yields the same digest."""
        hasher = Hasher()
        assert hasher.digest(b"hello") == hasher.digest(b"hello")

    def test_stable_across_instances(self):
        assert Hasher().digest(b"hello") == Hasher().digest(b"hello")

    def test_is_sha3_512_hex(self):
        h = Hasher().digest(b"hello")
        assert h == hashlib.sha3_512(b"hello").hexdigest()
        assert len(h) == 128
        assert all(c in "0123456789abcdef" for c in h)

    def test_different_content(self):
        hasher = Hasher()
        assert hasher.digest(b"hello") != hasher.digest(b"hello ")

    def test_empty_input_rejected(self):
        with pytest.raises(ValueError):
            Hasher().digest(b"")

    def test_get_hash_sum_encodes_utf8(self):
        hasher = Hasher()
        assert hasher.get_hash_sum("grüße") == hasher.digest("grüße".encode("utf-8"))


class TestCombine:
    def test_deterministic(self):
        hasher = Hasher()
        assert hasher.combine("abc", "def") == hasher.combine("abc", "def")

    def test_order_matters(self):
        hasher = Hasher()
        a = hasher.digest(b"a")
        b = hasher.digest(b"b")
        assert hasher.combine(a, b) != hasher.combine(b, a)

    def test_is_digest_of_concatenation(self):
        hasher = Hasher()
        assert hasher.combine("abc", "def") == hasher.digest(b"abcdef")

    def test_no_whitespace_normalization(self):
        hasher = Hasher()
        assert hasher.combine("abc ", "def") != hasher.combine("abc", "def")


class TestHashFile:
    def test_hashes_file_content(self, tmp_path):
        path = tmp_path / "upload.txt"
        path.write_bytes(b"hello")
        result = Hasher().hash_file(path)
        assert isinstance(result, Success)
        assert result.value == Hasher().digest(b"hello")

    def test_missing_file(self, tmp_path):
        result = Hasher().hash_file(tmp_path / "missing.bin")
        assert isinstance(result, Failure)
        assert result.kind == ErrorKind.UNREADABLE_CONTENT

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.bin"
        path.write_bytes(b"")
        result = Hasher().hash_file(path)
        assert isinstance(result, Failure)
        assert result.kind == ErrorKind.UNREADABLE_CONTENT

    def test_no_path(self):
        result = Hasher().hash_file(None)
        assert isinstance(result, Failure)
        assert result.kind == ErrorKind.UNREADABLE_CONTENT

    def test_directory_is_unreadable(self, tmp_path):
        result = Hasher().hash_file(tmp_path)
        assert isinstance(result, Failure)
