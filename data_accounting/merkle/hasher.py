"""Canonical hashing for revision content, files and Merkle tree nodes."""
from __future__ import annotations

import hashlib
import os
from pathlib import Path

from data_accounting.results import ErrorKind, Failure, Result, Success


class Hasher:
    """SHA3-512 hex digests.

    ``combine`` hashes the plain UTF-8 concatenation of two hex digests.
    Digests are fixed width, so the concatenation is unambiguous and any
    implementation can reproduce it without extra framing.
    """

    algorithm = "sha3_512"

    def digest(self, data: bytes) -> str:
        if not data:
            raise ValueError("Refusing to hash empty content")
        return hashlib.new(self.algorithm, data).hexdigest()

    def get_hash_sum(self, content: str) -> str:
        return self.digest(content.encode("utf-8"))

    def combine(self, left: str, right: str) -> str:
        return self.digest((left + right).encode("utf-8"))

    def hash_file(self, path: str | os.PathLike[str] | None) -> Result[str]:
        """Hash a file on disk, failing for missing, unreadable or empty files."""
        if not path:
            return Failure(ErrorKind.UNREADABLE_CONTENT, "No local path for file")
        file_path = Path(path)
        if not file_path.is_file():
            return Failure(ErrorKind.UNREADABLE_CONTENT, f"File not found: {file_path}")
        try:
            content = file_path.read_bytes()
        except OSError as exc:
            return Failure(ErrorKind.UNREADABLE_CONTENT, f"Cannot read {file_path}: {exc}")
        if not content:
            return Failure(ErrorKind.UNREADABLE_CONTENT, f"File is empty: {file_path}")
        return Success(self.digest(content))
