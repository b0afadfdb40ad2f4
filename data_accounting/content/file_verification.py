"""Content stored in the file-verification slot of a file revision."""
from __future__ import annotations

import os

from data_accounting.merkle.hasher import Hasher
from data_accounting.results import Result, Success

MESSAGES = {
    "da-file-verification-no-hash": "No verification hash has been computed for this file.",
    "da-file-verification-hash": "File verification hash: {hash}",
}


class FileVerificationContent:
    """Text content holding a file's digest; the empty string means no hash yet."""

    CONTENT_MODEL_FILE_VERIFICATION = "file-verification"
    SLOT_ROLE_FILE_VERIFICATION = "file-verification-slot"

    def __init__(self, text: str = ""):
        self._text = text

    @property
    def text(self) -> str:
        return self._text

    @property
    def model(self) -> str:
        return self.CONTENT_MODEL_FILE_VERIFICATION

    def is_empty(self) -> bool:
        return self._text == ""

    def digest(self) -> str | None:
        if self.is_empty():
            return None
        return self._text.strip()

    def render(self) -> str:
        if self.is_empty():
            return MESSAGES["da-file-verification-no-hash"]
        return MESSAGES["da-file-verification-hash"].format(hash=self.digest())

    def set_hash_from_file(
        self, path: str | os.PathLike[str] | None, hasher: Hasher | None = None,
    ) -> Result[str]:
        """Hash the file at ``path`` into this content; text is left as is on failure."""
        result = (hasher or Hasher()).hash_file(path)
        if isinstance(result, Success):
            self._text = result.value
        return result

    def serialize(self) -> str:
        return self._text

    @classmethod
    def unserialize(cls, text: str) -> "FileVerificationContent":
        return cls(text)
