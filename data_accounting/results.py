"""Tagged results returned across the proof, lookup and config boundaries."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Generic, TypeVar, Union

T = TypeVar("T")


class ErrorKind(StrEnum):
    MISSING_PARAMETER = "missing_parameter"
    INVALID_PARAMETER = "invalid_parameter"
    NOT_FOUND = "not_found"
    UNKNOWN_CONFIG_KEY = "unknown_config_key"
    DATABASE_ERROR = "database_error"
    UNREADABLE_CONTENT = "unreadable_content"


@dataclass(frozen=True)
class Success(Generic[T]):
    value: T

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Failure:
    kind: ErrorKind
    message: str

    @property
    def ok(self) -> bool:
        return False


Result = Union[Success[T], Failure]


@dataclass
class Status:
    """Aggregates fatal messages from several sub-checks into one value."""
    errors: list[Failure] = field(default_factory=list)

    @classmethod
    def good(cls) -> "Status":
        return cls()

    def fatal(self, kind: ErrorKind, message: str) -> None:
        self.errors.append(Failure(kind=kind, message=message))

    def merge(self, other: "Status") -> None:
        self.errors.extend(other.errors)

    def is_ok(self) -> bool:
        return not self.errors

    @property
    def kinds(self) -> list[ErrorKind]:
        return [e.kind for e in self.errors]

    @property
    def message(self) -> str:
        return "; ".join(e.message for e in self.errors)


class ConfigurationError(Exception):
    """Raised when a typed configuration mutation does not succeed."""

    def __init__(self, status: Status):
        super().__init__(status.message)
        self.status = status
