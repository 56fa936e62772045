from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


class ErrorKind(str, Enum):
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    INSUFFICIENT_STOCK = "insufficient_stock"
    IMMUTABLE_FIELD = "immutable_field"
    INVALID_INPUT = "invalid_input"


@dataclass(frozen=True)
class Failure:
    kind: ErrorKind
    message: str


@dataclass(frozen=True)
class Result(Generic[T]):
    """Outcome of a store, ledger or catalog call.

    Exactly one of ``value``/``error`` is meaningful: a successful result may
    carry ``None`` as its value (deletes), so callers check ``ok`` rather than
    the value itself.
    """

    value: Optional[T] = None
    error: Optional[Failure] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: Optional[T] = None) -> "Result[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, kind: ErrorKind, message: str) -> "Result[T]":
        return cls(error=Failure(kind=kind, message=message))

    @classmethod
    def from_failure(cls, error: Failure) -> "Result[T]":
        return cls(error=error)


def not_found(entity: str, entity_id) -> Result:
    return Result.failure(ErrorKind.NOT_FOUND, f"{entity} with ID {entity_id} not found")


__all__ = ["ErrorKind", "Failure", "Result", "not_found"]
