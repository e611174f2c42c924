"""Operation results returned by use cases"""
from dataclasses import dataclass
from enum import Enum
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


class ResultStatus(str, Enum):
    """Outcome of a store operation"""
    OK = "ok"
    NOT_FOUND = "not_found"
    UNAUTHORIZED = "unauthorized"
    INVALID = "invalid"
    CONFLICT = "conflict"


@dataclass
class OperationResult(Generic[T]):
    """Outcome of a mutating operation, with the affected record on success"""
    status: ResultStatus
    value: Optional[T] = None
    message: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status == ResultStatus.OK

    @classmethod
    def success(cls, value: Optional[T] = None) -> "OperationResult[T]":
        return cls(ResultStatus.OK, value)

    @classmethod
    def not_found(cls, message: str) -> "OperationResult[T]":
        return cls(ResultStatus.NOT_FOUND, message=message)

    @classmethod
    def unauthorized(cls, message: str = "Authentication required") -> "OperationResult[T]":
        return cls(ResultStatus.UNAUTHORIZED, message=message)

    @classmethod
    def invalid(cls, message: str) -> "OperationResult[T]":
        return cls(ResultStatus.INVALID, message=message)

    @classmethod
    def conflict(cls, message: str) -> "OperationResult[T]":
        return cls(ResultStatus.CONFLICT, message=message)
