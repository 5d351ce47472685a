from dataclasses import dataclass
from enum import Enum
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


class ResultStatus(str, Enum):
    OK = "ok"
    ERROR = "error"
    TIMEOUT = "timeout"


@dataclass
class ServiceResult(Generic[T]):
    """Outcome of a call to a third-party HTTP service."""

    status: ResultStatus
    value: Optional[T] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status is ResultStatus.OK

    @classmethod
    def success(cls, value: T) -> "ServiceResult[T]":
        return cls(status=ResultStatus.OK, value=value)

    @classmethod
    def failure(cls, error: str) -> "ServiceResult[T]":
        return cls(status=ResultStatus.ERROR, error=error)

    @classmethod
    def timed_out(cls, error: str) -> "ServiceResult[T]":
        return cls(status=ResultStatus.TIMEOUT, error=error)
