from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

T = TypeVar("T")

UNEXPECTED_ERROR_MESSAGE = "An unexpected error occurred while processing your request."


class ServiceError(Exception):
    def __init__(
        self,
        message: str,
        status: int = 400,
        code: str = "bad_request",
        details: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        self.status = status
        self.code = code
        self.details = details


def unexpected_error(details: str) -> ServiceError:
    return ServiceError(UNEXPECTED_ERROR_MESSAGE, 500, "unexpected_error", details=details)


@dataclass(frozen=True)
class Result(Generic[T]):
    """Outcome of one pipeline step: a value, or the error that stopped it."""

    value: Optional[T] = None
    error: Optional[ServiceError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T) -> "Result[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: ServiceError) -> "Result[T]":
        return cls(error=error)
