"""
Result type returned by every CRUD function.

CRUD functions never raise for expected failures (missing record, duplicate,
bad credentials, full store). They return ``Result.fail(...)`` and the caller
decides how to surface it. Unexpected exceptions are caught once, at the
function boundary, by ``@service_operation``.
"""

import functools
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from enum import Enum as PyEnum
from typing import Generic, ParamSpec, TypeVar

from pydantic import ValidationError

from bagrut_portal.storage.local_store import QuotaExceededError

logger = logging.getLogger(__name__)

T = TypeVar("T")
P = ParamSpec("P")


class ErrorKind(str, PyEnum):
    """Coarse classification of a failed operation."""

    NOT_FOUND = "not_found"
    ALREADY_EXISTS = "already_exists"
    INVALID_CREDENTIALS = "invalid_credentials"
    INVALID = "invalid"
    QUOTA_EXCEEDED = "quota_exceeded"
    STORAGE = "storage"


@dataclass(frozen=True)
class ServiceError:
    kind: ErrorKind
    message: str


@dataclass(frozen=True)
class Result(Generic[T]):
    """Either ``data`` or ``error`` is meaningful, never both."""

    data: T | None = None
    error: ServiceError | None = None

    @property
    def success(self) -> bool:
        return self.error is None

    @classmethod
    def ok(cls, data: T | None = None) -> "Result[T]":
        return cls(data=data)

    @classmethod
    def fail(cls, kind: ErrorKind, message: str) -> "Result[T]":
        return cls(error=ServiceError(kind, message))

    @classmethod
    def not_found(cls, what: str) -> "Result[T]":
        return cls.fail(ErrorKind.NOT_FOUND, f"{what} not found")

    @classmethod
    def already_exists(cls, message: str) -> "Result[T]":
        return cls.fail(ErrorKind.ALREADY_EXISTS, message)


def service_operation(name: str) -> Callable[[Callable[P, Awaitable[Result[T]]]], Callable[P, Awaitable[Result[T]]]]:
    """
    Turn unexpected exceptions of a CRUD function into a failed Result.

    Usage:
        @service_operation("Add exam")
        async def add_exam(store, data) -> Result[ExamRead]:
            ...
    """

    def decorator(func: Callable[P, Awaitable[Result[T]]]) -> Callable[P, Awaitable[Result[T]]]:
        @functools.wraps(func)
        async def wrapper(*args: P.args, **kwargs: P.kwargs) -> Result[T]:
            try:
                return await func(*args, **kwargs)
            except ValidationError as e:
                logger.warning("%s rejected invalid data: %s", name, e)
                return Result.fail(ErrorKind.INVALID, str(e))
            except QuotaExceededError as e:
                logger.error("%s error: %s", name, e)
                return Result.fail(ErrorKind.QUOTA_EXCEEDED, str(e))
            except Exception as e:
                logger.exception("%s failed", name)
                return Result.fail(ErrorKind.STORAGE, str(e))

        return wrapper

    return decorator
