from dataclasses import dataclass
from functools import wraps
from typing import Callable, Generic, TypeVar
import logging

from .errors import AssetTrackerError

T = TypeVar("T")

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Result(Generic[T]):
    """Outcome of a build, mutation or service call: a value or a typed error."""

    value: T | None = None
    error: AssetTrackerError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T) -> "Result[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: AssetTrackerError) -> "Result[T]":
        return cls(error=error)

    def unwrap(self) -> T:
        if self.error is not None:
            raise self.error
        return self.value


def returns_result(fn: Callable[..., T]) -> Callable[..., Result[T]]:
    """Run ``fn`` and report expected failures as ``Result.failure``.

    Unexpected exceptions are not caught.
    """
    @wraps(fn)
    def wrapper(*args, **kwargs):
        try:
            value = fn(*args, **kwargs)
        except AssetTrackerError as exc:
            logger.warning("%s rejected: %s", fn.__qualname__, exc)
            return Result.failure(exc)
        if isinstance(value, Result):
            return value
        return Result.success(value)

    return wrapper
