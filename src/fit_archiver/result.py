"""Result pattern for record field reads.

Reading a typed field out of a decoded FIT record either yields the value or
a ``FieldTypeError``. Callers decide per field whether the failure is
recoverable, instead of unwinding through exceptions.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

T = TypeVar('T')  # Success type
E = TypeVar('E', bound=Exception)  # Error type


class Result(ABC, Generic[T, E]):
    """Either a field value or the reason it could not be read."""

    @abstractmethod
    def is_success(self) -> bool:
        ...

    @abstractmethod
    def is_failure(self) -> bool:
        ...

    @abstractmethod
    def value(self) -> T:
        """Get the field value.

        Raises:
            ValueError: If the read failed.
        """
        ...

    @abstractmethod
    def error(self) -> E:
        """Get the read error.

        Raises:
            ValueError: If the read succeeded.
        """
        ...


@dataclass(frozen=True, slots=True)
class Success(Result[T, E]):
    """A successful read."""
    _value: T

    def __repr__(self) -> str:
        return f"Success({self._value!r})"

    def is_success(self) -> bool:
        return True

    def is_failure(self) -> bool:
        return False

    def value(self) -> T:
        return self._value

    def error(self) -> E:
        raise ValueError("Cannot get error from Success result")


@dataclass(frozen=True, slots=True)
class Failure(Result[T, E]):
    """A field holding a value of the wrong type."""
    _error: E

    def __repr__(self) -> str:
        return f"Failure({self._error!r})"

    def is_success(self) -> bool:
        return False

    def is_failure(self) -> bool:
        return True

    def value(self) -> T:
        raise ValueError(f"Cannot get value from Failure result: {self._error}")

    def error(self) -> E:
        return self._error


def success(value: T) -> Result[T, Any]:
    """Wrap a field value that was read successfully."""
    return Success(value)


def failure(error: E) -> Result[Any, E]:
    """Wrap the error of a field read."""
    return Failure(error)
