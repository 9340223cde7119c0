"""Outcome: tagged result returned by every registry and service operation.

Business-rule rejections are expected results, not exceptions: an operation
either succeeds with a ``value`` or fails with one ``error`` drawn from its
component's closed error enumeration (see ``pizzeria.shared.errors``).
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Outcome(Generic[T]):
    value: T | None = None
    error: Enum | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: Any = None) -> "Outcome":
        return cls(value=value)

    @classmethod
    def failure(cls, error: Enum) -> "Outcome":
        return cls(error=error)
