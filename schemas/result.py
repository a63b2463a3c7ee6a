"""
schemas/result.py
-----------------
Explicit success/failure values returned by every collaborator
(place search, text generation, payment, email, photos).

Collaborator failure is an expected branch: callers inspect `result.ok`
and pick a degraded value instead of catching exceptions.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class CollaboratorError:
    source: str       # "places" | "text" | "stripe" | "email" ...
    message: str

    def __str__(self) -> str:
        return f"{self.source}: {self.message}"


@dataclass(frozen=True)
class Result(Generic[T]):
    value: Optional[T] = None
    error: Optional[CollaboratorError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T) -> "Result[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, source: str, message: str) -> "Result[T]":
        return cls(error=CollaboratorError(source=source, message=message))


class CollaboratorUnavailable(RuntimeError):
    """Raised only in strict mode, when a collaborator failure must abort the build."""

    def __init__(self, error: CollaboratorError):
        super().__init__(str(error))
        self.error = error
