"""Typed results returned by the data-access layer.

Callers branch on ``result.ok`` instead of inspecting driver exceptions.
"""
from dataclasses import dataclass
from typing import Generic, Optional, TypeVar, Union

T = TypeVar("T")

# Err kinds and the HTTP status each one maps to
ERR_STATUS = {
    "not_found": 404,
    "invalid": 400,
    "persistence": 500,
}


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T
    ok: bool = True


@dataclass(frozen=True)
class Err:
    error: str
    exc: Optional[BaseException] = None
    kind: str = "persistence"
    ok: bool = False

    @property
    def status(self) -> int:
        return ERR_STATUS.get(self.kind, 500)


def not_found(message: str) -> Err:
    return Err(message, kind="not_found")


def invalid(message: str) -> Err:
    return Err(message, kind="invalid")


Result = Union[Ok[T], Err]
