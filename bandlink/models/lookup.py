"""Tagged results for catalog lookups.

Every catalog operation resolves to exactly one of three outcomes:

    Found(value)              -- the catalog returned usable data
    NotFound()                -- definitive negative; the entity does not exist
    Failed(reason, attempts)  -- every attempt raised; retries are exhausted

Callers branch on the type (or on :attr:`Lookup.found`) instead of
null-checking, which keeps "does not exist" and "could not ask" apart in
logs while letting both degrade to the same sentinel in the output table.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

_T = TypeVar("_T")


@dataclass(frozen=True)
class Found(Generic[_T]):
    """A successful lookup carrying the catalog data."""

    value: _T

    @property
    def found(self) -> bool:
        return True


@dataclass(frozen=True)
class NotFound:
    """A successful lookup whose answer is "no such entity"."""

    @property
    def value(self) -> None:
        return None

    @property
    def found(self) -> bool:
        return False


@dataclass(frozen=True)
class Failed:
    """A lookup that raised on every attempt.

    Attributes
    ----------
    reason:
        The message of the last error seen.
    attempts:
        How many times the operation was invoked.
    """

    reason: str
    attempts: int

    @property
    def value(self) -> None:
        return None

    @property
    def found(self) -> bool:
        return False


Lookup = Union[Found[_T], NotFound, Failed]
