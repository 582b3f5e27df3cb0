"""Lookup outcomes.

Store lookups return :class:`Found` or :class:`NotFound`; a missing id is
an expected result, not an error.  Backing-store faults are raised as
:class:`~barangay.exceptions.BarangayError` and only become
:class:`Failure` at the HTTP boundary, through :func:`settle`.
"""

from __future__ import annotations

from collections.abc import Awaitable
from dataclasses import dataclass
from typing import Generic, TypeVar

from barangay.exceptions import BarangayError

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class Found(Generic[T]):
    value: T


@dataclass(frozen=True, slots=True)
class NotFound:
    key: str = ""


@dataclass(frozen=True, slots=True)
class Failure:
    cause: BarangayError


Lookup = Found[T] | NotFound
Outcome = Found[T] | NotFound | Failure


async def settle(call: Awaitable[Lookup[T] | T]) -> Outcome[T]:
    """Await a store call and fold its result into an :data:`Outcome`.

    Plain values are wrapped in :class:`Found`.  A raised
    :class:`BarangayError` becomes :class:`Failure`; anything else
    propagates.
    """
    try:
        result = await call
    except BarangayError as exc:
        return Failure(exc)
    if isinstance(result, (Found, NotFound)):
        return result
    return Found(result)
