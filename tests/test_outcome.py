from __future__ import annotations

import pytest

from barangay.exceptions import BackingStoreError
from barangay.outcome import Failure, Found, NotFound, settle


async def _value() -> int:
    return 3


async def _not_found() -> NotFound:
    return NotFound("x")


async def _store_failure() -> int:
    raise BackingStoreError("down")


async def _bug() -> int:
    raise KeyError("bug")


@pytest.mark.asyncio
async def test_plain_value_wrapped() -> None:
    assert await settle(_value()) == Found(3)


@pytest.mark.asyncio
async def test_lookup_results_pass_through() -> None:
    assert await settle(_not_found()) == NotFound("x")


@pytest.mark.asyncio
async def test_barangay_error_becomes_failure() -> None:
    outcome = await settle(_store_failure())
    assert isinstance(outcome, Failure)
    assert isinstance(outcome.cause, BackingStoreError)


@pytest.mark.asyncio
async def test_other_exceptions_propagate() -> None:
    with pytest.raises(KeyError):
        await settle(_bug())
