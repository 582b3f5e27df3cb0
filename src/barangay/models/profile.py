"""Profile (barangay/purok) record models."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import Field

from barangay._constants import REQUIRED_CREATE_FIELDS
from barangay.models._base import Amount, BarangayBaseModel, Counter


class GenderCounts(BarangayBaseModel):
    male: Counter = 0
    female: Counter = 0


class EmploymentCounts(BarangayBaseModel):
    employed: Counter = 0
    unemployed: Counter = 0


class FourPsCounts(BarangayBaseModel):
    """4Ps (Pantawid Pamilyang Pilipino Program) membership counts."""

    members: Counter = 0
    non_members: Counter = 0


class Demographics(BarangayBaseModel):
    """Demographic counters of a profile.

    All three sub-groups are always present; a sub-group or counter the
    caller leaves out is zero.
    """

    gender: GenderCounts = Field(default_factory=GenderCounts)
    employment: EmploymentCounts = Field(default_factory=EmploymentCounts)
    four_ps: FourPsCounts = Field(default_factory=FourPsCounts)


class Profile(BarangayBaseModel):
    """A barangay/purok profile as persisted in the store.

    ``id`` is generated on creation and serialized as ``_id``.  The model
    does not enforce ``name``/``province``/``captain``; creation payloads
    are checked with :func:`missing_required_fields` before they reach the
    store.
    """

    id: str = Field(alias="_id")
    """Store-generated identifier (uuid4)."""
    name: str = ""
    province: str = ""
    captain: str = ""
    population: Amount = 0
    budget: Amount = 0
    demographics: Demographics = Field(default_factory=Demographics)


def missing_required_fields(payload: Mapping[str, Any]) -> list[str]:
    """Return the required creation fields that are absent or blank in *payload*."""
    missing: list[str] = []
    for field_name in REQUIRED_CREATE_FIELDS:
        value = payload.get(field_name)
        if value is None or (isinstance(value, str) and not value.strip()):
            missing.append(field_name)
    return missing
