"""Demographic statistics models."""

from __future__ import annotations

from pydantic import Field

from barangay.models._base import BarangayBaseModel


class StatCount(BarangayBaseModel):
    """One labeled count, serialized as ``{"_id": label, "count": n}``."""

    label: str = Field(alias="_id")
    count: int = 0


class DemographicStats(BarangayBaseModel):
    """Demographic totals in three paired buckets.

    The wire shape matches what the dashboard charts expect::

        {
            "genderStats": [{"_id": "Male", "count": 14}, {"_id": "Female", "count": 11}],
            "employmentStats": [...],
            "fourPsStats": [...],
        }
    """

    gender_stats: list[StatCount] = Field(default_factory=list)
    employment_stats: list[StatCount] = Field(default_factory=list)
    four_ps_stats: list[StatCount] = Field(default_factory=list)

    @classmethod
    def from_totals(
        cls,
        *,
        male: int = 0,
        female: int = 0,
        employed: int = 0,
        unemployed: int = 0,
        members: int = 0,
        non_members: int = 0,
    ) -> DemographicStats:
        return cls(
            gender_stats=[StatCount(label="Male", count=male), StatCount(label="Female", count=female)],
            employment_stats=[
                StatCount(label="Employed", count=employed),
                StatCount(label="Unemployed", count=unemployed),
            ],
            four_ps_stats=[
                StatCount(label="Members", count=members),
                StatCount(label="Non-Members", count=non_members),
            ],
        )

    @property
    def totals(self) -> dict[str, int]:
        """The six counts keyed by counter name."""
        gender = {item.label: item.count for item in self.gender_stats}
        employment = {item.label: item.count for item in self.employment_stats}
        four_ps = {item.label: item.count for item in self.four_ps_stats}
        return {
            "male": gender.get("Male", 0),
            "female": gender.get("Female", 0),
            "employed": employment.get("Employed", 0),
            "unemployed": employment.get("Unemployed", 0),
            "members": four_ps.get("Members", 0),
            "non_members": four_ps.get("Non-Members", 0),
        }
