"""Demographic aggregation across profiles."""

from __future__ import annotations

from collections.abc import Iterable

from barangay.models.profile import Profile
from barangay.models.stats import DemographicStats


def compute_stats(profiles: Iterable[Profile]) -> DemographicStats:
    """Sum the six demographic counters over *profiles*.

    Missing sub-groups and counters are already zero on the model, so
    records written before a sub-group existed simply contribute nothing.
    """
    male = female = employed = unemployed = members = non_members = 0
    for profile in profiles:
        demographics = profile.demographics
        male += demographics.gender.male
        female += demographics.gender.female
        employed += demographics.employment.employed
        unemployed += demographics.employment.unemployed
        members += demographics.four_ps.members
        non_members += demographics.four_ps.non_members

    return DemographicStats.from_totals(
        male=male,
        female=female,
        employed=employed,
        unemployed=unemployed,
        members=members,
        non_members=non_members,
    )
