"""Data models for barangay profiles."""

from barangay.models._base import Amount, BarangayBaseModel, Counter
from barangay.models.health import HealthStatus
from barangay.models.profile import (
    Demographics,
    EmploymentCounts,
    FourPsCounts,
    GenderCounts,
    Profile,
    missing_required_fields,
)
from barangay.models.stats import DemographicStats, StatCount

__all__ = [
    "Amount",
    "BarangayBaseModel",
    "Counter",
    "DemographicStats",
    "Demographics",
    "EmploymentCounts",
    "FourPsCounts",
    "GenderCounts",
    "HealthStatus",
    "Profile",
    "StatCount",
    "missing_required_fields",
]
