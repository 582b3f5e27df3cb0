"""barangay - Async barangay/purok profile store and REST API."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("barangay")
except PackageNotFoundError:
    __version__ = "0+local"
from barangay.backend import KeyValueBackend, MemoryBackend, RedisBackend, open_backend
from barangay.config import BarangayConfig
from barangay.exceptions import (
    BackingStoreError,
    BarangayConfigError,
    BarangayError,
    CorruptRecordError,
    HealthCheckError,
    ProfileValidationError,
)
from barangay.merge import merge_profile
from barangay.models import (
    DemographicStats,
    Demographics,
    EmploymentCounts,
    FourPsCounts,
    GenderCounts,
    HealthStatus,
    Profile,
    StatCount,
)
from barangay.outcome import Failure, Found, NotFound, settle
from barangay.stats import compute_stats
from barangay.store import ProfileStore

__all__ = [
    "__version__",
    "BackingStoreError",
    "BarangayConfig",
    "BarangayConfigError",
    "BarangayError",
    "CorruptRecordError",
    "DemographicStats",
    "Demographics",
    "EmploymentCounts",
    "Failure",
    "Found",
    "FourPsCounts",
    "GenderCounts",
    "HealthCheckError",
    "HealthStatus",
    "KeyValueBackend",
    "MemoryBackend",
    "NotFound",
    "Profile",
    "ProfileStore",
    "ProfileValidationError",
    "RedisBackend",
    "StatCount",
    "compute_stats",
    "merge_profile",
    "open_backend",
    "settle",
]
