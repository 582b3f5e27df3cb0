"""JSON and CSV snapshots of the profile collection."""

from __future__ import annotations

import csv
import json
import logging
from collections.abc import Sequence
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict

from barangay._constants import CSV_FIELDS
from barangay.models.profile import Profile

_logger = logging.getLogger(__name__)


class ExportResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    filename: str
    filepath: Path
    count: int


def _timestamp(now: datetime | None) -> str:
    moment = now if now is not None else datetime.now(UTC)
    return moment.isoformat().replace(":", "-").replace(".", "-")


def _target(directory: str | Path, suffix: str, now: datetime | None) -> tuple[str, Path]:
    backup_dir = Path(directory)
    backup_dir.mkdir(parents=True, exist_ok=True)
    filename = f"profiles_backup_{_timestamp(now)}.{suffix}"
    return filename, backup_dir / filename


def csv_row(profile: Profile) -> dict[str, Any]:
    """Flatten a profile into the CSV columns."""
    demographics = profile.demographics
    return {
        "_id": profile.id,
        "name": profile.name,
        "province": profile.province,
        "captain": profile.captain,
        "population": profile.population,
        "budget": profile.budget,
        "male": demographics.gender.male,
        "female": demographics.gender.female,
        "employed": demographics.employment.employed,
        "unemployed": demographics.employment.unemployed,
        "fourPsMembers": demographics.four_ps.members,
        "fourPsNonMembers": demographics.four_ps.non_members,
    }


def export_profiles_json(
    profiles: Sequence[Profile],
    directory: str | Path,
    *,
    now: datetime | None = None,
) -> ExportResult:
    filename, filepath = _target(directory, "json", now)
    with filepath.open("w", encoding="utf-8") as fh:
        json.dump([profile.to_wire() for profile in profiles], fh, indent=2, ensure_ascii=False)
    _logger.info("Exported %d profiles to %s", len(profiles), filepath)
    return ExportResult(filename=filename, filepath=filepath, count=len(profiles))


def export_profiles_csv(
    profiles: Sequence[Profile],
    directory: str | Path,
    *,
    now: datetime | None = None,
) -> ExportResult:
    """Write one CSV row per profile, header first (``\\r\\n`` line endings)."""
    filename, filepath = _target(directory, "csv", now)
    with filepath.open("w", encoding="utf-8", newline="") as fh:
        writer = csv.DictWriter(fh, fieldnames=list(CSV_FIELDS))
        writer.writeheader()
        for profile in profiles:
            writer.writerow(csv_row(profile))
    _logger.info("Exported %d profiles to %s", len(profiles), filepath)
    return ExportResult(filename=filename, filepath=filepath, count=len(profiles))
