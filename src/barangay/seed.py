"""Barangay Santiago sample data.

Barangay Santiago, Lanao del Norte: 21 puroks with population, budget
and demographic breakdown, used to populate an empty store for demos.
"""

from __future__ import annotations

import logging
from typing import Any

from barangay.store import ProfileStore

_logger = logging.getLogger(__name__)

PROVINCE = "Lanao del Norte"
CAPTAIN = "Zosima Anduyan"

# (population, budget, male, female, employed, unemployed, 4Ps members, 4Ps non-members)
_PUROK_ROWS: tuple[tuple[int, int, int, int, int, int, int, int], ...] = (
    (17245, 59524, 8623, 8622, 10347, 6898, 5174, 12071),
    (18156, 62500, 9078, 9078, 10894, 7262, 5447, 12709),
    (16324, 56548, 8162, 8162, 9794, 6530, 4897, 11427),
    (19067, 65476, 9534, 9533, 11440, 7627, 5720, 13347),
    (15413, 53571, 7707, 7706, 9248, 6165, 4624, 10789),
    (18156, 62500, 9078, 9078, 10894, 7262, 5447, 12709),
    (17245, 59524, 8623, 8622, 10347, 6898, 5174, 12071),
    (16324, 56548, 8162, 8162, 9794, 6530, 4897, 11427),
    (19978, 68452, 9989, 9989, 11987, 7991, 5993, 13985),
    (20889, 71429, 10445, 10444, 12533, 8356, 6267, 14622),
    (15413, 53571, 7707, 7706, 9248, 6165, 4624, 10789),
    (17245, 59524, 8623, 8622, 10347, 6898, 5174, 12071),
    (18156, 62500, 9078, 9078, 10894, 7262, 5447, 12709),
    (16324, 56548, 8162, 8162, 9794, 6530, 4897, 11427),
    (19067, 65476, 9534, 9533, 11440, 7627, 5720, 13347),
    (15413, 53571, 7707, 7706, 9248, 6165, 4624, 10789),
    (18156, 62500, 9078, 9078, 10894, 7262, 5447, 12709),
    (17245, 59524, 8623, 8622, 10347, 6898, 5174, 12071),
    (16324, 56548, 8162, 8162, 9794, 6530, 4897, 11427),
    (19067, 65476, 9534, 9533, 11440, 7627, 5720, 13347),
    (15413, 53571, 7707, 7706, 9248, 6165, 4624, 10789),
)


def sample_profiles() -> list[dict[str, Any]]:
    """Creation payloads for the 21 Santiago puroks."""
    payloads: list[dict[str, Any]] = []
    for index, row in enumerate(_PUROK_ROWS, start=1):
        population, budget, male, female, employed, unemployed, members, non_members = row
        payloads.append(
            {
                "name": f"Purok {index}",
                "province": PROVINCE,
                "captain": CAPTAIN,
                "population": population,
                "budget": budget,
                "demographics": {
                    "gender": {"male": male, "female": female},
                    "employment": {"employed": employed, "unemployed": unemployed},
                    "fourPs": {"members": members, "nonMembers": non_members},
                },
            }
        )
    return payloads


async def seed_sample_data(store: ProfileStore) -> int:
    """Create the sample puroks if the store is empty.

    Returns the number of profiles created (0 when data already exists).
    """
    existing = await store.get_all()
    if existing:
        _logger.info("Store already holds %d profiles; skipping sample data", len(existing))
        return 0

    payloads = sample_profiles()
    for payload in payloads:
        await store.create(payload)
    _logger.info("Seeded %d Barangay Santiago puroks", len(payloads))
    return len(payloads)
