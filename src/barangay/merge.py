"""Profile construction and deep-merge.

Update payloads are partial: a dashboard edit of one counter sends only
that counter.  :func:`merge_profile` overlays such a patch on a stored
profile without clobbering anything the patch leaves out.
"""

from __future__ import annotations

import copy
import logging
from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from barangay._constants import COUNTER_ALIASES, SUB_GROUP_ALIASES
from barangay.exceptions import ProfileValidationError
from barangay.models.profile import Profile

_logger = logging.getLogger(__name__)

_IDENTITY_KEYS = frozenset({"_id", "id"})
_CREATE_FIELDS = ("name", "province", "captain", "population", "budget", "demographics")


def _validate(values: dict[str, Any]) -> Profile:
    try:
        return Profile.model_validate(values)
    except ValidationError as exc:
        raise ProfileValidationError(
            f"Invalid profile data: {exc.error_count()} error(s)",
            errors=[{"loc": list(err["loc"]), "msg": err["msg"]} for err in exc.errors()],
        ) from exc


def build_profile(profile_id: str, data: Mapping[str, Any]) -> Profile:
    """Build a new profile from a creation payload.

    Only the known profile fields are taken from *data*; an ``id``/``_id``
    in the payload never replaces *profile_id*.  Missing ``population``,
    ``budget`` and demographic counters default to zero.
    """
    values: dict[str, Any] = {key: copy.deepcopy(data[key]) for key in _CREATE_FIELDS if key in data}
    values["_id"] = profile_id
    return _validate(values)


def merge_demographics(existing: Mapping[str, Any], patch: Any) -> dict[str, Any]:
    """Overlay a demographics patch on *existing*, sub-group by sub-group.

    Counters inside a sub-group are merged field by field; sub-groups the
    patch does not mention are kept as they are.  Unknown sub-group names
    and non-object sub-group values are ignored.
    """
    merged: dict[str, Any] = copy.deepcopy(dict(existing))
    if patch is None:
        return merged
    if not isinstance(patch, Mapping):
        _logger.warning("Ignoring demographics patch of type %s", type(patch).__name__)
        return merged

    for raw_name, group_patch in patch.items():
        name = SUB_GROUP_ALIASES.get(raw_name)
        if name is None:
            _logger.warning("Ignoring unknown demographics sub-group %r", raw_name)
            continue
        if group_patch is None:
            continue
        if not isinstance(group_patch, Mapping):
            _logger.warning("Ignoring demographics.%s patch of type %s", name, type(group_patch).__name__)
            continue
        group: dict[str, Any] = dict(merged.get(name) or {})
        for counter, value in group_patch.items():
            group[COUNTER_ALIASES.get(counter, counter)] = value
        merged[name] = group
    return merged


def merge_profile(existing: Profile, patch: Mapping[str, Any]) -> Profile:
    """Return *existing* with *patch* applied.

    1. Top-level patch keys overwrite the stored values.
    2. The identity field always keeps the stored value.
    3. ``demographics`` is merged with :func:`merge_demographics`.

    Raises
    ------
    ProfileValidationError
        If the merged values do not form a valid profile (e.g. a negative
        counter).
    """
    values = existing.to_wire()
    for key, value in patch.items():
        if key in _IDENTITY_KEYS or key == "demographics":
            continue
        values[key] = copy.deepcopy(value)

    if "demographics" in patch:
        values["demographics"] = merge_demographics(values["demographics"], patch["demographics"])

    values["_id"] = existing.id
    return _validate(values)
