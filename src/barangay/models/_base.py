"""Base model for barangay records.

Every record model inherits from :class:`BarangayBaseModel` which
provides:

* ``alias_generator=to_camel`` so the camelCase wire keys used by the
  dashboard (``fourPs``, ``nonMembers``) map to snake_case fields.
* A ``model_validator(mode="before")`` that drops empty values
  (``None``, ``""``) so the field default is used.  This is what turns
  ``{"population": null}`` into ``population == 0`` and a partial
  ``demographics`` object into one with every sub-group present.
"""

from __future__ import annotations

from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict, NonNegativeFloat, NonNegativeInt, model_validator
from pydantic.alias_generators import to_camel


def _coerce_numeric_string(value: Any) -> Any:
    """Accept ``"12"`` / ``" 12 "`` from form posts; reject booleans; leave the rest to pydantic."""
    if isinstance(value, bool):
        raise ValueError("expected a number, got a boolean")
    if isinstance(value, str):
        return value.strip()
    return value


Counter = Annotated[NonNegativeInt, BeforeValidator(_coerce_numeric_string)]
"""A non-negative integer demographic count."""

Amount = Annotated[NonNegativeInt | NonNegativeFloat, BeforeValidator(_coerce_numeric_string)]
"""A non-negative number (population, budget); ints stay ints."""


class BarangayBaseModel(BaseModel):
    """Base for barangay record models.

    Handles:
    * camelCase ↔ snake_case via ``alias_generator=to_camel``
    * empty values (``None``, ``""``) → dropped so the field default is used
    """

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
        alias_generator=to_camel,
    )

    @staticmethod
    def _clean_dict(values: dict[str, Any]) -> dict[str, Any]:
        cleaned: dict[str, Any] = {}
        for key, value in values.items():
            if value is None:
                continue
            if isinstance(value, str) and not value.strip():
                continue
            cleaned[key] = value
        return cleaned

    @model_validator(mode="before")
    @classmethod
    def _drop_empty_values(cls, values: Any) -> Any:
        if not isinstance(values, dict):
            return values
        return BarangayBaseModel._clean_dict(values)

    def to_wire(self) -> dict[str, Any]:
        """Return the JSON-ready camelCase representation."""
        return self.model_dump(mode="json", by_alias=True)
