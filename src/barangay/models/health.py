"""Health probe result model."""

from __future__ import annotations

from typing import Literal

from barangay.models._base import BarangayBaseModel


class HealthStatus(BarangayBaseModel):
    status: Literal["OK", "Error"] = "OK"
    message: str = ""

    @property
    def ok(self) -> bool:
        return self.status == "OK"
