"""
Sighting report schemas.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from pydantic import BaseModel


class SightingReportRequest(BaseModel):
    location: str | None = None
    shipType: str | None = None
    encounterDate: str | None = None
    speciesId: int | str | None = None
    userId: int | str | None = None


@dataclass(frozen=True)
class SightingReport:
    """
    A validated report, ready to be written.
    """

    location: str
    ship_type: str
    encounter_date: date
    species_id: int
    user_id: int


class SightingReportResponse(BaseModel):
    message: str
