"""
Sighting report business logic.

Each user has a single report slot: the first report creates it, later
reports overwrite its date, location and ship type.
"""

from __future__ import annotations

import logging
from datetime import date

from auth import repository as user_repository
from core.db import Database
from core.errors import AuthError, ValidationError, store_failure

from . import repository, schemas

logger = logging.getLogger(__name__)

MISSING_FIELDS = "Všetky polia sú povinné"
INVALID_ID = "Neplatný identifikátor"
INVALID_DATE = "Neplatný dátum"
UNKNOWN_USER = "Neplatný používateľ"

CREATED = "Hlásenie bolo vytvorené"
UPDATED = "Hlásenie bolo aktualizované"

REPORT_DB_ERROR = "Nie je možné spracovať hlásenie, chyba databazy"


def _parse_id(value: int | str) -> int:
    if isinstance(value, bool):
        raise ValidationError(INVALID_ID)
    if isinstance(value, int):
        parsed = value
    else:
        raw = value.strip()
        if not raw.isdigit():
            raise ValidationError(INVALID_ID)
        parsed = int(raw)
    if parsed <= 0:
        raise ValidationError(INVALID_ID)
    return parsed


def _parse_date(value: str) -> date:
    # Accepts plain dates and ISO timestamps; only the date part is stored.
    try:
        return date.fromisoformat(value.strip()[:10])
    except ValueError as exc:
        raise ValidationError(INVALID_DATE) from exc


def validate_report(payload: schemas.SightingReportRequest) -> schemas.SightingReport:
    required = (
        payload.location,
        payload.shipType,
        payload.encounterDate,
        payload.speciesId,
        payload.userId,
    )
    if any(not value for value in required):
        raise ValidationError(MISSING_FIELDS)

    return schemas.SightingReport(
        location=payload.location,
        ship_type=payload.shipType,
        encounter_date=_parse_date(payload.encounterDate),
        species_id=_parse_id(payload.speciesId),
        user_id=_parse_id(payload.userId),
    )


async def report_sighting(db: Database, payload: schemas.SightingReportRequest) -> tuple[bool, str]:
    """
    Returns (created, message).
    """
    report = validate_report(payload)

    with store_failure(REPORT_DB_ERROR):
        if not await user_repository.user_exists(db, report.user_id):
            raise AuthError(UNKNOWN_USER)
        created = await repository.upsert_user_observation(db, report)

    logger.info("sighting_reported user_id=%s created=%s", report.user_id, created)
    return created, CREATED if created else UPDATED
