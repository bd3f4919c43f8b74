"""
Observation persistence (raw SQL).
"""

from __future__ import annotations

from core.db import Database

from .schemas import SightingReport


async def upsert_user_observation(db: Database, report: SightingReport) -> bool:
    """
    Insert the user's observation, or update it in place if one exists.

    Relies on the unique constraint on `observations.user_id`. The species of
    an existing observation is left unchanged. Returns True when a new row
    was inserted.
    """
    row = await db.fetch_one(
        """
        INSERT INTO observations (observation_date, location_name, species_id, spacecraft_type, user_id)
        VALUES ($1, $2, $3, $4, $5)
        ON CONFLICT (user_id) DO UPDATE
        SET observation_date = EXCLUDED.observation_date,
            location_name = EXCLUDED.location_name,
            spacecraft_type = EXCLUDED.spacecraft_type
        RETURNING id, (xmax = 0) AS inserted
        """,
        report.encounter_date,
        report.location,
        report.species_id,
        report.ship_type,
        report.user_id,
    )
    if row is None:
        raise RuntimeError("Failed to upsert observation.")
    return bool(row["inserted"])
