"""
Aggregate queries (raw SQL).

Sort direction cannot be a bind parameter, so it is formatted into the SQL
text. Only `SortDirection` members are accepted here; raw client strings
never reach these functions.
"""

from __future__ import annotations

from core.db import Database

from .schemas import SortDirection


def _direction(order: SortDirection) -> str:
    if not isinstance(order, SortDirection):
        raise TypeError(f"order must be a SortDirection, got {type(order).__name__}")
    return order.value


async def most_observed_species(db: Database, *, limit: int, order: SortDirection) -> list[dict]:
    # Top `limit` species by observation count, then re-sorted by name.
    return await db.fetch_all(
        f"""
        SELECT * FROM (
            SELECT
                species.name,
                species.home_planet,
                species.limbs_number,
                COUNT(*) AS observations_count
            FROM observations
            JOIN species ON observations.species_id = species.id
            GROUP BY species.name, species.home_planet, species.limbs_number
            ORDER BY observations_count DESC
            LIMIT $1
        ) AS most_observed
        ORDER BY name {_direction(order)}
        """,
        limit,
    )


async def most_visited_locations(db: Database, *, limit: int, order: SortDirection) -> list[dict]:
    return await db.fetch_all(
        f"""
        SELECT
            location_name,
            COUNT(*) AS total_observations
        FROM observations
        GROUP BY location_name
        ORDER BY total_observations {_direction(order)}
        LIMIT $1
        """,
        limit,
    )


async def alien_interactions(db: Database, *, limit: int, order: SortDirection) -> list[dict]:
    return await db.fetch_all(
        f"""
        SELECT
            species.name,
            species.home_planet,
            species.limbs_number,
            COUNT(*) AS interactions_count,
            COALESCE(SUM(interactions.is_friendly), 0) AS positive_interactions
        FROM interactions
        JOIN species ON interactions.species_id = species.id
        GROUP BY species.name, species.home_planet, species.limbs_number
        ORDER BY interactions_count {_direction(order)}
        LIMIT $1
        """,
        limit,
    )


async def recent_abductions(db: Database, *, limit: int, order: SortDirection) -> list[dict]:
    return await db.fetch_all(
        f"""
        SELECT
            abductions.interaction_id,
            abductions.human_name,
            abductions.abduction_date,
            abductions.person_returned,
            species.name AS abductor_name,
            species.home_planet
        FROM abductions
        JOIN interactions ON abductions.interaction_id = interactions.id
        JOIN species ON interactions.species_id = species.id
        ORDER BY abductions.abduction_date {_direction(order)}
        LIMIT $1
        """,
        limit,
    )
