"""
Listing business logic.

Optional query parameters never cause an error: anything that does not parse
falls back to the route's default.
"""

from __future__ import annotations

import re
from collections.abc import Awaitable, Callable

from core.db import Database
from core.errors import store_failure

from . import repository
from .schemas import ListingDefaults, ListingParams, SortDirection

LISTING_DB_ERROR = "Nie je možné načítať údaje z databázy"

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def parse_limit(raw: str | None, default: int) -> int:
    """
    Integer from the leading digits of `raw` ("12abc" -> 12).

    Absent, non-numeric, zero and negative values give `default`. There is
    no upper bound.
    """
    match = _LEADING_INT.match(raw or "")
    if match is None:
        return default
    value = int(match.group(1))
    return value if value > 0 else default


def parse_order(raw: str | None, default: SortDirection) -> SortDirection:
    candidate = (raw or "").strip().upper()
    try:
        return SortDirection(candidate)
    except ValueError:
        return default


def listing_params(limit: str | None, order: str | None, defaults: ListingDefaults) -> ListingParams:
    return ListingParams(
        limit=parse_limit(limit, defaults.limit),
        order=parse_order(order, defaults.order),
    )


Query = Callable[..., Awaitable[list[dict]]]


async def _run(db: Database, query: Query, params: ListingParams) -> list[dict]:
    with store_failure(LISTING_DB_ERROR):
        return await query(db, limit=params.limit, order=params.order)


async def most_observed(db: Database, params: ListingParams) -> list[dict]:
    rows = await _run(db, repository.most_observed_species, params)
    return [
        {
            "name": row["name"],
            "home_planet": row["home_planet"],
            "limbs_number": row["limbs_number"],
            "observations_count": int(row["observations_count"]),
        }
        for row in rows
    ]


async def most_visited(db: Database, params: ListingParams) -> list[dict]:
    rows = await _run(db, repository.most_visited_locations, params)
    return [
        {
            "location_name": row["location_name"],
            "total_observations": int(row["total_observations"]),
        }
        for row in rows
    ]


async def alien_interactions(db: Database, params: ListingParams) -> list[dict]:
    rows = await _run(db, repository.alien_interactions, params)
    return [
        {
            "name": row["name"],
            "home_planet": row["home_planet"],
            "limbs_number": row["limbs_number"],
            "interactions_count": int(row["interactions_count"]),
            "positive_interactions": int(row["positive_interactions"] or 0),
        }
        for row in rows
    ]


async def recent_abductions(db: Database, params: ListingParams) -> list[dict]:
    rows = await _run(db, repository.recent_abductions, params)
    return [
        {
            "interaction_id": row["interaction_id"],
            "human_name": row["human_name"],
            "abduction_date": row["abduction_date"],
            "person_returned": row["person_returned"],
            "abductor_name": row["abductor_name"],
            "home_planet": row["home_planet"],
        }
        for row in rows
    ]

