"""
Listing API endpoints.

`limit` and `order` are read as raw strings so malformed values fall back to
the route default instead of producing a validation error.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from core.db import Database, get_db

from . import schemas, service

router = APIRouter()


@router.get("/mostObserved")
async def most_observed(
    limit: str | None = Query(default=None),
    order: str | None = Query(default=None),
    db: Database = Depends(get_db),
) -> list[dict]:
    params = service.listing_params(limit, order, schemas.MOST_OBSERVED)
    return await service.most_observed(db, params)


@router.get("/mostVisited")
async def most_visited(
    limit: str | None = Query(default=None),
    order: str | None = Query(default=None),
    db: Database = Depends(get_db),
) -> list[dict]:
    params = service.listing_params(limit, order, schemas.MOST_VISITED)
    return await service.most_visited(db, params)


@router.get("/alienInteractions")
async def alien_interactions(
    limit: str | None = Query(default=None),
    order: str | None = Query(default=None),
    db: Database = Depends(get_db),
) -> list[dict]:
    params = service.listing_params(limit, order, schemas.ALIEN_INTERACTIONS)
    return await service.alien_interactions(db, params)


@router.get("/recentAbductions")
async def recent_abductions(
    limit: str | None = Query(default=None),
    order: str | None = Query(default=None),
    db: Database = Depends(get_db),
) -> list[dict]:
    params = service.listing_params(limit, order, schemas.RECENT_ABDUCTIONS)
    return await service.recent_abductions(db, params)
