"""
Sighting report endpoint.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Response, status

from core.db import Database, get_db

from . import schemas, service

router = APIRouter()


@router.post("/reportUfoSighting", response_model=schemas.SightingReportResponse)
async def report_ufo_sighting(
    payload: schemas.SightingReportRequest,
    response: Response,
    db: Database = Depends(get_db),
) -> schemas.SightingReportResponse:
    created, message = await service.report_sighting(db, payload)
    response.status_code = status.HTTP_201_CREATED if created else status.HTTP_200_OK
    return schemas.SightingReportResponse(message=message)
