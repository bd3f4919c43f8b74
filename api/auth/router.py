"""
Auth API endpoints.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Depends

from core.db import Database, get_db

from . import schemas, service

router = APIRouter()


@router.post("/register", response_model=schemas.UserResponse)
async def register(
    body: Any = Body(default=None),
    db: Database = Depends(get_db),
) -> schemas.UserResponse:
    payload = schemas.RegisterRequest.model_validate(body)
    return await service.register(db, payload)


@router.post("/login", response_model=schemas.UserResponse)
async def login(
    body: Any = Body(default=None),
    db: Database = Depends(get_db),
) -> schemas.UserResponse:
    payload = schemas.LoginRequest.model_validate(body)
    return await service.login(db, payload)
