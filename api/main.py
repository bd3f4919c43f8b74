from __future__ import annotations

import logging
from contextlib import asynccontextmanager

import uvicorn
from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from auth import router as auth_router
from core import config, errors
from core.db import Database
from core.log import configure_logging
from sightings import router as sightings_router
from stats import router as stats_router

logger = logging.getLogger(__name__)


def create_app(database: Database | None = None) -> FastAPI:
    """
    Build the API. `database` replaces the env-configured gateway (tests).
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        db = database if database is not None else Database(config.DatabaseSettings.from_env())
        # Fail fast: never serve traffic against an unreachable store.
        try:
            await db.connect()
            await db.ping()
        except Exception:
            logger.exception("db_startup_failed")
            await db.close()
            raise
        logger.info("db_connected")
        app.state.db = db
        try:
            yield
        finally:
            await db.close()

    app = FastAPI(lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins(),
        allow_methods=["*"],
        allow_headers=["*"],
    )
    errors.install_handlers(app)

    app.include_router(stats_router.router, prefix="/api", tags=["stats"])
    app.include_router(auth_router.router, prefix="/api", tags=["auth"])
    app.include_router(sightings_router.router, prefix="/api", tags=["sightings"])

    @app.get("/", response_class=PlainTextResponse)
    def root() -> str:
        return "Server spusteny!"

    @app.get("/health")
    def health() -> dict:
        return {"status": "ok"}

    return app


def run() -> None:
    load_dotenv()
    configure_logging(config.log_level())
    port = config.listen_port()
    logger.info("server_starting port=%s", port)
    # uvicorn turns SIGINT/SIGTERM into a lifespan shutdown, which closes the pool.
    # A failed startup makes uvicorn exit with a non-zero status.
    uvicorn.run(create_app(), host=config.listen_host(), port=port, log_config=None)


if __name__ == "__main__":
    run()
