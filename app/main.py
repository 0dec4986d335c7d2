from __future__ import annotations
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from app.api import router
from app.web import router as web_router
from engine.loader import build_default_loader
from logging_config import configure_logging


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
    # EngineInitError propagates and aborts startup.
    build_default_loader().ensure_ready()
    yield


def create_app() -> FastAPI:
    configure_logging()
    app = FastAPI(
        title="Sensor Log Dashboard",
        description="Loads sensor temperature logs from database backups and exports them as CSV.",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.include_router(router)
    app.include_router(web_router)
    return app

app = create_app()
