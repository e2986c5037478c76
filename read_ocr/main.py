from __future__ import annotations

import logging

from fastapi import FastAPI

from read_ocr.api.routes import router
from read_ocr.core.config import Settings, settings as default_settings
from read_ocr.core.logging import configure_logging
from read_ocr.db.session import dispose_db, init_db
from read_ocr.ocr.client import create_http_client
from read_ocr.ocr.factory import get_ocr_engine
from read_ocr.storage.local import LocalOutputStore


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or default_settings
    configure_logging(settings.log_level)
    app = FastAPI(title="Read OCR Service", version="0.1.0")
    app.include_router(router)

    app.state.settings = settings
    app.state.output_store = LocalOutputStore(settings.output_root)
    # One client for the whole process; engines only borrow it
    app.state.http_client = create_http_client(settings)
    app.state.ocr_engine = get_ocr_engine(settings, app.state.http_client)

    @app.get("/")
    async def root():
        return {
            "message": "Welcome to the Read OCR Service API",
            "docs": "/docs",
            "health": "/health"
        }

    @app.on_event("startup")
    async def _startup() -> None:
        logging.getLogger(__name__).info(
            "startup",
            extra={"ocr_provider": settings.ocr_provider, "ocr_mode": settings.ocr_mode.value},
        )
        await init_db()

    @app.on_event("shutdown")
    async def _shutdown() -> None:
        await app.state.http_client.aclose()
        await dispose_db()

    return app


app = create_app()
