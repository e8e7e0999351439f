"""FastAPI application factory."""
from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.config import get_settings
from app.routes import router
from services.container import AppContainer

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"
if not logging.getLogger().handlers:
    logging.basicConfig(level=logging.INFO, format=LOG_FORMAT)


def create_app() -> FastAPI:
    """Instantiate the FastAPI app and wire dependencies."""

    settings = get_settings()
    container = AppContainer(settings)
    app = FastAPI(title="Resume Screener", version="0.1.0")
    if settings.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.cors_origins,
            allow_methods=["*"],
            allow_headers=["*"],
        )
    app.include_router(router)
    app.state.container = container  # type: ignore[attr-defined]

    @app.get("/healthz")
    async def health() -> dict[str, str]:  # pragma: no cover - trivial
        return {"status": "ok"}

    return app
