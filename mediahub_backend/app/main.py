# mediahub_backend/app/main.py
from __future__ import annotations

import logging
import os
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException
from sqlalchemy.exc import SQLAlchemyError

from .core.config import Settings, settings as default_settings
from .database import Base, build_engine, build_session_factory, check_connection
from .errors import MediaError
from .media import MediaService
from .routers import health as health_router
from .routers import media as media_router
from .storage import TMP_PREFIX, MediaStorage
from . import models  # noqa: F401  (registers tables on Base.metadata)

logger = logging.getLogger("mediahub.main")


class MediaFiles(StaticFiles):
    """Static files for /uploads that never exposes in-progress temp writes."""

    async def get_response(self, path, scope):
        if os.path.basename(path).startswith(TMP_PREFIX):
            raise StarletteHTTPException(status_code=404)
        return await super().get_response(path, scope)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the application and the long-lived handles it runs on.

    Engine, session factory, storage and service are created here and kept on
    ``app.state``; routes reach them only through dependencies.
    """
    settings = settings or default_settings

    engine = build_engine(settings)
    storage = MediaStorage(settings.upload_dir)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(">>>> MEDIAHUB STARTUP BEGIN")
        storage.ensure_dir()
        try:
            check_connection(engine)
        except SQLAlchemyError as e:
            logger.critical("Database connection failed: %s", e)
            raise RuntimeError(f"Database connection failed: {e}") from e
        Base.metadata.create_all(bind=engine)
        logger.info("Connected to database; serving files from %s", storage.root)

        if settings.reconcile_on_startup:
            db = app.state.session_factory()
            try:
                report = app.state.media_service.reconcile(db)
            finally:
                db.close()
            logger.info(
                "Reconcile: %d orphaned files, %d orphaned records, %d partial writes",
                len(report.orphaned_files), len(report.orphaned_records), len(report.partial_writes),
            )
        logger.info(">>>> MEDIAHUB STARTUP COMPLETE")
        yield
        engine.dispose()
        logger.info(">>>> MEDIAHUB SHUTDOWN")

    app = FastAPI(title="MediaHub API", version="0.1.0", lifespan=lifespan)

    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = build_session_factory(engine)
    app.state.storage = storage
    app.state.media_service = MediaService(storage, public_base_url=settings.public_base_url)

    # --- CORS ---
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(MediaError)
    async def media_error_handler(request: Request, exc: MediaError):
        return JSONResponse(status_code=exc.status_code, content=exc.to_payload())

    @app.exception_handler(Exception)
    async def unexpected_error_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=500,
            content={"error": "Internal Server Error", "details": str(exc)},
        )

    app.include_router(media_router.router)
    app.include_router(health_router.router)

    # directory is created by the lifespan hook, hence check_dir=False
    app.mount(
        "/uploads",
        MediaFiles(directory=str(storage.root), check_dir=False),
        name="uploads",
    )
    return app


app = create_app()


def run():
    """Console entry point: ``mediahub``."""
    import uvicorn

    from .logging_config import setup_logging

    setup_logging(default_settings.log_level)
    uvicorn.run(app, host=default_settings.host, port=default_settings.port)
