"""
assetdesk - FastAPI Main Application

Backend-for-frontend for the asset-management console: paged resource
tables, record edits, dashboard counts and image upload, each proxied to the
inventory, people and media services.
"""

import os
from datetime import UTC, datetime
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from app_logging import get_logger, init_logging
from config import _Settings, get_settings
from exceptions import DataFetchError, FetchCancelled, MutationError
from fetching.transport import Transport
from storage.auth import AuthSession
from storage.kv import KeyValueStore, open_store

logger = get_logger(__name__)

SERVICE_INFO = {
    "name": "assetdesk",
    "version": "1.0.0",
    "description": "Asset-management console backend",
}


def create_app(
    settings: Optional[_Settings] = None,
    store: Optional[KeyValueStore] = None,
    transport: Optional[Transport] = None,
) -> FastAPI:
    init_logging()
    settings = settings or get_settings()
    store = store if store is not None else open_store(settings.store_path)

    app = FastAPI(
        title="assetdesk",
        description=SERVICE_INFO["description"],
        version=SERVICE_INFO["version"],
    )
    app.state.settings = settings
    app.state.store = store
    app.state.auth = AuthSession(store)
    app.state.transport = transport
    app.state.started_at = datetime.now(UTC)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    from api.routes.auth import router as auth_router
    from api.routes.dashboard import router as dashboard_router
    from api.routes.resources import router as resources_router

    app.include_router(auth_router)
    app.include_router(resources_router)
    app.include_router(dashboard_router)

    @app.exception_handler(MutationError)
    async def mutation_failed(request: Request, exc: MutationError):
        logger.error("mutation_failed", extra={"path": request.url.path, "error": exc.message})
        return JSONResponse(status_code=502, content={"detail": exc.message})

    @app.exception_handler(DataFetchError)
    async def fetch_failed(request: Request, exc: DataFetchError):
        logger.error("fetch_failed", extra={"path": request.url.path, "error": str(exc)})
        return JSONResponse(status_code=502, content={"detail": str(exc)})

    @app.exception_handler(FetchCancelled)
    async def fetch_cancelled(request: Request, exc: FetchCancelled):
        logger.debug("request_cancelled", extra={"path": request.url.path})
        return JSONResponse(status_code=499, content={"detail": "cancelled"})

    @app.get("/health", response_class=JSONResponse)
    async def health():
        """Health check endpoint"""
        return {
            "status": "healthy",
            "service": SERVICE_INFO["name"],
            "timestamp": datetime.now(UTC).isoformat(),
            "version": SERVICE_INFO["version"],
            "uptime": str(datetime.now(UTC) - app.state.started_at),
        }

    @app.get("/metrics", response_class=PlainTextResponse)
    async def metrics():
        return PlainTextResponse(generate_latest().decode("utf-8"), media_type=CONTENT_TYPE_LATEST)

    return app


if __name__ == "__main__":
    import uvicorn
    host = os.getenv('ASSETDESK_HOST', '0.0.0.0')
    port = int(os.getenv('ASSETDESK_PORT', '8003'))
    logger.info(f"Starting assetdesk on {host}:{port}")
    uvicorn.run(create_app(), host=host, port=port)
