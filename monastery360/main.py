# monastery360/main.py
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from .catalog import CatalogStore, QueryEngine, catalog_router
from .config import Settings, get_settings

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None, store: Optional[CatalogStore] = None) -> FastAPI:
    """Build the API.

    When ``store`` is not given, the catalogue is loaded from the files
    named in ``settings`` during startup, before the first request.
    """
    custom_settings = settings is not None
    settings = settings or get_settings()

    logging.basicConfig(
        level=settings.log_level.upper(),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(f"Starting {settings.app_name} v{settings.app_version}")
        if getattr(app.state, "engine", None) is None:
            app.state.engine = QueryEngine(CatalogStore.from_settings(settings))
        yield
        logger.info("Shutting down...")

    app = FastAPI(
        title=settings.app_name,
        description="Monasteries, festivals and virtual tours: read-only catalogue API.",
        version=settings.app_version,
        lifespan=lifespan,
    )
    if store is not None:
        app.state.engine = QueryEngine(store)
    if custom_settings:
        app.dependency_overrides[get_settings] = lambda: settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/health")
    def health_check():
        return {"status": "ok"}

    app.include_router(catalog_router)

    # Frontend last so /api and /health win over static paths
    frontend = settings.frontend_dir
    if frontend is not None:
        if frontend.is_dir():
            app.mount("/", StaticFiles(directory=str(frontend), html=True), name="frontend")
        else:
            logger.warning(f"Frontend directory {frontend} not found, serving API only")

    return app


app = create_app()
