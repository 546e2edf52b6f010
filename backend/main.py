import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from core.config import Settings, get_settings
from core.dependencies import HighlightsRuntime, build_runtime
from core.logging import setup_logging
from routes.api_v1 import api_v1_router

logger = logging.getLogger(__name__)

ALLOWED_ORIGINS = [
    "http://localhost:5173",
    "http://127.0.0.1:5173",
    "http://localhost:3000",
]


def create_app(
    settings: Settings | None = None,
    runtime: HighlightsRuntime | None = None,
) -> FastAPI:
    """
    Composition root: builds the shared fetch context, sources and listeners once
    and hangs them on app.state for the route dependencies.
    """
    settings = settings or get_settings()
    app = FastAPI(title=settings.app_name)
    app.state.settings = settings
    app.state.highlights = runtime or build_runtime(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ALLOWED_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
        allow_credentials=False,
    )
    app.include_router(api_v1_router)

    @app.on_event("startup")
    async def on_startup() -> None:
        """Application startup hook."""
        if not settings.scorebat_token:
            logger.warning("SCOREBAT_API_TOKEN is not set; serving demo highlights")
        logger.info("Application startup complete (remote timeout %.1fs)", settings.remote_timeout_seconds)

    @app.on_event("shutdown")
    async def on_shutdown() -> None:
        """Application shutdown hook."""
        await app.state.highlights.aclose()
        logger.info("Application shutdown complete")

    @app.get("/health")
    async def health() -> dict:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app


settings = get_settings()
setup_logging(settings)
app = create_app(settings)
