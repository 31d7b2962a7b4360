"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from fit_tracker.api.foods import router as foods_router
from fit_tracker.api.users import router as users_router
from fit_tracker.app_logging import configure_logging
from fit_tracker.containers import AppContainer


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        logger.info(
            "Starting fit tracker (environment=%s)", container.settings.environment
        )
        yield
        await app.state.container.close_resources()

    app = FastAPI(title="Fit Tracker", lifespan=lifespan)
    app.state.container = container

    app.include_router(foods_router)
    app.include_router(users_router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app
