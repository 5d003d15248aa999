"""FastAPI application entry point for FutureGraph."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from futuregraph import __version__
from futuregraph.api.middleware.logging_middleware import LoggingMiddleware
from futuregraph.api.routes.futuregraph import router as futuregraph_router
from futuregraph.api.routes.metrics import router as metrics_router
from futuregraph.api.startup import configure_logging, log_effective_configuration


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    configure_logging()
    log_effective_configuration()
    yield


def create_app() -> FastAPI:
    """Build the FutureGraph API application."""
    application = FastAPI(
        title="FutureGraph API",
        description="Multi-round handwriting analysis workflow",
        version=__version__,
        lifespan=lifespan,
    )
    application.add_middleware(LoggingMiddleware)
    application.include_router(futuregraph_router)
    application.include_router(metrics_router)
    return application


app = create_app()
