"""
FastAPI application with assembled routers.

Initializes FastAPI app with the RPC and health routers and configures the
uvicorn server.

Dependencies: fastapi, docchat.api.routers, uvicorn
System role: API entry point with router assembly and server launch
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from docchat.api.deps.dependencies import get_service_cache
from docchat.boundary.db import dispose_engine
from docchat.core.exceptions import RPCError
from docchat.configs import get_settings
from docchat.observability.logger import configure_logging
from docchat.observability.middleware import CorrelationMiddleware, RequestLoggingMiddleware

from .routers import health_router, rpc_router
from .routers.rpc import rpc_error_handler


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    Handles startup and shutdown events.
    """
    logger = logging.getLogger("uvicorn")

    # Startup
    logger.info("Pre-warming service cache...")
    cache = get_service_cache()
    # Trigger property access to load instances
    _ = cache.s3_storage
    _ = cache.payment_provider
    _ = cache.identity_resolver
    logger.info("Service cache pre-warmed")

    yield

    # Shutdown
    cache.clear()
    await dispose_engine()
    logger.info("Service cache cleared, database engine disposed")


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application with routers.

    Returns:
        FastAPI: Configured application instance with all routers registered
    """
    settings = get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title="DocChat API",
        description="Document chat backend: files, chat history and billing over RPC",
        version="0.1.0",
        debug=settings.debug,
        lifespan=lifespan,
    )

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.app_url],
        allow_credentials=True,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

    # Added last so it runs first and request logs carry the correlation ID
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(CorrelationMiddleware)

    app.include_router(health_router, prefix="/api/v1")
    app.include_router(rpc_router, prefix="/api")
    app.add_exception_handler(RPCError, rpc_error_handler)

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run(
        "docchat.api.main:app",
        host="0.0.0.0",
        port=8000,
    )
