"""FastAPI application entry point."""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from dispatch.api.errors import lifecycle_error_handler
from dispatch.api.routes import router
from dispatch.config import get_settings
from dispatch.lifecycle.errors import LifecycleError
from dispatch.state.manager import get_state_manager
from dispatch.utils.logging import get_logger, setup_logging

# Setup logging first
setup_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    settings = get_settings()
    logger.info("application_starting", storage_backend=settings.storage_backend)

    state_manager = None
    if settings.storage_backend == "redis":
        state_manager = await get_state_manager()
        logger.info("state_manager_initialized")

    yield

    logger.info("application_shutting_down")
    if state_manager is not None:
        await state_manager.disconnect()


# Create FastAPI app
app = FastAPI(
    title="Delivery Dispatch",
    description="Order lifecycle engine for sellers, drivers and admins",
    version="0.1.0",
    lifespan=lifespan,
)

# CORS middleware
settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Configure appropriately for production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_exception_handler(LifecycleError, lifecycle_error_handler)


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "healthy", "service": "dispatch"}


app.include_router(router, prefix="/api/v1", tags=["api"])


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "dispatch.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.environment == "development",
    )
