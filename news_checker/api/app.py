"""FastAPI application for the news checker service."""

import contextlib
import logging

from fastapi import FastAPI

from ..infrastructure.dependencies import get_service_container
from .endpoints import analyze, health

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


@contextlib.asynccontextmanager
async def lifespan(app: FastAPI):
    """Create the service container at startup and close its clients on shutdown."""
    container = get_service_container()
    if not container.config.llm_api_key:
        logger.error("LOVABLE_API_KEY is not configured, analysis requests will fail")

    yield  # Application runs here

    await container.shutdown()


# Create FastAPI application
app = FastAPI(
    title="News Checker API",
    description="Claim credibility checking with optional live web evidence",
    version=health.VERSION,
    lifespan=lifespan,
)

# CORS headers are set per response by the analyze router, which also
# answers OPTIONS itself with 204
app.include_router(health.router)
app.include_router(analyze.router)
