"""AI Readiness API - scores how readable a website is to AI crawlers."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.routes import health_router, readiness_router
from config import settings

logging.basicConfig(
    level=logging.DEBUG if settings.debug else settings.log_level.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    The service is stateless, so this only logs startup and shutdown.
    """
    logger.info(f"Starting {settings.app_name}...")
    if not settings.firecrawl_api_key:
        logger.warning("FIRECRAWL_API_KEY is not set; analyses will fail to scrape")
    yield
    logger.info(f"Shutting down {settings.app_name}...")


app = FastAPI(
    title="AI Readiness API",
    description="Scores a page's HTML, robots.txt, sitemap.xml and llms.txt for AI crawler readability.",
    version="0.1.0",
    lifespan=lifespan,
)

# Configure CORS (adjust origins for production)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register routers
app.include_router(health_router, prefix="/api/v1")
app.include_router(readiness_router, prefix="/api/v1")


@app.get("/", include_in_schema=False)
async def root():
    """Service index."""
    return {
        "service": "AI Readiness API",
        "docs": "/docs",
        "health": "/api/v1/health",
        "analyze": "/api/v1/ai-readiness",
    }
