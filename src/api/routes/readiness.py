"""AI readiness API endpoint."""

import logging
import time
from dataclasses import asdict

from fastapi import APIRouter, Depends, HTTPException, status

from api.schemas import AnalysisResponse, AnalyzeRequest
from readiness import InvalidUrlError, ReadinessAnalyzer
from readiness.utils import get_base_url, normalize_url
from scraper import FirecrawlScraper, ScrapeError

logger = logging.getLogger(__name__)

router = APIRouter(tags=["AI Readiness"])


def get_scraper() -> FirecrawlScraper:
    """Scraper dependency (overridden in tests)."""
    return FirecrawlScraper()


def get_analyzer() -> ReadinessAnalyzer:
    return ReadinessAnalyzer()


@router.post(
    "/ai-readiness",
    response_model=AnalysisResponse,
    summary="Analyze AI readiness",
    description="Scrape a page and score how readable it is to AI crawlers.",
)
async def analyze_ai_readiness(
    request: AnalyzeRequest,
    scraper: FirecrawlScraper = Depends(get_scraper),
    analyzer: ReadinessAnalyzer = Depends(get_analyzer),
) -> AnalysisResponse:
    """
    Run a full AI readiness analysis.

    The page is scraped first; robots.txt, sitemap.xml and llms.txt are then
    fetched from the page's domain while the HTML is scored.
    """
    if not request.url.strip():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="URL is required",
        )

    url = normalize_url(request.url.strip())
    try:
        get_base_url(url)
    except InvalidUrlError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid URL format",
        )

    logger.info(f"Scraping {url}...")
    start = time.perf_counter()
    try:
        page = await scraper.scrape(url)
    except ScrapeError as e:
        logger.error(f"Scrape failed for {url}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to scrape website. Please check the URL.",
        )
    logger.info(f"Scrape completed in {round((time.perf_counter() - start) * 1000)}ms")

    if not page.html or not page.html.strip():
        logger.error(f"No HTML content found for {url}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to extract content from website",
        )

    result = await analyzer.analyze(url, page.html, page.metadata)

    logger.info(
        f"Total analysis time for {url}: {round((time.perf_counter() - start) * 1000)}ms"
    )

    return AnalysisResponse.model_validate(asdict(result))
