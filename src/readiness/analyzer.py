"""AI readiness analysis engine."""

import logging
import time
from datetime import datetime, timezone

import httpx

from config import settings
from readiness.base import AnalysisResult, CheckContext, CheckResult, FileCheckContext
from readiness.exceptions import EmptyContentError
from readiness.runner import run_file_checks, run_html_checks
from readiness.scoring import calculate_overall_score
from readiness.utils import get_base_url, normalize_url

logger = logging.getLogger(__name__)


def _elapsed_ms(start: float) -> int:
    return round((time.perf_counter() - start) * 1000)


class ReadinessAnalyzer:
    """
    Scores how readable a page is to AI crawlers.

    Checks:
    - llms.txt, robots.txt and sitemap.xml on the page's domain
    - Heading hierarchy, readability and metadata quality
    - Semantic markup, accessibility and structured data
    - Anti-bot and fingerprinting measures
    """

    def __init__(self, client: httpx.AsyncClient | None = None):
        """Optionally share an HTTP client for the file checks."""
        self.client = client

    @property
    def name(self) -> str:
        return "ai-readiness"

    async def analyze(self, url: str, html: str, metadata: dict | None = None) -> AnalysisResult:
        """
        Run the analysis on a scraped page.

        Args:
            url: The page URL (scheme optional)
            html: Raw HTML returned by the scraper
            metadata: Scraper metadata (title, description, statusCode, ...)

        Returns:
            AnalysisResult with the overall score and every check result

        Raises:
            InvalidUrlError: The URL cannot be parsed
            EmptyContentError: No HTML to analyze
        """
        metadata = metadata or {}
        url = normalize_url(url.strip())
        base_url = get_base_url(url)

        if not html or not html.strip():
            raise EmptyContentError(f"No HTML content to analyze for {url}")

        logger.info(f"Analyzing HTML content for {url}...")
        start = time.perf_counter()
        html_checks = run_html_checks(CheckContext.build(url, html, metadata))
        logger.info(f"HTML analysis completed in {_elapsed_ms(start)}ms")

        logger.info(f"Checking robots.txt, sitemap.xml, llms.txt on {base_url}...")
        start = time.perf_counter()
        file_checks = await run_file_checks(FileCheckContext(base_url=base_url), self.client)
        logger.info(f"File checks completed in {_elapsed_ms(start)}ms")

        checks: list[CheckResult] = [
            file_checks.llms,
            file_checks.robots,
            file_checks.sitemap,
            *html_checks,
        ]

        overall_score = calculate_overall_score(checks, url)

        return AnalysisResult(
            success=True,
            url=url,
            overall_score=overall_score,
            checks=checks,
            html_content=html[: settings.html_preview_length],
            metadata={
                "title": metadata.get("title"),
                "description": metadata.get("description"),
                "analyzed_at": datetime.now(timezone.utc).isoformat(),
            },
        )


# Convenience function
async def run_readiness_analysis(
    url: str, html: str, metadata: dict | None = None
) -> AnalysisResult:
    """Run the AI readiness analysis on a scraped page."""
    analyzer = ReadinessAnalyzer()
    return await analyzer.analyze(url, html, metadata)
