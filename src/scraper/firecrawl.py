"""Firecrawl scraping client."""

import logging
from dataclasses import dataclass, field

import httpx

from config import settings

logger = logging.getLogger(__name__)


class ScrapeError(Exception):
    """The scraping service could not return the page."""


@dataclass
class ScrapeResult:
    """HTML and metadata returned for one URL."""

    html: str
    metadata: dict = field(default_factory=dict)


class FirecrawlScraper:
    """
    Fetches rendered HTML through the Firecrawl API.

    The response may carry ``html``/``metadata`` at the top level or nested
    under ``data``.
    """

    def __init__(
        self,
        api_key: str | None = None,
        api_url: str | None = None,
        client: httpx.AsyncClient | None = None,
    ):
        self.api_key = api_key if api_key is not None else settings.firecrawl_api_key
        self.api_url = (api_url or settings.firecrawl_api_url).rstrip("/")
        self.client = client

    async def scrape(self, url: str) -> ScrapeResult:
        """
        Scrape a single URL.

        Args:
            url: Normalized page URL

        Returns:
            ScrapeResult with the page HTML (possibly empty) and metadata

        Raises:
            ScrapeError: Missing API key, transport failure or error response
        """
        if not self.api_key:
            raise ScrapeError("FIRECRAWL_API_KEY is not configured")

        if self.client is None:
            async with httpx.AsyncClient(timeout=settings.scrape_timeout) as client:
                payload = await self._request(client, url)
        else:
            payload = await self._request(self.client, url)

        if payload.get("success") is False:
            raise ScrapeError(payload.get("error") or "Firecrawl reported a failed scrape")

        data = payload.get("data") or {}
        html = payload.get("html") or data.get("html") or payload.get("content") or ""
        metadata = payload.get("metadata") or data.get("metadata") or {}

        return ScrapeResult(html=html, metadata=metadata)

    async def _request(self, client: httpx.AsyncClient, url: str) -> dict:
        try:
            response = await client.post(
                f"{self.api_url}/v1/scrape",
                json={"url": url, "formats": ["html"]},
                headers={"Authorization": f"Bearer {self.api_key}"},
            )
            response.raise_for_status()
            return response.json()
        except httpx.TimeoutException as e:
            logger.error(f"Timeout scraping {url}")
            raise ScrapeError("Timeout scraping page") from e
        except httpx.HTTPError as e:
            logger.error(f"Firecrawl scrape failed for {url}: {e}")
            raise ScrapeError(str(e)) from e
        except ValueError as e:
            logger.error(f"Firecrawl returned invalid JSON for {url}")
            raise ScrapeError("Invalid response from scraping service") from e
