"""Scraping service clients."""

from scraper.firecrawl import FirecrawlScraper, ScrapeError, ScrapeResult

__all__ = ["FirecrawlScraper", "ScrapeError", "ScrapeResult"]
