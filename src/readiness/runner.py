"""Runs the HTML and file checks for one analysis."""

import asyncio
import logging
from typing import NamedTuple

import httpx

from config import settings
from readiness.base import CheckContext, CheckResult, FileCheckContext, RobotsCheckResult
from readiness.file_checks import LLMS_CHECK, ROBOTS_CHECK, SITEMAP_CHECK
from readiness.html_checks import HTML_CHECKS

logger = logging.getLogger(__name__)


class FileCheckResults(NamedTuple):
    llms: CheckResult
    robots: RobotsCheckResult
    sitemap: CheckResult


def run_html_checks(context: CheckContext) -> list[CheckResult]:
    """Run every HTML check against the shared context, in declared order."""
    return [check.run(context) for check in HTML_CHECKS]


async def _run_robots_then_sitemap(
    context: FileCheckContext, client: httpx.AsyncClient
) -> tuple[RobotsCheckResult, CheckResult]:
    robots = await ROBOTS_CHECK.run(context, client)
    logger.debug(f"robots.txt listed {len(robots.sitemap_urls)} sitemap(s)")

    sitemap = await SITEMAP_CHECK.run(
        context, client, robots_sitemap_urls=robots.sitemap_urls
    )
    return robots, sitemap


async def run_file_checks(
    context: FileCheckContext, client: httpx.AsyncClient | None = None
) -> FileCheckResults:
    """
    Run the file checks.

    robots.txt must finish before the sitemap check starts since the sitemap
    check probes the URLs robots.txt lists first. llms.txt runs alongside.
    """
    if client is None:
        async with httpx.AsyncClient(
            follow_redirects=True,
            headers={"User-Agent": settings.user_agent},
        ) as own_client:
            return await run_file_checks(context, own_client)

    llms, (robots, sitemap) = await asyncio.gather(
        LLMS_CHECK.run(context, client),
        _run_robots_then_sitemap(context, client),
    )

    return FileCheckResults(llms=llms, robots=robots, sitemap=sitemap)
