"""
Checks that fetch domain-level files: llms.txt, robots.txt and sitemap.xml.

A failed or timed-out fetch never escapes a check; it degrades to the
check's "not found" result.
"""

import asyncio
import logging
import re

import httpx

from config import settings
from readiness.base import CheckResult, FileCheck, FileCheckContext, RobotsCheckResult
from readiness.constants import CHECK_WEIGHTS, COMMON_SITEMAP_LOCATIONS, LLMS_TXT_VARIATIONS
from readiness.exceptions import FetchError
from readiness.utils import fetch_with_timeout

logger = logging.getLogger(__name__)


# =============================================================================
# llms.txt
# =============================================================================

_NOT_FOUND_PHRASES = ("404 not found", "page not found", "cannot be found")


def is_llms_txt_content(text: str) -> bool:
    """True when a body looks like a real llms.txt rather than an HTML/404 page."""
    lowered = text.lower()
    return (
        len(text) > 10
        and "<!doctype" not in lowered
        and "<html" not in lowered
        and not any(phrase in lowered for phrase in _NOT_FOUND_PHRASES)
    )


async def _probe_llms_variant(
    base_url: str, filename: str, client: httpx.AsyncClient | None
) -> str | None:
    response = await fetch_with_timeout(f"{base_url}/{filename}", client=client)
    if not response.is_success:
        return None
    return filename if is_llms_txt_content(response.text) else None


async def _probe_llms(
    check: FileCheck, context: FileCheckContext, client: httpx.AsyncClient | None
) -> CheckResult:
    outcomes = await asyncio.gather(
        *(
            _probe_llms_variant(context.base_url, filename, client)
            for filename in LLMS_TXT_VARIATIONS
        ),
        return_exceptions=True,
    )

    # Declared order decides between several valid variants
    for filename, outcome in zip(LLMS_TXT_VARIATIONS, outcomes):
        if isinstance(outcome, FetchError):
            logger.debug(f"llms.txt probe failed for {filename}: {outcome}")
        elif isinstance(outcome, BaseException):
            raise outcome
        elif outcome:
            return check.result(
                status="pass",
                score=100,
                details=f"{outcome} file found with AI usage guidelines",
                recommendation="Great! You have defined AI usage permissions",
            )

    return check.result(
        status="fail",
        score=0,
        details="No llms.txt file found",
        recommendation="Add an llms.txt file to define AI usage permissions",
    )


# =============================================================================
# robots.txt
# =============================================================================

_SITEMAP_DIRECTIVE_RE = re.compile(r"^[ \t]*Sitemap:[ \t]*(.+)$", re.IGNORECASE | re.MULTILINE)


def extract_sitemap_urls(robots_text: str) -> list[str]:
    """Collect the URLs of all ``Sitemap:`` directives, in file order."""
    return [
        url.strip() for url in _SITEMAP_DIRECTIVE_RE.findall(robots_text) if url.strip()
    ]


async def _probe_robots(
    check: FileCheck, context: FileCheckContext, client: httpx.AsyncClient | None
) -> RobotsCheckResult:
    not_found = RobotsCheckResult(
        id=check.id,
        label=check.label,
        status="fail",
        score=0,
        details="No robots.txt file found",
        recommendation="Create a robots.txt file with AI crawler directives",
        sitemap_urls=[],
    )

    try:
        response = await fetch_with_timeout(f"{context.base_url}/robots.txt", client=client)
    except FetchError as e:
        logger.info(f"robots.txt unavailable: {e}")
        return not_found

    if not response.is_success:
        return not_found

    robots_text = response.text
    has_user_agent = "user-agent" in robots_text.lower()
    sitemap_urls = extract_sitemap_urls(robots_text)
    has_sitemap = bool(sitemap_urls)

    score = (60 if has_user_agent else 0) + (40 if has_sitemap else 0)

    details = "Robots.txt found"
    if has_sitemap:
        details += f" with {len(sitemap_urls)} sitemap reference(s)"

    return RobotsCheckResult(
        id=check.id,
        label=check.label,
        status="pass" if score >= 80 else "warning" if score >= 40 else "fail",
        score=score,
        details=details,
        recommendation=(
            "Add sitemap reference to robots.txt"
            if score < 80
            else "Robots.txt properly configured"
        ),
        sitemap_urls=sitemap_urls,
    )


# =============================================================================
# sitemap.xml
# =============================================================================

_SITEMAP_MARKERS = ("<?xml", "<urlset", "<sitemapindex", "<url>", "<sitemap>")


def is_sitemap_content(content: str) -> bool:
    return any(marker in content for marker in _SITEMAP_MARKERS) and (
        "<!DOCTYPE html" not in content
    )


def sitemap_candidates(base_url: str, robots_sitemap_urls: list[str]) -> list[str]:
    """Robots.txt sitemaps first, then common locations not already listed."""
    limit = settings.max_robots_sitemaps
    if len(robots_sitemap_urls) > limit:
        logger.debug(
            f"Ignoring {len(robots_sitemap_urls) - limit} robots.txt sitemaps beyond the first {limit}"
        )
    candidates = list(robots_sitemap_urls[:limit])

    for path in COMMON_SITEMAP_LOCATIONS:
        url = f"{base_url}{path}"
        if url not in candidates:
            candidates.append(url)

    return candidates


async def _probe_sitemap(
    check: FileCheck,
    context: FileCheckContext,
    client: httpx.AsyncClient | None,
    robots_sitemap_urls: list[str] | None = None,
) -> CheckResult:
    robots_sitemap_urls = robots_sitemap_urls or []

    # Sequential: stop at the first valid sitemap
    for sitemap_url in sitemap_candidates(context.base_url, robots_sitemap_urls):
        try:
            response = await fetch_with_timeout(sitemap_url, client=client)
        except FetchError as e:
            logger.debug(f"Sitemap candidate failed: {e}")
            continue

        if not response.is_success or not is_sitemap_content(response.text):
            continue

        if sitemap_url in robots_sitemap_urls:
            location = " (referenced in robots.txt)"
        else:
            location = f" at {sitemap_url.replace(context.base_url, '', 1)}"

        return check.result(
            status="pass",
            score=100,
            details=f"Valid XML sitemap found{location}",
            recommendation="Sitemap is properly configured",
        )

    return check.result(
        status="fail",
        score=0,
        details="No sitemap.xml found",
        recommendation="Generate and submit an XML sitemap",
    )


# =============================================================================
# Registry
# =============================================================================

LLMS_CHECK = FileCheck(
    id="llms-txt",
    label="LLMs.txt",
    weight=CHECK_WEIGHTS["llms-txt"],
    probe=_probe_llms,
)

ROBOTS_CHECK = FileCheck(
    id="robots-txt",
    label="Robots.txt",
    weight=CHECK_WEIGHTS["robots-txt"],
    probe=_probe_robots,
)

SITEMAP_CHECK = FileCheck(
    id="sitemap",
    label="Sitemap",
    weight=CHECK_WEIGHTS["sitemap"],
    probe=_probe_sitemap,
)
