"""Text, URL and network helpers used by the checks."""

import asyncio
import logging
import re
from urllib.parse import urlparse

import httpx

from config import settings
from readiness.constants import (
    BONUS_POINTS,
    DOCUMENTATION_MARKERS,
    SCORE_THRESHOLDS,
    SECOND_TIER_DOMAINS,
    TOP_TIER_DOMAINS,
)
from readiness.exceptions import FetchError, FetchTimeoutError, InvalidUrlError

logger = logging.getLogger(__name__)

_SCRIPT_RE = re.compile(r"<script[^>]*>.*?</script>", re.IGNORECASE | re.DOTALL)
_STYLE_RE = re.compile(r"<style[^>]*>.*?</style>", re.IGNORECASE | re.DOTALL)
_TAG_RE = re.compile(r"<[^>]+>")
_WHITESPACE_RE = re.compile(r"\s+")
_SENTENCE_SPLIT_RE = re.compile(r"[.!?]+")
_VOWEL_RUN_RE = re.compile(r"[aeiouAEIOU]+")

_ENTITIES = {
    "&nbsp;": " ",
    "&amp;": "&",
    "&lt;": "<",
    "&gt;": ">",
    "&quot;": '"',
    "&#39;": "'",
}


def normalize_url(url: str) -> str:
    """Prefix ``https://`` when the URL has no http(s) scheme."""
    if not url.startswith("http://") and not url.startswith("https://"):
        return "https://" + url
    return url


_INVALID_HOST_RE = re.compile(r"[\s<>\"{}|\\^`]")


def _parse_url(url: str):
    """Parse a (possibly scheme-less) URL, rejecting anything without a usable host."""
    normalized = normalize_url(url)
    try:
        parsed = urlparse(normalized)
        # Accessing .port validates it
        parsed.port
        # httpx rejects hosts that are not valid IDNA
        httpx.URL(normalized)
    except (ValueError, httpx.InvalidURL) as e:
        raise InvalidUrlError(url) from e

    if not parsed.netloc or not parsed.hostname:
        raise InvalidUrlError(url)
    if _INVALID_HOST_RE.search(parsed.hostname):
        raise InvalidUrlError(url)

    return parsed


def get_base_url(url: str) -> str:
    """Return scheme://host[:port] for a URL, without path, query or fragment."""
    parsed = _parse_url(url)
    return f"{parsed.scheme}://{parsed.netloc.rsplit('@', 1)[-1]}"


def get_hostname(url: str) -> str:
    """Lower-cased hostname of a (possibly scheme-less) URL."""
    return _parse_url(url).hostname.lower()


def extract_text_content(html: str) -> str:
    """Strip scripts, styles and tags from HTML and collapse whitespace."""
    text = _SCRIPT_RE.sub("", html)
    text = _STYLE_RE.sub("", text)
    text = _TAG_RE.sub(" ", text)

    for entity, char in _ENTITIES.items():
        text = text.replace(entity, char)

    return _WHITESPACE_RE.sub(" ", text).strip()


def _count_syllables(word: str) -> int:
    return len(_VOWEL_RUN_RE.findall(word)) or 1


def calculate_readability(text: str) -> float:
    """
    Flesch Reading Ease of a text, clamped to 0-100.

    Sentences are split on runs of ``.!?`` and syllables are approximated by
    vowel runs, with at least one syllable per word.
    """
    sentences = [s for s in _SENTENCE_SPLIT_RE.split(text) if s.strip()]
    words = text.split()

    if not sentences or not words:
        return 0

    syllables = sum(_count_syllables(word) for word in words)

    avg_words_per_sentence = len(words) / len(sentences)
    avg_syllables_per_word = syllables / len(words)

    score = 206.835 - 1.015 * avg_words_per_sentence - 84.6 * avg_syllables_per_word

    return max(0, min(100, score))


def _matches_domain(domain: str, candidates: list[str]) -> bool:
    return any(domain == d or domain.endswith(f".{d}") for d in candidates)


def get_domain_reputation_bonus(domain: str) -> int:
    """
    Score bonus for well-known domains.

    Documentation hosts win over the top-tier list, which wins over the
    second-tier list.
    """
    domain = domain.lower()
    if domain.startswith("www."):
        domain = domain[4:]

    if any(marker in domain for marker in DOCUMENTATION_MARKERS):
        return BONUS_POINTS["documentation_site"]

    if _matches_domain(domain, TOP_TIER_DOMAINS):
        return BONUS_POINTS["top_tier_domain"]

    if _matches_domain(domain, SECOND_TIER_DOMAINS):
        return BONUS_POINTS["second_tier_domain"]

    return 0


def get_status_from_score(score: float) -> str:
    """Classify a score with the default pass/warning thresholds."""
    if score >= SCORE_THRESHOLDS["pass"]:
        return "pass"
    if score >= SCORE_THRESHOLDS["warning"]:
        return "warning"
    return "fail"


async def fetch_with_timeout(
    url: str,
    timeout: float | None = None,
    client: httpx.AsyncClient | None = None,
) -> httpx.Response:
    """
    GET a URL, giving up after ``timeout`` seconds.

    Args:
        url: Absolute URL to fetch
        timeout: Seconds for the whole request (defaults to settings.fetch_timeout)
        client: Shared client; a temporary one is opened when omitted

    Returns:
        The response, whatever its status code

    Raises:
        FetchTimeoutError: No response within the timeout
        FetchError: Any other network failure
    """
    if timeout is None:
        timeout = settings.fetch_timeout

    if client is None:
        async with httpx.AsyncClient(
            follow_redirects=True,
            headers={"User-Agent": settings.user_agent},
        ) as own_client:
            return await fetch_with_timeout(url, timeout, own_client)

    try:
        return await asyncio.wait_for(
            client.get(url, follow_redirects=True), timeout=timeout
        )
    except (asyncio.TimeoutError, httpx.TimeoutException) as e:
        raise FetchTimeoutError(url, timeout) from e
    except (httpx.HTTPError, httpx.InvalidURL) as e:
        raise FetchError(url, str(e) or type(e).__name__) from e
