"""Core types shared by checks, the runner and the scorer."""

from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Literal

import httpx

from readiness.utils import extract_text_content

Status = Literal["pass", "warning", "fail"]


@dataclass(frozen=True)
class CheckResult:
    """Standard result format for all checks."""

    id: str  # Stable slug, unique across all checks
    label: str  # Human-readable name
    status: Status
    score: float  # Always within 0-100
    details: str  # What was found
    recommendation: str  # What to do about it


@dataclass(frozen=True)
class RobotsCheckResult(CheckResult):
    """Robots.txt result carrying the sitemap URLs it references."""

    sitemap_urls: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class CheckContext:
    """Read-only inputs shared by every HTML check of one analysis."""

    html: str
    metadata: dict
    url: str
    text_content: str

    @classmethod
    def build(cls, url: str, html: str, metadata: dict | None = None) -> "CheckContext":
        return cls(
            html=html,
            metadata=metadata or {},
            url=url,
            text_content=extract_text_content(html),
        )


@dataclass(frozen=True)
class FileCheckContext:
    """Read-only inputs shared by every file check of one analysis."""

    base_url: str  # scheme://host, no path


def _clamp(score: float) -> float:
    return max(0, min(100, score))


@dataclass(frozen=True)
class Check:
    """A single HTML rule. ``evaluate`` receives the check itself and the context."""

    id: str
    label: str
    weight: float
    evaluate: Callable[["Check", CheckContext], CheckResult]

    def run(self, context: CheckContext) -> CheckResult:
        return self.evaluate(self, context)

    def result(
        self, status: Status, score: float, details: str, recommendation: str
    ) -> CheckResult:
        """Build a result for this check with the score clamped to 0-100."""
        return CheckResult(
            id=self.id,
            label=self.label,
            status=status,
            score=_clamp(score),
            details=details,
            recommendation=recommendation,
        )


@dataclass(frozen=True)
class FileCheck:
    """A rule that fetches a domain-level file.

    Extra keyword data passed to ``run`` is forwarded to ``probe``; the
    sitemap check uses it to receive the URLs discovered in robots.txt.
    """

    id: str
    label: str
    weight: float
    probe: Callable[..., Awaitable[CheckResult]]

    async def run(
        self,
        context: FileCheckContext,
        client: httpx.AsyncClient | None = None,
        **data: Any,
    ) -> CheckResult:
        return await self.probe(self, context, client, **data)

    def result(
        self, status: Status, score: float, details: str, recommendation: str
    ) -> CheckResult:
        return CheckResult(
            id=self.id,
            label=self.label,
            status=status,
            score=_clamp(score),
            details=details,
            recommendation=recommendation,
        )


@dataclass
class AnalysisResult:
    """Top-level output of one analysis."""

    success: bool
    url: str
    overall_score: int  # 0-100
    checks: list[CheckResult]  # File checks first, then HTML checks
    html_content: str  # Truncated raw HTML for debugging
    metadata: dict  # title, description, analyzed_at
