"""AI readiness checks and scoring."""

from readiness.analyzer import ReadinessAnalyzer, run_readiness_analysis
from readiness.base import (
    AnalysisResult,
    Check,
    CheckContext,
    CheckResult,
    FileCheck,
    FileCheckContext,
    RobotsCheckResult,
)
from readiness.exceptions import (
    EmptyContentError,
    FetchError,
    FetchTimeoutError,
    InvalidUrlError,
    ReadinessError,
)
from readiness.scoring import calculate_overall_score

__all__ = [
    "ReadinessAnalyzer",
    "run_readiness_analysis",
    "AnalysisResult",
    "Check",
    "CheckContext",
    "CheckResult",
    "FileCheck",
    "FileCheckContext",
    "RobotsCheckResult",
    "EmptyContentError",
    "FetchError",
    "FetchTimeoutError",
    "InvalidUrlError",
    "ReadinessError",
    "calculate_overall_score",
]
