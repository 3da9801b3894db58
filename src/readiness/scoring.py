"""Aggregation of check results into the overall readiness score."""

import logging

from readiness.base import CheckResult
from readiness.constants import (
    BONUS_POINTS,
    CHECK_WEIGHTS,
    CONTENT_SIGNAL_IDS,
    DEFAULT_WEIGHT,
    SCORE_THRESHOLDS,
)
from readiness.utils import get_domain_reputation_bonus, get_hostname

logger = logging.getLogger(__name__)


def weighted_average(checks: list[CheckResult]) -> int:
    """Rounded weighted mean of check scores (0 for no checks)."""
    weighted_sum = 0.0
    total_weight = 0.0

    for check in checks:
        weight = CHECK_WEIGHTS.get(check.id, DEFAULT_WEIGHT)
        weighted_sum += check.score * weight
        total_weight += weight

    if total_weight == 0:
        return 0

    return round(weighted_sum / total_weight)


def content_signal_bonus(checks: list[CheckResult]) -> int:
    """Bonus for readability, heading structure and metadata scoring well together."""
    signals = sum(
        1
        for check in checks
        if check.id in CONTENT_SIGNAL_IDS
        and check.score >= SCORE_THRESHOLDS["content_signal"]
    )

    if signals >= 3:
        return BONUS_POINTS["three_content_signals"]
    if signals == 2:
        return BONUS_POINTS["two_content_signals"]
    return 0


def calculate_overall_score(checks: list[CheckResult], url: str) -> int:
    """
    Combine all check results into one 0-100 score.

    Steps:
    1. Weighted average of check scores
    2. Content signal bonus
    3. Floor at the minimum viable score when any check is excellent
    4. Domain reputation bonus
    5. Cap at 100

    Raises:
        InvalidUrlError: The URL has no hostname
    """
    base_score = weighted_average(checks) + content_signal_bonus(checks)

    # One catastrophic sub-score should not sink an otherwise strong site
    if base_score < SCORE_THRESHOLDS["minimum_viable"] and any(
        check.score >= SCORE_THRESHOLDS["excellent"] for check in checks
    ):
        base_score = SCORE_THRESHOLDS["minimum_viable"]

    domain = get_hostname(url)
    reputation_bonus = get_domain_reputation_bonus(domain)

    final_score = min(100, base_score + reputation_bonus)
    logger.info(
        f"Final scoring for {domain}: base={base_score} "
        f"reputation={reputation_bonus} final={final_score}"
    )
    return final_score
