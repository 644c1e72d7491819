"""
scoring/behavioral.py — Behavioral Multiplier & Pipeline Confidence

Both figures read only the SessionSummary.

Behavioral multiplier:
    1.0 + 0.05 for each authentic-engagement signal, capped at MULTIPLIER_CAP (1.2)

    Signals:
        - average response time in (3s, 15s)   engaged but not rushed
        - fewer than 2 hesitations
        - completion rate above 90%
        - no rapid-clicking episodes

Pipeline confidence:
    70 + 10 (completion > 95) or 5 (completion > 80)
       + 10 (fewer than 2 corrections)
       + 10 (engagement > 80)                   capped at 100
"""

from decimal import Decimal
from typing import Optional

from candidate_intel.config import get_settings
from candidate_intel.models.telemetry import SessionSummary
from candidate_intel.scoring.utils import clamp

MULTIPLIER_BASE = Decimal("1.0")
MULTIPLIER_STEP = Decimal("0.05")

ENGAGED_RESPONSE_MIN_MS = 3000
ENGAGED_RESPONSE_MAX_MS = 15000

CONFIDENCE_BASE = 70


class BehavioralMultiplierCalculator:
    """Reward plausible authentic engagement, never raw score."""

    def __init__(self, cap: Optional[float] = None):
        self.cap = Decimal(str(cap if cap is not None else get_settings().MULTIPLIER_CAP))

    def calculate(self, summary: SessionSummary) -> Decimal:
        """
        Examples:
            >>> BehavioralMultiplierCalculator(cap=1.2).calculate(SessionSummary())
            Decimal('1.10')
        """
        signals = [
            ENGAGED_RESPONSE_MIN_MS < summary.average_response_time_ms < ENGAGED_RESPONSE_MAX_MS,
            summary.hesitation_count < 2,
            summary.completion_rate > 90,
            summary.anomalies.rapid_clicking == 0,
        ]
        multiplier = MULTIPLIER_BASE + MULTIPLIER_STEP * sum(signals)
        return clamp(multiplier, MULTIPLIER_BASE, self.cap)


def pipeline_confidence(summary: SessionSummary) -> int:
    """How much the score can be trusted given data completeness and consistency."""
    confidence = CONFIDENCE_BASE
    if summary.completion_rate > 95:
        confidence += 10
    elif summary.completion_rate > 80:
        confidence += 5
    if summary.correction_count < 2:
        confidence += 10
    if summary.engagement_score > 80:
        confidence += 10
    return min(confidence, 100)
