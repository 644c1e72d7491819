# candidate_intel/scoring/multi_dimensional_scorer.py
"""
Multi-Dimensional Scorer
------------------------
Scores one ResponseSet + SessionSummary against a registered algorithm.

Formula:
    raw   = Σ (dimension_score_i × weight_i)
    total = round_half_up(raw × BehavioralMultiplier)   clamped to [0, 100]

Weights are the algorithm defaults merged with ``ScoringConfig.weights``;
they need not sum to 1. The tier comes from the configured tier table
(explicit table > vertical > default). All configuration is resolved when
the scorer is built, so a bad algorithm name, weight key or tier table fails
there and never per request.
"""
import math
from decimal import Decimal
from typing import Dict, List, Optional

import structlog

from candidate_intel.config import get_settings
from candidate_intel.core.exceptions import InvalidWeightsError
from candidate_intel.models.enumerations import InsightType
from candidate_intel.models.responses import ResponseSet, response_values
from candidate_intel.models.results import Insight, ScoreResult
from candidate_intel.models.scoring import ScoringConfig
from candidate_intel.models.telemetry import SessionSummary
from candidate_intel.scoring.algorithms import ScoringAlgorithm, get_algorithm
from candidate_intel.scoring.behavioral import BehavioralMultiplierCalculator, pipeline_confidence
from candidate_intel.scoring.tiers import resolve_tier_table, select_tier
from candidate_intel.scoring.utils import clamp, clamp_score, round_half_up

logger = structlog.get_logger(__name__)

PRIORITY_THRESHOLD = 85
STRENGTH_THRESHOLD = 80
CONCERN_THRESHOLD = 40
BEHAVIORAL_ENGAGEMENT_THRESHOLD = 80


class MultiDimensionalScorer:
    """Weighted multi-criteria scoring with tier, confidence and insights."""

    def __init__(self, config: Optional[ScoringConfig] = None):
        self.config = config or ScoringConfig()
        self.algorithm: ScoringAlgorithm = get_algorithm(
            self.config.algorithm or get_settings().DEFAULT_ALGORITHM
        )
        self.weights = self._merge_weights(self.algorithm, self.config.weights)
        self.tier_table = resolve_tier_table(self.config.tier_table, self.config.vertical)
        self.multiplier_calculator = BehavioralMultiplierCalculator()

    @staticmethod
    def _merge_weights(algorithm: ScoringAlgorithm, overrides: Dict[str, float]) -> Dict[str, float]:
        unknown = sorted(set(overrides) - set(algorithm.dimension_names))
        if unknown:
            raise InvalidWeightsError(
                f"Unknown dimensions for '{algorithm.name}': {', '.join(unknown)}"
            )
        non_finite = sorted(k for k, v in overrides.items() if not math.isfinite(v))
        if non_finite:
            raise InvalidWeightsError(f"Non-finite weights: {', '.join(non_finite)}")
        negative = sorted(k for k, v in overrides.items() if v < 0)
        if negative:
            raise InvalidWeightsError(f"Negative weights: {', '.join(negative)}")

        weights = algorithm.default_weights
        weights.update({k: float(v) for k, v in overrides.items()})
        return weights

    def score(self, responses: ResponseSet, summary: Optional[SessionSummary] = None) -> ScoreResult:
        """
        Score one submission.

        Args:
            responses: Answers keyed by question id (Response objects or bare values).
            summary: SessionSummary of the attempt; None scores as an empty session.

        Returns:
            ScoreResult with dimension breakdown, tier, confidence and insights.
        """
        summary = summary or SessionSummary()
        values = response_values(responses)

        dimension_scores: Dict[str, float] = {}
        for spec in self.algorithm.dimensions:
            dimension_scores[spec.name] = round(clamp_score(spec.calculator(values, summary, self.config)), 2)

        raw = sum(
            (Decimal(str(dimension_scores[name])) * Decimal(str(self.weights[name]))
             for name in dimension_scores),
            Decimal("0"),
        )
        multiplier = self.multiplier_calculator.calculate(summary)
        total = int(clamp(round_half_up(raw * multiplier), Decimal("0"), Decimal("100")))

        tier, tier_rank = select_tier(total, self.tier_table)
        confidence = pipeline_confidence(summary)
        insights = self._insights(total, dimension_scores, summary)
        recommendations = self.algorithm.recommend(total, dimension_scores)

        logger.info(
            "score_calculated",
            algorithm=self.algorithm.name,
            raw_score=float(raw),
            behavioral_multiplier=float(multiplier),
            total_score=total,
            tier=tier.name,
            confidence=confidence,
        )

        return ScoreResult(
            algorithm=self.algorithm.name,
            total_score=total,
            dimension_scores=dimension_scores,
            weights=dict(self.weights),
            behavioral_multiplier=float(multiplier),
            confidence=confidence,
            tier=tier,
            tier_rank=tier_rank,
            insights=insights,
            recommendations=recommendations,
        )

    @staticmethod
    def _insights(
        total: int,
        dimension_scores: Dict[str, float],
        summary: SessionSummary,
    ) -> List[Insight]:
        insights = []
        if total > PRIORITY_THRESHOLD:
            insights.append(Insight(
                type=InsightType.PRIORITY,
                title="High-Value Prospect",
                message="This lead scores in the top 10% - immediate action recommended",
            ))

        for dimension, value in dimension_scores.items():
            if value > STRENGTH_THRESHOLD:
                insights.append(Insight(
                    type=InsightType.STRENGTH,
                    dimension=dimension,
                    message=f"Strong {dimension} indicator ({value:g}/100)",
                ))
            elif value < CONCERN_THRESHOLD:
                insights.append(Insight(
                    type=InsightType.CONCERN,
                    dimension=dimension,
                    message=f"Low {dimension} score may impact conversion",
                ))

        if summary.engagement_score > BEHAVIORAL_ENGAGEMENT_THRESHOLD:
            insights.append(Insight(
                type=InsightType.BEHAVIORAL,
                title="High Engagement",
                message="Prospect showed strong interest through interaction patterns",
            ))
        return insights


def score(
    responses: ResponseSet,
    summary: Optional[SessionSummary] = None,
    config: Optional[ScoringConfig] = None,
) -> ScoreResult:
    """Module-level entry point: score one submission."""
    return MultiDimensionalScorer(config).score(responses, summary)
