# candidate_intel/scoring/benchmark.py
"""
Benchmark Engine
----------------
Places a total score inside a cohort of prior scored records.

Formulas:
    percentile   = round_half_up(100 × |{c : c.score < score}| / |cohort|)     0 for an empty cohort
    bucket(s)    = min(⌊clamp(s) / (100 / B)⌋, B − 1) + 1                      1-based, B = 10
    top subset   = {c : c.score ≥ PERCENTILE_CONT(0.9) of cohort scores}
    similarity   = equal shared keys / candidate keys present in member × 100

An empty cohort is not an error: it yields percentile 0, no buckets and a
null closest match.
"""
import logging
import math
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple, Union

from pydantic import ValidationError

from candidate_intel.config import Settings, get_settings
from candidate_intel.models.responses import CohortRecord, ResponseSet, response_values
from candidate_intel.models.results import (
    BenchmarkResult,
    DistributionBucket,
    SimilarityMatch,
    TopPerformerSimilarity,
)
from candidate_intel.scoring.utils import clamp_score, mean, percentile_cont, round_half_up

logger = logging.getLogger(__name__)

CohortMember = Union[CohortRecord, Mapping[str, Any], float, int]

VERY_SIMILAR_THRESHOLD = 80
MODERATE_SIMILAR_THRESHOLD = 60


class BenchmarkEngine:
    """Percentile rank, score distribution and top-performer similarity."""

    def __init__(self, settings: Optional[Settings] = None):
        settings = settings or get_settings()
        self.buckets = settings.BENCHMARK_BUCKETS
        self.top_fraction = settings.TOP_PERFORMER_PERCENTILE
        self.trait_threshold = settings.COMMON_TRAIT_THRESHOLD

    def benchmark(
        self,
        total_score: float,
        cohort: Iterable[CohortMember],
        responses: Optional[ResponseSet] = None,
    ) -> BenchmarkResult:
        members = self._coerce_cohort(cohort)
        if not members:
            logger.info("benchmark_calculated", extra={"cohort_size": 0, "percentile": 0})
            return BenchmarkResult(percentile=0)

        percentile = self.percentile_rank(total_score, [m.score for m in members])
        distribution = self.distribution([m.score for m in members])
        similarity = self.compare_to_top_performers(response_values(responses), members)

        logger.info(
            "benchmark_calculated",
            extra={
                "cohort_size": len(members),
                "total_score": total_score,
                "percentile": percentile,
                "buckets": len(distribution),
                "average_similarity": similarity.average_similarity,
            },
        )

        return BenchmarkResult(
            percentile=percentile,
            distribution=distribution,
            top_performer_similarity=similarity,
        )

    # ------------------------------------------------------------------
    # Percentile & distribution
    # ------------------------------------------------------------------

    @staticmethod
    def percentile_rank(total_score: float, scores: List[float]) -> int:
        """
        Share of the cohort strictly below ``total_score``, as a whole percentage.

        Examples:
            >>> BenchmarkEngine.percentile_rank(65, [40, 50, 60, 70, 80, 90])
            50
        """
        if not scores:
            return 0
        below = sum(1 for s in scores if s < total_score)
        return int(round_half_up(100 * below / len(scores)))

    def distribution(self, scores: List[float]) -> List[DistributionBucket]:
        width = 100 / self.buckets
        grouped: Dict[int, List[float]] = {}
        for raw in scores:
            s = clamp_score(raw)
            bucket = min(int(s // width), self.buckets - 1) + 1
            grouped.setdefault(bucket, []).append(raw)

        return [
            DistributionBucket(
                bucket=bucket,
                lower=round((bucket - 1) * width, 4),
                upper=round(bucket * width, 4),
                count=len(grouped[bucket]),
                avg_score=round(mean(grouped[bucket]), 2),
            )
            for bucket in sorted(grouped)
        ]

    # ------------------------------------------------------------------
    # Top-performer similarity
    # ------------------------------------------------------------------

    def compare_to_top_performers(
        self,
        candidate: Dict[str, Any],
        members: List[CohortRecord],
    ) -> TopPerformerSimilarity:
        if not members:
            return TopPerformerSimilarity()

        threshold = percentile_cont([m.score for m in members], self.top_fraction)
        top = [m for m in members if m.score >= threshold]
        if not top:
            return TopPerformerSimilarity()

        profiles = [response_values(m.responses) for m in top]
        ranked: List[Tuple[float, CohortRecord]] = sorted(
            ((self.similarity(candidate, profile), member) for profile, member in zip(profiles, top)),
            key=lambda pair: pair[0],
            reverse=True,
        )

        best_similarity, best = ranked[0]
        average = mean([s for s, _ in ranked])

        return TopPerformerSimilarity(
            closest_match=SimilarityMatch(
                similarity=round(best_similarity, 2),
                score=best.score,
                tier=best.tier,
                record_id=best.record_id,
            ),
            average_similarity=round(average, 2),
            insights=self._insights(best_similarity, profiles),
        )

    @staticmethod
    def similarity(candidate: Mapping[str, Any], profile: Mapping[str, Any]) -> float:
        """
        Percentage of the candidate's keys, present in ``profile``, whose values are equal.

        Examples:
            >>> BenchmarkEngine.similarity({"a": 1, "b": 2, "c": 3}, {"a": 1, "b": 5})
            50.0
        """
        shared = [key for key in candidate if key in profile]
        if not shared:
            return 0.0
        equal = sum(1 for key in shared if candidate[key] == profile[key])
        return equal / len(shared) * 100

    def _insights(self, best_similarity: float, profiles: List[Dict[str, Any]]) -> List[str]:
        insights = []
        if best_similarity > VERY_SIMILAR_THRESHOLD:
            insights.append(
                f"Very similar to top performer ({int(round_half_up(best_similarity))}% match)"
            )
        elif best_similarity > MODERATE_SIMILAR_THRESHOLD:
            insights.append("Moderate similarity to top performers")
        else:
            insights.append("Unique profile - different from typical top performers")

        traits = self.common_traits(profiles)
        if traits:
            insights.append(f"Shares key traits with top performers: {', '.join(traits)}")
        return insights

    def common_traits(self, profiles: List[Dict[str, Any]]) -> List[str]:
        """Answer values held by more than the trait threshold of the top subset."""
        counts: Dict[Tuple[str, str], int] = {}
        for profile in profiles:
            for key, value in profile.items():
                trait = (key, str(value))
                counts[trait] = counts.get(trait, 0) + 1

        total = len(profiles) or 1
        traits: List[str] = []
        for (_, value), count in counts.items():
            if count / total > self.trait_threshold and value not in traits:
                traits.append(value)
        return traits

    # ------------------------------------------------------------------
    # Input coercion
    # ------------------------------------------------------------------

    @staticmethod
    def _coerce_cohort(cohort: Optional[Iterable[CohortMember]]) -> List[CohortRecord]:
        members: List[CohortRecord] = []
        for item in cohort or ():
            try:
                if isinstance(item, CohortRecord):
                    member = item
                elif isinstance(item, Mapping):
                    member = CohortRecord.model_validate(dict(item))
                elif isinstance(item, (int, float)) and not isinstance(item, bool):
                    member = CohortRecord(score=item)
                else:
                    raise TypeError(type(item).__name__)
            except (ValidationError, TypeError) as exc:
                logger.debug("cohort_member_dropped", extra={"reason": str(exc)})
                continue
            if math.isnan(member.score) or math.isinf(member.score):
                logger.debug("cohort_member_dropped", extra={"reason": "non-finite score"})
                continue
            members.append(member)
        return members


def benchmark(
    total_score: float,
    cohort: Iterable[CohortMember],
    responses: Optional[ResponseSet] = None,
) -> BenchmarkResult:
    """Module-level entry point: benchmark one score against a cohort."""
    return BenchmarkEngine().benchmark(total_score, cohort, responses)
