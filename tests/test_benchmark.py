# tests/test_benchmark.py
"""
Benchmark Engine Tests
"""

import pytest

from candidate_intel.models.responses import CohortRecord, Response
from candidate_intel.models.results import BenchmarkResult, TopPerformerSimilarity
from candidate_intel.scoring.benchmark import BenchmarkEngine, benchmark


class TestPercentile:

    def test_strictly_below(self, score_cohort):
        assert benchmark(65, score_cohort).percentile == 50

    def test_equal_scores_do_not_count(self, score_cohort):
        assert benchmark(40, score_cohort).percentile == 0
        assert benchmark(90, score_cohort).percentile == 83

    def test_rounds_half_up(self):
        cohort = [10, 20, 30, 40, 50, 60, 70, 80]
        # 1 of 8 below = 12.5%
        assert benchmark(15, cohort).percentile == 13

    def test_above_everyone(self, score_cohort):
        assert benchmark(100, score_cohort).percentile == 100


class TestDistribution:

    def test_one_bucket_per_decile(self, score_cohort):
        buckets = benchmark(65, score_cohort).distribution
        assert [b.bucket for b in buckets] == [5, 6, 7, 8, 9, 10]
        assert all(b.count == 1 for b in buckets)
        assert buckets[0].lower == 40
        assert buckets[0].upper == 50

    def test_perfect_score_lands_in_last_bucket(self):
        buckets = benchmark(50, [100, 99.5, 0]).distribution
        assert [(b.bucket, b.count) for b in buckets] == [(1, 1), (10, 2)]
        assert buckets[-1].avg_score == pytest.approx(99.75)

    def test_out_of_range_scores_clamped(self):
        buckets = benchmark(50, [-20, 130]).distribution
        assert [b.bucket for b in buckets] == [1, 10]

    def test_bucket_average_uses_raw_scores(self):
        buckets = benchmark(50, [-20, 4, 130, 96]).distribution
        assert [(b.bucket, b.count) for b in buckets] == [(1, 2), (10, 2)]
        assert buckets[0].avg_score == pytest.approx(-8)
        assert buckets[-1].avg_score == pytest.approx(113)


class TestTopPerformerSimilarity:

    def test_empty_cohort(self):
        result = benchmark(75, [])
        assert result == BenchmarkResult(percentile=0)
        assert result.distribution == []
        assert result.top_performer_similarity == TopPerformerSimilarity(
            closest_match=None, average_similarity=0, insights=[]
        )

    def test_top_decile_only(self, score_cohort):
        similarity = benchmark(65, score_cohort).top_performer_similarity
        assert similarity.closest_match.score == 90
        assert similarity.closest_match.record_id == "r90"
        assert similarity.closest_match.similarity == 0
        assert similarity.insights == ["Unique profile - different from typical top performers"]

    def test_close_match(self, profiled_cohort):
        responses = {
            "motivation": Response(value="impact"),
            "experience": "5-10",
            "work_style": "coach",
            "unasked": "x",
        }
        similarity = benchmark(80, profiled_cohort, responses).top_performer_similarity
        assert similarity.closest_match.similarity == 100
        assert similarity.closest_match.tier == "ELITE"
        assert similarity.average_similarity == 100
        assert similarity.insights == [
            "Very similar to top performer (100% match)",
            "Shares key traits with top performers: impact, 5-10, coach",
        ]

    def test_partial_match(self, profiled_cohort):
        responses = {"motivation": "impact", "experience": "0-2"}
        similarity = benchmark(80, profiled_cohort, responses).top_performer_similarity
        assert similarity.closest_match.similarity == 50
        assert similarity.insights[0] == "Unique profile - different from typical top performers"

    def test_ties_keep_cohort_order(self):
        cohort = [
            CohortRecord(score=90, record_id="first", responses={"a": 1}),
            CohortRecord(score=90, record_id="second", responses={"a": 1}),
        ]
        similarity = benchmark(50, cohort, {"a": 1}).top_performer_similarity
        assert similarity.closest_match.record_id == "first"

    def test_common_traits_need_majority(self):
        engine = BenchmarkEngine()
        profiles = [{"m": "impact"}, {"m": "impact"}, {"m": "growth"}]
        assert engine.common_traits(profiles) == ["impact"]

    def test_similarity_without_shared_keys(self):
        assert BenchmarkEngine.similarity({"a": 1}, {"b": 1}) == 0
        assert BenchmarkEngine.similarity({}, {"b": 1}) == 0


class TestCohortCoercion:

    def test_mixed_members(self):
        cohort = [40, {"score": 50}, CohortRecord(score=60), "bad", {"score": "x"}, float("nan")]
        result = benchmark(55, cohort)
        assert result.percentile == 67
        assert sum(b.count for b in result.distribution) == 3
