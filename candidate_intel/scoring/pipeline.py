"""
Assessment Pipeline
candidate_intel/scoring/pipeline.py

Runs one submission through the full chain:

    TelemetrySession → SessionSummary → BehavioralAnalysis
                                      → ConsistencyReport
                                      → ScoreResult → BenchmarkResult

and returns the combined AssessmentRecord for the persistence and
notification collaborators. Configuration is resolved once, when the
pipeline is built.
"""

from typing import Iterable, Optional

import structlog

from candidate_intel.models.responses import ResponseSet, response_values
from candidate_intel.models.results import AssessmentRecord
from candidate_intel.models.scoring import ScoringConfig
from candidate_intel.scoring.behavioral_analysis import BehavioralAnalyzer
from candidate_intel.scoring.benchmark import BenchmarkEngine, CohortMember
from candidate_intel.scoring.consistency import ConsistencyChecker
from candidate_intel.scoring.multi_dimensional_scorer import MultiDimensionalScorer
from candidate_intel.telemetry.session import TelemetrySession
from candidate_intel.telemetry.summary import SessionSummarizer

logger = structlog.get_logger(__name__)


class AssessmentPipeline:
    """Evaluate submissions with one fixed scoring configuration."""

    def __init__(self, config: Optional[ScoringConfig] = None):
        self.config = config or ScoringConfig()
        self.summarizer = SessionSummarizer()
        self.behavioral_analyzer = BehavioralAnalyzer()
        self.consistency_checker = ConsistencyChecker()
        self.scorer = MultiDimensionalScorer(self.config)
        self.benchmark_engine = BenchmarkEngine()

    def evaluate(
        self,
        responses: ResponseSet,
        session: Optional[TelemetrySession] = None,
        cohort: Iterable[CohortMember] = (),
    ) -> AssessmentRecord:
        """
        Args:
            responses: Answers keyed by question id.
            session: Telemetry for the attempt; None is treated as an empty session.
            cohort: Prior scored records of the same population segment.
        """
        session = session if session is not None else TelemetrySession()

        summary = self.summarizer.summarize(session)
        behavioral_analysis = self.behavioral_analyzer.analyze(summary)
        consistency = self.consistency_checker.check(responses)
        score_result = self.scorer.score(responses, summary)
        benchmark_result = self.benchmark_engine.benchmark(
            score_result.total_score, cohort, responses
        )

        logger.info(
            "assessment_evaluated",
            session_id=session.session_id,
            algorithm=score_result.algorithm,
            total_score=score_result.total_score,
            tier=score_result.tier.name,
            consistency_score=consistency.score,
            percentile=benchmark_result.percentile,
            behavioral_score=behavioral_analysis.score,
        )

        return AssessmentRecord(
            session_id=session.session_id,
            responses=response_values(responses),
            summary=summary,
            consistency=consistency,
            score=score_result,
            benchmark=benchmark_result,
            behavioral_analysis=behavioral_analysis,
        )
