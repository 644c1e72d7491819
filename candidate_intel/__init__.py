"""
Candidate Intelligence Scoring Pipeline

Entry points:
    summarize_session(session)             -> SessionSummary
    check_consistency(responses)           -> ConsistencyReport
    score(responses, summary, config)      -> ScoreResult
    benchmark(total_score, cohort)         -> BenchmarkResult
    analyze_behavior(summary)              -> BehavioralAnalysis
    AssessmentPipeline(config).evaluate()  -> AssessmentRecord
"""

from candidate_intel.logging_config import configure_logging
from candidate_intel.models import ScoringConfig
from candidate_intel.scoring.behavioral_analysis import BehavioralAnalyzer, analyze_behavior
from candidate_intel.scoring.benchmark import BenchmarkEngine, benchmark
from candidate_intel.scoring.consistency import ConsistencyChecker, check_consistency
from candidate_intel.scoring.multi_dimensional_scorer import MultiDimensionalScorer, score
from candidate_intel.scoring.pipeline import AssessmentPipeline
from candidate_intel.telemetry import SessionSummarizer, TelemetrySession, summarize_session

__version__ = "3.0.0"

__all__ = [
    "AssessmentPipeline",
    "BehavioralAnalyzer",
    "BenchmarkEngine",
    "ConsistencyChecker",
    "MultiDimensionalScorer",
    "ScoringConfig",
    "SessionSummarizer",
    "TelemetrySession",
    "analyze_behavior",
    "benchmark",
    "check_consistency",
    "configure_logging",
    "score",
    "summarize_session",
]
