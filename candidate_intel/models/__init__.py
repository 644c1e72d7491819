"""
Models Package - Candidate Intelligence Scoring
candidate_intel/models/__init__.py

Pydantic records exchanged with the surrounding service.
"""

from candidate_intel.models.enumerations import (
    CognitiveLoad,
    DecisionStyle,
    EnergyPattern,
    EngagementLevel,
    EventType,
    InsightType,
    IntegrityLevel,
    Severity,
    StressLevel,
)
from candidate_intel.models.responses import (
    CohortRecord,
    Response,
    ResponseSet,
    response_values,
)
from candidate_intel.models.results import (
    AssessmentRecord,
    BehavioralAnalysis,
    BenchmarkResult,
    ConsistencyReport,
    Contradiction,
    DistributionBucket,
    Insight,
    ScoreResult,
    SimilarityMatch,
    TierDefinition,
    TopPerformerSimilarity,
)
from candidate_intel.models.scoring import ScoringConfig
from candidate_intel.models.telemetry import (
    AnomalyCounts,
    DeviceProfile,
    SessionSummary,
    TelemetryEvent,
)

__all__ = [
    # Enumerations
    "CognitiveLoad",
    "DecisionStyle",
    "EnergyPattern",
    "EngagementLevel",
    "EventType",
    "InsightType",
    "IntegrityLevel",
    "Severity",
    "StressLevel",
    # Responses
    "CohortRecord",
    "Response",
    "ResponseSet",
    "response_values",
    # Scoring
    "ScoringConfig",
    # Telemetry
    "AnomalyCounts",
    "DeviceProfile",
    "SessionSummary",
    "TelemetryEvent",
    # Results
    "AssessmentRecord",
    "BehavioralAnalysis",
    "BenchmarkResult",
    "ConsistencyReport",
    "Contradiction",
    "DistributionBucket",
    "Insight",
    "ScoreResult",
    "SimilarityMatch",
    "TierDefinition",
    "TopPerformerSimilarity",
]
