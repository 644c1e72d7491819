from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from candidate_intel.models.enumerations import (
    CognitiveLoad,
    EngagementLevel,
    InsightType,
    IntegrityLevel,
    Severity,
)
from candidate_intel.models.telemetry import SessionSummary


# CONSISTENCY


class Contradiction(BaseModel):
    """A finding produced by one consistency rule."""

    model_config = ConfigDict(frozen=True)

    rule_id: str = Field(..., description="Id of the rule that produced the finding")
    type: str = Field(..., description="Finding type, e.g. contradiction, gaming_suspected")
    severity: Severity
    message: str


class ConsistencyReport(BaseModel):
    """
    Output of the consistency engine.

    ``contradictions`` follow rule registration order.
    """

    model_config = ConfigDict(frozen=True)

    score: int = Field(..., ge=0, le=100)
    contradictions: List[Contradiction] = Field(default_factory=list)
    integrity: IntegrityLevel
    recommendations: List[str] = Field(default_factory=list)


# SCORING


class TierDefinition(BaseModel):
    """One row of a tier table: the floor score and the label it grants."""

    model_config = ConfigDict(frozen=True)

    min_score: float = Field(..., description="Lowest total score that earns this tier")
    name: str = Field(..., min_length=1, max_length=100)
    icon: Optional[str] = None


class Insight(BaseModel):
    """Human-readable finding attached to a score."""

    model_config = ConfigDict(frozen=True)

    type: InsightType
    message: str
    dimension: Optional[str] = None
    title: Optional[str] = None


class ScoreResult(BaseModel):
    """Output of the multi-dimensional scorer."""

    model_config = ConfigDict(frozen=True)

    algorithm: str
    total_score: int = Field(..., ge=0, le=100)
    dimension_scores: Dict[str, float] = Field(
        ...,
        description="Dimension name -> score in [0, 100], in algorithm order"
    )
    weights: Dict[str, float] = Field(
        ...,
        description="Effective weight per dimension (defaults merged with overrides)"
    )
    behavioral_multiplier: float = Field(..., ge=1.0, le=1.2)
    confidence: int = Field(..., ge=0, le=100)
    tier: TierDefinition
    tier_rank: int = Field(..., ge=0, description="0 is the highest tier of the table")
    insights: List[Insight] = Field(default_factory=list)
    recommendations: List[str] = Field(default_factory=list)


# BEHAVIORAL ANALYSIS


class BehavioralAnalysis(BaseModel):
    """
    Summary-level reading of how the session was taken.

    Signal lists keep a fixed check order, so equal summaries give equal analyses.
    """

    model_config = ConfigDict(frozen=True)

    engagement_score: int = Field(..., ge=0, le=100)
    engagement_level: EngagementLevel
    decision_patterns: List[str] = Field(default_factory=list)
    trust_signals: List[str] = Field(default_factory=list)
    risk_signals: List[str] = Field(default_factory=list)
    personality_markers: List[str] = Field(default_factory=list)
    cognitive_load: CognitiveLoad
    cognitive_indicators: Dict[str, bool] = Field(default_factory=dict)
    score: float = Field(..., ge=0, le=100)
    insights: List[Insight] = Field(default_factory=list)


# BENCHMARK


class DistributionBucket(BaseModel):
    """Cohort members whose score falls in [lower, upper)."""

    model_config = ConfigDict(frozen=True)

    bucket: int = Field(..., ge=1, description="1-based bucket number")
    lower: float
    upper: float
    count: int = Field(..., ge=1)
    avg_score: float


class SimilarityMatch(BaseModel):
    """A top performer compared against the candidate."""

    model_config = ConfigDict(frozen=True)

    similarity: float = Field(..., ge=0, le=100)
    score: float
    tier: Optional[str] = None
    record_id: Optional[str] = None


class TopPerformerSimilarity(BaseModel):
    model_config = ConfigDict(frozen=True)

    closest_match: Optional[SimilarityMatch] = None
    average_similarity: float = Field(default=0.0, ge=0, le=100)
    insights: List[str] = Field(default_factory=list)


class BenchmarkResult(BaseModel):
    """Output of the benchmark engine."""

    model_config = ConfigDict(frozen=True)

    percentile: int = Field(..., ge=0, le=100)
    distribution: List[DistributionBucket] = Field(default_factory=list)
    top_performer_similarity: TopPerformerSimilarity = Field(
        default_factory=TopPerformerSimilarity
    )


# COMBINED RECORD


class AssessmentRecord(BaseModel):
    """Everything the persistence collaborator stores for one submission."""

    model_config = ConfigDict(frozen=True)

    session_id: Optional[str] = None
    responses: Dict[str, Any] = Field(default_factory=dict)
    summary: SessionSummary
    consistency: ConsistencyReport
    score: ScoreResult
    benchmark: BenchmarkResult
    behavioral_analysis: BehavioralAnalysis
