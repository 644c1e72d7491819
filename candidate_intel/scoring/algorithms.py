"""
Scoring Algorithms
candidate_intel/scoring/algorithms.py

Registry of named algorithms. Each fixes an ordered list of dimensions with
default weights and a recommendation template keyed by total score.

    12-dimensional        Lead qualification (financial, BANT, fit)
    candidate-assessment  Recruiting: 40% behavioral, 60% response quality
"""

from dataclasses import dataclass
from typing import Callable, Dict, List, Mapping, Tuple

from candidate_intel.core.exceptions import UnknownAlgorithmError
from candidate_intel.scoring.dimension_calculators import DIMENSION_CALCULATORS, DimensionCalculator

RecommendTemplate = Callable[[int, Mapping[str, float]], List[str]]


@dataclass(frozen=True)
class DimensionSpec:
    name: str
    calculator: DimensionCalculator
    default_weight: float


@dataclass(frozen=True)
class ScoringAlgorithm:
    """A named, ordered set of weighted dimensions."""
    name: str
    label: str
    dimensions: Tuple[DimensionSpec, ...]
    recommend: RecommendTemplate

    @property
    def dimension_names(self) -> List[str]:
        return [d.name for d in self.dimensions]

    @property
    def default_weights(self) -> Dict[str, float]:
        return {d.name: d.default_weight for d in self.dimensions}


def _dimensions(weights: List[Tuple[str, float]]) -> Tuple[DimensionSpec, ...]:
    return tuple(
        DimensionSpec(name=name, calculator=DIMENSION_CALCULATORS[name], default_weight=weight)
        for name, weight in weights
    )


# ---------------------------------------------------------------------------
# Recommendation templates
# ---------------------------------------------------------------------------

def recommend_lead_actions(total_score: int, dimension_scores: Mapping[str, float]) -> List[str]:
    if total_score > 80:
        return [
            "Assign to senior sales representative",
            "Schedule follow-up within 2 hours",
            "Prepare custom demo focused on identified needs",
        ]
    if total_score > 60:
        return [
            "Add to nurture campaign",
            "Send relevant case studies",
            "Schedule follow-up within 24 hours",
        ]
    return [
        "Add to long-term nurture sequence",
        "Monitor for engagement signals",
    ]


def recommend_candidate_actions(total_score: int, dimension_scores: Mapping[str, float]) -> List[str]:
    if total_score >= 90:
        recommendations = ["Excellent candidate with outstanding performance across all dimensions"]
    elif total_score >= 80:
        recommendations = ["Strong candidate with solid performance and minor areas for development"]
    elif total_score >= 70:
        recommendations = ["Good candidate with potential, requires focused development in key areas"]
    else:
        recommendations = ["Candidate requires significant development before consideration"]

    if dimension_scores.get("stress_management", 100) < 70:
        recommendations.append("Consider stress management training and support systems")
    if dimension_scores.get("honesty", 100) < 80:
        recommendations.append("Integrity concerns require immediate attention and investigation")
    return recommendations


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------

ALGORITHMS: Dict[str, ScoringAlgorithm] = {
    "12-dimensional": ScoringAlgorithm(
        name="12-dimensional",
        label="12-Dimensional Intelligence Algorithm",
        dimensions=_dimensions([
            ("financial_capacity", 0.10),
            ("urgency", 0.10),
            ("sophistication", 0.08),
            ("engagement", 0.08),
            ("authority", 0.09),
            ("budget", 0.09),
            ("need", 0.09),
            ("timeline", 0.08),
            ("decision_process", 0.08),
            ("champion_strength", 0.07),
            ("technical_fit", 0.07),
            ("cultural_fit", 0.07),
        ]),
        recommend=recommend_lead_actions,
    ),
    # behavioral group × 0.4, response group × 0.6
    "candidate-assessment": ScoringAlgorithm(
        name="candidate-assessment",
        label="Candidate Behavioral Assessment",
        dimensions=_dimensions([
            ("confidence", 0.10),
            ("stress_management", 0.10),
            ("attention", 0.08),
            ("honesty", 0.08),
            ("engagement_quality", 0.04),
            ("ethical_judgment", 0.18),
            ("decision_making", 0.15),
            ("communication", 0.12),
            ("problem_solving", 0.09),
            ("teamwork", 0.06),
        ]),
        recommend=recommend_candidate_actions,
    ),
}


def get_algorithm(name: str) -> ScoringAlgorithm:
    """
    Look up a registered algorithm.

    Raises:
        UnknownAlgorithmError: if ``name`` is not registered.
    """
    try:
        return ALGORITHMS[name]
    except KeyError:
        raise UnknownAlgorithmError(name, ALGORITHMS.keys()) from None
