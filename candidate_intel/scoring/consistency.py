"""
scoring/consistency.py — Response Consistency Engine

Evaluates an ordered registry of rules against one ResponseSet and scores how
internally coherent the answers are.

Formula:
    Score = max(0, 100 − Σ penalty(finding.severity))

Where:
    - penalty: high 20, medium 10, low 5
    - Integrity: ≥90 high, ≥70 moderate, ≥50 questionable, else low

Every rule is a pure function of the normalized answers, so each can be
tested in isolation. Findings keep registry order; the pattern-detection
pass always runs last.
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Mapping, Optional

from candidate_intel.config import get_settings
from candidate_intel.models.enumerations import IntegrityLevel, Severity
from candidate_intel.models.responses import ResponseSet, response_values
from candidate_intel.models.results import ConsistencyReport, Contradiction
from candidate_intel.scoring.utils import as_list

logger = logging.getLogger(__name__)

Values = Mapping[str, Any]

SEVERITY_PENALTIES: Dict[Severity, int] = {
    Severity.HIGH: 20,
    Severity.MEDIUM: 10,
    Severity.LOW: 5,
}

# Answers a candidate picks when optimizing for how they look
IDEALIZED_ANSWERS = frozenset(["achievement", "leadership", "strategic", "aggressive"])

PATTERN_FIELDS = ("strengths", "goals", "skills")
PATTERN_TAG = "Leadership"

# (min_score, level), highest first
INTEGRITY_BANDS = [
    (90, IntegrityLevel.HIGH),
    (70, IntegrityLevel.MODERATE),
    (50, IntegrityLevel.QUESTIONABLE),
]

FOLLOW_UP_THRESHOLD = 70


@dataclass(frozen=True)
class Finding:
    """What a rule reports; the engine attaches the rule id."""
    type: str
    severity: Severity
    message: str


@dataclass(frozen=True)
class ConsistencyRule:
    rule_id: str
    check: Callable[[Values], Optional[Finding]]


# ---------------------------------------------------------------------------
# Rules
# ---------------------------------------------------------------------------

def _selected(values: Values, field: str) -> List[Any]:
    return as_list(values.get(field))


def check_leadership_consistency(values: Values) -> Optional[Finding]:
    if values.get("work_style") == "coach" and "Leadership" not in _selected(values, "strengths"):
        return Finding(
            "contradiction", Severity.MEDIUM,
            "Selected coach work style but not leadership as strength",
        )
    return None


def check_experience_skills_match(values: Values) -> Optional[Finding]:
    if values.get("experience") == "0-2" and "Strategic Thinking" in _selected(values, "strengths"):
        return Finding(
            "unlikely", Severity.LOW,
            "Entry level with strategic thinking is uncommon",
        )
    return None


def check_motivation_values_alignment(values: Values) -> Optional[Finding]:
    if values.get("motivation") == "stability" and values.get("risk_tolerance") == "aggressive":
        return Finding(
            "contradiction", Severity.HIGH,
            "Seeks stability but has aggressive risk tolerance",
        )
    return None


def check_decision_style_consistency(values: Values) -> Optional[Finding]:
    if values.get("decision_style") == "analytical" and values.get("challenge_response") == "act":
        return Finding(
            "contradiction", Severity.MEDIUM,
            "Analytical style but acts immediately on challenges",
        )
    return None


def check_client_approach_personality(values: Values) -> Optional[Finding]:
    if values.get("client_approach") == "educator" and "Communication" not in _selected(values, "strengths"):
        return Finding(
            "concern", Severity.LOW,
            "Educator approach without communication strength",
        )
    return None


def check_values_ranking_consistency(values: Values) -> Optional[Finding]:
    ranking = _selected(values, "values_rank")
    if ranking and ranking[0] == "Work-Life Balance" and values.get("motivation") == "achievement":
        return Finding(
            "potential_conflict", Severity.MEDIUM,
            "Top value is work-life balance but driven by achievement",
        )
    return None


def check_gaming(values: Values) -> Optional[Finding]:
    """Flag when the share of idealized answers exceeds the gaming threshold."""
    if not values:
        return None
    idealized = sum(
        1 for v in values.values()
        if isinstance(v, str) and v in IDEALIZED_ANSWERS
    )
    if idealized > len(values) * get_settings().GAMING_THRESHOLD:
        return Finding(
            "gaming_suspected", Severity.HIGH,
            'Possible gaming - too many "perfect" answers',
        )
    return None


def check_selection_pattern(values: Values) -> Optional[Finding]:
    """Flag multi-select answers where every selection carries the same tag."""
    for field in PATTERN_FIELDS:
        selections = values.get(field)
        if not isinstance(selections, (list, tuple)) or not selections:
            continue
        if all(PATTERN_TAG in str(s) for s in selections):
            return Finding(
                "pattern_detected", Severity.MEDIUM,
                "Suspicious selection pattern detected",
            )
    return None


CONSISTENCY_RULES: List[ConsistencyRule] = [
    ConsistencyRule("leadership_consistency", check_leadership_consistency),
    ConsistencyRule("experience_skills_match", check_experience_skills_match),
    ConsistencyRule("motivation_values_alignment", check_motivation_values_alignment),
    ConsistencyRule("decision_style_consistency", check_decision_style_consistency),
    ConsistencyRule("client_approach_personality", check_client_approach_personality),
    ConsistencyRule("values_ranking_consistency", check_values_ranking_consistency),
    ConsistencyRule("gaming_detection", check_gaming),
]

PATTERN_RULE = ConsistencyRule("pattern_detection", check_selection_pattern)


# ---------------------------------------------------------------------------
# Engine
# ---------------------------------------------------------------------------

class ConsistencyChecker:
    """Run the rule registry and build a ConsistencyReport."""

    def __init__(self, rules: Optional[List[ConsistencyRule]] = None):
        self.rules = list(CONSISTENCY_RULES if rules is None else rules)

    def check(self, responses: ResponseSet) -> ConsistencyReport:
        values = response_values(responses)

        contradictions: List[Contradiction] = []
        for rule in [*self.rules, PATTERN_RULE]:
            finding = rule.check(values)
            if finding is not None:
                contradictions.append(Contradiction(
                    rule_id=rule.rule_id,
                    type=finding.type,
                    severity=finding.severity,
                    message=finding.message,
                ))

        penalty = sum(SEVERITY_PENALTIES[c.severity] for c in contradictions)
        score = max(0, 100 - penalty)
        integrity = self.integrity_level(score)
        recommendations = self._recommendations(score, contradictions)

        logger.info(
            "consistency_checked",
            extra={
                "fields": len(values),
                "findings": [c.rule_id for c in contradictions],
                "score": score,
                "integrity": integrity.value,
            },
        )

        return ConsistencyReport(
            score=score,
            contradictions=contradictions,
            integrity=integrity,
            recommendations=recommendations,
        )

    @staticmethod
    def integrity_level(score: float) -> IntegrityLevel:
        for min_score, level in INTEGRITY_BANDS:
            if score >= min_score:
                return level
        return IntegrityLevel.LOW

    @staticmethod
    def _recommendations(score: int, contradictions: List[Contradiction]) -> List[str]:
        recommendations = []
        if score < FOLLOW_UP_THRESHOLD:
            recommendations.append("Schedule follow-up interview to clarify contradictions")
        if any(c.severity == Severity.HIGH for c in contradictions):
            recommendations.append("Red flags detected - flag for manual review")
        if any(c.type == "gaming_suspected" for c in contradictions):
            recommendations.append("Possible gaming detected - verify responses in interview")
        return recommendations


def check_consistency(responses: ResponseSet) -> ConsistencyReport:
    """Module-level entry point: score the internal consistency of one ResponseSet."""
    return ConsistencyChecker().check(responses)
