"""
Dimension Calculators
candidate_intel/scoring/dimension_calculators.py

One pure function per scoring dimension:

    calculator(values, summary, config) -> float in [0, 100]

``values`` is the normalized ``{question_id: value}`` map, ``summary`` the
SessionSummary of the attempt and ``config`` the ScoringConfig. Calculators
never raise: a missing or unparsable answer falls back to that dimension's
neutral value, and every result is clamped.

Lead qualification (12-dimensional):
    financial_capacity, urgency, sophistication, engagement, authority,
    budget, need, timeline, decision_process, champion_strength,
    technical_fit, cultural_fit

Candidate assessment:
    behavioral  - confidence, stress_management, attention, honesty,
                  engagement_quality
    responses   - ethical_judgment, decision_making, communication,
                  problem_solving, teamwork
"""

import re
from typing import Any, Callable, Dict, Mapping

from candidate_intel.models.enumerations import StressLevel
from candidate_intel.models.scoring import ScoringConfig
from candidate_intel.models.telemetry import SessionSummary
from candidate_intel.scoring.utils import as_list, clamp_score, parse_number

Values = Mapping[str, Any]
DimensionCalculator = Callable[[Values, SessionSummary, ScoringConfig], float]


def _lookup(table: Dict[str, float], value: Any, default: float) -> float:
    if isinstance(value, str) and value in table:
        return table[value]
    return default


def _ratio(matched: int, total: int) -> float:
    return matched / max(total, 1)


# ---------------------------------------------------------------------------
# Lead qualification
# ---------------------------------------------------------------------------

URGENCY_TIMELINE = {
    "immediate": 100,
    "this_month": 90,
    "quarter": 75,
    "year": 50,
    "exploring": 25,
}

JOB_LEVEL_SCORES = {
    "c_level": 100,
    "vp": 85,
    "director": 70,
    "manager": 55,
    "team_lead": 45,
    "individual": 30,
}

BUDGET_STATUS_SCORES = {
    "allocated": 100,
    "approved": 85,
    "requested": 60,
    "planned": 40,
    "exploring": 25,
    "none": 10,
}

PROBLEM_SEVERITY_SCORES = {
    "critical": 30,
    "high": 20,
    "medium": 10,
    "low": 5,
}

PURCHASE_TIMELINE_SCORES = {
    "immediate": 100,
    "this_month": 85,
    "this_quarter": 70,
    "this_year": 50,
    "next_year": 30,
    "exploring": 15,
}

INFLUENCE_SCORES = {"high": 30, "medium": 15, "low": 5}

WORK_STYLE_SCORES = {"fast_paced": 20, "balanced": 15, "methodical": 10}

EXPERIENCE_BONUS = {"expert": 30, "advanced": 20, "intermediate": 10}


def financial_capacity(values: Values, summary: SessionSummary, config: ScoringConfig) -> float:
    """portfolio/100k (≤40) + income/10k (≤30) + assets/200k (≤30)."""
    portfolio = max(parse_number(values.get("portfolio")), 0.0)
    income = max(parse_number(values.get("income")), 0.0)
    assets = max(parse_number(values.get("assets")), 0.0)
    score = min(portfolio / 100000, 40) + min(income / 10000, 30) + min(assets / 200000, 30)
    return clamp_score(score)


def urgency(values: Values, summary: SessionSummary, config: ScoringConfig) -> float:
    score = _lookup(URGENCY_TIMELINE, values.get("timeline", "exploring"), 50)
    if summary.questions_completed and summary.average_response_time_ms < 5000:
        score += 10
    if summary.max_scroll_depth > 90:
        score += 10
    return clamp_score(score)


def sophistication(values: Values, summary: SessionSummary, config: ScoringConfig) -> float:
    score = 40 + _lookup(EXPERIENCE_BONUS, values.get("experience"), 0)
    if summary.device_type == "desktop":
        score += 10
    if summary.screen_width and summary.screen_width > 1920:
        score += 10
    if summary.pointer_move_count > 100:
        score += 10
    return clamp_score(score)


def engagement(values: Values, summary: SessionSummary, config: ScoringConfig) -> float:
    score = 0.0
    if summary.total_time_ms > 60000:
        score += 30
    elif summary.total_time_ms > 30000:
        score += 20
    elif summary.total_time_ms > 15000:
        score += 10
    score += min(summary.interaction_count * 2, 30)
    score += summary.max_scroll_depth / 100 * 20
    if summary.tab_switch_count < 2:
        score += 20
    return clamp_score(score)


def authority(values: Values, summary: SessionSummary, config: ScoringConfig) -> float:
    score = _lookup(JOB_LEVEL_SCORES, values.get("job_level", "individual"), 30)
    if values.get("decision_maker") == "yes":
        score = min(score * 1.2, 100)
    return clamp_score(score)


def budget(values: Values, summary: SessionSummary, config: ScoringConfig) -> float:
    score = _lookup(BUDGET_STATUS_SCORES, values.get("budget_status", "none"), 25)
    size = parse_number(values.get("budget_size"))
    if size > 1000000:
        score = min(score * 1.3, 100)
    elif size > 100000:
        score = min(score * 1.1, 100)
    return clamp_score(score)


def need(values: Values, summary: SessionSummary, config: ScoringConfig) -> float:
    score = 50 + len(as_list(values.get("pain_points"))) * 10

    satisfaction = parse_number(values.get("satisfaction"))
    if values.get("current_solution") == "none":
        score += 20
    elif satisfaction and satisfaction < 5:
        score += 15

    score += _lookup(PROBLEM_SEVERITY_SCORES, values.get("problem_severity", "medium"), 10)
    return clamp_score(score)


def timeline(values: Values, summary: SessionSummary, config: ScoringConfig) -> float:
    """Purchase timeline, falling back to project start, then 25."""
    purchase = values.get("purchase_timeline", "exploring")
    if isinstance(purchase, str) and purchase in PURCHASE_TIMELINE_SCORES:
        return float(PURCHASE_TIMELINE_SCORES[purchase])
    return clamp_score(_lookup(PURCHASE_TIMELINE_SCORES, values.get("project_start"), 25))


def decision_process(values: Values, summary: SessionSummary, config: ScoringConfig) -> float:
    score = 50
    decision_maker = values.get("decision_maker")
    if decision_maker == "yes":
        score += 30
    elif decision_maker == "influence":
        score += 15

    stakeholders = int(parse_number(values.get("stakeholders"))) or 5
    if stakeholders <= 2:
        score += 20
    elif stakeholders <= 4:
        score += 10

    if values.get("approval_process") == "simple":
        score += 10
    return clamp_score(score)


def champion_strength(values: Values, summary: SessionSummary, config: ScoringConfig) -> float:
    score = 40
    if values.get("will_recommend") == "yes":
        score += 30
    if parse_number(values.get("nps")) >= 9:
        score += 20
    score += _lookup(INFLUENCE_SCORES, values.get("influence", "medium"), 15)
    return clamp_score(score)


def technical_fit(values: Values, summary: SessionSummary, config: ScoringConfig) -> float:
    requirements = as_list(values.get("requirements"))
    tech_stack = as_list(values.get("tech_stack"))
    matched_reqs = [r for r in requirements if r in config.capabilities]
    matched_tech = [t for t in tech_stack if t in config.compatible_tech]

    score = 50.0
    score += _ratio(len(matched_reqs), len(requirements)) * 30
    score += _ratio(len(matched_tech), len(tech_stack)) * 20
    return clamp_score(score)


def cultural_fit(values: Values, summary: SessionSummary, config: ScoringConfig) -> float:
    company_values = as_list(values.get("company_values"))
    aligned = [v for v in company_values if v in config.company_values]

    score = 50.0
    score += _ratio(len(aligned), len(company_values)) * 30
    score += _lookup(WORK_STYLE_SCORES, values.get("work_style", "balanced"), 15)
    return clamp_score(score)


# ---------------------------------------------------------------------------
# Candidate assessment: behavioral
# ---------------------------------------------------------------------------

def confidence(values: Values, summary: SessionSummary, config: ScoringConfig) -> float:
    return clamp_score(summary.confidence_score)


def stress_management(values: Values, summary: SessionSummary, config: ScoringConfig) -> float:
    score = 100
    if summary.stress_level == StressLevel.HIGH:
        score -= 40
        # held confidence despite stress
        if summary.confidence_score > 70:
            score += 25
    elif summary.stress_level == StressLevel.MEDIUM:
        score -= 20
    return clamp_score(score)


def attention(values: Values, summary: SessionSummary, config: ScoringConfig) -> float:
    tab_switches = summary.tab_switch_count
    anomaly_score = summary.anomaly_score

    score = 100.0
    score -= min(tab_switches * 5, 30)
    score -= min(anomaly_score * 2, 25)
    if tab_switches == 0 and anomaly_score < 5:
        score += 15
    return clamp_score(score)


def honesty(values: Values, summary: SessionSummary, config: ScoringConfig) -> float:
    anomalies = summary.anomalies
    score = 100
    if anomalies.dev_tools_opened > 0:
        score -= 50
    if anomalies.right_click_attempts > 0:
        score -= 20
    if anomalies.rapid_clicking > 5:
        score -= 15
    return clamp_score(score)


def engagement_quality(values: Values, summary: SessionSummary, config: ScoringConfig) -> float:
    skipped = summary.skipped_question_count
    timeouts = summary.anomalies.timeouts

    score = 100
    score -= min(skipped * 10, 30)
    score -= min(timeouts * 15, 25)
    if skipped == 0 and timeouts == 0:
        score += 20
    return clamp_score(score)


# ---------------------------------------------------------------------------
# Candidate assessment: responses
# ---------------------------------------------------------------------------

ETHICAL_QUESTIONS = ("ethical_boundary", "confidence_under_ignorance")
ETHICAL_PENALTIES = {
    "consider_terms": 60,
    "explore_legal": 60,
    "fake_knowledge": 40,
    "general_response": 20,
}

DECISION_QUESTIONS = ("pressure_response", "risk_young_conservative", "risk_old_aggressive")
DECISION_BONUSES = {
    "prepare_first": 10,
    "educate": 10,
    "immediate_answer": 5,
    "support": 5,
}

PRIORITY_FIRST_ITEMS = frozenset(["nervous_client", "compliance"])
TEAM_KEYWORDS = ("team", "colleague")
PROFESSIONAL_GREETING = re.compile(r"^(dear|hello)", re.IGNORECASE)


def ethical_judgment(values: Values, summary: SessionSummary, config: ScoringConfig) -> float:
    score = 100
    for question_id in ETHICAL_QUESTIONS:
        score -= _lookup(ETHICAL_PENALTIES, values.get(question_id), 0)
    return clamp_score(score)


def decision_making(values: Values, summary: SessionSummary, config: ScoringConfig) -> float:
    score = 70
    for question_id in DECISION_QUESTIONS:
        score += _lookup(DECISION_BONUSES, values.get(question_id), 0)
    return clamp_score(score)


def communication(values: Values, summary: SessionSummary, config: ScoringConfig) -> float:
    score = 70
    email = values.get("email_response_panic")
    if isinstance(email, str):
        if len(email) > 50:
            score += 15
        if PROFESSIONAL_GREETING.match(email):
            score += 10
    return clamp_score(score)


def problem_solving(values: Values, summary: SessionSummary, config: ScoringConfig) -> float:
    score = 70
    order = as_list(values.get("priority_matrix"))
    if order:
        first = order[0]
        first_id = first.get("id") if isinstance(first, Mapping) else first
        if isinstance(first_id, str) and first_id in PRIORITY_FIRST_ITEMS:
            score += 15
    return clamp_score(score)


def teamwork(values: Values, summary: SessionSummary, config: ScoringConfig) -> float:
    score = 70
    for step in as_list(values.get("day_simulation")):
        decision = step.get("decision") if isinstance(step, Mapping) else step
        if isinstance(decision, str) and any(k in decision for k in TEAM_KEYWORDS):
            score += 15
            break
    return clamp_score(score)


DIMENSION_CALCULATORS: Dict[str, DimensionCalculator] = {
    "financial_capacity": financial_capacity,
    "urgency": urgency,
    "sophistication": sophistication,
    "engagement": engagement,
    "authority": authority,
    "budget": budget,
    "need": need,
    "timeline": timeline,
    "decision_process": decision_process,
    "champion_strength": champion_strength,
    "technical_fit": technical_fit,
    "cultural_fit": cultural_fit,
    "confidence": confidence,
    "stress_management": stress_management,
    "attention": attention,
    "honesty": honesty,
    "engagement_quality": engagement_quality,
    "ethical_judgment": ethical_judgment,
    "decision_making": decision_making,
    "communication": communication,
    "problem_solving": problem_solving,
    "teamwork": teamwork,
}
