# tests/conftest.py

"""
Pytest Fixtures - Shared sessions, response sets and cohorts

SESSION FIXTURE TIMELINE (offsets in ms):
- q1: 0 → 4000, q2: 5000 → 11000, q3: 12000 → 20000
"""

import pytest

from candidate_intel.config import get_settings
from candidate_intel.models.responses import CohortRecord, Response
from candidate_intel.models.telemetry import DeviceProfile
from candidate_intel.telemetry.session import TelemetrySession


@pytest.fixture(autouse=True)
def fresh_settings():
    """Drop cached settings so env overrides in one test never leak into another."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


# =============================================================================
# TELEMETRY FIXTURES
# =============================================================================

@pytest.fixture
def empty_session():
    return TelemetrySession(session_id="sess_empty")


@pytest.fixture
def answered_session():
    """Three questions answered at a steady pace on a desktop."""
    session = TelemetrySession(
        session_id="sess_answered",
        device=DeviceProfile(type="desktop", screen_width=2560, screen_height=1440),
        expected_question_count=3,
    )
    for qid, start, end, answer in [
        ("q1", 0, 4000, "coach"),
        ("q2", 5000, 11000, "stability"),
        ("q3", 12000, 20000, "analytical"),
    ]:
        session.start_question(qid, offset_ms=start)
        session.end_question(qid, answer=answer, offset_ms=end)
    return session


@pytest.fixture
def timed_session():
    """Factory: session whose questions run back to back with the given durations."""
    def build(durations, session_id="sess_timed"):
        session = TelemetrySession(session_id=session_id)
        offset = 0
        for i, duration in enumerate(durations, start=1):
            session.start_question(f"q{i}", offset_ms=offset)
            offset += duration
            session.end_question(f"q{i}", answer="a", offset_ms=offset)
        return session
    return build


# =============================================================================
# RESPONSE FIXTURES
# =============================================================================

@pytest.fixture
def consistent_responses():
    """Answers that trip no consistency rule."""
    return {
        "work_style": "coach",
        "strengths": ["Leadership", "Communication"],
        "experience": "5-10",
        "motivation": "impact",
        "risk_tolerance": "moderate",
        "decision_style": "analytical",
        "challenge_response": "analyze",
        "client_approach": "educator",
        "values_rank": ["Integrity", "Growth"],
    }


@pytest.fixture
def lead_responses():
    """A strong lead for the 12-dimensional algorithm."""
    return {
        "portfolio": "2,500,000",
        "income": 250000,
        "assets": 4000000,
        "timeline": "immediate",
        "experience": "expert",
        "job_level": "vp",
        "decision_maker": "yes",
        "budget_status": "allocated",
        "budget_size": 500000,
        "pain_points": ["reporting", "compliance", "speed"],
        "current_solution": "none",
        "problem_severity": "critical",
        "purchase_timeline": "this_month",
        "stakeholders": 2,
        "approval_process": "simple",
        "will_recommend": "yes",
        "nps": 10,
        "influence": "high",
        "requirements": ["sso", "api"],
        "tech_stack": ["python"],
        "company_values": ["innovation", "integrity"],
        "work_style": "fast_paced",
    }


@pytest.fixture
def candidate_responses():
    """Recruiting answers wrapped in Response objects, as the capture layer sends them."""
    return {
        "ethical_boundary": Response(value="decline_politely"),
        "confidence_under_ignorance": Response(value="admit_and_follow_up"),
        "pressure_response": Response(value="prepare_first"),
        "risk_young_conservative": Response(value="educate"),
        "risk_old_aggressive": Response(value="support"),
        "email_response_panic": Response(
            value="Dear Mr. Lee, I understand your concern about the market drop and would like to talk today."
        ),
        "priority_matrix": Response(value=[{"id": "nervous_client"}, {"id": "paperwork"}]),
        "day_simulation": Response(value=[{"decision": "ask a colleague to cover the call"}]),
    }


# =============================================================================
# COHORT FIXTURES
# =============================================================================

@pytest.fixture
def score_cohort():
    return [CohortRecord(score=s, record_id=f"r{s}") for s in [40, 50, 60, 70, 80, 90]]


@pytest.fixture
def profiled_cohort():
    """Cohort whose top decile shares answers with a typical strong candidate."""
    return [
        CohortRecord(score=35, responses={"motivation": "stability", "experience": "0-2"}),
        CohortRecord(score=55, responses={"motivation": "impact", "experience": "2-5"}),
        CohortRecord(score=62, responses={"motivation": "impact", "experience": "5-10"}),
        CohortRecord(score=71, responses={"motivation": "growth", "experience": "5-10"}),
        CohortRecord(
            score=95,
            tier="ELITE",
            record_id="top-1",
            responses={"motivation": "impact", "experience": "5-10", "work_style": "coach"},
        ),
    ]
