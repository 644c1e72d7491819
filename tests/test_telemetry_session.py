# tests/test_telemetry_session.py
"""
Telemetry Session & Summarizer Tests

Covers event ingestion, question timing rules and every summary metric.
"""

import pytest

from candidate_intel.models.enumerations import (
    DecisionStyle,
    EnergyPattern,
    EventType,
    StressLevel,
)
from candidate_intel.models.telemetry import SessionSummary, TelemetryEvent
from candidate_intel.telemetry import SessionSummarizer, TelemetrySession, summarize_session


# =============================================================================
# INGESTION
# =============================================================================

class TestRecord:

    def test_accepts_model_and_mapping(self):
        session = TelemetrySession()
        assert session.record(TelemetryEvent(type=EventType.PASTE, offset_ms=10))
        assert session.record({"type": "paste", "offset_ms": 20})
        assert len(session) == 2

    @pytest.mark.parametrize("payload", [
        {"type": "telepathy", "offset_ms": 5},
        {"offset_ms": 5},
        {"type": None, "offset_ms": 5},
        "paste",
        None,
    ])
    def test_malformed_events_are_dropped(self, payload):
        session = TelemetrySession()
        assert session.record(payload) is False
        assert len(session) == 0

    @pytest.mark.parametrize("payload, discarded", [
        ({"type": "paste", "viewport_height": 0}, "viewport_height"),
        ({"type": "paste", "offset_ms": "soon"}, "offset_ms"),
        ({"type": "hover", "duration_ms": -40, "offset_ms": 30}, "duration_ms"),
        ({"type": "visibility_change", "hidden": True, "x": "abc"}, "x"),
    ])
    def test_bad_optional_field_keeps_event(self, payload, discarded):
        session = TelemetrySession()
        assert session.record(payload) is True
        event = session.raw_events[0]
        assert event.type == EventType(payload["type"])
        assert getattr(event, discarded) == TelemetryEvent.model_fields[discarded].default

    def test_salvaged_events_reach_the_summary(self):
        session = TelemetrySession()
        session.record({"type": "paste", "viewport_height": 0, "offset_ms": 100})
        session.record({"type": "visibility_change", "hidden": True, "x": "abc", "offset_ms": 200})
        summary = session.summarize()
        assert summary.copy_paste_count == 1
        assert summary.tab_switch_count == 1

    def test_negative_offset_clamped(self):
        session = TelemetrySession()
        session.record({"type": "paste", "offset_ms": -250})
        assert session.raw_events[0].offset_ms == 0.0

    def test_extra_fields_ignored(self):
        session = TelemetrySession()
        assert session.record({"type": "key_down", "key": "a", "shiftKey": True})

    def test_raw_events_is_a_copy(self):
        session = TelemetrySession()
        session.record({"type": "paste"})
        session.raw_events.clear()
        assert len(session.raw_events) == 1

    def test_session_id_generated(self):
        assert TelemetrySession().session_id.startswith("sess_")
        assert TelemetrySession(session_id="abc").session_id == "abc"

    def test_offset_defaults_to_elapsed_time(self):
        session = TelemetrySession()
        session.start_question("q1")
        assert session.question_timings["q1"].start_offset >= 0


# =============================================================================
# QUESTION TIMING
# =============================================================================

class TestQuestionTiming:

    def test_duration_is_end_minus_start(self):
        session = TelemetrySession()
        session.start_question("q1", offset_ms=1000)
        assert session.end_question("q1", answer="yes", offset_ms=4500) == 3500
        timing = session.question_timings["q1"]
        assert timing.end_offset == 4500
        assert timing.duration_ms == 3500
        assert session.answers == {"q1": "yes"}

    def test_restart_of_open_question_overwrites_start(self):
        session = TelemetrySession()
        session.start_question("q1", offset_ms=1000)
        session.start_question("q1", offset_ms=2000)
        assert session.end_question("q1", offset_ms=5000) == 3000

    def test_reopen_keeps_original_start(self):
        session = TelemetrySession()
        session.start_question("q1", offset_ms=2000)
        session.end_question("q1", offset_ms=5000)
        session.start_question("q1", offset_ms=6000)

        reopened = session.question_timings["q1"]
        assert reopened.start_offset == 2000
        assert reopened.end_offset is None

        assert session.end_question("q1", offset_ms=9000) == 7000

    def test_end_without_start_records_answer_only(self):
        session = TelemetrySession()
        assert session.end_question("ghost", answer=42, offset_ms=100) is None
        assert "ghost" not in session.question_timings
        assert session.answers["ghost"] == 42

    def test_second_end_on_closed_question(self):
        session = TelemetrySession()
        session.start_question("q1", offset_ms=4000)
        assert session.end_question("q1", answer="a", offset_ms=5000) == 1000
        assert session.end_question("q1", answer="b", offset_ms=9000) is None
        assert session.question_timings["q1"].duration_ms == 1000
        assert session.answers["q1"] == "b"

    def test_end_before_start_gives_zero_duration(self):
        session = TelemetrySession()
        session.start_question("q1", offset_ms=5000)
        assert session.end_question("q1", offset_ms=3000) == 0

    def test_answer_change_updates_answer(self):
        session = TelemetrySession()
        session.record_answer_change("q1", "a", "b", offset_ms=10)
        assert session.answers == {"q1": "b"}


# =============================================================================
# SUMMARY
# =============================================================================

class TestEmptySummary:

    def test_neutral_defaults(self, empty_session):
        summary = empty_session.summarize()
        assert summary.session_id == "sess_empty"
        assert summary.confidence_score == 100
        assert summary.engagement_score == 70
        assert summary.stress_level == StressLevel.LOW
        assert summary.energy_pattern == EnergyPattern.INSUFFICIENT_DATA
        assert summary.tab_switch_count == 0
        assert summary.copy_paste_count == 0
        assert summary.hesitation_count == 0
        assert summary.anomaly_score == 0
        assert summary.completion_rate == 0

    def test_matches_model_defaults(self, empty_session):
        assert empty_session.summarize() == SessionSummary(session_id="sess_empty")


class TestAnsweredSummary:

    def test_timing_metrics(self, answered_session):
        summary = answered_session.summarize()
        assert summary.average_response_time_ms == 6000
        assert summary.total_time_ms == 20000
        assert summary.questions_started == 3
        assert summary.questions_completed == 3
        assert summary.completion_rate == 100

    def test_confidence_gets_below_median_bonus(self, answered_session):
        # one answer (4000) is faster than the median (6000)
        assert answered_session.summarize().confidence_score == 82

    def test_engagement_and_style(self, answered_session):
        summary = answered_session.summarize()
        assert summary.engagement_score == 100
        assert summary.decision_style == DecisionStyle.BALANCED
        assert summary.energy_pattern == EnergyPattern.MODERATE_FATIGUE

    def test_device_copied(self, answered_session):
        summary = answered_session.summarize()
        assert summary.device_type == "desktop"
        assert summary.screen_width == 2560

    def test_insights(self, answered_session):
        assert answered_session.summarize().insights == [
            "High confidence - decisive and sure of responses",
            "Highly engaged throughout assessment",
            "Decision style: balanced",
        ]

    def test_idempotent(self, answered_session):
        assert answered_session.summarize() == answered_session.summarize()

    def test_entry_point(self, answered_session):
        assert summarize_session(answered_session) == answered_session.summarize()


class TestEnergyPattern:

    @pytest.mark.parametrize("durations, expected", [
        ([3000, 9000, 27000], EnergyPattern.SIGNIFICANT_FATIGUE),
        ([8000, 9000, 10000], EnergyPattern.GRADUAL_DECLINE),
        ([10000, 10000, 10000], EnergyPattern.SUSTAINED_HIGH),
        ([9000, 6000, 3000], EnergyPattern.SUSTAINED_HIGH),
        ([5000, 5000], EnergyPattern.INSUFFICIENT_DATA),
    ])
    def test_bands(self, timed_session, durations, expected):
        assert timed_session(durations).summarize().energy_pattern == expected

    def test_static_helper(self):
        assert SessionSummarizer.energy_pattern([]) == EnergyPattern.INSUFFICIENT_DATA


class TestBehaviorSignals:

    def test_tab_switches_and_red_flag(self):
        session = TelemetrySession()
        for i in range(6):
            session.record({"type": "visibility_change", "hidden": True, "offset_ms": i * 100})
            session.record({"type": "visibility_change", "hidden": False, "offset_ms": i * 100 + 50})
        summary = session.summarize()
        assert summary.tab_switch_count == 6
        assert summary.confidence_score == 20
        assert summary.stress_points == 12
        assert summary.stress_level == StressLevel.MEDIUM
        assert "Excessive tab switching - possible external assistance" in summary.red_flags

    def test_pastes_lower_confidence(self):
        session = TelemetrySession()
        for i in range(3):
            session.record({"type": "paste", "offset_ms": i})
        summary = session.summarize()
        assert summary.copy_paste_count == 3
        assert summary.confidence_score == 35
        assert "Multiple paste events - possible prepared answers" in summary.red_flags

    def test_hover_hesitation_window(self):
        session = TelemetrySession()
        for duration in (1500, 3000, 9000, 12000):
            session.record({"type": "hover", "duration_ms": duration, "offset_ms": 10})
        session.record({"type": "hesitation", "offset_ms": 20})
        assert session.summarize().hesitation_count == 3

    def test_corrections(self):
        session = TelemetrySession()
        session.record({"type": "key_down", "key": "Backspace", "offset_ms": 1})
        session.record({"type": "key_down", "key": "a", "offset_ms": 2})
        session.record({"type": "key_down", "key": "Delete", "offset_ms": 3})
        session.record_answer_change("q1", "a", "b", offset_ms=4)
        summary = session.summarize()
        assert summary.correction_count == 3
        assert summary.answer_change_count == 1
        assert summary.confidence_score == 71

    def test_rapid_clicking_episodes(self):
        session = TelemetrySession()
        for i in range(4):
            session.record({"type": "pointer_click", "offset_ms": i * 100})
        summary = session.summarize()
        assert summary.anomalies.rapid_clicking == 1
        assert summary.stress_points == 3
        assert summary.anomaly_score == 3

    def test_sustained_rapid_clicking_is_high_stress(self):
        session = TelemetrySession()
        for i in range(10):
            session.record({"type": "pointer_click", "offset_ms": i * 100})
        summary = session.summarize()
        assert summary.anomalies.rapid_clicking == 7
        assert summary.stress_level == StressLevel.HIGH

    def test_slow_clicks_are_not_rapid(self):
        session = TelemetrySession()
        for i in range(6):
            session.record({"type": "pointer_click", "offset_ms": i * 800})
        assert session.summarize().anomalies.rapid_clicking == 0

    def test_rapid_pointer_velocity(self):
        session = TelemetrySession()
        session.record({"type": "pointer_move", "x": 0, "y": 0, "offset_ms": 0})
        session.record({"type": "pointer_move", "x": 1000, "y": 0, "offset_ms": 100})
        session.record({"type": "pointer_move", "x": 1010, "y": 0, "offset_ms": 120})
        summary = session.summarize()
        assert summary.rapid_pointer_count == 1
        assert summary.pointer_move_count == 3

    def test_erratic_mouse(self):
        session = TelemetrySession()
        x = 0
        for i in range(12):
            # alternate slow and very fast segments
            x += 10 if i % 2 else 800
            session.record({"type": "pointer_move", "x": x, "y": 0, "offset_ms": i * 100})
        assert session.summarize().anomalies.erratic_mouse > 0

    def test_anomaly_score_weights(self):
        session = TelemetrySession()
        session.record({"type": "dev_tools", "offset_ms": 1})
        session.record({"type": "context_menu", "offset_ms": 2})
        session.record({"type": "timeout", "offset_ms": 3})
        session.record({"type": "paste", "offset_ms": 40000})
        summary = session.summarize()
        assert summary.anomalies.dev_tools_opened == 1
        assert summary.anomalies.right_click_attempts == 1
        assert summary.anomalies.timeouts == 1
        assert summary.anomalies.unusual_pauses == 1
        assert summary.anomaly_score == 5 + 2 + 2 + 1

    def test_scroll_depth_clamped(self):
        session = TelemetrySession()
        session.record({"type": "scroll", "depth_percent": 45, "offset_ms": 1})
        session.record({"type": "scroll", "depth_percent": 140, "offset_ms": 2})
        assert session.summarize().max_scroll_depth == 100

    def test_skipped_questions(self):
        session = TelemetrySession()
        session.record({"type": "question_skip", "question_id": "q4", "offset_ms": 1})
        assert session.summarize().skipped_question_count == 1

    def test_scroll_hover_pause_and_focus_metrics(self):
        session = TelemetrySession()
        for event in [
            {"type": "scroll", "depth_percent": 40, "offset_ms": 1000},
            {"type": "scroll", "depth_percent": 80, "offset_ms": 2000},
            {"type": "scroll", "depth_percent": 30, "offset_ms": 3000},
            {"type": "hover", "duration_ms": 16000, "offset_ms": 4000},
            {"type": "visibility_change", "hidden": True, "offset_ms": 5000},
            {"type": "visibility_change", "hidden": False, "offset_ms": 9000},
            {"type": "hesitation", "duration_ms": 20000, "offset_ms": 45000},
            {"type": "visibility_change", "hidden": True, "offset_ms": 50000},
            {"type": "paste", "offset_ms": 52000},
        ]:
            session.record(event)
        summary = session.summarize()
        assert summary.scroll_event_count == 3
        assert summary.scroll_return_count == 1
        assert summary.max_scroll_depth == 80
        assert summary.hover_time_ms == 16000
        assert summary.long_hesitation_count == 2
        assert summary.hesitation_count == 1
        assert summary.max_pause_ms == 36000
        # hidden 5000-9000 and 50000 until the last event at 52000
        assert summary.total_time_ms == 52000
        assert summary.focus_time_ms == 46000


class TestEngagementAndCompletion:

    def test_middle_zone_bonus(self):
        session = TelemetrySession()
        for t in (0, 1000, 2000):
            session.record({"type": "pointer_move", "x": 10, "y": 450, "viewport_height": 900, "offset_ms": t})
        assert session.summarize().engagement_score == 80

    def test_slow_answers_reduce_engagement(self, timed_session):
        summary = timed_session([25000, 25000, 25000]).summarize()
        assert summary.engagement_score == 80
        assert summary.decision_style == DecisionStyle.CAUTIOUS

    def test_completion_against_expected_count(self):
        session = TelemetrySession(expected_question_count=4)
        for qid in ("q1", "q2"):
            session.start_question(qid, offset_ms=0)
            session.end_question(qid, offset_ms=1000)
        assert session.summarize().completion_rate == 50

    def test_completion_against_started(self):
        session = TelemetrySession()
        session.start_question("q1", offset_ms=0)
        session.end_question("q1", offset_ms=1000)
        session.start_question("q2", offset_ms=1000)
        assert session.summarize().completion_rate == 50

    def test_fast_answers_flagged(self, timed_session):
        summary = timed_session([500, 700, 900]).summarize()
        assert "Extremely fast responses - possible lack of consideration" in summary.red_flags
