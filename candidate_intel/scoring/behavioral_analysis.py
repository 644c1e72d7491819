"""
scoring/behavioral_analysis.py — Deep Behavioral Analysis

Reads only the SessionSummary and describes how the assessment was taken,
independent of what was answered.

Engagement (0-100):
    25 (session > 30s) + 25 (scroll depth > 75%) + 20 (interactions > 10)
  + 20 (visible > 80% of the session) + 10 (pointer moves > 50)
    → high > 80, medium > 50, else low

Cognitive load: count of indicators (longest pause > 30s, corrections > 4,
any hesitation over 15s, scroll events > 20) → ≥3 high, ≥1 moderate, else low

Behavioral score:
    50 + 0.3 × engagement + 5 × trust_signals − 5 × risk_signals
       + 10 (load low) − 10 (load high)                     clamped to [0, 100]

Timing-based signals only fire when at least one question was timed.
"""

from typing import Dict, List

import structlog

from candidate_intel.models.enumerations import CognitiveLoad, EngagementLevel, InsightType
from candidate_intel.models.results import BehavioralAnalysis, Insight
from candidate_intel.models.telemetry import SessionSummary
from candidate_intel.scoring.utils import clamp_score

logger = structlog.get_logger(__name__)

# Points granted when the engagement factor passes
ENGAGEMENT_POINTS = {
    "time_on_page": 25,
    "scroll_depth": 25,
    "interactions": 20,
    "focus_time": 20,
    "pointer_activity": 10,
}

SCORE_BASE = 50.0
ENGAGEMENT_FACTOR = 0.3
SIGNAL_POINTS = 5
LOAD_ADJUSTMENT = {
    CognitiveLoad.LOW: 10,
    CognitiveLoad.MODERATE: 0,
    CognitiveLoad.HIGH: -10,
}

QUICK_RESPONSE_MS = 5000
RUSHED_RESPONSE_MS = 2000


class BehavioralAnalyzer:
    """Engagement, decision patterns, trust and risk signals, personality and load."""

    def analyze(self, summary: SessionSummary, return_visit: bool = False) -> BehavioralAnalysis:
        """
        Args:
            summary: SessionSummary of the attempt.
            return_visit: True when the respondent has taken an assessment before.

        Returns:
            BehavioralAnalysis with its score and insights.
        """
        engagement = self.engagement_score(summary)
        engagement_level = self._engagement_level(engagement)
        decision_patterns = self._decision_patterns(summary)
        trust_signals = self._trust_signals(summary, return_visit)
        risk_signals = self._risk_signals(summary)
        personality_markers = self._personality_markers(summary)
        indicators = self._load_indicators(summary)
        load = self._cognitive_load(indicators)

        score = clamp_score(
            SCORE_BASE
            + engagement * ENGAGEMENT_FACTOR
            + SIGNAL_POINTS * len(trust_signals)
            - SIGNAL_POINTS * len(risk_signals)
            + LOAD_ADJUSTMENT[load]
        )
        score = round(score, 2)

        insights = self._insights(engagement_level, decision_patterns, risk_signals, personality_markers)

        logger.info(
            "behavioral_analysis_completed",
            session_id=summary.session_id,
            engagement_score=engagement,
            trust_signals=len(trust_signals),
            risk_signals=len(risk_signals),
            cognitive_load=load.value,
            behavioral_score=score,
        )

        return BehavioralAnalysis(
            engagement_score=engagement,
            engagement_level=engagement_level,
            decision_patterns=decision_patterns,
            trust_signals=trust_signals,
            risk_signals=risk_signals,
            personality_markers=personality_markers,
            cognitive_load=load,
            cognitive_indicators=indicators,
            score=score,
            insights=insights,
        )

    @staticmethod
    def engagement_score(summary: SessionSummary) -> int:
        """
        Examples:
            >>> BehavioralAnalyzer.engagement_score(SessionSummary(total_time_ms=60000, focus_time_ms=60000))
            45
        """
        factors = {
            "time_on_page": summary.total_time_ms > 30000,
            "scroll_depth": summary.max_scroll_depth > 75,
            "interactions": summary.interaction_count > 10,
            "focus_time": summary.focus_time_ms > summary.total_time_ms * 0.8,
            "pointer_activity": summary.pointer_move_count > 50,
        }
        return sum(ENGAGEMENT_POINTS[name] for name, hit in factors.items() if hit)

    @staticmethod
    def _engagement_level(score: int) -> EngagementLevel:
        if score > 80:
            return EngagementLevel.HIGH
        if score > 50:
            return EngagementLevel.MEDIUM
        return EngagementLevel.LOW

    @staticmethod
    def _decision_patterns(summary: SessionSummary) -> List[str]:
        patterns = []
        if summary.questions_completed and summary.average_response_time_ms < QUICK_RESPONSE_MS:
            patterns.append("quick_decision_maker")
        if summary.correction_count > 3:
            patterns.append("deliberative")
        if summary.scroll_return_count > 2:
            patterns.append("thorough_reviewer")
        if summary.hesitation_count > 0:
            patterns.append("cautious")
        return patterns

    @staticmethod
    def _trust_signals(summary: SessionSummary, return_visit: bool) -> List[str]:
        signals = []
        if summary.correction_count < 2:
            signals.append("confident_responses")
        if summary.completion_rate > 90:
            signals.append("high_commitment")
        if summary.max_scroll_depth > 80:
            signals.append("thorough_review")
        if summary.anomalies.rapid_clicking == 0:
            signals.append("smooth_experience")
        if return_visit:
            signals.append("return_visitor")
        return signals

    @staticmethod
    def _risk_signals(summary: SessionSummary) -> List[str]:
        signals = []
        if summary.questions_completed and summary.average_response_time_ms < RUSHED_RESPONSE_MS:
            signals.append("rushing_through")
        if summary.correction_count > 5:
            signals.append("high_uncertainty")
        if summary.anomalies.rapid_clicking > 0:
            signals.append("frustration_detected")
        if summary.tab_switch_count > 5:
            signals.append("distracted")
        if summary.skipped_question_count > 2:
            signals.append("low_commitment")
        return signals

    @staticmethod
    def _personality_markers(summary: SessionSummary) -> List[str]:
        markers = []
        if summary.hover_time_ms > 10000:
            markers.append("analytical")
        elif summary.questions_completed and summary.average_response_time_ms < QUICK_RESPONSE_MS:
            markers.append("intuitive")
        if summary.scroll_return_count > 3:
            markers.append("detail_oriented")
        presented = summary.questions_started + summary.skipped_question_count
        if presented and summary.skipped_question_count / presented > 0.5:
            markers.append("efficiency_focused")
        return markers

    @staticmethod
    def _load_indicators(summary: SessionSummary) -> Dict[str, bool]:
        return {
            "high_pause_time": summary.max_pause_ms > 30000,
            "many_corrections": summary.correction_count > 4,
            "long_hesitations": summary.long_hesitation_count > 0,
            "frequent_scrolling": summary.scroll_event_count > 20,
        }

    @staticmethod
    def _cognitive_load(indicators: Dict[str, bool]) -> CognitiveLoad:
        active = sum(indicators.values())
        if active >= 3:
            return CognitiveLoad.HIGH
        if active >= 1:
            return CognitiveLoad.MODERATE
        return CognitiveLoad.LOW

    @staticmethod
    def _insights(
        level: EngagementLevel,
        patterns: List[str],
        risks: List[str],
        markers: List[str],
    ) -> List[Insight]:
        insights = []
        if level == EngagementLevel.HIGH:
            insights.append(Insight(
                type=InsightType.POSITIVE,
                message="Highly engaged - prioritize for immediate follow-up",
            ))
        if "quick_decision_maker" in patterns:
            insights.append(Insight(
                type=InsightType.TACTICAL,
                message="Fast decision maker - lead with the key points",
            ))
        if "rushing_through" in risks:
            insights.append(Insight(
                type=InsightType.WARNING,
                message="May be giving surface-level responses - verify interest",
            ))
        if "analytical" in markers:
            insights.append(Insight(
                type=InsightType.APPROACH,
                message="Analytical personality - provide detailed data and proof points",
            ))
        return insights


def analyze_behavior(summary: SessionSummary, return_visit: bool = False) -> BehavioralAnalysis:
    """Module-level entry point: behavioral analysis of one session summary."""
    return BehavioralAnalyzer().analyze(summary, return_visit)
