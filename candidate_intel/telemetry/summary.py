# candidate_intel/telemetry/summary.py
"""
Session Summarizer
------------------
Replays a TelemetrySession's events and question timings into a SessionSummary.

Metrics:
    confidence  = 80 − 5×hesitations − 3×corrections − 10×tab_switches − 15×pastes
                  + min(10, 2 × answers_faster_than_median)            clamped to [0, 100]
    stress      = 1×rapid_pointer + 3×rapid_clicking + 2×tab_switches  → low <5, medium <15, high
    energy      = mean(first third of durations) / mean(last third)    → ≥0.9 / ≥0.7 / ≥0.5 bands
    anomaly     = 3×rapid_clicking + 2×erratic_mouse + 1×unusual_pauses
                  + 2×right_click + 5×dev_tools + 2×timeouts            (raw magnitude)
    focus       = total time − time with the page hidden

A session without events summarizes to the neutral defaults of SessionSummary.
"""
import math
from collections import deque
from dataclasses import dataclass, field
from typing import Dict, List, Optional

import structlog

from candidate_intel.config import Settings, get_settings
from candidate_intel.models.enumerations import (
    DecisionStyle,
    EnergyPattern,
    EventType,
    StressLevel,
)
from candidate_intel.models.telemetry import AnomalyCounts, SessionSummary
from candidate_intel.scoring.utils import clamp_score, mean, median, variance
from candidate_intel.telemetry.session import TelemetrySession

logger = structlog.get_logger(__name__)

CONFIDENCE_BASE = 80.0
CONFIDENCE_EMPTY = 100.0
ENGAGEMENT_DEFAULT = 70.0

_CORRECTION_KEYS = frozenset(["Backspace", "Delete"])
_POINTER_SAMPLE_MS = 50
_ERRATIC_WINDOW = 9          # velocities between the last 10 samples
_CLICK_WINDOW = 5
_HOVER_HESITATION_RANGE = (2000, 10000)
_LONG_HESITATION_MS = 15000

_ANOMALY_WEIGHTS: Dict[str, int] = {
    "rapid_clicking": 3,
    "erratic_mouse": 2,
    "unusual_pauses": 1,
    "right_click_attempts": 2,
    "dev_tools_opened": 5,
    "timeouts": 2,
}

# Energy ratio bands, highest first: (min_ratio, pattern)
_ENERGY_BANDS = [
    (0.9, EnergyPattern.SUSTAINED_HIGH),
    (0.7, EnergyPattern.GRADUAL_DECLINE),
    (0.5, EnergyPattern.MODERATE_FATIGUE),
]


@dataclass
class _Replay:
    """Counters accumulated while replaying events."""
    pointer_moves: int = 0
    rapid_pointer: int = 0
    erratic_mouse: int = 0
    rapid_clicking: int = 0
    corrections: int = 0
    answer_changes: int = 0
    pastes: int = 0
    tab_switches: int = 0
    hesitations: int = 0
    right_clicks: int = 0
    dev_tools: int = 0
    timeouts: int = 0
    skipped: int = 0
    unusual_pauses: int = 0
    interactions: int = 0
    max_scroll: float = 0.0
    scroll_events: int = 0
    scroll_returns: int = 0
    hover_time: float = 0.0
    long_hesitations: int = 0
    hidden_time: float = 0.0
    max_pause: float = 0.0
    total_time: float = 0.0
    zone_time: Dict[str, float] = field(default_factory=dict)


class SessionSummarizer:
    """Derive per-session behavioral metrics from raw telemetry."""

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()

    def summarize(self, session: TelemetrySession) -> SessionSummary:
        events = session.raw_events
        device = session.device

        if not events:
            logger.info("session_summarized", session_id=session.session_id, events=0)
            return SessionSummary(
                session_id=session.session_id,
                confidence_score=CONFIDENCE_EMPTY,
                device_type=device.type if device else None,
                screen_width=device.screen_width if device else None,
            )

        replay = self._replay(session)

        timings = sorted(session.question_timings.values(), key=lambda t: t.start_offset)
        timed = [t for t in timings if t.duration_ms is not None]
        durations = [t.duration_ms for t in timed]

        completion_rate = self._completion_rate(
            len(timed), len(timings), session.expected_question_count
        )
        average_response = mean(durations)

        confidence = self._confidence_score(replay, durations)
        engagement = self._engagement_score(timed, replay.zone_time)
        stress_points = (
            self.settings.STRESS_WEIGHT_RAPID_POINTER * replay.rapid_pointer
            + self.settings.STRESS_WEIGHT_RAPID_CLICKING * replay.rapid_clicking
            + self.settings.STRESS_WEIGHT_TAB_SWITCH * replay.tab_switches
        )
        stress_level = self._stress_level(stress_points)
        energy_pattern = self.energy_pattern(durations)
        decision_style = self._decision_style(average_response, replay.hesitations, len(timed))

        anomalies = AnomalyCounts(
            rapid_clicking=replay.rapid_clicking,
            erratic_mouse=replay.erratic_mouse,
            unusual_pauses=replay.unusual_pauses,
            right_click_attempts=replay.right_clicks,
            dev_tools_opened=replay.dev_tools,
            timeouts=replay.timeouts,
        )
        anomaly_score = float(sum(
            weight * getattr(anomalies, name) for name, weight in _ANOMALY_WEIGHTS.items()
        ))

        summary = SessionSummary(
            session_id=session.session_id,
            confidence_score=confidence,
            engagement_score=engagement,
            stress_level=stress_level,
            stress_points=stress_points,
            energy_pattern=energy_pattern,
            decision_style=decision_style,
            average_response_time_ms=round(average_response, 2),
            total_time_ms=replay.total_time,
            tab_switch_count=replay.tab_switches,
            copy_paste_count=replay.pastes,
            hesitation_count=replay.hesitations,
            correction_count=replay.corrections,
            answer_change_count=replay.answer_changes,
            rapid_pointer_count=replay.rapid_pointer,
            pointer_move_count=replay.pointer_moves,
            interaction_count=replay.interactions,
            max_scroll_depth=replay.max_scroll,
            scroll_event_count=replay.scroll_events,
            scroll_return_count=replay.scroll_returns,
            hover_time_ms=replay.hover_time,
            long_hesitation_count=replay.long_hesitations,
            max_pause_ms=replay.max_pause,
            focus_time_ms=max(0.0, replay.total_time - replay.hidden_time),
            questions_started=len(timings),
            questions_completed=len(timed),
            skipped_question_count=replay.skipped,
            completion_rate=completion_rate,
            anomalies=anomalies,
            anomaly_score=anomaly_score,
            device_type=device.type if device else None,
            screen_width=device.screen_width if device else None,
            red_flags=self._red_flags(replay, average_response, bool(timed)),
            insights=self._insights(confidence, engagement, energy_pattern, decision_style),
        )

        logger.info(
            "session_summarized",
            session_id=session.session_id,
            events=len(events),
            confidence_score=confidence,
            engagement_score=engagement,
            stress_level=stress_level.value,
            energy_pattern=energy_pattern.value,
            anomaly_score=anomaly_score,
        )
        return summary

    # ------------------------------------------------------------------
    # Event replay
    # ------------------------------------------------------------------

    def _replay(self, session: TelemetrySession) -> _Replay:
        s = self.settings
        r = _Replay()

        last_sample = None          # (x, y, offset) of the last velocity sample
        zone_prev = None            # (zone, offset) of the last pointer position
        velocities: deque = deque(maxlen=_ERRATIC_WINDOW)
        click_intervals: deque = deque(maxlen=_CLICK_WINDOW)
        last_click: Optional[float] = None
        prev_offset: Optional[float] = None
        last_depth: Optional[float] = None
        hidden_since: Optional[float] = None

        for event in session.raw_events:
            t = event.offset_ms
            r.total_time = max(r.total_time, t)
            if prev_offset is not None:
                gap = t - prev_offset
                r.max_pause = max(r.max_pause, gap)
                if gap > s.UNUSUAL_PAUSE_MS:
                    r.unusual_pauses += 1
            prev_offset = t

            kind = event.type
            if kind == EventType.POINTER_MOVE:
                r.pointer_moves += 1
                if event.x is None or event.y is None:
                    continue

                if event.viewport_height:
                    zone = _attention_zone(event.y, event.viewport_height)
                    if zone_prev is not None and t >= zone_prev[1]:
                        r.zone_time[zone_prev[0]] = r.zone_time.get(zone_prev[0], 0.0) + (t - zone_prev[1])
                    zone_prev = (zone, t)

                if last_sample is None:
                    last_sample = (event.x, event.y, t)
                    continue
                dt = t - last_sample[2]
                if dt > _POINTER_SAMPLE_MS:
                    distance = math.hypot(event.x - last_sample[0], event.y - last_sample[1])
                    velocity = distance / dt
                    if velocity > s.RAPID_POINTER_VELOCITY:
                        r.rapid_pointer += 1
                    velocities.append(velocity * 1000)
                    if len(velocities) == _ERRATIC_WINDOW and variance(velocities) > s.ERRATIC_VARIANCE_THRESHOLD:
                        r.erratic_mouse += 1
                    last_sample = (event.x, event.y, t)
                continue

            if kind not in (EventType.QUESTION_START, EventType.QUESTION_END):
                r.interactions += 1

            if kind == EventType.POINTER_CLICK:
                if last_click is not None:
                    click_intervals.append(max(0.0, t - last_click))
                    if len(click_intervals) >= 3 and all(
                        i < s.RAPID_CLICK_INTERVAL_MS for i in click_intervals
                    ):
                        r.rapid_clicking += 1
                last_click = t
            elif kind == EventType.KEY_DOWN:
                if event.key in _CORRECTION_KEYS:
                    r.corrections += 1
            elif kind == EventType.ANSWER_CHANGE:
                r.answer_changes += 1
                r.corrections += 1
            elif kind == EventType.PASTE:
                r.pastes += 1
            elif kind == EventType.VISIBILITY_CHANGE:
                if event.hidden:
                    r.tab_switches += 1
                    if hidden_since is None:
                        hidden_since = t
                elif hidden_since is not None:
                    r.hidden_time += max(0.0, t - hidden_since)
                    hidden_since = None
            elif kind == EventType.SCROLL:
                r.scroll_events += 1
                if event.depth_percent is not None:
                    depth = clamp_score(event.depth_percent)
                    if last_depth is not None and depth < last_depth:
                        r.scroll_returns += 1
                    last_depth = depth
                    r.max_scroll = max(r.max_scroll, depth)
            elif kind == EventType.HOVER:
                low, high = _HOVER_HESITATION_RANGE
                if event.duration_ms is not None:
                    r.hover_time += event.duration_ms
                    if low < event.duration_ms < high:
                        r.hesitations += 1
                    if event.duration_ms > _LONG_HESITATION_MS:
                        r.long_hesitations += 1
            elif kind == EventType.HESITATION:
                r.hesitations += 1
                if event.duration_ms is not None and event.duration_ms > _LONG_HESITATION_MS:
                    r.long_hesitations += 1
            elif kind == EventType.CONTEXT_MENU:
                r.right_clicks += 1
            elif kind == EventType.DEV_TOOLS:
                r.dev_tools += 1
            elif kind == EventType.TIMEOUT:
                r.timeouts += 1
            elif kind == EventType.QUESTION_SKIP:
                r.skipped += 1

        if hidden_since is not None:
            r.hidden_time += max(0.0, r.total_time - hidden_since)
        return r

    # ------------------------------------------------------------------
    # Metrics
    # ------------------------------------------------------------------

    @staticmethod
    def _completion_rate(completed: int, started: int, expected: Optional[int]) -> float:
        denominator = expected or started
        if not denominator:
            return 0.0
        return round(clamp_score(completed / denominator * 100), 2)

    @staticmethod
    def _confidence_score(r: _Replay, durations: List[float]) -> float:
        score = CONFIDENCE_BASE
        score -= r.hesitations * 5
        score -= r.corrections * 3
        score -= r.tab_switches * 10
        score -= r.pastes * 15
        if durations:
            mid = median(durations)
            quick = sum(1 for d in durations if d < mid)
            score += min(quick * 2, 10)
        return clamp_score(score)

    @staticmethod
    def _engagement_score(timed, zone_time: Dict[str, float]) -> float:
        if timed:
            score = mean([_question_energy(t.duration_ms, t.end_offset or 0.0) for t in timed])
        else:
            score = ENGAGEMENT_DEFAULT
        total_zone = sum(zone_time.values())
        if total_zone > 0 and zone_time.get("middle", 0.0) / total_zone > 0.6:
            score += 10
        return round(clamp_score(score), 2)

    def _stress_level(self, points: int) -> StressLevel:
        if points >= self.settings.STRESS_HIGH_THRESHOLD:
            return StressLevel.HIGH
        if points >= self.settings.STRESS_MEDIUM_THRESHOLD:
            return StressLevel.MEDIUM
        return StressLevel.LOW

    @staticmethod
    def energy_pattern(durations: List[float]) -> EnergyPattern:
        """
        Compare answer speed early vs late in the session.

        ratio = mean(first third) / mean(last third) of response times, so a
        candidate who slows down gets ratio < 1. Getting faster caps at 1.0
        (sustained_high).

        Examples:
            >>> SessionSummarizer.energy_pattern([3000, 9000, 27000])
            <EnergyPattern.SIGNIFICANT_FATIGUE: 'significant_fatigue'>
        """
        if len(durations) < 3:
            return EnergyPattern.INSUFFICIENT_DATA
        third = len(durations) // 3
        avg_first = mean(durations[:third])
        avg_last = mean(durations[-third:])
        ratio = 1.0 if avg_last == 0 else min(1.0, avg_first / avg_last)
        for min_ratio, pattern in _ENERGY_BANDS:
            if ratio >= min_ratio:
                return pattern
        return EnergyPattern.SIGNIFICANT_FATIGUE

    @staticmethod
    def _decision_style(average_response: float, hesitations: int, answered: int) -> DecisionStyle:
        rate = hesitations / max(answered, 1)
        if average_response < 5000 and rate < 0.1:
            return DecisionStyle.DECISIVE
        if average_response < 10000 and rate < 0.3:
            return DecisionStyle.BALANCED
        if average_response < 20000 and rate < 0.5:
            return DecisionStyle.DELIBERATIVE
        return DecisionStyle.CAUTIOUS

    @staticmethod
    def _red_flags(r: _Replay, average_response: float, has_timings: bool) -> List[str]:
        flags = []
        if r.tab_switches > 5:
            flags.append("Excessive tab switching - possible external assistance")
        if r.pastes > 2:
            flags.append("Multiple paste events - possible prepared answers")
        if r.hesitations > 10:
            flags.append("High hesitation count - uncertainty or difficulty")
        if has_timings and average_response < 2000:
            flags.append("Extremely fast responses - possible lack of consideration")
        if r.rapid_pointer > 10:
            flags.append("Erratic mouse patterns - frustration or confusion")
        return flags

    @staticmethod
    def _insights(
        confidence: float,
        engagement: float,
        energy: EnergyPattern,
        style: DecisionStyle,
    ) -> List[str]:
        insights = []
        if confidence > 80:
            insights.append("High confidence - decisive and sure of responses")
        elif confidence < 50:
            insights.append("Low confidence - significant uncertainty detected")
        if engagement > 80:
            insights.append("Highly engaged throughout assessment")
        elif engagement < 50:
            insights.append("Low engagement - possible disinterest or fatigue")
        if energy == EnergyPattern.SUSTAINED_HIGH:
            insights.append("Maintained high energy - strong focus and stamina")
        elif energy == EnergyPattern.SIGNIFICANT_FATIGUE:
            insights.append("Significant fatigue detected - may impact later responses")
        insights.append(f"Decision style: {style.value}")
        return insights


def _attention_zone(y: float, viewport_height: float) -> str:
    if y < viewport_height / 3:
        return "top"
    if y < viewport_height * 2 / 3:
        return "middle"
    return "bottom"


def _question_energy(duration_ms: float, answered_at_ms: float) -> float:
    energy = 100.0
    if duration_ms > 30000:
        energy -= 30
    elif duration_ms > 20000:
        energy -= 20
    elif duration_ms > 10000:
        energy -= 10
    if answered_at_ms > 600000:
        energy -= 20
    elif answered_at_ms > 300000:
        energy -= 10
    return max(energy, 0.0)


def summarize_session(session: TelemetrySession) -> SessionSummary:
    """Module-level entry point: summarize one telemetry session."""
    return SessionSummarizer().summarize(session)
