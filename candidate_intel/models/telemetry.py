from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from candidate_intel.models.enumerations import (
    DecisionStyle,
    EnergyPattern,
    EventType,
    StressLevel,
)


class TelemetryEvent(BaseModel):
    """
    One client-side interaction event.

    Offsets are milliseconds since the session started. Only the payload
    fields relevant to ``type`` are read; anything else is ignored.
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    type: EventType = Field(..., description="Event type")

    offset_ms: float = Field(
        default=0.0,
        description="Milliseconds since session start (negative values clamp to 0)"
    )

    question_id: Optional[str] = Field(default=None, max_length=255)
    x: Optional[float] = None
    y: Optional[float] = None
    viewport_height: Optional[float] = Field(default=None, gt=0)
    key: Optional[str] = None
    hidden: Optional[bool] = Field(
        default=None,
        description="visibility_change only: True when the page was hidden"
    )
    duration_ms: Optional[float] = Field(default=None, ge=0)
    depth_percent: Optional[float] = None
    answer: Any = None
    previous_answer: Any = None

    @field_validator("offset_ms")
    @classmethod
    def clamp_offset(cls, v: float) -> float:
        return max(0.0, float(v))


class DeviceProfile(BaseModel):
    """Device information captured when the session was opened."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    type: Optional[str] = Field(default=None, description="desktop, tablet or mobile")
    screen_width: Optional[int] = Field(default=None, ge=0)
    screen_height: Optional[int] = Field(default=None, ge=0)


class AnomalyCounts(BaseModel):
    """Discrete anomaly counters replayed from the event stream."""

    model_config = ConfigDict(frozen=True)

    rapid_clicking: int = 0
    erratic_mouse: int = 0
    unusual_pauses: int = 0
    right_click_attempts: int = 0
    dev_tools_opened: int = 0
    timeouts: int = 0


class SessionSummary(BaseModel):
    """
    Per-session metrics derived purely from event replay.

    Recomputing from the same ``TelemetrySession`` always yields an equal summary.
    """

    model_config = ConfigDict(frozen=True)

    session_id: Optional[str] = None

    confidence_score: float = Field(default=100.0, ge=0, le=100)
    engagement_score: float = Field(default=70.0, ge=0, le=100)
    stress_level: StressLevel = StressLevel.LOW
    stress_points: int = Field(default=0, ge=0)
    energy_pattern: EnergyPattern = EnergyPattern.INSUFFICIENT_DATA
    decision_style: DecisionStyle = DecisionStyle.DECISIVE

    average_response_time_ms: float = Field(default=0.0, ge=0)
    total_time_ms: float = Field(default=0.0, ge=0)

    tab_switch_count: int = Field(default=0, ge=0)
    copy_paste_count: int = Field(default=0, ge=0)
    hesitation_count: int = Field(default=0, ge=0)
    correction_count: int = Field(default=0, ge=0)
    answer_change_count: int = Field(default=0, ge=0)
    rapid_pointer_count: int = Field(default=0, ge=0)
    pointer_move_count: int = Field(default=0, ge=0)
    interaction_count: int = Field(default=0, ge=0)
    max_scroll_depth: float = Field(default=0.0, ge=0, le=100)
    scroll_event_count: int = Field(default=0, ge=0)
    scroll_return_count: int = Field(
        default=0, ge=0,
        description="Scroll events that moved back above the previous depth"
    )
    hover_time_ms: float = Field(default=0.0, ge=0)
    long_hesitation_count: int = Field(default=0, ge=0, description="Hovers or hesitations over 15s")
    max_pause_ms: float = Field(default=0.0, ge=0, description="Longest gap between consecutive events")
    focus_time_ms: float = Field(default=0.0, ge=0, description="Session time with the page visible")

    questions_started: int = Field(default=0, ge=0)
    questions_completed: int = Field(default=0, ge=0)
    skipped_question_count: int = Field(default=0, ge=0)
    completion_rate: float = Field(default=0.0, ge=0, le=100)

    anomalies: AnomalyCounts = Field(default_factory=AnomalyCounts)
    anomaly_score: float = Field(default=0.0, ge=0)

    device_type: Optional[str] = None
    screen_width: Optional[int] = None

    red_flags: List[str] = Field(default_factory=list)
    insights: List[str] = Field(default_factory=list)
