"""
Telemetry Session
candidate_intel/telemetry/session.py

Single-writer accumulator for one assessment attempt. The surrounding service
captures client events and calls ``record()`` on an explicitly owned
instance; no state is shared between sessions.

Question timing rules:
    - start on an open question     → start offset is overwritten
    - start on a closed question    → re-opened (end cleared), original start kept
    - end on an open question       → end/duration set, duration = max(0, end − start)
    - end with no open start        → timing untouched, answer still recorded
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Optional, Union
from uuid import uuid4

from pydantic import ValidationError

from candidate_intel.models.enumerations import EventType
from candidate_intel.models.telemetry import DeviceProfile, SessionSummary, TelemetryEvent

logger = logging.getLogger(__name__)


@dataclass
class QuestionTiming:
    """Timing for one question; ``end_offset`` is None while the question is open."""
    start_offset: float
    end_offset: Optional[float] = None
    duration_ms: Optional[float] = None
    is_open: bool = True


class TelemetrySession:
    """Append-only event log plus per-question timing for one session."""

    def __init__(
        self,
        session_id: Optional[str] = None,
        started_at: Optional[datetime] = None,
        device: Optional[DeviceProfile] = None,
        expected_question_count: Optional[int] = None,
    ):
        self._session_id = session_id or f"sess_{uuid4().hex}"
        self._started_at = started_at or datetime.now(timezone.utc)
        self.device = device
        self.expected_question_count = (
            expected_question_count if expected_question_count and expected_question_count > 0 else None
        )
        self._events: List[TelemetryEvent] = []
        self._timings: Dict[str, QuestionTiming] = {}
        self._answers: Dict[str, Any] = {}

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------

    @property
    def session_id(self) -> str:
        return self._session_id

    @property
    def started_at(self) -> datetime:
        return self._started_at

    @property
    def raw_events(self) -> List[TelemetryEvent]:
        return list(self._events)

    @property
    def question_timings(self) -> Dict[str, QuestionTiming]:
        return {
            qid: QuestionTiming(t.start_offset, t.end_offset, t.duration_ms, t.is_open)
            for qid, t in self._timings.items()
        }

    @property
    def answers(self) -> Dict[str, Any]:
        return dict(self._answers)

    def __len__(self) -> int:
        return len(self._events)

    # ------------------------------------------------------------------
    # Ingestion
    # ------------------------------------------------------------------

    def record(self, event: Union[TelemetryEvent, Mapping[str, Any]]) -> bool:
        """
        Append one event.

        Accepts a ``TelemetryEvent`` or a raw mapping from an untrusted client.
        Events with a missing or unknown type are dropped; malformed optional
        fields are discarded and the rest of the event is kept (both logged
        at debug).

        Returns:
            True when the event was appended.
        """
        if not isinstance(event, TelemetryEvent):
            if not isinstance(event, Mapping):
                logger.debug("telemetry_event_dropped", extra={
                    "session_id": self._session_id,
                    "reason": "not a mapping",
                })
                return False
            event = self._validate_payload(dict(event))
            if event is None:
                return False

        self._events.append(event)

        if event.question_id:
            if event.type == EventType.QUESTION_START:
                self._open_question(event.question_id, event.offset_ms)
            elif event.type == EventType.QUESTION_END:
                self._close_question(event.question_id, event.offset_ms, event.answer)
            elif event.type == EventType.ANSWER_CHANGE:
                self._answers[event.question_id] = event.answer
        return True

    def start_question(self, question_id: str, offset_ms: Optional[float] = None) -> None:
        """Begin timing ``question_id``."""
        self.record(TelemetryEvent(
            type=EventType.QUESTION_START,
            question_id=question_id,
            offset_ms=self._offset(offset_ms),
        ))

    def end_question(
        self,
        question_id: str,
        answer: Any = None,
        offset_ms: Optional[float] = None,
    ) -> Optional[float]:
        """
        Close timing for ``question_id`` and record its answer.

        Returns:
            Duration in ms, or None when the question had no open start.
        """
        timing = self._timings.get(question_id)
        was_open = timing is not None and timing.is_open
        self.record(TelemetryEvent(
            type=EventType.QUESTION_END,
            question_id=question_id,
            answer=answer,
            offset_ms=self._offset(offset_ms),
        ))
        if not was_open:
            return None
        return timing.duration_ms

    def record_answer_change(
        self,
        question_id: str,
        old_answer: Any,
        new_answer: Any,
        offset_ms: Optional[float] = None,
    ) -> None:
        self.record(TelemetryEvent(
            type=EventType.ANSWER_CHANGE,
            question_id=question_id,
            previous_answer=old_answer,
            answer=new_answer,
            offset_ms=self._offset(offset_ms),
        ))

    def summarize(self) -> SessionSummary:
        """Replay the session into a ``SessionSummary`` (pure, idempotent)."""
        from candidate_intel.telemetry.summary import SessionSummarizer

        return SessionSummarizer().summarize(self)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _validate_payload(self, payload: Dict[str, Any]) -> Optional[TelemetryEvent]:
        try:
            return TelemetryEvent.model_validate(payload)
        except ValidationError as exc:
            bad_fields = {err["loc"][0] for err in exc.errors() if err["loc"]}

        if not bad_fields or "type" in bad_fields:
            logger.debug("telemetry_event_dropped", extra={
                "session_id": self._session_id,
                "reason": "invalid type",
                "event_type": payload.get("type"),
            })
            return None

        logger.debug("telemetry_fields_discarded", extra={
            "session_id": self._session_id,
            "event_type": payload.get("type"),
            "fields": sorted(str(f) for f in bad_fields),
        })
        kept = {k: v for k, v in payload.items() if k not in bad_fields}
        try:
            return TelemetryEvent.model_validate(kept)
        except ValidationError as exc:
            logger.debug("telemetry_event_dropped", extra={
                "session_id": self._session_id,
                "reason": "invalid payload",
                "errors": exc.error_count(),
                "event_type": payload.get("type"),
            })
            return None

    def _offset(self, offset_ms: Optional[float]) -> float:
        if offset_ms is not None:
            return offset_ms
        elapsed = datetime.now(timezone.utc) - self._started_at
        return max(0.0, elapsed.total_seconds() * 1000)

    def _open_question(self, question_id: str, offset: float) -> None:
        timing = self._timings.get(question_id)
        if timing is None:
            self._timings[question_id] = QuestionTiming(start_offset=offset)
        elif timing.is_open:
            timing.start_offset = offset
        else:
            timing.end_offset = None
            timing.is_open = True

    def _close_question(self, question_id: str, offset: float, answer: Any) -> None:
        self._answers[question_id] = answer
        timing = self._timings.get(question_id)
        if timing is None or not timing.is_open:
            logger.debug("question_end_without_start", extra={
                "session_id": self._session_id,
                "question_id": question_id,
            })
            return
        timing.end_offset = offset
        timing.duration_ms = max(0.0, offset - timing.start_offset)
        timing.is_open = False
