"""
telemetry/ — Client interaction capture

Modules:
    session.py   - TelemetrySession: per-attempt event log and question timing
    summary.py   - SessionSummarizer: event replay into a SessionSummary
"""

from candidate_intel.telemetry.session import QuestionTiming, TelemetrySession
from candidate_intel.telemetry.summary import SessionSummarizer, summarize_session

__all__ = [
    "QuestionTiming",
    "SessionSummarizer",
    "TelemetrySession",
    "summarize_session",
]
