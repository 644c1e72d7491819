"""
Custom Exceptions - Candidate Intelligence Scoring
candidate_intel/core/exceptions.py

Only configuration problems are raised to callers. Malformed telemetry,
sparse responses and empty cohorts are handled inside the pipeline.
"""

from typing import Iterable


class ScoringException(Exception):
    """Base exception for the scoring pipeline."""

    pass


class ConfigurationError(ScoringException):
    """Scoring configuration is invalid (deployment/config bug)."""

    def __init__(self, message: str = "Invalid scoring configuration"):
        self.message = message
        super().__init__(message)


class UnknownAlgorithmError(ConfigurationError):
    """Requested scoring algorithm is not registered."""

    def __init__(self, algorithm: str, available: Iterable[str] = ()):
        self.algorithm = algorithm
        self.available = sorted(available)
        super().__init__(
            f"Algorithm '{algorithm}' not found (available: {', '.join(self.available)})"
        )


class UnknownVerticalError(ConfigurationError):
    """Requested vertical has no tier table."""

    def __init__(self, vertical: str):
        self.vertical = vertical
        super().__init__(f"Vertical '{vertical}' has no tier table")


class InvalidTierTableError(ConfigurationError):
    """Tier table cannot map every score in [0, 100] to exactly one tier."""

    pass


class InvalidWeightsError(ConfigurationError):
    """Weight overrides reference unknown dimensions or are negative."""

    pass
