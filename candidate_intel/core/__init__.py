"""
Core Package - Candidate Intelligence Scoring
candidate_intel/core/__init__.py

Core infrastructure: exceptions.
"""

from candidate_intel.core.exceptions import (
    ConfigurationError,
    InvalidTierTableError,
    InvalidWeightsError,
    ScoringException,
    UnknownAlgorithmError,
    UnknownVerticalError,
)

__all__ = [
    "ConfigurationError",
    "InvalidTierTableError",
    "InvalidWeightsError",
    "ScoringException",
    "UnknownAlgorithmError",
    "UnknownVerticalError",
]
