from datetime import datetime
from typing import Any, Dict, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class Response(BaseModel):
    """
    A single recorded answer.

    ``value`` is any JSON-compatible scalar or list. Question ids come from the
    external question catalog and are not validated here.
    """

    model_config = ConfigDict(frozen=True)

    value: Any = Field(default=None, description="Answer value (scalar or list)")

    recorded_at: Optional[datetime] = Field(
        default=None,
        description="When the answer was recorded"
    )

    metadata: Dict[str, Any] = Field(
        default_factory=dict,
        description="Optional extras such as responseTimeMs, optionIndex, wordCount"
    )


# Bare values are accepted in place of Response objects.
ResponseSet = Mapping[str, Union[Response, Any]]


def response_values(responses: Optional[ResponseSet]) -> Dict[str, Any]:
    """Normalize a response set into ``{question_id: value}``."""
    if not responses:
        return {}
    values: Dict[str, Any] = {}
    for question_id, answer in responses.items():
        if isinstance(answer, Response):
            values[str(question_id)] = answer.value
        elif isinstance(answer, Mapping) and "value" in answer:
            values[str(question_id)] = answer["value"]
        else:
            values[str(question_id)] = answer
    return values


class CohortRecord(BaseModel):
    """A prior scored submission from the same population segment."""

    model_config = ConfigDict(frozen=True)

    score: float = Field(..., description="Final score of the prior submission")

    responses: Dict[str, Any] = Field(
        default_factory=dict,
        description="Prior submission's responses (Response objects or bare values)"
    )

    tier: Optional[str] = Field(default=None, max_length=100)

    record_id: Optional[str] = Field(default=None, max_length=255)
