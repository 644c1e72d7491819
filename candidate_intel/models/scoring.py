from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ScoringConfig(BaseModel):
    """
    Per-request scoring options.

    Weight overrides are merged over the algorithm's defaults. An explicit
    ``tier_table`` takes precedence over ``vertical``.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    algorithm: Optional[str] = Field(
        default=None,
        description="Registered algorithm name; None uses DEFAULT_ALGORITHM"
    )

    weights: Dict[str, float] = Field(default_factory=dict)

    tier_table: Optional[List[Any]] = Field(
        default=None,
        description="Rows of (min_score, name[, icon]), mappings or TierDefinition"
    )

    vertical: Optional[str] = Field(default=None, description="financial, hiring or retention")

    capabilities: List[str] = Field(
        default_factory=list,
        description="Requirements we can satisfy (technical_fit)"
    )
    compatible_tech: List[str] = Field(default_factory=list)
    company_values: List[str] = Field(
        default_factory=lambda: ["innovation", "excellence", "integrity"]
    )

    @field_validator("vertical")
    @classmethod
    def normalize_vertical(cls, v: Optional[str]) -> Optional[str]:
        return v.strip().lower() if v else None
