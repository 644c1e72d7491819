"""
scoring/tiers.py — Tier Tables

A tier table maps a total score in [0, 100] to a discrete label. Rows are
kept highest floor first; the first row whose floor the score reaches wins.

Validation (raised at scorer construction, never per request):
    - at least one row
    - floors unique and within [0, 100]
    - names unique
    - one floor at 0, so every score maps to a tier
"""

from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple, Union

from candidate_intel.core.exceptions import InvalidTierTableError, UnknownVerticalError
from candidate_intel.models.results import TierDefinition


TierTable = List[TierDefinition]


DEFAULT_TIERS: TierTable = [
    TierDefinition(min_score=90, name="ELITE", icon="💎"),
    TierDefinition(min_score=80, name="PREMIUM", icon="🏆"),
    TierDefinition(min_score=70, name="HIGH", icon="🥇"),
    TierDefinition(min_score=60, name="MEDIUM", icon="🥈"),
    TierDefinition(min_score=40, name="LOW", icon="🥉"),
    TierDefinition(min_score=0, name="ENTRY", icon="📊"),
]

VERTICAL_TIERS: Dict[str, TierTable] = {
    "financial": [
        TierDefinition(min_score=90, name="DIAMOND", icon="💎"),
        TierDefinition(min_score=80, name="PLATINUM", icon="🏆"),
        TierDefinition(min_score=70, name="GOLD", icon="🥇"),
        TierDefinition(min_score=60, name="SILVER", icon="🥈"),
        TierDefinition(min_score=0, name="BRONZE", icon="🥉"),
    ],
    "hiring": [
        TierDefinition(min_score=85, name="PERFECT_FIT", icon="⭐"),
        TierDefinition(min_score=70, name="STRONG_CANDIDATE", icon="✓"),
        TierDefinition(min_score=55, name="POTENTIAL", icon="📊"),
        TierDefinition(min_score=0, name="NOT_QUALIFIED", icon="✗"),
    ],
    "retention": [
        TierDefinition(min_score=80, name="CHAMPION", icon="🏆"),
        TierDefinition(min_score=60, name="SATISFIED", icon="😊"),
        TierDefinition(min_score=40, name="AT_RISK", icon="⚠️"),
        TierDefinition(min_score=0, name="CHURNING", icon="🚨"),
    ],
}

TierRow = Union[TierDefinition, Mapping, Tuple]


def _coerce_row(row: TierRow) -> TierDefinition:
    if isinstance(row, TierDefinition):
        return row
    try:
        if isinstance(row, Mapping):
            return TierDefinition.model_validate(dict(row))
        min_score, name, *rest = row
        return TierDefinition(min_score=min_score, name=name, icon=rest[0] if rest else None)
    except (TypeError, ValueError) as exc:
        raise InvalidTierTableError(f"Malformed tier row {row!r}: {exc}") from exc


def build_tier_table(rows: Iterable[TierRow]) -> TierTable:
    """
    Validate rows and return them ordered highest floor first.

    Rows may be TierDefinition objects, ``{"min_score", "name", "icon"}``
    mappings or ``(min_score, name[, icon])`` tuples.

    Raises:
        InvalidTierTableError: when the table cannot map every score to one tier.
    """
    table = [_coerce_row(row) for row in rows]
    if not table:
        raise InvalidTierTableError("Tier table is empty")

    floors = [t.min_score for t in table]
    names = [t.name for t in table]
    if len(set(floors)) != len(floors):
        raise InvalidTierTableError(f"Duplicate tier floors: {sorted(floors)}")
    if len(set(names)) != len(names):
        raise InvalidTierTableError(f"Duplicate tier names: {names}")
    out_of_range = [f for f in floors if not 0 <= f <= 100]
    if out_of_range:
        raise InvalidTierTableError(f"Tier floors outside [0, 100]: {out_of_range}")
    if 0 not in floors:
        raise InvalidTierTableError("Tier table has no floor at 0")

    return sorted(table, key=lambda t: t.min_score, reverse=True)


def resolve_tier_table(
    tier_table: Optional[Sequence[TierRow]] = None,
    vertical: Optional[str] = None,
) -> TierTable:
    """An explicit table wins over a vertical; neither gives the default table."""
    if tier_table is not None:
        return build_tier_table(tier_table)
    if vertical is not None:
        if vertical not in VERTICAL_TIERS:
            raise UnknownVerticalError(vertical)
        return build_tier_table(VERTICAL_TIERS[vertical])
    return build_tier_table(DEFAULT_TIERS)


def select_tier(score: float, table: TierTable) -> Tuple[TierDefinition, int]:
    """
    Return the highest tier whose floor ``score`` reaches, with its rank.

    Rank 0 is the top tier. Scores below every floor (impossible for a
    validated table and a clamped score) fall into the last row.

    Examples:
        >>> tier, rank = select_tier(85, DEFAULT_TIERS)
        >>> (tier.name, rank)
        ('PREMIUM', 1)
    """
    for rank, tier in enumerate(table):
        if score >= tier.min_score:
            return tier, rank
    return table[-1], len(table) - 1
