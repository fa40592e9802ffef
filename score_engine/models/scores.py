"""
Score Value Objects
score_engine/models/scores.py

PillarScores: the five integer pillar dimensions, each in [0, 4].
WeightedScore: a level-weighted score in [0, 4] with derived percentage
and bonus tier.
"""

from dataclasses import dataclass, fields
from decimal import Decimal, InvalidOperation
from typing import Dict, Mapping, Union

from score_engine.core.exceptions import (
    InvalidPillarScoreException,
    InvalidWeightedScoreException,
)
from score_engine.models.enumerations import BonusTier, Pillar

PILLAR_MIN = 0
PILLAR_MAX = 4

WEIGHTED_MIN = Decimal("0")
WEIGHTED_MAX = Decimal("4")


@dataclass(frozen=True)
class PillarScores:
    """Immutable set of the five pillar scores."""
    project_impact: int
    direction: int
    engineering_excellence: int
    operational_ownership: int
    people_impact: int

    def __post_init__(self):
        for f in fields(self):
            value = getattr(self, f.name)
            # bool is an int subclass but never a valid score
            if isinstance(value, bool) or not isinstance(value, int):
                raise InvalidPillarScoreException(
                    f"Pillar score {f.name} must be an integer, got {value!r}"
                )
            if value < PILLAR_MIN or value > PILLAR_MAX:
                raise InvalidPillarScoreException(
                    f"Pillar score {f.name} must be between {PILLAR_MIN} and {PILLAR_MAX}, got {value}"
                )

    @classmethod
    def create(cls, scores: Mapping[Union[Pillar, str], int]) -> "PillarScores":
        """
        Build from a mapping keyed by Pillar or pillar name.

        Raises:
            InvalidPillarScoreException: missing pillar or invalid value
        """
        normalized = {}
        for key, value in scores.items():
            name = key.value if isinstance(key, Pillar) else str(key)
            normalized[name] = value

        missing = [p.value for p in Pillar if p.value not in normalized]
        if missing:
            raise InvalidPillarScoreException(f"Missing pillar scores: {', '.join(missing)}")

        return cls(**{p.value: normalized[p.value] for p in Pillar})

    @classmethod
    def zeros(cls) -> "PillarScores":
        return cls(0, 0, 0, 0, 0)

    def get(self, pillar: Pillar) -> int:
        return getattr(self, pillar.value)

    def values(self) -> Dict[Pillar, int]:
        return {p: self.get(p) for p in Pillar}

    def to_dict(self) -> Dict[str, int]:
        return {p.value: self.get(p) for p in Pillar}


@dataclass(frozen=True)
class WeightedScore:
    """
    Weighted score in [0, 4].

    percentage and bonus_tier are always derived from value and never
    stored separately.
    """
    value: Decimal

    def __post_init__(self):
        if not isinstance(self.value, Decimal) or self.value.is_nan():
            raise InvalidWeightedScoreException(
                f"Weighted score must be a valid number, got {self.value!r}"
            )
        if self.value < WEIGHTED_MIN or self.value > WEIGHTED_MAX:
            raise InvalidWeightedScoreException(
                f"Weighted score must be between 0 and 4, got {self.value}"
            )

    @classmethod
    def from_value(cls, value: Union[Decimal, float, int]) -> "WeightedScore":
        """
        Rejects out-of-range values instead of clamping them.

        Examples:
            >>> WeightedScore.from_value(2.85).percentage == Decimal("71.25")
            True
        """
        if value is None or isinstance(value, bool):
            raise InvalidWeightedScoreException(f"Weighted score must be a valid number, got {value!r}")
        try:
            decimal_value = value if isinstance(value, Decimal) else Decimal(str(value))
        except (InvalidOperation, ValueError):
            raise InvalidWeightedScoreException(
                f"Weighted score must be a valid number, got {value!r}"
            ) from None
        return cls(decimal_value)

    @property
    def percentage(self) -> Decimal:
        return self.value / WEIGHTED_MAX * Decimal("100")

    @property
    def bonus_tier(self) -> BonusTier:
        return BonusTier.from_percentage(self.percentage)

    def __float__(self) -> float:
        return float(self.value)
