"""
Level Weight Table
score_engine/scoring/weights.py

Each engineer level emphasises different pillars. Every level in
EngineerLevel must have a weight vector and every vector must sum to 1.0;
both are checked when this module is imported, so a level added without
weights fails at startup instead of at the first calculation.

Level    | Impact  Direction  Excellence  Ownership  People
─────────┼─────────────────────────────────────────────────
JUNIOR   |  0.20     0.10        0.25        0.20      0.25
MID      |  0.25     0.15        0.25        0.20      0.15
SENIOR   |  0.30     0.20        0.20        0.15      0.15
LEAD     |  0.30     0.25        0.20        0.15      0.10
MANAGER  |  0.35     0.25        0.15        0.10      0.15
"""

from dataclasses import dataclass, fields
from decimal import Decimal
from typing import Dict, Mapping, Optional

from score_engine.config import get_settings
from score_engine.core.exceptions import WeightConfigurationException
from score_engine.models.enumerations import EngineerLevel, Pillar


@dataclass(frozen=True)
class PillarWeights:
    """Weight vector for one level (one weight per pillar)."""
    project_impact: Decimal
    direction: Decimal
    engineering_excellence: Decimal
    operational_ownership: Decimal
    people_impact: Decimal

    def get(self, pillar: Pillar) -> Decimal:
        return getattr(self, pillar.value)

    def total(self) -> Decimal:
        return sum((getattr(self, f.name) for f in fields(self)), Decimal("0"))

    def to_dict(self) -> Dict[str, Decimal]:
        return {p.value: self.get(p) for p in Pillar}


LEVEL_WEIGHTS: Dict[EngineerLevel, PillarWeights] = {
    # Learning and contributing; collaboration weighs as much as craft
    EngineerLevel.JUNIOR: PillarWeights(
        project_impact=Decimal("0.20"),
        direction=Decimal("0.10"),
        engineering_excellence=Decimal("0.25"),
        operational_ownership=Decimal("0.20"),
        people_impact=Decimal("0.25"),
    ),
    EngineerLevel.MID: PillarWeights(
        project_impact=Decimal("0.25"),
        direction=Decimal("0.15"),
        engineering_excellence=Decimal("0.25"),
        operational_ownership=Decimal("0.20"),
        people_impact=Decimal("0.15"),
    ),
    EngineerLevel.SENIOR: PillarWeights(
        project_impact=Decimal("0.30"),
        direction=Decimal("0.20"),
        engineering_excellence=Decimal("0.20"),
        operational_ownership=Decimal("0.15"),
        people_impact=Decimal("0.15"),
    ),
    EngineerLevel.LEAD: PillarWeights(
        project_impact=Decimal("0.30"),
        direction=Decimal("0.25"),
        engineering_excellence=Decimal("0.20"),
        operational_ownership=Decimal("0.15"),
        people_impact=Decimal("0.10"),
    ),
    # Impact through team delivery
    EngineerLevel.MANAGER: PillarWeights(
        project_impact=Decimal("0.35"),
        direction=Decimal("0.25"),
        engineering_excellence=Decimal("0.15"),
        operational_ownership=Decimal("0.10"),
        people_impact=Decimal("0.15"),
    ),
}


def validate_weight_table(
    table: Mapping[EngineerLevel, PillarWeights],
    tolerance: Optional[Decimal] = None,
) -> None:
    """
    Check the table covers every level with a non-negative vector summing to 1.0.

    Raises:
        WeightConfigurationException: first offending level
    """
    if tolerance is None:
        tolerance = Decimal(str(get_settings().WEIGHT_SUM_TOLERANCE))

    for level in EngineerLevel:
        weights = table.get(level)
        if weights is None:
            raise WeightConfigurationException(level.value)
        if any(weights.get(p) < 0 for p in Pillar):
            raise WeightConfigurationException(
                level.value, f"Negative weight defined for level: {level.value}"
            )
        total = weights.total()
        if abs(total - Decimal("1")) > tolerance:
            raise WeightConfigurationException(
                level.value, f"Weights for level {level.value} must sum to 1.0, got {total}"
            )


def get_weights(level: EngineerLevel, table: Optional[Mapping[EngineerLevel, PillarWeights]] = None) -> PillarWeights:
    """
    Look up the weight vector for a level.

    Raises:
        WeightConfigurationException: no vector registered for the level
    """
    table = LEVEL_WEIGHTS if table is None else table
    weights = table.get(level)
    if weights is None:
        raise WeightConfigurationException(getattr(level, "value", str(level)))
    return weights


def get_all_weights() -> Dict[EngineerLevel, PillarWeights]:
    return dict(LEVEL_WEIGHTS)


validate_weight_table(LEVEL_WEIGHTS)
