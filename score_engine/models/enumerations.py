from decimal import Decimal
from enum import Enum
from typing import Union

from score_engine.core.exceptions import InvalidEngineerLevelException


class Pillar(str, Enum):
    PROJECT_IMPACT = "project_impact"
    DIRECTION = "direction"
    ENGINEERING_EXCELLENCE = "engineering_excellence"
    OPERATIONAL_OWNERSHIP = "operational_ownership"
    PEOPLE_IMPACT = "people_impact"


class EngineerLevel(str, Enum):
    JUNIOR = "JUNIOR"
    MID = "MID"
    SENIOR = "SENIOR"
    LEAD = "LEAD"
    MANAGER = "MANAGER"

    @classmethod
    def from_string(cls, level: str) -> "EngineerLevel":
        """Parse a level, tolerating surrounding whitespace and case."""
        if not isinstance(level, str) or not level.strip():
            raise InvalidEngineerLevelException("Invalid engineer level: Level cannot be empty")

        normalized = level.strip().upper()
        try:
            return cls(normalized)
        except ValueError:
            valid = ", ".join(member.value for member in cls)
            raise InvalidEngineerLevelException(
                f"Invalid engineer level: {level}. Valid levels: {valid}"
            ) from None


# Lower bound of each band is inclusive
EXCEEDS_THRESHOLD = Decimal("85")
MEETS_THRESHOLD = Decimal("50")


class BonusTier(str, Enum):
    EXCEEDS = "EXCEEDS"   # percentage >= 85
    MEETS = "MEETS"       # 50 <= percentage < 85
    BELOW = "BELOW"       # percentage < 50

    @classmethod
    def from_percentage(cls, percentage: Union[Decimal, float, int]) -> "BonusTier":
        pct = Decimal(str(percentage))
        if pct >= EXCEEDS_THRESHOLD:
            return cls.EXCEEDS
        if pct >= MEETS_THRESHOLD:
            return cls.MEETS
        return cls.BELOW

    def is_exceeds(self) -> bool:
        return self is BonusTier.EXCEEDS

    def is_meets(self) -> bool:
        return self is BonusTier.MEETS

    def is_below(self) -> bool:
        return self is BonusTier.BELOW


class AdjustmentStatus(str, Enum):
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


class CommentCategory(str, Enum):
    STRENGTHS = "strengths"
    GROWTH_AREAS = "growth_areas"
    GENERAL = "general"
