from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class RejectionReason(str, Enum):
    BELOW_MINIMUM_TURNOVER = "BelowMinimumTurnover"
    EXCEEDS_LARGE_ENTERPRISE_THRESHOLD = "ExceedsLargeEnterpriseThreshold"
    INSUFFICIENT_VINTAGE = "InsufficientVintage"
    AMOUNT_EXCEEDS_TURNOVER = "AmountExceedsTurnover"
    RESTRICTED_SECTOR = "RestrictedSector"


class Verdict(str, Enum):
    ELIGIBLE = "Eligible"
    INELIGIBLE = "Ineligible"
    NOT_APPLICABLE = "NotApplicable"


class LegacyFilter(str, Enum):
    ALL = "All"
    ELIGIBLE_ONLY = "EligibleOnly"
    INELIGIBLE_ONLY = "IneligibleOnly"


class LegacySort(str, Enum):
    NONE = "None"
    ELIGIBLE_FIRST = "EligibleFirst"
    INELIGIBLE_FIRST = "IneligibleFirst"


class EligibilityResultSchema(BaseModel):
    """Outcome of the rule evaluator: a tier on success, a rejection reason otherwise."""
    eligible: bool
    tier: Optional[str] = None
    reason: Optional[RejectionReason] = None
    message: str = ""


class FaqQuery(BaseModel):
    text: str = Field(..., min_length=1)


class FaqAnswer(BaseModel):
    text: str
    options: list[str] = Field(default_factory=list)
    matched: bool = True
