from schemas.application import (
    ApplicantSchema,
    ApplicationCreate,
    ApplicationSource,
    ApplicationStatus,
    LegacyApply,
    StatusUpdate,
)
from schemas.eligibility import (
    EligibilityResultSchema,
    FaqAnswer,
    FaqQuery,
    LegacyFilter,
    LegacySort,
    RejectionReason,
    Verdict,
)
from schemas.rules import EligibilityRulesSchema, RuleConfig, TierBoundarySchema

__all__ = [
    "ApplicantSchema",
    "ApplicationCreate",
    "ApplicationSource",
    "ApplicationStatus",
    "EligibilityResultSchema",
    "EligibilityRulesSchema",
    "FaqAnswer",
    "FaqQuery",
    "LegacyApply",
    "LegacyFilter",
    "LegacySort",
    "RejectionReason",
    "RuleConfig",
    "StatusUpdate",
    "TierBoundarySchema",
    "Verdict",
]
