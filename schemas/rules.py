"""
Eligibility rule table.
Loaded once from rules.json at startup and treated as immutable for the process lifetime.
"""
from pydantic import BaseModel, Field, field_validator


class EligibilityRulesSchema(BaseModel):
    """Turnover bounds, minimum vintage and sector denylist."""
    min_turnover: int = Field(4_200_000, ge=0, description="Minimum annual turnover")
    max_turnover: int = Field(5_000_000_000, ge=0, description="Above this the applicant is a large enterprise")
    min_years_trading: int = Field(2, ge=0, description="Minimum years trading")
    banned_sectors: frozenset[str] = Field(
        frozenset({"Gambling", "Adult Entertainment", "Speculative Trading"}),
        description="Sectors that are never funded",
    )

    model_config = {"frozen": True}


class TierBoundarySchema(BaseModel):
    """Upper turnover bound (inclusive) of an enterprise-size tier."""
    name: str
    max_turnover: int = Field(..., ge=0)

    model_config = {"frozen": True}


class RuleConfig(BaseModel):
    eligibility: EligibilityRulesSchema = Field(default_factory=EligibilityRulesSchema)
    tiers: tuple[TierBoundarySchema, ...] = (
        TierBoundarySchema(name="Micro Enterprise", max_turnover=100_000_000),
        TierBoundarySchema(name="Small Enterprise", max_turnover=1_000_000_000),
    )
    default_tier: str = "Medium Enterprise"

    model_config = {"frozen": True}

    @field_validator("tiers")
    @classmethod
    def _ascending(cls, tiers: tuple[TierBoundarySchema, ...]) -> tuple[TierBoundarySchema, ...]:
        return tuple(sorted(tiers, key=lambda t: t.max_turnover))

    def to_response(self) -> dict:
        return {
            "minTurnover": self.eligibility.min_turnover,
            "maxTurnover": self.eligibility.max_turnover,
            "minYearsTrading": self.eligibility.min_years_trading,
            "bannedSectors": sorted(self.eligibility.banned_sectors),
            "tiers": [{"name": t.name, "maxTurnover": t.max_turnover} for t in self.tiers],
            "defaultTier": self.default_tier,
        }
