"""
Tests for the rule evaluator: input validation order, business rule order, tier classification.
Run from project root: python -m pytest tests/test_eligibility.py -v
"""
import unittest

from schemas.eligibility import RejectionReason
from schemas.rules import EligibilityRulesSchema, RuleConfig, TierBoundarySchema
from services.eligibility import ProfileValidationError, classify_tier, evaluate

RULES = RuleConfig()


def _profile(**overrides):
    profile = {
        "company_name": "Acme Retail",
        "turnover": 4_200_000,
        "amount_requested": 1_000_000,
        "years_trading": 3,
        "sector": "Retail",
        "entity_type": "Sole Trader",
    }
    profile.update(overrides)
    return profile


class TestValidation(unittest.TestCase):
    def assertInvalid(self, profile, field):
        with self.assertRaises(ProfileValidationError) as ctx:
            evaluate(profile, RULES)
        self.assertEqual(ctx.exception.field, field)
        return ctx.exception

    def test_company_name_required(self):
        err = self.assertInvalid(_profile(company_name="   "), "companyName")
        self.assertIn("Company Name", err.message)

    def test_turnover_must_be_positive(self):
        self.assertInvalid(_profile(turnover=0), "turnover")
        self.assertInvalid(_profile(turnover=None), "turnover")
        self.assertInvalid(_profile(turnover="lots"), "turnover")

    def test_amount_must_be_positive(self):
        self.assertInvalid(_profile(amount_requested=-5), "amountRequested")

    def test_years_must_not_be_negative(self):
        self.assertInvalid(_profile(years_trading=-1), "yearsTrading")
        self.assertInvalid(_profile(years_trading=None), "yearsTrading")

    def test_first_invalid_field_reported(self):
        """Several fields invalid -> company name comes first, then turnover."""
        self.assertInvalid(_profile(company_name="", turnover=0, amount_requested=0), "companyName")
        self.assertInvalid(_profile(turnover=0, amount_requested=0, years_trading=-1), "turnover")

    def test_zero_years_is_valid_input(self):
        """Zero years passes validation and is then rejected by the vintage rule."""
        result = evaluate(_profile(years_trading=0), RULES)
        self.assertEqual(result.reason, RejectionReason.INSUFFICIENT_VINTAGE)

    def test_camel_case_profile_accepted(self):
        result = evaluate(
            {"companyName": "Acme", "turnover": 4_200_000, "amountRequested": 10, "yearsTrading": 2, "sector": "Tech"},
            RULES,
        )
        self.assertTrue(result.eligible)


class TestBusinessRules(unittest.TestCase):
    def test_micro_enterprise_scenario(self):
        result = evaluate(_profile(), RULES)
        self.assertTrue(result.eligible)
        self.assertEqual(result.tier, "Micro Enterprise")
        self.assertIsNone(result.reason)

    def test_below_minimum_turnover_never_has_tier(self):
        for turnover in (1, 100_000, 4_199_999):
            result = evaluate(_profile(turnover=turnover, amount_requested=1), RULES)
            self.assertFalse(result.eligible)
            self.assertEqual(result.reason, RejectionReason.BELOW_MINIMUM_TURNOVER)
            self.assertIsNone(result.tier)

    def test_exceeds_large_enterprise_threshold(self):
        result = evaluate(_profile(turnover=5_000_000_001), RULES)
        self.assertEqual(result.reason, RejectionReason.EXCEEDS_LARGE_ENTERPRISE_THRESHOLD)
        self.assertIn("Large Enterprise", result.message)

    def test_insufficient_vintage(self):
        result = evaluate(_profile(years_trading=1), RULES)
        self.assertEqual(result.reason, RejectionReason.INSUFFICIENT_VINTAGE)

    def test_amount_exceeds_turnover(self):
        result = evaluate(_profile(amount_requested=5_000_000), RULES)
        self.assertEqual(result.reason, RejectionReason.AMOUNT_EXCEEDS_TURNOVER)
        self.assertEqual(result.message, "Loan amount cannot exceed annual turnover.")

    def test_amount_equal_to_turnover_allowed(self):
        self.assertTrue(evaluate(_profile(amount_requested=4_200_000), RULES).eligible)

    def test_amount_exceeds_turnover_wins_over_sector(self):
        """Rule order: amount check comes before the sector denylist."""
        result = evaluate(_profile(amount_requested=5_000_000, sector="Gambling"), RULES)
        self.assertEqual(result.reason, RejectionReason.AMOUNT_EXCEEDS_TURNOVER)

    def test_restricted_sector(self):
        result = evaluate(_profile(sector="Gambling"), RULES)
        self.assertEqual(result.reason, RejectionReason.RESTRICTED_SECTOR)
        self.assertIn("Gambling", result.message)

    def test_turnover_rule_wins_over_vintage(self):
        result = evaluate(_profile(turnover=1_000, amount_requested=1, years_trading=0), RULES)
        self.assertEqual(result.reason, RejectionReason.BELOW_MINIMUM_TURNOVER)

    def test_custom_rule_table(self):
        rules = RuleConfig(
            eligibility=EligibilityRulesSchema(
                min_turnover=10, max_turnover=1_000, min_years_trading=0, banned_sectors=frozenset({"Retail"})
            ),
            tiers=(TierBoundarySchema(name="Tiny", max_turnover=100),),
            default_tier="Bigger",
        )
        self.assertEqual(evaluate(_profile(turnover=50, amount_requested=5, sector="Tech"), rules).tier, "Tiny")
        self.assertEqual(evaluate(_profile(turnover=500, amount_requested=5, sector="Tech"), rules).tier, "Bigger")
        self.assertEqual(
            evaluate(_profile(turnover=500, amount_requested=5), rules).reason, RejectionReason.RESTRICTED_SECTOR
        )


class TestTiers(unittest.TestCase):
    def test_boundaries_inclusive(self):
        self.assertEqual(classify_tier(100_000_000, RULES), "Micro Enterprise")
        self.assertEqual(classify_tier(100_000_001, RULES), "Small Enterprise")
        self.assertEqual(classify_tier(1_000_000_000, RULES), "Small Enterprise")
        self.assertEqual(classify_tier(1_000_000_001, RULES), "Medium Enterprise")

    def test_unsorted_boundaries_are_ordered(self):
        rules = RuleConfig(
            tiers=(
                TierBoundarySchema(name="Small Enterprise", max_turnover=1_000_000_000),
                TierBoundarySchema(name="Micro Enterprise", max_turnover=100_000_000),
            )
        )
        self.assertEqual(classify_tier(5_000_000, rules), "Micro Enterprise")


if __name__ == "__main__":
    unittest.main()
