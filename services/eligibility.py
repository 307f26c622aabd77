"""
Rule evaluator: validates an applicant profile against the eligibility rule table
and classifies the applicant into an enterprise-size tier.

Input validation runs first, in a fixed field order, and raises ProfileValidationError
for the first offending field. Business rules then run in order and the first failure
becomes the rejection reason. Pure function of (profile, rules); no I/O.
"""
from __future__ import annotations

from decimal import Decimal
from typing import Any

from schemas.eligibility import EligibilityResultSchema, RejectionReason
from schemas.rules import RuleConfig
from utils.case import dict_keys_to_snake
from utils.numbers import format_inr, optional_number


class ProfileValidationError(ValueError):
    """A profile field is missing or invalid. Recoverable by the user re-entering the field."""

    def __init__(self, field: str, message: str):
        super().__init__(message)
        self.field = field
        self.message = message


def validate_profile(profile: dict[str, Any]) -> tuple[Decimal, Decimal, Decimal]:
    """
    Check required fields in order: company name, turnover, amount, years trading.
    Returns (turnover, amount_requested, years_trading) on success.
    """
    if not str(profile.get("company_name") or "").strip():
        raise ProfileValidationError("companyName", "Company Name is required.")

    turnover = optional_number(profile.get("turnover"))
    if turnover is None or turnover <= 0:
        raise ProfileValidationError("turnover", "Turnover must be a positive number.")

    amount = optional_number(profile.get("amount_requested"))
    if amount is None or amount <= 0:
        raise ProfileValidationError("amountRequested", "Loan Amount must be a positive number.")

    years = optional_number(profile.get("years_trading"))
    if years is None:
        raise ProfileValidationError("yearsTrading", "Years Trading is required.")
    if years < 0:
        raise ProfileValidationError("yearsTrading", "Years Trading cannot be negative.")

    return turnover, amount, years


def classify_tier(turnover: Decimal | int, rules: RuleConfig) -> str:
    """Smallest tier whose upper bound (inclusive) covers the turnover."""
    for boundary in rules.tiers:
        if turnover <= boundary.max_turnover:
            return boundary.name
    return rules.default_tier


def evaluate(profile: dict[str, Any], rules: RuleConfig) -> EligibilityResultSchema:
    """
    Evaluate a profile (snake_case or camelCase keys) against the rule table.
    Raises ProfileValidationError for invalid input; returns a rejection result when a
    business rule fails, or an eligible result carrying the tier.
    """
    profile = dict_keys_to_snake(profile) if profile else {}
    turnover, amount, years = validate_profile(profile)
    limits = rules.eligibility
    sector = str(profile.get("sector") or "")

    if turnover < limits.min_turnover:
        return _reject(
            RejectionReason.BELOW_MINIMUM_TURNOVER,
            f"Turnover of {format_inr(turnover)} is below the minimum requirement of {format_inr(limits.min_turnover)}.",
        )
    if turnover > limits.max_turnover:
        return _reject(
            RejectionReason.EXCEEDS_LARGE_ENTERPRISE_THRESHOLD,
            f"Turnover exceeds {format_inr(limits.max_turnover)}. You are classified as a Large Enterprise.",
        )
    if years < limits.min_years_trading:
        return _reject(
            RejectionReason.INSUFFICIENT_VINTAGE,
            f"Business age ({years} years) is below the minimum requirement of {limits.min_years_trading} years.",
        )
    if amount > turnover:
        return _reject(RejectionReason.AMOUNT_EXCEEDS_TURNOVER, "Loan amount cannot exceed annual turnover.")
    if sector in limits.banned_sectors:
        return _reject(RejectionReason.RESTRICTED_SECTOR, f"The '{sector}' sector is restricted.")

    tier = classify_tier(turnover, rules)
    return EligibilityResultSchema(eligible=True, tier=tier, message=f"Eligible as {tier}.")


def _reject(reason: RejectionReason, message: str) -> EligibilityResultSchema:
    return EligibilityResultSchema(eligible=False, reason=reason, message=message)
