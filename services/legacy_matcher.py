"""
Cross-matches legacy opportunities against an applicant's latest verified profile.
A legacy record is Eligible when the applicant's turnover covers the amount it asked for.
Records and profiles may use snake_case or camelCase keys.
"""
from __future__ import annotations

from typing import Any, Iterable

from schemas.eligibility import LegacyFilter, LegacySort, Verdict
from utils.case import dict_keys_to_snake
from utils.numbers import coerce_int

_FILTER_VERDICT = {
    LegacyFilter.ELIGIBLE_ONLY: Verdict.ELIGIBLE,
    LegacyFilter.INELIGIBLE_ONLY: Verdict.INELIGIBLE,
}

_SORT_VERDICT = {
    LegacySort.ELIGIBLE_FIRST: Verdict.ELIGIBLE,
    LegacySort.INELIGIBLE_FIRST: Verdict.INELIGIBLE,
}


def match_eligibility(profile: dict[str, Any] | None, opportunity: dict[str, Any]) -> Verdict:
    """NotApplicable until the applicant has a submitted profile; otherwise compare turnover to amount."""
    if profile is None:
        return Verdict.NOT_APPLICABLE
    turnover = coerce_int(_get(profile, "turnover"))
    amount = coerce_int(_get(opportunity, "amount_requested"))
    return Verdict.ELIGIBLE if turnover >= amount else Verdict.INELIGIBLE


def filter_and_sort(
    records: Iterable[dict[str, Any]],
    profile: dict[str, Any] | None,
    filter: LegacyFilter = LegacyFilter.ALL,
    sort: LegacySort = LegacySort.NONE,
) -> list[dict[str, Any]]:
    """
    Restrict records by verdict, then stable-partition them so records with the
    preferred verdict come first. Relative order inside each group is kept.
    """
    scored = [(record, match_eligibility(profile, record)) for record in records]

    wanted = _FILTER_VERDICT.get(LegacyFilter(filter))
    if wanted is not None:
        scored = [(record, verdict) for record, verdict in scored if verdict == wanted]

    first = _SORT_VERDICT.get(LegacySort(sort))
    if first is not None:
        # sorted() is stable, so a two-valued key is a partition
        scored = sorted(scored, key=lambda pair: 0 if pair[1] == first else 1)

    return [record for record, _ in scored]


def annotate(
    records: Iterable[dict[str, Any]],
    profile: dict[str, Any] | None,
) -> list[dict[str, Any]]:
    """Copy each record with its verdict attached under "eligibility"."""
    return [{**record, "eligibility": match_eligibility(profile, record).value} for record in records]


def _get(record: dict[str, Any], key: str) -> Any:
    if key in record:
        return record[key]
    return dict_keys_to_snake(record).get(key)
