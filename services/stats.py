"""Aggregates for the staff dashboard."""
from __future__ import annotations

from collections import Counter
from typing import Iterable

from models import LoanApplication
from schemas.application import ApplicationStatus


def portfolio_stats(apps: Iterable[LoanApplication]) -> dict:
    apps = list(apps)
    status_counts = Counter(a.status for a in apps)
    sector_counts = Counter(a.sector or "Unknown" for a in apps)
    return {
        "total": len(apps),
        "pending": status_counts.get(ApplicationStatus.UNDER_REVIEW.value, 0),
        "value": sum(a.amount_requested or 0 for a in apps),
        # Zero counts are left out, matching what the charts draw
        "byStatus": [
            {"name": s.value, "value": status_counts[s.value]}
            for s in ApplicationStatus
            if status_counts.get(s.value)
        ],
        "bySector": [{"name": name, "value": count} for name, count in sector_counts.most_common()],
    }
