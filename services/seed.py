"""
Legacy opportunity seed, imported from the historical SME CSV.
Inserted once, into an empty table, when the API starts.
"""
import logging
from datetime import date

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from models import LegacyOpportunity

logger = logging.getLogger(__name__)

LEGACY_RECORDED_ON = date(2023, 1, 1)

# (ref id, sector, amount, income proof, KYC, business proof)
LEGACY_CSV_ROWS = [
    ("SMEServ1", "Services", 1_000_000, "Yes", "Yes", "Yes"),
    ("SMETrad2", "Trading", 4_500_000, "No", "No", "No"),
    ("SMETrad3", "Trading", 3_100_000, "No", "Yes", "No"),
    ("SMEServ4", "Services", 100_000, "Yes", "Yes", "No"),
    ("SMEServ5", "Services", 1_800_000, "Yes", "Yes", "Yes"),
    ("SMEServ6", "Services", 1_000_000, "No", "Yes", "No"),
    ("SMEServ7", "Services", 2_400_000, "No", "Yes", "Yes"),
    ("SMEServ8", "Services", 400_000, "Yes", "No", "Yes"),
    ("SMEServ9", "Services", 4_600_000, "Yes", "Yes", "Yes"),
    ("SMEManu10", "Manufacturing", 3_700_000, "Yes", "No", "Yes"),
    ("SMEManu11", "Manufacturing", 2_100_000, "Yes", "No", "Yes"),
    ("SMETrad12", "Trading", 900_000, "No", "Yes", "Yes"),
    ("SMETrad13", "Trading", 2_300_000, "Yes", "Yes", "No"),
    ("SMEServ14", "Services", 4_400_000, "Yes", "Yes", "Yes"),
    ("SMEServ15", "Services", 4_500_000, "Yes", "Yes", "No"),
    ("SMETrad16", "Trading", 1_300_000, "No", "Yes", "Yes"),
    ("SMETrad17", "Trading", 600_000, "No", "Yes", "Yes"),
    ("SMEManu18", "Manufacturing", 5_000_000, "Yes", "Yes", "Yes"),
    ("SMEServ19", "Services", 1_300_000, "No", "No", "Yes"),
    ("SMEManu20", "Manufacturing", 300_000, "Yes", "Yes", "No"),
]


def _doc_categories(income: str, kyc: str, business: str) -> list[str]:
    flags = (("Income Proof", income), ("KYC Documents", kyc), ("Business Proof", business))
    return [category for category, flag in flags if flag == "Yes"]


async def seed_legacy_opportunities(session: AsyncSession) -> int:
    """Insert the legacy rows if the table is empty. Returns the number inserted."""
    existing = await session.scalar(select(func.count()).select_from(LegacyOpportunity))
    if existing:
        logger.debug("Legacy opportunities already present (%d), skipping seed", existing)
        return 0
    for ref_id, sector, amount, income, kyc, business in LEGACY_CSV_ROWS:
        session.add(
            LegacyOpportunity(
                ref_id=ref_id,
                company_name=f"Legacy Applicant {ref_id}",
                sector=sector,
                amount_requested=amount,
                required_doc_categories=_doc_categories(income, kyc, business),
                loan_type="General SME",
                recorded_on=LEGACY_RECORDED_ON,
            )
        )
    await session.flush()
    logger.info("Seeded %d legacy opportunities", len(LEGACY_CSV_ROWS))
    return len(LEGACY_CSV_ROWS)
