from sqlalchemy import JSON, BigInteger, Column, Date, Integer, String

from database import Base


class LegacyOpportunity(Base):
    """Historical loan record, seeded once and read-only afterwards."""
    __tablename__ = "legacy_opportunities"

    id = Column(Integer, primary_key=True, autoincrement=True)
    ref_id = Column(String(32), unique=True, nullable=False, index=True)
    company_name = Column(String(256), nullable=False)
    sector = Column(String(128), nullable=False, index=True)
    amount_requested = Column(BigInteger, nullable=False)
    # Document categories on file for the historical record (e.g. "Income Proof")
    required_doc_categories = Column(JSON, nullable=False, default=list)
    loan_type = Column(String(256), nullable=False, default="General SME")
    recorded_on = Column(Date, nullable=True)
