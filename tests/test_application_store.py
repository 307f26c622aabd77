"""Application store against its own in-memory database: ref-id races and number coercion."""
import unittest
from unittest.mock import AsyncMock, patch

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from database import Base
from models import LoanApplication
from services.applications import REF_ID_ATTEMPTS, submit_application

PROFILE = {
    "company_name": "Race Co",
    "turnover": 4_200_000,
    "years_trading": 3,
    "sector": "Retail",
    "entity_type": "Sole Trader",
}


class TestSubmitApplication(unittest.IsolatedAsyncioTestCase):
    async def asyncSetUp(self):
        self.engine = create_async_engine(
            "sqlite+aiosqlite://", poolclass=StaticPool, connect_args={"check_same_thread": False}
        )
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        self.session_factory = async_sessionmaker(self.engine, expire_on_commit=False)

    async def asyncTearDown(self):
        await self.engine.dispose()

    async def _submit(self, session, profile=PROFILE, amount=1_000_000):
        return await submit_application(session, profile, amount, "Working Capital", ["inc_pnl", "biz_reg"])

    @patch("services.applications.generate_ref_id", new_callable=AsyncMock)
    async def test_ref_id_claimed_before_insert_is_replaced(self, mock_ref_id):
        """Second submission draws an id that is already stored; it gets a fresh one."""
        mock_ref_id.side_effect = ["APP-1234", "APP-1234", "APP-5678"]
        async with self.session_factory() as session:
            first = await self._submit(session)
            second = await self._submit(session)
            await session.commit()

            self.assertEqual(first.ref_id, "APP-1234")
            self.assertEqual(second.ref_id, "APP-5678")
            self.assertEqual(second.status, "Under Review")
            count = await session.scalar(select(func.count()).select_from(LoanApplication))
            self.assertEqual(count, 2)

    @patch("services.applications.generate_ref_id", new_callable=AsyncMock)
    async def test_gives_up_after_repeated_collisions(self, mock_ref_id):
        mock_ref_id.side_effect = ["APP-1234"] * (REF_ID_ATTEMPTS + 1)
        async with self.session_factory() as session:
            await self._submit(session)
            with self.assertRaises(IntegrityError):
                await self._submit(session)

    async def test_form_numbers_stored_as_whole_rupees(self):
        profile = {**PROFILE, "turnover": "42,00,000", "years_trading": 2.5}
        async with self.session_factory() as session:
            app = await self._submit(session, profile, amount=1_000_000.75)
            await session.commit()
        self.assertEqual(app.turnover, 4_200_000)
        self.assertEqual(app.years_trading, 2)
        self.assertEqual(app.amount_requested, 1_000_000)
        self.assertEqual(app.documents, ["biz_reg", "inc_pnl"])


if __name__ == "__main__":
    unittest.main()
