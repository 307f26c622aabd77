"""
Shared fixtures for API tests.

The app and its engine are module singletons configured from the environment,
so the in-memory database URL is set before anything imports ``main``. One
TestClient (and one event loop) serves the whole session.
"""
import os

os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ.setdefault("LOG_LEVEL", "WARNING")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

REQUIRED_DOC_IDS = [
    "kyc_biz_pan",
    "kyc_own_pan",
    "kyc_own_aadhar",
    "kyc_office_proof",
    "inc_pnl",
    "inc_balance",
    "inc_itr",
    "inc_bank",
    "biz_reg",
]


@pytest.fixture(scope="session")
def client():
    from main import app

    with TestClient(app) as c:
        yield c


@pytest.fixture
def upload_doc(client):
    """Upload one small PDF into a batch; returns the response."""

    def _upload(batch_id: str, doc_id: str, name: str | None = None, content: bytes = b"%PDF-1.4 test"):
        files = {"file": (name or f"{doc_id}.pdf", content, "application/pdf")}
        return client.post(f"/api/documents/batches/{batch_id}/{doc_id}", files=files)

    return _upload


@pytest.fixture
def verified_batch(client, upload_doc):
    """Factory: open a batch and take every required document through to Verified."""

    def _make(doc_ids=REQUIRED_DOC_IDS) -> str:
        batch_id = client.post("/api/documents/batches").json()["batchId"]
        for doc_id in doc_ids:
            assert upload_doc(batch_id, doc_id).status_code == 201
            for _ in range(3):
                assert client.post(f"/api/documents/batches/{batch_id}/{doc_id}/verify").status_code == 200
        return batch_id

    return _make


@pytest.fixture
def submit(client, verified_batch):
    """Factory: submit a Web application with a fully verified batch."""

    def _submit(**overrides):
        applicant = {
            "companyName": "Acme Retail",
            "turnover": 4_200_000,
            "amountRequested": 1_000_000,
            "yearsTrading": 3,
            "sector": "Retail",
            "entityType": "Sole Trader",
        }
        applicant.update(overrides)
        return client.post(
            "/api/applications",
            json={"applicant": applicant, "loanType": "Working Capital", "batchId": verified_batch()},
        )

    return _submit
