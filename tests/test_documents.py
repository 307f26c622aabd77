"""Tests for the document gate: completion predicate, stage machine and upload checks."""
import unittest

from services.documents import (
    REQUIRED_DOC_IDS,
    DocumentRejected,
    DocumentStatus,
    InvalidDocumentTransition,
    check_upload,
    is_complete,
    next_status,
)


def _all_verified():
    return {doc_id: {"status": "Verified"} for doc_id in REQUIRED_DOC_IDS}


class TestCompletion(unittest.TestCase):
    def test_required_catalog(self):
        self.assertEqual(len(REQUIRED_DOC_IDS), 9)
        self.assertNotIn("biz_cin", REQUIRED_DOC_IDS)
        self.assertNotIn("biz_directors", REQUIRED_DOC_IDS)

    def test_all_verified_is_complete(self):
        self.assertTrue(is_complete(REQUIRED_DOC_IDS, _all_verified()))

    def test_missing_document_is_incomplete(self):
        uploaded = _all_verified()
        del uploaded["inc_bank"]
        self.assertFalse(is_complete(REQUIRED_DOC_IDS, uploaded))

    def test_document_still_analyzing_is_incomplete(self):
        uploaded = _all_verified()
        uploaded["kyc_biz_pan"] = {"status": "Analyzing"}
        self.assertFalse(is_complete(REQUIRED_DOC_IDS, uploaded))

    def test_optional_documents_not_needed(self):
        uploaded = _all_verified()
        uploaded["biz_cin"] = {"status": "Scanning"}
        self.assertTrue(is_complete(REQUIRED_DOC_IDS, uploaded))

    def test_nothing_required(self):
        self.assertTrue(is_complete([], {}))


class TestStages(unittest.TestCase):
    def test_pipeline_order(self):
        status = DocumentStatus.PENDING
        seen = [status]
        while status != DocumentStatus.VERIFIED:
            status = next_status(status)
            seen.append(status)
        self.assertEqual([s.value for s in seen], ["Pending", "Scanning", "Analyzing", "Verified"])

    def test_verified_is_terminal(self):
        with self.assertRaises(InvalidDocumentTransition):
            next_status("Verified")


class TestUploadChecks(unittest.TestCase):
    def test_accepts_pdf_and_images(self):
        for name in ("a.pdf", "b.JPG", "c.jpeg", "d.png"):
            check_upload("inc_pnl", name, 1024)

    def test_rejects_unknown_doc(self):
        with self.assertRaises(DocumentRejected):
            check_upload("passport", "a.pdf", 1024)

    def test_rejects_other_formats(self):
        with self.assertRaises(DocumentRejected):
            check_upload("inc_pnl", "sheet.xlsx", 1024)

    def test_rejects_empty_and_oversized(self):
        with self.assertRaises(DocumentRejected):
            check_upload("inc_pnl", "a.pdf", 0)
        with self.assertRaises(DocumentRejected):
            check_upload("inc_pnl", "a.pdf", 5 * 1024 * 1024 + 1)


if __name__ == "__main__":
    unittest.main()
