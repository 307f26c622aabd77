"""
Help bot knowledge base. The first entry with a keyword contained in the
lower-cased question answers it; entries are ordered from general to specific topics.
"""
from schemas.eligibility import FaqAnswer

MENU_OPTIONS = ["Eligibility Rules", "Required Documents", "Track Application", "Contact Support"]

GREETING = FaqAnswer(
    text="Hi! I'm SpotBot. I can guide you through the SpotCheck process. What would you like to know?",
    options=MENU_OPTIONS,
)

FALLBACK = FaqAnswer(
    text="I didn't quite get that. Could you try selecting an option from the menu?",
    options=["Back to Menu", "Contact Support"],
    matched=False,
)

KNOWLEDGE_BASE: list[dict] = [
    {
        "keywords": ["hello", "hi", "hey", "start", "menu", "help"],
        "answer": GREETING.text,
        "options": MENU_OPTIONS,
    },
    {
        "keywords": ["eligibility", "eligible", "rules", "criteria", "requirement"],
        "answer": "To qualify for a SpotCheck loan, your business usually needs:",
        "options": ["Turnover Limits", "Trading Years", "Restricted Sectors", "Back to Menu"],
    },
    {
        "keywords": ["turnover", "revenue", "sales", "limit"],
        "answer": "Minimum Turnover Requirement: Rs. 42,00,000 (42 Lakhs) per annum. Loans cannot exceed your annual turnover.",
        "options": ["Check Trading Years", "Back to Menu"],
    },
    {
        "keywords": ["years", "age", "old", "trading"],
        "answer": "Vintage Requirement: Your business must be active and registered for at least 2 years.",
        "options": ["Check Turnover", "Back to Menu"],
    },
    {
        "keywords": ["sector", "industry", "restricted", "gambling"],
        "answer": "We do NOT fund: Gambling, Adult Entertainment, or Speculative Trading.\nWe support: Retail, Tech, Manufacturing, and Services.",
        "options": ["Back to Menu"],
    },
    {
        "keywords": ["document", "doc", "file", "upload", "kyc", "proof"],
        "answer": "We categorize documents into 3 sections. Which one are you asking about?",
        "options": ["KYC Documents", "Income Proofs", "Business Proofs", "File Formats"],
    },
    {
        "keywords": ["kyc documents", "identity", "pan", "aadhar"],
        "answer": "KYC Requirements:\n1. Business PAN\n2. Owner's PAN\n3. Owner's Aadhar\n4. Office Address Proof",
        "options": ["Check Income Proofs", "Back to Documents"],
    },
    {
        "keywords": ["income proof", "tax", "profit", "balance", "sheet"],
        "answer": "Income Requirements:\n1. P&L Statement (3 Yrs)\n2. Balance Sheet (3 Yrs)\n3. ITR Acknowledgement (3 Yrs)\n4. Bank Statement (6-12 Months)",
        "options": ["Check Business Proofs", "Back to Documents"],
    },
    {
        "keywords": ["business proof", "cin", "registration", "director"],
        "answer": "Business Requirements:\n1. Registration Certificate (Required)\n2. CIN (Optional)\n3. List of Directors (Optional)",
        "options": ["Back to Documents"],
    },
    {
        "keywords": ["format", "size", "pdf", "jpg"],
        "answer": "File Rules:\n- Formats: PDF, JPEG, PNG\n- Max Size: 5MB per file\n- Must be clear and readable.",
        "options": ["Back to Menu"],
    },
    {
        "keywords": ["track", "status", "progress", "application"],
        "answer": "You can track your status on the Dashboard.\n\nUnder Review: Our team is checking details.\nApproved: Funds are being processed.\nRejected: Criteria not met.",
        "options": ["How to Revoke?", "Back to Menu"],
    },
    {
        "keywords": ["revoke", "cancel", "withdraw"],
        "answer": "You can revoke an 'Under Review' application using the 'Revoke' button in your dashboard table.",
        "options": ["Back to Menu"],
    },
    {
        "keywords": ["contact", "human", "email", "phone", "support"],
        "answer": "Support Team:\nEmail: help@spotcheck.bank\nPhone: 1800-SPOT-CHK\nHours: Mon-Fri, 9AM - 6PM",
        "options": ["Back to Menu"],
    },
]


def answer(question: str) -> FaqAnswer:
    text = question.lower()
    for entry in KNOWLEDGE_BASE:
        if any(keyword in text for keyword in entry["keywords"]):
            return FaqAnswer(text=entry["answer"], options=list(entry["options"]))
    return FALLBACK.model_copy(deep=True)
