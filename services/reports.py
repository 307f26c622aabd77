"""Rejection report export: a one-page PDF stating why an eligibility check failed."""
from datetime import date
from io import BytesIO

from reportlab.lib.pagesizes import A4
from reportlab.pdfgen import canvas

from schemas.eligibility import EligibilityResultSchema


def rejection_report_pdf(company_name: str, result: EligibilityResultSchema, on: date | None = None) -> bytes:
    buffer = BytesIO()
    c = canvas.Canvas(buffer, pagesize=A4)
    width, height = A4
    c.setTitle("Rejection Report")

    c.setFont("Helvetica-Bold", 14)
    c.drawCentredString(width / 2, height - 60, "SpotCheck SME Lending")
    c.setFont("Helvetica", 11)
    c.drawCentredString(width / 2, height - 80, "Eligibility Rejection Report")
    c.line(50, height - 90, width - 50, height - 90)

    y = height - 130
    c.setFont("Helvetica", 10)
    c.drawString(50, y, f"Date: {(on or date.today()).strftime('%d %B %Y')}")
    y -= 20
    c.drawString(50, y, f"Rejection Report for {company_name}")
    y -= 30
    c.setFont("Helvetica-Bold", 10)
    c.drawString(50, y, "Reason code:")
    c.setFont("Helvetica", 10)
    c.drawString(150, y, result.reason.value if result.reason else "N/A")
    y -= 20
    c.setFont("Helvetica-Bold", 10)
    c.drawString(50, y, "Reason:")
    c.setFont("Helvetica", 10)
    # Rupee sign is outside the built-in Helvetica encoding
    c.drawString(150, y, result.message.replace("₹", "Rs. "))
    y -= 40
    c.setFont("Helvetica-Oblique", 9)
    c.drawString(50, y, "You may correct the details and check eligibility again.")

    c.showPage()
    c.save()
    return buffer.getvalue()
