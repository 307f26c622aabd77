from fastapi import APIRouter

from schemas.eligibility import FaqAnswer, FaqQuery
from services.faq import GREETING, answer

router = APIRouter(prefix="/api/faq", tags=["faq"])


@router.get("", response_model=FaqAnswer)
async def faq_menu():
    return GREETING


@router.post("", response_model=FaqAnswer)
async def ask(body: FaqQuery):
    return answer(body.text)
