import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from config import get_rules, settings
from database import AsyncSessionLocal, init_db
from api.applications import router as applications_router
from api.documents import router as documents_router
from api.eligibility import router as eligibility_router
from api.faq import router as faq_router
from api.opportunities import router as opportunities_router
from services.seed import seed_legacy_opportunities

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    rules = get_rules()
    logger.info(
        "Loaded rule table: turnover %d-%d, min %d years, %d banned sectors",
        rules.eligibility.min_turnover,
        rules.eligibility.max_turnover,
        rules.eligibility.min_years_trading,
        len(rules.eligibility.banned_sectors),
    )
    await init_db()
    async with AsyncSessionLocal() as session:
        await seed_legacy_opportunities(session)
        await session.commit()
    yield


app = FastAPI(
    title=settings.app_name,
    description="SME loan applications, eligibility checks and legacy opportunity matching",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins.split(","),
    allow_credentials=True,
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)


@app.exception_handler(SQLAlchemyError)
async def store_error_handler(request: Request, exc: SQLAlchemyError):
    """Store failures surface as a generic 503; retrying is up to the caller."""
    logger.exception("Application store error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=503, content={"detail": "Application store unavailable"})


app.include_router(eligibility_router)
app.include_router(documents_router)
app.include_router(applications_router)
app.include_router(opportunities_router)
app.include_router(faq_router)


@app.get("/health")
async def health():
    return {"status": "ok"}
