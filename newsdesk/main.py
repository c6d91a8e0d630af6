# newsdesk/main.py
from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from newsdesk.config import settings
from newsdesk.core.cache import TTLCache
from newsdesk.core.exceptions import NewsError, DatabaseError
from newsdesk.core.singleflight import SingleFlight
from newsdesk.db.session import create_db_and_tables, dispose_engine
from newsdesk.api.news.router import router as news_router
from newsdesk.api.search.router import router as search_router
from newsdesk.api.health.router import router as health_router  # /api/health
from newsdesk.ai.router import router as ai_router

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------
# Lifespan: create schema on boot, process-wide services, dispose engine on exit
# ---------------------------------------------------------------------
@asynccontextmanager
async def lifespan(app: FastAPI):
    if not settings.SKIP_DB_INIT:
        logger.info("Creating database and tables...")
        await create_db_and_tables()
        logger.info("Database tables created successfully")
    else:
        logger.info("SKIP_DB_INIT=1, skipping database initialization")

    app.state.cache = TTLCache()
    app.state.flights = SingleFlight()

    yield

    logger.info("Disposing database engine...")
    await dispose_engine()
    logger.info("Database engine disposed")


# ---------------------------------------------------------------------
# FastAPI app
# ---------------------------------------------------------------------
app = FastAPI(
    title="Newsdesk API",
    description="News aggregation with heuristic text analysis (FastAPI + SQLModel)",
    version="1.0.0",
    lifespan=lifespan,
)

# ---------------------------------------------------------------------
# CORS
#   - FRONTEND_URL and CORS_ORIGINS (comma separated) in deployment
#   - local dev servers always allowed
# ---------------------------------------------------------------------
allow_origins = {
    "http://localhost:4200",
    "http://127.0.0.1:4200",
    "http://localhost:3000",
}
if settings.FRONTEND_URL:
    allow_origins.add(settings.FRONTEND_URL)
allow_origins.update(o.strip() for o in settings.CORS_ORIGINS.split(",") if o.strip())

app.add_middleware(
    CORSMiddleware,
    allow_origins=list(allow_origins),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ---------------------------------------------------------------------
# Error envelopes: {"ok": false, "error": ...}
# ---------------------------------------------------------------------
@app.exception_handler(NewsError)
async def news_error_handler(request: Request, exc: NewsError):
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"ok": False, "error": exc.message})


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    first = errors[0] if errors else {}
    field = ".".join(str(p) for p in first.get("loc", ()) if p != "body")
    message = first.get("msg", "Invalid request")
    return JSONResponse(
        status_code=400,
        content={"ok": False, "error": f"{field}: {message}" if field else message},
    )


@app.exception_handler(SQLAlchemyError)
async def database_error_handler(request: Request, exc: SQLAlchemyError):
    logger.exception("Database error on %s %s", request.method, request.url.path)
    err = DatabaseError("Database error")
    return JSONResponse(status_code=err.status_code, content={"ok": False, "error": err.message})


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"ok": False, "error": "Internal server error"})


# ---------------------------------------------------------------------
# Routers
# ---------------------------------------------------------------------
app.include_router(news_router, prefix="/api")
app.include_router(search_router, prefix="/api")
app.include_router(ai_router, prefix="/api")
app.include_router(health_router, prefix="/api/health", tags=["health"])


@app.get("/")
async def root():
    return {
        "message": "Newsdesk API",
        "version": "1.0.0",
        "docs": "/docs",
        "redoc": "/redoc",
    }
