import asyncio
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from salonbook.api.v1.router import api_router
from salonbook.core.config import settings
from salonbook.core.database import Database
from salonbook.core.errors import RequestTimeoutError, register_exception_handlers
from salonbook.core.logging_config import configure_logging
from salonbook.core.seed import seed_reference_data

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events."""
    configure_logging(settings.LOG_LEVEL)
    database = Database(
        settings.DATABASE_URL,
        echo=settings.DB_ECHO,
        pool_size=settings.DB_POOL_SIZE,
        max_overflow=settings.DB_MAX_OVERFLOW,
    )
    app.state.database = database
    if settings.DATABASE_URL.startswith("sqlite"):
        # Local dev without migrations
        await database.create_all()
    if settings.SEED_DEFAULT_SERVICES:
        await seed_reference_data(database)
    logger.info("SalonBook API started (env=%s, tz=%s)", settings.APP_ENV, settings.SHOP_TIMEZONE)
    yield
    await database.dispose()


app = FastAPI(
    title="SalonBook API",
    description="Nail salon appointment booking and revenue reporting",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def request_timeout(request: Request, call_next):
    """Fail a request that runs past REQUEST_TIMEOUT_SECONDS with a 504."""
    try:
        return await asyncio.wait_for(call_next(request), timeout=settings.REQUEST_TIMEOUT_SECONDS)
    except asyncio.TimeoutError:
        exc = RequestTimeoutError("Request timed out")
        logger.error(
            "%s %s timed out after %.1fs", request.method, request.url.path, settings.REQUEST_TIMEOUT_SECONDS
        )
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


register_exception_handlers(app)

app.include_router(api_router, prefix="/api/v1")


@app.get("/health")
async def health():
    return {"status": "ok", "service": "salonbook-api", "version": "0.1.0"}
