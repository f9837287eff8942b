import logging
from contextlib import asynccontextmanager
from logging.handlers import RotatingFileHandler
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from coverwise.config import settings

# ─── Logging setup (file + console) ───
_LOG_DIR = Path(settings.log_dir)
if not _LOG_DIR.is_absolute():
    _LOG_DIR = Path(__file__).resolve().parent.parent / _LOG_DIR
_LOG_DIR.mkdir(parents=True, exist_ok=True)

_log_level = getattr(logging, settings.log_level.upper(), logging.INFO)

logging.basicConfig(
    level=_log_level,
    format="%(asctime)s %(levelname)-8s [%(name)s] %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
    handlers=[
        logging.StreamHandler(),
        RotatingFileHandler(
            _LOG_DIR / "coverwise.log",
            maxBytes=10 * 1024 * 1024,  # 10 MB
            backupCount=5,
            encoding="utf-8",
        ),
    ],
)

# Quiet noisy libraries
logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
logging.getLogger("passlib").setLevel(logging.ERROR)

from coverwise.database import create_tables, engine
from coverwise.error_handlers import register_exception_handlers
from coverwise.middleware import RateLimitMiddleware, RequestLoggingMiddleware
from coverwise.routers import auth, health, recommendations
from coverwise.services.recommendation.config import get_policy

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Fail fast on a misconfigured policy version rather than on the first request
    policy = get_policy(settings.pricing_policy_version)
    logger.info(f"Pricing policy {policy.version} active")

    if settings.auto_create_tables:
        await create_tables()
        logger.info("Database tables ensured")

    logger.info(f"Environment: {settings.environment}")
    logger.info(f"CORS enabled for: {', '.join(settings.cors_origin_list)}")

    yield

    # Shutdown
    await engine.dispose()
    logger.info("Database connection pool closed")


app = FastAPI(
    title="CoverWise",
    description="Life Insurance Recommendation API",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    RateLimitMiddleware,
    max_requests=settings.rate_limit_requests,
    window_seconds=settings.rate_limit_window_seconds,
    enabled=settings.rate_limit_enabled,
    trust_forwarded_for=settings.rate_limit_trust_forwarded_for,
)
app.add_middleware(RequestLoggingMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization", "X-Requested-With"],
)

register_exception_handlers(app)

app.include_router(health.router, tags=["health"])
app.include_router(auth.router, prefix="/api/auth", tags=["auth"])
app.include_router(recommendations.router, prefix="/api", tags=["recommendations"])
