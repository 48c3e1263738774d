from contextlib import asynccontextmanager
import logging
import os

from fastapi import APIRouter, FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
import sentry_sdk
from slowapi.errors import RateLimitExceeded
from starlette.exceptions import HTTPException as StarletteHTTPException

from . import db
from .config import API_PREFIX
from .exceptions import DomainException, ProblemDetail, problem_response
from .rate_limits import limiter, rate_limit_handler
from .routers import matches
from .utils.sentry import _init_sentry

logger = logging.getLogger(__name__)

_init_sentry()


def _parse_allowed_origins(raw: str) -> list[str]:
    """Split ``ALLOWED_ORIGINS``, refusing empty or wildcard configurations."""

    if not raw.strip():
        raise ValueError(
            "ALLOWED_ORIGINS environment variable must be set to a comma-separated "
            "list of trusted origins."
        )
    origins = [o.strip() for o in raw.split(",") if o.strip()]
    if not origins:
        raise ValueError("ALLOWED_ORIGINS must contain at least one non-empty origin.")
    # Credentials are allowed by default, which browsers refuse with '*'.
    if "*" in origins:
        raise ValueError(
            "ALLOWED_ORIGINS cannot include '*' (wildcard). Specify explicit, trusted origins."
        )
    return origins


ALLOWED_ORIGINS = _parse_allowed_origins(os.getenv("ALLOWED_ORIGINS", ""))
ALLOW_CREDENTIALS = os.getenv("ALLOW_CREDENTIALS", "true").lower() == "true"


@asynccontextmanager
async def lifespan(app: FastAPI):
    if os.getenv("AUTO_CREATE_TABLES", "").lower() == "true":
        logger.info("Creating missing match tables")
        await db.create_tables()
    yield


app = FastAPI(
    title="Golf Press Tracker API",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    lifespan=lifespan,
)

app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, rate_limit_handler)

app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_credentials=ALLOW_CREDENTIALS,
    allow_methods=["*"],
    allow_headers=["*"],
)

logger.info("API_PREFIX=%r, %d allowed origin(s)", API_PREFIX, len(ALLOWED_ORIGINS))


@app.exception_handler(DomainException)
async def domain_exception_handler(request: Request, exc: DomainException):
    return problem_response(exc.problem(instance=request.url.path))


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    detail = exc.detail if isinstance(exc.detail, str) else str(exc.detail)
    problem = ProblemDetail(
        title=detail,
        detail=detail,
        status=exc.status_code,
        instance=request.url.path,
        code=getattr(exc, "code", f"http_{exc.status_code}"),
    )
    return problem_response(problem, headers=getattr(exc, "headers", None))


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.error(
        "Unhandled exception on %s %s",
        request.method,
        request.url.path,
        exc_info=(type(exc), exc, exc.__traceback__),
    )
    return problem_response(
        ProblemDetail(
            title="Internal Server Error",
            detail="An unexpected error occurred while processing the match.",
            status=500,
            instance=request.url.path,
            code="internal_server_error",
        )
    )


# Unprefixed for reverse proxy and uptime checks
@app.get("/healthz", tags=["health"])
def root_healthz():
    return {"status": "ok"}


api_router = APIRouter(prefix=API_PREFIX, tags=["meta"])


@api_router.get("/healthz", tags=["health"])
def api_healthz():
    return {"status": "ok"}


@api_router.post("/sentry-test", tags=["health"])
def sentry_test_check():
    if not os.getenv("SENTRY_DSN"):
        raise HTTPException(status_code=400, detail="Sentry is not configured (SENTRY_DSN missing)")
    event_id = sentry_sdk.capture_message("Sentry self-test trigger", level="info")
    return {"status": "sent", "eventId": str(event_id)}


@api_router.get("")
def api_root():
    return {"message": "Golf Press Tracker API. See /docs."}


v0_router = APIRouter(prefix="/v0")
v0_router.include_router(matches.router)

api_router.include_router(v0_router)
app.include_router(api_router)
