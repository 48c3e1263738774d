"""Per-client rate limiting for the match write endpoints."""

import os

from fastapi import Request
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded

from .config import WRITE_RATE_LIMIT
from .exceptions import ProblemDetail, problem_response

# Effective ceiling when DISABLE_RATE_LIMITS is set (tests, local scoring).
UNLIMITED = "1000/second"


def _client_key(request: Request) -> str:
    # The reverse proxy appends the peer it saw; earlier hops are client supplied.
    forwarded = request.headers.get("X-Forwarded-For", "")
    hops = [hop.strip() for hop in forwarded.split(",") if hop.strip()]
    if hops:
        return hops[-1]
    real_ip = request.headers.get("X-Real-IP")
    if real_ip:
        return real_ip
    return request.client.host if request.client else ""


limiter = Limiter(key_func=_client_key)


def write_rate_limit() -> str:
    if (os.getenv("DISABLE_RATE_LIMITS") or "").lower() == "true":
        return UNLIMITED
    return WRITE_RATE_LIMIT


async def rate_limit_handler(request: Request, exc: RateLimitExceeded):
    limit = exc.detail if isinstance(exc.detail, str) and exc.detail else None
    detail = (
        f"rate limit exceeded: {limit}"
        if limit
        else "rate limit exceeded: please wait before submitting more scores."
    )
    return problem_response(
        ProblemDetail(
            title="Too Many Requests",
            detail=detail,
            status=429,
            instance=request.url.path,
            code="rate_limit_exceeded",
        )
    )
