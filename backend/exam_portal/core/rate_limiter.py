"""
Rate Limiting for the Exam Portal API
=====================================
slowapi limiter keyed by authenticated user, falling back to client IP.

- /auth/login: 5 req/min (brute force protection)
- /auth/register: 3 req/min
- everything else: RATE_LIMIT_PER_MINUTE

Storage is in-process by default (RATE_LIMIT_STORAGE_URI=memory://); point it
at a shared backend when running more than one worker.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded
from fastapi import Request
from fastapi.responses import JSONResponse

from exam_portal.core.config import settings
from exam_portal.core.logging_config import logger


def get_user_identifier(request: Request) -> str:
    """
    Rate limit key:
    1. Authenticated user ID (set on request.state by the auth dependency)
    2. IP address
    """
    user_id = getattr(request.state, 'user_id', None)
    if user_id:
        return f"user:{user_id}"
    return f"ip:{get_remote_address(request)}"


limiter = Limiter(
    key_func=get_user_identifier,
    default_limits=[f"{settings.RATE_LIMIT_PER_MINUTE}/minute"],
    storage_uri=settings.RATE_LIMIT_STORAGE_URI,
    strategy="fixed-window",
    enabled=settings.RATE_LIMIT_ENABLED,
)


async def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded):
    """Return a JSON 429 with a Retry-After hint"""
    logger.warning(
        f"[RateLimit] Exceeded for {get_user_identifier(request)}: {exc.detail}"
    )

    return JSONResponse(
        status_code=429,
        content={
            "detail": "Too many requests. Please slow down.",
            "code": "RATE_LIMITED",
            "limit": str(exc.detail),
        },
        headers={"Retry-After": "60"},
    )


def auth_rate_limit():
    """Rate limit for login (5/min)"""
    return limiter.limit("5/minute")


def strict_rate_limit():
    """Very strict rate limit for sensitive operations like registration (3/min)"""
    return limiter.limit("3/minute")
