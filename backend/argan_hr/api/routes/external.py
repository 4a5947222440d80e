"""External API — unauthenticated integration endpoints behind a per-IP rate limit.

Invariants:
    - Every call, allowed or not, counts against the caller's window
    - Rejected calls get 429 RATE_LIMITED with Retry-After; allowed calls carry
      X-RateLimit-Limit / X-RateLimit-Remaining headers

Design Decisions:
    - Limiter built once at import from settings; tests call limiter.reset()
"""

import logging
from typing import Any

from fastapi import APIRouter, Body, Depends, Request, Response

from argan_hr.api.dependencies import client_ip
from argan_hr.config import get_settings
from argan_hr.core import clock
from argan_hr.core.errors import RateLimitExceededError
from argan_hr.infrastructure.rate_limit import FixedWindowRateLimiter

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/external", tags=["external"])

_settings = get_settings()
limiter = FixedWindowRateLimiter(
    _settings.external_rate_limit_requests,
    _settings.external_rate_limit_window_seconds,
)


async def enforce_rate_limit(request: Request, response: Response) -> None:
    ip = client_ip(request) or "unknown"
    decision = limiter.hit(f"ip:{ip}")
    if not decision.allowed:
        logger.warning(
            f"External API rate limit exceeded for {ip}",
            extra={"ip_address": ip, "path": request.url.path},
        )
        raise RateLimitExceededError(decision.retry_after, "Rate limit exceeded")
    response.headers["X-RateLimit-Limit"] = str(limiter.limit)
    response.headers["X-RateLimit-Remaining"] = str(decision.remaining)


@router.get("", dependencies=[Depends(enforce_rate_limit)])
async def external_get():
    return {
        "message": "External API is available",
        "timestamp": clock.utc_now().isoformat(),
        "endpoint": "/api/v1/external",
        "version": "v1",
    }


@router.post("", dependencies=[Depends(enforce_rate_limit)])
async def external_post(payload: Any = Body(None)):
    return {
        "message": "External POST received",
        "received_data": payload,
        "timestamp": clock.utc_now().isoformat(),
    }
