"""Per-client request limits, enforced with slowapi.

Reads and writes have separate budgets (see ``READ_LIMIT``/``WRITE_LIMIT``);
both are keyed on the client address.
"""

from fastapi import Request
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address

from core.config import settings
from core.exceptions import ErrorCode

READ_LIMIT = settings.read_rate_limit
WRITE_LIMIT = settings.write_rate_limit

limiter = Limiter(
    key_func=get_remote_address,
    enabled=settings.rate_limit_enabled,
    headers_enabled=False,
)


async def rate_limit_exceeded_handler(request: Request, exc: Exception) -> JSONResponse:
    """Render a 429 in the common error shape, with a Retry-After hint."""
    if isinstance(exc, RateLimitExceeded):
        limit = str(exc.detail)
        retry_after = int(exc.limit.limit.get_expiry())
    else:
        limit, retry_after = str(exc), 60
    return JSONResponse(
        status_code=429,
        headers={"Retry-After": str(retry_after)},
        content={
            "error_code": ErrorCode.RATE_LIMIT_EXCEEDED.value,
            "message": f"Too many requests ({limit})",
            "details": {"limit": limit, "retry_after_seconds": retry_after},
        },
    )
