from __future__ import annotations

import re
import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

correlation_id_ctx: ContextVar[str] = ContextVar("correlation_id", default="")

HEADER = "X-Request-ID"

# Client supplied ids end up in log lines, so only accept plain tokens.
_VALID_ID = re.compile(r"^[A-Za-z0-9._-]{1,64}$")


def _pick_correlation_id(raw: str | None) -> str:
    if raw and _VALID_ID.match(raw):
        return raw
    return uuid.uuid4().hex


class CorrelationIdMiddleware(BaseHTTPMiddleware):
    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        cid = _pick_correlation_id(request.headers.get(HEADER))
        token = correlation_id_ctx.set(cid)
        try:
            response = await call_next(request)
            response.headers[HEADER] = cid
            return response
        finally:
            correlation_id_ctx.reset(token)
