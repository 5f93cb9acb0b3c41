"""Render identity errors as JSON responses."""

from __future__ import annotations

import structlog
from fastapi import FastAPI
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from contact_identity.errors import IdentityError

logger = structlog.get_logger()


def register_exception_handlers(app: FastAPI) -> None:
    """Map ``IdentityError`` subclasses to their status codes.

    Client errors keep their message; server-side failures are logged and
    rendered with a generic message.
    """

    @app.exception_handler(IdentityError)
    async def _identity_error_handler(request: Request, exc: IdentityError) -> Response:
        if exc.status_code >= 500:
            logger.error(
                "request_failed",
                path=request.url.path,
                code=exc.code,
                exc_info=exc,
            )
            return JSONResponse(
                status_code=exc.status_code,
                content={"detail": "Internal server error", "code": exc.code},
            )
        return JSONResponse(status_code=exc.status_code, content=exc.to_public_dict())
