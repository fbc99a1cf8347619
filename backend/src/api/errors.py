"""Error translation at the HTTP boundary."""
import json
import logging
from collections.abc import Callable, Coroutine
from typing import Any

from fastapi import Request, Response, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, PlainTextResponse
from fastapi.routing import APIRoute
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)

CENSORED = "$censored"
SENSITIVE_FIELDS = frozenset({"password"})


def censor_body(body: bytes) -> str:
    """
    Return a loggable copy of a request body with password-like fields masked.

    Bodies that aren't a JSON object are returned as-is (decoded leniently).
    """
    try:
        parsed = json.loads(body)
    except ValueError:
        return body.decode(errors="replace")

    if not isinstance(parsed, dict):
        return body.decode(errors="replace")

    for field in SENSITIVE_FIELDS & parsed.keys():
        parsed[field] = CENSORED
    return json.dumps(parsed)


class ErrorContextRoute(APIRoute):
    """
    Route class that records a censored request body when a handler fails.

    The exception is re-raised so the session dependency rolls back and the
    application-level handler produces the 500 response.
    """

    def get_route_handler(self) -> Callable[[Request], Coroutine[Any, Any, Response]]:
        original_route_handler = super().get_route_handler()

        async def custom_route_handler(request: Request) -> Response:
            try:
                return await original_route_handler(request)
            except (StarletteHTTPException, RequestValidationError):
                raise
            except Exception:
                request.state.censored_body = censor_body(await request.body())
                raise

        return custom_route_handler


async def validation_exception_handler(
    _request: Request, exc: RequestValidationError,
) -> JSONResponse:
    """Render request validation failures as 400 without echoing input values."""
    errors = [
        {"loc": list(error["loc"]), "msg": error["msg"], "type": error["type"]}
        for error in exc.errors()
    ]
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": errors},
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> PlainTextResponse:
    """Log unexpected errors with request context; never send internals to the client."""
    logger.error(
        "Request failed: %s %s query=%r body=%s",
        request.method,
        request.url.path,
        request.url.query,
        getattr(request.state, "censored_body", None),
        exc_info=exc,
    )
    return PlainTextResponse(
        "Internal Server Error",
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
