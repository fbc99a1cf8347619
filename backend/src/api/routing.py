"""Route classes for routers behind the x-token gate."""
import logging
from collections.abc import Callable, Coroutine
from typing import Any

from fastapi import Request, Response

from api.errors import ErrorContextRoute
from core.auth import TOKEN_HEADER, unauthorized

logger = logging.getLogger(__name__)


class TokenRequiredRoute(ErrorContextRoute):
    """
    Route class for protected routers.

    FastAPI parses the JSON body before it resolves dependencies, so a
    tokenless request with an unparseable body would otherwise be answered
    with 400. Checking for the header first makes every tokenless request a
    401. Whether the token belongs to anyone is still decided by
    `get_current_user`.
    """

    def get_route_handler(self) -> Callable[[Request], Coroutine[Any, Any, Response]]:
        original_route_handler = super().get_route_handler()

        async def custom_route_handler(request: Request) -> Response:
            if not request.headers.get(TOKEN_HEADER):
                logger.info("Rejected request without %s header", TOKEN_HEADER)
                raise unauthorized()
            return await original_route_handler(request)

        return custom_route_handler
