from __future__ import annotations

from typing import Any, Callable

import structlog
from starlette.responses import PlainTextResponse


class RecoveryMiddleware:
    """Turns an exception escaping a handler into a 500 so the server keeps serving.

    Faults that take the interpreter down (memory exhaustion, a crashed worker)
    are beyond an in-process boundary and are not handled here.
    """

    def __init__(self, app: Callable[..., Any]) -> None:
        self.app = app

    async def __call__(self, scope: dict[str, Any], receive: Callable[..., Any], send: Callable[..., Any]) -> None:
        if scope.get("type") != "http":
            await self.app(scope, receive, send)
            return

        response_started = False

        async def send_wrapper(message: dict[str, Any]) -> None:
            nonlocal response_started

            if message.get("type") == "http.response.start":
                response_started = True
            await send(message)

        try:
            await self.app(scope, receive, send_wrapper)
        except Exception:
            structlog.get_logger("recovery").exception("request_crashed")
            if response_started:
                # Headers are already on the wire; nothing left to recover into.
                raise
            response = PlainTextResponse("Internal Server Error", status_code=500)
            await response(scope, receive, send)
