from __future__ import annotations

import re
import uuid
from typing import Any, Callable

import structlog
from starlette.datastructures import Headers
from starlette.responses import PlainTextResponse

_HYPHENATED = r"[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}"
_GUID_RE = re.compile(
    rf"urn:uuid:(?P<urn>{_HYPHENATED})"
    rf"|\{{(?P<braced>{_HYPHENATED})\}}"
    rf"|(?P<plain>{_HYPHENATED})"
    r"|(?P<bare>[0-9a-f]{32})",
    re.IGNORECASE,
)


def parse_guid(value: str) -> uuid.UUID:
    """Parse the GUID layouts accepted on the wire.

    8-4-4-4-12 hex, optionally wrapped in braces or prefixed with
    ``urn:uuid:``, or 32 bare hex digits. Anything else raises ``ValueError``.
    """

    match = _GUID_RE.fullmatch(value)
    if match is None:
        raise ValueError(f"not a GUID: {value!r}")
    digits = next(group for group in match.groups() if group is not None)
    return uuid.UUID(hex=digits.replace("-", ""))


class CorrelationIdMiddleware:
    """Requires a GUID correlation header on every request under ``path_prefix``.

    The parsed ``uuid.UUID`` lands on ``request.state.correlation_id`` and in the
    structlog context, so downstream log lines carry it.
    """

    def __init__(
        self,
        app: Callable[..., Any],
        header_name: str = "X-CorrelationId",
        path_prefix: str = "/user",
    ) -> None:
        self.app = app
        self.header_name = header_name
        self.path_prefix = path_prefix.rstrip("/")

    def _is_gated(self, path: str) -> bool:
        return path == self.path_prefix or path.startswith(self.path_prefix + "/")

    async def __call__(self, scope: dict[str, Any], receive: Callable[..., Any], send: Callable[..., Any]) -> None:
        if scope.get("type") != "http" or not self._is_gated(scope.get("path", "")):
            await self.app(scope, receive, send)
            return

        raw = Headers(scope=scope).get(self.header_name)
        if not raw:
            response = PlainTextResponse("You have to send correlationId", status_code=400)
            await response(scope, receive, send)
            return

        try:
            correlation_id = parse_guid(raw)
        except ValueError:
            structlog.get_logger("correlation").info("correlation_id_rejected", value=raw)
            response = PlainTextResponse("CorrelationId must be a GUID", status_code=400)
            await response(scope, receive, send)
            return

        scope.setdefault("state", {})["correlation_id"] = correlation_id
        structlog.contextvars.bind_contextvars(correlation_id=str(correlation_id))
        await self.app(scope, receive, send)
