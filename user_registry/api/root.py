from __future__ import annotations

import structlog
from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

router = APIRouter(tags=["root"])

logger = structlog.get_logger(__name__)


@router.get("/", response_class=PlainTextResponse)
def index() -> str:
    return "hello my first get endpoint"


@router.get("/panic", response_class=PlainTextResponse)
def panic() -> str:
    logger.info("panic.requested")
    raise RuntimeError("The app was crashing!!!")
