from __future__ import annotations

import os
from typing import Callable

import structlog

logger = structlog.get_logger(__name__)


def generate_user_id(read_random: Callable[[int], bytes] = os.urandom) -> str:
    """Return a random 32-char lowercase hex id laid out like a version 4 UUID.

    Returns an empty string when the random source cannot be read; callers must
    accept an empty id in that case.
    """

    try:
        raw = bytearray(read_random(16))
    except (OSError, NotImplementedError):
        logger.warning("user_id.random_source_unavailable", exc_info=True)
        return ""

    raw[6] = (raw[6] & 0x0F) | 0x40  # version 4
    raw[8] = (raw[8] & 0x3F) | 0x80  # RFC 4122 variant
    return raw.hex()
