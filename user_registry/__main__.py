from __future__ import annotations

import argparse

import uvicorn

from user_registry.config import get_settings


def main() -> None:
    settings = get_settings()
    parser = argparse.ArgumentParser(description="In-memory user registry HTTP service")
    parser.add_argument("--host", default=settings.host, help="Interface to bind")
    parser.add_argument("--port", type=int, default=settings.port, help="TCP port to listen on")
    args = parser.parse_args()

    uvicorn.run(
        "user_registry.main:create_app",
        factory=True,
        host=args.host,
        port=args.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
