from __future__ import annotations

import argparse

import structlog
import uvicorn

from journal_api.config import get_settings, split_addr
from journal_api.observability.logging import configure_logging, resolve_level


def main(argv: list[str] | None = None) -> None:
    settings = get_settings()

    parser = argparse.ArgumentParser(description="Journal API local data service")
    parser.add_argument("--addr", default=settings.addr, help="Listen address host:port (env LDS_ADDR)")
    parser.add_argument("--log-level", default=settings.log_level, help="Log level (env LOG_LEVEL)")
    args = parser.parse_args(argv)

    try:
        host, port = split_addr(args.addr)
        level = resolve_level(args.log_level)
    except ValueError as exc:
        parser.error(str(exc))

    configure_logging(level)
    structlog.get_logger("journal_api").info("listening", host=host, port=port)

    # uvicorn stops accepting on SIGINT/SIGTERM and drains in-flight requests before exit.
    uvicorn.run(
        "journal_api.main:app",
        host=host,
        port=port,
        log_config=None,
        log_level=level,
    )


if __name__ == "__main__":
    main()
