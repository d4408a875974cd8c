"""Command line entry for the REST demo service."""

from __future__ import annotations

import logging

import uvicorn

from restdemo.core.config import settings
from restdemo.core.observability import setup_logging

logger = logging.getLogger("restdemo")


def run_server() -> None:
    setup_logging()
    logger.info("Listening on %s:%s", settings.HOST, settings.PORT)
    uvicorn.run("restdemo.api.main:app", host=settings.HOST, port=settings.PORT, log_config=None)


def main() -> None:
    run_server()


if __name__ == "__main__":
    main()
