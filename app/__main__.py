"""``python -m app``: validate configuration, then serve with uvicorn."""

import sys

import structlog
import uvicorn

from app.config import ConfigurationError, check_required_settings
from app.core.logging import configure_logging


def main() -> None:
    configure_logging()
    logger = structlog.get_logger(__name__)
    try:
        check_required_settings()
    except ConfigurationError as exc:
        logger.error("Missing required configuration", missing=exc.missing)
        sys.exit(1)

    uvicorn.run("app.main:app", host="0.0.0.0", port=8000)


if __name__ == "__main__":
    main()
