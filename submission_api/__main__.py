# submission_api/__main__.py — process bootstrap (python -m submission_api)

import logging
import sys

import uvicorn
from pydantic import ValidationError

from submission_api.config import get_settings

logger = logging.getLogger("submission_api")


def main() -> None:
    try:
        settings = get_settings()
    except ValidationError as exc:
        logging.basicConfig(level="INFO")
        logger.error("Invalid configuration, SUPABASE_URL and SUPABASE_SERVICE_KEY are required:\n%s", exc)
        sys.exit(1)

    logging.basicConfig(level=settings.log_level)
    logger.info("Server is running on http://%s:%s", settings.host, settings.port)
    uvicorn.run(
        "submission_api.main:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
