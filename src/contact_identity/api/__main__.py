"""API server entry point: python -m contact_identity.api"""

import structlog
import uvicorn

from contact_identity.config.settings import get_settings
from contact_identity.logging_config import configure_logging


def main() -> None:
    settings = get_settings()
    configure_logging(json_output=settings.log_json, log_level=settings.log_level)
    log = structlog.get_logger()
    log.info(
        "api_starting",
        port=settings.port,
        database=settings.database_url.split("@")[-1],
    )
    uvicorn.run(
        "contact_identity.api.app:app",
        host=settings.host,
        port=settings.port,
        log_config=None,
    )


if __name__ == "__main__":
    main()
