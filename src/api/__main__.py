"""Entry point for running the API server."""
import logging

import uvicorn

from api.main import app
from core.config import get_settings
from core.log_config import configure_logging

if __name__ == "__main__":
    settings = get_settings()
    configure_logging(settings.log_level)
    logging.getLogger(__name__).info(
        "Server starting on %s:%d", settings.server_host, settings.server_port,
    )
    uvicorn.run(
        app,
        host=settings.server_host,
        port=settings.server_port,
        log_config=None,
    )
