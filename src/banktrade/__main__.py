"""Run the API with uvicorn: ``python -m banktrade``."""

import uvicorn

from banktrade.config import settings
from banktrade.core.logging import setup_logging


def main() -> None:
    setup_logging(settings.log_level, json_format=settings.log_json)
    uvicorn.run(
        "banktrade.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
        log_config=None,
    )


if __name__ == "__main__":
    main()
