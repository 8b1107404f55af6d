"""Entry point serving the recipe scraping API with uvicorn."""
from __future__ import annotations

import uvicorn

from recipe_importer.api import app
from recipe_importer.config import get_setting
from recipe_importer.logging_config import get_logger

logger = get_logger(__name__)


def main() -> None:
    host = get_setting("host")
    port = get_setting("port")
    logger.info("=== Recipe Importer API starting on %s:%s ===", host, port)
    uvicorn.run(app, host=host, port=port, workers=1, log_level="info")


if __name__ == "__main__":
    main()
