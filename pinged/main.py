"""Main entry point - serves the Pinged feed and settings interface."""

from __future__ import annotations

import logging
import sys

from .config import get_db_path, load_config
from .web.app import run_web_server

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger(__name__)


def main() -> int:
    """Run the web service."""
    db_path = get_db_path()
    config = load_config(db_path)
    if config.debug_mode:
        logging.getLogger().setLevel(logging.DEBUG)

    logger.info("Web interface at http://0.0.0.0:%d (theme: %s)", config.web_port, config.theme)
    run_web_server(host="0.0.0.0", port=config.web_port, db_path=db_path)
    return 0


if __name__ == "__main__":
    sys.exit(main())
