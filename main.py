#!/usr/bin/env python3
"""
main.py - Command line entry point for the API behaviour suite
"""

import os
import sys
import logging
from dotenv import find_dotenv, load_dotenv

# Add project root to Python path
project_root = os.path.dirname(os.path.abspath(__file__))
sys.path.insert(0, project_root)

from apisuite.cli import cli  # noqa: E402
from config.settings import get_config  # noqa: E402


def setup_logging():
    """Setup application logging"""
    os.makedirs("logs", exist_ok=True)

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[
            logging.StreamHandler(),
            logging.FileHandler("logs/api_suite.log", mode="a"),
        ],
    )

    return logging.getLogger(__name__)


def check_environment():
    """Check interpreter and configuration before running anything"""
    logger = logging.getLogger(__name__)

    if sys.version_info < (3, 9):
        logger.error("Python 3.9 or higher required")
        return False

    config_issues = get_config().validate_config()
    if config_issues:
        logger.warning("Configuration issues found:")
        for issue in config_issues:
            logger.warning(f"  - {issue}")

    return True


def main():
    # Environment variables (API_BASE_URL, CI, CONFIG_PATH, ...) from the
    # working directory's .env, also when run as the installed console script
    load_dotenv(find_dotenv(usecwd=True))
    setup_logging()
    if not check_environment():
        return 1
    cli()
    return 0


if __name__ == "__main__":
    sys.exit(main())
