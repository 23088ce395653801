#!/usr/bin/env python3
"""
scripts/generate_report.py
Render the HTML report from the behave JSON results of the last run
"""

import sys
import os

# Add project root to path
project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, project_root)

from apisuite.core.exceptions import ReportError  # noqa: E402
from apisuite.reporting import build_custom_data, build_metadata, generate_report  # noqa: E402
from config.settings import get_config  # noqa: E402


def main():
    settings = get_config()
    try:
        path = generate_report(
            settings.REPORT_JSON_DIR(),
            settings.REPORT_HTML_DIR(),
            title=settings.REPORT_TITLE(),
            metadata=build_metadata(),
            custom_data=build_custom_data(settings.PROJECT_NAME(), settings.ENVIRONMENT_NAME()),
        )
    except ReportError as e:
        print(f"✗ {e}")
        return 1

    print(f"✅ Cucumber HTML report generated in: {path.parent}/")
    return 0


if __name__ == '__main__':
    sys.exit(main())
