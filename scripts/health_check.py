# !/usr/bin/env python3
"""
scripts/health_check.py
Quick reachability check for the target API
"""

import sys
import os
from datetime import datetime

# Add project root to path
project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, project_root)

from apisuite.health import run_health_checks  # noqa: E402
from config.settings import get_config  # noqa: E402


def main():
    """Run health checks and print a summary"""
    settings = get_config()
    print(f"API Health Check - {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}")
    print(f"Target: {settings.BASE_URL()}")
    print("=" * 50)

    results = run_health_checks(settings)

    all_healthy = True
    for name, (ok, message) in results.items():
        status = "✓" if ok else "✗"
        print(f"{status} {name.title()}: {message}")
        all_healthy = all_healthy and ok

    print("=" * 50)
    if all_healthy:
        print("🟢 API is reachable")
        return 0
    print("🔴 API checks failed")
    return 1


if __name__ == '__main__':
    sys.exit(main())
