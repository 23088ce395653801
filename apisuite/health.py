"""
apisuite/health.py - Reachability checks for the target API
"""

import logging
from typing import Callable, Dict, List, Optional, Tuple

import requests  # type: ignore

from apisuite.core.api_client import APIClient
from apisuite.core.exceptions import APIRequestError
from apisuite.fixtures import api_client_context
from config.settings import SuiteConfig

logger = logging.getLogger(__name__)

CheckResult = Tuple[bool, str]


def check_users_endpoint(client: APIClient) -> CheckResult:
    """Check the users listing"""
    try:
        users = client.get_users()
    except (APIRequestError, requests.RequestException) as e:
        return False, f"Users endpoint error: {e}"
    if not users:
        return False, "Users endpoint returned no users"
    return True, f"Users endpoint working, got {len(users)} users"


def check_posts_endpoint(client: APIClient) -> CheckResult:
    """Check the posts listing"""
    try:
        posts = client.get_posts()
    except (APIRequestError, requests.RequestException) as e:
        return False, f"Posts endpoint error: {e}"
    if not posts:
        return False, "Posts endpoint returned no posts"
    return True, f"Posts endpoint working, got {len(posts)} posts"


CHECKS: List[Tuple[str, Callable[[APIClient], CheckResult]]] = [
    ("users", check_users_endpoint),
    ("posts", check_posts_endpoint),
]


def run_health_checks(
    settings: Optional[type[SuiteConfig]] = None, base_url: Optional[str] = None
) -> Dict[str, CheckResult]:
    """Run every check against one client session"""
    results: Dict[str, CheckResult] = {}
    with api_client_context(settings, base_url=base_url) as client:
        for name, check in CHECKS:
            results[name] = check(client)
            logger.info(f"Health check {name}: {results[name][1]}")
    return results
