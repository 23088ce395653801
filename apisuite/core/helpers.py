"""
apisuite/core/helpers.py - Small helpers shared by the step definitions
"""

import json
import random
from typing import Any, Sequence

from .models import User, Post

POST_ID_MIN = 1
POST_ID_MAX = 100


def _pick(items: Sequence[Any], kind: str) -> Any:
    if not items:
        raise ValueError(f"Cannot select a random {kind} from an empty list")
    return random.choice(items)


def get_random_user(users: Sequence[User]) -> User:
    """Get a random user from a list of users"""
    return _pick(users, "user")


def get_random_post(posts: Sequence[Post]) -> Post:
    """Get a random post from a list of posts"""
    return _pick(posts, "post")


def validate_post_id(value: Any) -> bool:
    """Validate that a post ID is an integer within 1-100 (5.0 counts as 5)"""
    if isinstance(value, bool):
        return False
    if isinstance(value, float):
        if not value.is_integer():
            return False
    elif not isinstance(value, int):
        return False
    return POST_ID_MIN <= value <= POST_ID_MAX


def format_log(label: str, data: Any) -> str:
    return f"\n{label}:\n{json.dumps(data, indent=2, default=str)}"


def format_log_simple(label: str, value: Any) -> str:
    return f"{label}: {value}"


def console_log(label: str, data: Any) -> None:
    """Print structured data with a label"""
    print(format_log(label, data))


def console_log_simple(label: str, value: Any) -> None:
    """Print a simple key-value pair"""
    print(format_log_simple(label, value))
