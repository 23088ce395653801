"""
apisuite/core/__init__.py
HTTP client layer used by the step definitions
"""

from .exceptions import APISuiteError, APIRequestError, ClientError, ServerError
from .models import User, Post
from .http_wrapper import APIRequestWrapper
from .api_client import APIClient
from .helpers import (
    get_random_user,
    get_random_post,
    validate_post_id,
    console_log,
    console_log_simple,
)

__all__ = [
    "APISuiteError",
    "APIRequestError",
    "ClientError",
    "ServerError",
    "User",
    "Post",
    "APIRequestWrapper",
    "APIClient",
    "get_random_user",
    "get_random_post",
    "validate_post_id",
    "console_log",
    "console_log_simple",
]
