"""
apisuite/core/api_client.py - Typed client for the blog/user REST API
"""

from typing import Any, Dict, List, Optional, Tuple, Union

import requests  # type: ignore

from .http_wrapper import APIRequestWrapper
from .models import User, Post

PostData = Union[Post, Dict[str, Any]]


class APIClient:
    """
    High level client for the JSON Placeholder API

    Every call goes through APIRequestWrapper; the client itself does no
    retrying or status validation.
    """

    def __init__(
        self,
        session: requests.Session,
        base_url: str,
        max_retries: int = 1,
        retry_delay: float = 1.0,
        timeout: Optional[float] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.request = APIRequestWrapper(
            session,
            max_retries=max_retries,
            retry_delay=retry_delay,
            timeout=timeout,
        )

    @property
    def exchanges(self) -> List[Dict[str, Any]]:
        return self.request.exchanges

    def url(self, path: str) -> str:
        """Resolve a relative path against the base URL"""
        if path.startswith(("http://", "https://")):
            return path
        if not path.startswith("/"):
            path = "/" + path
        return f"{self.base_url}{path}"

    # Users

    def get_users(self) -> List[User]:
        response = self.request.get(self.url("/users"))
        return [User.from_dict(item) for item in response.json()]

    def get_user(self, user_id: int) -> User:
        response = self.request.get(self.url(f"/users/{user_id}"))
        return User.from_dict(response.json())

    def get_user_posts(self, user_id: int) -> List[Post]:
        response = self.request.get(self.url(f"/users/{user_id}/posts"))
        return [Post.from_dict(item) for item in response.json()]

    # Posts

    def get_posts(self) -> List[Post]:
        response = self.request.get(self.url("/posts"))
        return [Post.from_dict(item) for item in response.json()]

    def get_post(self, post_id: int) -> Post:
        response = self.request.get(self.url(f"/posts/{post_id}"))
        return Post.from_dict(response.json())

    def update_post(
        self, post_id: int, data: PostData
    ) -> Tuple[requests.Response, Dict[str, Any]]:
        """Update a post (PUT). Returns the response and its JSON body."""
        response = self.request.put(self.url(f"/posts/{post_id}"), _payload(data))
        return response, response.json()

    def create_post(self, data: PostData) -> Tuple[requests.Response, Dict[str, Any]]:
        """Create a post (POST). Returns the response and its JSON body."""
        response = self.request.post(self.url("/posts"), _payload(data))
        return response, response.json()

    # Raw access for negative testing

    def raw_get(self, url: str) -> requests.Response:
        return self.request.get_unvalidated(self.url(url))

    def raw_put(self, url: str, data: Optional[PostData] = None) -> requests.Response:
        return self.request.put_unvalidated(
            self.url(url), _payload(data) if data is not None else None
        )

    @staticmethod
    def read_body(response: requests.Response) -> Any:
        """JSON body, or the text body when it is not JSON"""
        try:
            return response.json()
        except ValueError:
            return response.text


def _payload(data: PostData) -> Dict[str, Any]:
    if isinstance(data, Post):
        return data.to_payload()
    return dict(data)
