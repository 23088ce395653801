"""
apisuite/core/models.py - Data models for the remote blog/user resources
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass
class User:
    id: int
    name: str
    email: str
    username: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "User":
        return cls(
            id=data["id"],
            name=data.get("name", ""),
            email=data.get("email", ""),
            username=data.get("username"),
        )


@dataclass
class Post:
    id: Optional[int]
    user_id: int
    title: str
    body: str

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Post":
        """Build a Post from the wire shape (camelCase ``userId``)"""
        return cls(
            id=data.get("id"),
            user_id=data.get("userId"),
            title=data.get("title", ""),
            body=data.get("body", ""),
        )

    def to_payload(self) -> Dict[str, Any]:
        """Serialize back to the wire shape"""
        payload: Dict[str, Any] = {
            "userId": self.user_id,
            "title": self.title,
            "body": self.body,
        }
        if self.id is not None:
            payload["id"] = self.id
        return payload
