"""
tests/__init__.py
Test package initialization with fixtures and sample data
"""

import os
import sys
import tempfile
import unittest
from typing import Any, Dict, List
from unittest.mock import patch

# Add project root to path
project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, project_root)

from config.settings import SuiteConfig  # noqa: E402

BASE_URL = "https://api.test.com"


class BaseTestCase(unittest.TestCase):
    """Base test case with an isolated configuration environment"""

    def setUp(self):
        """Point the config at an empty temp dir and clear overrides"""
        self.temp_dir = tempfile.TemporaryDirectory()
        self.config_path = os.path.join(self.temp_dir.name, "config.json")

        self.env_patcher = patch.dict(os.environ, {"CONFIG_PATH": self.config_path})
        self.env_patcher.start()
        for name in ("CI", "API_BASE_URL", "API_AUTH_TOKEN"):
            os.environ.pop(name, None)

        SuiteConfig.reload()

    def tearDown(self):
        """Clean up test fixtures"""
        self.env_patcher.stop()
        SuiteConfig.reload()
        self.temp_dir.cleanup()


# ============================================================================
# SAMPLE DATA GENERATORS
# ============================================================================


class SampleDataGenerator:
    """Payloads shaped like the remote service's responses"""

    @staticmethod
    def user(user_id: int = 1) -> Dict[str, Any]:
        return {
            "id": user_id,
            "name": f"User {user_id}",
            "username": f"user{user_id}",
            "email": f"user{user_id}@example.com",
        }

    @staticmethod
    def users(count: int = 3) -> List[Dict[str, Any]]:
        return [SampleDataGenerator.user(i) for i in range(1, count + 1)]

    @staticmethod
    def post(post_id: int = 1, user_id: int = 1) -> Dict[str, Any]:
        return {
            "id": post_id,
            "userId": user_id,
            "title": f"Post {post_id}",
            "body": f"Body of post {post_id}",
        }

    @staticmethod
    def posts(user_id: int = 1, count: int = 3) -> List[Dict[str, Any]]:
        return [SampleDataGenerator.post(i, user_id) for i in range(1, count + 1)]

    @staticmethod
    def behave_feature(name: str = "Users", failed: bool = False) -> Dict[str, Any]:
        """One feature as written by behave's json formatter"""
        failing_result: Dict[str, Any] = {
            "status": "failed",
            "duration": 0.25,
            "error_message": ["Assertion Failed: Expected status 201 but got 500"],
        }
        return {
            "keyword": "Feature",
            "name": name,
            "location": "bdd/api.feature:2",
            "status": "failed" if failed else "passed",
            "elements": [
                {
                    "type": "background",
                    "keyword": "Background",
                    "name": "",
                    "steps": [],
                },
                {
                    "type": "scenario",
                    "keyword": "Scenario",
                    "name": "Log the email address of a random user",
                    "status": "passed",
                    "steps": [
                        {
                            "keyword": "Given",
                            "name": "I get all users from the API",
                            "result": {"status": "passed", "duration": 0.5},
                        },
                        {
                            "keyword": "Then",
                            "name": "I should log the user's email address",
                            "result": {"status": "passed", "duration": 0.1},
                        },
                    ],
                },
                {
                    "type": "scenario",
                    "keyword": "Scenario",
                    "name": "Create a new post",
                    "status": "failed" if failed else "passed",
                    "steps": [
                        {
                            "keyword": "Then",
                            "name": "the post creation should return the correct response",
                            "result": failing_result
                            if failed
                            else {"status": "passed", "duration": 0.25},
                        },
                    ],
                },
            ],
        }
