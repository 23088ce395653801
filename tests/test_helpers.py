"""
tests/test_helpers.py
Test cases for random selection, post ID validation and console formatting
"""

import io
import unittest
from contextlib import redirect_stdout

from apisuite.core.helpers import (
    get_random_user,
    get_random_post,
    validate_post_id,
    format_log,
    format_log_simple,
    console_log,
    console_log_simple,
)
from apisuite.core.models import User, Post
from tests import SampleDataGenerator


class TestRandomSelection(unittest.TestCase):
    """Random picks always come from the input list"""

    def setUp(self):
        self.users = [User.from_dict(u) for u in SampleDataGenerator.users(5)]
        self.posts = [Post.from_dict(p) for p in SampleDataGenerator.posts(count=10)]

    def test_random_user_is_member(self):
        for _ in range(50):
            self.assertIn(get_random_user(self.users), self.users)

    def test_random_post_is_member(self):
        for _ in range(50):
            self.assertIn(get_random_post(self.posts), self.posts)

    def test_single_element(self):
        self.assertIs(get_random_user(self.users[:1]), self.users[0])

    def test_empty_list_raises(self):
        with self.assertRaises(ValueError):
            get_random_user([])
        with self.assertRaises(ValueError):
            get_random_post([])


class TestValidatePostId(unittest.TestCase):
    """validate_post_id is true iff an integral number in 1-100"""

    def test_valid_range(self):
        for value in (1, 2, 50, 99, 100):
            self.assertTrue(validate_post_id(value), value)

    def test_out_of_range(self):
        for value in (0, -1, 101, 99999):
            self.assertFalse(validate_post_id(value), value)

    def test_non_integers(self):
        for value in (1.5, "5", None, True, [1], float("nan"), float("inf")):
            self.assertFalse(validate_post_id(value), value)

    def test_integral_floats(self):
        self.assertTrue(validate_post_id(5.0))
        self.assertTrue(validate_post_id(100.0))
        self.assertFalse(validate_post_id(0.0))
        self.assertFalse(validate_post_id(101.0))


class TestConsoleFormatting(unittest.TestCase):

    def test_format_log_simple(self):
        self.assertEqual(format_log_simple("Post ID", 7), "Post ID: 7")

    def test_format_log_pretty_prints_json(self):
        self.assertEqual(format_log("User", {"id": 1}), '\nUser:\n{\n  "id": 1\n}')

    def test_console_helpers_print(self):
        buffer = io.StringIO()
        with redirect_stdout(buffer):
            console_log_simple("User Email", "a@b.c")
            console_log("Data", [1])
        output = buffer.getvalue()
        self.assertIn("User Email: a@b.c\n", output)
        self.assertIn("Data:\n[\n  1\n]", output)
