"""Unit tests for blogapi.services.validation."""

import unittest

from blogapi.core.errors import ValidationError
from blogapi.services.validation import (
    is_valid_email,
    missing_fields,
    password_problem,
    require_fields,
    sanitize_input,
    validate_password,
    validate_post_content,
    validate_post_title,
)


class TestIsValidEmail(unittest.TestCase):
    def test_valid(self) -> None:
        for email in ("test@example.com", "user.name@domain.co.uk", "a+b@c.io"):
            self.assertTrue(is_valid_email(email), email)

    def test_invalid(self) -> None:
        for email in ("invalid-email", "test@", "@example.com", "test@example", "a b@c.com", ""):
            self.assertFalse(is_valid_email(email), email)


class TestPasswordRules(unittest.TestCase):
    """Length must be within 6..50 inclusive."""

    def test_bounds_accepted(self) -> None:
        for length in (6, 7, 25, 49, 50):
            self.assertIsNone(password_problem("x" * length), length)

    def test_too_short(self) -> None:
        for password in (None, "", "x", "x" * 5):
            self.assertIn("at least 6", password_problem(password))

    def test_too_long(self) -> None:
        self.assertIn("cannot exceed 50", password_problem("x" * 51))

    def test_validate_raises(self) -> None:
        with self.assertRaises(ValidationError) as ctx:
            validate_password("short")
        self.assertEqual(ctx.exception.status_code, 400)
        self.assertIn("Password", ctx.exception.message)


class TestSanitizeInput(unittest.TestCase):
    """Only trims and removes angle brackets; other text is kept as-is."""

    def test_trims(self) -> None:
        self.assertEqual(sanitize_input("  hello  "), "hello")

    def test_strips_angle_brackets_only(self) -> None:
        self.assertEqual(
            sanitize_input("<script>alert('xss')</script>"),
            "scriptalert('xss')/script",
        )

    def test_non_string(self) -> None:
        self.assertEqual(sanitize_input(None), "")
        self.assertEqual(sanitize_input(42), "")


class TestRequiredFields(unittest.TestCase):
    def test_lists_missing_in_order(self) -> None:
        data = {"username": "alice", "email": "   ", "password": None}
        self.assertEqual(missing_fields(data, ["username", "email", "password"]), ["email", "password"])

    def test_message(self) -> None:
        with self.assertRaises(ValidationError) as ctx:
            require_fields({}, ["title", "content"])
        self.assertEqual(ctx.exception.message, "Missing required fields: title, content")

    def test_all_present(self) -> None:
        require_fields({"title": "x", "content": "y"}, ["title", "content"])


class TestPostFieldRules(unittest.TestCase):
    def test_title_bounds(self) -> None:
        validate_post_title("abc")
        validate_post_title("x" * 200)
        with self.assertRaises(ValidationError):
            validate_post_title("ab")
        with self.assertRaises(ValidationError):
            validate_post_title("x" * 201)

    def test_content_minimum(self) -> None:
        validate_post_content("x" * 10)
        with self.assertRaises(ValidationError):
            validate_post_content("x" * 9)


if __name__ == "__main__":
    unittest.main()
