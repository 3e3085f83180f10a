"""Unit tests for validated value types."""

import pytest

from courseloop.domain.error import ValidationError
from courseloop.domain.value import CourseCode, EmailAddress, Username


class TestUsername:
    """Tests for Username."""

    def test_accepts_letters_digits_underscore(self):
        assert Username.parse("Swift_Eagle42", "username").root == "Swift_Eagle42"

    @pytest.mark.parametrize("value", ["alice\n", "\nalice", "ali ce", "al"])
    def test_rejects_anything_else(self, value):
        with pytest.raises(ValidationError):
            Username.parse(value, "username")


class TestEmailAddress:
    """Tests for EmailAddress."""

    def test_normalizes(self):
        assert EmailAddress.parse("  Student@Berkeley.EDU ", "email").root == "student@berkeley.edu"

    def test_rejects_embedded_newline(self):
        with pytest.raises(ValidationError):
            EmailAddress.parse("student@berkeley.edu\nx", "email")


class TestCourseCode:
    """Tests for CourseCode."""

    def test_normalizes_spelling(self):
        assert CourseCode.parse("cs 101", "course_code").root == "CS101"
