"""
Tests for the documentation dimension.
"""

import pytest

from gitgrade.dimensions.documentation import (
    NO_README_SCORE,
    check_documentation,
    has_substantial_readme,
)
from gitgrade.models import ContentSnapshot
from tests._fixtures.stubs import SAMPLE_README


class TestDocumentationDimension:
    """Test the check_documentation fallback."""

    def test_no_readme(self):
        assert check_documentation(ContentSnapshot()) == NO_README_SCORE == 10

    def test_title_only_readme(self):
        """A one-line README is treated like no README."""
        assert check_documentation(ContentSnapshot(readme="# my-project\n")) == NO_README_SCORE

    def test_substantial_readme_is_judged(self):
        assert check_documentation(ContentSnapshot(readme=SAMPLE_README)) is None


@pytest.mark.parametrize(
    "readme, expected",
    [
        (None, False),
        ("", False),
        ("   \n\n  ", False),
        ("x" * 49, False),
        ("x" * 50, True),
        # whitespace does not count toward the length
        ("x " * 49, False),
        (SAMPLE_README, True),
    ],
)
def test_has_substantial_readme(readme, expected):
    assert has_substantial_readme(readme) is expected
