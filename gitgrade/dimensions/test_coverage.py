"""Test coverage dimension."""

import json
import re
from typing import Iterable

from gitgrade.dimensions.base import DimensionSpec
from gitgrade.models import ContentSnapshot

NO_TEST_SIGNAL_SCORE = 0

# npm init writes this placeholder; it is not a test script
NPM_PLACEHOLDER_TEST = 'echo "Error: no test specified" && exit 1'

TEST_RUNNERS = re.compile(
    r"\b(pytest|unittest|nose2?|tox|nox|jest|mocha|vitest|jasmine|karma|ava|"
    r"cypress|playwright|rspec|minitest|phpunit|junit|testng|kotest|go test|cargo test)\b",
    re.IGNORECASE,
)

TEST_PATH = re.compile(
    r"(^|/)(tests?|__tests__|spec|specs|testing)/"
    r"|(^|/)test_[^/]+\.py$"
    r"|_test\.(py|go|rb|exs?)$"
    r"|\.(test|spec)\.[jt]sx?$"
    r"|(Test|Tests|Spec)\.(java|kt|cs|php|swift)$",
)


def has_test_script(manifest: str | None, manifest_path: str | None = None) -> bool:
    """Whether the manifest declares a test script or test runner."""
    if manifest is None:
        return False

    if manifest_path == "package.json":
        try:
            data = json.loads(manifest)
        except json.JSONDecodeError:
            data = None
        if isinstance(data, dict):
            scripts = data.get("scripts") or {}
            if isinstance(scripts, dict):
                test_script = str(scripts.get("test", "")).strip()
                if test_script and test_script != NPM_PLACEHOLDER_TEST:
                    return True

    return TEST_RUNNERS.search(manifest) is not None


def find_test_paths(paths: Iterable[str] | None) -> list[str]:
    """Return the paths that look like test files or test directories."""
    if paths is None:
        return []
    return [path for path in paths if TEST_PATH.search(path)]


def check_test_coverage(snapshot: ContentSnapshot) -> int | None:
    """
    Zero when no test signal exists anywhere in the snapshot.

    Scoring:
    - No test script in the manifest and no test-named path: 0/100
    - Otherwise: judged by the generation step
    """
    if has_test_script(snapshot.manifest, snapshot.manifest_path):
        return None
    if find_test_paths(snapshot.file_tree):
        return None
    return NO_TEST_SIGNAL_SCORE


def _fallback(snapshot: ContentSnapshot, _scores: dict[str, int]) -> int | None:
    return check_test_coverage(snapshot)


DIMENSION = DimensionSpec(
    key="testCoverage",
    field="test_coverage",
    label="Test Coverage",
    guidance=(
        "If neither a test script nor a test-named path is present, score 0. "
        "Otherwise estimate how much of the code the visible tests exercise."
    ),
    fallback=_fallback,
)
