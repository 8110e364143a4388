"""Code quality dimension."""

import json
import re
from typing import Any

from gitgrade.dimensions.base import DimensionSpec
from gitgrade.models import ContentSnapshot

NO_MANIFEST_SCORE = 20

LINT_TOOLS = (
    "eslint",
    "prettier",
    "tslint",
    "biome",
    "ruff",
    "flake8",
    "pylint",
    "black",
    "isort",
    "mypy",
    "pyright",
    "golangci",
    "clippy",
    "rustfmt",
    "rubocop",
    "checkstyle",
    "spotless",
    "phpstan",
    "php-cs-fixer",
)

_DEPENDENCY_LINE = re.compile(r"^\s*[A-Za-z0-9_.\-\[\]]+\s*(==|>=|<=|~=|>|<|$)")


def detect_lint_tools(manifest: str) -> list[str]:
    """Return the lint/format/type-check tools mentioned in a manifest."""
    lowered = manifest.lower()
    return [tool for tool in LINT_TOOLS if tool in lowered]


def count_dependencies(manifest: str, manifest_path: str | None) -> int | None:
    """
    Count declared dependencies where the manifest format allows it cheaply.

    Returns:
        Number of dependencies, or None when the format is not understood.
    """
    if manifest_path == "package.json":
        try:
            data: dict[str, Any] = json.loads(manifest)
        except json.JSONDecodeError:
            return None
        if not isinstance(data, dict):
            return None
        return sum(
            len(data.get(section) or {})
            for section in ("dependencies", "devDependencies")
            if isinstance(data.get(section) or {}, dict)
        )

    if manifest_path == "requirements.txt":
        return sum(
            1
            for line in manifest.splitlines()
            if line.strip()
            and not line.strip().startswith(("#", "-"))
            and _DEPENDENCY_LINE.match(line)
        )

    return None


def check_code_quality(snapshot: ContentSnapshot) -> int | None:
    """
    Fixed score when the manifest is absent.

    Scoring:
    - No manifest: 20/100
    - Manifest present: judged by the generation step
    """
    if snapshot.manifest is None:
        return NO_MANIFEST_SCORE
    return None


def _fallback(snapshot: ContentSnapshot, _scores: dict[str, int]) -> int | None:
    return check_code_quality(snapshot)


DIMENSION = DimensionSpec(
    key="codeQuality",
    field="code_quality",
    label="Code Quality",
    guidance=(
        f"If no manifest is provided, score {NO_MANIFEST_SCORE}. Otherwise judge "
        "from the manifest: linting/formatting/type-checking tools, test "
        "scripts, and a sensible, maintained dependency set."
    ),
    fallback=_fallback,
)
