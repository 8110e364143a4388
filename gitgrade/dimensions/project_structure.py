"""Project structure dimension."""

from typing import Any, Iterable

from gitgrade.dimensions.base import DimensionSpec
from gitgrade.models import ContentSnapshot

NO_TREE_SCORE = 20

SOURCE_DIRS = {"src", "lib", "app", "pkg", "cmd", "internal"}
CI_PREFIXES = (".github/workflows/", ".gitlab-ci.yml", ".circleci/", "azure-pipelines.yml")
LICENSE_NAMES = {"license", "license.md", "license.txt", "copying"}


def summarize_tree(paths: Iterable[str]) -> dict[str, Any]:
    """
    Describe the shape of a file tree.

    Returns:
        Dict with file count, top-level directories, maximum depth and
        flags for source layout, CI configuration and license.
    """
    paths = list(paths)
    top_level_dirs = sorted({path.split("/", 1)[0] for path in paths if "/" in path})
    root_files = [path for path in paths if "/" not in path]
    return {
        "file_count": len(paths),
        "top_level_dirs": top_level_dirs,
        "root_file_count": len(root_files),
        "max_depth": max((path.count("/") for path in paths), default=0),
        "has_source_dir": any(d.lower() in SOURCE_DIRS for d in top_level_dirs),
        "has_ci": any(path.startswith(CI_PREFIXES) for path in paths),
        "has_license": any(name.lower() in LICENSE_NAMES for name in root_files),
    }


def check_project_structure(snapshot: ContentSnapshot) -> int | None:
    """
    Fixed score when the file tree is absent.

    Scoring:
    - No file tree: 20/100
    - File tree present: judged by the generation step
    """
    if snapshot.file_tree is None:
        return NO_TREE_SCORE
    return None


def _fallback(snapshot: ContentSnapshot, _scores: dict[str, int]) -> int | None:
    return check_project_structure(snapshot)


DIMENSION = DimensionSpec(
    key="projectStructure",
    field="project_structure",
    label="Project Structure",
    guidance=(
        f"If no file tree is provided, score {NO_TREE_SCORE}. Otherwise judge the "
        "tree shape: separation of source, tests, docs and configuration, "
        "sensible nesting, CI configuration and a license."
    ),
    fallback=_fallback,
)
