"""
Tests for instruction building.
"""

from gitgrade.models import ContentSnapshot, DimensionScores
from gitgrade.prompts import (
    TREE_LISTING_ENTRIES,
    build_corrective_instruction,
    build_dimension_instruction,
    build_roadmap_instruction,
    build_summary_instruction,
    describe_scores,
    describe_signals,
)
from tests._fixtures.stubs import (
    DIMENSIONS_REPLY,
    SAMPLE_MANIFEST,
    SAMPLE_README,
    SAMPLE_TREE,
)

SNAPSHOT = ContentSnapshot(
    readme=SAMPLE_README,
    manifest=SAMPLE_MANIFEST,
    manifest_path="package.json",
    file_tree=tuple(SAMPLE_TREE),
)


def test_describe_scores():
    text = describe_scores(DimensionScores.model_validate(DIMENSIONS_REPLY))
    assert text.splitlines() == [
        "Code Quality: 90/100 (strong)",
        "Project Structure: 80/100 (adequate)",
        "Documentation: 70/100 (adequate)",
        "Test Coverage: 60/100 (adequate)",
        "Real-world Relevance: 50/100 (weak)",
        "Commit Consistency: 75/100 (adequate)",
    ]


def test_describe_signals_full_snapshot():
    text = describe_signals(SNAPSHOT)
    assert "- quality tools in manifest: eslint" in text
    assert "- declared dependencies: 3" in text
    assert "- test script in manifest: yes" in text
    assert "- files: 7, max depth: 2" in text
    assert "- top-level directories: .github, src, tests" in text
    assert "- test-named paths: 1" in text
    assert "- CI configuration: yes" in text
    assert "- license file: yes" in text
    assert "README: absent" not in text


def test_describe_signals_empty_snapshot():
    text = describe_signals(ContentSnapshot())
    assert "- manifest: absent" in text
    assert "- file tree: absent" in text
    assert "- README: absent" in text
    assert "- test script in manifest: no" in text


def test_dimension_instruction_lists_every_dimension():
    instruction = build_dimension_instruction("octo/app", SNAPSHOT)
    for key in DIMENSIONS_REPLY:
        assert f"- {key}:" in instruction
    assert "Manifest (package.json)" in instruction
    assert "File tree (7 files)" in instruction


def test_dimension_instruction_bounds_tree_listing():
    tree = tuple(f"src/module_{i}.py" for i in range(TREE_LISTING_ENTRIES + 20))
    instruction = build_dimension_instruction("octo/app", ContentSnapshot(file_tree=tree))
    assert f"first {TREE_LISTING_ENTRIES} shown" in instruction
    assert f"src/module_{TREE_LISTING_ENTRIES - 1}.py" in instruction
    assert f"src/module_{TREE_LISTING_ENTRIES}.py" not in instruction


def test_dimension_instruction_empty_tree():
    instruction = build_dimension_instruction("octo/app", ContentSnapshot(file_tree=()))
    assert "(empty)" in instruction


def test_corrective_instruction():
    instruction = build_corrective_instruction("base", ["codeQuality is missing"])
    assert instruction.startswith("base")
    assert "- codeQuality is missing" in instruction
    assert "codeQuality, projectStructure, documentation" in instruction


def test_summary_and_roadmap_instructions():
    scores = DimensionScores.model_validate(DIMENSIONS_REPLY)
    assert "2-3 sentence" in build_summary_instruction(scores)
    roadmap = build_roadmap_instruction(scores)
    assert "High, Medium, Low" in roadmap
    assert describe_scores(scores) in roadmap
