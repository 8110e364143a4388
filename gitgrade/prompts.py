"""
Instruction templates for the generation steps.
"""

from gitgrade.dimensions import DIMENSION_SPECS
from gitgrade.dimensions.code_quality import count_dependencies, detect_lint_tools
from gitgrade.dimensions.project_structure import summarize_tree
from gitgrade.dimensions.test_coverage import find_test_paths, has_test_script
from gitgrade.models import ContentSnapshot, DimensionScores

# How much of each artifact is quoted into the instruction
README_EXCERPT_CHARS = 6_000
MANIFEST_EXCERPT_CHARS = 4_000
TREE_LISTING_ENTRIES = 300

DIMENSION_ANALYSIS_PROMPT = """Analyze the repository {repository} based on the evidence below and provide scores.

Give each category an integer score from 0 to 100:
{guidance}

Observed signals:
{signals}

README:
{readme}

Manifest ({manifest_path}):
{manifest}

File tree ({tree_size}):
{tree}
"""

CORRECTIVE_PROMPT = """

Your previous answer was rejected:
{problems}
Return all six fields ({fields}) as integers between 0 and 100, and nothing else."""

SUMMARY_PROMPT = """You are an AI code reviewer. Based on the following analysis of a GitHub repository, write a concise 2-3 sentence summary of the repository's strengths and weaknesses.

{scores}"""

ROADMAP_PROMPT = """You are an AI coding mentor that provides personalized roadmaps for developers to improve their GitHub repositories.

Based on the repository analysis provided, generate a roadmap of 3 to 5 actionable steps the developer should follow to improve their repository, most important first. Each step must include a priority level (High, Medium, Low) and an effort estimate such as "2 days".

Repository Analysis:
{scores}"""

NOT_AVAILABLE = "(not available)"


def _score_band(score: int) -> str:
    if score >= 81:
        return "strong"
    if score >= 51:
        return "adequate"
    if score >= 21:
        return "weak"
    return "very weak"


def describe_scores(scores: DimensionScores) -> str:
    """Restate dimension scores as text for the summary and roadmap steps."""
    lines = []
    for spec in DIMENSION_SPECS:
        value = getattr(scores, spec.field)
        lines.append(f"{spec.label}: {value}/100 ({_score_band(value)})")
    return "\n".join(lines)


def describe_signals(snapshot: ContentSnapshot) -> str:
    """List the deterministic signals found in a snapshot."""
    signals = []
    if snapshot.manifest is not None:
        tools = detect_lint_tools(snapshot.manifest)
        signals.append(
            "- quality tools in manifest: " + (", ".join(tools) if tools else "none")
        )
        dependency_count = count_dependencies(snapshot.manifest, snapshot.manifest_path)
        if dependency_count is not None:
            signals.append(f"- declared dependencies: {dependency_count}")
    else:
        signals.append("- manifest: absent")

    signals.append(
        "- test script in manifest: "
        + ("yes" if has_test_script(snapshot.manifest, snapshot.manifest_path) else "no")
    )

    if snapshot.file_tree is not None:
        shape = summarize_tree(snapshot.file_tree)
        signals.append(f"- files: {shape['file_count']}, max depth: {shape['max_depth']}")
        signals.append(
            "- top-level directories: "
            + (", ".join(shape["top_level_dirs"]) if shape["top_level_dirs"] else "none")
        )
        signals.append(f"- test-named paths: {len(find_test_paths(snapshot.file_tree))}")
        signals.append(f"- CI configuration: {'yes' if shape['has_ci'] else 'no'}")
        signals.append(f"- license file: {'yes' if shape['has_license'] else 'no'}")
    else:
        signals.append("- file tree: absent")

    if snapshot.readme is None:
        signals.append("- README: absent")
    return "\n".join(signals)


def build_dimension_instruction(repository: str, snapshot: ContentSnapshot) -> str:
    """Build the dimension-analysis instruction for a snapshot."""
    guidance = "\n".join(f"- {spec.key}: {spec.guidance}" for spec in DIMENSION_SPECS)

    tree_listing = NOT_AVAILABLE
    tree_size = "absent"
    if snapshot.file_tree is not None:
        shown = snapshot.file_tree[:TREE_LISTING_ENTRIES]
        tree_listing = "\n".join(shown) if shown else "(empty)"
        tree_size = f"{len(snapshot.file_tree)} files"
        if len(snapshot.file_tree) > len(shown):
            tree_size += f", first {len(shown)} shown"

    return DIMENSION_ANALYSIS_PROMPT.format(
        repository=repository,
        guidance=guidance,
        signals=describe_signals(snapshot),
        readme=(snapshot.readme or NOT_AVAILABLE)[:README_EXCERPT_CHARS],
        manifest_path=snapshot.manifest_path or "none",
        manifest=(snapshot.manifest or NOT_AVAILABLE)[:MANIFEST_EXCERPT_CHARS],
        tree_size=tree_size,
        tree=tree_listing,
    )


def build_corrective_instruction(instruction: str, problems: list[str]) -> str:
    """Append the rejection reasons to a dimension-analysis instruction."""
    return instruction + CORRECTIVE_PROMPT.format(
        problems="\n".join(f"- {problem}" for problem in problems),
        fields=", ".join(spec.key for spec in DIMENSION_SPECS),
    )


def build_summary_instruction(scores: DimensionScores) -> str:
    return SUMMARY_PROMPT.format(scores=describe_scores(scores))


def build_roadmap_instruction(scores: DimensionScores) -> str:
    return ROADMAP_PROMPT.format(scores=describe_scores(scores))
