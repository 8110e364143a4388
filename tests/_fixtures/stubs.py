"""
Deterministic stand-ins for the generation service and the repository host.
"""

import asyncio

import httpx

from gitgrade.vcs.base import BaseVCSProvider

SAMPLE_README = """# sample-app

A command-line tool that turns CSV exports into monthly budget reports.

## Installation

    pip install sample-app

## Usage

    sample-app report expenses.csv
"""

SAMPLE_MANIFEST = """{
  "name": "sample-app",
  "scripts": {"test": "jest", "lint": "eslint ."},
  "dependencies": {"commander": "^11.0.0"},
  "devDependencies": {"jest": "^29.0.0", "eslint": "^8.0.0"}
}"""

SAMPLE_TREE = [
    "README.md",
    "LICENSE",
    "package.json",
    ".github/workflows/ci.yml",
    "src/index.js",
    "src/report.js",
    "tests/report.test.js",
]

DIMENSIONS_REPLY = {
    "codeQuality": 90,
    "projectStructure": 80,
    "documentation": 70,
    "testCoverage": 60,
    "realWorldRelevance": 50,
    "commitConsistency": 75,
}

SUMMARY_REPLY = {
    "summary": "The project is well organized and clearly documented. "
    "Test coverage is moderate and could be expanded."
}

ROADMAP_REPLY = {
    "roadmap": [
        {"step": "Add integration tests for report generation", "priority": "High", "effortEstimate": "2 days"},
        {"step": "Document configuration options", "priority": "Medium", "effortEstimate": "1 day"},
        {"step": "Publish a changelog", "priority": "Low", "effortEstimate": "2 hours"},
    ]
}


class StubGenerationService:
    """
    Deterministic GenerationService.

    Replies are keyed by the schema title ('DimensionScores', 'Summary',
    'Roadmap'). A list value is consumed one reply per call; an exception
    value is raised.
    """

    def __init__(self, replies: dict | None = None):
        self.replies = {
            "DimensionScores": DIMENSIONS_REPLY,
            "Summary": SUMMARY_REPLY,
            "Roadmap": ROADMAP_REPLY,
        }
        self.replies.update(replies or {})
        self.calls: list[tuple[str, str]] = []

    async def generate(self, instruction: str, schema: dict) -> dict:
        title = schema.get("title", "")
        self.calls.append((title, instruction))
        reply = self.replies[title]
        if isinstance(reply, list):
            reply = reply.pop(0)
        if isinstance(reply, BaseException):
            raise reply
        return reply

    def calls_for(self, title: str) -> list[str]:
        return [instruction for called, instruction in self.calls if called == title]


class StubProvider(BaseVCSProvider):
    """In-memory repository host that counts requests."""

    def __init__(
        self,
        readme: str | None | Exception = SAMPLE_README,
        files: dict[str, str] | None = None,
        tree: list[str] | None | Exception = None,
        file_error: Exception | None = None,
        delay: float = 0.0,
    ):
        self.readme = readme
        self.files = {"package.json": SAMPLE_MANIFEST} if files is None else files
        self.tree = list(SAMPLE_TREE) if tree is None else tree
        self.file_error = file_error
        self.delay = delay
        self.calls: list[str] = []

    async def _respond(self, label: str, value):
        self.calls.append(label)
        if self.delay:
            await asyncio.sleep(self.delay)
        if isinstance(value, Exception):
            raise value
        return value

    async def get_readme(self, owner: str, repo: str) -> str | None:
        return await self._respond("readme", self.readme)

    async def get_file(self, owner: str, repo: str, path: str) -> str | None:
        if self.file_error is not None:
            return await self._respond(f"file:{path}", self.file_error)
        return await self._respond(f"file:{path}", self.files.get(path))

    async def get_tree(self, owner: str, repo: str, branch: str = "HEAD") -> list[str] | None:
        return await self._respond("tree", self.tree)


def http_status_error(status_code: int) -> httpx.HTTPStatusError:
    """Build an HTTPStatusError with the given status."""
    request = httpx.Request("GET", "https://api.github.com/repos/octo/app")
    response = httpx.Response(status_code, request=request)
    return httpx.HTTPStatusError(
        f"HTTP {status_code}", request=request, response=response
    )


def connect_error() -> httpx.ConnectError:
    request = httpx.Request("GET", "https://api.github.com/repos/octo/app")
    return httpx.ConnectError("Connection refused", request=request)
