"""
Pipeline orchestration for GitGrade.

Idle -> FetchingContent -> AnalyzingDimensions -> GeneratingOutputs -> Assembled,
with Failed reachable from every non-terminal state. The result is
all-or-nothing: any failure raises a GitGradeError and no partial result
is returned.
"""

import asyncio
from enum import Enum

from rich.console import Console

from gitgrade.dimensions.analyzer import DimensionAnalyzer
from gitgrade.errors import GenerationServiceFailure
from gitgrade.fetcher import ContentFetcher
from gitgrade.generation import GenerationService, OpenAIGenerationService
from gitgrade.http_client import close_http_client
from gitgrade.models import AnalysisResult
from gitgrade.narrative import summarize
from gitgrade.repository import RepositoryRef, parse_repository_url
from gitgrade.roadmap import generate_roadmap
from gitgrade.scoring import aggregate

console = Console(stderr=True)


class PipelineState(str, Enum):
    """Lifecycle states of one analysis request."""

    IDLE = "Idle"
    FETCHING_CONTENT = "FetchingContent"
    ANALYZING_DIMENSIONS = "AnalyzingDimensions"
    GENERATING_OUTPUTS = "GeneratingOutputs"
    ASSEMBLED = "Assembled"
    FAILED = "Failed"


TERMINAL_STATES = {PipelineState.ASSEMBLED, PipelineState.FAILED}

_TRANSITIONS = {
    PipelineState.IDLE: {PipelineState.FETCHING_CONTENT},
    PipelineState.FETCHING_CONTENT: {PipelineState.ANALYZING_DIMENSIONS},
    PipelineState.ANALYZING_DIMENSIONS: {PipelineState.GENERATING_OUTPUTS},
    PipelineState.GENERATING_OUTPUTS: {PipelineState.ASSEMBLED},
}


class Pipeline:
    """
    Runs one analysis request through the state machine.

    A Pipeline instance handles a single request; create a new one per call.
    The fetcher (and its cache) may be shared between pipelines.
    """

    def __init__(
        self,
        service: GenerationService,
        fetcher: ContentFetcher | None = None,
        timeout: float | None = None,
    ):
        self.service = service
        self.fetcher = fetcher or ContentFetcher()
        self.timeout = timeout
        self.state = PipelineState.IDLE
        self.history: list[PipelineState] = [PipelineState.IDLE]
        self.error: Exception | None = None

    def _transition(self, new_state: PipelineState) -> None:
        if self.state in TERMINAL_STATES:
            raise RuntimeError(f"Pipeline already finished in state {self.state.value}.")
        if new_state is not PipelineState.FAILED and new_state not in _TRANSITIONS.get(
            self.state, set()
        ):
            raise RuntimeError(
                f"Invalid transition {self.state.value} -> {new_state.value}."
            )
        self.state = new_state
        self.history.append(new_state)

    async def run(self, ref: RepositoryRef) -> AnalysisResult:
        """
        Analyze a validated repository reference.

        Raises:
            GitGradeError: On any fetch, analysis or generation failure.
            RuntimeError: If this pipeline has already run.

        Unexpected errors also end the run in Failed and propagate unchanged.
        """
        if self.state is not PipelineState.IDLE:
            raise RuntimeError(f"Pipeline already finished in state {self.state.value}.")
        try:
            return await self._run(ref)
        except Exception as e:
            self.error = e
            if self.state not in TERMINAL_STATES:
                self._transition(PipelineState.FAILED)
            console.print(f"[red]Analysis of {ref} failed: {e}[/red]")
            raise

    async def _run(self, ref: RepositoryRef) -> AnalysisResult:
        self._transition(PipelineState.FETCHING_CONTENT)
        snapshot = await self.fetcher.fetch(ref, timeout=self.timeout)

        self._transition(PipelineState.ANALYZING_DIMENSIONS)
        analyzer = DimensionAnalyzer(self.service, timeout=self.timeout)
        scores = await analyzer.analyze(snapshot, repository=str(ref))

        self._transition(PipelineState.GENERATING_OUTPUTS)
        generation = asyncio.gather(
            summarize(scores, self.service, timeout=self.timeout),
            generate_roadmap(scores, self.service, timeout=self.timeout),
            return_exceptions=True,
        )
        # The aggregate is pure, so it runs inline while the calls are in flight
        verdict = aggregate(scores)
        summary, roadmap = await generation

        # Both calls have completed; the first failure in call order wins
        for outcome in (summary, roadmap):
            if isinstance(outcome, BaseException):
                raise outcome

        self._transition(PipelineState.ASSEMBLED)
        return AnalysisResult(
            repo_url=ref.url,
            analysis=scores,
            score=verdict,
            summary=summary,
            roadmap=roadmap,
        )


async def analyze_repository(
    repo_url: str,
    service: GenerationService | None = None,
    fetcher: ContentFetcher | None = None,
    timeout: float | None = None,
) -> AnalysisResult:
    """
    Performs a full quality analysis of a public repository.

    Args:
        repo_url: Repository URL (e.g. https://github.com/owner/repo).
        service: Generation capability. Defaults to OpenAIGenerationService.
        fetcher: Content fetcher. Defaults to one using the process-wide cache.
        timeout: Per external call timeout in seconds. Defaults to the configured value.

    Returns:
        AnalysisResult with dimension scores, verdict, summary and roadmap.

    Raises:
        InvalidReference: If the URL is not a host/owner/name repository URL.
        UpstreamHostFailure: If the repository host is unreachable.
        AnalysisSchemaViolation: If dimension scores stay invalid after the retry.
        GenerationServiceFailure: If a generation step fails or is malformed.
    """
    # Validated before any external call
    ref = parse_repository_url(repo_url)

    console.print(f"Analyzing [bold cyan]{ref}[/bold cyan]...")
    if service is None:
        try:
            service = OpenAIGenerationService()
        except ValueError as e:
            raise GenerationServiceFailure(str(e), cause=e) from e
    pipeline = Pipeline(service, fetcher=fetcher, timeout=timeout)
    return await pipeline.run(ref)


def analyze_repository_sync(repo_url: str, **kwargs) -> AnalysisResult:
    """Blocking wrapper around analyze_repository for scripts and the CLI."""

    async def _main() -> AnalysisResult:
        try:
            return await analyze_repository(repo_url, **kwargs)
        finally:
            await close_http_client()

    return asyncio.run(_main())
