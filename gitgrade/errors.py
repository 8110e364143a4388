"""
Error taxonomy for GitGrade.

Every fatal failure reaches the caller as a GitGradeError subclass. Missing
repository files are not errors: they show up as absent snapshot fields.
"""

from enum import Enum


class ErrorKind(str, Enum):
    """Category of a fatal analysis failure."""

    INVALID_REFERENCE = "invalid_reference"
    ANALYSIS_SCHEMA_VIOLATION = "analysis_schema_violation"
    GENERATION_SERVICE_FAILURE = "generation_service_failure"
    UPSTREAM_HOST_FAILURE = "upstream_host_failure"


class GitGradeError(Exception):
    """Base class for errors surfaced by the analysis pipeline."""

    kind: ErrorKind

    def __init__(self, message: str, cause: BaseException | None = None):
        super().__init__(message)
        self.cause = cause


class InvalidReference(GitGradeError, ValueError):
    """The URL does not resolve to a host/owner/name repository."""

    kind = ErrorKind.INVALID_REFERENCE


class AnalysisSchemaViolation(GitGradeError):
    """Dimension scores stayed invalid after the corrective retry."""

    kind = ErrorKind.ANALYSIS_SCHEMA_VIOLATION

    def __init__(
        self,
        message: str,
        problems: list[str] | None = None,
        cause: BaseException | None = None,
    ):
        super().__init__(message, cause)
        self.problems = problems or []


class GenerationServiceFailure(GitGradeError):
    """A generation call errored, timed out, or returned a malformed result."""

    kind = ErrorKind.GENERATION_SERVICE_FAILURE


class UpstreamHostFailure(GitGradeError):
    """The repository host was unreachable for every content request."""

    kind = ErrorKind.UPSTREAM_HOST_FAILURE
