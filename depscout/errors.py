"""Exception hierarchy for depscout."""

from typing import Any


class DepscoutError(Exception):
    """Base class for every error raised by depscout.

    Carries an optional ``context`` mapping and the ``cause`` that triggered
    it so callers (CLI, web API) can render a useful message.
    """

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        cause: BaseException | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.context = context or {}
        self.cause = cause

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary representation."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "context": {k: str(v) for k, v in self.context.items()},
            "cause": str(self.cause) if self.cause else None,
        }

    def __str__(self) -> str:
        if self.cause:
            return f"{self.message}: {self.cause}"
        return self.message


class ManifestNotFoundError(DepscoutError, FileNotFoundError):
    """An explicitly named path does not exist."""

    def __init__(self, path):
        super().__init__(f"File not found: {path}", context={"path": path})
        self.path = path


class UnsupportedEcosystemError(DepscoutError, ValueError):
    """Ecosystem identifier outside the supported set."""

    def __init__(self, ecosystem: str):
        super().__init__(f"Unsupported ecosystem: {ecosystem}", context={"ecosystem": ecosystem})
        self.ecosystem = ecosystem


class ManifestParseError(DepscoutError):
    """A manifest could not be decoded structurally (e.g. malformed JSON)."""

    def __init__(self, ecosystem: str, cause: BaseException, source: str | None = None):
        context = {"ecosystem": ecosystem}
        if source:
            context["source"] = source
        super().__init__(f"Failed to parse {ecosystem} manifest", context=context, cause=cause)
        self.ecosystem = ecosystem


class NoFilesDetectedError(DepscoutError):
    """Detection finished without finding any manifest."""

    def __init__(self, project_path, max_depth: int):
        super().__init__(
            f"No dependency files found in {project_path} or its subdirectories",
            context={"project_path": project_path, "max_depth": max_depth},
        )


class NoDependenciesFoundError(DepscoutError):
    """Parsing succeeded but the manifest declares no dependencies."""

    def __init__(self, source_file):
        super().__init__(
            f"No dependencies found in {source_file}", context={"source_file": source_file}
        )


class AnalysisApiError(DepscoutError):
    """The vulnerability analysis API rejected or failed a request."""

    def __init__(self, message: str, status_code: int | None = None, cause: BaseException | None = None):
        context = {"status_code": status_code} if status_code is not None else None
        super().__init__(message, context=context, cause=cause)
        self.status_code = status_code
