"""Hard-failure exceptions for dependency health analysis.

Only these abort an analysis run. Every other sub-step failure degrades to an
empty or placeholder value and is logged.
"""


class AnalysisError(Exception):
    """Base exception for all analysis-aborting errors."""


class PathNotFound(AnalysisError):
    """Raised when a local project path does not exist."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Project path does not exist: {path}")


class CloneFailed(AnalysisError):
    """Raised when a remote repository cannot be cloned."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Failed to clone repository: {reason}")


class NoManifestFound(AnalysisError):
    """Raised when no dependency declaration file exists for the ecosystem."""


class NoDependenciesFound(AnalysisError):
    """Raised when the detected files declare no dependencies."""

    def __init__(self, message: str = "No dependencies found in the detected files"):
        super().__init__(message)


class UnsupportedEcosystem(AnalysisError):
    """Raised for an ecosystem hint other than npm, pip or auto."""

    def __init__(self, ecosystem: str):
        self.ecosystem = ecosystem
        super().__init__(f"Unsupported ecosystem: {ecosystem}")


class InvalidRepositoryReference(AnalysisError):
    """Raised when a GitHub reference lacks an owner or repo segment."""

    def __init__(self, reference: str):
        self.reference = reference
        super().__init__("Invalid GitHub URL format")
