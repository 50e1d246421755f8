"""Analysis-related exceptions: source parsing."""

from .base import EntityToModelError


class AnalysisError(EntityToModelError):
    """Base class for analysis-related errors."""
    pass


class ParsingError(AnalysisError):
    """Raised when source text cannot be handed to the parser at all.

    Syntax errors inside otherwise readable text are not raised; tree-sitter
    recovers from them and the affected declarations are flagged instead.
    """

    def __init__(self, path: str, reason: str):
        super().__init__(
            f"Failed to parse Python source: {path}",
            details={"path": path, "reason": reason},
        )
        self.path = path
        self.reason = reason
