class AnalyzerConfigError(RuntimeError):
    """Raised when the model client cannot be built (missing API key)."""


class NoContentError(RuntimeError):
    """Raised when the model call returned no text content at all."""

    def __init__(self, message: str = "No content in response") -> None:
        super().__init__(message)
